"""Pydantic request models and response serializers for the planning API."""

from pydantic import BaseModel, Field

from meal_planner.domain.nutrition import NutrientProfile, round_half_up
from meal_planner.domain.planning import (
    PlanningSettings,
    ScaledCandidate,
    ScaledIngredient,
    SlotPlan,
)
from meal_planner.domain.profiles import MealStructureEntry
from meal_planner.services.alternatives import (
    AlternativesResult,
    classify_macro_profile,
    format_macro_profile,
    protein_difference,
    swap_quality,
)
from meal_planner.services.planner import PlanSummary


class BudgetPayload(BaseModel):
    """Daily calorie and macro budget."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    def to_profile(self) -> NutrientProfile:
        """Convert to the domain value type."""
        return NutrientProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )


class MealStructurePayload(BaseModel):
    """Slot name with its share of the day in percent."""

    name: str
    percentage: float

    def to_entry(self) -> MealStructureEntry:
        """Convert to the domain model."""
        return MealStructureEntry(name=self.name, percentage=self.percentage)


class PlanPreviewRequest(BaseModel):
    """Budget and meal structure to rank recipes for."""

    budget: BudgetPayload
    mode: str = "regular"
    meal_structure: list[MealStructurePayload] = Field(default_factory=list)
    fasting_selected_meals: list[str] = Field(default_factory=list)
    include_ingredients: bool = False


class ConsolePlanRequest(BaseModel):
    """Admin console request for a sample plan."""

    budget: BudgetPayload
    slots: list[MealStructurePayload]


def serialize_slot_plan(
    plan: SlotPlan, suggested_index: int | None = None
) -> dict[str, object]:
    """Serialize one slot with its ranked candidates."""
    payload: dict[str, object] = {
        "slot": plan.slot.name,
        "weight": plan.slot.weight,
        "accepted_meal_types": list(plan.slot.accepted_meal_types),
        "target": {
            "calories": plan.target.target_calories,
            "protein_g": plan.target.target_protein_g,
            "carbs_g": plan.target.target_carbs_g,
            "fat_g": plan.target.target_fat_g,
        },
        "candidates": [serialize_candidate(item) for item in plan.candidates],
    }
    if suggested_index is not None:
        payload["suggested_index"] = suggested_index
    return payload


def serialize_candidate(candidate: ScaledCandidate) -> dict[str, object]:
    """Serialize a ranked candidate.

    ``scaled_nutrition`` shows grams at the scaled serving while the score is
    computed from base percentages; both describe the same split.
    """
    recipe = candidate.recipe
    nutrition = recipe.nutrition_per_serving
    payload: dict[str, object] = {
        "recipe_id": recipe.id,
        "name": recipe.name,
        "meal_type": list(recipe.meal_type),
        "scale_factor": candidate.scale_factor,
        "scaled_calories": candidate.scaled_calories,
        "original_calories": nutrition.calories if nutrition else None,
        "macro_similarity_score": candidate.macro_similarity_score,
        "scaled_nutrition": (
            _serialize_nutrition(nutrition.scaled(candidate.scale_factor))
            if nutrition
            else None
        ),
    }
    if candidate.ingredients:
        payload["ingredients"] = [
            _serialize_ingredient(item) for item in candidate.ingredients
        ]
        payload["instructions"] = [
            {"step": step.step, "instruction": step.instruction}
            for step in recipe.instructions
        ]
    return payload


def serialize_alternatives(result: AlternativesResult) -> dict[str, object]:
    """Serialize alternatives with swap ratings."""
    original = result.original
    original_protein = (
        original.nutrition_per_serving.protein_g
        if original.nutrition_per_serving
        else 0.0
    )
    alternatives = []
    for candidate in result.alternatives:
        item = serialize_candidate(candidate)
        alt_nutrition = candidate.recipe.nutrition_per_serving
        item["swap_quality"] = swap_quality(candidate.score_or_zero)
        item["protein_difference_g"] = protein_difference(
            original_protein,
            alt_nutrition.protein_g if alt_nutrition else 0.0,
            candidate.scale_factor,
        )
        alternatives.append(item)
    return {
        "original": {
            "recipe_id": original.id,
            "name": original.name,
            "meal_type": list(original.meal_type),
            "macro_profile": format_macro_profile(result.original_profile),
            "profile_type": classify_macro_profile(result.original_profile),
        },
        "target_calories": result.target_calories,
        "alternatives": alternatives,
    }


def serialize_summary(summary: PlanSummary) -> dict[str, object]:
    """Serialize an admin console sample plan."""
    slots = []
    for plan in summary.slots:
        top = plan.top
        slots.append(
            {
                "slot": plan.slot.name,
                "target_calories": plan.target.target_calories,
                "recipe": serialize_candidate(top) if top else None,
                "alternative_count": max(len(plan.candidates) - 1, 0),
            }
        )
    return {"slots": slots, "total_calories": summary.total_calories}


def serialize_settings(settings: PlanningSettings) -> dict[str, object]:
    """Serialize the active planning settings."""
    return {
        "scaling_limits": {
            "min_scale_factor": settings.scale_window.min_scale,
            "max_scale_factor": settings.scale_window.max_scale,
        },
        "macro_similarity_weights": {
            "protein": settings.similarity_weights.protein,
            "carbs": settings.similarity_weights.carbs,
            "fat": settings.similarity_weights.fat,
        },
        "min_macro_similarity_threshold": settings.tie_band,
    }


def _serialize_nutrition(profile: NutrientProfile) -> dict[str, float]:
    return {
        "calories": round_half_up(profile.calories, 1),
        "protein_g": round_half_up(profile.protein_g, 1),
        "carbs_g": round_half_up(profile.carbs_g, 1),
        "fat_g": round_half_up(profile.fat_g, 1),
    }


def _serialize_ingredient(item: ScaledIngredient) -> dict[str, object]:
    ingredient = item.ingredient
    return {
        "ingredient_id": ingredient.ingredient_id,
        "raw_name": ingredient.raw_name,
        "quantity": ingredient.quantity,
        "scaled_quantity": item.scaled_quantity,
        "unit": ingredient.unit,
        "is_spice": ingredient.is_spice,
        "is_optional": ingredient.is_optional,
    }
