"""Recipe swap alternatives ranked by macro similarity."""

import math
from dataclasses import dataclass

from meal_planner.domain.errors import InvalidBudgetError, RecipeNotFoundError
from meal_planner.domain.nutrition import MacroPercentages, round_half_up, round_int
from meal_planner.domain.planning import ScaledCandidate, SlotTarget
from meal_planner.domain.recipes import RecipeRecord
from meal_planner.services.catalog import RecipeCatalogService
from meal_planner.services.planning_settings import PlanningSettingsService
from meal_planner.services.ranking import macro_percentages, rank_candidates
from meal_planner.services.scaling import filter_and_scale

FALLBACK_TARGET_CALORIES = 500

HIGH_PROTEIN_PCT = 35
HIGH_CARB_PCT = 50
HIGH_FAT_PCT = 40

EXCELLENT_SCORE = 80
GOOD_SCORE = 60
ACCEPTABLE_SCORE = 40


def classify_macro_profile(profile: MacroPercentages) -> str:
    """Label a macro split by its dominant macronutrient."""
    if profile.protein_pct > HIGH_PROTEIN_PCT:
        return "high-protein"
    if profile.carbs_pct > HIGH_CARB_PCT:
        return "high-carb"
    if profile.fat_pct > HIGH_FAT_PCT:
        return "high-fat"
    return "balanced"


def swap_quality(score: float) -> str:
    """Map a similarity score to a swap rating."""
    if score >= EXCELLENT_SCORE:
        return "excellent"
    if score >= GOOD_SCORE:
        return "good"
    if score >= ACCEPTABLE_SCORE:
        return "acceptable"
    return "poor"


def format_macro_profile(profile: MacroPercentages) -> str:
    """Format a macro split as ``P:30% C:40% F:30%``."""
    return f"P:{profile.protein_pct}% C:{profile.carbs_pct}% F:{profile.fat_pct}%"


def protein_difference(
    original_protein_g: float,
    alternative_protein_g: float,
    alternative_scale_factor: float,
) -> float:
    """Return extra protein (grams, one decimal) gained by swapping."""
    scaled = alternative_protein_g * alternative_scale_factor
    return round_half_up(scaled - original_protein_g, 1)


@dataclass(frozen=True)
class AlternativesResult:
    """Original recipe and its ranked replacements."""

    original: RecipeRecord
    original_profile: MacroPercentages
    target_calories: int
    alternatives: list[ScaledCandidate]


@dataclass
class AlternativesService:
    """Finds recipes that can replace a planned one."""

    catalog: RecipeCatalogService
    settings_service: PlanningSettingsService

    def find_alternatives(
        self,
        recipe_id: str,
        target_calories: float | None = None,
        limit: int = 10,
    ) -> AlternativesResult:
        """Return recipes sharing a meal type, scaled to the same calories."""
        if target_calories is not None and not math.isfinite(target_calories):
            raise InvalidBudgetError(
                f"Invalid target calories for alternatives: {target_calories}"
            )
        original = self.catalog.get_recipe(recipe_id)
        if original is None:
            raise RecipeNotFoundError(f"Recipe {recipe_id} not found")

        nutrition = original.nutrition_per_serving
        base_calories = nutrition.calories if nutrition else 0
        target = round_int(
            target_calories or base_calories or FALLBACK_TARGET_CALORIES
        )
        original_profile = (
            macro_percentages(nutrition)
            if nutrition
            else MacroPercentages(protein_pct=0, carbs_pct=0, fat_pct=0)
        )
        if not original.meal_type:
            return AlternativesResult(
                original=original,
                original_profile=original_profile,
                target_calories=target,
                alternatives=[],
            )

        settings = self.settings_service.load()
        pool = [
            recipe for recipe in self.catalog.list_recipes() if recipe.id != recipe_id
        ]
        slot_target = SlotTarget(
            slot_name=original.name,
            target_calories=target,
            target_protein_g=0,
            target_carbs_g=0,
            target_fat_g=0,
        )
        candidates = filter_and_scale(
            slot_target, pool, original.meal_type, settings.scale_window
        )
        ranked = rank_candidates(
            candidates, original_profile, original.meal_type[0], settings
        )
        return AlternativesResult(
            original=original,
            original_profile=original_profile,
            target_calories=target,
            alternatives=ranked[:limit],
        )
