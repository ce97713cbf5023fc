"""Supabase implementation for the recipe catalog."""

import json
from dataclasses import dataclass

from supabase import Client

from meal_planner.domain.nutrition import NutrientProfile
from meal_planner.domain.recipes import (
    RecipeIngredient,
    RecipeInstruction,
    RecipeRecord,
)
from meal_planner.services.catalog import RecipeRepository

_BASIC_COLUMNS = "*"
_WITH_INGREDIENTS_COLUMNS = (
    "*, recipe_ingredients (id, ingredient_id, raw_name, quantity, unit, "
    "is_spice, is_optional)"
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed repository for public recipes."""

    client: Client

    def list_public_recipes(self, include_ingredients: bool) -> list[RecipeRecord]:
        """Return public recipes with nutrition, ordered by name."""
        columns = _WITH_INGREDIENTS_COLUMNS if include_ingredients else _BASIC_COLUMNS
        response = (
            self.client.table("recipes")
            .select(columns)
            .eq("is_public", True)
            .not_.is_("nutrition_per_serving", "null")
            .order("name")
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, recipe_id: str) -> RecipeRecord | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select(_WITH_INGREDIENTS_COLUMNS)
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])


def _parse_recipe(row: dict[str, object]) -> RecipeRecord:
    """Parse a recipe row into a domain model."""
    return RecipeRecord(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        meal_type=tuple(str(tag) for tag in row.get("meal_type") or []),
        nutrition_per_serving=_parse_nutrition(row.get("nutrition_per_serving")),
        ingredients=tuple(
            _parse_ingredient(item) for item in row.get("recipe_ingredients") or []
        ),
        instructions=_parse_instructions(row.get("instructions")),
        recommendation_groups=tuple(
            str(group) for group in row.get("recommendation_group") or []
        ),
    )


def _parse_nutrition(raw: object) -> NutrientProfile | None:
    """Parse nutrition stored as JSONB or as a JSON string."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            return None
    if not isinstance(raw, dict) or raw.get("calories") is None:
        return None
    return NutrientProfile(
        calories=float(raw.get("calories") or 0),
        protein_g=float(raw.get("protein_g") or 0),
        carbs_g=float(raw.get("carbs_g") or 0),
        fat_g=float(raw.get("fat_g") or 0),
    )


def _parse_ingredient(row: dict[str, object]) -> RecipeIngredient:
    quantity = row.get("quantity")
    return RecipeIngredient(
        raw_name=str(row.get("raw_name", "")),
        quantity=float(quantity) if quantity is not None else None,
        unit=row.get("unit"),
        is_spice=bool(row.get("is_spice", False)),
        is_optional=bool(row.get("is_optional", False)),
        ingredient_id=row.get("ingredient_id"),
    )


def _parse_instructions(raw: object) -> tuple[RecipeInstruction, ...]:
    """Parse instructions stored as strings or ``{step, instruction}`` objects."""
    if not isinstance(raw, list):
        return ()
    steps = []
    for index, item in enumerate(raw):
        if isinstance(item, str):
            steps.append(RecipeInstruction(step=index + 1, instruction=item))
        elif isinstance(item, dict):
            steps.append(
                RecipeInstruction(
                    step=int(item.get("step") or index + 1),
                    instruction=str(item.get("instruction", "")),
                )
            )
    return tuple(steps)
