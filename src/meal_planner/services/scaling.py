"""Candidate filtering and serving scaling for meal slots."""

from collections.abc import Iterable, Sequence

from meal_planner.domain.nutrition import round_half_up, round_int
from meal_planner.domain.planning import (
    ScaledCandidate,
    ScaledIngredient,
    ScaleWindow,
    SlotTarget,
)
from meal_planner.domain.recipes import (
    RecipeIngredient,
    RecipeRecord,
    RecipeWithNutrition,
    check_nutrition,
)

MEASURING_STEP = 5
FINE_MEASURING_LIMIT = 10


def round_for_measuring(value: float) -> int:
    """Round a quantity to something a home cook can measure.

    Small amounts round to whole units, larger ones to the nearest five.
    """
    if value < FINE_MEASURING_LIMIT:
        return round_int(value)
    return round_int(value / MEASURING_STEP) * MEASURING_STEP


def scale_ingredients(
    ingredients: Iterable[RecipeIngredient], scale_factor: float
) -> tuple[ScaledIngredient, ...]:
    """Scale ingredient quantities; lines without a quantity stay unscaled."""
    return tuple(
        ScaledIngredient(
            ingredient=ingredient,
            scaled_quantity=(
                round_for_measuring(ingredient.quantity * scale_factor)
                if ingredient.quantity
                else None
            ),
        )
        for ingredient in ingredients
    )


def compute_scale_factor(target_calories: float, base_calories: float) -> float:
    """Return the serving multiplier that brings a recipe to the target."""
    return target_calories / base_calories


def filter_and_scale(
    target: SlotTarget,
    recipes: Iterable[RecipeRecord],
    accepted_meal_types: Sequence[str],
    window: ScaleWindow | None = None,
    *,
    include_ingredients: bool = False,
) -> list[ScaledCandidate]:
    """Return unscored candidates for a slot in corpus order.

    Recipes without usable calories, without a matching meal type, or whose
    scale factor falls outside the window are skipped.
    """
    resolved_window = window or ScaleWindow()
    candidates: list[ScaledCandidate] = []
    for recipe in recipes:
        checked = check_nutrition(recipe)
        if not isinstance(checked, RecipeWithNutrition):
            continue
        if not recipe.matches_any_meal_type(accepted_meal_types):
            continue
        scale_factor = compute_scale_factor(
            target.target_calories, checked.nutrition.calories
        )
        if not resolved_window.contains(scale_factor):
            continue
        candidates.append(
            ScaledCandidate(
                recipe=recipe,
                scale_factor=round_half_up(scale_factor, 2),
                scaled_calories=target.target_calories,
                ingredients=(
                    scale_ingredients(recipe.ingredients, scale_factor)
                    if include_ingredients
                    else ()
                ),
            )
        )
    return candidates
