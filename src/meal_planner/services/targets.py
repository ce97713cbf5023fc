"""Meal-slot target resolution."""

import math
from collections.abc import Iterable, Sequence

from meal_planner.domain.errors import InvalidBudgetError, UnknownMealModeError
from meal_planner.domain.nutrition import NutrientProfile, round_int
from meal_planner.domain.planning import MealSlot, SlotTarget
from meal_planner.domain.profiles import MealStructureEntry

REGULAR_MODE = "regular"
FASTING_MODE = "fasting"

DEFAULT_REGULAR_DISTRIBUTION: dict[str, float] = {
    "breakfast": 0.25,
    "lunch": 0.35,
    "dinner": 0.30,
    "snacks": 0.10,
}

FASTING_MEAL_ORDER: tuple[str, ...] = (
    "pre-iftar",
    "iftar",
    "full-meal-taraweeh",
    "snack-taraweeh",
    "suhoor",
)

FASTING_DISTRIBUTION: dict[str, float] = {
    "pre-iftar": 0.10,
    "iftar": 0.40,
    "full-meal-taraweeh": 0.30,
    "snack-taraweeh": 0.10,
    "suhoor": 0.25,
}

UNLISTED_FASTING_WEIGHT = 0.2

_SNACK_TYPES = ("snack", "snacks & sweetes", "smoothies")

# Order matters: the first tag is the slot's primary meal type.
MEAL_TYPE_MAPPING: dict[str, tuple[str, ...]] = {
    "breakfast": ("breakfast", "smoothies"),
    "mid_morning": _SNACK_TYPES,
    "lunch": ("lunch", "one pot", "dinner", "side dishes"),
    "afternoon": _SNACK_TYPES,
    "dinner": ("dinner", "lunch", "one pot", "side dishes", "breakfast"),
    "snack": _SNACK_TYPES,
    "snacks": _SNACK_TYPES,
    "snack_1": _SNACK_TYPES,
    "snack_2": _SNACK_TYPES,
    "snack_3": _SNACK_TYPES,
    "evening": _SNACK_TYPES,
    "pre-iftar": ("pre-iftar", "smoothies"),
    "iftar": ("lunch",),
    "full-meal-taraweeh": ("lunch", "dinner"),
    "snack-taraweeh": ("snack",),
    "suhoor": ("breakfast", "dinner"),
}


def accepted_meal_types(slot_name: str) -> tuple[str, ...]:
    """Return the recipe tags a slot accepts, falling back to the slot name."""
    return MEAL_TYPE_MAPPING.get(slot_name, (slot_name,))


def validate_budget(budget: NutrientProfile) -> None:
    """Reject budgets with negative or non-finite values."""
    for name in ("calories", "protein_g", "carbs_g", "fat_g"):
        value = getattr(budget, name)
        if not math.isfinite(value) or value < 0:
            raise InvalidBudgetError(f"Invalid budget value for {name}: {value}")


def resolve_slot_targets(
    budget: NutrientProfile, slots: Sequence[MealSlot]
) -> list[SlotTarget]:
    """Split a daily budget across slots.

    Each nutrient is rounded independently, so slot totals may drift from the
    daily budget by a unit or two.
    """
    return [
        SlotTarget(
            slot_name=slot.name,
            target_calories=_round_target(budget.calories * slot.weight),
            target_protein_g=_round_target(budget.protein_g * slot.weight),
            target_carbs_g=_round_target(budget.carbs_g * slot.weight),
            target_fat_g=_round_target(budget.fat_g * slot.weight),
        )
        for slot in slots
    ]


def _round_target(value: float) -> int:
    # Non-finite products leave the slot at zero so no recipe scales into it.
    return round_int(value) if math.isfinite(value) else 0


def build_regular_slots(
    structure: Iterable[MealStructureEntry] | None = None,
) -> list[MealSlot]:
    """Build slots from a percentage meal structure or the default split."""
    entries = list(structure or [])
    if not entries:
        return [
            MealSlot(
                name=name,
                weight=weight,
                accepted_meal_types=accepted_meal_types(name),
            )
            for name, weight in DEFAULT_REGULAR_DISTRIBUTION.items()
        ]
    for entry in entries:
        if not math.isfinite(entry.percentage):
            raise InvalidBudgetError(
                f"Invalid meal structure percentage for {entry.name}: "
                f"{entry.percentage}"
            )
    return [
        MealSlot(
            name=entry.name,
            weight=entry.percentage / 100,
            accepted_meal_types=accepted_meal_types(entry.name),
        )
        for entry in entries
    ]


def build_fasting_slots(selected_meals: Iterable[str] | None = None) -> list[MealSlot]:
    """Build fasting slots in canonical order, renormalising opted-in weights."""
    selected = list(dict.fromkeys(selected_meals or []))
    if selected:
        names = [name for name in FASTING_MEAL_ORDER if name in selected]
        names.extend(name for name in selected if name not in FASTING_MEAL_ORDER)
    else:
        names = list(FASTING_MEAL_ORDER)

    total = sum(FASTING_DISTRIBUTION.get(name, 0) for name in names)
    slots = []
    for name in names:
        weight = FASTING_DISTRIBUTION.get(name, UNLISTED_FASTING_WEIGHT)
        slots.append(
            MealSlot(
                name=name,
                weight=weight / total if total else 0.0,
                accepted_meal_types=accepted_meal_types(name),
            )
        )
    return slots


def build_meal_slots(
    mode: str,
    *,
    structure: Iterable[MealStructureEntry] | None = None,
    fasting_selected_meals: Iterable[str] | None = None,
) -> list[MealSlot]:
    """Return the slot list for a named mode."""
    if mode == REGULAR_MODE:
        return build_regular_slots(structure)
    if mode == FASTING_MODE:
        return build_fasting_slots(fasting_selected_meals)
    raise UnknownMealModeError(mode)
