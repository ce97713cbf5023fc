"""Nutrition domain models."""

import math
from dataclasses import dataclass

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


@dataclass(frozen=True)
class NutrientProfile:
    """Calories and macronutrient grams for a budget or a serving."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    def scaled(self, factor: float) -> "NutrientProfile":
        """Return the profile multiplied by a serving factor."""
        return NutrientProfile(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            carbs_g=self.carbs_g * factor,
            fat_g=self.fat_g * factor,
        )


@dataclass(frozen=True)
class MacroPercentages:
    """Share of calories coming from each macronutrient, in whole percent."""

    protein_pct: int
    carbs_pct: int
    fat_pct: int


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with halves rounded toward positive infinity."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))
