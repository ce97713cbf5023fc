"""Domain models for user planning profiles."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MealStructureEntry:
    """User-defined slot with its share of the day in percent."""

    name: str
    percentage: float


@dataclass(frozen=True)
class PlanningProfile:
    """Targets and meal preferences read from a user's profile."""

    user_id: str
    daily_calories: float | None
    protein_g: float | None
    carbs_g: float | None
    fat_g: float | None
    is_fasting: bool
    fasting_selected_meals: tuple[str, ...]
    meal_structure: tuple[MealStructureEntry, ...]

    @property
    def mode(self) -> str:
        """Return the slot mode name for this profile."""
        return "fasting" if self.is_fasting else "regular"
