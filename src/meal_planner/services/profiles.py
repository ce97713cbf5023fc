"""User planning profile service."""

from dataclasses import dataclass, field
from typing import Protocol

from meal_planner.domain.errors import ProfileNotFoundError
from meal_planner.domain.nutrition import NutrientProfile
from meal_planner.domain.planning import MealSlot
from meal_planner.domain.profiles import PlanningProfile
from meal_planner.services.targets import build_meal_slots

DEFAULT_BUDGET = NutrientProfile(calories=2000, protein_g=150, carbs_g=250, fat_g=65)


class ProfileRepository(Protocol):
    """Persistence interface for planning profiles."""

    def get_profile(self, user_id: str) -> PlanningProfile | None:
        """Return the user's planning profile, if present."""


@dataclass
class ProfileService:
    """Resolves budgets and slot structures for a user."""

    repository: ProfileRepository
    default_budget: NutrientProfile = field(default=DEFAULT_BUDGET)

    def get_profile(self, user_id: str) -> PlanningProfile:
        """Return the profile or raise when the user has none."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        return profile

    def resolve_budget(self, profile: PlanningProfile) -> NutrientProfile:
        """Return the daily budget, substituting defaults for absent or zero values."""
        return NutrientProfile(
            calories=profile.daily_calories or self.default_budget.calories,
            protein_g=profile.protein_g or self.default_budget.protein_g,
            carbs_g=profile.carbs_g or self.default_budget.carbs_g,
            fat_g=profile.fat_g or self.default_budget.fat_g,
        )

    @staticmethod
    def resolve_slots(profile: PlanningProfile) -> list[MealSlot]:
        """Return the slot list for the profile's mode."""
        return build_meal_slots(
            profile.mode,
            structure=profile.meal_structure,
            fasting_selected_meals=profile.fasting_selected_meals,
        )
