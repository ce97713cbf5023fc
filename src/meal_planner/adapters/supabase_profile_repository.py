"""Supabase repository for planning profiles."""

from dataclasses import dataclass

from supabase import Client

from meal_planner.domain.profiles import MealStructureEntry, PlanningProfile
from meal_planner.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Reads targets and meal preferences from the profiles table."""

    client: Client

    def get_profile(self, user_id: str) -> PlanningProfile | None:
        """Return the stored planning profile for a user."""
        response = (
            self.client.table("profiles")
            .select("user_id, targets, preferences")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> PlanningProfile:
    targets = row.get("targets") or {}
    preferences = row.get("preferences") or {}
    return PlanningProfile(
        user_id=str(row["user_id"]),
        daily_calories=_optional_float(targets.get("daily_calories")),
        protein_g=_optional_float(targets.get("protein_g")),
        carbs_g=_optional_float(targets.get("carbs_g")),
        fat_g=_optional_float(targets.get("fat_g")),
        is_fasting=bool(preferences.get("is_fasting", False)),
        fasting_selected_meals=tuple(
            str(name) for name in preferences.get("fasting_selected_meals") or []
        ),
        meal_structure=tuple(
            MealStructureEntry(
                name=str(entry["name"]),
                percentage=float(entry.get("percentage") or 0),
            )
            for entry in preferences.get("meal_structure") or []
            if isinstance(entry, dict) and entry.get("name")
        ),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
