"""Supabase repository for system settings."""

from dataclasses import dataclass

from supabase import Client

from meal_planner.services.planning_settings import SettingsRepository


@dataclass
class SupabaseSettingsRepository(SettingsRepository):
    """Reads key/value rows from the system_settings table."""

    client: Client

    def get_setting(self, key: str) -> object | None:
        """Return the stored value for a key."""
        response = (
            self.client.table("system_settings")
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")
