"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from meal_planner.domain.nutrition import NutrientProfile

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    recipe_cache_ttl_seconds: int = 300
    default_daily_calories: float = 2000
    default_protein_g: float = 150
    default_carbs_g: float = 250
    default_fat_g: float = 65
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def default_budget(self) -> NutrientProfile:
        """Budget used when a profile lacks targets."""
        return NutrientProfile(
            calories=self.default_daily_calories,
            protein_g=self.default_protein_g,
            carbs_g=self.default_carbs_g,
            fat_g=self.default_fat_g,
        )
