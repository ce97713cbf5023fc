"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from meal_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from meal_planner.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from meal_planner.adapters.supabase_settings_repository import (
    SupabaseSettingsRepository,
)
from meal_planner.config import Settings
from meal_planner.services.alternatives import AlternativesService
from meal_planner.services.cache import InMemoryCache
from meal_planner.services.catalog import RecipeCatalogService
from meal_planner.services.planner import MealPlanService
from meal_planner.services.planning_settings import PlanningSettingsService
from meal_planner.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: RecipeCatalogService
    profile_service: ProfileService
    planning_settings_service: PlanningSettingsService
    meal_plan_service: MealPlanService
    alternatives_service: AlternativesService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_service = RecipeCatalogService(
        repository=SupabaseRecipeRepository(supabase_client),
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.recipe_cache_ttl_seconds,
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        default_budget=resolved_settings.default_budget(),
    )
    planning_settings_service = PlanningSettingsService(
        SupabaseSettingsRepository(supabase_client)
    )
    meal_plan_service = MealPlanService(
        catalog=catalog_service,
        profile_service=profile_service,
        settings_service=planning_settings_service,
    )
    alternatives_service = AlternativesService(
        catalog=catalog_service,
        settings_service=planning_settings_service,
    )
    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        profile_service=profile_service,
        planning_settings_service=planning_settings_service,
        meal_plan_service=meal_plan_service,
        alternatives_service=alternatives_service,
    )
