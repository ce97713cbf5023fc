"""Recipe catalog access with a cached corpus snapshot."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.recipes import RecipeRecord
from meal_planner.services.cache import Cache

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for the recipe catalog."""

    def list_public_recipes(self, include_ingredients: bool) -> list[RecipeRecord]:
        """Return public recipes that carry nutrition data."""

    def get_recipe(self, recipe_id: str) -> RecipeRecord | None:
        """Return a recipe by id, if present."""


@dataclass
class RecipeCatalogService:
    """Serves the recipe corpus the planner ranks over."""

    repository: RecipeRepository
    cache: Cache
    ttl_seconds: int = 300

    def list_recipes(self, include_ingredients: bool = False) -> list[RecipeRecord]:
        """Return the public corpus, cached for ``ttl_seconds``."""
        cache_key = _cache_key(include_ingredients)
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        recipes = self.repository.list_public_recipes(include_ingredients)
        self.cache.set(cache_key, recipes, ttl_seconds=self.ttl_seconds)
        _logger.info(
            "Loaded recipe corpus: recipes=%s ingredients=%s",
            len(recipes),
            include_ingredients,
        )
        return recipes

    def get_recipe(self, recipe_id: str) -> RecipeRecord | None:
        """Return a single recipe, looking in the cached corpus first."""
        for include_ingredients in (True, False):
            cached = self.cache.get(_cache_key(include_ingredients))
            if isinstance(cached, list):
                for recipe in cached:
                    if recipe.id == recipe_id:
                        return recipe
        return self.repository.get_recipe(recipe_id)

    def invalidate(self) -> None:
        """Drop cached corpus snapshots."""
        self.cache.delete(_cache_key(include_ingredients=True))
        self.cache.delete(_cache_key(include_ingredients=False))


def _cache_key(include_ingredients: bool) -> str:
    suffix = "full" if include_ingredients else "basic"
    return f"recipes:public:{suffix}"
