"""Domain models for the recipe catalog."""

from dataclasses import dataclass, field

from meal_planner.domain.nutrition import NutrientProfile


@dataclass(frozen=True)
class RecipeIngredient:
    """Ingredient line of a recipe with its base quantity."""

    raw_name: str
    quantity: float | None
    unit: str | None
    is_spice: bool = False
    is_optional: bool = False
    ingredient_id: str | None = None


@dataclass(frozen=True)
class RecipeInstruction:
    """Single instruction step."""

    step: int
    instruction: str


@dataclass(frozen=True)
class RecipeRecord:
    """Recipe as provided by the catalog; read-only for planning."""

    id: str
    name: str
    meal_type: tuple[str, ...]
    nutrition_per_serving: NutrientProfile | None
    ingredients: tuple[RecipeIngredient, ...] = ()
    instructions: tuple[RecipeInstruction, ...] = ()
    recommendation_groups: tuple[str, ...] = field(default=())

    def has_meal_type(self, tag: str) -> bool:
        """Return True when any of the recipe's tags equals ``tag`` ignoring case."""
        wanted = tag.lower()
        return any(value.lower() == wanted for value in self.meal_type)

    def matches_any_meal_type(self, tags: tuple[str, ...] | list[str]) -> bool:
        """Return True when the recipe carries at least one of ``tags``."""
        return any(self.has_meal_type(tag) for tag in tags)


@dataclass(frozen=True)
class RecipeWithNutrition:
    """Recipe whose base serving has usable calories."""

    recipe: RecipeRecord
    nutrition: NutrientProfile


@dataclass(frozen=True)
class RecipeMissingNutrition:
    """Recipe that cannot be scaled because base calories are absent or zero."""

    recipe: RecipeRecord
    reason: str


def check_nutrition(
    recipe: RecipeRecord,
) -> RecipeWithNutrition | RecipeMissingNutrition:
    """Classify a recipe by whether it can take part in calorie scaling."""
    nutrition = recipe.nutrition_per_serving
    if nutrition is None:
        return RecipeMissingNutrition(recipe=recipe, reason="missing nutrition")
    if not nutrition.calories or nutrition.calories <= 0:
        return RecipeMissingNutrition(recipe=recipe, reason="non-positive calories")
    return RecipeWithNutrition(recipe=recipe, nutrition=nutrition)
