"""Errors surfaced by the planning services."""


class MealPlannerError(Exception):
    """Base class for planning errors."""


class UnknownMealModeError(MealPlannerError):
    """Raised when a slot mode name is not recognised."""

    def __init__(self, mode: str) -> None:
        super().__init__(f"Unknown meal mode: {mode!r}")
        self.mode = mode


class InvalidBudgetError(MealPlannerError):
    """Raised when a budget or its meal split holds unusable values."""


class RecipeNotFoundError(MealPlannerError):
    """Raised when a recipe id is not in the catalog."""


class ProfileNotFoundError(MealPlannerError):
    """Raised when no planning profile exists for a user."""
