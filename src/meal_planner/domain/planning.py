"""Domain models for meal-slot planning."""

from dataclasses import dataclass, field

from meal_planner.domain.recipes import RecipeIngredient, RecipeRecord


@dataclass(frozen=True)
class MealSlot:
    """Named share of the daily budget and the recipe tags it accepts."""

    name: str
    weight: float
    accepted_meal_types: tuple[str, ...]

    @property
    def primary_meal_type(self) -> str | None:
        """Return the first accepted tag, used to break ranking ties."""
        return self.accepted_meal_types[0] if self.accepted_meal_types else None


@dataclass(frozen=True)
class SlotTarget:
    """Calorie and macro targets for one slot."""

    slot_name: str
    target_calories: int
    target_protein_g: int
    target_carbs_g: int
    target_fat_g: int


@dataclass(frozen=True)
class ScaleWindow:
    """Accepted range for recipe serving scale factors."""

    min_scale: float = 0.5
    max_scale: float = 2.0

    def contains(self, factor: float) -> bool:
        """Return True when ``factor`` lies inside the inclusive window."""
        return self.min_scale <= factor <= self.max_scale


@dataclass(frozen=True)
class SimilarityWeights:
    """Per-macro weights for the similarity score."""

    protein: float = 0.5
    carbs: float = 0.3
    fat: float = 0.2


@dataclass(frozen=True)
class PlanningSettings:
    """Tunables for the scaling and ranking stages."""

    scale_window: ScaleWindow = field(default_factory=ScaleWindow)
    similarity_weights: SimilarityWeights = field(default_factory=SimilarityWeights)
    tie_band: float = 5


@dataclass(frozen=True)
class ScaledIngredient:
    """Ingredient with a quantity adjusted to the candidate's serving."""

    ingredient: RecipeIngredient
    scaled_quantity: float | None


@dataclass(frozen=True)
class ScaledCandidate:
    """Recipe scaled to a slot target, optionally scored."""

    recipe: RecipeRecord
    scale_factor: float
    scaled_calories: int
    macro_similarity_score: int | None = None
    ingredients: tuple[ScaledIngredient, ...] = ()

    @property
    def score_or_zero(self) -> int:
        """Return the similarity score, treating a missing one as zero."""
        return self.macro_similarity_score or 0


@dataclass(frozen=True)
class SlotPlan:
    """Ranked candidates for one slot; an empty tuple means nothing fits."""

    slot: MealSlot
    target: SlotTarget
    candidates: tuple[ScaledCandidate, ...]

    @property
    def top(self) -> ScaledCandidate | None:
        """Return the default suggestion, if any."""
        return self.candidates[0] if self.candidates else None
