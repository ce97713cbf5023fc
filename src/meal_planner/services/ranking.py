"""Macro-similarity scoring and candidate ranking."""

from collections.abc import Iterable
from dataclasses import replace
from functools import cmp_to_key

from meal_planner.domain.nutrition import (
    CARBS_KCAL_PER_G,
    FAT_KCAL_PER_G,
    PROTEIN_KCAL_PER_G,
    MacroPercentages,
    NutrientProfile,
    round_int,
)
from meal_planner.domain.planning import (
    PlanningSettings,
    ScaledCandidate,
    SimilarityWeights,
)

DIFF_PENALTY = 1.5


def macro_percentages(profile: NutrientProfile) -> MacroPercentages:
    """Convert macro grams to whole-percent shares of the profile's calories."""
    calories = profile.calories
    if not calories or calories <= 0:
        return MacroPercentages(protein_pct=0, carbs_pct=0, fat_pct=0)
    return MacroPercentages(
        protein_pct=round_int(profile.protein_g * PROTEIN_KCAL_PER_G / calories * 100),
        carbs_pct=round_int(profile.carbs_g * CARBS_KCAL_PER_G / calories * 100),
        fat_pct=round_int(profile.fat_g * FAT_KCAL_PER_G / calories * 100),
    )


def target_macro_percentages(budget: NutrientProfile) -> MacroPercentages:
    """Return the daily budget's macro split, which every slot shares."""
    return macro_percentages(budget)


def macro_similarity(
    target: MacroPercentages,
    candidate: MacroPercentages,
    weights: SimilarityWeights | None = None,
) -> int:
    """Score how closely two macro splits agree, from 0 to 100."""
    resolved = weights or SimilarityWeights()
    protein_score = _sub_score(target.protein_pct, candidate.protein_pct)
    carbs_score = _sub_score(target.carbs_pct, candidate.carbs_pct)
    fat_score = _sub_score(target.fat_pct, candidate.fat_pct)
    return round_int(
        protein_score * resolved.protein
        + carbs_score * resolved.carbs
        + fat_score * resolved.fat
    )


def _sub_score(target_pct: int, candidate_pct: int) -> float:
    return max(0.0, 100 - abs(target_pct - candidate_pct) * DIFF_PENALTY)


def score_candidate(
    candidate: ScaledCandidate,
    target: MacroPercentages,
    weights: SimilarityWeights | None = None,
) -> ScaledCandidate:
    """Attach a similarity score computed from the recipe's base nutrition.

    Scaling multiplies calories and macros alike, so the base split equals the
    scaled one.
    """
    nutrition = candidate.recipe.nutrition_per_serving
    if nutrition is None:
        return replace(candidate, macro_similarity_score=0)
    score = macro_similarity(target, macro_percentages(nutrition), weights)
    return replace(candidate, macro_similarity_score=score)


def compare_candidates(
    first: ScaledCandidate,
    second: ScaledCandidate,
    *,
    primary_meal_type: str | None,
    tie_band: float,
    boost_group: str | None = None,
) -> int:
    """Order two candidates; negative means ``first`` ranks higher."""
    if boost_group:
        first_boost = int(boost_group in first.recipe.recommendation_groups)
        second_boost = int(boost_group in second.recipe.recommendation_groups)
        if first_boost != second_boost:
            return second_boost - first_boost

    score_diff = second.score_or_zero - first.score_or_zero
    if abs(score_diff) > tie_band:
        return score_diff

    if primary_meal_type:
        first_primary = int(first.recipe.has_meal_type(primary_meal_type))
        second_primary = int(second.recipe.has_meal_type(primary_meal_type))
        if first_primary != second_primary:
            return second_primary - first_primary

    first_distance = abs(first.scale_factor - 1)
    second_distance = abs(second.scale_factor - 1)
    return (first_distance > second_distance) - (first_distance < second_distance)


def sort_candidates(
    candidates: Iterable[ScaledCandidate],
    *,
    primary_meal_type: str | None,
    tie_band: float,
    boost_group: str | None = None,
) -> list[ScaledCandidate]:
    """Sort already-scored candidates, best first."""

    def _compare(first: ScaledCandidate, second: ScaledCandidate) -> int:
        return compare_candidates(
            first,
            second,
            primary_meal_type=primary_meal_type,
            tie_band=tie_band,
            boost_group=boost_group,
        )

    return sorted(candidates, key=cmp_to_key(_compare))


def rank_candidates(
    candidates: Iterable[ScaledCandidate],
    target: MacroPercentages,
    primary_meal_type: str | None,
    settings: PlanningSettings | None = None,
    boost_group: str | None = None,
) -> list[ScaledCandidate]:
    """Score candidates against the target split and return them ranked."""
    resolved = settings or PlanningSettings()
    scored = [
        score_candidate(candidate, target, resolved.similarity_weights)
        for candidate in candidates
    ]
    return sort_candidates(
        scored,
        primary_meal_type=primary_meal_type,
        tie_band=resolved.tie_band,
        boost_group=boost_group,
    )
