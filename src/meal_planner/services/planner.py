"""Meal plan assembly from slot targets, scaling and ranking."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date

from meal_planner.domain.nutrition import NutrientProfile
from meal_planner.domain.planning import (
    MealSlot,
    PlanningSettings,
    ScaledCandidate,
    SlotPlan,
)
from meal_planner.domain.recipes import RecipeRecord
from meal_planner.services.catalog import RecipeCatalogService
from meal_planner.services.planning_settings import PlanningSettingsService
from meal_planner.services.profiles import ProfileService
from meal_planner.services.ranking import rank_candidates, target_macro_percentages
from meal_planner.services.scaling import filter_and_scale
from meal_planner.services.targets import resolve_slot_targets, validate_budget

RAMADAN_GROUP = "ramadan"

SUGGESTION_SLOT_OFFSETS: dict[str, int] = {
    "breakfast": 0,
    "lunch": 100,
    "dinner": 200,
    "snacks": 300,
}

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanSummary:
    """Ranked slots with the calories of the default picks."""

    slots: list[SlotPlan]
    total_calories: int


def build_slot_plans(  # noqa: PLR0913
    budget: NutrientProfile,
    slots: Sequence[MealSlot],
    recipes: Sequence[RecipeRecord],
    settings: PlanningSettings | None = None,
    *,
    include_ingredients: bool = False,
    boost_group: str | None = None,
) -> list[SlotPlan]:
    """Run target resolution, scaling and ranking for every slot."""
    resolved = settings or PlanningSettings()
    targets = resolve_slot_targets(budget, slots)
    target_pcts = target_macro_percentages(budget)
    plans = []
    for slot, target in zip(slots, targets, strict=True):
        candidates = filter_and_scale(
            target,
            recipes,
            slot.accepted_meal_types,
            resolved.scale_window,
            include_ingredients=include_ingredients,
        )
        ranked = rank_candidates(
            candidates,
            target_pcts,
            slot.primary_meal_type,
            resolved,
            boost_group=boost_group,
        )
        if not ranked:
            _logger.info(
                "No suitable recipe for slot=%s calories=%s",
                slot.name,
                target.target_calories,
            )
        plans.append(SlotPlan(slot=slot, target=target, candidates=tuple(ranked)))
    return plans


def distribute_ramadan_picks(
    plans: Sequence[SlotPlan], group: str = RAMADAN_GROUP
) -> list[SlotPlan]:
    """Give each slot a different recommended top pick where one is available.

    Slots are visited in order. When a slot's top recommended recipe was
    already claimed by an earlier slot, the first unclaimed recommended recipe
    in that slot moves to the front. If none is left the duplicate stays.
    """
    claimed: set[str] = set()
    result = []
    for plan in plans:
        candidates = list(plan.candidates)
        if not candidates or not _in_group(candidates[0], group):
            result.append(plan)
            continue

        top = candidates[0]
        if top.recipe.id in claimed:
            unclaimed = next(
                (
                    candidate
                    for candidate in candidates
                    if _in_group(candidate, group)
                    and candidate.recipe.id not in claimed
                ),
                None,
            )
            if unclaimed is not None:
                candidates.remove(unclaimed)
                candidates.insert(0, unclaimed)
                claimed.add(unclaimed.recipe.id)
            else:
                claimed.add(top.recipe.id)
        else:
            claimed.add(top.recipe.id)
        result.append(replace(plan, candidates=tuple(candidates)))
    return result


def suggested_index(day: date, slot_name: str, count: int) -> int:
    """Return the default candidate index for a slot on a given day.

    The pick is seeded by the date, so revisiting a day shows the same
    suggestion while neighbouring days usually differ.
    """
    if count <= 1:
        return 0
    seed = _hash_day(day.isoformat()) + SUGGESTION_SLOT_OFFSETS.get(slot_name, 0)
    noise = math.sin(seed + 1000) * 10000
    return math.floor((noise - math.floor(noise)) * count)


def _hash_day(text: str) -> int:
    # 32-bit string hash (h * 31 + c), read back as a signed value.
    value = 0
    for char in text:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


def summarize(plans: Sequence[SlotPlan]) -> PlanSummary:
    """Total the scaled calories of each slot's default pick."""
    total = sum(plan.top.scaled_calories for plan in plans if plan.top is not None)
    return PlanSummary(slots=list(plans), total_calories=total)


def _in_group(candidate: ScaledCandidate, group: str) -> bool:
    return group in candidate.recipe.recommendation_groups


@dataclass
class MealPlanService:
    """Entry point for callers that need ranked recipes per slot."""

    catalog: RecipeCatalogService
    profile_service: ProfileService
    settings_service: PlanningSettingsService

    def plan_for_user(
        self, user_id: str, include_ingredients: bool = False
    ) -> list[SlotPlan]:
        """Rank recipes for every slot of a user's configured meal structure."""
        profile = self.profile_service.get_profile(user_id)
        budget = self.profile_service.resolve_budget(profile)
        slots = self.profile_service.resolve_slots(profile)
        return self.preview(
            budget,
            slots,
            fasting=profile.is_fasting,
            include_ingredients=include_ingredients,
        )

    def preview(
        self,
        budget: NutrientProfile,
        slots: Sequence[MealSlot],
        *,
        fasting: bool = False,
        include_ingredients: bool = False,
    ) -> list[SlotPlan]:
        """Rank recipes for an explicit budget and slot list."""
        validate_budget(budget)
        recipes = self.catalog.list_recipes(include_ingredients=include_ingredients)
        plans = build_slot_plans(
            budget,
            slots,
            recipes,
            self.settings_service.load(),
            include_ingredients=include_ingredients,
            boost_group=RAMADAN_GROUP if fasting else None,
        )
        if fasting:
            return distribute_ramadan_picks(plans)
        return plans

    def sample_plan(
        self, budget: NutrientProfile, slots: Sequence[MealSlot]
    ) -> PlanSummary:
        """Build a sample plan for the admin console."""
        return summarize(self.preview(budget, slots))
