"""Tests for meal plan assembly."""

import math
from datetime import date, timedelta

import pytest

from meal_planner.domain.errors import InvalidBudgetError, ProfileNotFoundError
from meal_planner.domain.nutrition import NutrientProfile
from meal_planner.domain.planning import MealSlot, ScaledCandidate, SlotPlan, SlotTarget
from meal_planner.domain.profiles import PlanningProfile
from meal_planner.services.planner import (
    build_slot_plans,
    distribute_ramadan_picks,
    suggested_index,
    summarize,
)
from meal_planner.services.targets import build_fasting_slots, build_regular_slots
from tests.conftest import make_recipe

BUDGET = NutrientProfile(calories=2000, protein_g=150, carbs_g=200, fat_g=67)


def _corpus() -> list:
    return [
        make_recipe(
            "oats", 400, protein_g=30, carbs_g=40, fat_g=13.3, meal_type=("breakfast",)
        ),
        make_recipe("bowl", 600, protein_g=45, carbs_g=60, fat_g=20),
        make_recipe(
            "stew", 600, protein_g=15, carbs_g=120, fat_g=6.7, meal_type=("dinner",)
        ),
        make_recipe("bar", 150, protein_g=5, carbs_g=20, fat_g=5, meal_type=("snack",)),
    ]


def _ramadan_corpus() -> list:
    return [
        make_recipe(
            "r1",
            800,
            protein_g=60,
            carbs_g=80,
            fat_g=26.7,
            recommendation_groups=("ramadan",),
        ),
        make_recipe(
            "r2",
            700,
            protein_g=17.5,
            carbs_g=140,
            fat_g=7.8,
            recommendation_groups=("ramadan",),
        ),
        make_recipe("plain", 900, protein_g=67.5, carbs_g=90, fat_g=30),
    ]


def _ids(plan: SlotPlan) -> list[str]:
    return [candidate.recipe.id for candidate in plan.candidates]


def _plan(slot_name: str, *candidates: ScaledCandidate) -> SlotPlan:
    return SlotPlan(
        slot=MealSlot(name=slot_name, weight=0.5, accepted_meal_types=("lunch",)),
        target=SlotTarget(
            slot_name=slot_name,
            target_calories=700,
            target_protein_g=0,
            target_carbs_g=0,
            target_fat_g=0,
        ),
        candidates=candidates,
    )


def _candidate(
    recipe_id: str, groups: tuple[str, ...] = ("ramadan",)
) -> ScaledCandidate:
    return ScaledCandidate(
        recipe=make_recipe(recipe_id, 700, recommendation_groups=groups),
        scale_factor=1.0,
        scaled_calories=700,
        macro_similarity_score=90,
    )


def test_regular_day_ranks_each_slot() -> None:
    plans = build_slot_plans(BUDGET, build_regular_slots(), _corpus())

    assert [plan.slot.name for plan in plans] == [
        "breakfast",
        "lunch",
        "dinner",
        "snacks",
    ]
    breakfast, lunch, dinner, snacks = plans
    assert _ids(breakfast) == ["oats"]
    assert breakfast.top.scale_factor == 1.25
    assert _ids(lunch) == ["bowl", "stew"]
    assert lunch.top.scale_factor == 1.17
    assert lunch.top.macro_similarity_score == 100
    assert _ids(dinner) == ["bowl", "oats", "stew"]
    assert _ids(snacks) == ["bar"]
    assert all(
        candidate.scaled_calories == plan.target.target_calories
        for plan in plans
        for candidate in plan.candidates
    )


def test_slot_without_matches_gets_empty_candidates() -> None:
    slots = [
        MealSlot(name="pre-iftar", weight=0.5, accepted_meal_types=("pre-iftar",)),
        MealSlot(name="lunch", weight=0.5, accepted_meal_types=("lunch",)),
    ]

    plans = build_slot_plans(BUDGET, slots, _corpus())

    assert plans[0].candidates == ()
    assert plans[0].top is None
    assert _ids(plans[1]) == ["bowl"]


def test_non_finite_weight_slot_gets_no_candidates() -> None:
    slots = [MealSlot(name="lunch", weight=math.nan, accepted_meal_types=("lunch",))]

    (plan,) = build_slot_plans(BUDGET, slots, _corpus())

    assert plan.target.target_calories == 0
    assert plan.candidates == ()


def test_empty_slot_list_returns_empty_plan() -> None:
    assert build_slot_plans(BUDGET, [], _corpus()) == []


def test_summarize_totals_top_picks() -> None:
    plans = build_slot_plans(BUDGET, build_regular_slots(), _corpus())

    summary = summarize(plans)

    assert summary.total_calories == 2000
    assert len(summary.slots) == 4


def test_distribute_moves_unclaimed_recommendation_forward() -> None:
    plans = [
        _plan("iftar", _candidate("r1"), _candidate("r2")),
        _plan("suhoor", _candidate("r1"), _candidate("plain", ()), _candidate("r2")),
    ]

    distributed = distribute_ramadan_picks(plans)

    assert _ids(distributed[0]) == ["r1", "r2"]
    assert _ids(distributed[1]) == ["r2", "r1", "plain"]


def test_distribute_keeps_duplicate_when_nothing_left() -> None:
    plans = [
        _plan("iftar", _candidate("r1")),
        _plan("suhoor", _candidate("r1"), _candidate("plain", ())),
    ]

    distributed = distribute_ramadan_picks(plans)

    assert _ids(distributed[1]) == ["r1", "plain"]


def test_distribute_ignores_slots_without_recommended_top() -> None:
    plans = [_plan("iftar", _candidate("plain", ())), _plan("suhoor")]

    assert distribute_ramadan_picks(plans) == plans


def test_preview_boosts_ramadan_recipes_when_fasting(
    container, recipe_repository
) -> None:
    recipe_repository.recipes.extend(_ramadan_corpus())
    slots = build_fasting_slots(["iftar", "full-meal-taraweeh"])

    regular = container.meal_plan_service.preview(BUDGET, slots[:1])
    fasting = container.meal_plan_service.preview(BUDGET, slots, fasting=True)

    assert _ids(regular[0])[0] == "plain"
    assert [plan.top.recipe.id for plan in fasting] == ["r1", "r2"]
    assert [plan.target.target_calories for plan in fasting] == [1143, 857]


def test_preview_rejects_invalid_budget(container) -> None:
    budget = NutrientProfile(calories=-5, protein_g=0, carbs_g=0, fat_g=0)

    with pytest.raises(InvalidBudgetError):
        container.meal_plan_service.preview(budget, build_regular_slots())


def test_plan_for_user_fills_missing_targets(
    container, recipe_repository, profile_repository
) -> None:
    recipe_repository.recipes.extend(_corpus())
    profile_repository.profiles["user-1"] = PlanningProfile(
        user_id="user-1",
        daily_calories=None,
        protein_g=None,
        carbs_g=0,
        fat_g=None,
        is_fasting=False,
        fasting_selected_meals=(),
        meal_structure=(),
    )

    plans = container.meal_plan_service.plan_for_user("user-1")

    assert [plan.target.target_calories for plan in plans] == [500, 700, 600, 200]
    assert plans[1].target.target_carbs_g == 88
    assert _ids(plans[1])[0] == "bowl"


def test_plan_for_user_uses_fasting_preferences(
    container, recipe_repository, profile_repository
) -> None:
    recipe_repository.recipes.extend(_ramadan_corpus())
    profile_repository.profiles["user-2"] = PlanningProfile(
        user_id="user-2",
        daily_calories=2000,
        protein_g=150,
        carbs_g=200,
        fat_g=67,
        is_fasting=True,
        fasting_selected_meals=("full-meal-taraweeh", "iftar"),
        meal_structure=(),
    )

    plans = container.meal_plan_service.plan_for_user("user-2")

    assert [plan.slot.name for plan in plans] == ["iftar", "full-meal-taraweeh"]
    assert [plan.top.recipe.id for plan in plans] == ["r1", "r2"]


def test_plan_for_unknown_user_raises(container) -> None:
    with pytest.raises(ProfileNotFoundError):
        container.meal_plan_service.plan_for_user("missing")


def test_sample_plan_summarizes(container, recipe_repository) -> None:
    recipe_repository.recipes.extend(_corpus())

    summary = container.meal_plan_service.sample_plan(BUDGET, build_regular_slots())

    assert summary.total_calories == 2000
    assert summary.slots[0].top.recipe.id == "oats"


def test_suggested_index_is_stable_for_a_day() -> None:
    day = date(2024, 3, 11)

    first = suggested_index(day, "lunch", 7)

    assert suggested_index(day, "lunch", 7) == first
    assert 0 <= first < 7


def test_suggested_index_stays_in_range_and_varies() -> None:
    start = date(2024, 1, 1)
    picks = [
        suggested_index(start + timedelta(days=offset), "dinner", 5)
        for offset in range(60)
    ]

    assert all(0 <= pick < 5 for pick in picks)
    assert len(set(picks)) > 1


@pytest.mark.parametrize("count", [0, 1])
def test_suggested_index_without_choice_is_zero(count: int) -> None:
    assert suggested_index(date(2024, 3, 11), "breakfast", count) == 0


def test_suggested_index_unknown_slot_uses_date_only() -> None:
    day = date(2024, 3, 11)

    assert suggested_index(day, "iftar", 9) == suggested_index(day, "breakfast", 9)
