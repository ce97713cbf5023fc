"""Tests for container wiring."""

from meal_planner.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.meal_plan_service.catalog is container.catalog_service
    assert container.alternatives_service.catalog is container.catalog_service
    assert container.catalog_service.ttl_seconds == 300
    assert container.profile_service.default_budget.calories == 2000
