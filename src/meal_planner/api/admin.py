"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from meal_planner.api.schemas import (
    ConsolePlanRequest,
    serialize_settings,
    serialize_summary,
)
from meal_planner.services.targets import build_regular_slots

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/settings", dependencies=[Depends(require_admin)])
async def planning_settings(request: Request) -> dict[str, object]:
    """Return the scaling and ranking settings in effect."""
    container: AppContainer = request.app.state.container
    return serialize_settings(container.planning_settings_service.load())


@router.post("/test-console/plan", dependencies=[Depends(require_admin)])
async def console_plan(
    payload: ConsolePlanRequest, request: Request
) -> dict[str, object]:
    """Build a sample plan for an explicit budget and slot list."""
    container: AppContainer = request.app.state.container
    slots = build_regular_slots([entry.to_entry() for entry in payload.slots])
    summary = container.meal_plan_service.sample_plan(
        payload.budget.to_profile(), slots
    )
    return serialize_summary(summary)


@router.post("/cache/invalidate", dependencies=[Depends(require_admin)])
async def invalidate_cache(request: Request) -> dict[str, str]:
    """Drop the cached recipe corpus."""
    container: AppContainer = request.app.state.container
    container.catalog_service.invalidate()
    return {"status": "ok"}
