"""FastAPI application factory."""

import logging
from datetime import date

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from meal_planner.api.admin import router as admin_router
from meal_planner.api.schemas import (
    PlanPreviewRequest,
    serialize_alternatives,
    serialize_slot_plan,
)
from meal_planner.app_logging import configure_logging
from meal_planner.containers import AppContainer
from meal_planner.domain.errors import (
    InvalidBudgetError,
    MealPlannerError,
    ProfileNotFoundError,
    RecipeNotFoundError,
    UnknownMealModeError,
)
from meal_planner.services.planner import suggested_index
from meal_planner.services.targets import build_meal_slots

HTTP_UNPROCESSABLE = 422

_ERROR_STATUS: dict[type[MealPlannerError], int] = {
    UnknownMealModeError: HTTP_UNPROCESSABLE,
    InvalidBudgetError: HTTP_UNPROCESSABLE,
    RecipeNotFoundError: status.HTTP_404_NOT_FOUND,
    ProfileNotFoundError: status.HTTP_404_NOT_FOUND,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(MealPlannerError)
    async def planner_error_handler(
        request: Request, exc: MealPlannerError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info("Planner error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/plans/preview")
    async def plan_preview(
        payload: PlanPreviewRequest, request: Request
    ) -> dict[str, object]:
        """Rank recipes for an explicit budget and meal structure."""
        state_container: AppContainer = request.app.state.container
        slots = build_meal_slots(
            payload.mode,
            structure=[entry.to_entry() for entry in payload.meal_structure],
            fasting_selected_meals=payload.fasting_selected_meals,
        )
        plans = state_container.meal_plan_service.preview(
            payload.budget.to_profile(),
            slots,
            fasting=payload.mode == "fasting",
            include_ingredients=payload.include_ingredients,
        )
        return {"mode": payload.mode, "slots": [serialize_slot_plan(p) for p in plans]}

    @app.get("/users/{user_id}/plan")
    async def user_plan(
        user_id: str,
        request: Request,
        include_ingredients: bool = False,
        day: date | None = None,
    ) -> dict[str, object]:
        """Rank recipes for a user's stored targets and meal structure.

        With ``day`` set, each slot also carries the date-seeded default pick.
        """
        state_container: AppContainer = request.app.state.container
        plans = state_container.meal_plan_service.plan_for_user(
            user_id, include_ingredients=include_ingredients
        )
        slots = []
        for plan in plans:
            index = None
            if day is not None:
                index = suggested_index(day, plan.slot.name, len(plan.candidates))
            slots.append(serialize_slot_plan(plan, suggested_index=index))
        return {"user_id": user_id, "slots": slots}

    @app.get("/recipes/{recipe_id}/alternatives")
    async def recipe_alternatives(
        recipe_id: str,
        request: Request,
        target_calories: float | None = None,
        limit: int = Query(10, ge=1),
    ) -> dict[str, object]:
        """Return swap alternatives for a recipe."""
        state_container: AppContainer = request.app.state.container
        result = state_container.alternatives_service.find_alternatives(
            recipe_id, target_calories=target_calories, limit=limit
        )
        return serialize_alternatives(result)

    return app
