"""FastAPI application factory."""

import logging
from datetime import UTC, date, datetime
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from nutrition_engine.api.models import (
    CalculatedGoalRequest,
    CreateGoalRequest,
    DiaryEntryRequest,
    DietCalculationRequest,
    RecommendationRequest,
    UpdateEntryRequest,
    UpdateGoalRequest,
)
from nutrition_engine.app_logging import configure_logging
from nutrition_engine.containers import AppContainer
from nutrition_engine.domain.errors import (
    EmptyRecipeError,
    MissingIngredientError,
    NotFoundError,
    NutritionEngineError,
    UnsupportedModelError,
    ValidationError,
)
from nutrition_engine.domain.goals import NutritionGoal
from nutrition_engine.domain.nutrition import NutrientProfile
from nutrition_engine.services.recommendation import compute_recommendation

_ERROR_STATUS: list[tuple[type[NutritionEngineError], int]] = [
    (NotFoundError, 404),
    (UnsupportedModelError, 400),
    (ValidationError, 422),
    (EmptyRecipeError, 422),
    (MissingIngredientError, 422),
]


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(NutritionEngineError)
    async def engine_error_handler(
        request: Request, exc: NutritionEngineError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        logger.info(
            "Rejected %s %s: %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc,
        )
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/users/{user_id}/diet/calculate")
    async def calculate_diet(
        user_id: UUID, payload: DietCalculationRequest, request: Request
    ) -> dict[str, object]:
        """Run a protocol-based diet model for the user's profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile(user_id)
        result = state_container.diet_registry.calculate(
            payload.diet_model, profile, payload.protocol
        )
        return {"result": result}

    @app.post("/users/{user_id}/goals/recommendation")
    async def recommend_goal(
        user_id: UUID, payload: RecommendationRequest, request: Request
    ) -> dict[str, object]:
        """Return recommended targets without storing a goal."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile(user_id)
        recommendation = compute_recommendation(
            profile,
            target_weight_kg=payload.target_weight,
            weeks_to_goal=payload.weeks_to_goal,
            current_weight_kg=payload.weight,
        )
        return {"recommendation": recommendation}

    @app.post("/users/{user_id}/goals", status_code=status.HTTP_201_CREATED)
    async def create_goal(
        user_id: UUID, payload: CreateGoalRequest, request: Request
    ) -> dict[str, object]:
        """Create a manual goal and make it the only active one."""
        state_container: AppContainer = request.app.state.container
        goal = state_container.goal_manager.create_goal(
            NutritionGoal(
                user_id=user_id,
                calories=payload.calories,
                protein_g=payload.protein_g,
                carbs_g=payload.carbs_g,
                fat_g=payload.fat_g,
                fiber_g=payload.fiber_g,
                start_date=payload.start_date or _today(),
                end_date=payload.end_date,
            )
        )
        return {"goal": goal}

    @app.post("/users/{user_id}/goals/calculated", status_code=status.HTTP_201_CREATED)
    async def create_calculated_goal(
        user_id: UUID, payload: CalculatedGoalRequest, request: Request
    ) -> dict[str, object]:
        """Calculate a diet model and store one of its phases as the goal."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile(user_id)
        result = state_container.diet_registry.calculate(
            payload.diet_model, profile, payload.protocol
        )
        goal = state_container.goal_manager.create_calculated_goal(
            user_id,
            result,
            phase_number=payload.phase,
            start_date=payload.start_date or _today(),
            phase_duration_days=payload.phase_duration_days,
        )
        return {"goal": goal, "result": result}

    @app.get("/users/{user_id}/goals/active")
    async def active_goal(user_id: UUID, request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return {"goal": state_container.goal_manager.get_active_goal(user_id)}

    @app.get("/users/{user_id}/goals")
    async def list_goals(
        user_id: UUID, request: Request, on: date | None = None
    ) -> dict[str, object]:
        """List goals, or return the goal in effect on a given date."""
        state_container: AppContainer = request.app.state.container
        if on is not None:
            return {"goal": state_container.goal_manager.get_goal_for_date(user_id, on)}
        return {"goals": state_container.goal_manager.list_goals(user_id)}

    @app.patch("/users/{user_id}/goals/{goal_id}")
    async def update_goal(
        user_id: UUID, goal_id: UUID, payload: UpdateGoalRequest, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        goal = state_container.goal_manager.update_goal(
            user_id, goal_id, payload.model_dump(exclude_none=True)
        )
        return {"goal": goal}

    @app.delete(
        "/users/{user_id}/goals/{goal_id}", status_code=status.HTTP_204_NO_CONTENT
    )
    async def delete_goal(user_id: UUID, goal_id: UUID, request: Request) -> None:
        state_container: AppContainer = request.app.state.container
        state_container.goal_manager.delete_goal(user_id, goal_id)

    @app.post("/users/{user_id}/diary/entries", status_code=status.HTTP_201_CREATED)
    async def create_entry(
        user_id: UUID, payload: DiaryEntryRequest, request: Request
    ) -> dict[str, object]:
        """Log a food, recipe portion or inline item."""
        state_container: AppContainer = request.app.state.container
        diary = state_container.diary_service
        entry_date = payload.entry_date or _today()
        if payload.food_id is not None:
            entry = diary.log_food(
                user_id,
                payload.food_id,
                payload.quantity_grams,
                entry_date,
                payload.meal_type,
                notes=payload.notes,
            )
        elif payload.recipe_id is not None:
            custom = {
                item.food_id: item.quantity_grams for item in payload.custom_ingredients
            }
            entry = diary.log_recipe(
                user_id,
                payload.recipe_id,
                payload.quantity_grams,
                entry_date,
                payload.meal_type,
                custom_quantities=custom or None,
                notes=payload.notes,
            )
        elif payload.inline_food is not None:
            inline = payload.inline_food
            entry = diary.log_inline(
                user_id,
                inline.name,
                NutrientProfile(
                    calories=inline.calories,
                    protein_g=inline.protein_g,
                    carbs_g=inline.carbs_g,
                    fat_g=inline.fat_g,
                    fiber_g=inline.fiber_g,
                ),
                payload.quantity_grams,
                entry_date,
                payload.meal_type,
                notes=payload.notes,
            )
        else:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="One of food_id, recipe_id or inline_food is required",
            )
        return {"entry": entry}

    @app.patch("/users/{user_id}/diary/entries/{entry_id}")
    async def update_entry(
        user_id: UUID, entry_id: UUID, payload: UpdateEntryRequest, request: Request
    ) -> dict[str, object]:
        """Change an entry's quantity using its stored nutrients."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.diary_service.update_entry_quantity(
            user_id, entry_id, payload.quantity_grams
        )
        return {"entry": entry}

    @app.get("/users/{user_id}/diary/summary/{day}")
    async def daily_summary(
        user_id: UUID, day: date, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return {"summary": state_container.diary_service.daily_summary(user_id, day)}

    return app


def _status_for(exc: NutritionEngineError) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _today() -> date:
    return datetime.now(tz=UTC).date()
