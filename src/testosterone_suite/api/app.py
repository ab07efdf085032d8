"""FastAPI application factory."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from testosterone_suite.api.schemas import (
    InterpretRequest,
    LabResultRequest,
    MacroRequest,
    MealPlanRequest,
    ShoppingItemRequest,
    SleepLogRequest,
    SleepRoutineRequest,
    SwapMealRequest,
    WeightEntryRequest,
    WorkoutAssessmentRequest,
)
from testosterone_suite.app_logging import configure_logging
from testosterone_suite.containers import AppContainer
from testosterone_suite.domain.labs import InterpretationInput, LabResult
from testosterone_suite.domain.meals import MealPlan, MealSlot, WeightEntry
from testosterone_suite.domain.sleep import SleepAssessment, SleepLog
from testosterone_suite.domain.workouts import UserAssessment
from testosterone_suite.services.catalog import CatalogConfigurationError
from testosterone_suite.services.exercise_guide import filter_exercises, find_exercise
from testosterone_suite.services.labs import interpret_results
from testosterone_suite.services.macros import calculate_macros
from testosterone_suite.services.meal_plans import MealPlanNotFoundError
from testosterone_suite.services.sleep import (
    default_checklist_items,
    generate_evening_routine,
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Testosterone Suite")
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/macros")
    async def macros(payload: MacroRequest) -> dict[str, object]:
        """Return the daily calorie and macro target."""
        return {
            "macros": calculate_macros(
                payload.age,
                payload.weight_kg,
                payload.height_cm,
                payload.activity_level,
                payload.goal,
            )
        }

    @app.post("/users/{user_id}/meal-plan", status_code=status.HTTP_201_CREATED)
    async def create_meal_plan(
        user_id: UUID, payload: MealPlanRequest, request: Request
    ) -> dict[str, object]:
        """Generate and store a new meal plan."""
        state_container: AppContainer = request.app.state.container
        try:
            plan = state_container.meal_plan_service.create_plan(
                user_id=user_id,
                age=payload.age,
                weight_kg=payload.weight_kg,
                height_cm=payload.height_cm,
                activity_level=payload.activity_level,
                goal=payload.goal,
                budget=payload.budget,
            )
        except CatalogConfigurationError as exc:
            logger.exception("Failed to generate meal plan for %s", user_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
            ) from exc
        return {"meal_plan": plan}

    @app.get("/users/{user_id}/meal-plan")
    async def get_meal_plan(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the stored meal plan."""
        state_container: AppContainer = request.app.state.container
        plan = state_container.meal_plan_service.get_plan(user_id)
        if plan is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"meal_plan": plan}

    @app.delete("/users/{user_id}/meal-plan")
    async def delete_meal_plan(user_id: UUID, request: Request) -> dict[str, str]:
        """Delete the stored meal plan."""
        state_container: AppContainer = request.app.state.container
        state_container.meal_plan_service.delete_plan(user_id)
        return {"status": "deleted"}

    @app.get("/users/{user_id}/meal-plan/quality")
    async def meal_plan_quality(user_id: UUID, request: Request) -> dict[str, object]:
        """Return accuracy and variety of the stored plan."""
        state_container: AppContainer = request.app.state.container
        quality = state_container.meal_plan_service.plan_quality(user_id)
        if quality is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"quality": quality}

    @app.get("/users/{user_id}/meal-plan/shopping-list")
    async def shopping_list(
        user_id: UUID, request: Request, week: int = 1
    ) -> dict[str, object]:
        """Return the categorized shopping list for a plan week."""
        if week < 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Week starts at 1"
            )
        state_container: AppContainer = request.app.state.container
        service = state_container.meal_plan_service
        categories = service.shopping_list(user_id, week)
        if categories is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {
            "week": week,
            "categories": categories,
            "checked": service.checked_shopping_items(user_id, week),
        }

    @app.put("/users/{user_id}/meal-plan/shopping-list/items")
    async def mark_shopping_item(
        user_id: UUID, payload: ShoppingItemRequest, request: Request
    ) -> dict[str, object]:
        """Mark a shopping list entry as bought or not bought."""
        state_container: AppContainer = request.app.state.container
        with _plan_errors():
            checked = state_container.meal_plan_service.set_shopping_item(
                user_id, payload.week, payload.item, payload.checked
            )
        return {"week": payload.week, "checked": checked}

    @app.get("/users/{user_id}/meal-plan/days/{day}/{slot}/alternatives")
    async def meal_alternatives(
        user_id: UUID, day: int, slot: MealSlot, request: Request
    ) -> dict[str, object]:
        """Return meals with similar macros for a planned slot."""
        state_container: AppContainer = request.app.state.container
        with _plan_errors():
            meals = state_container.meal_plan_service.alternatives(user_id, day, slot)
        return {"alternatives": meals}

    @app.put("/users/{user_id}/meal-plan/days/{day}/{slot}")
    async def swap_meal(
        user_id: UUID,
        day: int,
        slot: MealSlot,
        payload: SwapMealRequest,
        request: Request,
    ) -> dict[str, object]:
        """Replace the meal planned for a slot."""
        state_container: AppContainer = request.app.state.container
        with _plan_errors():
            plan = state_container.meal_plan_service.swap_meal(
                user_id, day, slot, payload.meal_name
            )
        return {"day": _day_payload(plan, day)}

    @app.post("/users/{user_id}/meal-plan/weight")
    async def add_weight(
        user_id: UUID, payload: WeightEntryRequest, request: Request
    ) -> dict[str, object]:
        """Record a weight measurement on the stored plan."""
        state_container: AppContainer = request.app.state.container
        with _plan_errors():
            plan = state_container.meal_plan_service.add_weight_entry(
                user_id, WeightEntry(date=payload.date, weight_kg=payload.weight_kg)
            )
        return {"weight_entries": plan.weight_entries}

    @app.post("/users/{user_id}/workout-program", status_code=status.HTTP_201_CREATED)
    async def create_workout_program(
        user_id: UUID, payload: WorkoutAssessmentRequest, request: Request
    ) -> dict[str, object]:
        """Generate and store a four-week program."""
        state_container: AppContainer = request.app.state.container
        program = state_container.workout_program_service.create_program(
            user_id,
            UserAssessment(
                fitness_level=payload.fitness_level,
                goal=payload.goal,
                days_per_week=payload.days_per_week,
                equipment=payload.equipment,
                injuries=payload.injuries,
            ),
        )
        return {"program": program}

    @app.get("/users/{user_id}/workout-program")
    async def get_workout_program(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the active workout program."""
        state_container: AppContainer = request.app.state.container
        program = state_container.workout_program_service.get_active_program(user_id)
        if program is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"program": program}

    @app.delete("/users/{user_id}/workout-program")
    async def delete_workout_program(user_id: UUID, request: Request) -> dict[str, str]:
        """Delete the user's workout programs."""
        state_container: AppContainer = request.app.state.container
        state_container.workout_program_service.delete_programs(user_id)
        return {"status": "deleted"}

    @app.post("/users/{user_id}/lab-results", status_code=status.HTTP_201_CREATED)
    async def add_lab_result(
        user_id: UUID, payload: LabResultRequest, request: Request
    ) -> dict[str, object]:
        """Store a lab result."""
        state_container: AppContainer = request.app.state.container
        result = state_container.lab_result_service.add_result(
            user_id, LabResult(**payload.model_dump())
        )
        return {"result": result}

    @app.get("/users/{user_id}/lab-results")
    async def list_lab_results(user_id: UUID, request: Request) -> dict[str, object]:
        """Return stored results with the overall change."""
        state_container: AppContainer = request.app.state.container
        service = state_container.lab_result_service
        return {
            "results": service.list_results(user_id),
            "improvement": service.improvement(user_id),
        }

    @app.get("/users/{user_id}/lab-results/interpretation")
    async def interpret_latest_lab_result(
        user_id: UUID, age: int, request: Request
    ) -> dict[str, object]:
        """Interpret the newest stored result."""
        state_container: AppContainer = request.app.state.container
        interpretation = state_container.lab_result_service.interpret_latest(
            user_id, age
        )
        if interpretation is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"interpretation": interpretation}

    @app.delete("/users/{user_id}/lab-results/{result_id}")
    async def delete_lab_result(
        user_id: UUID, result_id: UUID, request: Request
    ) -> dict[str, str]:
        """Delete a stored result."""
        state_container: AppContainer = request.app.state.container
        state_container.lab_result_service.delete_result(user_id, result_id)
        return {"status": "deleted"}

    @app.post("/lab-results/interpret")
    async def interpret_lab_result(payload: InterpretRequest) -> dict[str, object]:
        """Interpret a result without storing it."""
        return {
            "interpretation": interpret_results(
                InterpretationInput(**payload.model_dump())
            )
        }

    @app.post("/users/{user_id}/sleep-logs", status_code=status.HTTP_201_CREATED)
    async def log_sleep(
        user_id: UUID, payload: SleepLogRequest, request: Request
    ) -> dict[str, object]:
        """Log a night of sleep."""
        state_container: AppContainer = request.app.state.container
        log = state_container.sleep_log_service.log_night(
            user_id,
            SleepLog(
                date=payload.date,
                bedtime=payload.bedtime,
                waketime=payload.waketime,
                quality=payload.quality,
                hours=0.0,
                notes=payload.notes,
            ),
        )
        return {"log": log}

    @app.get("/users/{user_id}/sleep-logs")
    async def list_sleep_logs(
        user_id: UUID, request: Request, limit: int = 30
    ) -> dict[str, object]:
        """Return recent sleep logs."""
        state_container: AppContainer = request.app.state.container
        return {"logs": state_container.sleep_log_service.list_logs(user_id, limit)}

    @app.get("/users/{user_id}/sleep-logs/stats")
    async def sleep_stats(user_id: UUID, request: Request) -> dict[str, object]:
        """Return rolling sleep averages."""
        state_container: AppContainer = request.app.state.container
        return {"stats": state_container.sleep_log_service.stats(user_id)}

    @app.delete("/users/{user_id}/sleep-logs/{log_id}")
    async def delete_sleep_log(
        user_id: UUID, log_id: UUID, request: Request
    ) -> dict[str, str]:
        """Delete a sleep log."""
        state_container: AppContainer = request.app.state.container
        state_container.sleep_log_service.delete_log(user_id, log_id)
        return {"status": "deleted"}

    @app.post("/sleep/routine")
    async def sleep_routine(payload: SleepRoutineRequest) -> dict[str, object]:
        """Return the evening routine for a bedtime."""
        return {
            "routine": generate_evening_routine(SleepAssessment(**payload.model_dump()))
        }

    @app.get("/sleep/checklist")
    async def sleep_checklist() -> dict[str, object]:
        """Return the bedroom checklist."""
        return {"items": default_checklist_items()}

    @app.get("/exercises")
    async def list_exercises(
        request: Request, t_level: str | None = None, category: str | None = None
    ) -> dict[str, object]:
        """Browse the exercise catalog by testosterone benefit and category."""
        state_container: AppContainer = request.app.state.container
        return {
            "exercises": filter_exercises(
                state_container.exercises, t_level=t_level, category=category
            )
        }

    @app.get("/exercises/{exercise_id}")
    async def get_exercise(exercise_id: int, request: Request) -> dict[str, object]:
        """Return a catalog exercise with form cues and common mistakes."""
        state_container: AppContainer = request.app.state.container
        exercise = find_exercise(state_container.exercises, exercise_id)
        if exercise is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"exercise": exercise}

    @app.get("/labs")
    async def list_labs(
        request: Request, city: str | None = None, query: str | None = None
    ) -> dict[str, object]:
        """Return verified labs, optionally by city and search term."""
        state_container: AppContainer = request.app.state.container
        return {
            "labs": state_container.lab_directory_service.list_labs(
                city=city, query=query
            )
        }

    @app.get("/labs/cities")
    async def lab_cities(request: Request) -> dict[str, object]:
        """Return cities with their number of verified labs."""
        state_container: AppContainer = request.app.state.container
        return {"cities": state_container.lab_directory_service.cities()}

    return app


@contextmanager
def _plan_errors() -> Iterator[None]:
    """Map meal plan service errors to HTTP errors."""
    try:
        yield
    except MealPlanNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


def _day_payload(plan: MealPlan, day: int) -> object:
    for day_plan in plan.plan:
        if day_plan.day == day:
            return day_plan
    return None
