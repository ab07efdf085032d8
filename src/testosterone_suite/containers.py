"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from testosterone_suite.adapters.supabase_lab_location_repository import (
    SupabaseLabLocationRepository,
)
from testosterone_suite.adapters.supabase_lab_result_repository import (
    SupabaseLabResultRepository,
)
from testosterone_suite.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from testosterone_suite.adapters.supabase_sleep_log_repository import (
    SupabaseSleepLogRepository,
)
from testosterone_suite.adapters.supabase_workout_program_repository import (
    SupabaseWorkoutProgramRepository,
)
from testosterone_suite.config import Settings
from testosterone_suite.domain.workouts import Exercise
from testosterone_suite.services.catalog import (
    MealCatalog,
    load_exercise_catalog,
    load_meal_catalog,
)
from testosterone_suite.services.lab_locations import LabDirectoryService
from testosterone_suite.services.labs import LabResultService
from testosterone_suite.services.meal_plans import MealPlanService
from testosterone_suite.services.sleep import SleepLogService
from testosterone_suite.services.workouts import WorkoutProgramService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_catalog: MealCatalog
    exercises: tuple[Exercise, ...]
    meal_plan_service: MealPlanService
    workout_program_service: WorkoutProgramService
    lab_result_service: LabResultService
    sleep_log_service: SleepLogService
    lab_directory_service: LabDirectoryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_catalog = load_meal_catalog()
    exercises = load_exercise_catalog()
    meal_plan_service = MealPlanService(
        repository=SupabaseMealPlanRepository(supabase_client),
        catalog=meal_catalog,
        plan_days=resolved_settings.plan_days,
        max_repetitions=resolved_settings.max_meal_repetitions,
    )
    workout_program_service = WorkoutProgramService(
        repository=SupabaseWorkoutProgramRepository(supabase_client),
        exercises=exercises,
    )
    return AppContainer(
        settings=resolved_settings,
        meal_catalog=meal_catalog,
        exercises=exercises,
        meal_plan_service=meal_plan_service,
        workout_program_service=workout_program_service,
        lab_result_service=LabResultService(
            SupabaseLabResultRepository(supabase_client)
        ),
        sleep_log_service=SleepLogService(SupabaseSleepLogRepository(supabase_client)),
        lab_directory_service=LabDirectoryService(
            SupabaseLabLocationRepository(supabase_client)
        ),
    )
