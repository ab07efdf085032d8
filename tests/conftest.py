"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from testosterone_suite.config import Settings
from testosterone_suite.containers import AppContainer
from testosterone_suite.domain.labs import LabLocation, LabResult
from testosterone_suite.domain.meals import DayMacros, MealPlan, PriceTier
from testosterone_suite.domain.sleep import SleepLog
from testosterone_suite.domain.workouts import (
    GeneratedProgram,
    UserAssessment,
    WorkoutProgram,
)
from testosterone_suite.services.catalog import (
    MealCatalog,
    load_exercise_catalog,
    load_meal_catalog,
)
from testosterone_suite.services.lab_locations import (
    LabDirectoryService,
    LabLocationRepository,
)
from testosterone_suite.services.labs import LabResultRepository, LabResultService
from testosterone_suite.services.meal_plans import (
    MealPlanRepository,
    MealPlanService,
)
from testosterone_suite.services.sleep import SleepLogRepository, SleepLogService
from testosterone_suite.services.workouts import (
    WorkoutProgramRepository,
    WorkoutProgramService,
)


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    """In-memory meal plan repository for tests."""

    plans: dict[UUID, MealPlan] = field(default_factory=dict)
    upserts: int = 0

    def get_plan(self, user_id: UUID) -> MealPlan | None:
        return self.plans.get(user_id)

    def upsert_plan(self, user_id: UUID, plan: MealPlan) -> None:
        self.upserts += 1
        self.plans[user_id] = plan

    def delete_plan(self, user_id: UUID) -> None:
        self.plans.pop(user_id, None)


@dataclass
class InMemoryWorkoutProgramRepository(WorkoutProgramRepository):
    """In-memory workout program repository for tests."""

    programs: list[WorkoutProgram] = field(default_factory=list)

    def get_active_program(self, user_id: UUID) -> WorkoutProgram | None:
        for program in reversed(self.programs):
            if program.user_id == user_id and program.is_active:
                return program
        return None

    def replace_program(
        self,
        user_id: UUID,
        assessment: UserAssessment,
        program: GeneratedProgram,
    ) -> WorkoutProgram:
        self.delete_programs(user_id)
        stored = WorkoutProgram(
            id=uuid4(),
            user_id=user_id,
            assessment=assessment,
            program=program,
            is_active=True,
            created_at=datetime.now(tz=UTC),
        )
        self.programs.append(stored)
        return stored

    def delete_programs(self, user_id: UUID) -> None:
        self.programs = [p for p in self.programs if p.user_id != user_id]


@dataclass
class InMemoryLabResultRepository(LabResultRepository):
    """In-memory lab result repository for tests."""

    results: dict[UUID, list[LabResult]] = field(default_factory=dict)

    def list_results(self, user_id: UUID) -> list[LabResult]:
        return sorted(
            self.results.get(user_id, []),
            key=lambda result: result.test_date,
            reverse=True,
        )

    def create_result(self, user_id: UUID, result: LabResult) -> LabResult:
        stored = replace(result, id=uuid4())
        self.results.setdefault(user_id, []).append(stored)
        return stored

    def delete_result(self, user_id: UUID, result_id: UUID) -> None:
        self.results[user_id] = [
            result for result in self.results.get(user_id, []) if result.id != result_id
        ]


@dataclass
class InMemorySleepLogRepository(SleepLogRepository):
    """In-memory sleep log repository for tests."""

    logs: dict[UUID, list[SleepLog]] = field(default_factory=dict)

    def list_logs(self, user_id: UUID, limit: int) -> list[SleepLog]:
        ordered = sorted(
            self.logs.get(user_id, []), key=lambda log: log.date, reverse=True
        )
        return ordered[:limit]

    def upsert_log(self, user_id: UUID, log: SleepLog) -> SleepLog:
        existing = [item for item in self.logs.get(user_id, []) if item.date != log.date]
        stored = replace(log, id=uuid4())
        self.logs[user_id] = [*existing, stored]
        return stored

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        self.logs[user_id] = [
            log for log in self.logs.get(user_id, []) if log.id != log_id
        ]


@dataclass
class InMemoryLabLocationRepository(LabLocationRepository):
    """In-memory directory of verified labs for tests."""

    labs: list[LabLocation] = field(default_factory=list)

    def list_verified_labs(self) -> list[LabLocation]:
        return sorted(self.labs, key=lambda lab: (lab.city, lab.name))

    def list_labs_by_city(self, city: str) -> list[LabLocation]:
        return sorted(
            (lab for lab in self.labs if lab.city == city), key=lambda lab: lab.name
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def meal_catalog() -> MealCatalog:
    return load_meal_catalog()


@pytest.fixture
def standard_target() -> DayMacros:
    return DayMacros(calories=2500, protein_g=150, carbs_g=280, fat_g=90)


@pytest.fixture
def standard_budget() -> PriceTier:
    return PriceTier.STANDARD


@pytest.fixture
def meal_plan_repository() -> InMemoryMealPlanRepository:
    return InMemoryMealPlanRepository()


@pytest.fixture
def workout_program_repository() -> InMemoryWorkoutProgramRepository:
    return InMemoryWorkoutProgramRepository()


@pytest.fixture
def lab_result_repository() -> InMemoryLabResultRepository:
    return InMemoryLabResultRepository()


@pytest.fixture
def sleep_log_repository() -> InMemorySleepLogRepository:
    return InMemorySleepLogRepository()


@pytest.fixture
def lab_location_repository() -> InMemoryLabLocationRepository:
    return InMemoryLabLocationRepository(
        labs=[
            LabLocation(
                name="Цибалаб",
                city="София",
                address="бул. Витоша 100",
                phone="02 123 456",
                hours="Пон-Пет: 07:00-19:00",
                no_appointment=True,
                chain="Цибалаб",
            ),
            LabLocation(
                name="Бодимед",
                city="София",
                address="ул. Граф Игнатиев 5",
                phone="02 987 654",
                hours="Пон-Пет: 07:30-18:00",
            ),
            LabLocation(
                name="Рамус",
                city="Пловдив",
                address="ул. Гладстон 12",
                phone="032 111 222",
                hours="Пон-Пет: 07:00-17:00, Съб: 08:00-12:00",
            ),
        ]
    )


@pytest.fixture
def meal_plan_service(
    meal_plan_repository: InMemoryMealPlanRepository, meal_catalog: MealCatalog
) -> MealPlanService:
    return MealPlanService(repository=meal_plan_repository, catalog=meal_catalog)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    meal_catalog: MealCatalog,
    meal_plan_service: MealPlanService,
    workout_program_repository: InMemoryWorkoutProgramRepository,
    lab_result_repository: InMemoryLabResultRepository,
    sleep_log_repository: InMemorySleepLogRepository,
    lab_location_repository: InMemoryLabLocationRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        meal_catalog=meal_catalog,
        exercises=load_exercise_catalog(),
        meal_plan_service=meal_plan_service,
        workout_program_service=WorkoutProgramService(
            repository=workout_program_repository,
            exercises=load_exercise_catalog(),
        ),
        lab_result_service=LabResultService(lab_result_repository),
        sleep_log_service=SleepLogService(sleep_log_repository),
        lab_directory_service=LabDirectoryService(lab_location_repository),
    )
