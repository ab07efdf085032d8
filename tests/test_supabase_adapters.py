"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field, replace
from datetime import date
from uuid import uuid4

import pytest

from testosterone_suite.adapters.supabase_lab_location_repository import (
    SupabaseLabLocationRepository,
)
from testosterone_suite.adapters.supabase_lab_result_repository import (
    SupabaseLabResultRepository,
)
from testosterone_suite.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
    serialize_meal_plan,
)
from testosterone_suite.adapters.supabase_sleep_log_repository import (
    SupabaseSleepLogRepository,
)
from testosterone_suite.adapters.supabase_workout_program_repository import (
    SupabaseWorkoutProgramRepository,
)
from testosterone_suite.domain.labs import LabResult
from testosterone_suite.domain.meals import ActivityLevel, Goal, PriceTier
from testosterone_suite.domain.sleep import SleepLog
from testosterone_suite.domain.workouts import (
    Equipment,
    FitnessGoal,
    FitnessLevel,
    UserAssessment,
)
from testosterone_suite.services.catalog import load_exercise_catalog
from testosterone_suite.services.workouts import generate_workout_program


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_on_conflict: str | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload, on_conflict: str | None = None) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_meal_plan_repository_roundtrip(meal_plan_service) -> None:
    user_id = uuid4()
    plan = meal_plan_service.create_plan(
        user_id=user_id,
        age=30,
        weight_kg=80,
        height_cm=180,
        activity_level=ActivityLevel.MODERATE,
        goal=Goal.MAINTAIN,
        budget=PriceTier.STANDARD,
    )
    plan = replace(plan, checked_items={1: ["ориз", "яйца"]})
    client = FakeSupabaseClient()
    plans_table = client.table("meal_plans_app")
    plans_table.queue("upsert", [{"user_id": str(user_id)}])

    repository = SupabaseMealPlanRepository(client)
    repository.upsert_plan(user_id, plan)

    assert plans_table.last_on_conflict == "user_id"
    stored = plans_table.last_payload["plan_data"]
    assert stored == serialize_meal_plan(plan)
    assert stored["plan"][0]["meals"]["snack"]["name"] == plan.plan[0].meals.snack.name

    plans_table.queue("select", [{"user_id": str(user_id), "plan_data": stored}])
    fetched = repository.get_plan(user_id)

    assert fetched is not None
    assert fetched.plan == plan.plan
    assert fetched.user_params == plan.user_params
    assert fetched.user_id == user_id
    assert fetched.checked_items == {1: ["ориз", "яйца"]}


def test_supabase_meal_plan_repository_missing_plan() -> None:
    repository = SupabaseMealPlanRepository(FakeSupabaseClient())

    assert repository.get_plan(uuid4()) is None


def test_supabase_meal_plan_repository_raises_when_upsert_fails(
    meal_plan_service,
) -> None:
    user_id = uuid4()
    plan = meal_plan_service.create_plan(
        user_id=user_id,
        age=30,
        weight_kg=80,
        height_cm=180,
        activity_level=ActivityLevel.LIGHT,
        goal=Goal.CUT,
        budget=PriceTier.BUDGET,
    )
    repository = SupabaseMealPlanRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError, match="Failed to save meal plan"):
        repository.upsert_plan(user_id, plan)


def test_supabase_workout_program_repository_replaces_programs() -> None:
    user_id = uuid4()
    assessment = UserAssessment(
        fitness_level=FitnessLevel.BEGINNER,
        goal=FitnessGoal.STRENGTH,
        days_per_week=3,
        equipment=Equipment.FULL_GYM,
    )
    program = generate_workout_program(load_exercise_catalog(), assessment)
    client = FakeSupabaseClient()
    programs_table = client.table("workout_programs_app")

    repository = SupabaseWorkoutProgramRepository(client)
    programs_table.queue("insert", [])
    with pytest.raises(RuntimeError, match="Failed to save workout program"):
        repository.replace_program(user_id, assessment, program)

    payload = programs_table.last_payload
    row = {
        "id": str(uuid4()),
        "user_id": str(user_id),
        "program_name": payload["program_name"],
        "description": payload["description"],
        "selected_exercises": payload["selected_exercises"],
        "exercises_data": payload["exercises_data"],
        "is_active": True,
        "created_at": "2024-01-01T10:00:00+00:00",
    }
    programs_table.queue("insert", [row])
    stored = repository.replace_program(user_id, assessment, program)

    assert programs_table.actions[-2:] == ["delete", "insert"]
    assert stored.program == program
    assert stored.assessment == assessment
    assert stored.is_active

    programs_table.queue("select", [row])
    active = repository.get_active_program(user_id)
    assert active is not None
    assert ("is_active", True) in programs_table.last_filters


def test_supabase_lab_result_repository() -> None:
    client = FakeSupabaseClient()
    results_table = client.table("lab_results_app")
    result_id = str(uuid4())
    row = {
        "id": result_id,
        "test_date": "2024-03-01",
        "total_t": "512.5",
        "free_t": None,
        "shbg": 41,
        "estradiol": None,
        "lh": None,
        "notes": "morning draw",
    }
    results_table.queue("insert", [row])
    results_table.queue("select", [row])

    repository = SupabaseLabResultRepository(client)
    created = repository.create_result(
        uuid4(), LabResult(test_date=date(2024, 3, 1), total_t=512.5, shbg=41)
    )
    listed = repository.list_results(uuid4())

    assert str(created.id) == result_id
    assert created.total_t == 512.5
    assert created.free_t is None
    assert created.shbg == 41.0
    assert listed == [created]

    repository.delete_result(uuid4(), created.id)
    assert ("id", result_id) in results_table.last_filters


def test_supabase_sleep_log_repository() -> None:
    client = FakeSupabaseClient()
    logs_table = client.table("sleep_logs_app")
    logs_table.queue(
        "upsert",
        [
            {
                "id": str(uuid4()),
                "log_date": "2024-02-01",
                "bedtime": "23:00:00",
                "waketime": "07:00:00",
                "quality": 8,
                "hours": 8.0,
                "notes": None,
            }
        ],
    )

    repository = SupabaseSleepLogRepository(client)
    stored = repository.upsert_log(
        uuid4(),
        SleepLog(
            date=date(2024, 2, 1),
            bedtime="23:00",
            waketime="07:00",
            quality=8,
            hours=8.0,
        ),
    )

    assert logs_table.last_on_conflict == "user_id,log_date"
    assert logs_table.last_payload["log_date"] == "2024-02-01"
    assert stored.bedtime == "23:00"
    assert stored.waketime == "07:00"
    assert stored.hours == 8.0
    assert repository.list_logs(uuid4(), 30) == []


def test_supabase_lab_location_repository() -> None:
    client = FakeSupabaseClient()
    labs_table = client.table("lab_locations_app")
    weekdays = ("monday", "tuesday", "wednesday", "thursday", "friday")
    labs_table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "name": "Цибалаб",
                "chain": None,
                "city": "Варна",
                "address": "ул. Приморска 3",
                "phone": None,
                "website": "https://example.bg",
                "latitude": "43.2",
                "longitude": 27.9,
                "google_maps_url": None,
                "working_hours": {day: "07:00-18:00" for day in weekdays},
                "no_appointment_needed": True,
                "google_rating": 4.6,
                "total_reviews": 120,
            }
        ],
    )

    repository = SupabaseLabLocationRepository(client)
    labs = repository.list_labs_by_city("Варна")

    assert ("city", "Варна") in labs_table.last_filters
    assert ("verified", True) in labs_table.last_filters
    assert len(labs) == 1
    lab = labs[0]
    assert lab.phone == "Няма данни"
    assert lab.hours == "Пон-Пет: 07:00-18:00"
    assert lab.no_appointment is True
    assert lab.latitude == 43.2
    assert lab.total_reviews == 120
    assert repository.list_verified_labs() == []
