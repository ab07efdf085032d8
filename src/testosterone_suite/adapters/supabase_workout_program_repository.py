"""Supabase repository for workout programs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from testosterone_suite.domain.workouts import (
    Equipment,
    FitnessGoal,
    FitnessLevel,
    GeneratedProgram,
    ProgramExercise,
    UserAssessment,
    Week,
    WorkoutDay,
    WorkoutProgram,
)
from testosterone_suite.services.workouts import WorkoutProgramRepository

_COLUMNS = (
    "id, user_id, program_name, description, selected_exercises, exercises_data, "
    "is_active, created_at"
)


@dataclass
class SupabaseWorkoutProgramRepository(WorkoutProgramRepository):
    """Supabase implementation for workout programs."""

    client: Client

    def get_active_program(self, user_id: UUID) -> WorkoutProgram | None:
        """Return the newest active program for a user."""
        response = (
            self.client.table("workout_programs_app")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("is_active", True)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_program(response.data[0])

    def replace_program(
        self,
        user_id: UUID,
        assessment: UserAssessment,
        program: GeneratedProgram,
    ) -> WorkoutProgram:
        """Delete the user's programs and insert the new active one."""
        self.delete_programs(user_id)
        response = (
            self.client.table("workout_programs_app")
            .insert(
                {
                    "user_id": str(user_id),
                    "program_name": program.program_name,
                    "description": program.description,
                    "selected_exercises": program.selected_exercise_ids,
                    "exercises_data": {
                        "assessment": _serialize_assessment(assessment),
                        "reasoning": program.reasoning,
                        "weeks": [_serialize_week(week) for week in program.weeks],
                    },
                    "is_active": True,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save workout program")
        return _parse_program(response.data[0])

    def delete_programs(self, user_id: UUID) -> None:
        """Delete every program of a user."""
        self.client.table("workout_programs_app").delete().eq(
            "user_id", str(user_id)
        ).execute()


def _serialize_assessment(assessment: UserAssessment) -> dict[str, object]:
    return {
        "fitness_level": assessment.fitness_level.value,
        "goal": assessment.goal.value,
        "days_per_week": assessment.days_per_week,
        "equipment": assessment.equipment.value,
        "injuries": assessment.injuries,
    }


def _serialize_week(week: Week) -> dict[str, object]:
    return {
        "week_number": week.week_number,
        "days": [
            {
                "day_number": day.day_number,
                "day_name": day.day_name,
                "is_rest_day": day.is_rest_day,
                "focus": day.focus,
                "exercises": [
                    {
                        "exercise_id": exercise.exercise_id,
                        "name": exercise.name,
                        "category": exercise.category,
                        "sets": exercise.sets,
                        "reps": exercise.reps,
                        "rest": exercise.rest,
                    }
                    for exercise in day.exercises
                ],
            }
            for day in week.days
        ],
    }


def _parse_program(row: dict[str, object]) -> WorkoutProgram:
    data = row.get("exercises_data") or {}
    assessment = data.get("assessment") or {}
    created_at = row.get("created_at")
    return WorkoutProgram(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        assessment=UserAssessment(
            fitness_level=FitnessLevel(assessment.get("fitness_level", "beginner")),
            goal=FitnessGoal(assessment.get("goal", "general")),
            days_per_week=int(assessment.get("days_per_week", 3)),
            equipment=Equipment(assessment.get("equipment", "full-gym")),
            injuries=assessment.get("injuries"),
        ),
        program=GeneratedProgram(
            weeks=[_parse_week(week) for week in data.get("weeks", [])],
            program_name=str(row.get("program_name", "")),
            description=str(row.get("description") or ""),
            reasoning=str(data.get("reasoning", "")),
            selected_exercise_ids=[int(i) for i in row.get("selected_exercises") or []],
        ),
        is_active=bool(row.get("is_active", False)),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )


def _parse_week(row: dict[str, object]) -> Week:
    return Week(
        week_number=int(row["week_number"]),
        days=[
            WorkoutDay(
                day_number=int(day["day_number"]),
                day_name=str(day["day_name"]),
                is_rest_day=bool(day["is_rest_day"]),
                focus=str(day["focus"]),
                exercises=[
                    ProgramExercise(
                        exercise_id=int(exercise["exercise_id"]),
                        name=str(exercise["name"]),
                        category=str(exercise["category"]),
                        sets=str(exercise["sets"]),
                        reps=str(exercise["reps"]),
                        rest=str(exercise["rest"]),
                    )
                    for exercise in day.get("exercises", [])
                ],
            )
            for day in row.get("days", [])
        ],
    )
