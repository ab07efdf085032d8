"""Four-week workout program generation."""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from testosterone_suite.domain.workouts import (
    Equipment,
    EquipmentType,
    Exercise,
    FitnessGoal,
    FitnessLevel,
    GeneratedProgram,
    Movement,
    ProgramExercise,
    UserAssessment,
    Week,
    WorkoutDay,
    WorkoutProgram,
)

_logger = logging.getLogger(__name__)

PROGRAM_WEEKS = 4
HIGH_BENEFIT = "Висок"
REST_FOCUS = "Почивка"

LEGS = "Крака"
BACK = "Гръб"
CHEST = "Гръд"
SHOULDERS = "Рамене"
CORE = "Кор"

DAY_NAMES = (
    "Понеделник",
    "Вторник",
    "Сряда",
    "Четвъртък",
    "Петък",
    "Събота",
    "Неделя",
)

ESSENTIAL_BEGINNER_IDS = (1, 2, 3, 4, 5)
ADVANCED_EXERCISE_IDS = frozenset({9, 11, 18})
DEFAULT_EXERCISE_COUNT = 8

_HEAVY_COUNTS = {2: 6, 3: 8, 4: 10, 5: 10, 6: 10}
_CONDITIONING_COUNTS = {2: 6, 3: 8, 4: 9, 5: 10, 6: 10}


@dataclass(frozen=True)
class GoalPriority:
    """Selection preferences for a training goal."""

    preferred_benefit: str | None
    preferred_categories: tuple[str, ...]
    exercise_count: dict[int, int]


GOAL_PRIORITIES: dict[FitnessGoal, GoalPriority] = {
    FitnessGoal.STRENGTH: GoalPriority(HIGH_BENEFIT, (LEGS, BACK), _HEAVY_COUNTS),
    FitnessGoal.MUSCLE: GoalPriority(HIGH_BENEFIT, (LEGS, BACK, CHEST), _HEAVY_COUNTS),
    FitnessGoal.FAT_LOSS: GoalPriority(
        HIGH_BENEFIT, (LEGS, BACK, CHEST), _CONDITIONING_COUNTS
    ),
    FitnessGoal.ATHLETIC: GoalPriority(
        HIGH_BENEFIT, (LEGS, BACK, CORE), _CONDITIONING_COUNTS
    ),
    FitnessGoal.GENERAL: GoalPriority(None, (), _CONDITIONING_COUNTS),
}

EQUIPMENT_ACCESS: dict[Equipment, frozenset[EquipmentType]] = {
    Equipment.FULL_GYM: frozenset(EquipmentType),
    Equipment.BARBELL_ONLY: frozenset(
        {EquipmentType.BARBELL, EquipmentType.BODYWEIGHT}
    ),
    Equipment.MINIMAL: frozenset({EquipmentType.DUMBBELL, EquipmentType.BODYWEIGHT}),
    Equipment.BODYWEIGHT: frozenset({EquipmentType.BODYWEIGHT}),
}

WORKOUT_DAY_INDICES: dict[int, tuple[int, ...]] = {
    2: (0, 3),
    3: (0, 2, 4),
    4: (0, 1, 3, 4),
    5: (0, 1, 2, 3, 4),
    6: (0, 1, 2, 3, 4, 5),
}

# Sets, reps and rest applied to every exercise of a week.
WEEKLY_VOLUME: dict[int, tuple[str, str, str]] = {
    1: ("3", "8-10", "90 сек"),
    2: ("4", "6-8", "2 мин"),
    3: ("3", "12-15", "60 сек"),
    4: ("2", "10-12", "90 сек"),
}

_GOAL_NAMES = {
    FitnessGoal.STRENGTH: "Сила",
    FitnessGoal.MUSCLE: "Мускулна маса",
    FitnessGoal.FAT_LOSS: "Отслабване",
    FitnessGoal.ATHLETIC: "Атлетизъм",
    FitnessGoal.GENERAL: "Обща форма",
}

_LEVEL_NAMES = {
    FitnessLevel.BEGINNER: "Начинаещи",
    FitnessLevel.INTERMEDIATE: "Среден",
    FitnessLevel.ADVANCED: "Напреднал",
}

_DESCRIPTIONS = {
    FitnessGoal.STRENGTH: (
        "Фокус на тежки многоставни движения с ниски повторения за максимална сила."
    ),
    FitnessGoal.MUSCLE: (
        "Балансирана програма за хипертрофия с умерен обем и интензитет."
    ),
    FitnessGoal.FAT_LOSS: (
        "Интензивна програма с метаболитен фокус за горене на мазнини."
    ),
    FitnessGoal.ATHLETIC: (
        "Взривни движения и функционална сила за спортна производителност."
    ),
    FitnessGoal.GENERAL: "Балансирана програма за обща физическа форма и здраве.",
}

_REASONS = {
    FitnessGoal.STRENGTH: (
        "Избрани са {count} многоставни упражнения с висок ефект върху "
        "тестостерона за максимален хормонален отговор и сила."
    ),
    FitnessGoal.MUSCLE: (
        "Подбрани {count} упражнения за балансиран мускулен растеж на всички "
        "основни групи."
    ),
    FitnessGoal.FAT_LOSS: (
        "{count} метаболитно интензивни упражнения за максимално изгаряне на калории."
    ),
    FitnessGoal.ATHLETIC: (
        "{count} функционални движения за взривна сила и спортна производителност."
    ),
    FitnessGoal.GENERAL: (
        "Балансирана селекция от {count} упражнения за цялостна физическа форма."
    ),
}


class WorkoutProgramRepository(Protocol):
    """Persistence interface for workout programs."""

    def get_active_program(self, user_id: UUID) -> WorkoutProgram | None:
        """Return the user's active program."""

    def replace_program(
        self,
        user_id: UUID,
        assessment: UserAssessment,
        program: GeneratedProgram,
    ) -> WorkoutProgram:
        """Drop the user's programs and store a new active one."""

    def delete_programs(self, user_id: UUID) -> None:
        """Delete all programs of the user."""


def select_program_exercises(
    catalog: Sequence[Exercise], assessment: UserAssessment
) -> list[Exercise]:
    """Pick the program's base exercises for the assessment."""
    priority = GOAL_PRIORITIES[assessment.goal]
    target_count = priority.exercise_count.get(
        assessment.days_per_week, DEFAULT_EXERCISE_COUNT
    )
    available = eligible_exercises(catalog, assessment)

    selected: list[Exercise] = []
    if assessment.fitness_level is FitnessLevel.BEGINNER:
        selected = [ex for ex in available if ex.id in ESSENTIAL_BEGINNER_IDS]

    selected_ids = {ex.id for ex in selected}
    remaining = [ex for ex in available if ex.id not in selected_ids]
    if priority.preferred_benefit:
        remaining = _partition(
            remaining, lambda ex: ex.testosterone_benefit == priority.preferred_benefit
        )
    if priority.preferred_categories:
        remaining = _partition(
            remaining, lambda ex: ex.category in priority.preferred_categories
        )
    needed = max(target_count - len(selected), 0)
    return selected + remaining[:needed]


def eligible_exercises(
    catalog: Sequence[Exercise], assessment: UserAssessment
) -> list[Exercise]:
    """Return catalog exercises allowed by equipment and level."""
    allowed = EQUIPMENT_ACCESS[assessment.equipment]
    exercises = [ex for ex in catalog if ex.equipment in allowed]
    if assessment.fitness_level is FitnessLevel.BEGINNER:
        exercises = [ex for ex in exercises if ex.id not in ADVANCED_EXERCISE_IDS]
    return exercises


def rotate_exercises_for_week(
    pool: Sequence[Exercise], week_number: int
) -> list[Exercise]:
    """Choose the week's exercises per muscle group.

    Week 1 favours heavy compounds, week 2 dumbbell and unilateral work,
    week 3 isolation and week 4 lighter compounds. Groups short of matches
    are filled from the rest of the pool in order.
    """
    matcher = _WEEK_RULES.get(week_number, _WEEK_RULES[1])
    core_count = 2 if week_number == 3 else 1
    legs_count = 3 if week_number == 3 else 2
    plan = ((CHEST, 2), (BACK, 3), (LEGS, legs_count), (SHOULDERS, 2), (CORE, core_count))

    week: list[Exercise] = []
    for category, count in plan:
        group = [ex for ex in pool if ex.category == category]
        chosen = [ex for ex in group if matcher(ex)][:count]
        if len(chosen) < count:
            chosen += [ex for ex in group if ex not in chosen][: count - len(chosen)]
        week.extend(chosen)
    return week


def split_exercises_by_days(
    exercises: list[Exercise], days_per_week: int
) -> list[tuple[str, list[Exercise]]]:
    """Split a week's exercises into (focus, exercises) templates."""
    push = [ex for ex in exercises if ex.category in (CHEST, SHOULDERS)]
    pull = [ex for ex in exercises if ex.category == BACK]
    legs = [ex for ex in exercises if ex.category == LEGS]
    core = [ex for ex in exercises if ex.category == CORE]

    if days_per_week == 2:
        half = math.ceil(len(exercises) / 2)
        templates = [("Цяло тяло", exercises[:half]), ("Цяло тяло", exercises[half:])]
    elif days_per_week == 3:
        templates = [
            ("Блъскащи (Гръд, Рамене)", push),
            ("Теглещи (Гръб, Бицепс)", pull),
            ("Крака и Кор", legs + core),
        ]
    elif days_per_week == 4:
        push_half = math.ceil(len(push) / 2)
        pull_half = math.ceil(len(pull) / 2)
        legs_half = math.ceil(len(legs) / 2)
        templates = [
            ("Горна част", push[:push_half] + pull[pull_half:]),
            ("Долна част", legs[:legs_half] + core[:1]),
            ("Горна част", push[push_half:] + pull[:pull_half]),
            ("Долна част", legs[legs_half:] + core[1:]),
        ]
    elif days_per_week == 5:
        templates = [
            ("Блъскащи", push),
            ("Теглещи", pull),
            ("Крака", legs),
            ("Горна част", push[:2] + pull[:2]),
            ("Кор и Кондиция", core),
        ]
    elif days_per_week == 6:
        legs_half = math.ceil(len(legs) / 2)
        templates = [
            ("Блъскащи", push),
            ("Теглещи", pull),
            ("Крака и Кор", legs[:legs_half] + core[:1]),
            ("Блъскащи", push),
            ("Теглещи", pull),
            ("Крака и Кор", legs[legs_half:] + core[1:]),
        ]
    else:
        templates = [("Цяло тяло", exercises)]
    return [(focus, items or list(exercises)) for focus, items in templates]


def apply_weekly_volume(exercise: Exercise, week_number: int) -> ProgramExercise:
    """Return the exercise with the week's sets, reps and rest."""
    sets, reps, rest = WEEKLY_VOLUME.get(week_number, WEEKLY_VOLUME[1])
    return ProgramExercise(
        exercise_id=exercise.id,
        name=exercise.name,
        category=exercise.category,
        sets=sets,
        reps=reps,
        rest=rest,
    )


def build_weeks(
    pool: Sequence[Exercise], days_per_week: int, weeks: int = PROGRAM_WEEKS
) -> list[Week]:
    """Lay out the program weeks with rest days."""
    active = WORKOUT_DAY_INDICES.get(days_per_week, WORKOUT_DAY_INDICES[3])
    result: list[Week] = []
    for week_number in range(1, weeks + 1):
        templates = split_exercises_by_days(
            rotate_exercises_for_week(pool, week_number), len(active)
        )
        days: list[WorkoutDay] = []
        for index, day_name in enumerate(DAY_NAMES):
            if index not in active:
                days.append(
                    WorkoutDay(
                        day_number=index + 1,
                        day_name=day_name,
                        is_rest_day=True,
                        focus=REST_FOCUS,
                        exercises=[],
                    )
                )
                continue
            focus, exercises = templates[active.index(index) % len(templates)]
            days.append(
                WorkoutDay(
                    day_number=index + 1,
                    day_name=day_name,
                    is_rest_day=False,
                    focus=focus,
                    exercises=[apply_weekly_volume(ex, week_number) for ex in exercises],
                )
            )
        result.append(Week(week_number=week_number, days=days))
    return result


def generate_workout_program(
    catalog: Sequence[Exercise], assessment: UserAssessment
) -> GeneratedProgram:
    """Generate a deterministic four-week program."""
    selected = select_program_exercises(catalog, assessment)
    selected_ids = {ex.id for ex in selected}
    pool = selected + [
        ex for ex in eligible_exercises(catalog, assessment) if ex.id not in selected_ids
    ]
    days = assessment.days_per_week
    return GeneratedProgram(
        weeks=build_weeks(pool, days),
        program_name=(
            f"{_GOAL_NAMES[assessment.goal]} - "
            f"{_LEVEL_NAMES[assessment.fitness_level]} ({days}x/седмица)"
        ),
        description=f"{_DESCRIPTIONS[assessment.goal]} {days} тренировки седмично.",
        reasoning=_REASONS[assessment.goal].format(count=len(selected)),
        selected_exercise_ids=[ex.id for ex in selected],
    )


def _partition(
    exercises: list[Exercise], predicate: Callable[[Exercise], bool]
) -> list[Exercise]:
    return [ex for ex in exercises if predicate(ex)] + [
        ex for ex in exercises if not predicate(ex)
    ]


_WEEK_RULES: dict[int, Callable[[Exercise], bool]] = {
    1: lambda ex: (
        ex.movement is Movement.COMPOUND
        and ex.testosterone_benefit == HIGH_BENEFIT
        and ex.equipment is not EquipmentType.DUMBBELL
    ),
    2: lambda ex: (
        ex.equipment is EquipmentType.DUMBBELL or ex.movement is Movement.UNILATERAL
    ),
    3: lambda ex: ex.movement is Movement.ISOLATION,
    4: lambda ex: (
        ex.movement is Movement.COMPOUND and ex.testosterone_benefit != HIGH_BENEFIT
    ),
}


@dataclass
class WorkoutProgramService:
    """Service that generates and stores workout programs."""

    repository: WorkoutProgramRepository
    exercises: Sequence[Exercise]

    def create_program(
        self, user_id: UUID, assessment: UserAssessment
    ) -> WorkoutProgram:
        """Generate a program and make it the user's only active one."""
        program = generate_workout_program(self.exercises, assessment)
        stored = self.repository.replace_program(user_id, assessment, program)
        _logger.info(
            "Generated workout program user_id=%s goal=%s days=%s exercises=%s",
            user_id,
            assessment.goal.value,
            assessment.days_per_week,
            len(program.selected_exercise_ids),
        )
        return stored

    def get_active_program(self, user_id: UUID) -> WorkoutProgram | None:
        """Return the user's active program."""
        return self.repository.get_active_program(user_id)

    def delete_programs(self, user_id: UUID) -> None:
        """Remove the user's programs."""
        self.repository.delete_programs(user_id)
