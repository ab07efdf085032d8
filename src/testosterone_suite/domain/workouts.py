"""Domain models for workout programs."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class FitnessLevel(StrEnum):
    """Training experience."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class FitnessGoal(StrEnum):
    """Training goal."""

    STRENGTH = "strength"
    MUSCLE = "muscle"
    FAT_LOSS = "fat-loss"
    ATHLETIC = "athletic"
    GENERAL = "general"


class Equipment(StrEnum):
    """Equipment a trainee has access to."""

    FULL_GYM = "full-gym"
    BARBELL_ONLY = "barbell-only"
    MINIMAL = "minimal"
    BODYWEIGHT = "bodyweight"


class Movement(StrEnum):
    """Movement pattern tag of an exercise."""

    COMPOUND = "compound"
    ISOLATION = "isolation"
    UNILATERAL = "unilateral"


class EquipmentType(StrEnum):
    """Equipment an exercise needs."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    MACHINE = "machine"
    CABLE = "cable"
    BODYWEIGHT = "bodyweight"


@dataclass(frozen=True)
class Exercise:
    """Catalog exercise."""

    id: int
    name: str
    category: str
    testosterone_benefit: str
    movement: Movement
    equipment: EquipmentType
    sets: str
    reps: str
    rest: str
    testosterone_why: str = ""
    form: tuple[str, ...] = ()
    mistakes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProgramExercise:
    """An exercise scheduled for a week with that week's volume."""

    exercise_id: int
    name: str
    category: str
    sets: str
    reps: str
    rest: str


@dataclass(frozen=True)
class WorkoutDay:
    """One day of a program week."""

    day_number: int
    day_name: str
    is_rest_day: bool
    focus: str
    exercises: list[ProgramExercise]


@dataclass(frozen=True)
class Week:
    """One week of a program."""

    week_number: int
    days: list[WorkoutDay]


@dataclass(frozen=True)
class UserAssessment:
    """Answers used to build a program."""

    fitness_level: FitnessLevel
    goal: FitnessGoal
    days_per_week: int
    equipment: Equipment
    injuries: str | None = None


@dataclass(frozen=True)
class GeneratedProgram:
    """Output of the program generator."""

    weeks: list[Week]
    program_name: str
    description: str
    reasoning: str
    selected_exercise_ids: list[int]


@dataclass(frozen=True)
class WorkoutProgram:
    """A stored workout program."""

    id: UUID
    user_id: UUID
    assessment: UserAssessment
    program: GeneratedProgram
    is_active: bool
    created_at: datetime | None = None
