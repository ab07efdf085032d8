"""Domain models for the sleep protocol."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class SleepAssessment:
    """Current sleep habits."""

    current_sleep_hours: float
    bedtime: str
    fall_asleep_minutes: int
    night_wakeups: int


@dataclass(frozen=True)
class RoutineStep:
    """A step of the evening routine."""

    time: str
    title: str
    description: str
    icon: str


@dataclass(frozen=True)
class BedroomChecklistItem:
    """A bedroom optimization item."""

    id: str
    title: str
    description: str
    completed: bool = False


@dataclass(frozen=True)
class SleepLog:
    """A logged night of sleep."""

    date: date
    bedtime: str
    waketime: str
    quality: int
    hours: float
    notes: str | None = None
    id: UUID | None = None


@dataclass(frozen=True)
class SleepStats:
    """Rolling sleep averages."""

    avg_7_day_quality: float
    avg_7_day_hours: float
    avg_30_day_quality: float
    avg_30_day_hours: float
