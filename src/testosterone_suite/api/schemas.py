"""Pydantic models for API request payloads."""

from datetime import date

from pydantic import BaseModel, Field

from testosterone_suite.domain.meals import ActivityLevel, Goal, PriceTier
from testosterone_suite.domain.workouts import Equipment, FitnessGoal, FitnessLevel

CLOCK_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class MacroRequest(BaseModel):
    """Body parameters for a macro target."""

    age: int = Field(ge=18, le=100)
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    activity_level: ActivityLevel
    goal: Goal


class MealPlanRequest(MacroRequest):
    """Body parameters for generating a meal plan."""

    budget: PriceTier = PriceTier.STANDARD


class SwapMealRequest(BaseModel):
    """Replacement meal for a plan slot."""

    meal_name: str = Field(min_length=1)


class ShoppingItemRequest(BaseModel):
    """Bought state of a shopping list entry."""

    week: int = Field(ge=1)
    item: str = Field(min_length=1)
    checked: bool = True


class WeightEntryRequest(BaseModel):
    """Body weight measurement."""

    date: date
    weight_kg: float = Field(gt=0)


class WorkoutAssessmentRequest(BaseModel):
    """Answers used to generate a workout program."""

    fitness_level: FitnessLevel
    goal: FitnessGoal
    days_per_week: int = Field(ge=2, le=6)
    equipment: Equipment
    injuries: str | None = None


class LabResultRequest(BaseModel):
    """A hormone panel to store."""

    test_date: date
    total_t: float = Field(gt=0)
    free_t: float | None = Field(default=None, ge=0)
    shbg: float | None = Field(default=None, ge=0)
    estradiol: float | None = Field(default=None, ge=0)
    lh: float | None = Field(default=None, ge=0)
    notes: str | None = None


class InterpretRequest(BaseModel):
    """A hormone panel to interpret without storing."""

    age: int = Field(ge=18, le=100)
    total_t: float = Field(gt=0)
    free_t: float | None = Field(default=None, ge=0)
    shbg: float | None = Field(default=None, ge=0)
    estradiol: float | None = Field(default=None, ge=0)


class SleepLogRequest(BaseModel):
    """A night of sleep to log."""

    date: date
    bedtime: str = Field(pattern=CLOCK_PATTERN)
    waketime: str = Field(pattern=CLOCK_PATTERN)
    quality: int = Field(ge=1, le=10)
    notes: str | None = None


class SleepRoutineRequest(BaseModel):
    """Current sleep habits used to build the evening routine."""

    current_sleep_hours: float = Field(ge=0, le=24)
    bedtime: str = Field(pattern=CLOCK_PATTERN)
    fall_asleep_minutes: int = Field(default=15, ge=0)
    night_wakeups: int = Field(default=0, ge=0)
