"""Domain models for the meal planner."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class PriceTier(StrEnum):
    """Price classification of a catalog meal."""

    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"


class MealType(StrEnum):
    """Catalog grouping of meals."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACKS = "snacks"


class Goal(StrEnum):
    """Body composition goal."""

    BULK = "bulk"
    MAINTAIN = "maintain"
    CUT = "cut"


class ActivityLevel(StrEnum):
    """Weekly activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VERY = "very"
    EXTREME = "extreme"


class Difficulty(StrEnum):
    """Cooking difficulty of a meal."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Meal:
    """Immutable catalog meal with macros in grams."""

    name: str
    protein_g: int
    fat_g: int
    carbs_g: int
    price: PriceTier
    ingredients: tuple[str, ...]
    prep_time: int | None = None
    difficulty: Difficulty | None = None
    instructions: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()

    @property
    def calories(self) -> int:
        """Calories derived from macros."""
        return self.protein_g * 4 + self.carbs_g * 4 + self.fat_g * 9


@dataclass(frozen=True)
class DayMacros:
    """Calories and macro grams for a day."""

    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int


@dataclass(frozen=True)
class MealSet:
    """The four meals of a planned day."""

    breakfast: Meal
    lunch: Meal
    dinner: Meal
    snack: Meal

    def as_list(self) -> list[Meal]:
        """Return meals in slot order."""
        return [self.breakfast, self.lunch, self.dinner, self.snack]


@dataclass(frozen=True)
class DayPlan:
    """A single planned day with totals."""

    day: int
    meals: MealSet
    totals: DayMacros


@dataclass(frozen=True)
class UserParams:
    """Inputs a meal plan was generated from."""

    age: int
    weight_kg: float
    height_cm: float
    activity_level: ActivityLevel
    goal: Goal
    budget: PriceTier
    macros: DayMacros


@dataclass(frozen=True)
class WeightEntry:
    """Body weight measurement."""

    date: date
    weight_kg: float


@dataclass(frozen=True)
class MealPlan:
    """A user's stored meal plan."""

    user_params: UserParams
    plan: list[DayPlan]
    generated_at: datetime
    weight_entries: list[WeightEntry] = field(default_factory=list)
    checked_items: dict[int, list[str]] = field(default_factory=dict)
    user_id: UUID | None = None


@dataclass(frozen=True)
class ParsedIngredient:
    """Quantity, unit and canonical name read from an ingredient line."""

    quantity: float
    unit: str
    name: str
    display_name: str
    original_unit: str = ""


@dataclass(frozen=True)
class IngredientTotal:
    """Aggregated quantity of one ingredient in one unit."""

    name: str
    unit: str
    quantity: float


@dataclass(frozen=True)
class MacroAccuracy:
    """Absolute distance of plan averages from the target."""

    protein_deviation: int
    carbs_deviation: int
    fat_deviation: int
    calories_deviation: int


@dataclass(frozen=True)
class VarietyScore:
    """How many distinct meals a plan uses."""

    unique_meals: int
    total_meals: int
    variety_percentage: int


@dataclass(frozen=True)
class PlanQuality:
    """Diagnostics for a generated plan."""

    average_macros: DayMacros
    macro_accuracy: MacroAccuracy
    variety_score: VarietyScore


class MealSlot(StrEnum):
    """Position of a meal within a planned day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @property
    def meal_type(self) -> MealType:
        """Catalog group that serves this slot."""
        if self is MealSlot.SNACK:
            return MealType.SNACKS
        return MealType(self.value)
