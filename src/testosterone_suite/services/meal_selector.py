"""Macro-aware meal selection for a single slot."""

from collections.abc import Mapping

from testosterone_suite.domain.meals import DayMacros, Meal, MealType, PriceTier
from testosterone_suite.services.catalog import CatalogConfigurationError, MealCatalog

MEAL_ORDER: tuple[MealType, ...] = (
    MealType.BREAKFAST,
    MealType.LUNCH,
    MealType.DINNER,
    MealType.SNACKS,
)

# Share of the remaining day each slot aims for. Dinner and snack options
# top out around 600 and 450 kcal, so lunch and breakfast carry the most.
MEAL_WEIGHTS: dict[MealType, float] = {
    MealType.BREAKFAST: 1.4,
    MealType.LUNCH: 1.8,
    MealType.DINNER: 1.0,
    MealType.SNACKS: 0.6,
}

PROTEIN_DEVIATION_WEIGHT = 2.0
CARBS_DEVIATION_WEIGHT = 1.5
FAT_DEVIATION_WEIGHT = 1.0

MAX_REPETITIONS = 7
FIRST_REPEAT_PENALTY = 10
REPEAT_PENALTY_STEP = 30
CAP_PENALTY = 5000


def remaining_weight(meals_remaining: int) -> float:
    """Sum the weights of the last unfilled slots of the day."""
    if meals_remaining <= 0:
        return 0.0
    return sum(MEAL_WEIGHTS[slot] for slot in MEAL_ORDER[-meals_remaining:])


def macro_deviation(
    meal: Meal,
    meal_type: MealType,
    target: DayMacros,
    running: DayMacros,
    meals_remaining: int,
) -> float:
    """Weighted distance between a meal and its ideal share of what is left."""
    share = MEAL_WEIGHTS[meal_type] / remaining_weight(meals_remaining)
    ideal_protein = (target.protein_g - running.protein_g) * share
    ideal_carbs = (target.carbs_g - running.carbs_g) * share
    ideal_fat = (target.fat_g - running.fat_g) * share
    weighted = (
        abs(meal.protein_g - ideal_protein) * PROTEIN_DEVIATION_WEIGHT
        + abs(meal.carbs_g - ideal_carbs) * CARBS_DEVIATION_WEIGHT
        + abs(meal.fat_g - ideal_fat) * FAT_DEVIATION_WEIGHT
    )
    return weighted / (
        PROTEIN_DEVIATION_WEIGHT + CARBS_DEVIATION_WEIGHT + FAT_DEVIATION_WEIGHT
    )


def variety_penalty(
    meal_name: str, usage: Mapping[str, int], max_repetitions: int = MAX_REPETITIONS
) -> float:
    """Penalty for picking a meal that was already used in this run."""
    times_used = usage.get(meal_name, 0)
    if times_used == 0:
        return 0
    if times_used == 1:
        return FIRST_REPEAT_PENALTY
    if times_used >= max_repetitions:
        return CAP_PENALTY
    return times_used * REPEAT_PENALTY_STEP


def select_meal(  # noqa: PLR0913
    catalog: MealCatalog,
    meal_type: MealType,
    budget: PriceTier,
    target: DayMacros,
    running: DayMacros,
    meals_remaining: int,
    usage: Mapping[str, int],
    max_repetitions: int = MAX_REPETITIONS,
) -> Meal:
    """Return the lowest scoring eligible meal for a slot.

    Ties keep catalog order. Raises CatalogConfigurationError when the
    catalog has no meal for the type and budget.
    """
    candidates = catalog.eligible(meal_type, budget)
    if not candidates:
        raise CatalogConfigurationError(
            f"No meals found for type: {meal_type.value}, budget: {budget.value}"
        )
    return min(
        candidates,
        key=lambda meal: macro_deviation(
            meal, meal_type, target, running, meals_remaining
        )
        + variety_penalty(meal.name, usage, max_repetitions),
    )
