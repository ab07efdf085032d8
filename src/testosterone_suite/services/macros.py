"""Energy expenditure and macro targets."""

import math

from testosterone_suite.domain.meals import ActivityLevel, DayMacros, Goal

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.VERY: 1.725,
    ActivityLevel.EXTREME: 1.9,
}

GOAL_FACTORS: dict[Goal, float] = {
    Goal.BULK: 1.10,
    Goal.MAINTAIN: 1.0,
    Goal.CUT: 0.85,
}

PROTEIN_PER_KG = 1.8
FAT_CALORIE_SHARE = 0.35


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def calculate_bmr(age: int, weight_kg: float, height_cm: float) -> float:
    """Return the Mifflin-St Jeor basal metabolic rate for men."""
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + 5


def activity_multiplier(activity_level: ActivityLevel) -> float:
    """Return the TDEE multiplier for an activity level."""
    return ACTIVITY_MULTIPLIERS[activity_level]


def calculate_tdee(
    age: int, weight_kg: float, height_cm: float, activity_level: ActivityLevel
) -> float:
    """Return total daily energy expenditure before goal adjustment."""
    return calculate_bmr(age, weight_kg, height_cm) * activity_multiplier(
        activity_level
    )


def calculate_macros(
    age: int,
    weight_kg: float,
    height_cm: float,
    activity_level: ActivityLevel,
    goal: Goal,
) -> DayMacros:
    """Return the daily calorie and macro target.

    Protein is fixed per kilogram of body weight, fat takes a fixed share of
    calories and carbohydrates fill the remainder.
    """
    tdee = calculate_tdee(age, weight_kg, height_cm, activity_level)
    tdee *= GOAL_FACTORS[goal]
    protein = weight_kg * PROTEIN_PER_KG
    fat = tdee * FAT_CALORIE_SHARE / 9
    carbs = (tdee - (protein * 4 + fat * 9)) / 4
    return DayMacros(
        calories=round_half_up(tdee),
        protein_g=round_half_up(protein),
        carbs_g=round_half_up(carbs),
        fat_g=round_half_up(fat),
    )
