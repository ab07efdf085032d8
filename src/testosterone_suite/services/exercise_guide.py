"""Browsing the exercise catalog."""

from collections.abc import Sequence

from testosterone_suite.domain.workouts import Exercise

ALL = "all"


def filter_exercises(
    exercises: Sequence[Exercise],
    t_level: str | None = None,
    category: str | None = None,
) -> list[Exercise]:
    """Filter by testosterone benefit and muscle category.

    A missing value or "all" leaves that dimension unfiltered.
    """
    filtered = list(exercises)
    if t_level and t_level != ALL:
        filtered = [ex for ex in filtered if ex.testosterone_benefit == t_level]
    if category and category != ALL:
        filtered = [ex for ex in filtered if ex.category == category]
    return filtered


def find_exercise(exercises: Sequence[Exercise], exercise_id: int) -> Exercise | None:
    """Return a catalog exercise by id."""
    for exercise in exercises:
        if exercise.id == exercise_id:
            return exercise
    return None
