"""Static meal and exercise catalogs."""

import json
from dataclasses import dataclass
from functools import cache
from pathlib import Path

from testosterone_suite.domain.meals import Difficulty, Meal, MealType, PriceTier
from testosterone_suite.domain.workouts import EquipmentType, Exercise, Movement

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class CatalogConfigurationError(RuntimeError):
    """Raised when the catalog cannot serve a requested meal type and budget."""


@dataclass(frozen=True)
class MealCatalog:
    """Read-only meals grouped by meal type."""

    meals: dict[MealType, tuple[Meal, ...]]

    def meals_for(self, meal_type: MealType) -> tuple[Meal, ...]:
        """Return every meal of a type in catalog order."""
        return self.meals.get(meal_type, ())

    def eligible(self, meal_type: MealType, budget: PriceTier) -> list[Meal]:
        """Return meals matching the budget, plus budget meals."""
        return [
            meal
            for meal in self.meals_for(meal_type)
            if meal.price in (budget, PriceTier.BUDGET)
        ]

    def find(self, meal_type: MealType, name: str) -> Meal | None:
        """Return a meal of a type by name."""
        for meal in self.meals_for(meal_type):
            if meal.name == name:
                return meal
        return None


def parse_meal_catalog(payload: dict[str, list[dict[str, object]]]) -> MealCatalog:
    """Build a catalog from the JSON layout keyed by meal type."""
    meals: dict[MealType, tuple[Meal, ...]] = {}
    for meal_type in MealType:
        rows = payload.get(meal_type.value, [])
        meals[meal_type] = tuple(_parse_meal(row) for row in rows)
    return MealCatalog(meals=meals)


@cache
def load_meal_catalog(path: Path | None = None) -> MealCatalog:
    """Load the bundled meal catalog."""
    source = path or _DATA_DIR / "meals.json"
    with source.open(encoding="utf-8") as handle:
        return parse_meal_catalog(json.load(handle))


@cache
def load_exercise_catalog(path: Path | None = None) -> tuple[Exercise, ...]:
    """Load the bundled exercise catalog."""
    source = path or _DATA_DIR / "exercises.json"
    with source.open(encoding="utf-8") as handle:
        rows = json.load(handle)
    return tuple(_parse_exercise(row) for row in rows)


def _parse_meal(row: dict[str, object]) -> Meal:
    difficulty = row.get("difficulty")
    prep_time = row.get("prep_time")
    return Meal(
        name=str(row["name"]),
        protein_g=int(row["protein"]),
        fat_g=int(row["fat"]),
        carbs_g=int(row["carbs"]),
        price=PriceTier(str(row["price"])),
        ingredients=tuple(str(item) for item in row.get("ingredients", [])),
        prep_time=int(prep_time) if prep_time is not None else None,
        difficulty=Difficulty(str(difficulty)) if difficulty else None,
        instructions=tuple(str(step) for step in row.get("instructions", [])),
        tips=tuple(str(tip) for tip in row.get("tips", [])),
    )


def _parse_exercise(row: dict[str, object]) -> Exercise:
    return Exercise(
        id=int(row["id"]),
        name=str(row["name"]),
        category=str(row["category"]),
        testosterone_benefit=str(row["testosterone_benefit"]),
        movement=Movement(str(row["movement"])),
        equipment=EquipmentType(str(row["equipment"])),
        sets=str(row["sets"]),
        reps=str(row["reps"]),
        rest=str(row["rest"]),
        testosterone_why=str(row.get("testosterone_why", "")),
        form=tuple(str(item) for item in row.get("form", [])),
        mistakes=tuple(str(item) for item in row.get("mistakes", [])),
    )
