"""30-day meal plan generation and management."""

import logging
from collections import Counter
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from testosterone_suite.domain.meals import (
    ActivityLevel,
    DayMacros,
    DayPlan,
    Goal,
    MacroAccuracy,
    Meal,
    MealPlan,
    MealSet,
    MealSlot,
    MealType,
    PlanQuality,
    PriceTier,
    UserParams,
    VarietyScore,
    WeightEntry,
)
from testosterone_suite.services.catalog import MealCatalog
from testosterone_suite.services.ingredients import (
    categorize_ingredients,
    collect_week_ingredients,
    normalized_ingredient_key,
)
from testosterone_suite.services.macros import calculate_macros, round_half_up
from testosterone_suite.services.meal_selector import (
    MAX_REPETITIONS,
    MEAL_ORDER,
    select_meal,
)

_logger = logging.getLogger(__name__)

PLAN_DAYS = 30
SIMILAR_MEAL_TOLERANCE = 0.15
SIMILAR_MEAL_LIMIT = 5

_ZERO_MACROS = DayMacros(calories=0, protein_g=0, carbs_g=0, fat_g=0)


class MealPlanNotFoundError(LookupError):
    """Raised when a plan update targets a user without a plan."""


class MealPlanRepository(Protocol):
    """Persistence interface for stored meal plans."""

    def get_plan(self, user_id: UUID) -> MealPlan | None:
        """Return the user's plan if one exists."""

    def upsert_plan(self, user_id: UUID, plan: MealPlan) -> None:
        """Store the whole plan, replacing any previous one."""

    def delete_plan(self, user_id: UUID) -> None:
        """Delete the user's plan."""


def compute_day_totals(meals: MealSet) -> DayMacros:
    """Sum a day's macros and derive calories from the sums."""
    protein = sum(meal.protein_g for meal in meals.as_list())
    carbs = sum(meal.carbs_g for meal in meals.as_list())
    fat = sum(meal.fat_g for meal in meals.as_list())
    return DayMacros(
        calories=round_half_up(protein * 4 + carbs * 4 + fat * 9),
        protein_g=round_half_up(protein),
        carbs_g=round_half_up(carbs),
        fat_g=round_half_up(fat),
    )


def generate_plan(
    catalog: MealCatalog,
    target: DayMacros,
    budget: PriceTier,
    *,
    days: int = PLAN_DAYS,
    max_repetitions: int = MAX_REPETITIONS,
) -> list[DayPlan]:
    """Build a deterministic plan of `days` days.

    Meal usage is counted across the whole plan so variety spreads over the
    month, while running macro totals restart every day.
    """
    usage: Counter[str] = Counter()
    plan: list[DayPlan] = []
    for day in range(1, days + 1):
        running = _ZERO_MACROS
        chosen: list[Meal] = []
        for index, meal_type in enumerate(MEAL_ORDER):
            meal = select_meal(
                catalog,
                meal_type,
                budget,
                target,
                running,
                meals_remaining=len(MEAL_ORDER) - index,
                usage=usage,
                max_repetitions=max_repetitions,
            )
            usage[meal.name] += 1
            running = DayMacros(
                calories=running.calories + meal.calories,
                protein_g=running.protein_g + meal.protein_g,
                carbs_g=running.carbs_g + meal.carbs_g,
                fat_g=running.fat_g + meal.fat_g,
            )
            chosen.append(meal)
        meals = MealSet(
            breakfast=chosen[0], lunch=chosen[1], dinner=chosen[2], snack=chosen[3]
        )
        plan.append(DayPlan(day=day, meals=meals, totals=compute_day_totals(meals)))
    return plan


def calculate_average_macros(plan: list[DayPlan]) -> DayMacros:
    """Return rounded per-day averages over a plan."""
    if not plan:
        return _ZERO_MACROS
    count = len(plan)
    return DayMacros(
        calories=round_half_up(sum(day.totals.calories for day in plan) / count),
        protein_g=round_half_up(sum(day.totals.protein_g for day in plan) / count),
        carbs_g=round_half_up(sum(day.totals.carbs_g for day in plan) / count),
        fat_g=round_half_up(sum(day.totals.fat_g for day in plan) / count),
    )


def analyze_plan_quality(plan: list[DayPlan], target: DayMacros) -> PlanQuality:
    """Compare plan averages with the target and measure variety."""
    average = calculate_average_macros(plan)
    names = [meal.name for day in plan for meal in day.meals.as_list()]
    unique = len(set(names))
    total = len(names)
    return PlanQuality(
        average_macros=average,
        macro_accuracy=MacroAccuracy(
            protein_deviation=abs(average.protein_g - target.protein_g),
            carbs_deviation=abs(average.carbs_g - target.carbs_g),
            fat_deviation=abs(average.fat_g - target.fat_g),
            calories_deviation=abs(average.calories - target.calories),
        ),
        variety_score=VarietyScore(
            unique_meals=unique,
            total_meals=total,
            variety_percentage=round_half_up(unique / total * 100) if total else 0,
        ),
    )


def find_similar_meals(  # noqa: PLR0913
    catalog: MealCatalog,
    target_meal: Meal,
    meal_type: MealType,
    budget: PriceTier,
    tolerance: float = SIMILAR_MEAL_TOLERANCE,
    limit: int = SIMILAR_MEAL_LIMIT,
) -> list[Meal]:
    """Return swap candidates whose macros are within tolerance, closest first."""
    scored: list[tuple[float, Meal]] = []
    for meal in catalog.eligible(meal_type, budget):
        if meal.name == target_meal.name:
            continue
        deviation = (
            _relative_difference(meal.protein_g, target_meal.protein_g)
            + _relative_difference(meal.carbs_g, target_meal.carbs_g)
            + _relative_difference(meal.fat_g, target_meal.fat_g)
        ) / 3
        if deviation <= tolerance:
            scored.append((deviation, meal))
    scored.sort(key=lambda item: item[0])
    return [meal for _, meal in scored[:limit]]


def _relative_difference(value: float, reference: float) -> float:
    if reference == 0:
        return 0.0 if value == 0 else float("inf")
    return abs(value - reference) / reference


@dataclass
class MealPlanService:
    """Service that generates and maintains users' meal plans."""

    repository: MealPlanRepository
    catalog: MealCatalog
    plan_days: int = PLAN_DAYS
    max_repetitions: int = MAX_REPETITIONS

    def create_plan(  # noqa: PLR0913
        self,
        user_id: UUID,
        age: int,
        weight_kg: float,
        height_cm: float,
        activity_level: ActivityLevel,
        goal: Goal,
        budget: PriceTier,
    ) -> MealPlan:
        """Generate a new plan, keeping weight entries of the previous one."""
        macros = calculate_macros(age, weight_kg, height_cm, activity_level, goal)
        days = generate_plan(
            self.catalog,
            macros,
            budget,
            days=self.plan_days,
            max_repetitions=self.max_repetitions,
        )
        existing = self.repository.get_plan(user_id)
        plan = MealPlan(
            user_params=UserParams(
                age=age,
                weight_kg=weight_kg,
                height_cm=height_cm,
                activity_level=activity_level,
                goal=goal,
                budget=budget,
                macros=macros,
            ),
            plan=days,
            generated_at=datetime.now(tz=UTC),
            weight_entries=list(existing.weight_entries) if existing else [],
            user_id=user_id,
        )
        self.repository.upsert_plan(user_id, plan)
        _logger.info(
            "Generated meal plan user_id=%s budget=%s days=%s calories=%s",
            user_id,
            budget.value,
            len(days),
            macros.calories,
        )
        return plan

    def get_plan(self, user_id: UUID) -> MealPlan | None:
        """Return the user's current plan."""
        return self.repository.get_plan(user_id)

    def delete_plan(self, user_id: UUID) -> None:
        """Remove the user's plan."""
        self.repository.delete_plan(user_id)

    def plan_quality(self, user_id: UUID) -> PlanQuality | None:
        """Return diagnostics for the user's plan."""
        plan = self.repository.get_plan(user_id)
        if plan is None:
            return None
        return analyze_plan_quality(plan.plan, plan.user_params.macros)

    def shopping_list(self, user_id: UUID, week_number: int) -> dict[str, list[str]] | None:
        """Return the categorized shopping list for a plan week."""
        plan = self.repository.get_plan(user_id)
        if plan is None:
            return None
        return categorize_ingredients(collect_week_ingredients(plan.plan, week_number))

    def checked_shopping_items(self, user_id: UUID, week_number: int) -> list[str]:
        """Return the ingredient keys already bought for a plan week."""
        plan = self.repository.get_plan(user_id)
        if plan is None:
            return []
        return list(plan.checked_items.get(week_number, []))

    def set_shopping_item(
        self, user_id: UUID, week_number: int, item: str, checked: bool
    ) -> list[str]:
        """Mark a shopping list entry as bought or not bought.

        Entries are keyed by ingredient name, so "яйца (9бр)" and a recipe
        line like "3 яйца" refer to the same item.
        """
        plan = self._require_plan(user_id)
        key = normalized_ingredient_key(item)
        keys = [k for k in plan.checked_items.get(week_number, []) if k != key]
        if checked:
            keys.append(key)
        keys.sort()
        updated = replace(
            plan, checked_items={**plan.checked_items, week_number: keys}
        )
        self.repository.upsert_plan(user_id, updated)
        return keys

    def alternatives(self, user_id: UUID, day: int, slot: MealSlot) -> list[Meal]:
        """Return meals similar to the one planned for a slot."""
        plan = self._require_plan(user_id)
        day_plan = _find_day(plan, day)
        current = getattr(day_plan.meals, slot.value)
        return find_similar_meals(
            self.catalog, current, slot.meal_type, plan.user_params.budget
        )

    def swap_meal(
        self, user_id: UUID, day: int, slot: MealSlot, meal_name: str
    ) -> MealPlan:
        """Replace one planned meal and recompute that day's totals."""
        plan = self._require_plan(user_id)
        day_plan = _find_day(plan, day)
        meal = self.catalog.find(slot.meal_type, meal_name)
        if meal is None:
            raise ValueError(f"Unknown {slot.meal_type.value} meal: {meal_name}")
        meals = replace(day_plan.meals, **{slot.value: meal})
        updated_day = DayPlan(day=day, meals=meals, totals=compute_day_totals(meals))
        updated = replace(
            plan,
            plan=[updated_day if item.day == day else item for item in plan.plan],
        )
        self.repository.upsert_plan(user_id, updated)
        _logger.info("Swapped meal user_id=%s day=%s slot=%s", user_id, day, slot.value)
        return updated

    def add_weight_entry(self, user_id: UUID, entry: WeightEntry) -> MealPlan:
        """Record a weight measurement on the user's plan."""
        plan = self._require_plan(user_id)
        entries = sorted([*plan.weight_entries, entry], key=lambda item: item.date)
        updated = replace(plan, weight_entries=entries)
        self.repository.upsert_plan(user_id, updated)
        return updated

    def _require_plan(self, user_id: UUID) -> MealPlan:
        plan = self.repository.get_plan(user_id)
        if plan is None:
            raise MealPlanNotFoundError(f"No meal plan for user {user_id}")
        return plan


def _find_day(plan: MealPlan, day: int) -> DayPlan:
    for day_plan in plan.plan:
        if day_plan.day == day:
            return day_plan
    raise ValueError(f"Day {day} is outside the plan")
