"""Supabase repository for meal plans."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from testosterone_suite.domain.meals import (
    ActivityLevel,
    DayMacros,
    DayPlan,
    Difficulty,
    Goal,
    Meal,
    MealPlan,
    MealSet,
    PriceTier,
    UserParams,
    WeightEntry,
)
from testosterone_suite.services.meal_plans import MealPlanRepository


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation storing one plan blob per user."""

    client: Client

    def get_plan(self, user_id: UUID) -> MealPlan | None:
        """Return the user's plan if one exists."""
        response = (
            self.client.table("meal_plans_app")
            .select("user_id, plan_data")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return parse_meal_plan(row["plan_data"], user_id=UUID(row["user_id"]))

    def upsert_plan(self, user_id: UUID, plan: MealPlan) -> None:
        """Insert or replace the user's plan."""
        response = (
            self.client.table("meal_plans_app")
            .upsert(
                {
                    "user_id": str(user_id),
                    "plan_data": serialize_meal_plan(plan),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save meal plan")

    def delete_plan(self, user_id: UUID) -> None:
        """Delete the user's plan."""
        self.client.table("meal_plans_app").delete().eq(
            "user_id", str(user_id)
        ).execute()


def serialize_meal_plan(plan: MealPlan) -> dict[str, object]:
    """Convert a plan to the JSON blob stored in plan_data."""
    params = plan.user_params
    return {
        "user_params": {
            "age": params.age,
            "weight": params.weight_kg,
            "height": params.height_cm,
            "activity_level": params.activity_level.value,
            "goal": params.goal.value,
            "budget": params.budget.value,
            "macros": _serialize_macros(params.macros),
        },
        "plan": [
            {
                "day": day.day,
                "meals": {
                    "breakfast": _serialize_meal(day.meals.breakfast),
                    "lunch": _serialize_meal(day.meals.lunch),
                    "dinner": _serialize_meal(day.meals.dinner),
                    "snack": _serialize_meal(day.meals.snack),
                },
                "totals": _serialize_macros(day.totals),
            }
            for day in plan.plan
        ],
        "generated_at": plan.generated_at.isoformat(),
        "weight_entries": [
            {"date": entry.date.isoformat(), "weight": entry.weight_kg}
            for entry in plan.weight_entries
        ],
        "checked_items": {
            str(week): list(keys) for week, keys in plan.checked_items.items()
        },
    }


def parse_meal_plan(data: dict[str, object], user_id: UUID | None = None) -> MealPlan:
    """Build a plan from a stored plan_data blob."""
    params = data["user_params"]
    return MealPlan(
        user_params=UserParams(
            age=int(params["age"]),
            weight_kg=float(params["weight"]),
            height_cm=float(params["height"]),
            activity_level=ActivityLevel(params["activity_level"]),
            goal=Goal(params["goal"]),
            budget=PriceTier(params["budget"]),
            macros=_parse_macros(params["macros"]),
        ),
        plan=[
            DayPlan(
                day=int(row["day"]),
                meals=MealSet(
                    breakfast=_parse_meal(row["meals"]["breakfast"]),
                    lunch=_parse_meal(row["meals"]["lunch"]),
                    dinner=_parse_meal(row["meals"]["dinner"]),
                    snack=_parse_meal(row["meals"]["snack"]),
                ),
                totals=_parse_macros(row["totals"]),
            )
            for row in data.get("plan", [])
        ],
        generated_at=datetime.fromisoformat(str(data["generated_at"])),
        weight_entries=[
            WeightEntry(
                date=date.fromisoformat(str(entry["date"])),
                weight_kg=float(entry["weight"]),
            )
            for entry in data.get("weight_entries") or []
        ],
        checked_items={
            int(week): [str(key) for key in keys]
            for week, keys in (data.get("checked_items") or {}).items()
        },
        user_id=user_id,
    )


def _serialize_macros(macros: DayMacros) -> dict[str, int]:
    return {
        "calories": macros.calories,
        "protein": macros.protein_g,
        "carbs": macros.carbs_g,
        "fat": macros.fat_g,
    }


def _parse_macros(row: dict[str, object]) -> DayMacros:
    return DayMacros(
        calories=int(row.get("calories", 0)),
        protein_g=int(row.get("protein", 0)),
        carbs_g=int(row.get("carbs", 0)),
        fat_g=int(row.get("fat", 0)),
    )


def _serialize_meal(meal: Meal) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": meal.name,
        "protein": meal.protein_g,
        "fat": meal.fat_g,
        "carbs": meal.carbs_g,
        "price": meal.price.value,
        "ingredients": list(meal.ingredients),
    }
    if meal.prep_time is not None:
        payload["prep_time"] = meal.prep_time
    if meal.difficulty is not None:
        payload["difficulty"] = meal.difficulty.value
    if meal.instructions:
        payload["instructions"] = list(meal.instructions)
    if meal.tips:
        payload["tips"] = list(meal.tips)
    return payload


def _parse_meal(row: dict[str, object]) -> Meal:
    difficulty = row.get("difficulty")
    prep_time = row.get("prep_time")
    return Meal(
        name=str(row["name"]),
        protein_g=int(row["protein"]),
        fat_g=int(row["fat"]),
        carbs_g=int(row["carbs"]),
        price=PriceTier(row["price"]),
        ingredients=tuple(row.get("ingredients") or ()),
        prep_time=int(prep_time) if prep_time is not None else None,
        difficulty=Difficulty(difficulty) if difficulty else None,
        instructions=tuple(row.get("instructions") or ()),
        tips=tuple(row.get("tips") or ()),
    )
