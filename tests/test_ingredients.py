"""Tests for ingredient parsing and shopping lists."""

from testosterone_suite.domain.meals import IngredientTotal
from testosterone_suite.services.ingredients import (
    aggregate_ingredients,
    categorize_ingredients,
    collect_week_ingredients,
    format_ingredient,
    format_quantity,
    normalized_ingredient_key,
    parse_ingredient,
    week_day_range,
)
from testosterone_suite.services.meal_plans import generate_plan


def test_parse_quantity_with_unit() -> None:
    parsed = parse_ingredient("100г ориз")

    assert parsed.quantity == 100
    assert parsed.unit == "г"
    assert parsed.name == "ориз"
    assert parsed.original_unit == "г"


def test_parse_unit_with_space_and_latin_alias() -> None:
    assert parse_ingredient("200 мл мляко").unit == "мл"
    parsed = parse_ingredient("1.5kg картофи")
    assert parsed.quantity == 1.5
    assert parsed.unit == "кг"


def test_parse_plain_count() -> None:
    parsed = parse_ingredient("3 яйца")

    assert parsed.quantity == 3
    assert parsed.unit == "бр"
    assert parsed.name == "яйца"


def test_parse_fraction() -> None:
    parsed = parse_ingredient("1/2 авокадо")

    assert parsed.quantity == 0.5
    assert parsed.unit == "бр"
    assert parsed.name == "авокадо"


def test_parse_strips_parentheses_and_canonicalizes() -> None:
    parsed = parse_ingredient("1 Яйце (50г)")

    assert parsed.quantity == 1
    assert parsed.name == "яйца"


def test_parse_decimal_comma() -> None:
    assert parse_ingredient("0,5 л айрян").quantity == 0.5


def test_parse_falls_back_to_single_piece() -> None:
    parsed = parse_ingredient("Зелена салата")

    assert parsed.quantity == 1
    assert parsed.unit == "бр"
    assert parsed.name == "зелена салата"


def test_aggregate_sums_same_name_and_unit() -> None:
    totals = aggregate_ingredients(["3 яйца", "2 яйце", "100г ориз", "150г ориз"])

    assert IngredientTotal(name="яйца", unit="бр", quantity=5) in totals
    assert IngredientTotal(name="ориз", unit="г", quantity=250) in totals
    assert len(totals) == 2


def test_aggregate_keeps_units_separate() -> None:
    totals = aggregate_ingredients(["200мл мляко", "1 мляко", "100мл мляко"])

    assert IngredientTotal(name="мляко", unit="мл", quantity=300) in totals
    assert IngredientTotal(name="мляко", unit="бр", quantity=1) in totals


def test_week_day_range_is_clamped_to_plan_length() -> None:
    assert list(week_day_range(1, 30)) == [1, 2, 3, 4, 5, 6, 7]
    assert list(week_day_range(5, 30)) == [29, 30]


def test_collect_week_ingredients_uses_only_week_days(
    meal_catalog, standard_target, standard_budget
) -> None:
    plan = generate_plan(meal_catalog, standard_target, standard_budget, days=10)

    week_two = collect_week_ingredients(plan, 2)
    expected = aggregate_ingredients(
        line
        for day in plan[7:]
        for meal in day.meals.as_list()
        for line in meal.ingredients
    )

    assert sorted(week_two, key=lambda t: (t.name, t.unit)) == sorted(
        expected, key=lambda t: (t.name, t.unit)
    )


def test_categorize_ingredients() -> None:
    categories = categorize_ingredients(
        [
            IngredientTotal(name="пилешко филе", unit="г", quantity=400),
            IngredientTotal(name="яйца", unit="бр", quantity=11),
            IngredientTotal(name="домати", unit="бр", quantity=2),
            IngredientTotal(name="ориз", unit="г", quantity=250),
            IngredientTotal(name="зехтин", unit="мл", quantity=20),
        ]
    )

    assert categories["Месо и риба"] == ["пилешко филе (400г)"]
    assert categories["Яйца и млечни"] == ["яйца (11бр)"]
    assert categories["Плодове и зеленчуци"] == ["домати (2бр)"]
    assert categories["Зърнени"] == ["ориз (250г)"]
    assert categories["Други"] == ["зехтин (20мл)"]


def test_format_ingredient_keeps_fractions() -> None:
    assert format_ingredient(IngredientTotal("авокадо", "бр", 1.5)) == "авокадо (1.5бр)"


def test_normalized_ingredient_key() -> None:
    assert normalized_ingredient_key("Яйца - 9бр") == "яйца"
    assert normalized_ingredient_key("3 яйца (150г)") == "яйца"
    assert normalized_ingredient_key("100г ориз") == "ориз"


def test_parse_zero_denominator_falls_back_to_single_piece() -> None:
    parsed = parse_ingredient("1/0 авокадо")

    assert parsed.quantity == 1
    assert parsed.unit == "бр"
    assert parsed.name == "1/0 авокадо"


def test_aggregate_tolerates_malformed_fraction() -> None:
    totals = aggregate_ingredients(["100г ориз", "1/0 авокадо"])

    assert IngredientTotal(name="ориз", unit="г", quantity=100) in totals
    assert IngredientTotal(name="1/0 авокадо", unit="бр", quantity=1) in totals


def test_format_quantity() -> None:
    assert format_quantity(3.0) == "3"
    assert format_quantity(0.333) == "0.33"
