"""Ingredient parsing and shopping list aggregation."""

import re
from collections.abc import Iterable

from testosterone_suite.domain.meals import DayPlan, IngredientTotal, ParsedIngredient

PIECE_UNIT = "бр"

_PARENTHESES = re.compile(r"\([^)]*\)")
_QUANTITY_WITH_UNIT = re.compile(
    r"^(\d+(?:[.,]\d+)?)\s*(г|мл|кг|л|kg|ml)\s+(.+)$", re.IGNORECASE
)
_FRACTION = re.compile(r"^(\d+)/(\d+)\s+(.+)$")
_PLAIN_QUANTITY = re.compile(r"^(\d+(?:[.,]\d+)?)\s+(.+)$")

_UNIT_ALIASES = {"kg": "кг", "ml": "мл"}

CANONICAL_NAMES = {
    "яйце": "яйца",
    "домат": "домати",
    "краставица": "краставици",
    "тиквичка": "тиквички",
    "морков": "моркови",
    "картоф": "картофи",
    "банан": "банани",
    "ябълка": "ябълки",
    "кюфте": "кюфтета",
    "кебапче": "кебапчета",
    "филия": "филии",
}

SHOPPING_CATEGORIES: tuple[tuple[str, re.Pattern[str] | None], ...] = (
    (
        "Месо и риба",
        re.compile(
            r"месо|пилешк|свинск|телешк|говежд|риба|сьомга|тон|скумрия|пъстърва|"
            r"кюфте|ребра|шунка|кебапче|котлет|скарид",
            re.IGNORECASE,
        ),
    ),
    (
        "Яйца и млечни",
        re.compile(r"яйц|мляко|сирене|кашкавал|извара|кисело мляко|фета", re.IGNORECASE),
    ),
    (
        "Плодове и зеленчуци",
        re.compile(
            r"домат|краставиц|салат|зеленчуц|броколи|спанак|моркови|тиквич|гъби|"
            r"авокадо|зеле|лук|чесън|аспержи|боровинк|ябълк|банан|лимон",
            re.IGNORECASE,
        ),
    ),
    (
        "Зърнени",
        re.compile(r"ориз|хляб|паста|овесен|мюсли|киноа|булгур|кус-кус|фили", re.IGNORECASE),
    ),
    ("Други", None),
)


def canonical_name(name: str) -> str:
    """Lowercase a name and map singular forms to their plural key."""
    normalized = name.lower().strip()
    return CANONICAL_NAMES.get(normalized, normalized)


def parse_ingredient(text: str) -> ParsedIngredient:
    """Parse a free-text ingredient line.

    Never raises: lines without a recognizable quantity count as one piece.
    """
    clean = _PARENTHESES.sub("", text).strip()

    match = _QUANTITY_WITH_UNIT.match(clean)
    if match:
        unit = match.group(2).lower()
        unit = _UNIT_ALIASES.get(unit, unit)
        name = canonical_name(match.group(3))
        return ParsedIngredient(
            quantity=_to_number(match.group(1)),
            unit=unit,
            name=name,
            display_name=name,
            original_unit=unit,
        )

    match = _FRACTION.match(clean)
    if match and int(match.group(2)) != 0:
        name = canonical_name(match.group(3))
        return ParsedIngredient(
            quantity=int(match.group(1)) / int(match.group(2)),
            unit=PIECE_UNIT,
            name=name,
            display_name=name,
        )

    match = _PLAIN_QUANTITY.match(clean)
    if match:
        name = canonical_name(match.group(2))
        return ParsedIngredient(
            quantity=_to_number(match.group(1)),
            unit=PIECE_UNIT,
            name=name,
            display_name=name,
        )

    name = canonical_name(clean)
    return ParsedIngredient(quantity=1, unit=PIECE_UNIT, name=name, display_name=name)


def aggregate_ingredients(lines: Iterable[str]) -> list[IngredientTotal]:
    """Sum quantities per canonical name and unit.

    Different units of the same ingredient stay in separate entries, no unit
    conversion is attempted.
    """
    buckets: dict[tuple[str, str], float] = {}
    for line in lines:
        parsed = parse_ingredient(line)
        key = (parsed.name, parsed.unit)
        buckets[key] = buckets.get(key, 0) + parsed.quantity
    return [
        IngredientTotal(name=name, unit=unit, quantity=quantity)
        for (name, unit), quantity in buckets.items()
    ]


def week_day_range(week_number: int, plan_length: int) -> range:
    """Return the plan day numbers covered by a shopping week."""
    start = (week_number - 1) * 7 + 1
    end = min(week_number * 7, plan_length)
    return range(start, end + 1)


def collect_week_ingredients(
    plan: list[DayPlan], week_number: int
) -> list[IngredientTotal]:
    """Aggregate the ingredients of every meal in a plan week."""
    days = week_day_range(week_number, len(plan))
    lines: list[str] = []
    for day_plan in plan:
        if day_plan.day not in days:
            continue
        for meal in day_plan.meals.as_list():
            lines.extend(meal.ingredients)
    return aggregate_ingredients(lines)


def format_ingredient(total: IngredientTotal) -> str:
    """Format an aggregated entry as 'name (qtyunit)'."""
    return f"{total.name} ({format_quantity(total.quantity)}{total.unit})"


def format_quantity(quantity: float) -> str:
    """Format a quantity without trailing zeros, rounded to two decimals."""
    rounded = round(quantity, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:g}"


def categorize_ingredients(totals: Iterable[IngredientTotal]) -> dict[str, list[str]]:
    """Group formatted shopping list entries by store section."""
    categories: dict[str, list[str]] = {name: [] for name, _ in SHOPPING_CATEGORIES}
    for total in totals:
        for category, pattern in SHOPPING_CATEGORIES:
            if pattern is None or pattern.search(total.name):
                categories[category].append(format_ingredient(total))
                break
    return categories


def normalized_ingredient_key(text: str) -> str:
    """Return the lookup key for a recipe line or a 'Name - 9бр' list entry."""
    if " - " in text:
        return text.split(" - ")[0].lower().strip()
    return parse_ingredient(text).name


def _to_number(raw: str) -> float:
    value = float(raw.replace(",", "."))
    if value.is_integer():
        return int(value)
    return value
