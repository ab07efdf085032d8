"""Directory of verified laboratories."""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Protocol

from testosterone_suite.domain.labs import CityLabCount, LabLocation

_logger = logging.getLogger(__name__)

UNKNOWN_HOURS = "Обадете се за часове"
CLOSED = "Затворено"

_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")


class LabLocationRepository(Protocol):
    """Read interface for verified lab locations."""

    def list_verified_labs(self) -> list[LabLocation]:
        """Return every verified lab ordered by city and name."""

    def list_labs_by_city(self, city: str) -> list[LabLocation]:
        """Return the verified labs of a city ordered by name."""


def format_working_hours(working_hours: dict[str, str] | None) -> str:
    """Summarize per-day opening hours as a short Bulgarian string.

    Identical weekday hours collapse to "Пон-Пет", followed by the weekend
    days that are open. Otherwise the first weekday with hours is shown.
    """
    if not working_hours:
        return UNKNOWN_HOURS
    weekday_hours = [working_hours[day] for day in _WEEKDAYS if working_hours.get(day)]
    if len(weekday_hours) == len(_WEEKDAYS) and len(set(weekday_hours)) == 1:
        result = f"Пон-Пет: {weekday_hours[0]}"
        saturday = working_hours.get("saturday")
        sunday = working_hours.get("sunday")
        if saturday and saturday != CLOSED:
            result += f", Съб: {saturday}"
        if sunday and sunday != CLOSED:
            result += f", Нед: {sunday}"
        return result
    for day in _WEEKDAYS[:3]:
        if working_hours.get(day):
            return working_hours[day]
    return UNKNOWN_HOURS


def search_labs(labs: list[LabLocation], query: str) -> list[LabLocation]:
    """Return labs whose name or address contains the query, ignoring case."""
    needle = query.strip().lower()
    if not needle:
        return labs
    return [
        lab
        for lab in labs
        if needle in lab.name.lower() or needle in lab.address.lower()
    ]


def count_labs_by_city(labs: list[LabLocation]) -> list[CityLabCount]:
    """Count labs per city, sorted by city name."""
    counts = Counter(lab.city for lab in labs)
    return [CityLabCount(city=city, count=counts[city]) for city in sorted(counts)]


@dataclass
class LabDirectoryService:
    """Service for browsing lab locations."""

    repository: LabLocationRepository

    def list_labs(
        self, city: str | None = None, query: str | None = None
    ) -> list[LabLocation]:
        """Return verified labs, optionally limited to a city and a search term."""
        if city:
            labs = self.repository.list_labs_by_city(city)
        else:
            labs = self.repository.list_verified_labs()
        if query:
            labs = search_labs(labs, query)
        _logger.debug("Lab directory lookup city=%s results=%s", city, len(labs))
        return labs

    def cities(self) -> list[CityLabCount]:
        """Return the cities that have verified labs with their counts."""
        return count_labs_by_city(self.repository.list_verified_labs())
