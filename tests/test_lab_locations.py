"""Tests for the lab directory."""

from testosterone_suite.domain.labs import CityLabCount, LabLocation
from testosterone_suite.services.lab_locations import (
    UNKNOWN_HOURS,
    LabDirectoryService,
    count_labs_by_city,
    format_working_hours,
    search_labs,
)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")


def _lab(name: str, city: str, address: str = "ул. Тест 1") -> LabLocation:
    return LabLocation(name=name, city=city, address=address, phone="-", hours="-")


def test_format_working_hours_collapses_weekdays() -> None:
    hours = {day: "07:00-19:00" for day in WEEKDAYS}
    hours.update(saturday="08:00-12:00", sunday="Затворено")

    assert format_working_hours(hours) == "Пон-Пет: 07:00-19:00, Съб: 08:00-12:00"


def test_format_working_hours_falls_back_to_first_weekday() -> None:
    hours = {"monday": "07:00-15:00", "tuesday": "07:00-19:00"}

    assert format_working_hours(hours) == "07:00-15:00"
    assert format_working_hours({"tuesday": "08:00-16:00"}) == "08:00-16:00"


def test_format_working_hours_without_data() -> None:
    assert format_working_hours(None) == UNKNOWN_HOURS
    assert format_working_hours({}) == UNKNOWN_HOURS
    assert format_working_hours({"saturday": "08:00-12:00"}) == UNKNOWN_HOURS


def test_search_labs_matches_name_or_address() -> None:
    labs = [
        _lab("Цибалаб", "София", "бул. Витоша 100"),
        _lab("Рамус", "Пловдив", "ул. Гладстон 12"),
    ]

    assert search_labs(labs, "ЦИБА") == [labs[0]]
    assert search_labs(labs, "гладстон") == [labs[1]]
    assert search_labs(labs, "  ") == labs


def test_count_labs_by_city_is_sorted() -> None:
    labs = [_lab("A", "София"), _lab("B", "Варна"), _lab("C", "София")]

    assert count_labs_by_city(labs) == [
        CityLabCount(city="Варна", count=1),
        CityLabCount(city="София", count=2),
    ]


def test_directory_service(lab_location_repository) -> None:
    service = LabDirectoryService(lab_location_repository)

    assert [lab.name for lab in service.list_labs()] == ["Рамус", "Бодимед", "Цибалаб"]
    assert [lab.name for lab in service.list_labs(city="София")] == [
        "Бодимед",
        "Цибалаб",
    ]
    assert [lab.name for lab in service.list_labs(city="София", query="витоша")] == [
        "Цибалаб"
    ]
    assert service.list_labs(city="Русе") == []
    assert service.cities() == [
        CityLabCount(city="Пловдив", count=1),
        CityLabCount(city="София", count=2),
    ]
