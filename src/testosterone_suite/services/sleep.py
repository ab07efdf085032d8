"""Sleep protocol: evening routine, bedroom checklist and sleep log stats."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from testosterone_suite.domain.sleep import (
    BedroomChecklistItem,
    RoutineStep,
    SleepAssessment,
    SleepLog,
    SleepStats,
)

_logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
DEFAULT_LOG_LIMIT = 30

# (minutes before bedtime, title, description, icon)
_ROUTINE: tuple[tuple[int, str, str, str], ...] = (
    (
        120,
        "Спри екраните",
        "Изключи телефона, компютъра и телевизора. "
        "Синята светлина блокира мелатонина.",
        "screen-off",
    ),
    (
        90,
        "Хранителни добавки",
        "Вземи Melatonin 5mg + Magnesium 400mg за подобряване на качеството на съня.",
        "pill",
    ),
    (
        70,
        "Леко разтягане",
        "10-15 минути леко разтягане или йога за релаксация на мускулите.",
        "stretch",
    ),
    (
        60,
        "Топъл душ/вана",
        "Топлата вода помага за релаксация. Спадането на температурата след "
        "душа подготвя тялото за сън.",
        "shower",
    ),
    (
        30,
        "Четене или медитация",
        "Прочети книга (не от екран) или медитирай 10-20 минути.",
        "book",
    ),
    (
        15,
        "Подготви спалнята",
        "Провери температурата (18-20°C), тъмнината и проветри стаята.",
        "bed-prep",
    ),
    (
        0,
        "Лягай",
        "Време е за сън. Спалнята е оптимизирана и тялото ти е готово.",
        "sleep",
    ),
)

_CHECKLIST: tuple[tuple[str, str, str], ...] = (
    (
        "darkness",
        "Пълна тъмнина",
        "Плътни завеси или маска за сън. Дори малка светлина намалява мелатонина.",
    ),
    (
        "temperature",
        "Оптимална температура",
        "18-20°C е идеалната температура за дълбок сън.",
    ),
    (
        "electronics",
        "Без електроника",
        "Премахни всички устройства или ги постави на 2+ метра от леглото.",
    ),
    (
        "phone",
        "Телефон извън стаята",
        "Постави телефона в друга стая или използвай будилник вместо телефона.",
    ),
    (
        "mattress",
        "Качествен матрак",
        "Матракът трябва да е удобен и не по-стар от 7-10 години.",
    ),
    (
        "bedding",
        "Качествено спално бельо",
        "Памучни или бамбукови материи, които дишат.",
    ),
    (
        "noise",
        "Бял шум или вентилатор",
        "Помага за маскиране на външни звуци и създава равномерен фон.",
    ),
    (
        "clutter",
        "Без безпорядък",
        "Чиста и подредена стая намалява стреса и подобрява съня.",
    ),
    (
        "eye-mask",
        "Маска за сън",
        "Ако не можеш да постигнеш пълна тъмнина, използвай удобна маска.",
    ),
    (
        "air-quality",
        "Чист въздух",
        "Проветри преди сън или използвай въздухопречиствател.",
    ),
)


class SleepLogRepository(Protocol):
    """Persistence interface for sleep logs."""

    def list_logs(self, user_id: UUID, limit: int) -> list[SleepLog]:
        """Return the user's most recent logs, newest first."""

    def upsert_log(self, user_id: UUID, log: SleepLog) -> SleepLog:
        """Store the log for its date, replacing an earlier one."""

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete a log owned by the user."""


def parse_clock(value: str) -> int:
    """Return minutes after midnight for an HH:MM string."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def format_clock(total_minutes: int) -> str:
    """Format minutes after midnight as HH:MM, wrapping around the day."""
    hours, minutes = divmod(total_minutes % MINUTES_PER_DAY, 60)
    return f"{hours:02d}:{minutes:02d}"


def generate_evening_routine(assessment: SleepAssessment) -> list[RoutineStep]:
    """Build the evening routine counted back from bedtime."""
    bedtime = parse_clock(assessment.bedtime)
    return [
        RoutineStep(
            time=format_clock(bedtime - offset),
            title=title,
            description=description,
            icon=icon,
        )
        for offset, title, description, icon in _ROUTINE
    ]


def default_checklist_items() -> list[BedroomChecklistItem]:
    """Return the bedroom checklist with nothing completed."""
    return [
        BedroomChecklistItem(id=item_id, title=title, description=description)
        for item_id, title, description in _CHECKLIST
    ]


def calculate_sleep_hours(bedtime: str, waketime: str) -> float:
    """Return hours slept, assuming the next day when waking is earlier."""
    start = parse_clock(bedtime)
    end = parse_clock(waketime)
    if end < start:
        end += MINUTES_PER_DAY
    return round((end - start) / 60, 1)


def calculate_sleep_stats(logs: list[SleepLog]) -> SleepStats:
    """Average quality and hours over the 7 and 30 most recent nights."""
    ordered = sorted(logs, key=lambda log: log.date, reverse=True)
    last_7 = ordered[:7]
    last_30 = ordered[:30]
    return SleepStats(
        avg_7_day_quality=_average([log.quality for log in last_7]),
        avg_7_day_hours=_average([log.hours for log in last_7]),
        avg_30_day_quality=_average([log.quality for log in last_30]),
        avg_30_day_hours=_average([log.hours for log in last_30]),
    )


def _average(values: list[float]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), 1)


@dataclass
class SleepLogService:
    """Service for logging nights and summarizing sleep."""

    repository: SleepLogRepository

    def log_night(self, user_id: UUID, log: SleepLog) -> SleepLog:
        """Store a night with hours derived from its times."""
        hours = calculate_sleep_hours(log.bedtime, log.waketime)
        stored = self.repository.upsert_log(user_id, replace(log, hours=hours))
        _logger.info(
            "Logged sleep user_id=%s date=%s hours=%s", user_id, log.date, hours
        )
        return stored

    def list_logs(self, user_id: UUID, limit: int = DEFAULT_LOG_LIMIT) -> list[SleepLog]:
        """Return recent logs, newest first."""
        return self.repository.list_logs(user_id, limit)

    def stats(self, user_id: UUID) -> SleepStats:
        """Return rolling averages over the last 30 logs."""
        return calculate_sleep_stats(self.repository.list_logs(user_id, 30))

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete one of the user's logs."""
        self.repository.delete_log(user_id, log_id)
