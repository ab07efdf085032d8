"""Testosterone lab result interpretation and tracking."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from testosterone_suite.domain.labs import (
    InterpretationInput,
    InterpretationResult,
    LabImprovement,
    LabResult,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceRange:
    """Total testosterone reference values in ng/dL."""

    optimal_min: int
    optimal_max: int
    low: int


REFERENCE_RANGES: dict[str, ReferenceRange] = {
    "20-30": ReferenceRange(600, 900, 300),
    "30-40": ReferenceRange(500, 800, 270),
    "40-50": ReferenceRange(450, 700, 250),
    "50+": ReferenceRange(400, 600, 230),
}

FREE_T_RANGE = (9, 30)
SHBG_RANGE = (10, 50)
ESTRADIOL_RANGE = (10, 40)


class LabResultRepository(Protocol):
    """Persistence interface for lab results."""

    def list_results(self, user_id: UUID) -> list[LabResult]:
        """Return the user's results, newest first."""

    def create_result(self, user_id: UUID, result: LabResult) -> LabResult:
        """Store a result and return it with its id."""

    def delete_result(self, user_id: UUID, result_id: UUID) -> None:
        """Delete a result owned by the user."""


def age_range(age: int) -> str:
    """Return the reference bracket for an age."""
    if age <= 30:
        return "20-30"
    if age <= 40:
        return "30-40"
    if age <= 50:
        return "40-50"
    return "50+"


def interpret_results(data: InterpretationInput) -> InterpretationResult:
    """Classify a hormone panel against age-specific ranges."""
    bracket = age_range(data.age)
    reference = REFERENCE_RANGES[bracket]
    total = _format_value(data.total_t)
    optimal = f"{reference.optimal_min}-{reference.optimal_max} ng/dL"

    if data.total_t < reference.low:
        status, label = "low", "Нисък"
        total_status = f"{total} ng/dL - НИСЪК (под {reference.low} ng/dL)"
    elif data.total_t < reference.optimal_min:
        status, label = "suboptimal", "Субоптимален"
        total_status = f"{total} ng/dL - Субоптимален (под оптималния {optimal})"
    elif data.total_t <= reference.optimal_max:
        status, label = "optimal", "Оптимален"
        total_status = f"{total} ng/dL - ОПТИМАЛЕН"
    else:
        status, label = "optimal", "Над оптималния"
        total_status = f"{total} ng/dL - НАД оптималния {optimal}"

    return InterpretationResult(
        status=status,
        status_label=label,
        total_t_status=total_status,
        age_range=bracket,
        optimal_range=(reference.optimal_min, reference.optimal_max),
        recommendations=_recommendations(status, data),
        free_t_status=_free_t_status(data.free_t),
        shbg_status=_shbg_status(data.shbg),
        estradiol_status=_estradiol_status(data.estradiol),
    )


def calculate_improvement(results: list[LabResult]) -> LabImprovement | None:
    """Return the total T change between the oldest and newest result."""
    if len(results) < 2:
        return None
    ordered = sorted(results, key=lambda result: result.test_date)
    first = ordered[0].total_t
    last = ordered[-1].total_t
    change = last - first
    return LabImprovement(
        first=first,
        last=last,
        change=change,
        change_percent=change / first * 100 if first else 0.0,
    )


def _free_t_status(value: float | None) -> str | None:
    if value is None:
        return None
    low, high = FREE_T_RANGE
    shown = _format_value(value)
    if value < low:
        return f"{shown} pg/mL - НИСЪК (норма: {low}-{high} pg/mL)"
    if value <= high:
        return f"{shown} pg/mL - Нормален"
    return f"{shown} pg/mL - НАД нормата"


def _shbg_status(value: float | None) -> str | None:
    if value is None:
        return None
    low, high = SHBG_RANGE
    shown = _format_value(value)
    if value < low:
        return f"{shown} nmol/L - НИСЪК (може да намали Free T)"
    if value <= high:
        return f"{shown} nmol/L - Нормален"
    return f"{shown} nmol/L - ВИСОК (намалява Free T)"


def _estradiol_status(value: float | None) -> str | None:
    if value is None:
        return None
    low, high = ESTRADIOL_RANGE
    shown = _format_value(value)
    if value < low:
        return f"{shown} pg/mL - НИСЪК"
    if value <= high:
        return f"{shown} pg/mL - Оптимален"
    return f"{shown} pg/mL - ВИСОК (може да се нуждае от контрол)"


def _recommendations(status: str, data: InterpretationInput) -> list[str]:
    if status == "low":
        recommendations = [
            "Консултация с ендокринолог е препоръчителна",
            "Фокус върху основните: сън 7-9 часа, тежки тренировки, "
            "храна с достатъчно мазнини",
            "Избягвай алкохол, обработена храна и стрес",
        ]
    elif status == "suboptimal":
        recommendations = [
            "Има място за подобрение с правилни навици",
            "Увеличи приема на цинк (15-30 мг), витамин D3 (4000 IU) "
            "и магнезий (400 мг)",
            "Добави многоставни упражнения: клякания, мъртва тяга, лежанка",
            "Оптимизирай съня: 7-9 часа, тъмна стая, без екрани 2 часа преди сън",
        ]
    else:
        recommendations = [
            "Отличен резултат! Продължавай в същата посока",
            "Поддържай редовни тренировки и качествен сън",
            "Следи нивата периодично (на всеки 3-6 месеца)",
        ]
    if data.shbg is not None and data.shbg > SHBG_RANGE[1]:
        recommendations.append(
            "Високото SHBG намалява свободния тестостерон. "
            "Помагат: бор, крапива, магнезий"
        )
    if data.estradiol is not None and data.estradiol > ESTRADIOL_RANGE[1]:
        recommendations.append(
            "Високият естрадиол може да се контролира с добавки: "
            "DIM, цинк, витамин E"
        )
    return recommendations


def _format_value(value: float) -> str:
    return f"{value:g}"


@dataclass
class LabResultService:
    """Service for storing and interpreting a user's lab results."""

    repository: LabResultRepository

    def add_result(self, user_id: UUID, result: LabResult) -> LabResult:
        """Store a new result."""
        stored = self.repository.create_result(user_id, result)
        _logger.info(
            "Stored lab result user_id=%s test_date=%s", user_id, result.test_date
        )
        return stored

    def list_results(self, user_id: UUID) -> list[LabResult]:
        """Return results newest first."""
        results = self.repository.list_results(user_id)
        return sorted(results, key=lambda result: result.test_date, reverse=True)

    def delete_result(self, user_id: UUID, result_id: UUID) -> None:
        """Delete one of the user's results."""
        self.repository.delete_result(user_id, result_id)

    def interpret_latest(
        self, user_id: UUID, age: int
    ) -> InterpretationResult | None:
        """Interpret the newest stored result for the given age."""
        results = self.list_results(user_id)
        if not results:
            return None
        latest = results[0]
        return interpret_results(
            InterpretationInput(
                age=age,
                total_t=latest.total_t,
                free_t=latest.free_t,
                shbg=latest.shbg,
                estradiol=latest.estradiol,
            )
        )

    def improvement(self, user_id: UUID) -> LabImprovement | None:
        """Return the change across the user's results."""
        return calculate_improvement(self.repository.list_results(user_id))
