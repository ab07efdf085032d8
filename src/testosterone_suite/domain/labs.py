"""Domain models for lab results and lab locations."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class LabResult:
    """A hormone panel result."""

    test_date: date
    total_t: float
    free_t: float | None = None
    shbg: float | None = None
    estradiol: float | None = None
    lh: float | None = None
    notes: str | None = None
    id: UUID | None = None


@dataclass(frozen=True)
class InterpretationInput:
    """Values needed to interpret a result."""

    age: int
    total_t: float
    free_t: float | None = None
    shbg: float | None = None
    estradiol: float | None = None


@dataclass(frozen=True)
class InterpretationResult:
    """Interpretation of a lab result for an age range."""

    status: str
    status_label: str
    total_t_status: str
    age_range: str
    optimal_range: tuple[int, int]
    recommendations: list[str]
    free_t_status: str | None = None
    shbg_status: str | None = None
    estradiol_status: str | None = None


@dataclass(frozen=True)
class LabImprovement:
    """Change in total testosterone between the first and last result."""

    first: float
    last: float
    change: float
    change_percent: float


@dataclass(frozen=True)
class LabLocation:
    """A laboratory where a hormone panel can be taken."""

    name: str
    city: str
    address: str
    phone: str
    hours: str
    no_appointment: bool = False
    chain: str | None = None
    website: str | None = None
    google_rating: float | None = None
    total_reviews: int | None = None
    google_maps_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    id: UUID | None = None


@dataclass(frozen=True)
class CityLabCount:
    """Number of verified labs in a city."""

    city: str
    count: int
