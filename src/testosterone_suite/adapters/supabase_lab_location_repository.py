"""Supabase repository for lab locations."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from testosterone_suite.domain.labs import LabLocation
from testosterone_suite.services.lab_locations import (
    LabLocationRepository,
    format_working_hours,
)

NO_PHONE = "Няма данни"

_COLUMNS = (
    "id, name, chain, city, address, phone, website, latitude, longitude, "
    "google_maps_url, working_hours, no_appointment_needed, google_rating, "
    "total_reviews"
)


@dataclass
class SupabaseLabLocationRepository(LabLocationRepository):
    """Supabase implementation reading verified rows of lab_locations_app."""

    client: Client

    def list_verified_labs(self) -> list[LabLocation]:
        """Return every verified lab ordered by city and name."""
        response = (
            self.client.table("lab_locations_app")
            .select(_COLUMNS)
            .eq("verified", True)
            .order("city")
            .order("name")
            .execute()
        )
        return [_parse_location(row) for row in response.data or []]

    def list_labs_by_city(self, city: str) -> list[LabLocation]:
        """Return the verified labs of a city ordered by name."""
        response = (
            self.client.table("lab_locations_app")
            .select(_COLUMNS)
            .eq("city", city)
            .eq("verified", True)
            .order("name")
            .execute()
        )
        return [_parse_location(row) for row in response.data or []]


def _parse_location(row: dict[str, object]) -> LabLocation:
    rating = row.get("google_rating")
    reviews = row.get("total_reviews")
    latitude = row.get("latitude")
    longitude = row.get("longitude")
    return LabLocation(
        id=UUID(row["id"]) if row.get("id") else None,
        name=str(row["name"]),
        chain=row.get("chain") or None,
        city=str(row["city"]),
        address=str(row.get("address") or ""),
        phone=str(row.get("phone") or NO_PHONE),
        hours=format_working_hours(row.get("working_hours")),
        no_appointment=bool(row.get("no_appointment_needed", False)),
        website=row.get("website"),
        google_rating=float(rating) if rating is not None else None,
        total_reviews=int(reviews) if reviews is not None else None,
        google_maps_url=row.get("google_maps_url"),
        latitude=float(latitude) if latitude is not None else None,
        longitude=float(longitude) if longitude is not None else None,
    )
