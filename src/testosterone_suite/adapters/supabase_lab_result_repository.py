"""Supabase repository for lab results."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from testosterone_suite.domain.labs import LabResult
from testosterone_suite.services.labs import LabResultRepository


@dataclass
class SupabaseLabResultRepository(LabResultRepository):
    """Supabase implementation for lab results."""

    client: Client

    def list_results(self, user_id: UUID) -> list[LabResult]:
        """Return a user's results, newest first."""
        response = (
            self.client.table("lab_results_app")
            .select("id, test_date, total_t, free_t, shbg, estradiol, lh, notes")
            .eq("user_id", str(user_id))
            .order("test_date", desc=True)
            .execute()
        )
        return [_parse_result(row) for row in response.data or []]

    def create_result(self, user_id: UUID, result: LabResult) -> LabResult:
        """Insert a result row."""
        response = (
            self.client.table("lab_results_app")
            .insert(
                {
                    "user_id": str(user_id),
                    "test_date": result.test_date.isoformat(),
                    "total_t": result.total_t,
                    "free_t": result.free_t,
                    "shbg": result.shbg,
                    "estradiol": result.estradiol,
                    "lh": result.lh,
                    "notes": result.notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create lab result")
        return _parse_result(response.data[0])

    def delete_result(self, user_id: UUID, result_id: UUID) -> None:
        """Delete a result owned by the user."""
        self.client.table("lab_results_app").delete().eq("id", str(result_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_result(row: dict[str, object]) -> LabResult:
    return LabResult(
        id=UUID(row["id"]),
        test_date=date.fromisoformat(str(row["test_date"])),
        total_t=float(row["total_t"]),
        free_t=_optional_float(row.get("free_t")),
        shbg=_optional_float(row.get("shbg")),
        estradiol=_optional_float(row.get("estradiol")),
        lh=_optional_float(row.get("lh")),
        notes=row.get("notes"),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
