"""Supabase repository for sleep logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from testosterone_suite.domain.sleep import SleepLog
from testosterone_suite.services.sleep import SleepLogRepository


@dataclass
class SupabaseSleepLogRepository(SleepLogRepository):
    """Supabase implementation for sleep logs."""

    client: Client

    def list_logs(self, user_id: UUID, limit: int) -> list[SleepLog]:
        """Return recent logs, newest first."""
        response = (
            self.client.table("sleep_logs_app")
            .select("id, log_date, bedtime, waketime, quality, hours, notes")
            .eq("user_id", str(user_id))
            .order("log_date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_log(row) for row in response.data or []]

    def upsert_log(self, user_id: UUID, log: SleepLog) -> SleepLog:
        """Insert or replace the log for its date."""
        response = (
            self.client.table("sleep_logs_app")
            .upsert(
                {
                    "user_id": str(user_id),
                    "log_date": log.date.isoformat(),
                    "bedtime": log.bedtime,
                    "waketime": log.waketime,
                    "quality": log.quality,
                    "hours": log.hours,
                    "notes": log.notes,
                },
                on_conflict="user_id,log_date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save sleep log")
        return _parse_log(response.data[0])

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete a log owned by the user."""
        self.client.table("sleep_logs_app").delete().eq("id", str(log_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_log(row: dict[str, object]) -> SleepLog:
    return SleepLog(
        id=UUID(row["id"]),
        date=date.fromisoformat(str(row["log_date"])),
        bedtime=str(row["bedtime"])[:5],
        waketime=str(row["waketime"])[:5],
        quality=int(row["quality"]),
        hours=float(row.get("hours") or 0.0),
        notes=row.get("notes"),
    )
