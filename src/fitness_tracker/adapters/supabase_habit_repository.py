"""Supabase repository for daily habit logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.habits import DailyHabitLog
from fitness_tracker.services.habits import HabitRepository

_COLUMNS = "date, protein_g, steps"


@dataclass
class SupabaseHabitRepository(HabitRepository):
    """Supabase implementation for the habits_daily table."""

    client: Client

    def list_habit_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyHabitLog]:
        """Return habit logs in the inclusive date range."""
        response = (
            self.client.table("habits_daily")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_habit_log(self, user_id: UUID, day: date) -> DailyHabitLog | None:
        """Return the habit log for one day."""
        response = (
            self.client.table("habits_daily")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def upsert_habit_log(self, user_id: UUID, log: DailyHabitLog) -> DailyHabitLog:
        """Create or replace the row for the log's date."""
        response = (
            self.client.table("habits_daily")
            .upsert(
                {
                    "user_id": str(user_id),
                    "date": log.day.isoformat(),
                    "protein_g": log.protein_g,
                    "steps": log.steps,
                },
                on_conflict="user_id,date",
            )
            .execute()
        )
        # Some PostgREST setups return no representation for upserts.
        if not response.data:
            return log
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> DailyHabitLog:
    protein_raw = row.get("protein_g")
    steps_raw = row.get("steps")
    return DailyHabitLog(
        day=date.fromisoformat(str(row["date"])),
        protein_g=float(protein_raw) if protein_raw is not None else None,
        steps=int(steps_raw) if steps_raw is not None else None,
    )
