"""Supabase repository for weekly check-ins."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.checkins import WeeklyCheckin
from fitness_tracker.services.checkins import CheckinRepository

_COLUMNS = (
    "week_start, weight_kg, note, workouts_completed, "
    "protein_goal_days, steps_goal_days"
)


@dataclass
class SupabaseCheckinRepository(CheckinRepository):
    """Supabase implementation for the weekly_checkins table."""

    client: Client

    def get_weekly_checkin(
        self, user_id: UUID, week_start: date
    ) -> WeeklyCheckin | None:
        """Return the check-in for a week, if one was saved."""
        response = (
            self.client.table("weekly_checkins")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("week_start", week_start.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def upsert_weekly_checkin(
        self, user_id: UUID, checkin: WeeklyCheckin
    ) -> WeeklyCheckin:
        """Create or replace the check-in for its week."""
        response = (
            self.client.table("weekly_checkins")
            .upsert(
                {
                    "user_id": str(user_id),
                    "week_start": checkin.week_start.isoformat(),
                    "weight_kg": checkin.weight_kg,
                    "note": checkin.note,
                    "workouts_completed": checkin.workouts_completed,
                    "protein_goal_days": checkin.protein_goal_days,
                    "steps_goal_days": checkin.steps_goal_days,
                },
                on_conflict="user_id,week_start",
            )
            .execute()
        )
        if not response.data:
            return checkin
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> WeeklyCheckin:
    weight_raw = row.get("weight_kg")
    note_raw = row.get("note")
    return WeeklyCheckin(
        week_start=date.fromisoformat(str(row["week_start"])),
        weight_kg=float(weight_raw) if weight_raw is not None else None,
        note=str(note_raw) if note_raw is not None else None,
        workouts_completed=int(row.get("workouts_completed") or 0),
        protein_goal_days=int(row.get("protein_goal_days") or 0),
        steps_goal_days=int(row.get("steps_goal_days") or 0),
    )
