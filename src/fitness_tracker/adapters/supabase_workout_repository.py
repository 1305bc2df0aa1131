"""Supabase repository for workouts."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.workouts import WorkoutCompletion
from fitness_tracker.services.workouts import WorkoutRepository


@dataclass
class SupabaseWorkoutRepository(WorkoutRepository):
    """Supabase implementation for the workouts table."""

    client: Client

    def list_completed_workouts(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WorkoutCompletion]:
        """Return workouts completed in ``[start, end)``."""
        response = (
            self.client.table("workouts")
            .select("id, completed_at")
            .eq("user_id", str(user_id))
            .gte("completed_at", start.isoformat())
            .lt("completed_at", end.isoformat())
            .order("completed_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def create_completed_workout(
        self, user_id: UUID, completed_at: datetime
    ) -> WorkoutCompletion:
        """Insert a workout row that is already complete."""
        response = (
            self.client.table("workouts")
            .insert(
                {
                    "user_id": str(user_id),
                    "started_at": completed_at.isoformat(),
                    "completed_at": completed_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create workout")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> WorkoutCompletion:
    completed_raw = row.get("completed_at")
    completed_at = (
        datetime.fromisoformat(completed_raw)
        if isinstance(completed_raw, str) and completed_raw
        else None
    )
    return WorkoutCompletion(id=UUID(str(row["id"])), completed_at=completed_at)
