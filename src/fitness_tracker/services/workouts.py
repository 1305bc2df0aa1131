"""Workout completion service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.workouts import WorkoutCompletion


class WorkoutRepository(Protocol):
    """Persistence interface for workouts."""

    def list_completed_workouts(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WorkoutCompletion]:
        """Return workouts completed within ``[start, end)``."""

    def create_completed_workout(
        self, user_id: UUID, completed_at: datetime
    ) -> WorkoutCompletion:
        """Record a workout that is already complete."""


@dataclass
class WorkoutService:
    """Service for recording finished workouts."""

    repository: WorkoutRepository

    def log_completed(
        self, user_id: UUID, completed_at: datetime | None = None
    ) -> WorkoutCompletion:
        """Record a completed workout, defaulting to the current instant."""
        return self.repository.create_completed_workout(
            user_id, completed_at or datetime.now(tz=UTC)
        )
