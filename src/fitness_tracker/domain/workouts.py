"""Domain models for workouts."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class WorkoutCompletion:
    """A workout row; only rows with ``completed_at`` set count as completed."""

    id: UUID
    completed_at: datetime | None
