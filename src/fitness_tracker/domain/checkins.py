"""Domain models for weekly check-ins."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WeeklyCheckin:
    """End-of-week check-in keyed by the Monday that starts the week."""

    week_start: date
    weight_kg: float | None
    note: str | None
    workouts_completed: int = 0
    protein_goal_days: int = 0
    steps_goal_days: int = 0
