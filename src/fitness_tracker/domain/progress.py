"""Domain models for weekly progress."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class Grade(Enum):
    """Weekly consistency grade, lowest first."""

    STARTER = "starter"
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"

    @property
    def rank(self) -> int:
        """Ordinal position, starter is 0."""
        return list(Grade).index(self)


@dataclass(frozen=True)
class WeekWindow:
    """Monday-to-Sunday date range, both ends inclusive."""

    week_start: date
    week_end: date


@dataclass(frozen=True)
class WeeklyStats:
    """Aggregated habits and workouts for one week."""

    week_start: date
    week_end: date
    workouts_completed: int
    protein_days_logged: int
    protein_days_hit: int
    steps_days_logged: int
    steps_days_hit: int
    grade: Grade
