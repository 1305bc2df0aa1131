"""Domain models for daily habits."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyHabitLog:
    """Protein and steps logged for a single day.

    ``None`` means the value was not logged, which is distinct from ``0``.
    """

    day: date
    protein_g: float | None
    steps: int | None
