"""Daily habit logging service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.habits import DailyHabitLog
from fitness_tracker.services.validation import require_non_negative

_logger = logging.getLogger(__name__)


class HabitRepository(Protocol):
    """Persistence interface for daily habit logs."""

    def list_habit_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyHabitLog]:
        """Return habit logs with ``start <= day <= end``."""

    def get_habit_log(self, user_id: UUID, day: date) -> DailyHabitLog | None:
        """Return the habit log for a single day, if any."""

    def upsert_habit_log(self, user_id: UUID, log: DailyHabitLog) -> DailyHabitLog:
        """Create or replace the habit log for ``log.day``."""


@dataclass
class HabitService:
    """Service for logging protein and steps."""

    repository: HabitRepository

    def log_habits(
        self,
        user_id: UUID,
        day: date,
        protein_g: float | None,
        steps: float | None,
    ) -> DailyHabitLog:
        """Validate and store the habits for ``day``; None leaves a value unlogged."""
        if protein_g is not None:
            protein_g = require_non_negative(protein_g, "protein")
        if steps is not None:
            steps = require_non_negative(steps, "steps")
        log = DailyHabitLog(
            day=day,
            protein_g=protein_g,
            steps=round(steps) if steps is not None else None,
        )
        saved = self.repository.upsert_habit_log(user_id, log)
        _logger.info(
            "Habits logged: user_id=%s day=%s protein_g=%s steps=%s",
            user_id,
            day,
            saved.protein_g,
            saved.steps,
        )
        return saved

    def update_day(
        self,
        user_id: UUID,
        day: date,
        protein_g: float | None,
        steps: float | None,
    ) -> DailyHabitLog:
        """Log habits for ``day``; None keeps whatever is already stored."""
        stored = self.repository.get_habit_log(user_id, day)
        if stored is not None:
            if protein_g is None:
                protein_g = stored.protein_g
            if steps is None:
                steps = stored.steps
        return self.log_habits(user_id, day, protein_g, steps)

    def get_day(self, user_id: UUID, day: date) -> DailyHabitLog | None:
        """Return the habit log for ``day``."""
        return self.repository.get_habit_log(user_id, day)

