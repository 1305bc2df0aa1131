"""Weekly check-ins and the weekly report built on them."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.adjustment import WeeklyReport
from fitness_tracker.domain.checkins import WeeklyCheckin
from fitness_tracker.domain.goals import GoalMode
from fitness_tracker.services.adjustment import compute_adjustment
from fitness_tracker.services.goals import GoalRepository
from fitness_tracker.services.progress import ProgressService
from fitness_tracker.services.validation import require_positive

_logger = logging.getLogger(__name__)


class CheckinRepository(Protocol):
    """Persistence interface for weekly check-ins."""

    def get_weekly_checkin(
        self, user_id: UUID, week_start: date
    ) -> WeeklyCheckin | None:
        """Return the check-in for the week starting at ``week_start``."""

    def upsert_weekly_checkin(
        self, user_id: UUID, checkin: WeeklyCheckin
    ) -> WeeklyCheckin:
        """Create or replace the check-in for ``checkin.week_start``."""


@dataclass
class CheckinService:
    """Service for weekly check-ins and next-week proposals."""

    repository: CheckinRepository
    progress_service: ProgressService
    goal_repository: GoalRepository

    def save_checkin(
        self,
        user_id: UUID,
        weight_kg: float | None,
        note: str | None,
        timezone_name: str,
        now: datetime | None = None,
    ) -> WeeklyCheckin:
        """Store this week's check-in together with this week's counters.

        A missing weight or note keeps the one already saved for the week.
        """
        if weight_kg is not None:
            require_positive(weight_kg, "weight")
        [stats] = self.progress_service.compute_weekly_stats(
            user_id, 1, timezone_name, now=now
        )
        note = (note or "").strip() or None
        stored = self.repository.get_weekly_checkin(user_id, stats.week_start)
        if stored is not None:
            weight_kg = stored.weight_kg if weight_kg is None else weight_kg
            note = note or stored.note
        checkin = WeeklyCheckin(
            week_start=stats.week_start,
            weight_kg=weight_kg,
            note=note,
            workouts_completed=stats.workouts_completed,
            protein_goal_days=stats.protein_days_hit,
            steps_goal_days=stats.steps_days_hit,
        )
        saved = self.repository.upsert_weekly_checkin(user_id, checkin)
        _logger.info(
            "Check-in saved: user_id=%s week_start=%s weight_kg=%s",
            user_id,
            saved.week_start,
            saved.weight_kg,
        )
        return saved

    def get_checkin(self, user_id: UUID, week_start: date) -> WeeklyCheckin | None:
        """Return the check-in for a week, if any."""
        return self.repository.get_weekly_checkin(user_id, week_start)

    def weekly_report(
        self,
        user_id: UUID,
        timezone_name: str,
        goal_mode: GoalMode,
        now: datetime | None = None,
    ) -> WeeklyReport:
        """Grade the current week and propose next week's targets."""
        [stats] = self.progress_service.compute_weekly_stats(
            user_id, 1, timezone_name, now=now
        )
        goals = self.goal_repository.get_goal_profile(user_id)
        current_weight = self._checkin_weight(user_id, stats.week_start)
        previous_weight = self._checkin_weight(
            user_id, stats.week_start - timedelta(weeks=1)
        )
        adjustment = compute_adjustment(
            this_week=stats,
            goals=goals,
            curr_weight_kg=current_weight,
            prev_weight_kg=previous_weight,
            goal=goal_mode,
        )
        return WeeklyReport(
            stats=stats,
            goals=goals,
            goal_mode=goal_mode,
            current_weight_kg=current_weight,
            previous_weight_kg=previous_weight,
            adjustment=adjustment,
        )

    def _checkin_weight(self, user_id: UUID, week_start: date) -> float | None:
        checkin = self.repository.get_weekly_checkin(user_id, week_start)
        if checkin is None:
            return None
        return checkin.weight_kg
