"""Goal profile service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.adjustment import AdjustmentResult
from fitness_tracker.domain.goals import GoalProfile
from fitness_tracker.services.validation import require_positive

_logger = logging.getLogger(__name__)


class GoalRepository(Protocol):
    """Persistence interface for goal profiles."""

    def get_goal_profile(self, user_id: UUID) -> GoalProfile:
        """Return the user's goal profile, creating the default one if missing."""

    def update_goal_profile(self, user_id: UUID, profile: GoalProfile) -> GoalProfile:
        """Replace the user's goal profile."""


@dataclass
class GoalService:
    """Service for reading and changing daily targets."""

    repository: GoalRepository

    def get_profile(self, user_id: UUID) -> GoalProfile:
        """Return the current goal profile."""
        return self.repository.get_goal_profile(user_id)

    def update_goals(
        self, user_id: UUID, protein_goal_g: float, steps_goal: float
    ) -> GoalProfile:
        """Validate, round and store new daily targets."""
        require_positive(protein_goal_g, "protein goal")
        require_positive(steps_goal, "steps goal")
        profile = GoalProfile(
            protein_goal_g=round(protein_goal_g),
            steps_goal=round(steps_goal),
        )
        return self.repository.update_goal_profile(user_id, profile)

    def apply_adjustment(
        self, user_id: UUID, adjustment: AdjustmentResult
    ) -> GoalProfile:
        """Store a proposed adjustment as the user's goal profile."""
        return self.apply_targets(user_id, adjustment.as_profile())

    def apply_targets(self, user_id: UUID, proposal: GoalProfile) -> GoalProfile:
        """Store previously proposed targets as they are."""
        require_positive(proposal.protein_goal_g, "protein goal")
        require_positive(proposal.steps_goal, "steps goal")
        saved = self.repository.update_goal_profile(user_id, proposal)
        _logger.info(
            "Adjustment applied: user_id=%s protein_goal_g=%s steps_goal=%s",
            user_id,
            saved.protein_goal_g,
            saved.steps_goal,
        )
        return saved
