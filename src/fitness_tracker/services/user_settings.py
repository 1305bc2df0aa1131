"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.goals import DEFAULT_GOAL_MODE, GoalMode, parse_goal_mode


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the user's timezone if set."""

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""

    def get_goal_mode(self, user_id: UUID) -> str | None:
        """Return the stored goal mode value if set."""

    def set_goal_mode(self, user_id: UUID, goal_mode: str) -> None:
        """Update the user's goal mode."""


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or UTC if unset."""
        return self.repository.get_timezone(user_id) or "UTC"

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Persist a user's timezone."""
        self.repository.set_timezone(user_id, timezone)

    def is_timezone_set(self, user_id: UUID) -> bool:
        """Return True when the user's timezone is configured."""
        return self.repository.get_timezone(user_id) is not None

    def get_goal_mode(self, user_id: UUID) -> GoalMode:
        """Return the user's goal mode, maintenance when unset or unknown."""
        return parse_goal_mode(self.repository.get_goal_mode(user_id)) or (
            DEFAULT_GOAL_MODE
        )

    def set_goal_mode(self, user_id: UUID, goal_mode: GoalMode) -> None:
        """Persist a user's goal mode."""
        self.repository.set_goal_mode(user_id, goal_mode.value)
