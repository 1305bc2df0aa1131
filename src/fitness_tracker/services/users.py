"""User onboarding and activity tracking."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.goals import DEFAULT_GOAL_MODE
from fitness_tracker.domain.models import UserRecord

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for users."""

    def get_by_telegram_id(self, telegram_user_id: int) -> UserRecord | None:
        """Return the user for a Telegram user id, if present."""

    def create_user(self, telegram_user_id: int) -> UserRecord:
        """Create and return a new user record."""

    def create_settings(
        self, user_id: UUID, timezone: str | None, goal_mode: str
    ) -> None:
        """Create the settings row for a new user."""

    def touch_last_active(self, user_id: UUID) -> None:
        """Update the last active timestamp for the user."""


@dataclass
class UserService:
    """Creates users on first contact and keeps them marked active."""

    repository: UserRepository

    def ensure_user(self, telegram_user_id: int) -> UserRecord:
        """Return the user for ``telegram_user_id``, creating it on first contact.

        New users start without a timezone and in the default goal mode.
        """
        existing = self.repository.get_by_telegram_id(telegram_user_id)
        if existing:
            self.repository.touch_last_active(existing.id)
            return existing

        created = self.repository.create_user(telegram_user_id)
        self.repository.create_settings(
            created.id, timezone=None, goal_mode=DEFAULT_GOAL_MODE.value
        )
        _logger.info("User created: user_id=%s", created.id)
        return created
