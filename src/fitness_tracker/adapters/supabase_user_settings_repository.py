"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the stored timezone for a user."""
        return self._get_column(user_id, "timezone")

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""
        self._update(user_id, {"timezone": timezone})

    def get_goal_mode(self, user_id: UUID) -> str | None:
        """Return the stored goal mode for a user."""
        return self._get_column(user_id, "goal_mode")

    def set_goal_mode(self, user_id: UUID, goal_mode: str) -> None:
        """Update the user's goal mode."""
        self._update(user_id, {"goal_mode": goal_mode})

    def _get_column(self, user_id: UUID, column: str) -> str | None:
        response = (
            self.client.table("user_settings")
            .select(column)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get(column)
        return str(value) if value is not None else None

    def _update(self, user_id: UUID, values: dict[str, object]) -> None:
        self.client.table("user_settings").update(
            {**values, "updated_at": datetime.now(tz=UTC).isoformat()}
        ).eq("user_id", str(user_id)).execute()
