"""Supabase repository for goal profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.goals import (
    DEFAULT_PROTEIN_GOAL_G,
    DEFAULT_STEPS_GOAL,
    GoalProfile,
)
from fitness_tracker.services.goals import GoalRepository

_COLUMNS = "id, protein_goal_g, steps_goal"


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation backed by the profiles table."""

    client: Client

    def get_goal_profile(self, user_id: UUID) -> GoalProfile:
        """Return the profile row, inserting defaults when it does not exist."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        created = (
            self.client.table("profiles")
            .insert(
                {
                    "id": str(user_id),
                    "protein_goal_g": DEFAULT_PROTEIN_GOAL_G,
                    "steps_goal": DEFAULT_STEPS_GOAL,
                }
            )
            .execute()
        )
        if not created.data:
            raise RuntimeError("Could not create profile")
        return _parse_row(created.data[0])

    def update_goal_profile(self, user_id: UUID, profile: GoalProfile) -> GoalProfile:
        """Write new goals to the profile row."""
        response = (
            self.client.table("profiles")
            .update(
                {
                    "protein_goal_g": profile.protein_goal_g,
                    "steps_goal": profile.steps_goal,
                }
            )
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update goals")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> GoalProfile:
    return GoalProfile(
        protein_goal_g=float(row.get("protein_goal_g") or DEFAULT_PROTEIN_GOAL_G),
        steps_goal=int(row.get("steps_goal") or DEFAULT_STEPS_GOAL),
    )
