"""Domain models for goal adjustments."""

from dataclasses import dataclass, field

from fitness_tracker.domain.goals import GoalMode, GoalProfile
from fitness_tracker.domain.progress import WeeklyStats


@dataclass(frozen=True)
class AdjustmentResult:
    """Proposed next-week targets with the reasons behind them."""

    next_protein_goal_g: float
    next_steps_goal: int
    weight_delta_kg: float | None
    reasons: list[str] = field(default_factory=list)

    def as_profile(self) -> GoalProfile:
        """Return the proposal as a goal profile."""
        return GoalProfile(
            protein_goal_g=self.next_protein_goal_g,
            steps_goal=self.next_steps_goal,
        )


@dataclass(frozen=True)
class WeeklyReport:
    """This week's stats, current goals and the proposed adjustment."""

    stats: WeeklyStats
    goals: GoalProfile
    goal_mode: GoalMode
    current_weight_kg: float | None
    previous_weight_kg: float | None
    adjustment: AdjustmentResult
