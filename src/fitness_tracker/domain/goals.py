"""Goal profile and goal mode."""

from dataclasses import dataclass
from enum import Enum

DEFAULT_PROTEIN_GOAL_G = 120
DEFAULT_STEPS_GOAL = 8000


class GoalMode(Enum):
    """User-selected training goal."""

    FAT_LOSS = "fat_loss"
    MAINTENANCE = "maintenance"
    LEAN_GAIN = "lean_gain"

    @property
    def label(self) -> str:
        """Human-readable name."""
        return self.value.replace("_", " ")


DEFAULT_GOAL_MODE = GoalMode.MAINTENANCE


@dataclass(frozen=True)
class GoalProfile:
    """Daily protein and steps targets."""

    protein_goal_g: float
    steps_goal: int


def parse_goal_mode(raw: str | None) -> GoalMode | None:
    """Parse a stored or typed goal mode; unknown values return None."""
    if raw is None:
        return None
    normalized = raw.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return GoalMode(normalized)
    except ValueError:
        return None
