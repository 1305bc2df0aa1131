"""Next-week target adjustments by goal mode.

Each goal mode has one strategy. A strategy looks at this week's adherence
and the week-over-week weight change and proposes new daily protein and
steps targets, with one reason per rule that fired. The low-adherence guard
runs after every strategy and only ever removes increases.
"""

from collections.abc import Callable
from dataclasses import dataclass

from fitness_tracker.domain.adjustment import AdjustmentResult
from fitness_tracker.domain.goals import GoalMode, GoalProfile
from fitness_tracker.domain.progress import WeeklyStats

STEPS_MIN = 3000
STEPS_MAX = 20000
STEPS_SMALL_STEP = 500
STEPS_LARGE_STEP = 1000

FAT_LOSS_FAST_PCT = -0.007
FAT_LOSS_SLOW_PCT = -0.003
FAT_LOSS_PROTEIN_MIN = 100
FAT_LOSS_PROTEIN_MAX = 160
FAT_LOSS_PROTEIN_DOWN = 10
FAT_LOSS_PROTEIN_UP = 5
FAT_LOSS_STEPS_DAYS_TO_PROGRESS = 4
FAT_LOSS_PROTEIN_DAYS_TO_PROGRESS = 5

LEAN_GAIN_SLOW_PCT = 0.001
LEAN_GAIN_FAST_PCT = 0.004
LEAN_GAIN_PROTEIN_MAX = 180
LEAN_GAIN_PROTEIN_UP = 10
LEAN_GAIN_STEPS_FLOOR = 4000
LEAN_GAIN_STEPS_EASE_ABOVE = 5000

MAINTENANCE_DEADBAND_PCT = 0.0025
MAINTENANCE_PROTEIN_MIN = 80
MAINTENANCE_PROTEIN_DOWN = 10

GOOD_ADHERENCE_DAYS = 3
LOW_ADHERENCE_DAYS = 1


@dataclass(frozen=True)
class _WeekContext:
    stats: WeeklyStats
    goals: GoalProfile
    previous_weight_kg: float | None
    delta_kg: float | None
    adherence_good: bool
    adherence_low: bool

    @property
    def weight_change_pct(self) -> float | None:
        """Weekly weight change as a fraction of last week's weight."""
        if (
            self.delta_kg is None
            or self.previous_weight_kg is None
            or self.previous_weight_kg <= 0
        ):
            return None
        return self.delta_kg / self.previous_weight_kg


@dataclass
class _Proposal:
    steps: int
    protein: float
    reasons: list[str]


_Strategy = Callable[[_WeekContext], _Proposal]


def compute_adjustment(
    this_week: WeeklyStats,
    goals: GoalProfile,
    curr_weight_kg: float | None,
    prev_weight_kg: float | None,
    goal: GoalMode,
) -> AdjustmentResult:
    """Propose next week's targets for ``goal``; never writes anything."""
    context = _WeekContext(
        stats=this_week,
        goals=goals,
        previous_weight_kg=prev_weight_kg,
        delta_kg=weight_delta(curr_weight_kg, prev_weight_kg),
        adherence_good=is_adherence_good(this_week),
        adherence_low=is_adherence_low(this_week),
    )
    proposal = _STRATEGIES[goal](context)
    _apply_guard_rail(context, proposal)
    return AdjustmentResult(
        next_protein_goal_g=proposal.protein,
        next_steps_goal=proposal.steps,
        weight_delta_kg=context.delta_kg,
        reasons=proposal.reasons,
    )


def weight_delta(
    curr_weight_kg: float | None, prev_weight_kg: float | None
) -> float | None:
    """Week-over-week weight change, or None without both check-ins."""
    if curr_weight_kg is None or prev_weight_kg is None:
        return None
    return curr_weight_kg - prev_weight_kg


def is_adherence_good(stats: WeeklyStats) -> bool:
    return (
        stats.workouts_completed >= GOOD_ADHERENCE_DAYS
        or stats.steps_days_hit >= GOOD_ADHERENCE_DAYS
    )


def is_adherence_low(stats: WeeklyStats) -> bool:
    return (
        stats.workouts_completed <= LOW_ADHERENCE_DAYS
        and stats.steps_days_hit <= LOW_ADHERENCE_DAYS
    )


def _fat_loss(context: _WeekContext) -> _Proposal:
    steps = context.goals.steps_goal
    protein = context.goals.protein_goal_g
    proposal = _Proposal(steps=steps, protein=protein, reasons=[])
    pct = context.weight_change_pct

    if pct is not None:
        if pct < FAT_LOSS_FAST_PCT:
            proposal.steps = max(STEPS_MIN, steps - STEPS_SMALL_STEP)
            proposal.reasons.append(
                "Weight is dropping fast; easing steps back a little to protect muscle."
            )
        elif pct <= FAT_LOSS_SLOW_PCT:
            proposal.reasons.append("Fat loss is on pace; keep the same targets.")
        elif context.adherence_good:
            proposal.steps = min(STEPS_MAX, steps + STEPS_SMALL_STEP)
            proposal.reasons.append(
                "Weight is not coming down enough; adding 500 steps/day."
            )
        else:
            proposal.reasons.append(
                "Consistency first: hit the current targets before raising them."
            )
    elif (
        context.stats.steps_days_hit >= FAT_LOSS_STEPS_DAYS_TO_PROGRESS
        and context.adherence_good
    ):
        proposal.steps = min(STEPS_MAX, steps + STEPS_SMALL_STEP)
        proposal.reasons.append(
            "Strong week; adding 500 steps/day to keep the cut moving."
        )
    else:
        proposal.reasons.append(
            "Steps goal stays the same until there is a week of weight data."
        )

    protein_hit = context.stats.protein_days_hit
    if protein_hit <= LOW_ADHERENCE_DAYS and protein > FAT_LOSS_PROTEIN_MIN:
        proposal.protein = max(FAT_LOSS_PROTEIN_MIN, protein - FAT_LOSS_PROTEIN_DOWN)
        proposal.reasons.append(
            "Protein goal was rarely reached; lowering it by 10 g to build the habit."
        )
    elif (
        protein_hit >= FAT_LOSS_PROTEIN_DAYS_TO_PROGRESS
        and protein < FAT_LOSS_PROTEIN_MAX
    ):
        proposal.protein = min(FAT_LOSS_PROTEIN_MAX, protein + FAT_LOSS_PROTEIN_UP)
        proposal.reasons.append(
            "Protein goal hit most days; adding 5 g to help keep muscle."
        )
    else:
        proposal.reasons.append("Protein goal stays the same.")
    return proposal


def _lean_gain(context: _WeekContext) -> _Proposal:
    steps = context.goals.steps_goal
    protein = context.goals.protein_goal_g
    proposal = _Proposal(steps=steps, protein=protein, reasons=[])
    pct = context.weight_change_pct

    if pct is None:
        proposal.reasons.append(
            "Targets stay the same until there is a week of weight data."
        )
    elif pct > LEAN_GAIN_FAST_PCT:
        proposal.steps = min(STEPS_MAX, steps + STEPS_LARGE_STEP)
        proposal.reasons.append(
            "Gaining a bit fast; adding 1000 steps/day to limit fat gain."
        )
    elif pct >= LEAN_GAIN_SLOW_PCT:
        proposal.reasons.append("Lean-gain pace is right; keep the same targets.")
    elif protein < LEAN_GAIN_PROTEIN_MAX:
        proposal.protein = min(LEAN_GAIN_PROTEIN_MAX, protein + LEAN_GAIN_PROTEIN_UP)
        proposal.reasons.append(
            "Weight is not going up; adding 10 g protein to support growth."
        )
    else:
        proposal.reasons.append(
            "Protein is already high; focus on hitting the targets consistently."
        )

    if (
        context.stats.steps_days_hit <= LOW_ADHERENCE_DAYS
        and steps > LEAN_GAIN_STEPS_EASE_ABOVE
    ):
        proposal.steps = max(LEAN_GAIN_STEPS_FLOOR, steps - STEPS_SMALL_STEP)
        proposal.reasons.append(
            "Steps goal was hard to reach; lowering it slightly to protect recovery."
        )
    return proposal


def _maintenance(context: _WeekContext) -> _Proposal:
    steps = context.goals.steps_goal
    protein = context.goals.protein_goal_g
    proposal = _Proposal(steps=steps, protein=protein, reasons=[])
    delta = context.delta_kg
    previous = context.previous_weight_kg

    if delta is not None and previous is not None and previous > 0:
        deadband = previous * MAINTENANCE_DEADBAND_PCT
        if abs(delta) <= deadband:
            proposal.reasons.append(
                "Weight is within the maintenance range; steps goal stays the same."
            )
        elif delta > deadband:
            if context.adherence_good:
                proposal.steps = min(STEPS_MAX, steps + STEPS_LARGE_STEP)
                proposal.reasons.append("Weight is drifting up; adding 1000 steps/day.")
            else:
                proposal.reasons.append(
                    "Weight is drifting up; focus on consistency before adding steps."
                )
        else:
            proposal.steps = max(STEPS_MIN, steps - STEPS_SMALL_STEP)
            proposal.reasons.append(
                "Weight is drifting down; removing 500 steps/day to hold steady."
            )
    elif context.stats.steps_days_hit <= LOW_ADHERENCE_DAYS and steps > STEPS_MIN:
        proposal.steps = max(STEPS_MIN, steps - STEPS_SMALL_STEP)
        proposal.reasons.append(
            "Steps goal was hard to reach; removing 500 steps/day to make it doable."
        )
    else:
        proposal.reasons.append("Steps goal stays the same for now.")

    if (
        context.stats.protein_days_hit <= LOW_ADHERENCE_DAYS
        and protein > MAINTENANCE_PROTEIN_MIN
    ):
        proposal.protein = max(
            MAINTENANCE_PROTEIN_MIN, protein - MAINTENANCE_PROTEIN_DOWN
        )
        proposal.reasons.append(
            "Protein goal was hard to reach; lowering it by 10 g to build the habit."
        )
    else:
        proposal.reasons.append("Protein goal stays the same.")
    return proposal


def _apply_guard_rail(context: _WeekContext, proposal: _Proposal) -> None:
    if not context.adherence_low:
        return
    held: list[str] = []
    if proposal.protein > context.goals.protein_goal_g:
        proposal.protein = context.goals.protein_goal_g
        held.append("protein")
    if proposal.steps > context.goals.steps_goal:
        proposal.steps = context.goals.steps_goal
        held.append("steps")
    if held:
        increases = "increases above are" if len(held) > 1 else "increase above is"
        proposal.reasons.append(
            f"Adherence was low this week, so the {' and '.join(held)} "
            f"{increases} held back."
        )


_STRATEGIES: dict[GoalMode, _Strategy] = {
    GoalMode.FAT_LOSS: _fat_loss,
    GoalMode.LEAN_GAIN: _lean_gain,
    GoalMode.MAINTENANCE: _maintenance,
}
