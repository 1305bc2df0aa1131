"""Pydantic response models for the reporting API."""

from datetime import date

from pydantic import BaseModel

from fitness_tracker.domain.adjustment import AdjustmentResult, WeeklyReport
from fitness_tracker.domain.goals import GoalProfile
from fitness_tracker.domain.progress import WeeklyStats


class WeeklyStatsOut(BaseModel):
    """One graded week."""

    week_start: date
    week_end: date
    workouts_completed: int
    protein_days_logged: int
    protein_days_hit: int
    steps_days_logged: int
    steps_days_hit: int
    grade: str

    @classmethod
    def from_domain(cls, stats: WeeklyStats) -> "WeeklyStatsOut":
        return cls(
            week_start=stats.week_start,
            week_end=stats.week_end,
            workouts_completed=stats.workouts_completed,
            protein_days_logged=stats.protein_days_logged,
            protein_days_hit=stats.protein_days_hit,
            steps_days_logged=stats.steps_days_logged,
            steps_days_hit=stats.steps_days_hit,
            grade=stats.grade.value,
        )


class GoalProfileOut(BaseModel):
    """Daily targets."""

    protein_goal_g: float
    steps_goal: int

    @classmethod
    def from_domain(cls, profile: GoalProfile) -> "GoalProfileOut":
        return cls(protein_goal_g=profile.protein_goal_g, steps_goal=profile.steps_goal)


class AdjustmentOut(BaseModel):
    """Proposed next-week targets."""

    next_protein_goal_g: float
    next_steps_goal: int
    weight_delta_kg: float | None
    reasons: list[str]

    @classmethod
    def from_domain(cls, result: AdjustmentResult) -> "AdjustmentOut":
        return cls(
            next_protein_goal_g=result.next_protein_goal_g,
            next_steps_goal=result.next_steps_goal,
            weight_delta_kg=result.weight_delta_kg,
            reasons=list(result.reasons),
        )


class WeeklyReportOut(BaseModel):
    """Current week with goals and the proposal."""

    stats: WeeklyStatsOut
    goals: GoalProfileOut
    goal_mode: str
    current_weight_kg: float | None
    previous_weight_kg: float | None
    adjustment: AdjustmentOut

    @classmethod
    def from_domain(cls, report: WeeklyReport) -> "WeeklyReportOut":
        return cls(
            stats=WeeklyStatsOut.from_domain(report.stats),
            goals=GoalProfileOut.from_domain(report.goals),
            goal_mode=report.goal_mode.value,
            current_weight_kg=report.current_weight_kg,
            previous_weight_kg=report.previous_weight_kg,
            adjustment=AdjustmentOut.from_domain(report.adjustment),
        )


class ProgressOut(BaseModel):
    """Graded weeks, oldest first."""

    weeks: list[WeeklyStatsOut]
