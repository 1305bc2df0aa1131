"""Weekly aggregation and consistency grading."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from fitness_tracker.domain.goals import GoalProfile
from fitness_tracker.domain.habits import DailyHabitLog
from fitness_tracker.domain.progress import Grade, WeeklyStats, WeekWindow
from fitness_tracker.domain.workouts import WorkoutCompletion
from fitness_tracker.services.goals import GoalRepository
from fitness_tracker.services.habits import HabitRepository
from fitness_tracker.services.weeks import week_windows, window_days
from fitness_tracker.services.workouts import WorkoutRepository

WORKOUTS_TARGET = 3
PROTEIN_DAYS_TARGET = 4
STEPS_DAYS_TARGET = 4

WORKOUTS_WEIGHT = 0.5
PROTEIN_WEIGHT = 0.25
STEPS_WEIGHT = 0.25

# Lowest score for each grade, best grade first.
GRADE_THRESHOLDS: tuple[tuple[float, Grade], ...] = (
    (0.90, Grade.GOLD),
    (0.70, Grade.SILVER),
    (0.45, Grade.BRONZE),
)


@dataclass
class ProgressService:
    """Service that builds weekly stats from stored logs."""

    habit_repository: HabitRepository
    workout_repository: WorkoutRepository
    goal_repository: GoalRepository

    def compute_weekly_stats(
        self,
        user_id: UUID,
        week_count: int,
        timezone_name: str,
        now: datetime | None = None,
    ) -> list[WeeklyStats]:
        """Return stats for the last ``week_count`` weeks, oldest first."""
        tz = ZoneInfo(timezone_name)
        local_now = (now or datetime.now(tz=UTC)).astimezone(tz)
        windows = week_windows(local_now, week_count)
        if not windows:
            return []
        first, last = windows[0].week_start, windows[-1].week_end
        goals = self.goal_repository.get_goal_profile(user_id)
        habit_logs = self.habit_repository.list_habit_logs(user_id, first, last)
        workouts = self.workout_repository.list_completed_workouts(
            user_id,
            _local_midnight(first, tz).astimezone(UTC),
            _local_midnight(last + timedelta(days=1), tz).astimezone(UTC),
        )
        return aggregate_weeks(windows, habit_logs, workouts, goals, tz)


def aggregate_weeks(
    windows: list[WeekWindow],
    habit_logs: list[DailyHabitLog],
    workouts: list[WorkoutCompletion],
    goals: GoalProfile,
    tz: ZoneInfo,
) -> list[WeeklyStats]:
    """Join habit logs and completed workouts into one record per window."""
    habits_by_day = {log.day: log for log in habit_logs}
    completed_days = [
        workout.completed_at.astimezone(tz).date()
        for workout in workouts
        if workout.completed_at is not None
    ]
    return [
        _aggregate_week(window, habits_by_day, completed_days, goals)
        for window in windows
    ]


def _aggregate_week(
    window: WeekWindow,
    habits_by_day: dict[date, DailyHabitLog],
    completed_days: list[date],
    goals: GoalProfile,
) -> WeeklyStats:
    workouts_completed = sum(
        1 for day in completed_days if window.week_start <= day <= window.week_end
    )
    protein_logged = protein_hit = steps_logged = steps_hit = 0
    for day in window_days(window):
        log = habits_by_day.get(day)
        if log is None:
            continue
        if log.protein_g is not None:
            protein_logged += 1
            if log.protein_g >= goals.protein_goal_g:
                protein_hit += 1
        if log.steps is not None:
            steps_logged += 1
            if log.steps >= goals.steps_goal:
                steps_hit += 1
    return WeeklyStats(
        week_start=window.week_start,
        week_end=window.week_end,
        workouts_completed=workouts_completed,
        protein_days_logged=protein_logged,
        protein_days_hit=protein_hit,
        steps_days_logged=steps_logged,
        steps_days_hit=steps_hit,
        grade=grade_week(workouts_completed, protein_hit, steps_hit),
    )


def grade_score(
    workouts_completed: int, protein_days_hit: int, steps_days_hit: int
) -> float:
    """Weighted consistency score in [0, 1]; no credit beyond each target."""
    workouts_ratio = min(workouts_completed / WORKOUTS_TARGET, 1.0)
    protein_ratio = min(protein_days_hit / PROTEIN_DAYS_TARGET, 1.0)
    steps_ratio = min(steps_days_hit / STEPS_DAYS_TARGET, 1.0)
    return (
        WORKOUTS_WEIGHT * workouts_ratio
        + PROTEIN_WEIGHT * protein_ratio
        + STEPS_WEIGHT * steps_ratio
    )


def grade_week(
    workouts_completed: int, protein_days_hit: int, steps_days_hit: int
) -> Grade:
    """Map weekly counts to a consistency grade."""
    score = grade_score(workouts_completed, protein_days_hit, steps_days_hit)
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.STARTER


def _local_midnight(day: date, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)
