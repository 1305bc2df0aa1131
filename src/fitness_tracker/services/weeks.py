"""Monday-aligned week windows."""

from datetime import date, datetime, timedelta

from fitness_tracker.domain.progress import WeekWindow

DAYS_PER_WEEK = 7


def week_start(now: datetime) -> date:
    """Return the Monday on or before ``now``'s civil date."""
    today = now.date()
    return today - timedelta(days=today.weekday())


def week_window(start: date) -> WeekWindow:
    """Return the seven-day window beginning at ``start``."""
    return WeekWindow(week_start=start, week_end=start + timedelta(days=6))


def week_windows(now: datetime, week_count: int) -> list[WeekWindow]:
    """Return ``week_count`` windows, oldest first, ending with the current week."""
    current = week_start(now)
    return [
        week_window(current - timedelta(weeks=offset))
        for offset in range(week_count - 1, -1, -1)
    ]


def window_days(window: WeekWindow) -> list[date]:
    """Return each date inside a window."""
    return [
        window.week_start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)
    ]
