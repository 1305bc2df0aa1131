"""Reporting API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from fitness_tracker.api.schemas import (
    GoalProfileOut,
    ProgressOut,
    WeeklyReportOut,
    WeeklyStatsOut,
)

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer
    from fitness_tracker.domain.adjustment import WeeklyReport

router = APIRouter(prefix="/api", tags=["reports"])

MAX_WEEKS = 52


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/users/{user_id}/progress", dependencies=[Depends(require_api_token)])
async def weekly_progress(
    user_id: UUID,
    request: Request,
    weeks: int | None = Query(default=None, ge=1, le=MAX_WEEKS),
) -> ProgressOut:
    """Return graded stats for recent weeks, oldest first."""
    container: AppContainer = request.app.state.container
    timezone = container.user_settings_service.get_timezone(user_id)
    stats = container.progress_service.compute_weekly_stats(
        user_id, weeks or container.settings.progress_weeks, timezone
    )
    return ProgressOut(weeks=[WeeklyStatsOut.from_domain(entry) for entry in stats])


@router.get("/users/{user_id}/adjustment", dependencies=[Depends(require_api_token)])
async def weekly_adjustment(user_id: UUID, request: Request) -> WeeklyReportOut:
    """Return this week's report and the proposed next-week targets."""
    container: AppContainer = request.app.state.container
    return WeeklyReportOut.from_domain(_build_report(container, user_id))


@router.post(
    "/users/{user_id}/adjustment/apply", dependencies=[Depends(require_api_token)]
)
async def apply_adjustment(user_id: UUID, request: Request) -> GoalProfileOut:
    """Apply the current proposal to the user's goal profile."""
    container: AppContainer = request.app.state.container
    report = _build_report(container, user_id)
    try:
        saved = container.goal_service.apply_adjustment(user_id, report.adjustment)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return GoalProfileOut.from_domain(saved)


def _build_report(container: AppContainer, user_id: UUID) -> WeeklyReport:
    timezone = container.user_settings_service.get_timezone(user_id)
    goal_mode = container.user_settings_service.get_goal_mode(user_id)
    return container.checkin_service.weekly_report(user_id, timezone, goal_mode)
