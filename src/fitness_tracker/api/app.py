"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from fastapi import FastAPI, Request

from fitness_tracker.api.reports import router as reports_router
from fitness_tracker.api.telegram_models import TelegramMessage, TelegramUpdate
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.config import parse_allowed_user_ids
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.adjustment import WeeklyReport
from fitness_tracker.domain.checkins import WeeklyCheckin
from fitness_tracker.domain.goals import GoalMode, GoalProfile, parse_goal_mode
from fitness_tracker.domain.habits import DailyHabitLog
from fitness_tracker.domain.progress import WeeklyStats
from fitness_tracker.services.validation import parse_number, parse_optional_number
from fitness_tracker.telegram_commands import CHAT_MENU_BUTTON, telegram_commands

APPLY_CALLBACK_PREFIX = "adj:"

HELP_TEXT = "\n".join(
    [
        "Log daily, check in weekly:",
        "/habits 140 9000 - today's protein (g) and steps; use - to keep one",
        "/workout - log a finished workout",
        "/checkin 82.4 [note] - this week's weight in kg; use - to keep it",
        "/progress - grades for recent weeks",
        "/adjust - suggested targets for next week",
        "/goals 140 9000 - set daily goals",
        "/mode fat_loss|maintenance|lean_gain - set your goal",
    ]
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    allowed_user_ids = parse_allowed_user_ids(
        container.settings.telegram_allowed_user_ids
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.telegram_client.set_my_commands(
                telegram_commands()
            )
            await app.state.container.telegram_client.set_chat_menu_button(
                CHAT_MENU_BUTTON
            )
        except Exception:
            logger.exception("Failed to sync Telegram bot commands")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(reports_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/telegram/webhook")
    async def telegram_webhook(  # noqa: PLR0911
        update: TelegramUpdate, request: Request
    ) -> dict[str, str]:
        """Handle Telegram webhook updates."""
        state_container: AppContainer = request.app.state.container
        user_id = _extract_user_id(update)
        if user_id is not None and not _is_user_allowed(user_id, allowed_user_ids):
            if update.callback_query:
                await state_container.telegram_client.answer_callback_query(
                    update.callback_query.id,
                    text="Not authorized.",
                )
                return {"status": "ok"}
            if update.message:
                await state_container.telegram_client.send_message(
                    chat_id=update.message.chat.id,
                    text="This bot is private.",
                )
                return {"status": "ok"}

        if update.callback_query:
            callback = update.callback_query
            await state_container.telegram_client.answer_callback_query(callback.id)
            proposal = _parse_apply_callback(callback.data or "")
            if proposal and callback.message:
                user = state_container.user_service.ensure_user(callback.from_user.id)
                try:
                    saved = state_container.goal_service.apply_targets(
                        user.id, proposal
                    )
                    text = f"Goals updated: {_format_goals(saved)}."
                except ValueError as exc:
                    text = str(exc)
                await state_container.telegram_client.send_message(
                    chat_id=callback.message.chat.id, text=text
                )
            return {"status": "ok"}

        message = update.message
        if not message or not message.text:
            return {"status": "ok"}

        command, args = _split_command(message.text)
        if command == "/start":
            await state_container.start_command_handler.handle(
                telegram_user_id=message.from_user.id,
                chat_id=message.chat.id,
            )
            return {"status": "ok"}

        if command == "/help":
            await state_container.telegram_client.send_message(
                chat_id=message.chat.id, text=HELP_TEXT
            )
            return {"status": "ok"}

        if command is not None:
            try:
                reply, markup = _handle_command(
                    state_container, message, command, args
                )
            except ValueError as exc:
                reply, markup = str(exc), None
            except Exception:
                logger.exception("Command failed", extra={"command": command})
                reply, markup = "Something went wrong. Please try again.", None
            await state_container.telegram_client.send_message(
                chat_id=message.chat.id, text=reply, reply_markup=markup
            )
            return {"status": "ok"}

        user = state_container.user_service.ensure_user(message.from_user.id)
        if not state_container.user_settings_service.is_timezone_set(user.id):
            timezone = message.text.strip()
            if _is_valid_timezone(timezone):
                state_container.user_settings_service.set_timezone(user.id, timezone)
                await state_container.telegram_client.send_message(
                    chat_id=message.chat.id,
                    text=f"Timezone saved: {timezone}.",
                )
            else:
                await state_container.telegram_client.send_message(
                    chat_id=message.chat.id,
                    text="Please send a valid timezone like Europe/Berlin.",
                )
        return {"status": "ok"}

    return app


def _handle_command(  # noqa: PLR0911
    container: AppContainer,
    message: TelegramMessage,
    command: str,
    args: list[str],
) -> tuple[str, dict | None]:
    """Run a logged-in command and return the reply text and keyboard."""
    user = container.user_service.ensure_user(message.from_user.id)
    timezone = container.user_settings_service.get_timezone(user.id)

    if command == "/progress":
        stats = container.progress_service.compute_weekly_stats(
            user.id, container.settings.progress_weeks, timezone
        )
        return _format_progress(stats), None

    if command == "/habits":
        today = _local_today(timezone)
        if not args:
            log = container.habit_service.get_day(user.id, today)
            return _format_habits(today, log), None
        if len(args) != 2:  # noqa: PLR2004
            raise ValueError("Usage: /habits <protein g> <steps>, use - to keep one")
        saved = container.habit_service.update_day(
            user.id,
            today,
            protein_g=parse_optional_number(args[0]),
            steps=parse_optional_number(args[1]),
        )
        return _format_habits(today, saved), None

    if command == "/workout":
        container.workout_service.log_completed(user.id)
        [stats] = container.progress_service.compute_weekly_stats(
            user.id, 1, timezone
        )
        return (
            f"Workout logged. {stats.workouts_completed} completed this week.",
            None,
        )

    if command == "/checkin":
        if not args:
            raise ValueError("Usage: /checkin <weight kg> [note], use - to keep weight")
        checkin = container.checkin_service.save_checkin(
            user.id,
            weight_kg=parse_optional_number(args[0]),
            note=" ".join(args[1:]) or None,
            timezone_name=timezone,
        )
        return _format_checkin(checkin), None

    if command == "/goals":
        if not args:
            profile = container.goal_service.get_profile(user.id)
            return f"Current goals: {_format_goals(profile)}.", None
        if len(args) != 2:  # noqa: PLR2004
            raise ValueError("Usage: /goals <protein g> <steps>")
        saved = container.goal_service.update_goals(
            user.id, parse_number(args[0]), parse_number(args[1])
        )
        return f"Goals updated: {_format_goals(saved)}.", None

    if command == "/mode":
        if not args:
            mode = container.user_settings_service.get_goal_mode(user.id)
            return f"Goal mode: {mode.label}.", None
        mode = parse_goal_mode(args[0])
        if mode is None:
            choices = ", ".join(entry.value for entry in GoalMode)
            raise ValueError(f"Unknown goal mode. Choose one of: {choices}")
        container.user_settings_service.set_goal_mode(user.id, mode)
        return f"Goal mode set to {mode.label}.", None

    if command == "/adjust":
        goal_mode = container.user_settings_service.get_goal_mode(user.id)
        report = container.checkin_service.weekly_report(user.id, timezone, goal_mode)
        return _format_report(report), _apply_keyboard(report)

    return "Unknown command. Send /help for the list.", None


def _split_command(text: str) -> tuple[str | None, list[str]]:
    """Split ``/cmd@bot a b`` into ``("/cmd", ["a", "b"])``."""
    parts = text.strip().split()
    if not parts or not parts[0].startswith("/"):
        return None, []
    return parts[0].split("@", maxsplit=1)[0].lower(), parts[1:]


def _extract_user_id(update: TelegramUpdate) -> int | None:
    """Extract Telegram user id from update, if present."""
    if update.callback_query:
        return update.callback_query.from_user.id
    if update.message:
        return update.message.from_user.id
    return None


def _is_user_allowed(user_id: int, allowed: set[int] | None) -> bool:
    """Return true when the user is allowed to interact with the bot."""
    return allowed is None or user_id in allowed


def _parse_apply_callback(data: str) -> GoalProfile | None:
    """Parse callback data in the format adj:<protein>:<steps>."""
    if not data.startswith(APPLY_CALLBACK_PREFIX):
        return None
    parts = data.split(":")
    if len(parts) != 3:  # noqa: PLR2004
        return None
    try:
        return GoalProfile(protein_goal_g=float(parts[1]), steps_goal=int(parts[2]))
    except ValueError:
        return None


def _apply_keyboard(report: WeeklyReport) -> dict | None:
    proposal = report.adjustment.as_profile()
    if proposal == report.goals:
        return None
    return {
        "inline_keyboard": [
            [
                {
                    "text": "Apply new targets",
                    "callback_data": (
                        f"{APPLY_CALLBACK_PREFIX}"
                        f"{proposal.protein_goal_g:g}:{proposal.steps_goal}"
                    ),
                }
            ]
        ]
    }


def _local_today(timezone_name: str) -> date:
    return datetime.now(tz=UTC).astimezone(ZoneInfo(timezone_name)).date()


def _format_goals(profile: GoalProfile) -> str:
    return f"{profile.protein_goal_g:g} g protein, {profile.steps_goal} steps per day"


def _format_habits(day: date, log: DailyHabitLog | None) -> str:
    """Format a day's habits for Telegram."""
    if log is None:
        return f"Nothing logged for {day} yet."
    protein = f"{log.protein_g:g} g" if log.protein_g is not None else "not logged"
    steps = f"{log.steps}" if log.steps is not None else "not logged"
    return f"{day}:\nProtein: {protein}\nSteps: {steps}"


def _format_progress(weeks: list[WeeklyStats]) -> str:
    """Format graded weeks, newest first."""
    if not weeks:
        return "No weeks to show yet."
    lines = ["Weekly consistency:"]
    for week in reversed(weeks):
        lines.append(
            f"- {week.week_start}: {week.grade.value.title()} "
            f"({week.workouts_completed} workouts, "
            f"protein {week.protein_days_hit}/{week.protein_days_logged}, "
            f"steps {week.steps_days_hit}/{week.steps_days_logged})"
        )
    return "\n".join(lines)


def _format_checkin(checkin: WeeklyCheckin) -> str:
    weight = f"{checkin.weight_kg:g} kg" if checkin.weight_kg is not None else "none"
    return (
        f"Check-in saved for the week of {checkin.week_start}.\n"
        f"Weight: {weight}\n"
        f"Workouts: {checkin.workouts_completed}, "
        f"protein days: {checkin.protein_goal_days}, "
        f"steps days: {checkin.steps_goal_days}"
    )


def _format_report(report: WeeklyReport) -> str:
    """Format the weekly report and proposal for Telegram."""
    stats = report.stats
    adjustment = report.adjustment
    lines = [
        f"Week of {stats.week_start}: {stats.grade.value.title()}",
        f"Goal mode: {report.goal_mode.label}",
    ]
    if adjustment.weight_delta_kg is not None:
        lines.append(f"Weight change: {adjustment.weight_delta_kg:+.1f} kg")
    lines.append(f"Current: {_format_goals(report.goals)}")
    lines.append(f"Next week: {_format_goals(adjustment.as_profile())}")
    lines.extend(f"- {reason}" for reason in adjustment.reasons)
    return "\n".join(lines)


def _is_valid_timezone(value: str) -> bool:
    try:
        ZoneInfo(value)
    except Exception:
        return False
    return True
