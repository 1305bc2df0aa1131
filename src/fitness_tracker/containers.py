"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.supabase_checkin_repository import (
    SupabaseCheckinRepository,
)
from fitness_tracker.adapters.supabase_goal_repository import SupabaseGoalRepository
from fitness_tracker.adapters.supabase_habit_repository import SupabaseHabitRepository
from fitness_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from fitness_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from fitness_tracker.adapters.supabase_workout_repository import (
    SupabaseWorkoutRepository,
)
from fitness_tracker.adapters.telegram_client import (
    HttpxTelegramClient,
    TelegramClient,
)
from fitness_tracker.config import Settings
from fitness_tracker.services.checkins import CheckinService
from fitness_tracker.services.commands import StartCommandHandler
from fitness_tracker.services.goals import GoalService
from fitness_tracker.services.habits import HabitService
from fitness_tracker.services.progress import ProgressService
from fitness_tracker.services.user_settings import UserSettingsService
from fitness_tracker.services.users import UserService
from fitness_tracker.services.workouts import WorkoutService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    telegram_client: TelegramClient
    user_service: UserService
    user_settings_service: UserSettingsService
    start_command_handler: StartCommandHandler
    habit_service: HabitService
    workout_service: WorkoutService
    goal_service: GoalService
    progress_service: ProgressService
    checkin_service: CheckinService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    habit_repository = SupabaseHabitRepository(supabase_client)
    workout_repository = SupabaseWorkoutRepository(supabase_client)
    goal_repository = SupabaseGoalRepository(supabase_client)
    user_service = UserService(SupabaseUserRepository(supabase_client))
    user_settings_service = UserSettingsService(
        SupabaseUserSettingsRepository(supabase_client)
    )
    progress_service = ProgressService(
        habit_repository=habit_repository,
        workout_repository=workout_repository,
        goal_repository=goal_repository,
    )
    checkin_service = CheckinService(
        repository=SupabaseCheckinRepository(supabase_client),
        progress_service=progress_service,
        goal_repository=goal_repository,
    )
    telegram_client = HttpxTelegramClient.create(resolved_settings.telegram_bot_token)
    start_handler = StartCommandHandler(
        user_service=user_service,
        user_settings_service=user_settings_service,
        telegram_client=telegram_client,
    )

    async def close_resources() -> None:
        await telegram_client.close()

    return AppContainer(
        settings=resolved_settings,
        telegram_client=telegram_client,
        user_service=user_service,
        user_settings_service=user_settings_service,
        start_command_handler=start_handler,
        habit_service=HabitService(habit_repository),
        workout_service=WorkoutService(workout_repository),
        goal_service=GoalService(goal_repository),
        progress_service=progress_service,
        checkin_service=checkin_service,
        close_resources=close_resources,
    )
