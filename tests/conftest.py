"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

import pytest

from fitness_tracker.adapters.telegram_client import TelegramClient
from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.checkins import WeeklyCheckin
from fitness_tracker.domain.goals import (
    DEFAULT_PROTEIN_GOAL_G,
    DEFAULT_STEPS_GOAL,
    GoalProfile,
)
from fitness_tracker.domain.habits import DailyHabitLog
from fitness_tracker.domain.models import UserRecord
from fitness_tracker.domain.progress import Grade, WeeklyStats
from fitness_tracker.domain.workouts import WorkoutCompletion
from fitness_tracker.services.checkins import CheckinRepository, CheckinService
from fitness_tracker.services.commands import StartCommandHandler
from fitness_tracker.services.goals import GoalRepository, GoalService
from fitness_tracker.services.habits import HabitRepository, HabitService
from fitness_tracker.services.progress import ProgressService
from fitness_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)
from fitness_tracker.services.users import UserRepository, UserService
from fitness_tracker.services.workouts import WorkoutRepository, WorkoutService


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[int, UserRecord] = field(default_factory=dict)
    settings: dict[UUID, str] = field(default_factory=dict)
    touched: list[UUID] = field(default_factory=list)

    def get_by_telegram_id(self, telegram_user_id: int) -> UserRecord | None:
        return self.users.get(telegram_user_id)

    def create_user(self, telegram_user_id: int) -> UserRecord:
        user = UserRecord(id=uuid4(), telegram_user_id=telegram_user_id)
        self.users[telegram_user_id] = user
        return user

    def create_settings(
        self, user_id: UUID, timezone: str | None, goal_mode: str
    ) -> None:
        self.settings[user_id] = goal_mode

    def touch_last_active(self, user_id: UUID) -> None:
        self.touched.append(user_id)


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    timezones: dict[UUID, str] = field(default_factory=dict)
    goal_modes: dict[UUID, str] = field(default_factory=dict)

    def get_timezone(self, user_id: UUID) -> str | None:
        return self.timezones.get(user_id)

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        self.timezones[user_id] = timezone

    def get_goal_mode(self, user_id: UUID) -> str | None:
        return self.goal_modes.get(user_id)

    def set_goal_mode(self, user_id: UUID, goal_mode: str) -> None:
        self.goal_modes[user_id] = goal_mode


@dataclass
class InMemoryHabitRepository(HabitRepository):
    """In-memory habit repository for tests."""

    logs: dict[tuple[UUID, date], DailyHabitLog] = field(default_factory=dict)

    def list_habit_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyHabitLog]:
        return sorted(
            (
                log
                for (owner, day), log in self.logs.items()
                if owner == user_id and start <= day <= end
            ),
            key=lambda log: log.day,
        )

    def get_habit_log(self, user_id: UUID, day: date) -> DailyHabitLog | None:
        return self.logs.get((user_id, day))

    def upsert_habit_log(self, user_id: UUID, log: DailyHabitLog) -> DailyHabitLog:
        self.logs[(user_id, log.day)] = log
        return log


@dataclass
class InMemoryWorkoutRepository(WorkoutRepository):
    """In-memory workout repository for tests."""

    workouts: dict[UUID, tuple[UUID, WorkoutCompletion]] = field(default_factory=dict)

    def add(self, user_id: UUID, completed_at: datetime | None) -> WorkoutCompletion:
        workout = WorkoutCompletion(id=uuid4(), completed_at=completed_at)
        self.workouts[workout.id] = (user_id, workout)
        return workout

    def list_completed_workouts(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WorkoutCompletion]:
        return [
            workout
            for owner, workout in self.workouts.values()
            if owner == user_id
            and workout.completed_at is not None
            and start <= workout.completed_at < end
        ]

    def create_completed_workout(
        self, user_id: UUID, completed_at: datetime
    ) -> WorkoutCompletion:
        return self.add(user_id, completed_at)


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository for tests."""

    profiles: dict[UUID, GoalProfile] = field(default_factory=dict)

    def get_goal_profile(self, user_id: UUID) -> GoalProfile:
        return self.profiles.setdefault(
            user_id,
            GoalProfile(
                protein_goal_g=DEFAULT_PROTEIN_GOAL_G, steps_goal=DEFAULT_STEPS_GOAL
            ),
        )

    def update_goal_profile(self, user_id: UUID, profile: GoalProfile) -> GoalProfile:
        self.profiles[user_id] = profile
        return profile


@dataclass
class InMemoryCheckinRepository(CheckinRepository):
    """In-memory check-in repository for tests."""

    checkins: dict[tuple[UUID, date], WeeklyCheckin] = field(default_factory=dict)

    def get_weekly_checkin(
        self, user_id: UUID, week_start: date
    ) -> WeeklyCheckin | None:
        return self.checkins.get((user_id, week_start))

    def upsert_weekly_checkin(
        self, user_id: UUID, checkin: WeeklyCheckin
    ) -> WeeklyCheckin:
        self.checkins[(user_id, checkin.week_start)] = checkin
        return checkin


@dataclass
class FakeTelegramClient(TelegramClient):
    """Fake Telegram client that records messages."""

    messages: list[tuple[int, str]] = field(default_factory=list)
    markups: list[dict | None] = field(default_factory=list)
    callbacks: list[tuple[str, str | None]] = field(default_factory=list)
    commands: list[dict[str, str]] | None = None
    menu_button: dict[str, object] | None = None

    async def send_message(
        self, chat_id: int, text: str, reply_markup: dict | None = None
    ) -> None:
        self.messages.append((chat_id, text))
        self.markups.append(reply_markup)

    async def answer_callback_query(
        self, callback_query_id: str, text: str | None = None
    ) -> None:
        self.callbacks.append((callback_query_id, text))

    async def set_my_commands(self, commands: list[dict[str, str]]) -> None:
        self.commands = commands

    async def set_chat_menu_button(
        self, menu_button: dict[str, object] | None = None
    ) -> None:
        self.menu_button = menu_button


def make_stats(
    workouts: int = 0,
    protein_hit: int = 0,
    steps_hit: int = 0,
    week_start: date = date(2024, 3, 4),
) -> WeeklyStats:
    """Build a WeeklyStats record where every hit day was also logged."""
    return WeeklyStats(
        week_start=week_start,
        week_end=date.fromordinal(week_start.toordinal() + 6),
        workouts_completed=workouts,
        protein_days_logged=protein_hit,
        protein_days_hit=protein_hit,
        steps_days_logged=steps_hit,
        steps_days_hit=steps_hit,
        grade=Grade.STARTER,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        telegram_bot_token="test-token",
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="api-token",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def telegram_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def habit_repository() -> InMemoryHabitRepository:
    return InMemoryHabitRepository()


@pytest.fixture
def workout_repository() -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def checkin_repository() -> InMemoryCheckinRepository:
    return InMemoryCheckinRepository()


@pytest.fixture
def progress_service(
    habit_repository: InMemoryHabitRepository,
    workout_repository: InMemoryWorkoutRepository,
    goal_repository: InMemoryGoalRepository,
) -> ProgressService:
    return ProgressService(
        habit_repository=habit_repository,
        workout_repository=workout_repository,
        goal_repository=goal_repository,
    )


@pytest.fixture
def checkin_service(
    checkin_repository: InMemoryCheckinRepository,
    progress_service: ProgressService,
    goal_repository: InMemoryGoalRepository,
) -> CheckinService:
    return CheckinService(
        repository=checkin_repository,
        progress_service=progress_service,
        goal_repository=goal_repository,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_repository: InMemoryUserRepository,
    telegram_client: FakeTelegramClient,
    habit_repository: InMemoryHabitRepository,
    workout_repository: InMemoryWorkoutRepository,
    goal_repository: InMemoryGoalRepository,
    progress_service: ProgressService,
    checkin_service: CheckinService,
) -> AppContainer:
    user_service = UserService(user_repository)
    user_settings_service = UserSettingsService(InMemoryUserSettingsRepository())
    start_handler = StartCommandHandler(
        user_service=user_service,
        user_settings_service=user_settings_service,
        telegram_client=telegram_client,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
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
