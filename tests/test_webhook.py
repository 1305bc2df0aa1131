"""Tests for Telegram webhook handling."""

from dataclasses import replace

from fastapi.testclient import TestClient

from fitness_tracker.api.app import create_app
from fitness_tracker.domain.goals import GoalMode, GoalProfile
from tests.conftest import (
    FakeTelegramClient,
    InMemoryGoalRepository,
    InMemoryHabitRepository,
    InMemoryUserRepository,
)


def _message(text: str, user_id: int = 123, chat_id: int = 99) -> dict:
    return {
        "update_id": 1,
        "message": {
            "message_id": 10,
            "date": 1700000000,
            "chat": {"id": chat_id, "type": "private"},
            "from": {"id": user_id, "is_bot": False, "first_name": "Test"},
            "text": text,
        },
    }


def _callback(data: str, user_id: int = 123, chat_id: int = 99) -> dict:
    return {
        "update_id": 2,
        "callback_query": {
            "id": "cbq-1",
            "from": {"id": user_id, "is_bot": False, "first_name": "Test"},
            "message": {
                "message_id": 31,
                "date": 1700000002,
                "chat": {"id": chat_id, "type": "private"},
                "from": {"id": user_id, "is_bot": False, "first_name": "Test"},
                "text": "Week of 2024-03-04",
            },
            "data": data,
        },
    }


def test_webhook_start_creates_user_and_sends_message(
    container,
    user_repository: InMemoryUserRepository,
    telegram_client: FakeTelegramClient,
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/telegram/webhook", json=_message("/start"))

    assert response.status_code == 200
    assert 123 in user_repository.users
    chat_id, text = telegram_client.messages[0]
    assert chat_id == 99
    assert "timezone" in text.lower()


def test_webhook_saves_timezone_reply(
    container, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/start"))
    client.post("/telegram/webhook", json=_message("Mars/Olympus"))
    client.post("/telegram/webhook", json=_message("Europe/Berlin"))

    user = container.user_service.ensure_user(123)
    assert "valid timezone" in telegram_client.messages[1][1]
    assert telegram_client.messages[2][1] == "Timezone saved: Europe/Berlin."
    assert container.user_settings_service.get_timezone(user.id) == "Europe/Berlin"


def test_webhook_habits_command_logs_today(
    container,
    habit_repository: InMemoryHabitRepository,
    telegram_client: FakeTelegramClient,
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/telegram/webhook", json=_message("/habits 140 -"))

    assert response.status_code == 200
    [log] = habit_repository.logs.values()
    assert log.protein_g == 140
    assert log.steps is None
    assert "Protein: 140 g" in telegram_client.messages[-1][1]
    assert "Steps: not logged" in telegram_client.messages[-1][1]


def test_webhook_habits_dash_keeps_earlier_value(
    container,
    habit_repository: InMemoryHabitRepository,
    telegram_client: FakeTelegramClient,
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/habits - 9000"))
    client.post("/telegram/webhook", json=_message("/habits 140 -"))

    [log] = habit_repository.logs.values()
    assert log.protein_g == 140
    assert log.steps == 9000
    assert "Steps: 9000" in telegram_client.messages[-1][1]


def test_webhook_habits_command_reports_bad_number(
    container,
    habit_repository: InMemoryHabitRepository,
    telegram_client: FakeTelegramClient,
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/habits abc 9000"))
    client.post("/telegram/webhook", json=_message("/habits 120 -50"))

    assert telegram_client.messages[0][1] == "Not a number: abc"
    assert "non-negative" in telegram_client.messages[1][1]
    assert habit_repository.logs == {}


def test_webhook_workout_command_counts_week(
    container, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/workout"))
    client.post("/telegram/webhook", json=_message("/workout@fitbot"))

    assert telegram_client.messages[-1][1] == (
        "Workout logged. 2 completed this week."
    )


def test_webhook_goals_and_mode_commands(
    container,
    goal_repository: InMemoryGoalRepository,
    telegram_client: FakeTelegramClient,
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/goals 140 9000"))
    client.post("/telegram/webhook", json=_message("/mode Lean-Gain"))
    client.post("/telegram/webhook", json=_message("/mode bulk"))

    user = container.user_service.ensure_user(123)
    assert goal_repository.profiles[user.id] == GoalProfile(
        protein_goal_g=140, steps_goal=9000
    )
    assert telegram_client.messages[0][1] == (
        "Goals updated: 140 g protein, 9000 steps per day."
    )
    assert telegram_client.messages[1][1] == "Goal mode set to lean gain."
    assert "Unknown goal mode" in telegram_client.messages[2][1]
    assert container.user_settings_service.get_goal_mode(user.id) is (
        GoalMode.LEAN_GAIN
    )


def test_webhook_checkin_command_saves_weight(
    container, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/checkin 82.4 slept well"))

    text = telegram_client.messages[-1][1]
    assert text.startswith("Check-in saved for the week of")
    assert "Weight: 82.4 kg" in text


def test_webhook_checkin_dash_keeps_saved_weight(
    container, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/checkin 82.4"))
    client.post("/telegram/webhook", json=_message("/checkin - tired"))

    text = telegram_client.messages[-1][1]
    assert "Weight: 82.4 kg" in text


def test_webhook_adjust_offers_apply_button(
    container, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/adjust"))

    text = telegram_client.messages[-1][1]
    markup = telegram_client.markups[-1]
    assert "Goal mode: maintenance" in text
    assert "Next week: 110 g protein, 7500 steps per day" in text
    assert markup is not None
    button = markup["inline_keyboard"][0][0]
    assert button["callback_data"] == "adj:110:7500"


def test_webhook_adjust_without_change_has_no_button(
    container, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))
    user = container.user_service.ensure_user(123)
    container.goal_service.update_goals(user.id, 80, 3000)

    client.post("/telegram/webhook", json=_message("/adjust"))

    assert "Steps goal stays the same" in telegram_client.messages[-1][1]
    assert telegram_client.markups[-1] is None


def test_webhook_apply_callback_updates_goals(
    container,
    goal_repository: InMemoryGoalRepository,
    telegram_client: FakeTelegramClient,
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/telegram/webhook", json=_callback("adj:110:7500"))

    assert response.status_code == 200
    user = container.user_service.ensure_user(123)
    assert telegram_client.callbacks == [("cbq-1", None)]
    assert goal_repository.profiles[user.id] == GoalProfile(
        protein_goal_g=110, steps_goal=7500
    )
    assert telegram_client.messages[-1][1] == (
        "Goals updated: 110 g protein, 7500 steps per day."
    )


def test_webhook_apply_callback_rejects_invalid_targets(
    container,
    goal_repository: InMemoryGoalRepository,
    telegram_client: FakeTelegramClient,
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_callback("adj:0:7500"))
    client.post("/telegram/webhook", json=_callback("adj:oops"))

    assert goal_repository.profiles == {}
    assert telegram_client.messages == [
        (99, "protein goal must be a positive finite number")
    ]


def test_webhook_rejects_users_outside_allow_list(
    container, telegram_client: FakeTelegramClient
) -> None:
    private = replace(
        container,
        settings=container.settings.model_copy(
            update={"telegram_allowed_user_ids": "1, 2"}
        ),
    )
    client = TestClient(create_app(private))

    client.post("/telegram/webhook", json=_message("/progress"))
    client.post("/telegram/webhook", json=_callback("adj:110:7500"))

    assert telegram_client.messages == [(99, "This bot is private.")]
    assert telegram_client.callbacks == [("cbq-1", "Not authorized.")]


def test_webhook_progress_lists_weeks(
    container, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/progress"))

    lines = telegram_client.messages[-1][1].splitlines()
    assert lines[0] == "Weekly consistency:"
    assert len(lines) == 1 + container.settings.progress_weeks
    assert all("Starter" in line for line in lines[1:])


def test_webhook_unknown_command_points_to_help(
    container, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_message("/dance"))
    client.post("/telegram/webhook", json=_message("/help"))

    assert "/help" in telegram_client.messages[0][1]
    assert "/checkin" in telegram_client.messages[1][1]
