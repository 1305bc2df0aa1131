"""Telegram bot command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TelegramCommand:
    """Declarative bot command definition."""

    command: str
    description: str


class BotCommand(Enum):
    """Enum of bot commands (single source of truth)."""

    START = TelegramCommand("start", "Onboarding and timezone setup")
    PROGRESS = TelegramCommand("progress", "Weekly grades for recent weeks")
    HABITS = TelegramCommand("habits", "Log today's protein and steps")
    WORKOUT = TelegramCommand("workout", "Log a completed workout")
    CHECKIN = TelegramCommand("checkin", "Weekly check-in with your weight")
    GOALS = TelegramCommand("goals", "Show or set daily protein and steps goals")
    MODE = TelegramCommand("mode", "Show or set your goal mode")
    ADJUST = TelegramCommand("adjust", "Suggested targets for next week")
    HELP = TelegramCommand("help", "Quick guide and tips")


def telegram_commands() -> list[dict[str, str]]:
    """Return commands formatted for Telegram API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in BotCommand
    ]


CHAT_MENU_BUTTON: dict[str, object] = {"type": "commands"}
