"""Telegram adapter for journal sessions."""

from .bot import TelegramBot, parse_callback_data, parse_invites
from .surface import TelegramJournalSurface, build_keyboard

__all__ = [
    "TelegramBot",
    "TelegramJournalSurface",
    "build_keyboard",
    "parse_callback_data",
    "parse_invites",
]
