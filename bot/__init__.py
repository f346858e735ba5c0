"""Telegram bot: dialog controller, handlers and operator notifications."""

from .handlers import get_bot_commands, register_handlers

__all__ = [
    "get_bot_commands",
    "register_handlers",
]
