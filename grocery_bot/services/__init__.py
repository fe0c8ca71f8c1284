"""
Services layer.

This module contains the services that run the bot:
- Telegram client for sending notifications
- Application bootstrap
"""

from grocery_bot.services.telegram_client import send_message, notify
from grocery_bot.services.app import build_application, run, main

__all__ = [
    "send_message",
    "notify",
    "build_application",
    "run",
    "main",
]
