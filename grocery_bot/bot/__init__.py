"""
Bot command handling module.

This module contains all Telegram bot command processing logic including:
- Command and input parsing
- Message templates
- Command handlers
- Conversations for the multi-step commands
- Handler registration
"""

from grocery_bot.bot.parser import parse_command
from grocery_bot.bot.router import register_handlers, sync_commands

__all__ = ["parse_command", "register_handlers", "sync_commands"]
