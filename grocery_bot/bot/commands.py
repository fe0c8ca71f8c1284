"""
Bot command handlers.

This module contains the handlers of the single-step commands. The
multi-step commands live in grocery_bot.bot.conversations.
"""

import logging

from telegram import Update
from telegram.ext import ContextTypes

from grocery_bot.bot import messages
from grocery_bot.bot.parser import parse_command
from grocery_bot.config import config
from grocery_bot.database import repository

logger = logging.getLogger(__name__)


async def handle_start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - welcome message."""
    await update.effective_message.reply_text(messages.get_welcome_message(config.APP_NAME))


async def handle_help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show available commands."""
    await update.effective_message.reply_text(messages.get_help_message())


async def handle_show_list_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /show_list command - show the items on the grocery list."""
    user = context.user_data["user"]
    items = await repository.get_all_with_pending_purchase(user.id)
    logger.info(f"Showing grocery list with {len(items)} items to chat_id {user.chat_id}")
    await update.effective_message.reply_text(messages.get_grocery_list_message(items))


async def handle_cancel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /cancel command outside of a running command."""
    await update.effective_message.reply_text(messages.get_nothing_to_cancel_message())


async def handle_unknown_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle unknown commands."""
    command, _ = parse_command(update.effective_message.text)
    logger.info(f"Unknown command {command!r} from chat_id {update.effective_chat.id}")
    await update.effective_message.reply_text(messages.get_unknown_command_message(command or ""))
