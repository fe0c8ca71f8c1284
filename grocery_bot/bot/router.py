"""
Command routing logic.

This module registers the command handlers on the Telegram application and
runs the checks that apply to every update (chat whitelist, user loading).
"""

import logging
from typing import List

from telegram import BotCommand, Update
from telegram.ext import (
    Application,
    ApplicationHandlerStop,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    TypeHandler,
    filters,
)

from grocery_bot.bot import messages
from grocery_bot.bot.commands import (
    handle_cancel_command,
    handle_help_command,
    handle_show_list_command,
    handle_start_command,
    handle_unknown_command,
)
from grocery_bot.bot.conversations import build_grocery_conversation
from grocery_bot.database import repository

logger = logging.getLogger(__name__)

# Commands shown in the Telegram command menu
BOT_COMMANDS = [
    BotCommand("add_item", "Add grocery item to list"),
    BotCommand("show_list", "Show grocery list"),
    BotCommand("record_purchase", "Record a purchase"),
    BotCommand("cancel", "Cancel the current command"),
    BotCommand("help", "Show available commands"),
]


def make_before_handle_update(whitelisted_chat_ids: List[int]):
    """
    Build the callback that runs before any other handler.

    Updates from chats outside the whitelist are dropped (an empty whitelist
    allows every chat), as are updates without a user such as channel posts.
    For all other updates the user is loaded into ``context.user_data["user"]``,
    creating it on first contact.
    """
    allowed = set(whitelisted_chat_ids)

    async def before_handle_update(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        chat = update.effective_chat
        if chat is None:
            return

        if allowed and chat.id not in allowed:
            logger.warning(f"Ignoring update from chat_id {chat.id}: not whitelisted")
            raise ApplicationHandlerStop

        if update.effective_user is None:
            logger.debug(f"Ignoring update without a user in chat_id {chat.id}")
            raise ApplicationHandlerStop

        message = update.effective_message
        is_command = bool(message and message.text and message.text.startswith("/"))
        context.user_data["user"] = await repository.get_user_by_chat_id(
            chat.id,
            create_if_not_found=True,
            update_last_command_at=is_command,
        )

    return before_handle_update


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised by handlers and tell the user something went wrong."""
    logger.error("Error processing update", exc_info=context.error)
    if isinstance(update, Update) and update.effective_chat is not None:
        await update.effective_chat.send_message(messages.get_error_message())


def register_handlers(application: Application, whitelisted_chat_ids: List[int]) -> None:
    """
    Register all handlers on the application.

    Args:
        application: Telegram application
        whitelisted_chat_ids: Chats allowed to use the bot (empty = all)
    """
    application.add_handler(TypeHandler(Update, make_before_handle_update(whitelisted_chat_ids)), group=-1)

    application.add_handler(build_grocery_conversation())
    application.add_handler(CommandHandler("start", handle_start_command))
    application.add_handler(CommandHandler("help", handle_help_command))
    application.add_handler(CommandHandler("show_list", handle_show_list_command))
    application.add_handler(CommandHandler("cancel", handle_cancel_command))

    # Must come last: catches every command not handled above
    application.add_handler(MessageHandler(filters.COMMAND, handle_unknown_command))

    application.add_error_handler(handle_error)
    logger.info("Bot handlers registered")


async def sync_commands(application: Application) -> None:
    """Publish the command list to the Telegram command menu."""
    await application.bot.set_my_commands(BOT_COMMANDS)
    logger.info(f"Synced {len(BOT_COMMANDS)} bot commands")
