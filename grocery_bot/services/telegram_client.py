"""
Telegram bot client service.

This module provides functionality for sending messages via Telegram bot API.
"""

import logging
from typing import Iterable

from telegram import Bot
from telegram.constants import ParseMode
from telegram.error import TelegramError

logger = logging.getLogger(__name__)


async def send_message(bot: Bot, chat_id: int, message: str) -> bool:
    """
    Send a MarkdownV2 message to a chat.

    Args:
        bot: Telegram bot
        chat_id: Telegram chat ID to send message to
        message: Message text to send (already escaped)

    Returns:
        True if message sent successfully, False otherwise
    """
    try:
        await bot.send_message(
            chat_id=chat_id,
            text=message,
            parse_mode=ParseMode.MARKDOWN_V2,
        )
        logger.info(f"Successfully sent message to chat_id {chat_id}")
        return True
    except TelegramError as e:
        logger.error(f"Telegram error sending message to chat_id {chat_id}: {e}")
        return False


async def notify(bot: Bot, chat_ids: Iterable[int], message: str) -> int:
    """
    Send a message to all notification chats.

    Args:
        bot: Telegram bot
        chat_ids: Notification chat IDs
        message: Message text to send (already escaped)

    Returns:
        Number of chats the message was delivered to
    """
    chat_ids = list(chat_ids)
    if not chat_ids:
        logger.debug("No notification chat IDs configured")
        return 0

    success_count = 0
    for chat_id in chat_ids:
        if await send_message(bot, chat_id, message):
            success_count += 1

    logger.info(f"Notification sent: {success_count}/{len(chat_ids)} successful")
    return success_count
