"""
Application bootstrap service.

This module wires the configuration, the database and the Telegram
application together and runs the bot:
1. Validate configuration
2. Connect to MongoDB (when configured)
3. Register handlers and sync the command menu
4. Notify the notification chats and start polling
"""

import logging
import sys

from telegram.constants import ParseMode
from telegram.ext import Application, ApplicationBuilder, Defaults

from grocery_bot.bot import register_handlers, sync_commands
from grocery_bot.bot.messages import get_started_message
from grocery_bot.config import Config, config
from grocery_bot.database import close_mongo, init_mongo
from grocery_bot.services.telegram_client import notify

logger = logging.getLogger(__name__)


class StartupError(Exception):
    """Raised when the bot cannot start."""


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
        force=True,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # httpx logs request URLs, which contain the bot token
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _validate_config(settings: Config) -> bool:
    """
    Validate configuration.

    Returns:
        True if validation succeeds, False otherwise.
    """
    try:
        settings.validate()
        return True
    except ValueError as e:
        logger.error(f"Configuration validation failed: {e}")
        return False


def make_post_init(settings: Config):
    """Build the callback run once the Telegram application is initialized."""

    async def post_init(application: Application) -> None:
        if settings.MONGO_FULL_URI:
            try:
                await init_mongo(settings.MONGO_FULL_URI, settings.MONGO_DB_NAME)
            except Exception as e:
                logger.exception("Failed to connect to database")
                raise StartupError("Failed to connect to database") from e
        else:
            logger.warning(
                "mongo.full_uri is not set in config.yaml, skipping database connection. "
                "Commands that need the database will fail."
            )

        await sync_commands(application)
        await notify(application.bot, settings.TELEGRAM_NOTI_CHAT_IDS, get_started_message(settings.APP_NAME))
        logger.info(f"{settings.APP_NAME} started")

    return post_init


async def post_shutdown(application: Application) -> None:
    close_mongo()


def build_application(settings: Config) -> Application:
    """
    Build the Telegram application.

    Args:
        settings: Validated configuration

    Returns:
        Application with all handlers registered
    """
    application = (
        ApplicationBuilder()
        .token(settings.TELEGRAM_BOT_TOKEN)
        .defaults(Defaults(parse_mode=ParseMode.MARKDOWN_V2))
        .post_init(make_post_init(settings))
        .post_shutdown(post_shutdown)
        .build()
    )
    register_handlers(application, settings.TELEGRAM_WHITELISTED_CHAT_IDS)
    return application


def run(settings: Config = config) -> int:
    """
    Run the bot until interrupted.

    Returns:
        Process exit code
    """
    setup_logging(settings.LOG_LEVEL)

    if not _validate_config(settings):
        return 1

    application = build_application(settings)
    logger.info(f"Starting {settings.APP_NAME}...")
    try:
        application.run_polling(drop_pending_updates=True)
    except StartupError as e:
        logger.error(f"{settings.APP_NAME} failed to start: {e}")
        return 1
    return 0


def main() -> None:
    sys.exit(run())
