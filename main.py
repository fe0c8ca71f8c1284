#!/usr/bin/env python3
"""
Grocery Bot entry point.

Runs the Telegram bot in polling mode.

Configuration is read from config.yaml (see config.example.yaml), or the file
named by CONFIG_PATH. Environment variables override file values:
    - TELEGRAM_BOT_TOKEN: Telegram bot token (required)
    - TELEGRAM_WHITELISTED_CHAT_IDS: Comma separated chat IDs allowed to use the bot
    - TELEGRAM_NOTI_CHAT_IDS: Comma separated chat IDs notified on startup
    - MONGO_FULL_URI: MongoDB full URI
    - MONGO_DB_NAME: MongoDB database name (optional, defaults to grocery-bot)
"""

from grocery_bot.services import main

if __name__ == "__main__":
    main()
