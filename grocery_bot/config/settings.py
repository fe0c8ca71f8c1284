"""
Application settings and configuration.

This module defines the configuration class for managing the YAML config file
and environment variable overrides.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"


def _parse_chat_ids(value: Any) -> List[int]:
    """
    Parse a list of chat IDs.

    Accepts a YAML list, a single integer, or a comma separated string
    (as found in environment variables).
    """
    if value is None or value == "":
        return []
    if isinstance(value, int):
        return [value]
    if isinstance(value, str):
        return [int(part) for part in value.split(",") if part.strip()]
    return [int(chat_id) for chat_id in value]


def _load_yaml(path: str) -> Dict[str, Any]:
    """
    Read the YAML config file.

    Returns an empty dict when the file does not exist.
    """
    if not os.path.exists(path):
        logger.info(f"Config file {path} not found, using environment variables only")
        return {}

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return raw or {}


class Config:
    """Configuration class for the YAML config file and environment variables."""

    REQUIRED = ["TELEGRAM_BOT_TOKEN"]

    def __init__(self, path: Optional[str] = None):
        self.path = path or os.getenv("CONFIG_PATH", DEFAULT_CONFIG_PATH)
        raw = _load_yaml(self.path)

        telegram = raw.get("telegram") or {}
        mongo = raw.get("mongo") or {}

        self.APP_NAME: str = os.getenv("APP_NAME", raw.get("app_name", "Grocery Bot"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", raw.get("log_level", "INFO"))

        self.TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", telegram.get("token") or "")
        self.TELEGRAM_WHITELISTED_CHAT_IDS: List[int] = _parse_chat_ids(
            os.getenv("TELEGRAM_WHITELISTED_CHAT_IDS", telegram.get("whitelisted_chat_ids"))
        )
        self.TELEGRAM_NOTI_CHAT_IDS: List[int] = _parse_chat_ids(
            os.getenv("TELEGRAM_NOTI_CHAT_IDS", telegram.get("noti_chat_ids"))
        )

        self.MONGO_FULL_URI: Optional[str] = os.getenv("MONGO_FULL_URI", mongo.get("full_uri")) or None
        self.MONGO_DB_NAME: str = os.getenv("MONGO_DB_NAME", mongo.get("db_name") or "grocery-bot")

    def validate(self) -> bool:
        """
        Validate configuration.

        Checks that all required settings are present.

        Returns:
            True if validation succeeds

        Raises:
            ValueError: If any required setting is missing
        """
        missing = [var for var in self.REQUIRED if not getattr(self, var)]
        if missing:
            raise ValueError(
                f"Missing required settings: {', '.join(missing)} "
                f"(set them in {self.path} or as environment variables)"
            )
        return True
