"""
Command and input parsing utilities.

This module handles parsing of Telegram bot commands and of the values users
type in reply to prompts.
"""

import re
from typing import Optional, List, Tuple

from grocery_bot.models import GroceryItemUnit

# Plain decimal number: ASCII digits and an optional "." or "," fraction
NUMBER_PATTERN = re.compile(r"^-?[0-9]+([.,][0-9]+)?$")


def parse_command(message_text: str) -> Tuple[Optional[str], List[str]]:
    """
    Parse command from message text.

    Args:
        message_text: Message text from Telegram

    Returns:
        Tuple of (command, args) or (None, []) if not a command

    Examples:
        >>> parse_command("/show_list")
        ('show_list', [])
        >>> parse_command("/add_item@GroceryBot")
        ('add_item', [])
        >>> parse_command("hello")
        (None, [])
    """
    if not message_text or not message_text.startswith("/"):
        return None, []

    # Split command and arguments
    parts = message_text.split()
    command = parts[0][1:].split("@", 1)[0].lower()  # Remove '/' and bot mention
    args = parts[1:] if len(parts) > 1 else []

    return command, args


def parse_number(text: str) -> Optional[float]:
    """
    Parse a plain decimal number, accepting a decimal comma.

    Examples:
        >>> parse_number("2,5")
        2.5
        >>> parse_number("abc") is None
        True
        >>> parse_number("1_000") is None
        True
    """
    if text is None:
        return None
    text = text.strip()
    if not NUMBER_PATTERN.match(text):
        return None
    return float(text.replace(",", "."))


def parse_quantity(text: str, allow_zero: bool = True) -> Optional[float]:
    """
    Parse a quantity.

    Args:
        text: Text typed by the user
        allow_zero: Accept 0 (used as "not specified")

    Returns:
        The quantity, or None if invalid
    """
    value = parse_number(text)
    if value is None or value < 0:
        return None
    if value == 0 and not allow_zero:
        return None
    return value


def parse_price(text: str) -> Optional[float]:
    """Parse a total price (zero or positive)."""
    value = parse_number(text)
    if value is None or value < 0:
        return None
    return value


def parse_unit(text: str) -> Optional[str]:
    """
    Parse a measurement unit.

    Examples:
        >>> parse_unit("KG")
        'kg'
        >>> parse_unit("bottles") is None
        True
    """
    if not text:
        return None
    value = text.strip().lower()
    if value in GroceryItemUnit.values():
        return value
    return None
