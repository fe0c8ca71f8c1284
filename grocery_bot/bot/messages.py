"""
Message templates for bot responses.

This module contains all message templates used by the bot commands.
All templates return MarkdownV2 text; user supplied values are escaped.
"""

from typing import List

from telegram.helpers import escape_markdown

from grocery_bot.models import GroceryItem

NEW_ITEM_BUTTON_TEXT = "No, this is a new item"
SKIP_BUTTON_TEXT = "Skip"


def e(text) -> str:
    """Escape text for MarkdownV2."""
    return escape_markdown(str(text), version=2)


def format_number(value: float) -> str:
    """Format a number without trailing zeros (2.0 -> '2', 2.50 -> '2.5')."""
    return f"{value:f}".rstrip("0").rstrip(".")


def get_welcome_message(app_name: str) -> str:
    """Get welcome message for /start command."""
    return (
        f"👋 *{e(f'Welcome to {app_name}!')}*\n\n"
        f"{e('I keep track of your grocery list and what you paid for your groceries.')}\n\n"
        f"{e('Use /help to see all available commands.')}"
    )


def get_help_message() -> str:
    """Get help message for /help command."""
    return (
        "📚 *Available Commands:*\n\n"
        f"{e('/add_item - Add grocery item to list')}\n"
        f"{e('/show_list - Show grocery list')}\n"
        f"{e('/record_purchase - Record a purchase')}\n"
        f"{e('/cancel - Cancel the current command')}\n"
        f"{e('/help - Show available commands')}"
    )


def get_started_message(app_name: str) -> str:
    """Get notification message sent on startup."""
    return e(f"{app_name} started.")


def get_item_name_prompt(adding: bool) -> str:
    """Get prompt for the grocery item name."""
    if adding:
        return e("Select or enter a grocery item to add:")
    return e("Select or enter the grocery item you bought:")


def get_item_done_message(name: str) -> str:
    return e(f"Grocery item: {name}")


def get_invalid_item_name_message() -> str:
    return e("Please enter the name of a grocery item.")


def get_disambiguation_prompt() -> str:
    return e("Are you referring to one of the following items?")


def get_choose_option_message() -> str:
    return e("Please choose one of the options above.")


def get_unit_prompt() -> str:
    return e("Unit for this item:")


def get_unit_done_message(unit: str) -> str:
    return e(f"Unit for this item: {unit}")


def get_invalid_unit_message() -> str:
    return e("Please enter a valid unit.")


def get_item_created_message(name: str) -> str:
    return e(f"New grocery item {name} created.")


def get_item_already_in_list_message(name: str) -> str:
    return e(f"Grocery item {name} already in list.")


def get_quantity_prompt(optional: bool, item: GroceryItem) -> str:
    """Get prompt for the quantity."""
    if optional:
        return e("Quantity: (Enter number or skip)")
    pending = item.pending_purchase
    if pending is not None and pending.quantity is not None:
        return e(f"Quantity: (requested {format_number(pending.quantity)} {item.unit})")
    return e("Quantity:")


def get_quantity_done_message(quantity: float) -> str:
    if not quantity:
        return e("Quantity not specified.")
    return e(f"Quantity: {format_number(quantity)}")


def get_invalid_quantity_message(optional: bool) -> str:
    if optional:
        return e("Please enter a valid positive number or 0 to skip.")
    return e("Please enter a valid positive number.")


def get_item_added_message(name: str) -> str:
    return e(f"Grocery item {name} added.")


def get_price_prompt() -> str:
    return e("Enter total price:")


def get_price_done_message(price: float) -> str:
    return e(f"Total Price: {format_number(price)}")


def get_invalid_price_message() -> str:
    return e("Please enter a valid positive number.")


def get_purchase_recorded_message(item: GroceryItem, quantity: float, price: float) -> str:
    """Get confirmation message for a recorded purchase."""
    avg_price, denominator = GroceryItem.calculate_avg_price(price, quantity, item.unit)
    return e(
        f"Purchase of {format_number(quantity)} {item.unit}(s) of {item.name} "
        f"at ${format_number(price)} (${avg_price:.2f}/{denominator}{item.unit}) recorded."
    )


def format_grocery_list_item(item: GroceryItem) -> str:
    """Format a single line of the grocery list."""
    line = f"*{e(item.name)}*"
    pending = item.pending_purchase
    if pending is not None and pending.quantity:
        line += e(f" x{format_number(pending.quantity)} {item.unit}")
    if item.purchases:
        avg_price, denominator = item.get_price_summary()
        line += e(f" (avg: ${avg_price:.2f}/{denominator}{item.unit})")
    return line


def get_grocery_list_message(items: List[GroceryItem]) -> str:
    """Get message for /show_list command."""
    if not items:
        return get_empty_list_message()
    lines = [e("Grocery list:")]
    lines.extend(format_grocery_list_item(item) for item in items)
    return "\n".join(lines)


def get_empty_list_message() -> str:
    return e("📭 Your grocery list is empty. Use /add_item to add something.")


def get_cancelled_message() -> str:
    return e("Cancelled.")


def get_nothing_to_cancel_message() -> str:
    return e("ℹ️ Nothing to cancel.")


def get_unknown_command_message(command: str) -> str:
    """Get message for unknown command."""
    return (
        f"❓ Unknown command: `{escape_markdown(command, version=2, entity_type='code')}`\n\n"
        f"{e('Use /help to see all available commands.')}"
    )


def get_error_message() -> str:
    """Get generic error message."""
    return e("❌ Error processing command. Please try again.")
