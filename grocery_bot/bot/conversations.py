"""
Conversation handlers for the multi-step commands.

/add_item and /record_purchase both start by asking for a grocery item. The
typed name is matched against the user's items: an exact match, or a single
item whose name contains the typed text, is used directly. Other similar items
are offered on an inline keyboard, and otherwise a new item is created after
asking for its unit. The flow then continues with the quantity (and, for
purchases, the total price).

The state of a running conversation is kept per chat in
``context.user_data[CONVERSATIONS_KEY][chat_id]``, matching the per chat and
user keys of the ConversationHandler.
"""

import logging
from typing import Any, Dict, List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Message, Update
from telegram.ext import (
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    ConversationHandler,
    MessageHandler,
    filters,
)

from grocery_bot.bot import messages
from grocery_bot.bot.parser import parse_price, parse_quantity, parse_unit
from grocery_bot.database import repository
from grocery_bot.models import GroceryItem, GroceryItemUnit

logger = logging.getLogger(__name__)

# Conversation states
ITEM_NAME, ITEM_CHOICE, ITEM_UNIT, QUANTITY, PRICE = range(5)

FLOW_ADD_ITEM = "add_item"
FLOW_RECORD_PURCHASE = "record_purchase"

CALLBACK_ITEM = "item:"
CALLBACK_NEW_ITEM = "item:new"
CALLBACK_UNIT = "unit:"
CALLBACK_SKIP_QUANTITY = "quantity:skip"

CONVERSATIONS_KEY = "conversations"

UNITS_PER_ROW = 5


def _state(update: Update, context: ContextTypes.DEFAULT_TYPE) -> Dict[str, Any]:
    """Get the conversation data of the user in the current chat."""
    conversations = context.user_data.setdefault(CONVERSATIONS_KEY, {})
    return conversations.setdefault(update.effective_chat.id, {})


def _is_adding(state: Dict[str, Any]) -> bool:
    return state.get("flow") == FLOW_ADD_ITEM


def _reset(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    context.user_data.get(CONVERSATIONS_KEY, {}).pop(update.effective_chat.id, None)


async def _prompt(
    update: Update,
    state: Dict[str, Any],
    text: str,
    reply_markup: Optional[InlineKeyboardMarkup] = None,
) -> None:
    """Send a prompt and remember it so it can be replaced once answered."""
    message = await update.effective_chat.send_message(text, reply_markup=reply_markup)
    state["prompt_message"] = message


async def _finish_prompt(state: Dict[str, Any], done_text: str) -> None:
    """Replace the last prompt with a summary of the answer (and drop its keyboard)."""
    message: Optional[Message] = state.pop("prompt_message", None)
    if message is not None:
        await message.edit_text(done_text)


async def _answer_button(update: Update, state: Dict[str, Any]) -> bool:
    """
    Answer a button press.

    Returns:
        True if the button belongs to the current prompt, False for buttons
        of earlier prompts
    """
    query = update.callback_query
    await query.answer()
    prompt: Optional[Message] = state.get("prompt_message")
    if prompt is None or query.message is None or query.message.message_id != prompt.message_id:
        logger.info(f"Ignoring button {query.data!r} of an earlier prompt")
        return False
    return True


def _is_direct_match(name: str, item: GroceryItem) -> bool:
    """Check whether an item can be used without asking the user."""
    return name.lower() in item.name.lower()


def build_candidates_keyboard(candidates: List[GroceryItem]) -> InlineKeyboardMarkup:
    rows = [
        [InlineKeyboardButton(item.name, callback_data=f"{CALLBACK_ITEM}{index}")]
        for index, item in enumerate(candidates)
    ]
    rows.append([InlineKeyboardButton(messages.NEW_ITEM_BUTTON_TEXT, callback_data=CALLBACK_NEW_ITEM)])
    return InlineKeyboardMarkup(rows)


def build_units_keyboard() -> InlineKeyboardMarkup:
    units = GroceryItemUnit.values()
    rows = [
        [InlineKeyboardButton(unit, callback_data=f"{CALLBACK_UNIT}{unit}") for unit in units[i:i + UNITS_PER_ROW]]
        for i in range(0, len(units), UNITS_PER_ROW)
    ]
    return InlineKeyboardMarkup(rows)


async def start_add_item(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Handle /add_item command - put a grocery item on the list."""
    _reset(update, context)
    state = _state(update, context)
    state["flow"] = FLOW_ADD_ITEM
    await _prompt(update, state, messages.get_item_name_prompt(adding=True))
    return ITEM_NAME


async def start_record_purchase(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Handle /record_purchase command - record what was paid for an item."""
    _reset(update, context)
    state = _state(update, context)
    state["flow"] = FLOW_RECORD_PURCHASE
    await _prompt(update, state, messages.get_item_name_prompt(adding=False))
    return ITEM_NAME


async def receive_item_name(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    state = _state(update, context)
    name = (update.message.text or "").strip()
    if not name:
        await update.message.reply_text(messages.get_invalid_item_name_message())
        return ITEM_NAME

    await _finish_prompt(state, messages.get_item_done_message(name))
    state["input_name"] = name

    user = context.user_data["user"]
    results = await repository.get_similar_by_name(user.id, name)

    if len(results) == 1 and _is_direct_match(name, results[0]):
        return await _continue_with_item(update, context, results[0])

    if results:
        state["candidates"] = results
        await _prompt(update, state, messages.get_disambiguation_prompt(), build_candidates_keyboard(results))
        return ITEM_CHOICE

    return await _prompt_unit(update, state)


async def receive_item_choice(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    state = _state(update, context)
    if not await _answer_button(update, state):
        return ITEM_CHOICE

    data = update.callback_query.data
    if data == CALLBACK_NEW_ITEM:
        await _finish_prompt(state, messages.get_item_done_message(state["input_name"]))
        return await _prompt_unit(update, state)

    candidates: List[GroceryItem] = state.get("candidates") or []
    index = int(data[len(CALLBACK_ITEM):])
    if index >= len(candidates):
        return ITEM_CHOICE

    item = candidates[index]
    await _finish_prompt(state, messages.get_item_done_message(item.name))
    return await _continue_with_item(update, context, item)


async def remind_to_choose(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    await update.message.reply_text(messages.get_choose_option_message())
    return ITEM_CHOICE


async def _prompt_unit(update: Update, state: Dict[str, Any]) -> int:
    await _prompt(update, state, messages.get_unit_prompt(), build_units_keyboard())
    return ITEM_UNIT


async def receive_unit(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    state = _state(update, context)
    query = update.callback_query
    if query is not None:
        if not await _answer_button(update, state):
            return ITEM_UNIT
        text = query.data[len(CALLBACK_UNIT):]
    else:
        text = update.message.text

    unit = parse_unit(text)
    if unit is None:
        await update.effective_chat.send_message(messages.get_invalid_unit_message())
        return ITEM_UNIT

    await _finish_prompt(state, messages.get_unit_done_message(unit))

    user = context.user_data["user"]
    item = await repository.create_grocery_item(user.id, state["input_name"], unit)
    await update.effective_chat.send_message(messages.get_item_created_message(item.name))
    return await _continue_with_item(update, context, item)


async def _continue_with_item(update: Update, context: ContextTypes.DEFAULT_TYPE, item: GroceryItem) -> int:
    state = _state(update, context)
    state["item"] = item

    if _is_adding(state):
        if item.is_pending_for_purchase():
            await update.effective_chat.send_message(messages.get_item_already_in_list_message(item.name))
            _reset(update, context)
            return ConversationHandler.END
        keyboard = InlineKeyboardMarkup(
            [[InlineKeyboardButton(messages.SKIP_BUTTON_TEXT, callback_data=CALLBACK_SKIP_QUANTITY)]]
        )
        await _prompt(update, state, messages.get_quantity_prompt(True, item), keyboard)
        return QUANTITY

    await _prompt(update, state, messages.get_quantity_prompt(False, item))
    return QUANTITY


async def receive_quantity(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    state = _state(update, context)
    adding = _is_adding(state)
    query = update.callback_query
    if query is not None:
        if not await _answer_button(update, state):
            return QUANTITY
        quantity = 0.0 if adding else None
    else:
        quantity = parse_quantity(update.message.text, allow_zero=adding)

    if quantity is None:
        await update.effective_chat.send_message(messages.get_invalid_quantity_message(adding))
        return QUANTITY

    await _finish_prompt(state, messages.get_quantity_done_message(quantity))
    item: GroceryItem = state["item"]

    if adding:
        await repository.set_pending_purchase(item, quantity or None)
        await update.effective_chat.send_message(messages.get_item_added_message(item.name))
        _reset(update, context)
        return ConversationHandler.END

    state["quantity"] = quantity
    await _prompt(update, state, messages.get_price_prompt())
    return PRICE


async def receive_price(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    state = _state(update, context)
    price = parse_price(update.message.text)
    if price is None:
        await update.message.reply_text(messages.get_invalid_price_message())
        return PRICE

    await _finish_prompt(state, messages.get_price_done_message(price))
    item: GroceryItem = state["item"]
    quantity: float = state["quantity"]

    await repository.record_purchase(item, quantity, price)
    await update.message.reply_text(messages.get_purchase_recorded_message(item, quantity, price))
    _reset(update, context)
    return ConversationHandler.END


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Handle /cancel command - abort the running command."""
    await _finish_prompt(_state(update, context), messages.get_cancelled_message())
    _reset(update, context)
    await update.effective_message.reply_text(messages.get_cancelled_message())
    return ConversationHandler.END


def build_grocery_conversation() -> ConversationHandler:
    """Build the conversation handler for /add_item and /record_purchase."""
    text = filters.TEXT & ~filters.COMMAND
    return ConversationHandler(
        entry_points=[
            CommandHandler(FLOW_ADD_ITEM, start_add_item),
            CommandHandler(FLOW_RECORD_PURCHASE, start_record_purchase),
        ],
        states={
            ITEM_NAME: [MessageHandler(text, receive_item_name)],
            ITEM_CHOICE: [
                CallbackQueryHandler(receive_item_choice, pattern=f"^{CALLBACK_ITEM}(new|\\d+)$"),
                MessageHandler(text, remind_to_choose),
            ],
            ITEM_UNIT: [
                CallbackQueryHandler(receive_unit, pattern=f"^{CALLBACK_UNIT}"),
                MessageHandler(text, receive_unit),
            ],
            QUANTITY: [
                CallbackQueryHandler(receive_quantity, pattern=f"^{CALLBACK_SKIP_QUANTITY}$"),
                MessageHandler(text, receive_quantity),
            ],
            PRICE: [MessageHandler(text, receive_price)],
        },
        fallbacks=[CommandHandler("cancel", cancel)],
        allow_reentry=True,
        name="grocery_conversation",
    )
