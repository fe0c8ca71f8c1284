"""Shared fixtures for the bot tests.

Telegram updates are MagicMock objects with AsyncMock send/reply methods, and
the repository functions are replaced with AsyncMocks, so no bot token or
MongoDB server is needed.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from grocery_bot.database import repository
from grocery_bot.models import GroceryItem, PendingPurchase, PurchaseRecord, User

NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def user() -> User:
    return User(id=ObjectId(), chat_id=42, created_at=NOW, updated_at=NOW)


@pytest.fixture
def make_item(user: User) -> Callable[..., GroceryItem]:
    """Factory for grocery items owned by the test user."""

    def _make(name: str = "Milk", unit: str = "l", pending: bool = False, purchases=()) -> GroceryItem:
        return GroceryItem(
            id=ObjectId(),
            user_id=user.id,
            name=name,
            unit=unit,
            pending_purchase=PendingPurchase(requested_at=NOW) if pending else None,
            purchases=[PurchaseRecord(purchased_at=NOW, quantity=q, price=p) for q, p in purchases],
            created_at=NOW,
            updated_at=NOW,
        )

    return _make


@pytest.fixture
def context(user: User) -> Any:
    ctx = MagicMock()
    ctx.user_data = {"user": user}
    ctx.bot.send_message = AsyncMock()
    return ctx


PROMPT_MESSAGE_ID = 100


def _make_prompt(message_id: int = PROMPT_MESSAGE_ID) -> Any:
    prompt = MagicMock()
    prompt.message_id = message_id
    prompt.edit_text = AsyncMock()
    return prompt


def _make_chat(chat_id: int = 42) -> Any:
    chat = MagicMock()
    chat.id = chat_id
    chat.send_message = AsyncMock(return_value=_make_prompt())
    return chat


@pytest.fixture
def message_update() -> Callable[..., Any]:
    """Factory for updates carrying a text message."""

    def _make(text: str, chat_id: int = 42) -> Any:
        update = MagicMock()
        update.callback_query = None
        update.message.text = text
        update.message.reply_text = AsyncMock()
        update.effective_message = update.message
        update.effective_chat = _make_chat(chat_id)
        return update

    return _make


@pytest.fixture
def callback_update() -> Callable[..., Any]:
    """
    Factory for updates carrying an inline keyboard button press.

    The button is attached to a prompt with message_id ``message_id``.
    """

    def _make(data: str, message_id: int = PROMPT_MESSAGE_ID) -> Any:
        update = MagicMock()
        update.message = None
        update.callback_query.data = data
        update.callback_query.answer = AsyncMock()
        update.callback_query.message = _make_prompt(message_id)
        update.effective_message = update.callback_query.message
        update.effective_message.text = "prompt"
        update.effective_message.reply_text = AsyncMock()
        update.effective_chat = _make_chat()
        return update

    return _make


@pytest.fixture
def repo(monkeypatch: pytest.MonkeyPatch) -> SimpleNamespace:
    """Replace the repository functions with AsyncMocks."""
    mocks = SimpleNamespace(
        get_user_by_chat_id=AsyncMock(),
        get_similar_by_name=AsyncMock(return_value=[]),
        create_grocery_item=AsyncMock(),
        set_pending_purchase=AsyncMock(),
        record_purchase=AsyncMock(),
        get_all_with_pending_purchase=AsyncMock(return_value=[]),
    )
    for name, mock in vars(mocks).items():
        monkeypatch.setattr(repository, name, mock)
    return mocks


def sent_texts(update: Any) -> list:
    """All texts sent to the chat of an update (replies and new messages)."""
    texts = [c.args[0] for c in update.effective_chat.send_message.call_args_list]
    if update.message is not None:
        texts += [c.args[0] for c in update.message.reply_text.call_args_list]
    return texts
