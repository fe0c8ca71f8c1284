import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from grocery_bot.database.connection import (
    GROCERY_ITEMS_COLLECTION,
    USERS_COLLECTION,
    get_collection,
)
from grocery_bot.helpers import escape_regex, rank_similar_names, MAX_SIMILAR_ITEMS
from grocery_bot.models import GroceryItem, PendingPurchase, PurchaseRecord, User

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def get_user_by_chat_id(
    chat_id: int,
    create_if_not_found: bool = False,
    update_last_command_at: bool = False,
) -> Optional[User]:
    """
    Get a user by Telegram chat ID.

    Args:
        chat_id: Telegram chat ID
        create_if_not_found: Create the user if it does not exist yet
        update_last_command_at: Set the last command timestamp to now

    Returns:
        The user, or None if not found and not created
    """
    try:
        users = get_collection(USERS_COLLECTION)
        now = _utcnow()

        set_fields: Dict[str, Any] = {}
        if update_last_command_at:
            set_fields["last_command_at"] = now
            set_fields["updated_at"] = now

        update: Dict[str, Any] = {}
        if set_fields:
            update["$set"] = set_fields
        if create_if_not_found:
            on_insert = {"chat_id": chat_id, "created_at": now, "updated_at": now, "last_command_at": None}
            update["$setOnInsert"] = {k: v for k, v in on_insert.items() if k not in set_fields}

        if update:
            doc = await users.find_one_and_update(
                {"chat_id": chat_id},
                update,
                upsert=create_if_not_found,
                return_document=ReturnDocument.AFTER,
            )
        else:
            doc = await users.find_one({"chat_id": chat_id})

        if doc is None:
            logger.info(f"User with chat_id {chat_id} not found")
            return None
        return User.from_document(doc)
    except Exception:
        logger.exception(f"Error getting user with chat_id {chat_id}")
        raise


async def get_grocery_item_by_name(user_id: ObjectId, name: str) -> Optional[GroceryItem]:
    """
    Get a user's grocery item by exact name, ignoring case.

    Args:
        user_id: ID of the owning user
        name: Name of the grocery item

    Returns:
        The grocery item, or None if not found
    """
    try:
        items = get_collection(GROCERY_ITEMS_COLLECTION)
        doc = await items.find_one({
            "user": user_id,
            "name": {"$regex": f"^{escape_regex(name.strip())}$", "$options": "i"},
        })
        return GroceryItem.from_document(doc) if doc else None
    except Exception:
        logger.exception(f"Error getting grocery item {name!r}")
        raise


async def get_similar_by_name(user_id: ObjectId, name: str) -> List[GroceryItem]:
    """
    Search a user's grocery items by name.

    An exact (case-insensitive) match is returned on its own. Otherwise the
    user's items are ranked by fuzzy similarity and at most MAX_SIMILAR_ITEMS
    are returned.

    Args:
        user_id: ID of the owning user
        name: Name typed by the user

    Returns:
        Matching grocery items, best match first
    """
    exact = await get_grocery_item_by_name(user_id, name)
    if exact is not None:
        return [exact]

    try:
        items = get_collection(GROCERY_ITEMS_COLLECTION)
        docs = await items.find({"user": user_id}).to_list(length=None)
    except Exception:
        logger.exception(f"Error searching grocery items similar to {name!r}")
        raise

    by_name = {doc["name"]: GroceryItem.from_document(doc) for doc in docs}
    ranked = rank_similar_names(name, list(by_name), limit=MAX_SIMILAR_ITEMS)
    logger.debug(f"Found {len(ranked)} grocery items similar to {name!r}")
    return [by_name[item_name] for item_name in ranked]


async def create_grocery_item(
    user_id: ObjectId,
    name: str,
    unit: str,
    pending_purchase: Optional[PendingPurchase] = None,
) -> GroceryItem:
    """
    Create a new grocery item.

    Args:
        user_id: ID of the owning user
        name: Name of the grocery item
        unit: Measurement unit (a GroceryItemUnit value)
        pending_purchase: Optional pending purchase to start with

    Returns:
        The new grocery item

    Raises:
        pymongo.errors.DuplicateKeyError: If the user already has an item with this name
    """
    now = _utcnow()
    item = GroceryItem(
        user_id=user_id,
        name=name.strip(),
        unit=unit,
        pending_purchase=pending_purchase,
        purchases=[],
        created_at=now,
        updated_at=now,
    )
    try:
        items = get_collection(GROCERY_ITEMS_COLLECTION)
        result = await items.insert_one(item.to_document())
        item.id = result.inserted_id
        logger.info(f"Created grocery item {item.name!r} for user {user_id}")
        return item
    except Exception:
        logger.exception(f"Error creating grocery item {name!r}")
        raise


async def set_pending_purchase(item: GroceryItem, quantity: Optional[float] = None) -> GroceryItem:
    """
    Put a grocery item on the grocery list.

    Args:
        item: The grocery item
        quantity: Requested quantity, or None if not specified

    Returns:
        The updated grocery item
    """
    now = _utcnow()
    pending = PendingPurchase(requested_at=now, quantity=quantity)
    try:
        items = get_collection(GROCERY_ITEMS_COLLECTION)
        await items.update_one(
            {"_id": item.id},
            {"$set": {"pending_purchase": pending.to_document(), "updated_at": now}},
        )
        item.pending_purchase = pending
        item.updated_at = now
        logger.info(f"Added grocery item {item.name!r} to the grocery list")
        return item
    except Exception:
        logger.exception(f"Error setting pending purchase of {item.name!r}")
        raise


async def record_purchase(item: GroceryItem, quantity: float, price: float) -> PurchaseRecord:
    """
    Append a purchase record and take the item off the grocery list.

    Args:
        item: The grocery item
        quantity: Quantity bought
        price: Total price paid

    Returns:
        The new purchase record
    """
    now = _utcnow()
    record = PurchaseRecord(purchased_at=now, quantity=quantity, price=price)
    try:
        items = get_collection(GROCERY_ITEMS_COLLECTION)
        await items.update_one(
            {"_id": item.id},
            {
                "$push": {"purchases": record.to_document()},
                "$set": {"pending_purchase": None, "updated_at": now},
            },
        )
        item.purchases.append(record)
        item.pending_purchase = None
        item.updated_at = now
        logger.info(f"Recorded purchase of {quantity} {item.unit} of {item.name!r} at {price}")
        return record
    except Exception:
        logger.exception(f"Error recording purchase of {item.name!r}")
        raise


async def get_all_with_pending_purchase(user_id: ObjectId) -> List[GroceryItem]:
    """
    Get all grocery items on a user's grocery list.

    Args:
        user_id: ID of the owning user

    Returns:
        Grocery items with a pending purchase, oldest request first
    """
    try:
        items = get_collection(GROCERY_ITEMS_COLLECTION)
        cursor = items.find({"user": user_id, "pending_purchase": {"$ne": None}})
        docs = await cursor.sort("pending_purchase.requested_at", 1).to_list(length=None)
        logger.info(f"Retrieved {len(docs)} grocery items with a pending purchase")
        return [GroceryItem.from_document(doc) for doc in docs]
    except Exception:
        logger.exception(f"Error getting grocery list of user {user_id}")
        raise
