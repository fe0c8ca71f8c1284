"""
Data models for the application.

This module contains all data models used throughout the application.
"""

from grocery_bot.models.user import User
from grocery_bot.models.grocery_item import (
    GroceryItem,
    GroceryItemUnit,
    PendingPurchase,
    PurchaseRecord,
    get_unit_denominator,
)

__all__ = [
    "User",
    "GroceryItem",
    "GroceryItemUnit",
    "PendingPurchase",
    "PurchaseRecord",
    "get_unit_denominator",
]
