"""
Database module.

This module contains the MongoDB connection management and the repository
functions for users and grocery items.
"""

from grocery_bot.database.connection import init_mongo, close_mongo, mask_uri

__all__ = ["init_mongo", "close_mongo", "mask_uri"]
