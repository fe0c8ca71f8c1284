"""
Helper utilities.
"""

from grocery_bot.helpers.regex import escape_regex
from grocery_bot.helpers.matching import rank_similar_names, MAX_SIMILAR_ITEMS

__all__ = ["escape_regex", "rank_similar_names", "MAX_SIMILAR_ITEMS"]
