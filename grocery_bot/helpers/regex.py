"""
Regular expression helpers.
"""

import re

_SPECIAL_CHARS = re.compile(r"[-/\\^$*+?.()|\[\]{}]")


def escape_regex(text: str) -> str:
    """
    Escape special characters in a string for use in a regular expression.

    Only the regex metacharacters are escaped, so whitespace and unicode
    characters pass through unchanged (unlike ``re.escape``).

    Args:
        text: The string to escape

    Returns:
        The escaped string

    Examples:
        >>> escape_regex("price: $10.99")
        'price: \\\\$10\\\\.99'
        >>> escape_regex("hello")
        'hello'
    """
    return _SPECIAL_CHARS.sub(lambda match: "\\" + match.group(0), text)
