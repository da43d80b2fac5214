"""
Text normalization shared by every matcher.
"""

import re

_NON_WORD = re.compile(r"[^\w\s]")


def normalize(text: str) -> str:
    """
    Lowercase, trim, and drop everything outside word/space characters.

    Examples:
        >>> normalize("  iPhone-16 Pro! ")
        'iphone16 pro'
    """
    if not text:
        return ""
    return _NON_WORD.sub("", text.lower().strip())


def text_matches(text: str, query: str) -> bool:
    """True if the normalized query is a substring of the normalized text."""
    return normalize(query) in normalize(text)
