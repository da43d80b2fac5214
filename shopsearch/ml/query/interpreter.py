"""
Query Interpreter
Keyword extraction, intent detection, and price-range extraction for raw queries.

Intent rules are evaluated top to bottom and the first match wins, so a query
containing both budget and premium terms ("cheap premium phone") is a budget
query.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Tuple

from ..config import QueryIntent

logger = logging.getLogger(__name__)


class InvalidQueryError(ValueError):
    """Raised when a query is missing or blank."""

    pass


# English function words plus Hinglish filler ("wala", "waali")
STOPWORDS = frozenset(
    [
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "is", "are", "was", "were", "be", "been", "by", "from",
        "wala", "waali",
    ]
)

# Ordered (pattern, intent) rules; order is part of the contract
INTENT_RULES: List[Tuple[Pattern[str], QueryIntent]] = [
    (re.compile(r"sasta|cheap|budget|affordable|under|less"), QueryIntent.BUDGET),
    (re.compile(r"premium|pro|max|high|expensive|costly"), QueryIntent.PREMIUM),
    (re.compile(r"latest|new|2024|2025|2026"), QueryIntent.LATEST),
    (re.compile(r"strong|durable|tough|good quality"), QueryIntent.QUALITY),
]

# "50k", "50000", "50,000", "20000 rupees", "999 rs."
PRICE_PATTERN = re.compile(r"(\d+(?:,\d+)?)\s*(k|rupees?|rs\.?)?", re.IGNORECASE)


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price bounds detected in a query."""

    min: int
    max: int

    def contains(self, price: float) -> bool:
        return self.min <= price <= self.max

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class QueryContext:
    """Everything derived from one raw query string."""

    query: str
    keywords: Tuple[str, ...] = field(default_factory=tuple)
    intent: QueryIntent = QueryIntent.GENERAL
    price_range: Optional[PriceRange] = None

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "keywords": list(self.keywords),
            "intent": self.intent.value,
            "price_range": self.price_range.to_dict() if self.price_range else None,
        }


def extract_keywords(query: str) -> List[str]:
    """
    Split a query into meaningful lowercase tokens.

    Tokens of one character and stopwords are dropped; order is preserved and
    duplicates are kept.

    Examples:
        >>> extract_keywords("sasta wala iPhone under 50k")
        ['sasta', 'iphone', 'under', '50k']
    """
    return [
        token
        for token in query.lower().split()
        if len(token) > 1 and token not in STOPWORDS
    ]


def detect_intent(query: str) -> QueryIntent:
    """
    Classify a query into an intent using the ordered INTENT_RULES.

    Args:
        query: Raw search query

    Returns:
        The intent of the first matching rule, or GENERAL
    """
    lowered = query.lower()

    for pattern, intent in INTENT_RULES:
        if pattern.search(lowered):
            return intent

    return QueryIntent.GENERAL


def extract_price_range(query: str) -> Optional[PriceRange]:
    """
    Extract a price range from numerals in the query.

    A trailing "k" multiplies by 1000. One number means "up to", two or more
    span from the smallest to the largest.

    Examples:
        >>> extract_price_range("iPhone under 50k rupees")
        PriceRange(min=0, max=50000)
        >>> extract_price_range("between 20k and 50k")
        PriceRange(min=20000, max=50000)
        >>> extract_price_range("iPhone") is None
        True
    """
    prices = []

    for match in PRICE_PATTERN.finditer(query):
        amount = int(match.group(1).replace(",", ""))
        suffix = match.group(2)
        if suffix and suffix.lower() == "k":
            amount *= 1000
        prices.append(amount)

    if not prices:
        return None

    if len(prices) == 1:
        return PriceRange(min=0, max=prices[0])

    return PriceRange(min=min(prices), max=max(prices))


def interpret_query(query: Optional[str]) -> QueryContext:
    """
    Derive keywords, intent, and price range from a raw query.

    Args:
        query: Raw search query

    Returns:
        QueryContext for the query

    Raises:
        InvalidQueryError: If the query is missing or blank
    """
    if query is None or not query.strip():
        raise InvalidQueryError("Search query cannot be empty")

    context = QueryContext(
        query=query,
        keywords=tuple(extract_keywords(query)),
        intent=detect_intent(query),
        price_range=extract_price_range(query),
    )

    logger.debug(
        f"Interpreted query '{query}': intent={context.intent.value}, "
        f"keywords={list(context.keywords)}, price_range={context.price_range}"
    )

    return context
