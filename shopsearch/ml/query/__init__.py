"""
Query Understanding Module
Normalization, fuzzy similarity, and query interpretation.
"""

from .normalizer import normalize, text_matches
from .similarity import levenshtein, similarity
from .interpreter import (
    InvalidQueryError,
    PriceRange,
    QueryContext,
    QueryIntent,
    STOPWORDS,
    INTENT_RULES,
    extract_keywords,
    detect_intent,
    extract_price_range,
    interpret_query,
)

__all__ = [
    "normalize",
    "text_matches",
    "levenshtein",
    "similarity",
    "InvalidQueryError",
    "PriceRange",
    "QueryContext",
    "QueryIntent",
    "STOPWORDS",
    "INTENT_RULES",
    "extract_keywords",
    "detect_intent",
    "extract_price_range",
    "interpret_query",
]
