"""Unit tests for query interpretation: keywords, intent, and price range"""

import pytest

from shopsearch.ml.config import QueryIntent
from shopsearch.ml.query import (
    InvalidQueryError,
    PriceRange,
    detect_intent,
    extract_keywords,
    extract_price_range,
    interpret_query,
)


class TestExtractKeywords:
    """Tokenization and stopword removal"""

    def test_drops_stopwords_and_lowercases(self):
        assert extract_keywords("sasta wala iPhone under 50k") == ["sasta", "iphone", "under", "50k"]

    def test_drops_single_characters(self):
        assert extract_keywords("a b phone") == ["phone"]

    def test_keeps_duplicates_in_order(self):
        assert extract_keywords("case for the case") == ["case", "case"]

    def test_only_stopwords(self):
        assert extract_keywords("the and of") == []


class TestDetectIntent:
    """Ordered regex intent rules"""

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("cheap phone", QueryIntent.BUDGET),
            ("sasta wala mobile", QueryIntent.BUDGET),
            ("laptop under 50k", QueryIntent.BUDGET),
            ("premium laptop", QueryIntent.PREMIUM),
            ("costly watch", QueryIntent.PREMIUM),
            ("latest phone", QueryIntent.LATEST),
            ("phone 2025", QueryIntent.LATEST),
            ("durable case", QueryIntent.QUALITY),
            ("good quality earphones", QueryIntent.QUALITY),
            ("iPhone", QueryIntent.GENERAL),
            ("Samsung Galaxy", QueryIntent.GENERAL),
        ],
    )
    def test_intents(self, query, expected):
        assert detect_intent(query) == expected

    def test_budget_rule_wins_over_premium(self):
        """First matching rule decides"""
        assert detect_intent("cheap premium phone") == QueryIntent.BUDGET

    def test_premium_rule_wins_over_latest(self):
        assert detect_intent("new pro model") == QueryIntent.PREMIUM

    def test_matches_inside_words(self):
        """Rules match substrings, not whole words"""
        assert detect_intent("protective cover") == QueryIntent.PREMIUM
        assert detect_intent("renewed phone") == QueryIntent.LATEST

    def test_case_insensitive(self):
        assert detect_intent("CHEAP Phone") == QueryIntent.BUDGET


class TestExtractPriceRange:
    """Numeric price extraction"""

    def test_single_k_amount_is_upper_bound(self):
        assert extract_price_range("iPhone under 50k") == PriceRange(min=0, max=50000)

    def test_two_amounts_span_range(self):
        assert extract_price_range("between 20k and 50k") == PriceRange(min=20000, max=50000)

    def test_comma_and_rupees(self):
        assert extract_price_range("phone 50,000 rupees") == PriceRange(min=0, max=50000)

    def test_rs_suffix(self):
        assert extract_price_range("earphones 999 rs") == PriceRange(min=0, max=999)

    def test_uppercase_k(self):
        assert extract_price_range("laptop 60K") == PriceRange(min=0, max=60000)

    def test_model_numbers_count_as_prices(self):
        """Every numeral is treated as a price"""
        assert extract_price_range("iPhone 16 under 50k") == PriceRange(min=16, max=50000)

    def test_no_numbers(self):
        assert extract_price_range("iPhone") is None

    def test_contains(self):
        price_range = PriceRange(min=100, max=200)
        assert price_range.contains(100)
        assert price_range.contains(200)
        assert not price_range.contains(200.5)


class TestInterpretQuery:
    """Full interpretation"""

    def test_budget_query(self):
        context = interpret_query("sasta iPhone under 50k")

        assert context.query == "sasta iPhone under 50k"
        assert context.intent == QueryIntent.BUDGET
        assert context.price_range == PriceRange(min=0, max=50000)
        assert context.keywords == ("sasta", "iphone", "under", "50k")

    def test_plain_query(self):
        context = interpret_query("Samsung Galaxy")

        assert context.intent == QueryIntent.GENERAL
        assert context.price_range is None

    @pytest.mark.parametrize("query", ["", "   ", "\t\n", None])
    def test_blank_query_rejected(self, query):
        with pytest.raises(InvalidQueryError):
            interpret_query(query)

    def test_invalid_query_is_value_error(self):
        with pytest.raises(ValueError):
            interpret_query("")

    def test_to_dict(self):
        data = interpret_query("laptop under 60k").to_dict()

        assert data["intent"] == "budget"
        assert data["price_range"] == {"min": 0, "max": 60000}
        assert data["keywords"] == ["laptop", "under", "60k"]
