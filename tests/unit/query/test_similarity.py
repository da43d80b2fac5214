"""Unit tests for text normalization and edit-distance similarity"""

import pytest

from shopsearch.ml.query import levenshtein, normalize, similarity, text_matches


class TestNormalize:

    def test_lowercases_and_strips_punctuation(self):
        assert normalize("  iPhone-16 Pro! ") == "iphone16 pro"

    def test_empty(self):
        assert normalize("") == ""

    def test_keeps_unicode_letters(self):
        assert normalize("Café Série") == "café série"

    def test_text_matches(self):
        assert text_matches("Apple iPhone 16", "IPHONE")
        assert text_matches("Apple iPhone 16", "")
        assert not text_matches("Apple iPhone 16", "galaxy")


class TestLevenshtein:

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("abc", "", 3),
            ("same", "same", 0),
            ("iphone", "ifone", 2),
        ],
    )
    def test_distance(self, a, b, expected):
        assert levenshtein(a, b) == expected


class TestSimilarity:

    def test_identical(self):
        assert similarity("iPhone", "iphone") == 1.0

    def test_both_empty(self):
        assert similarity("", "") == 1.0

    def test_one_empty(self):
        assert similarity("", "phone") == 0.0

    def test_misspelling(self):
        # "iphone" -> "ifone": substitute p->f, delete h
        assert similarity("iPhone", "ifone") == pytest.approx(2 / 3)

    def test_completely_different(self):
        assert similarity("abc", "xyz") == 0.0

    def test_symmetric(self):
        assert similarity("Galaxy S24", "galaxy s23") == similarity("galaxy s23", "Galaxy S24")

    def test_in_unit_interval(self):
        for a, b in [("a", "bcdef"), ("laptop", "lap"), ("Redmi Note", "note")]:
            assert 0.0 <= similarity(a, b) <= 1.0
