"""Unit tests for BM25 and TF-IDF rankers"""

import math

import numpy as np
import pytest

from shopsearch.ml.retrieval import BM25Ranker, TFIDFRanker, rescale_scores

CORPUS = [
    "apple iphone 16 pro",
    "samsung galaxy s24",
    "apple macbook air",
    "iphone case cover",
]


class TestBM25Ranker:

    def setup_method(self):
        self.ranker = BM25Ranker(CORPUS)

    def test_corpus_statistics(self):
        assert self.ranker.avg_doc_length == pytest.approx(13 / 4)
        # df("iphone") = 2 of 4 docs
        assert self.ranker.idf["iphone"] == pytest.approx(math.log(2.5 / 2.5 + 1))

    def test_only_matching_documents_score(self):
        scores = self.ranker.get_scores("iphone")
        assert scores[0] > 0
        assert scores[3] > 0
        assert scores[1] == 0.0
        assert scores[2] == 0.0

    def test_shorter_document_ranks_first(self):
        """Same term frequency, length normalization favours the shorter doc"""
        assert self.ranker.rank("iphone")[0] == 3

    def test_more_query_terms_matched_scores_higher(self):
        scores = self.ranker.get_scores("apple iphone")
        assert scores[0] > scores[2]
        assert scores[0] > scores[3]

    def test_unknown_term(self):
        assert self.ranker.score("nokia", CORPUS[0]) == 0.0

    def test_empty_document(self):
        assert self.ranker.score("iphone", "") == 0.0

    def test_case_insensitive(self):
        assert self.ranker.score("IPHONE", CORPUS[0]) == self.ranker.score("iphone", CORPUS[0])

    def test_empty_corpus(self):
        ranker = BM25Ranker([])
        assert ranker.get_scores("iphone").size == 0
        assert ranker.score("iphone", "iphone case") == 0.0


class TestTFIDFRanker:

    def setup_method(self):
        self.ranker = TFIDFRanker(CORPUS)

    def test_term_frequencies(self):
        assert TFIDFRanker.term_frequencies("a b a") == pytest.approx({"a": 2 / 3, "b": 1 / 3})
        assert TFIDFRanker.term_frequencies("") == {}

    def test_score(self):
        # tf(query) = 1, tf(doc) = 1/3, idf = ln(4 / 3)
        expected = 1 / 3 * math.log(4 / 3)
        assert self.ranker.score("iphone", "iphone case cover") == pytest.approx(expected)

    def test_matching_documents_score_above_zero(self):
        scores = self.ranker.get_scores("iphone")
        assert scores[0] > 0
        assert scores[3] > 0
        assert scores[1] == 0.0

    def test_rank(self):
        # "iphone" is 1/3 of doc 3 but only 1/4 of doc 0
        assert self.ranker.rank("iphone")[:2] == [3, 0]


class TestRescaleScores:

    def test_relative_to_best(self):
        rescaled = rescale_scores(np.array([2.0, 1.0, 0.0]))
        np.testing.assert_allclose(rescaled, [100.0, 50.0, 0.0])

    def test_all_zero(self):
        np.testing.assert_allclose(rescale_scores(np.array([0.0, 0.0])), [0.0, 0.0])

    def test_negative_scores_clipped(self):
        np.testing.assert_allclose(rescale_scores(np.array([-1.0, 4.0])), [0.0, 100.0])

    def test_empty(self):
        assert rescale_scores(np.array([])).size == 0
