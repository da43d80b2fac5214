"""
Classical Rankers
Corpus-statistics scorers (BM25 and TF-IDF) over plain document strings.

BM25:
    idf(t) = ln((N - df + 0.5) / (df + 0.5) + 1)
    score(t, d) = idf(t) * tf * (k1 + 1) / (tf + k1 * (1 - b + b * dl / avgdl))

TF-IDF:
    tf(t, d) = count(t, d) / len(d)
    idf(t) = ln(N / (df + 1))
    score(q, d) = sum over shared terms of tf(t, q) * tf(t, d) * idf(t)

Documents are split on whitespace; document frequency uses lowercased words.
"""

import logging
import math
from collections import Counter
from typing import Dict, List, Sequence

import numpy as np

logger = logging.getLogger(__name__)


def _words(text: str) -> List[str]:
    return text.lower().split()


def _document_frequencies(corpus: Sequence[str]) -> Counter:
    frequencies: Counter = Counter()
    for doc in corpus:
        frequencies.update(set(_words(doc)))
    return frequencies


def _rank_indices(scores: np.ndarray) -> List[int]:
    # Stable sort keeps corpus order for ties
    return [int(i) for i in np.argsort(-scores, kind="stable")]


class BM25Ranker:
    """
    BM25 (Best Match 25) with corpus-level IDF.

    The corpus fixes document frequencies and the average document length;
    any document can then be scored against a query.
    """

    def __init__(self, corpus: Sequence[str], k1: float = 1.5, b: float = 0.75):
        """
        Initialize BM25 ranker.

        Args:
            corpus: Document strings used for IDF and average length
            k1: Term frequency saturation parameter
            b: Length normalization parameter
        """
        self.corpus = list(corpus)
        self.k1 = k1
        self.b = b

        lengths = [len(_words(doc)) for doc in self.corpus]
        self.avg_doc_length = float(np.mean(lengths)) if lengths else 0.0

        n_docs = len(self.corpus)
        self.idf: Dict[str, float] = {
            term: math.log((n_docs - df + 0.5) / (df + 0.5) + 1)
            for term, df in _document_frequencies(self.corpus).items()
        }

        logger.debug(
            f"BM25 ranker built: {n_docs} docs, {len(self.idf)} terms, "
            f"avgdl={self.avg_doc_length:.2f}"
        )

    def score(self, query: str, document: str) -> float:
        """BM25 score of one document for a query."""
        doc_words = _words(document)
        doc_length = len(doc_words)
        if doc_length == 0 or self.avg_doc_length == 0:
            return 0.0

        term_counts = Counter(doc_words)
        length_norm = 1 - self.b + self.b * (doc_length / self.avg_doc_length)

        score = 0.0
        for term in _words(query):
            idf = self.idf.get(term, 0.0)
            tf = term_counts.get(term, 0)
            if tf == 0 or idf == 0.0:
                continue
            score += idf * (tf * (self.k1 + 1)) / (tf + self.k1 * length_norm)

        return score

    def get_scores(self, query: str, documents: Sequence[str] = None) -> np.ndarray:
        """Scores for each document (defaults to the corpus)."""
        documents = self.corpus if documents is None else documents
        return np.array([self.score(query, doc) for doc in documents], dtype=float)

    def rank(self, query: str, documents: Sequence[str] = None) -> List[int]:
        """Document indices sorted by descending score."""
        return _rank_indices(self.get_scores(query, documents))


class TFIDFRanker:
    """TF-IDF scoring with length-normalized term frequency."""

    def __init__(self, corpus: Sequence[str]):
        """
        Initialize TF-IDF ranker.

        Args:
            corpus: Document strings used for IDF
        """
        self.corpus = list(corpus)
        n_docs = len(self.corpus)
        self.idf: Dict[str, float] = {
            term: math.log(n_docs / (df + 1))
            for term, df in _document_frequencies(self.corpus).items()
        }

        logger.debug(f"TF-IDF ranker built: {n_docs} docs, {len(self.idf)} terms")

    @staticmethod
    def term_frequencies(text: str) -> Dict[str, float]:
        """Count of each word divided by the total word count."""
        words = _words(text)
        if not words:
            return {}
        total = len(words)
        return {word: count / total for word, count in Counter(words).items()}

    def score(self, query: str, document: str) -> float:
        query_tf = self.term_frequencies(query)
        doc_tf = self.term_frequencies(document)

        return float(
            sum(
                weight * doc_tf[term] * self.idf.get(term, 0.0)
                for term, weight in query_tf.items()
                if term in doc_tf
            )
        )

    def get_scores(self, query: str, documents: Sequence[str] = None) -> np.ndarray:
        documents = self.corpus if documents is None else documents
        return np.array([self.score(query, doc) for doc in documents], dtype=float)

    def rank(self, query: str, documents: Sequence[str] = None) -> List[int]:
        return _rank_indices(self.get_scores(query, documents))


def rescale_scores(scores: np.ndarray, max_score: float = 100.0) -> np.ndarray:
    """
    Rescale raw scores to [0, max_score] relative to the best one.

    Negative scores become 0; if nothing scores above 0 everything is 0.
    """
    if scores.size == 0:
        return scores
    clipped = np.clip(scores, 0.0, None)
    best = clipped.max()
    if best <= 0:
        return np.zeros_like(clipped)
    return clipped / best * max_score
