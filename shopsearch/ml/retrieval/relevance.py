"""
Relevance Estimators
Lexical query-to-product relevance in [0, 100].

Two strategies exist for different call sites and are not expected to agree:
- simple: fuzzy title similarity + keyword coverage + brand/category bonuses
- multi_factor: title/description/keyword/metadata matching (used by the
  comprehensive ranker)
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from ...models import Product
from ..query import extract_keywords, similarity, text_matches

logger = logging.getLogger(__name__)


class RelevanceEstimator(ABC):
    """
    Abstract base class for relevance estimators.

    All estimators must implement this interface to be swappable.
    """

    name: str = ""
    max_score: float = 100.0

    @abstractmethod
    def score(self, product: Product, query: str) -> float:
        """
        Score how well a product matches a query.

        Args:
            product: Product to score
            query: Raw search query

        Returns:
            Relevance score in [0, 100]
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class SimpleRelevanceEstimator(RelevanceEstimator):
    """
    Fuzzy relevance used for lightweight matching.

    40 x title similarity + 30 x keyword coverage + 15 brand-in-title
    + 15 flat category bonus, capped at 100.
    """

    name = "simple"

    title_weight: float = 40.0
    keyword_weight: float = 30.0
    brand_bonus: float = 15.0
    category_bonus: float = 15.0

    def score(self, product: Product, query: str) -> float:
        score = similarity(product.title, query) * self.title_weight

        keywords = extract_keywords(query)
        if keywords:
            full_text = f"{product.title} {product.description}".lower()
            matched = sum(1 for keyword in keywords if keyword in full_text)
            score += (matched / len(keywords)) * self.keyword_weight

        if text_matches(product.title, product.brand):
            score += self.brand_bonus

        score += self.category_bonus

        return min(score, self.max_score)


class MultiFactorRelevanceEstimator(RelevanceEstimator):
    """
    Field-by-field relevance used by the comprehensive ranker.

    - Title: 40 for the whole query as a substring, else 30 x word coverage
    - Description: 20 for the whole query, else 15 x word coverage
    - Keywords (> 2 chars) found in title or description: 20 x coverage
    - Metadata containing the query: 15
    """

    name = "multi_factor"

    def score(self, product: Product, query: str) -> float:
        query_lower = query.lower()
        words = query_lower.split()
        title = product.title.lower()
        description = product.description.lower()

        score = self._field_score(title, query_lower, words, exact=40.0, partial=30.0)
        score += self._field_score(description, query_lower, words, exact=20.0, partial=15.0)

        keywords = [word for word in words if len(word) > 2]
        keyword_matches = sum(1 for kw in keywords if kw in title or kw in description)
        score += (keyword_matches / max(len(keywords), 1)) * 20.0

        if query_lower in self._flatten_metadata(product.metadata):
            score += 15.0

        return min(score, self.max_score)

    @staticmethod
    def _field_score(text: str, query: str, words, exact: float, partial: float) -> float:
        if query in text:
            return exact
        if not words:
            return 0.0
        matched = sum(1 for word in words if word in text)
        return (matched / len(words)) * partial

    @staticmethod
    def _flatten_metadata(metadata: Dict[str, str]) -> str:
        """Compact JSON rendering of the metadata, lowercased."""
        return json.dumps(metadata, ensure_ascii=False, separators=(",", ":")).lower()


_ESTIMATORS: Dict[str, Type[RelevanceEstimator]] = {
    "simple": SimpleRelevanceEstimator,
    "multi_factor": MultiFactorRelevanceEstimator,
    "multifactor": MultiFactorRelevanceEstimator,
}

_instances: Dict[str, RelevanceEstimator] = {}


def get_relevance_estimator(name: str = "multi_factor") -> RelevanceEstimator:
    """
    Get a relevance estimator by name.

    Args:
        name: 'simple' or 'multi_factor' (case-insensitive; 'multiFactor' accepted)

    Returns:
        Shared estimator instance (estimators are stateless)

    Raises:
        ValueError: For unknown estimator names
    """
    key = name.lower()
    estimator_cls = _ESTIMATORS.get(key)
    if estimator_cls is None:
        raise ValueError(
            f"Unknown relevance estimator: {name}. Valid options: simple, multi_factor"
        )

    if estimator_cls.name not in _instances:
        _instances[estimator_cls.name] = estimator_cls()
        logger.debug(f"Created relevance estimator: {estimator_cls.name}")

    return _instances[estimator_cls.name]


def score_relevance(product: Product, query: str, estimator: Optional[str] = None) -> float:
    """Score relevance with the named estimator (multi-factor by default)."""
    return get_relevance_estimator(estimator or "multi_factor").score(product, query)
