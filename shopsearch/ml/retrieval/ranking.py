"""
Comprehensive Ranking
Multi-signal ranking combining relevance, popularity, quality, value, and recency.

Ranking Formula (general intent):
score = 0.35 × relevance + 0.25 × popularity + 0.20 × quality + 0.15 × value + 0.05 × recency

The weight profile is chosen by query intent, and the result is passed through
the boost/penalty adjuster. The 'bm25' and 'tfidf' algorithms replace the
weighted sum with a classical lexical score rescaled to [0, 100].
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ...models import Product, utc_now
from ..config import COMPONENTS, QueryIntent, RankingConfig, WeightProfile, get_ranking_config
from .adjustments import BoostPenaltyAdjuster
from .classical import BM25Ranker, TFIDFRanker, rescale_scores
from .relevance import RelevanceEstimator, get_relevance_estimator
from .scorers import MAX_COMPONENT_SCORE, ComponentScorer

logger = logging.getLogger(__name__)


class RankingAlgorithm(str, Enum):
    """Base scoring algorithm used before boosts and penalties."""

    COMPREHENSIVE = "comprehensive"
    BM25 = "bm25"
    TFIDF = "tfidf"


@dataclass(frozen=True)
class ComponentScores:
    """The five ranking components of one product."""

    relevance: float
    popularity: float
    quality: float
    value: float
    recency: float

    def weighted(self, weights: WeightProfile) -> float:
        """Weighted sum under a weight profile."""
        return sum(getattr(self, name) * getattr(weights, name) for name in COMPONENTS)

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in COMPONENTS}

    def capped(self) -> "ComponentScores":
        """Each component clamped to [0, 100]."""
        return ComponentScores(
            **{
                name: min(max(getattr(self, name), 0.0), MAX_COMPONENT_SCORE)
                for name in COMPONENTS
            }
        )


@dataclass
class ScoredResult:
    """
    A product with its final score and component breakdown.

    score is the adjusted score in [0, 100]; base_score is the value before
    boosts and penalties. components are capped at 100, raw_components are not.
    """

    product: Product
    score: float
    base_score: float
    components: ComponentScores
    raw_components: ComponentScores
    weights: WeightProfile
    intent: QueryIntent = QueryIntent.GENERAL
    algorithm: RankingAlgorithm = RankingAlgorithm.COMPREHENSIVE
    rank: int = 0  # Position in results (0-indexed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "product_id": self.product.product_id,
            "score": round(self.score, 2),
            "base_score": round(self.base_score, 2),
            "components": {k: round(v, 2) for k, v in self.components.to_dict().items()},
            "weights": self.weights.as_dict(),
            "intent": self.intent.value,
            "algorithm": self.algorithm.value,
            "rank": self.rank,
        }


class ComprehensiveRanker:
    """
    Combines the five component scores into a final ranking score.

    Formula: score = adjust(Σ weight_intent(c) × component(c))
    """

    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        relevance_estimator: Optional[RelevanceEstimator] = None,
    ):
        """
        Initialize comprehensive ranker.

        Args:
            config: Ranking configuration
            relevance_estimator: Relevance strategy (multi-factor by default)
        """
        self.config = config or get_ranking_config()
        self.relevance_estimator = relevance_estimator or get_relevance_estimator("multi_factor")
        self.component_scorer = ComponentScorer(self.config.scoring)
        self.adjuster = BoostPenaltyAdjuster(self.config.adjustments)

        general = self.config.weights_for(QueryIntent.GENERAL)
        logger.info(
            f"Comprehensive ranker initialized with weights: "
            f"rel={general.relevance}, pop={general.popularity}, "
            f"qual={general.quality}, val={general.value}, rec={general.recency}, "
            f"relevance={self.relevance_estimator.name}"
        )

    def score_components(
        self,
        product: Product,
        query: str,
        intent: QueryIntent = QueryIntent.GENERAL,
        now: Optional[datetime] = None,
    ) -> ComponentScores:
        """All five component scores for a product, each in [0, 100]."""
        return self._components(product, query, intent, now or utc_now()).capped()

    def score_product(
        self,
        product: Product,
        query: str,
        intent: QueryIntent = QueryIntent.GENERAL,
        now: Optional[datetime] = None,
    ) -> ScoredResult:
        """
        Score a single product with the comprehensive algorithm.

        Args:
            product: Product to score
            query: Raw search query
            intent: Query intent (selects the weight profile)
            now: Reference time for age-based signals

        Returns:
            ScoredResult with adjusted score and breakdown
        """
        now = now or utc_now()
        intent = QueryIntent(intent)
        weights = self.config.weights_for(intent)

        raw = self._components(product, query, intent, now)
        components = raw.capped()
        base_score = components.weighted(weights)

        return self._build_result(
            product, base_score, components, raw, intent, weights, now,
            RankingAlgorithm.COMPREHENSIVE,
        )

    def rank_products(
        self,
        products: Sequence[Product],
        query: str,
        intent: QueryIntent = QueryIntent.GENERAL,
        algorithm: Optional[RankingAlgorithm] = None,
        now: Optional[datetime] = None,
    ) -> List[ScoredResult]:
        """
        Score and sort products for a query.

        Args:
            products: Candidate products (read-only snapshot)
            query: Raw search query
            intent: Query intent
            algorithm: Base scoring algorithm (config default if not given)
            now: Reference time, fixed for the whole call

        Returns:
            ScoredResults sorted by descending score; ties keep input order
        """
        if not products:
            return []

        now = now or utc_now()
        intent = QueryIntent(intent)
        algorithm = RankingAlgorithm(algorithm or self.config.default_algorithm)
        weights = self.config.weights_for(intent)

        if algorithm == RankingAlgorithm.COMPREHENSIVE:
            results = [self.score_product(p, query, intent, now) for p in products]
        else:
            base_scores = self._classical_scores(products, query, algorithm)
            results = []
            for product, base in zip(products, base_scores):
                raw = self._components(product, query, intent, now)
                results.append(
                    self._build_result(
                        product, float(base), raw.capped(), raw, intent, weights, now, algorithm
                    )
                )

        results.sort(key=lambda r: r.score, reverse=True)

        for i, result in enumerate(results):
            result.rank = i

        logger.debug(
            f"Ranked {len(results)} products: algorithm={algorithm.value}, intent={intent.value}"
        )

        return results

    def explain_ranking(self, result: ScoredResult, now: Optional[datetime] = None) -> str:
        """
        Generate human-readable explanation of ranking score.

        Args:
            result: ScoredResult from rank_products()
            now: Reference time for the freshness rule

        Returns:
            Explanation string
        """
        explanation = f"Product {result.product.product_id} (Rank {result.rank + 1})\n"
        explanation += f"  Final Score: {result.score:.2f} (base {result.base_score:.2f})\n"
        explanation += f"  Algorithm: {result.algorithm.value}, Intent: {result.intent.value}\n"
        explanation += "  Components:\n"
        for name in COMPONENTS:
            value = getattr(result.components, name)
            weight = getattr(result.weights, name)
            explanation += (
                f"    {name.capitalize():<11} {value:6.2f} × {weight:.2f} = {value * weight:6.2f}\n"
            )

        multipliers = self.adjuster.multipliers(result.product, now)
        explanation += "  Adjustments: " + ", ".join(
            f"{name}={value:.2f}" for name, value in multipliers.items()
        )

        return explanation

    def _components(
        self,
        product: Product,
        query: str,
        intent: QueryIntent,
        now: datetime,
    ) -> ComponentScores:
        relevance = self.relevance_estimator.score(product, query)
        business = self.component_scorer.score(product, intent, now, clamp=False)
        return ComponentScores(relevance=relevance, **business.to_dict())

    def _build_result(
        self,
        product: Product,
        base_score: float,
        components: ComponentScores,
        raw_components: ComponentScores,
        intent: QueryIntent,
        weights: WeightProfile,
        now: datetime,
        algorithm: RankingAlgorithm,
    ) -> ScoredResult:
        return ScoredResult(
            product=product,
            score=self.adjuster.adjust(base_score, product, now),
            base_score=base_score,
            components=components,
            raw_components=raw_components,
            weights=weights,
            intent=intent,
            algorithm=algorithm,
        )

    def _classical_scores(
        self, products: Sequence[Product], query: str, algorithm: RankingAlgorithm
    ):
        corpus = [p.search_text() for p in products]

        if algorithm == RankingAlgorithm.BM25:
            ranker = BM25Ranker(corpus, k1=self.config.bm25_k1, b=self.config.bm25_b)
        else:
            ranker = TFIDFRanker(corpus)

        return rescale_scores(ranker.get_scores(query))


def rank(
    products: Sequence[Product],
    query: str,
    intent: QueryIntent = QueryIntent.GENERAL,
    algorithm: RankingAlgorithm = RankingAlgorithm.COMPREHENSIVE,
    now: Optional[datetime] = None,
    config: Optional[RankingConfig] = None,
) -> List[ScoredResult]:
    """Rank products for a query (see ComprehensiveRanker.rank_products)."""
    return ComprehensiveRanker(config).rank_products(products, query, intent, algorithm, now)
