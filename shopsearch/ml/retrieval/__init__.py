"""
Retrieval & Ranking Module
Relevance estimation, component scoring, ranking, adjustment, and diversification.
"""

from .relevance import (
    RelevanceEstimator,
    SimpleRelevanceEstimator,
    MultiFactorRelevanceEstimator,
    get_relevance_estimator,
    score_relevance,
)
from .scorers import (
    PopularityScorer,
    QualityScorer,
    ValueScorer,
    RecencyScorer,
    ComponentScorer,
    BusinessScores,
    score_components,
)
from .adjustments import BoostPenaltyAdjuster, adjust
from .classical import BM25Ranker, TFIDFRanker, rescale_scores
from .ranking import (
    RankingAlgorithm,
    ComponentScores,
    ScoredResult,
    ComprehensiveRanker,
    rank,
)
from .diversity import diversify
from .filters import FilterOperator, ProductFilter, ProductFilters

__all__ = [
    "RelevanceEstimator",
    "SimpleRelevanceEstimator",
    "MultiFactorRelevanceEstimator",
    "get_relevance_estimator",
    "score_relevance",
    "PopularityScorer",
    "QualityScorer",
    "ValueScorer",
    "RecencyScorer",
    "ComponentScorer",
    "BusinessScores",
    "score_components",
    "BoostPenaltyAdjuster",
    "adjust",
    "BM25Ranker",
    "TFIDFRanker",
    "rescale_scores",
    "RankingAlgorithm",
    "ComponentScores",
    "ScoredResult",
    "ComprehensiveRanker",
    "rank",
    "diversify",
    "FilterOperator",
    "ProductFilter",
    "ProductFilters",
]
