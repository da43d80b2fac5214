"""
Ranking Engine
Query understanding and multi-factor ranking for product search.
"""

from .config import (
    QueryIntent,
    WeightProfile,
    RankingConfig,
    get_ranking_config,
    reset_config,
)
from .query import QueryContext, InvalidQueryError, interpret_query
from .retrieval import (
    ScoredResult,
    RankingAlgorithm,
    score_relevance,
    score_components,
    rank,
    diversify,
    adjust,
)

__all__ = [
    "QueryIntent",
    "WeightProfile",
    "RankingConfig",
    "get_ranking_config",
    "reset_config",
    "QueryContext",
    "InvalidQueryError",
    "interpret_query",
    "ScoredResult",
    "RankingAlgorithm",
    "score_relevance",
    "score_components",
    "rank",
    "diversify",
    "adjust",
]
