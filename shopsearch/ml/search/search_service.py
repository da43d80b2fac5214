"""
Search Service
Runs one search request end to end: interpret, filter, rank, diversify, sort, paginate.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ...models import Product, utc_now
from ..config import RankingConfig, get_ranking_config
from ..query import QueryContext, interpret_query
from ..retrieval import (
    ComprehensiveRanker,
    ProductFilters,
    RankingAlgorithm,
    ScoredResult,
    diversify,
)

logger = logging.getLogger(__name__)


class SortField(str, Enum):
    """Fields a caller can sort results by."""

    RELEVANCE = "relevance"
    PRICE = "price"
    RATING = "rating"
    SALES = "sales"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


_SORT_KEYS = {
    SortField.PRICE: lambda r: r.product.price,
    SortField.RATING: lambda r: r.product.rating,
    SortField.SALES: lambda r: r.product.sales_count,
}


@dataclass
class SearchRequest:
    """
    Search request.

    Pagination is applied after ranking, diversification, and sorting.
    """

    query: str

    # Filters
    filters: Optional[ProductFilters] = None
    use_price_range: bool = False  # Also filter candidates by the price range found in the query

    # Ranking
    algorithm: Optional[RankingAlgorithm] = None

    # Diversity settings
    enable_diversity: bool = False
    diversity_limit: Optional[int] = None

    # Sorting
    sort_by: SortField = SortField.RELEVANCE
    order: SortOrder = SortOrder.DESC

    # Pagination
    offset: int = 0
    limit: int = 20

    # Reference time for age-based signals
    now: Optional[datetime] = None


@dataclass
class SearchResponse:
    """
    Search response with results and metadata.
    """

    results: List[ScoredResult]
    context: QueryContext
    total_results: int
    offset: int
    limit: int
    algorithm: RankingAlgorithm

    # Performance metrics
    search_time_ms: float
    total_time_ms: float

    # Metadata
    filters_applied: bool = False
    diversity_applied: bool = False
    sort_by: SortField = SortField.RELEVANCE
    order: SortOrder = SortOrder.DESC

    debug_info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "query": self.context.query,
            "detected_intent": self.context.intent.value,
            "price_range": self.context.price_range.to_dict() if self.context.price_range else None,
            "results": [r.to_dict() for r in self.results],
            "total_results": self.total_results,
            "returned_results": len(self.results),
            "offset": self.offset,
            "limit": self.limit,
            "algorithm": self.algorithm.value,
            "search_time_ms": self.search_time_ms,
            "total_time_ms": self.total_time_ms,
            "filters_applied": self.filters_applied,
            "diversity_applied": self.diversity_applied,
            "sort_by": self.sort_by.value,
            "order": self.order.value,
        }


def sort_results(
    results: Sequence[ScoredResult],
    sort_by: SortField = SortField.RELEVANCE,
    order: SortOrder = SortOrder.DESC,
) -> List[ScoredResult]:
    """
    Re-sort ranked results by a single product field.

    Sorting by relevance keeps the ranking order (ascending reverses it);
    any other field overrides the relevance order entirely. Ranks are
    renumbered to match the new order.
    """
    sort_by = SortField(sort_by)
    order = SortOrder(order)

    if sort_by == SortField.RELEVANCE:
        ordered = list(results)
        if order == SortOrder.ASC:
            ordered.reverse()
    else:
        ordered = sorted(results, key=_SORT_KEYS[sort_by], reverse=order == SortOrder.DESC)

    for i, result in enumerate(ordered):
        result.rank = i

    return ordered


class SearchService:
    """
    Product search service.

    Orchestrates the ranking components for one request:
    - Query interpretation (intent, price range)
    - Candidate filtering
    - Ranking with boosts and penalties
    - Diversity
    - Sorting and pagination
    """

    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        ranker: Optional[ComprehensiveRanker] = None,
    ):
        """
        Initialize search service.

        Args:
            config: Ranking configuration
            ranker: Ranker instance (built from config if not provided)
        """
        self.config = config or get_ranking_config()
        self.ranker = ranker or ComprehensiveRanker(self.config)

        logger.info("Search service initialized")

    def search(self, request: SearchRequest, products: Sequence[Product]) -> SearchResponse:
        """
        Execute search request against a catalog snapshot.

        Args:
            request: Search request
            products: Read-only product snapshot

        Returns:
            Search response

        Raises:
            InvalidQueryError: If the query is blank
            ValueError: If pagination parameters are negative
        """
        start_time = time.time()

        if request.offset < 0 or request.limit < 0:
            raise ValueError("offset and limit must be non-negative")

        context = interpret_query(request.query)
        now = request.now or utc_now()
        algorithm = RankingAlgorithm(request.algorithm or self.config.default_algorithm)

        logger.info(
            f"Search request: query='{request.query}', intent={context.intent.value}, "
            f"algorithm={algorithm.value}"
        )

        # Candidates
        filters = request.filters or ProductFilters()
        if request.use_price_range:
            filters = filters.with_price_range(context.price_range)
        candidates = filters.apply(products) if not filters.is_empty else list(products)

        # Ranking
        search_start = time.time()
        results = self.ranker.rank_products(
            candidates, context.query, context.intent, algorithm, now
        )
        search_time_ms = (time.time() - search_start) * 1000

        # Diversity
        diversity_applied = False
        if request.enable_diversity and results:
            results = diversify(results, request.diversity_limit, self.config.diversity)
            diversity_applied = True

        results = sort_results(results, request.sort_by, request.order)

        paginated = self._paginate_results(results, request.offset, request.limit)

        total_time_ms = (time.time() - start_time) * 1000

        response = SearchResponse(
            results=paginated,
            context=context,
            total_results=len(results),
            offset=request.offset,
            limit=request.limit,
            algorithm=algorithm,
            search_time_ms=search_time_ms,
            total_time_ms=total_time_ms,
            filters_applied=not filters.is_empty,
            diversity_applied=diversity_applied,
            sort_by=SortField(request.sort_by),
            order=SortOrder(request.order),
            debug_info={"candidates": len(candidates), "catalog_size": len(products)},
        )

        logger.info(f"Search completed: {response.total_results} results in {total_time_ms:.2f}ms")

        return response

    def _paginate_results(
        self, results: List[ScoredResult], offset: int, limit: int
    ) -> List[ScoredResult]:
        """
        Apply pagination to results.

        Args:
            results: Ordered results
            offset: Starting index
            limit: Number of results to return

        Returns:
            Results page (empty when offset is past the end)
        """
        if offset >= len(results):
            return []
        return results[offset : offset + limit]
