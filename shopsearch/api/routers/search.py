"""
Search Endpoints
GET /api/v1/search/product - Ranked product search.
GET /api/v1/search/stats - Catalog statistics.
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...db import ProductCatalog
from ...ml.retrieval import ProductFilters, RankingAlgorithm
from ...ml.search import SearchRequest, SearchService, SortField, SortOrder
from ..config import APISettings, get_settings
from ..dependencies import get_product_catalog, get_request_id, get_search_service
from ..errors import InvalidRequestError
from ..models.search import (
    CatalogStats,
    PaginationModel,
    PriceRangeModel,
    ProductResult,
    SearchResponse,
    StatsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/search", tags=["search"])


@router.get("/product", response_model=SearchResponse, status_code=status.HTTP_200_OK)
async def search_products(
    query: str = Query(..., description="Free-text search query"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Results per page"),
    offset: int = Query(0, ge=0, description="Results to skip"),
    sort_by: SortField = Query(SortField.RELEVANCE, alias="sortBy"),
    order: SortOrder = Query(SortOrder.DESC),
    algorithm: Optional[RankingAlgorithm] = Query(None),
    diversify: bool = Query(False, description="Cap results per brand and category"),
    category: Optional[str] = Query(None),
    brand: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, ge=0, alias="minPrice"),
    max_price: Optional[float] = Query(None, ge=0, alias="maxPrice"),
    min_rating: Optional[float] = Query(None, ge=0, le=5, alias="minRating"),
    in_stock: bool = Query(False, alias="inStock"),
    apply_price_range: bool = Query(
        False, alias="applyPriceRange", description="Filter by the price range found in the query"
    ),
    catalog: ProductCatalog = Depends(get_product_catalog),
    search_service: SearchService = Depends(get_search_service),
    settings: APISettings = Depends(get_settings),
    request_id: Optional[str] = Depends(get_request_id),
) -> SearchResponse:
    """
    Search for products.

    Workflow:
    1. Validate the query
    2. Interpret intent and price range
    3. Filter and rank a catalog snapshot
    4. Optionally diversify, then sort and paginate

    Returns:
        Search response with ranked results and query understanding
    """
    start_time = time.time()
    limit = limit or settings.default_limit

    if len(query) > settings.max_query_length:
        raise InvalidRequestError(
            f"Query exceeds {settings.max_query_length} characters",
            details={"length": len(query)},
        )
    if limit > settings.max_limit:
        raise InvalidRequestError(
            f"limit must be at most {settings.max_limit}", details={"limit": limit}
        )

    logger.info(
        f"Search request: query='{query}', limit={limit}, offset={offset}",
        extra={"request_id": request_id},
    )

    filters = ProductFilters(
        min_price=min_price,
        max_price=max_price,
        in_stock_only=in_stock,
        category=category,
        brand=brand,
        min_rating=min_rating,
    )

    ml_request = SearchRequest(
        query=query,
        filters=filters,
        use_price_range=apply_price_range,
        algorithm=algorithm,
        enable_diversity=diversify,
        sort_by=sort_by,
        order=order,
        offset=offset,
        limit=limit,
    )

    response = search_service.search(ml_request, catalog.snapshot())
    context = response.context

    return SearchResponse(
        query=context.query,
        detected_intent=context.intent.value,
        price_range=(
            PriceRangeModel(**context.price_range.to_dict()) if context.price_range else None
        ),
        algorithm=response.algorithm.value,
        total_results=response.total_results,
        returned_results=len(response.results),
        pagination=PaginationModel(limit=limit, offset=offset),
        data=[ProductResult.from_result(result) for result in response.results],
        search_time_ms=response.search_time_ms,
        total_time_ms=(time.time() - start_time) * 1000,
    )


@router.get("/stats", response_model=StatsResponse, status_code=status.HTTP_200_OK)
async def search_stats(
    catalog: ProductCatalog = Depends(get_product_catalog),
) -> StatsResponse:
    """Catalog statistics."""
    return StatsResponse(stats=CatalogStats(**catalog.statistics()))
