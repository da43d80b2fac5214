"""
Dependency Injection
FastAPI dependencies for the catalog and services.
"""

import logging
from typing import Optional

from fastapi import Request

from ..db import ProductCatalog, get_catalog
from ..ml.config import get_ranking_config
from ..ml.search import SearchService

logger = logging.getLogger(__name__)

# Global service instances
_search_service: Optional[SearchService] = None


def get_product_catalog() -> ProductCatalog:
    """Get product catalog dependency."""
    return get_catalog()


def get_search_service() -> SearchService:
    """
    Get search service (singleton).

    Use as FastAPI dependency:
        @app.get("/search")
        def search(service: SearchService = Depends(get_search_service)):
            ...
    """
    global _search_service
    if _search_service is None:
        _search_service = SearchService(get_ranking_config())
        logger.info("Search service created")
    return _search_service


def reset_services() -> None:
    """Drop cached services so the next request rebuilds them."""
    global _search_service
    _search_service = None


def get_request_id(request: Request) -> Optional[str]:
    """Request id assigned by the logging middleware."""
    return getattr(request.state, "request_id", None)
