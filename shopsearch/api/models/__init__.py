"""
Pydantic Models
Request/response models for API endpoints.
"""

from .common import CamelModel
from .product import (
    ProductCreate,
    ProductCreated,
    ProductResponse,
    MetadataUpdate,
    MetadataUpdated,
)
from .search import SearchResponse, ProductResult, StatsResponse, CatalogStats

__all__ = [
    "CamelModel",
    "ProductCreate",
    "ProductCreated",
    "ProductResponse",
    "MetadataUpdate",
    "MetadataUpdated",
    "SearchResponse",
    "ProductResult",
    "StatsResponse",
    "CatalogStats",
]
