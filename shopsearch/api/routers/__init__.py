"""
API Routers
FastAPI routers for the search and catalog endpoints.
"""

from .health import router as health_router
from .search import router as search_router
from .products import router as products_router

__all__ = [
    "health_router",
    "search_router",
    "products_router",
]
