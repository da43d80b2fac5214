"""
Product Storage
In-memory catalog that supplies read-only snapshots to the ranking engine.
"""

from .catalog import ProductCatalog, ProductNotFoundError, get_catalog, reset_catalog

__all__ = [
    "ProductCatalog",
    "ProductNotFoundError",
    "get_catalog",
    "reset_catalog",
]
