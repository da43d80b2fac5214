"""
In-Memory Product Catalog
Product storage with id lookup and category/brand indexes.

Ranking never reads the catalog directly: callers take a snapshot() and pass
it in, so a ranking call sees a fixed, read-only set of products.
"""

import json
import logging
from collections import defaultdict
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from ..models import Product

logger = logging.getLogger(__name__)


class ProductNotFoundError(KeyError):
    """Raised when a product id is not in the catalog."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class ProductCatalog:
    """
    Thread-safe in-memory product store.

    Products are immutable, so a snapshot is a tuple of references taken
    under the lock.
    """

    def __init__(self):
        self._products: Dict[int, Product] = {}
        self._category_index: Dict[str, List[int]] = defaultdict(list)
        self._brand_index: Dict[str, List[int]] = defaultdict(list)
        self._id_counter = 0
        self._lock = Lock()

    def add(self, product: Product) -> Product:
        """
        Add a product, assigning an id when it has none.

        Args:
            product: Product to store

        Returns:
            The stored product (with its id)
        """
        with self._lock:
            if product.product_id is None:
                self._id_counter += 1
                product = product.model_copy(update={"product_id": self._id_counter})
            elif product.product_id > self._id_counter:
                self._id_counter = product.product_id

            previous = self._products.get(product.product_id)
            if previous is not None:
                self._unindex(previous)

            self._products[product.product_id] = product
            self._category_index[product.category].append(product.product_id)
            self._brand_index[product.brand].append(product.product_id)

        logger.debug(f"Stored product {product.product_id}: {product.title}")
        return product

    def get(self, product_id: int) -> Product:
        """
        Look up a product by id.

        Raises:
            ProductNotFoundError: If the id is unknown
        """
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def update_metadata(self, product_id: int, metadata: Dict[str, Any]) -> Product:
        """Merge metadata into a product, replacing the stored record."""
        with self._lock:
            product = self._products.get(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            updated = product.with_metadata(metadata)
            self._products[product_id] = updated
        return updated

    def snapshot(self) -> Tuple[Product, ...]:
        """Read-only view of every product, in insertion order."""
        with self._lock:
            return tuple(self._products.values())

    def by_category(self, category: str) -> List[Product]:
        return [self._products[pid] for pid in self._category_index.get(category, [])]

    def by_brand(self, brand: str) -> List[Product]:
        return [self._products[pid] for pid in self._brand_index.get(brand, [])]

    @property
    def categories(self) -> List[str]:
        return [name for name, ids in self._category_index.items() if ids]

    @property
    def brands(self) -> List[str]:
        return [name for name, ids in self._brand_index.items() if ids]

    def __len__(self) -> int:
        return len(self._products)

    def statistics(self) -> Dict[str, Any]:
        """
        Catalog statistics.

        Returns:
            Dict with product/category/brand counts, average rating,
            in-stock count, and total stock value
        """
        products = self.snapshot()
        ratings = np.array([p.rating for p in products], dtype=float)
        stock_value = sum(p.price * p.stock for p in products)

        return {
            "total_products": len(products),
            "total_categories": len(self.categories),
            "total_brands": len(self.brands),
            "avg_rating": round(float(ratings.mean()), 2) if ratings.size else 0.0,
            "in_stock_products": sum(1 for p in products if p.is_in_stock),
            "total_value": stock_value,
            "categories": self.categories,
            "brands": self.brands,
        }

    def clear(self) -> None:
        """Remove every product and reset the id counter."""
        with self._lock:
            self._products.clear()
            self._category_index.clear()
            self._brand_index.clear()
            self._id_counter = 0

    def load_json(self, path: Union[str, Path]) -> int:
        """
        Load products from a JSON file containing a list of product objects.

        Args:
            path: Path to the seed file

        Returns:
            Number of products loaded
        """
        path = Path(path)
        records = json.loads(path.read_text(encoding="utf-8"))

        for record in records:
            self.add(Product.model_validate(record))

        logger.info(f"Loaded {len(records)} products from {path}")
        return len(records)

    def _unindex(self, product: Product) -> None:
        self._category_index[product.category].remove(product.product_id)
        self._brand_index[product.brand].remove(product.product_id)


# Global catalog instance
_catalog: Optional[ProductCatalog] = None


def get_catalog() -> ProductCatalog:
    """Get global product catalog (singleton)."""
    global _catalog
    if _catalog is None:
        _catalog = ProductCatalog()
    return _catalog


def reset_catalog() -> None:
    """Reset global catalog (useful for testing)."""
    global _catalog
    _catalog = None
