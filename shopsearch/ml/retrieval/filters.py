"""
Product Filtering
Narrow a catalog snapshot to candidates before ranking.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from ...models import Product
from ..query import PriceRange

logger = logging.getLogger(__name__)


class FilterOperator(Enum):
    """Comparison operators for filters."""

    EQ = "="
    NE = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    IN = "IN"
    NOT_IN = "NOT IN"


_OPERATORS: dict = {
    FilterOperator.EQ: lambda a, b: a == b,
    FilterOperator.NE: lambda a, b: a != b,
    FilterOperator.GT: lambda a, b: a > b,
    FilterOperator.GTE: lambda a, b: a >= b,
    FilterOperator.LT: lambda a, b: a < b,
    FilterOperator.LTE: lambda a, b: a <= b,
    FilterOperator.IN: lambda a, b: a in b,
    FilterOperator.NOT_IN: lambda a, b: a not in b,
}


@dataclass
class ProductFilter:
    """
    Single filter condition on a product attribute.

    Example:
        ProductFilter("price", FilterOperator.LTE, 50000)  # price <= 50000
        ProductFilter("brand", FilterOperator.IN, ["Apple", "Samsung"])
    """

    field: str
    operator: FilterOperator
    value: Any

    def matches(self, product: Product) -> bool:
        return _OPERATORS[self.operator](getattr(product, self.field), self.value)


@dataclass
class ProductFilters:
    """
    Collection of filters for product search.

    Common filters:
    - Price range
    - Stock availability
    - Category
    - Brand
    - Minimum rating
    """

    # Price filters
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    # Availability
    in_stock_only: bool = False

    # Category/Brand
    category: Optional[str] = None
    brand: Optional[str] = None

    # Rating
    min_rating: Optional[float] = None

    # Custom filters
    custom_filters: List[ProductFilter] = field(default_factory=list)

    def with_price_range(self, price_range: Optional[PriceRange]) -> "ProductFilters":
        """Copy of these filters narrowed to a detected price range."""
        if price_range is None:
            return self

        min_price = price_range.min
        if self.min_price is not None:
            min_price = max(self.min_price, price_range.min)
        max_price = price_range.max
        if self.max_price is not None:
            max_price = min(self.max_price, price_range.max)

        return ProductFilters(
            min_price=min_price,
            max_price=max_price,
            in_stock_only=self.in_stock_only,
            category=self.category,
            brand=self.brand,
            min_rating=self.min_rating,
            custom_filters=list(self.custom_filters),
        )

    def build_filters(self) -> List[ProductFilter]:
        """
        Build list of ProductFilter objects from this config.

        Returns:
            List of ProductFilter objects
        """
        filters = []

        if self.min_price is not None:
            filters.append(ProductFilter("price", FilterOperator.GTE, self.min_price))
        if self.max_price is not None:
            filters.append(ProductFilter("price", FilterOperator.LTE, self.max_price))

        if self.in_stock_only:
            filters.append(ProductFilter("stock", FilterOperator.GT, 0))

        if self.category:
            filters.append(ProductFilter("category", FilterOperator.EQ, self.category))
        if self.brand:
            filters.append(ProductFilter("brand", FilterOperator.EQ, self.brand))

        if self.min_rating is not None:
            filters.append(ProductFilter("rating", FilterOperator.GTE, self.min_rating))

        filters.extend(self.custom_filters)

        return filters

    def predicate(self) -> Callable[[Product], bool]:
        filters = self.build_filters()
        return lambda product: all(f.matches(product) for f in filters)

    def apply(self, products: Iterable[Product]) -> List[Product]:
        """
        Keep only products matching every filter.

        Args:
            products: Candidate products

        Returns:
            Matching products, in input order
        """
        products = list(products)
        matches = self.predicate()
        filtered = [p for p in products if matches(p)]

        logger.debug(f"Filtered {len(products)} products to {len(filtered)} candidates")

        return filtered

    @property
    def is_empty(self) -> bool:
        return not self.build_filters()
