"""
Search Models
Pydantic models for the search endpoints.
"""

from typing import Dict, List, Optional

from pydantic import Field

from ...ml.retrieval import ScoredResult
from .common import CamelModel


class PriceRangeModel(CamelModel):
    min: int
    max: int


class PaginationModel(CamelModel):
    limit: int
    offset: int


class ProductResult(CamelModel):
    """
    Single ranked product.

    Contains product information and the ranking breakdown.
    """

    product_id: Optional[int]
    title: str
    description: str
    price: float
    mrp: float
    rating: float
    stock: int
    category: str
    brand: str
    sales_count: int

    # Ranking details
    relevance_score: float = Field(..., ge=0, le=100, description="Final ranking score (0-100)")
    rank: int = Field(..., ge=0, description="Position in ranked results (0-indexed)")
    components: Dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: ScoredResult) -> "ProductResult":
        product = result.product
        return cls(
            product_id=product.product_id,
            title=product.title,
            description=product.description,
            price=product.price,
            mrp=product.mrp,
            rating=product.rating,
            stock=product.stock,
            category=product.category,
            brand=product.brand,
            sales_count=product.sales_count,
            relevance_score=round(result.score, 2),
            rank=result.rank,
            components={k: round(v, 2) for k, v in result.components.to_dict().items()},
        )


class SearchResponse(CamelModel):
    """
    Search response model.

    Contains ranked results, what was understood from the query, and timing.
    """

    success: bool = True
    query: str
    detected_intent: str
    price_range: Optional[PriceRangeModel] = None
    algorithm: str
    total_results: int
    returned_results: int
    pagination: PaginationModel
    data: List[ProductResult]

    search_time_ms: float
    total_time_ms: float


class CatalogStats(CamelModel):
    total_products: int
    total_categories: int
    total_brands: int
    avg_rating: float
    in_stock_products: int
    total_value: float
    categories: List[str]
    brands: List[str]


class StatsResponse(CamelModel):
    success: bool = True
    stats: CatalogStats
