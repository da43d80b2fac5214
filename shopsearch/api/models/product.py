"""
Product Models
Pydantic models for the product endpoints.
"""

from typing import Dict, Optional

from pydantic import ConfigDict, Field

from ...models import Product
from .common import CamelModel


class ProductCreate(CamelModel):
    """
    Product creation request.

    Optional signals default the same way the catalog does.
    """

    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    mrp: float = Field(..., ge=0)
    rating: float = Field(..., description="Clamped into [0, 5]")
    stock: int = Field(..., ge=0)
    currency: str = "INR"
    category: str = "Electronics"
    brand: str = "Unknown"
    metadata: Dict[str, str] = Field(default_factory=dict)
    sales_count: int = Field(default=0, ge=0)
    return_rate: float = Field(default=0.0, ge=0, le=100)
    complaint_count: int = Field(default=0, ge=0)

    def to_product(self) -> Product:
        return Product(**self.model_dump(by_alias=False))

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "iPhone 16 Pro",
                "description": "Apple iPhone 16 Pro with A18 Pro chip",
                "price": 99999,
                "mrp": 109999,
                "rating": 4.8,
                "stock": 45,
                "category": "Mobile Phones",
                "brand": "Apple",
                "metadata": {"storage": "256GB", "color": "Black"},
            }
        }
    )


class ProductCreated(CamelModel):
    success: bool = True
    product_id: int
    message: str = "Product created successfully"


class ProductResponse(CamelModel):
    """Product as returned by the API."""

    product_id: Optional[int]
    title: str
    description: str
    rating: float
    stock: int
    price: float
    mrp: float
    currency: str
    discount_percentage: int
    metadata: Dict[str, str]
    category: str
    brand: str
    sales_count: int
    return_rate: float
    complaint_count: int

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            product_id=product.product_id,
            title=product.title,
            description=product.description,
            rating=product.rating,
            stock=product.stock,
            price=product.price,
            mrp=product.mrp,
            currency=product.currency,
            discount_percentage=product.discount_percentage,
            metadata=product.metadata,
            category=product.category,
            brand=product.brand,
            sales_count=product.sales_count,
            return_rate=product.return_rate,
            complaint_count=product.complaint_count,
        )


class MetadataUpdate(CamelModel):
    metadata: Dict[str, str] = Field(..., min_length=1)


class MetadataUpdated(CamelModel):
    success: bool = True
    product_id: int
    metadata: Dict[str, str]
