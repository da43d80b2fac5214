"""
Product model.
Read-only catalog record consumed by the ranking engine.
"""

import math
from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Product(BaseModel):
    """
    Validated product record.

    Instances are frozen: the ranking engine only reads them, and metadata
    updates produce a new record (see with_metadata()).
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    product_id: Optional[int] = Field(default=None, alias="productId")
    title: str = Field(..., min_length=1)
    description: str = ""

    # === PRICING ===
    price: float = Field(..., ge=0)
    mrp: float = Field(..., ge=0)
    currency: str = "INR"

    # === SIGNALS ===
    rating: float = 0.0
    stock: int = Field(default=0, ge=0)
    sales_count: int = Field(default=0, ge=0, alias="salesCount")
    return_rate: float = Field(default=0.0, ge=0, le=100, alias="returnRate")
    complaint_count: int = Field(default=0, ge=0, alias="complaintCount")

    # === CATEGORIZATION ===
    category: str = "Electronics"
    brand: str = "Unknown"
    metadata: Dict[str, str] = Field(default_factory=dict)

    # === TIMESTAMPS ===
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")

    @field_validator("rating", mode="before")
    @classmethod
    def clamp_rating(cls, v):
        """Clamp rating into [0, 5] instead of rejecting it."""
        if v is None:
            return 0.0
        return min(max(float(v), 0.0), 5.0)

    @field_validator("metadata", mode="before")
    @classmethod
    def stringify_metadata(cls, v):
        """Metadata values are stored as strings."""
        if v is None:
            return {}
        return {str(key): str(value) for key, value in dict(v).items()}

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)

    @property
    def discount_percentage(self) -> int:
        """Discount off MRP, rounded to a whole percent."""
        if self.mrp == 0:
            return 0
        # Round half up, as the catalog UI displays it
        return int(math.floor((self.mrp - self.price) / self.mrp * 100 + 0.5))

    @property
    def is_in_stock(self) -> bool:
        return self.stock > 0

    def age_days(self, now: Optional[datetime] = None) -> int:
        """Whole days elapsed since the product was created."""
        now = as_utc(now) if now is not None else utc_now()
        return math.floor((now - self.created_at).total_seconds() / 86400)

    def with_metadata(self, updates: Dict[str, str], now: Optional[datetime] = None) -> "Product":
        """Return a copy with metadata merged and updated_at refreshed."""
        merged = {**self.metadata, **{str(k): str(v) for k, v in updates.items()}}
        updated_at = as_utc(now) if now is not None else utc_now()
        return self.model_copy(update={"metadata": merged, "updated_at": updated_at})

    def search_text(self) -> str:
        """Title and description joined, as indexed by the classical rankers."""
        return f"{self.title} {self.description}"
