"""
Product Endpoints
Create products, fetch them by id, and update their metadata.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, status

from ...db import ProductCatalog, ProductNotFoundError
from ..dependencies import get_product_catalog, get_request_id
from ..errors import ResourceNotFoundError
from ..models.product import (
    MetadataUpdate,
    MetadataUpdated,
    ProductCreate,
    ProductCreated,
    ProductResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.post("", response_model=ProductCreated, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreate,
    catalog: ProductCatalog = Depends(get_product_catalog),
    request_id: Optional[str] = Depends(get_request_id),
) -> ProductCreated:
    """
    Add a product to the catalog.

    Returns:
        The id assigned to the new product
    """
    product = catalog.add(request.to_product())

    logger.info(
        f"Product created: id={product.product_id}, title='{product.title}'",
        extra={"request_id": request_id},
    )

    return ProductCreated(product_id=product.product_id)


@router.get("/{product_id}", response_model=ProductResponse, status_code=status.HTTP_200_OK)
async def get_product(
    product_id: int = Path(..., ge=1),
    catalog: ProductCatalog = Depends(get_product_catalog),
) -> ProductResponse:
    """Fetch a single product."""
    try:
        product = catalog.get(product_id)
    except ProductNotFoundError:
        raise ResourceNotFoundError("Product", product_id)

    return ProductResponse.from_product(product)


@router.put(
    "/{product_id}/metadata", response_model=MetadataUpdated, status_code=status.HTTP_200_OK
)
async def update_product_metadata(
    request: MetadataUpdate,
    product_id: int = Path(..., ge=1),
    catalog: ProductCatalog = Depends(get_product_catalog),
    request_id: Optional[str] = Depends(get_request_id),
) -> MetadataUpdated:
    """
    Merge metadata into a product.

    Existing keys are overwritten; keys not in the request are kept.
    """
    try:
        product = catalog.update_metadata(product_id, request.metadata)
    except ProductNotFoundError:
        raise ResourceNotFoundError("Product", product_id)

    logger.info(
        f"Metadata updated for product {product_id}: {sorted(request.metadata)}",
        extra={"request_id": request_id},
    )

    return MetadataUpdated(product_id=product_id, metadata=product.metadata)
