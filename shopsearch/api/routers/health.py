"""
Health Check Endpoints
Endpoints for health checks and status monitoring.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ...db import ProductCatalog
from ...models import utc_now
from ..config import APISettings, get_settings
from ..dependencies import get_product_catalog
from ..middleware.timing import get_latency_tracker

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """
    Basic health check.

    Returns:
        Simple health status
    """
    return {"status": "healthy", "timestamp": utc_now().isoformat()}


@router.get("/status", status_code=status.HTTP_200_OK)
async def status_check(
    settings: APISettings = Depends(get_settings),
    catalog: ProductCatalog = Depends(get_product_catalog),
) -> Dict[str, Any]:
    """
    Detailed status check.

    Returns:
        Version, catalog size, and request latency percentiles
    """
    status_info = {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "version": settings.version,
        "components": {
            "catalog": {"status": "healthy", "products": len(catalog)},
        },
        "performance": get_latency_tracker().get_stats(),
    }

    if len(catalog) == 0:
        status_info["components"]["catalog"]["status"] = "empty"

    return status_info
