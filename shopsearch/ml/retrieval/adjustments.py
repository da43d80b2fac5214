"""
Boost and Penalty Adjustments
Business-rule multipliers applied to a ranking score after it is computed.

Order: category -> brand -> stock level -> freshness, then capped at 100.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from ...models import Product
from ..config import AdjustmentConfig

logger = logging.getLogger(__name__)


class BoostPenaltyAdjuster:
    """
    Applies the configured lookup tables to a score.

    Unlisted categories and brands get a multiplier of 1.0.
    """

    def __init__(self, config: Optional[AdjustmentConfig] = None):
        """
        Initialize adjuster.

        Args:
            config: Boost tables and stock/freshness rules
        """
        self.config = config or AdjustmentConfig()
        logger.debug(
            f"Boost/penalty adjuster initialized: {len(self.config.category_boosts)} category "
            f"boosts, {len(self.config.brand_boosts)} brand boosts"
        )

    def category_multiplier(self, category: str) -> float:
        return self.config.category_boosts.get(category, 1.0)

    def brand_multiplier(self, brand: str) -> float:
        return self.config.brand_boosts.get(brand, 1.0)

    def stock_multiplier(self, stock: int) -> float:
        cfg = self.config
        if stock == 0:
            return cfg.out_of_stock_multiplier
        if stock < cfg.low_stock_threshold:
            return cfg.low_stock_multiplier
        if stock > cfg.high_stock_threshold:
            return cfg.high_stock_multiplier
        return 1.0

    def freshness_multiplier(self, product: Product, now: Optional[datetime] = None) -> float:
        cfg = self.config
        if product.age_days(now) > cfg.stale_age_days and product.sales_count < cfg.stale_max_sales:
            return cfg.stale_multiplier
        return 1.0

    def multipliers(self, product: Product, now: Optional[datetime] = None) -> Dict[str, float]:
        """Every multiplier that applies to a product, in application order."""
        return {
            "category": self.category_multiplier(product.category),
            "brand": self.brand_multiplier(product.brand),
            "stock": self.stock_multiplier(product.stock),
            "freshness": self.freshness_multiplier(product, now),
        }

    def adjust(self, score: float, product: Product, now: Optional[datetime] = None) -> float:
        """
        Apply all boosts and penalties to a score.

        Args:
            score: Base score (0-100)
            product: Product the score belongs to
            now: Reference time for the freshness rule

        Returns:
            Adjusted score in [0, 100]
        """
        adjusted = score
        for multiplier in self.multipliers(product, now).values():
            adjusted *= multiplier

        return min(max(adjusted, 0.0), self.config.max_score)


def adjust(
    score: float,
    product: Product,
    now: Optional[datetime] = None,
    config: Optional[AdjustmentConfig] = None,
) -> float:
    """Apply the boost/penalty tables to a score."""
    return BoostPenaltyAdjuster(config).adjust(score, product, now)
