"""
Component Scorers
Popularity, quality, value, and recency scores in [0, 100] for a product.

Each scorer exposes raw_score() (uncapped sum of its parts) and
score_product() (capped at 100). All of them are pure functions of the
product, the intent, and the reference time.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional

from ...models import Product, utc_now
from ..config import QueryIntent, ScoringConfig

logger = logging.getLogger(__name__)

MAX_COMPONENT_SCORE = 100.0


def _cap(score: float) -> float:
    return min(max(score, 0.0), MAX_COMPONENT_SCORE)


class PopularityScorer:
    """
    Calculates popularity from sales volume, rating, and stock depth.

    - Sales: 10 x log10(sales + 1), up to 40
    - Rating: rating / 5 x 40
    - Stock: stock / 500 x 20, up to 20 (only when in stock)
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def raw_score(self, product: Product) -> float:
        cfg = self.config

        score = min(math.log10(product.sales_count + 1) * cfg.sales_log_multiplier, cfg.sales_cap)
        score += (product.rating / 5) * cfg.popularity_rating_points

        if product.stock > 0:
            stock_share = product.stock / cfg.stock_saturation
            score += min(stock_share * cfg.stock_points, cfg.stock_points)

        return score

    def score_product(self, product: Product) -> float:
        return _cap(self.raw_score(product))

    def score_batch(self, products: Iterable[Product]) -> Dict[int, float]:
        """Popularity per product id (products without an id are skipped)."""
        return {
            p.product_id: self.score_product(p) for p in products if p.product_id is not None
        }


class QualityScorer:
    """
    Calculates quality from rating, return rate, and complaints.

    - Rating: rating / 5 x 50
    - Returns: 30 - 3 x return_rate, floored at 0
    - Complaints: 20 - min(2 x complaints, 20)
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def raw_score(self, product: Product) -> float:
        cfg = self.config

        score = (product.rating / 5) * cfg.quality_rating_points

        return_penalty = product.return_rate * cfg.return_rate_penalty
        score += max(cfg.return_rate_points - return_penalty, 0.0)

        complaint_penalty = min(
            product.complaint_count * cfg.complaint_penalty, cfg.complaint_points
        )
        score += max(cfg.complaint_points - complaint_penalty, 0.0)

        return score

    def score_product(self, product: Product) -> float:
        return _cap(self.raw_score(product))


class ValueScorer:
    """
    Calculates price value from discount, rating per price magnitude, and price tier.

    - Discount: discount% / 50 x 30, up to 30 (0 when mrp is 0 or below price)
    - Value ratio: rating / log10(price + 1) x 10, up to 40; the log term is
      floored at 1 so free and near-free products stay finite
    - Tier: +30 under 10k, +20 under 50k, +10 under 150k, else +5
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def discount_percent(self, product: Product) -> float:
        if product.mrp <= 0:
            return 0.0
        return max((product.mrp - product.price) / product.mrp * 100, 0.0)

    def raw_score(self, product: Product) -> float:
        cfg = self.config

        discount = self.discount_percent(product)
        discount_share = discount / cfg.discount_saturation_percent
        score = min(discount_share * cfg.discount_points, cfg.discount_points)

        price_log = max(math.log10(product.price + 1), cfg.min_price_log)
        score += min((product.rating / price_log) * cfg.value_ratio_multiplier, cfg.value_ratio_cap)

        score += self._tier_bonus(product.price)

        return score

    def score_product(self, product: Product) -> float:
        return _cap(self.raw_score(product))

    def _tier_bonus(self, price: float) -> float:
        for ceiling in sorted(self.config.price_tiers):
            if price < ceiling:
                return self.config.price_tiers[ceiling]
        return self.config.price_tier_fallback


class RecencyScorer:
    """
    Calculates recency from product age.

    Base 50, +25 under 30 days, +15 under 90, +5 under 365; +20 more for
    'latest' queries when the product is under 180 days old.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def raw_score(
        self,
        product: Product,
        intent: QueryIntent = QueryIntent.GENERAL,
        now: Optional[datetime] = None,
    ) -> float:
        cfg = self.config
        age_days = product.age_days(now)

        score = cfg.recency_base
        for threshold in sorted(cfg.age_bonuses):
            if age_days < threshold:
                score += cfg.age_bonuses[threshold]
                break

        if intent == QueryIntent.LATEST and age_days < cfg.latest_intent_window_days:
            score += cfg.latest_intent_bonus

        return score

    def score_product(
        self,
        product: Product,
        intent: QueryIntent = QueryIntent.GENERAL,
        now: Optional[datetime] = None,
    ) -> float:
        return _cap(self.raw_score(product, intent, now))


@dataclass(frozen=True)
class BusinessScores:
    """The four non-lexical component scores of one product."""

    popularity: float
    quality: float
    value: float
    recency: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "popularity": self.popularity,
            "quality": self.quality,
            "value": self.value,
            "recency": self.recency,
        }


class ComponentScorer:
    """Runs the four business scorers together."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()
        self.popularity = PopularityScorer(self.config)
        self.quality = QualityScorer(self.config)
        self.value = ValueScorer(self.config)
        self.recency = RecencyScorer(self.config)

    def score(
        self,
        product: Product,
        intent: QueryIntent = QueryIntent.GENERAL,
        now: Optional[datetime] = None,
        clamp: bool = True,
    ) -> BusinessScores:
        """
        Score one product.

        Args:
            product: Product to score
            intent: Query intent (affects recency)
            now: Reference time for product age (defaults to current UTC time)
            clamp: Cap each component at 100 (False returns raw sums)

        Returns:
            BusinessScores
        """
        now = now or utc_now()

        if clamp:
            return BusinessScores(
                popularity=self.popularity.score_product(product),
                quality=self.quality.score_product(product),
                value=self.value.score_product(product),
                recency=self.recency.score_product(product, intent, now),
            )

        return BusinessScores(
            popularity=self.popularity.raw_score(product),
            quality=self.quality.raw_score(product),
            value=self.value.raw_score(product),
            recency=self.recency.raw_score(product, intent, now),
        )


def score_components(
    product: Product,
    intent: QueryIntent = QueryIntent.GENERAL,
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None,
) -> Dict[str, float]:
    """Popularity, quality, value, and recency for a product, each in [0, 100]."""
    return ComponentScorer(config).score(product, QueryIntent(intent), now).to_dict()
