"""
Ranking Configuration
Centralized configuration for weight profiles, boost tables, and diversification.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class QueryIntent(str, Enum):
    """Coarse classification of what a query is after."""

    GENERAL = "general"
    BUDGET = "budget"
    PREMIUM = "premium"
    LATEST = "latest"
    QUALITY = "quality"


COMPONENTS = ("relevance", "popularity", "quality", "value", "recency")


@dataclass(frozen=True)
class WeightProfile:
    """Weights for the five ranking components (must sum to 1.0)."""

    relevance: float = 0.35
    popularity: float = 0.25
    quality: float = 0.20
    value: float = 0.15
    recency: float = 0.05

    def __post_init__(self):
        """Validate weights."""
        weights = self.as_dict()
        negative = [name for name, weight in weights.items() if weight < 0]
        if negative:
            raise ValueError(f"Ranking weights must be non-negative, got {weights}")

        total = sum(weights.values())
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Ranking weights must sum to 1.0, got {total}")

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in COMPONENTS}


def _default_weight_profiles() -> Dict[QueryIntent, WeightProfile]:
    return {
        QueryIntent.GENERAL: WeightProfile(),
        QueryIntent.BUDGET: WeightProfile(
            relevance=0.30, popularity=0.15, quality=0.20, value=0.30, recency=0.05
        ),
        QueryIntent.PREMIUM: WeightProfile(
            relevance=0.30, popularity=0.20, quality=0.30, value=0.15, recency=0.05
        ),
        QueryIntent.LATEST: WeightProfile(
            relevance=0.35, popularity=0.20, quality=0.15, value=0.05, recency=0.25
        ),
        QueryIntent.QUALITY: WeightProfile(
            relevance=0.30, popularity=0.15, quality=0.40, value=0.10, recency=0.05
        ),
    }


@dataclass
class ScoringConfig:
    """Component scorer parameters."""

    # Popularity
    sales_log_multiplier: float = 10.0
    sales_cap: float = 40.0
    popularity_rating_points: float = 40.0
    stock_saturation: int = 500
    stock_points: float = 20.0

    # Quality
    quality_rating_points: float = 50.0
    return_rate_points: float = 30.0
    return_rate_penalty: float = 3.0  # per percentage point returned
    complaint_points: float = 20.0
    complaint_penalty: float = 2.0  # per complaint

    # Value
    discount_saturation_percent: float = 50.0
    discount_points: float = 30.0
    value_ratio_multiplier: float = 10.0
    value_ratio_cap: float = 40.0
    min_price_log: float = 1.0  # floor for log10(price + 1)
    price_tiers: Dict[float, float] = field(
        default_factory=lambda: {10000: 30.0, 50000: 20.0, 150000: 10.0}
    )
    price_tier_fallback: float = 5.0

    # Recency
    recency_base: float = 50.0
    age_bonuses: Dict[int, float] = field(default_factory=lambda: {30: 25.0, 90: 15.0, 365: 5.0})
    latest_intent_window_days: int = 180
    latest_intent_bonus: float = 20.0

    def __post_init__(self):
        if self.min_price_log <= 0:
            raise ValueError(f"min_price_log must be positive, got {self.min_price_log}")
        if self.stock_saturation <= 0:
            raise ValueError(f"stock_saturation must be positive, got {self.stock_saturation}")


@dataclass
class AdjustmentConfig:
    """Boost and penalty tables applied after comprehensive scoring."""

    category_boosts: Dict[str, float] = field(
        default_factory=lambda: {
            "Mobile Phones": 1.1,
            "Laptops": 1.05,
            "Headphones": 1.0,
            "Tablets": 0.95,
            "Smart Watches": 0.95,
            "Phone Accessories": 0.9,
        }
    )
    brand_boosts: Dict[str, float] = field(
        default_factory=lambda: {
            "Apple": 1.15,
            "Samsung": 1.10,
            "Sony": 1.08,
            "Lenovo": 1.05,
            "Dell": 1.05,
            "Xiaomi": 0.95,
            "Boat": 0.90,
        }
    )

    # Stock levels
    out_of_stock_multiplier: float = 0.5
    low_stock_threshold: int = 10
    low_stock_multiplier: float = 0.75
    high_stock_threshold: int = 500
    high_stock_multiplier: float = 1.05

    # Old products that never sold
    stale_age_days: int = 730
    stale_max_sales: int = 100
    stale_multiplier: float = 0.7

    max_score: float = 100.0

    def __post_init__(self):
        """Validate multipliers."""
        multipliers = {
            **{f"category:{k}": v for k, v in self.category_boosts.items()},
            **{f"brand:{k}": v for k, v in self.brand_boosts.items()},
            "out_of_stock": self.out_of_stock_multiplier,
            "low_stock": self.low_stock_multiplier,
            "high_stock": self.high_stock_multiplier,
            "stale": self.stale_multiplier,
        }
        invalid = {name: value for name, value in multipliers.items() if value < 0}
        if invalid:
            raise ValueError(f"Adjustment multipliers must be non-negative, got {invalid}")


@dataclass
class DiversityConfig:
    """Per-brand and per-category caps for diversified results."""

    max_per_brand: int = 3
    max_per_category: int = 5
    default_limit: int = 20

    def __post_init__(self):
        if self.max_per_brand < 1 or self.max_per_category < 1:
            raise ValueError("Diversity caps must be at least 1")


@dataclass
class RankingConfig:
    """Top-level ranking configuration combining all sub-configs."""

    weight_profiles: Dict[QueryIntent, WeightProfile] = field(
        default_factory=_default_weight_profiles
    )
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    adjustments: AdjustmentConfig = field(default_factory=AdjustmentConfig)
    diversity: DiversityConfig = field(default_factory=DiversityConfig)

    # 'comprehensive' | 'bm25' | 'tfidf'
    default_algorithm: str = "comprehensive"

    # Classical ranker parameters
    bm25_k1: float = 1.5
    bm25_b: float = 0.75

    def weights_for(self, intent: QueryIntent) -> WeightProfile:
        """Weight profile for an intent, falling back to the general profile."""
        return self.weight_profiles.get(
            QueryIntent(intent), self.weight_profiles[QueryIntent.GENERAL]
        )

    @classmethod
    def from_env(cls) -> "RankingConfig":
        """Load configuration from environment variables."""
        config = cls()

        if max_per_brand := os.getenv("DIVERSITY_MAX_PER_BRAND"):
            config.diversity.max_per_brand = int(max_per_brand)

        if max_per_category := os.getenv("DIVERSITY_MAX_PER_CATEGORY"):
            config.diversity.max_per_category = int(max_per_category)

        if algorithm := os.getenv("RANKING_ALGORITHM"):
            config.default_algorithm = algorithm.lower()

        return config

    def validate(self) -> None:
        """Validate configuration consistency."""
        assert (
            QueryIntent.GENERAL in self.weight_profiles
        ), "A general weight profile is required"

        for intent, profile in self.weight_profiles.items():
            assert isinstance(profile, WeightProfile), f"Invalid weight profile for {intent}"

        assert self.default_algorithm in (
            "comprehensive",
            "bm25",
            "tfidf",
        ), f"Unknown ranking algorithm: {self.default_algorithm}"

        assert self.diversity.max_per_brand >= 1, "max_per_brand must be >= 1"
        assert self.diversity.max_per_category >= 1, "max_per_category must be >= 1"


# Global configuration instance
_global_config: Optional[RankingConfig] = None


def get_ranking_config() -> RankingConfig:
    """Get global ranking configuration (singleton pattern)."""
    global _global_config
    if _global_config is None:
        _global_config = RankingConfig.from_env()
        _global_config.validate()
    return _global_config


def reset_config() -> None:
    """Reset global configuration (useful for testing)."""
    global _global_config
    _global_config = None
