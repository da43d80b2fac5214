"""
Result Diversification
Caps how often one brand or category appears in a ranked list.
"""

import logging
from collections import Counter
from typing import List, Optional, Sequence

from ..config import DiversityConfig
from .ranking import ScoredResult

logger = logging.getLogger(__name__)


def diversify(
    results: Sequence[ScoredResult],
    limit: Optional[int] = None,
    config: Optional[DiversityConfig] = None,
) -> List[ScoredResult]:
    """
    Greedily pick results while respecting per-brand and per-category caps.

    Single pass over the score-ordered input: an item is admitted only if its
    brand and its category are both below their caps, otherwise it is skipped
    for good. Stops once `limit` items are admitted.

    Args:
        results: Results sorted by descending score
        limit: Maximum number of results (config default if not given)
        config: Diversity caps

    Returns:
        Diversified results with ranks renumbered
    """
    config = config or DiversityConfig()
    limit = config.default_limit if limit is None else limit

    if limit <= 0:
        return []

    brand_counts: Counter = Counter()
    category_counts: Counter = Counter()
    selected: List[ScoredResult] = []

    for result in results:
        brand = result.product.brand
        category = result.product.category

        if brand_counts[brand] >= config.max_per_brand:
            continue
        if category_counts[category] >= config.max_per_category:
            continue

        selected.append(result)
        brand_counts[brand] += 1
        category_counts[category] += 1

        if len(selected) >= limit:
            break

    for i, result in enumerate(selected):
        result.rank = i

    logger.debug(f"Applied diversity: {len(selected)} of {len(results)} results kept")

    return selected
