"""
Ranker - descending rank + percentage share over a chosen numeric field
"""

import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from services.chain_models import RankedEntry

logger = logging.getLogger("ChainAnalytics")

T = TypeVar("T")


def compute_share(value: float, total: float) -> float:
    """Percentage of total; 0.0 when the total is zero (never NaN/inf)"""
    if total <= 0:
        return 0.0
    return value / total * 100


def rank(
    collection: Sequence[T],
    by: Callable[[T], float],
    descending: bool = True,
    limit: Optional[int] = None,
) -> List[RankedEntry[T]]:
    """
    Sort by `by`, assign 1-based ranks and shares.

    The sort is stable, so ties keep feed order. `limit` is applied after
    sorting and before shares are computed: shares are relative to the
    returned entries, not the whole collection.
    """
    ordered = sorted(collection, key=by, reverse=descending)
    if limit is not None:
        ordered = ordered[:limit]

    values = [by(item) for item in ordered]
    total = sum(values)
    if ordered and total <= 0:
        logger.debug(f"[Ranker] Zero total across {len(ordered)} entries, shares set to 0")

    return [
        RankedEntry(item=item, rank=i + 1, value=value, share=compute_share(value, total))
        for i, (item, value) in enumerate(zip(ordered, values))
    ]


def rank_of(ranked: Sequence[RankedEntry[T]], record: T) -> Optional[int]:
    """Rank of a specific record (by identity) within a ranked list"""
    for entry in ranked:
        if entry.item is record:
            return entry.rank
    return None
