"""
Ranking (top-N categories)
==========================

Order aggregate rows by a primary metric, break ties with a secondary metric
(both descending), and keep only the first `n`.

Rows that tie on both metrics stay in the order they had in the aggregate
table (first occurrence), because the merge sort is stable.
"""

from __future__ import annotations
from typing import List, Sequence
from .models import AggregateRow
from .dsa import merge_sort

DEFAULT_TOP_N = 10

def rank(
    rows: Sequence[AggregateRow],
    primary: str,
    secondary: str,
    n: int = DEFAULT_TOP_N,
) -> List[AggregateRow]:
    """Return at most `n` rows ordered by (primary desc, secondary desc).

    Fewer than `n` categories is not an error: all of them are returned.
    """
    if n <= 0:
        return []
    ordered = merge_sort(
        rows,
        key=lambda r: (r.value(primary), r.value(secondary)),
        reverse=True,
    )
    return ordered[:n]
