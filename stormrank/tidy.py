"""
Tidy reshaping (wide ranked rows -> long rows)
==============================================

A bar chart wants one row per (category, metric) pair:

    category  metric      value  display_rank
    Tornado   injuries     15.0             2
    Tornado   fatalities    3.0             2
    Flood     injuries      2.0             1
    Flood     fatalities    0.0             1

`display_rank` is the position of the category when the ranked rows are
sorted by their total (sum over the view's metrics) ascending. It does not
depend on which metric the ranking used, so a renderer can lay categories out
smallest to largest (or reverse it for largest first).
"""

from __future__ import annotations
from typing import Dict, List, Sequence, TYPE_CHECKING
from .models import AggregateRow, TidyRow
from .dsa import merge_sort

if TYPE_CHECKING:
    import pandas as pd

TIDY_COLUMNS = ["category", "metric", "value", "display_rank"]

def display_ranks(ranked_rows: Sequence[AggregateRow], metrics: Sequence[str]) -> Dict[str, int]:
    """Map category -> 1-based position by total ascending (ties keep rank order)."""
    by_total = merge_sort(ranked_rows, key=lambda r: r.total(metrics))
    return {r.category: i for i, r in enumerate(by_total, start=1)}

def reshape(ranked_rows: Sequence[AggregateRow], metrics: Sequence[str]) -> List[TidyRow]:
    """Emit one TidyRow per (ranked row, metric), preserving rank order."""
    positions = display_ranks(ranked_rows, metrics)
    out: List[TidyRow] = []
    for row in ranked_rows:
        for m in metrics:
            out.append(TidyRow(
                category=row.category,
                metric=m,
                value=row.value(m),
                display_rank=positions[row.category],
            ))
    return out

def to_frame(tidy_rows: Sequence[TidyRow]) -> "pd.DataFrame":
    """Tidy rows as a pandas DataFrame (columns: TIDY_COLUMNS)."""
    import pandas as pd
    return pd.DataFrame([t.as_dict() for t in tidy_rows], columns=TIDY_COLUMNS)
