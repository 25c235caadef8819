"""
Data model (StormRecord, AggregateRow, TidyRow)
==============================================

Each row of a NOAA Storm Data file is converted into a `StormRecord` object.
We keep records immutable (`frozen=True`) so that:
- the pipeline can never modify its input while classifying or summing, and
- aggregation and ranking produce *new* rows instead of editing old ones.

The other two types are the pipeline's outputs:
- `AggregateRow`: one row per category with summed metrics (wide shape)
- `TidyRow`: one row per (category, metric) pair (long shape, for charts)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

@dataclass(frozen=True)
class StormRecord:
    """Immutable record for one Storm Data row.

    Magnitude codes (`prop_dmg_exp`, `crop_dmg_exp`) are None when the cell
    was blank. They are never stored as an empty string.
    """
    event_label: str
    fatalities: float = 0.0
    injuries: float = 0.0
    prop_dmg: float = 0.0
    prop_dmg_exp: Optional[str] = None
    crop_dmg: float = 0.0
    crop_dmg_exp: Optional[str] = None

@dataclass(frozen=True)
class AggregateRow:
    """Summed metrics for one category."""
    category: str
    values: Dict[str, float] = field(default_factory=dict)

    def value(self, metric: str) -> float:
        return self.values.get(metric, 0.0)

    def total(self, metrics: Iterable[str]) -> float:
        """Sum of the given metrics (used for display ordering)."""
        return sum(self.value(m) for m in metrics)

@dataclass(frozen=True)
class TidyRow:
    """One (category, metric) cell of a ranked view, in long format."""
    category: str
    metric: str
    value: float
    # 1 = smallest total in the view
    display_rank: int

    def as_dict(self) -> Dict[str, object]:
        return {
            "category": self.category,
            "metric": self.metric,
            "value": self.value,
            "display_rank": self.display_rank,
        }
