"""
Core engine (stormrank)
=======================

This module wires the pipeline steps together:

1) Classify each record's event label -> category   (classify.py)
2) Sum the view's metrics per category             (aggregate.py)
3) Keep the top N categories                       (rank.py)
4) Reshape into long rows for rendering            (tidy.py)

A *view* says which metrics to sum and which two of them rank the rows.
There are two built-in views:
- HEALTH_VIEW:   injuries + fatalities, ranked by injuries then fatalities
- ECONOMIC_VIEW: property + crop damage (US$), ranked by property then crop

`StormRank` holds one loaded record set and runs views over it. It never
modifies the records; every call recomputes from them.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging
from .models import AggregateRow, StormRecord, TidyRow
from .classify import classify
from .aggregate import Metric, FATALITIES, INJURIES, PROPERTY, CROP, aggregate
from .rank import DEFAULT_TOP_N, rank
from .tidy import TIDY_COLUMNS, reshape

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class View:
    """Which metrics a summary sums, and how it ranks them."""
    name: str
    title: str
    metrics: Tuple[Metric, ...]
    primary: str
    secondary: str
    unit_label: str = "Count"
    # renderers divide values by this; the pipeline itself never does
    display_scale: float = 1.0

    @property
    def metric_names(self) -> List[str]:
        return [m.name for m in self.metrics]

HEALTH_VIEW = View(
    name="health",
    title="Event types most harmful to population health",
    metrics=(INJURIES, FATALITIES),
    primary="injuries",
    secondary="fatalities",
    unit_label="People",
)

ECONOMIC_VIEW = View(
    name="economic",
    title="Event types with the greatest economic consequences",
    metrics=(PROPERTY, CROP),
    primary="property",
    secondary="crop",
    unit_label="Billions of US$",
    display_scale=1e9,
)

VIEWS: Dict[str, View] = {v.name: v for v in (HEALTH_VIEW, ECONOMIC_VIEW)}

def get_view(name: str) -> View:
    try:
        return VIEWS[name.lower().strip()]
    except KeyError:
        raise ValueError(f"view must be one of: {', '.join(VIEWS)}") from None

def run_view(
    records: Sequence[StormRecord],
    view: View,
    n: int = DEFAULT_TOP_N,
    category_of: Callable[[str], str] = classify,
) -> List[TidyRow]:
    """Full pipeline for one view: aggregate -> rank -> reshape."""
    rows = aggregate(records, view.metrics, category_of=category_of)
    top = rank(rows, view.primary, view.secondary, n=n)
    return reshape(top, view.metric_names)

@dataclass
class StormRank:
    """One in-memory Storm Data record set plus the views run over it."""
    records: List[StormRecord]
    dataset_path: Optional[str] = None
    # Commands that produced the outputs (for reproducibility in reports)
    command_log: List[str] = field(default_factory=list)

    def aggregate(self, view: View) -> List[AggregateRow]:
        rows = aggregate(self.records, view.metrics)
        logger.debug("view %s: %d records -> %d categories", view.name, len(self.records), len(rows))
        return rows

    def ranked(self, view: View, n: int = DEFAULT_TOP_N) -> List[AggregateRow]:
        return rank(self.aggregate(view), view.primary, view.secondary, n=n)

    def tidy(self, view: View, n: int = DEFAULT_TOP_N) -> List[TidyRow]:
        return reshape(self.ranked(view, n), view.metric_names)

    def category_counts(self) -> Counter:
        """Number of records per category."""
        return Counter(classify(r.event_label) for r in self.records)

    def distinct_labels(self) -> int:
        return len({r.event_label.lower() for r in self.records})

    def export_csv(self, path: str, view: View, n: int = DEFAULT_TOP_N) -> None:
        import csv
        rows = self.tidy(view, n)
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(TIDY_COLUMNS)
            for t in rows:
                w.writerow([t.category, t.metric, t.value, t.display_rank])

    def export_json(self, path: str, view: View, n: int = DEFAULT_TOP_N) -> None:
        """Export a view's tidy rows as a JSON list of objects."""
        import json
        payload = [t.as_dict() for t in self.tidy(view, n)]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
