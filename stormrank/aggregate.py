"""
Aggregation (records -> one row per category)
=============================================

Records are grouped by a category computed from the data (not a fixed enum),
so the natural structure is a dict from category to a dict of running sums,
filled in one pass:

    {"Tornado": {"fatalities": 3.0, "injuries": 15.0}, "Flood": {...}}

Each metric is a small `Metric` object: a name plus a function that pulls the
metric's contribution out of one record. Raw fields (fatalities, injuries)
are read directly; monetary metrics go through `damage.decode`.

Summing is order independent, so the records can also be split into
partitions, aggregated separately and merged with `merge_aggregates`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence
from .models import AggregateRow, StormRecord
from .classify import classify
from .damage import decode

@dataclass(frozen=True)
class Metric:
    """A named numeric contribution of one record."""
    name: str
    extract: Callable[[StormRecord], float]

FATALITIES = Metric("fatalities", lambda r: r.fatalities)
INJURIES = Metric("injuries", lambda r: r.injuries)
PROPERTY = Metric("property", lambda r: decode(r.prop_dmg, r.prop_dmg_exp))
CROP = Metric("crop", lambda r: decode(r.crop_dmg, r.crop_dmg_exp))

def aggregate(
    records: Iterable[StormRecord],
    metrics: Sequence[Metric],
    category_of: Callable[[str], str] = classify,
) -> List[AggregateRow]:
    """Sum every metric per category.

    Rows come back in the order each category was first seen, which is the
    order the ranker falls back on for full ties.
    """
    sums: Dict[str, Dict[str, float]] = {}
    for r in records:
        cat = category_of(r.event_label)
        acc = sums.get(cat)
        if acc is None:
            acc = sums[cat] = {m.name: 0.0 for m in metrics}
        for m in metrics:
            acc[m.name] += m.extract(r)
    return [AggregateRow(category=c, values=v) for c, v in sums.items()]

def merge_aggregates(partials: Iterable[Sequence[AggregateRow]]) -> List[AggregateRow]:
    """Merge per-partition aggregates by adding sums of the same category."""
    merged: Dict[str, Dict[str, float]] = {}
    for rows in partials:
        for row in rows:
            acc = merged.setdefault(row.category, {})
            for name, v in row.values.items():
                acc[name] = acc.get(name, 0.0) + v
    return [AggregateRow(category=c, values=v) for c, v in merged.items()]
