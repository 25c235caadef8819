"""
Event category classifier
=========================

Storm Data event labels are free text typed by many different offices over
decades ("TSTM WIND", "THUNDERSTORM WINDS/HAIL", "Flash Flood/ Street", ...).
This module collapses them into a small set of canonical categories.

How it works:
- The label is lower-cased.
- `CATEGORY_RULES` is walked *in order*; the first rule with a keyword that
  occurs anywhere in the label wins.
- A label that matches no rule becomes its own category (first letter
  upper-cased), so no record is ever dropped.

The order of `CATEGORY_RULES` matters. For example "flash flood and wind"
contains both "flood" and "wind" and resolves to "Flood" because the flood
rule comes first. Do not turn this list into a dict.
"""

from __future__ import annotations
from typing import List, Tuple

# (keywords, category) pairs, highest priority first
CATEGORY_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("storm surge",), "Storm surge"),
    (("flood",), "Flood"),
    (("tornado",), "Tornado"),
    (("snow", "ice", "wintry", "freez", "blizzard", "cold", "winter"), "Wintry"),
    (("rain", "shower"), "Rain"),
    (("thunder", "lightning"), "Lightning"),
    (("wind",), "Wind"),
    (("hurricane", "tropical", "typhoon"), "Hurricane"),
    (("dry", "drought"), "Dry weather"),
    (("heat", "warm"), "Heat"),
    (("hail",), "Hail"),
    (("fire",), "Fire"),
]

CANONICAL_CATEGORIES: List[str] = [category for _, category in CATEGORY_RULES]

def _capitalize_first(label: str) -> str:
    # str.capitalize() would also lower-case the rest; the label already is
    return label[:1].upper() + label[1:]

def classify(event_label: str) -> str:
    """Return the canonical category for a raw event label.

    Never raises. Non-string input (for example NaN from a blank cell) is
    converted with str() first. A blank label matches no rule and falls
    back to the empty category "", which is kept and counted like any other.
    """
    label = str(event_label).lower()
    for keywords, category in CATEGORY_RULES:
        if any(k in label for k in keywords):
            return category
    return _capitalize_first(label)

def is_canonical(category: str) -> bool:
    """True for one of the rule categories, False for a fallback singleton."""
    return category in CANONICAL_CATEGORIES
