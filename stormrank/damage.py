"""
Damage decoding (coefficient + magnitude code -> US$)
=====================================================

Storm Data stores damage as two columns: a coefficient (PROPDMG) and a
one-character magnitude code (PROPDMGEXP). "25", "K" means 25,000 US$.

Only K, M and B (any case) are scaled. A missing code, or any other
character seen in the raw files ("+", "?", "5", ...), leaves the coefficient
as it is.
"""

from __future__ import annotations
from typing import Dict, Optional

MAGNITUDE_MULTIPLIERS: Dict[str, float] = {
    "K": 1e3,
    "M": 1e6,
    "B": 1e9,
}

def decode(coefficient: float, code: Optional[str] = None) -> float:
    """Return the absolute damage value for a (coefficient, code) pair.

    >>> decode(3, "K")
    3000.0
    >>> decode(2, "X")
    2
    """
    if code is None:
        return coefficient
    multiplier = MAGNITUDE_MULTIPLIERS.get(str(code).strip().upper())
    if multiplier is None:
        return coefficient
    return coefficient * multiplier
