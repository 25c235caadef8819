"""
Sorting utilities
=================

The ranker and the reshaper need a *stable* sort: rows with equal keys must
keep their input order so that ties always resolve the same way.

Included:
- Merge Sort (stable in both directions, O(n log n))
"""

from __future__ import annotations
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

def merge_sort(arr: Sequence[T], key: Callable[[T], object] = lambda x: x, reverse: bool = False) -> List[T]:
    """Stable merge sort. Returns a new list."""
    if len(arr) <= 1:
        return list(arr)
    mid = len(arr) // 2
    left = merge_sort(arr[:mid], key=key, reverse=reverse)
    right = merge_sort(arr[mid:], key=key, reverse=reverse)
    return _merge(left, right, key=key, reverse=reverse)

def _merge(left: List[T], right: List[T], key: Callable[[T], object], reverse: bool) -> List[T]:
    out: List[T] = []
    # i and j are pointers into each sorted list
    i = j = 0
    while i < len(left) and j < len(right):
        a, b = key(left[i]), key(right[j])
        # on equal keys always take the left element (stability)
        take_left = (a >= b) if reverse else (a <= b)
        if take_left:
            out.append(left[i]); i += 1
        else:
            out.append(right[j]); j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out
