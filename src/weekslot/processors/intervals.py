# File: src/weekslot/processors/intervals.py

from dataclasses import dataclass
from typing import Iterable, List

@dataclass(frozen=True)
class Interval:
    """Closed minute range [start, end] within one day."""
    start: int
    end: int


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """
    Merge overlapping or touching intervals.

    The input is left untouched; a new sorted list is returned. Intervals
    that share an endpoint are merged.
    """
    ordered = sorted(intervals, key=lambda i: i.start)
    if not ordered:
        return []

    merged = [ordered[0]]
    for current in ordered[1:]:
        last = merged[-1]
        if current.start <= last.end:
            merged[-1] = Interval(last.start, max(last.end, current.end))
        else:
            merged.append(current)

    return merged
