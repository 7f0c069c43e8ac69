"""Removal of invalid and nested horizon intervals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from .horizons import DuplicateIntervalError, HorizonInterval, Location, LocationTable

LOGGER = logging.getLogger(__name__)


@dataclass
class TrimSummary:
    locations_in: int = 0
    locations_out: int = 0
    invalid_removed: int = 0
    nested_removed: int = 0

    @property
    def locations_dropped(self) -> int:
        return self.locations_in - self.locations_out


def is_valid_interval(interval: HorizonInterval) -> bool:
    """True for an interval with both picks positive and a positive thickness."""
    top, bottom = interval.top_depth, interval.bottom_depth
    if top is None or bottom is None:
        return False
    return top > 0 and bottom > 0 and bottom - top > 0


def is_contained(inner: HorizonInterval, outer: HorizonInterval) -> bool:
    """True when ``inner`` lies strictly inside ``outer`` and belongs to another pair."""
    return (
        inner.pair_index != outer.pair_index
        and inner.top_depth > outer.top_depth
        and inner.bottom_depth < outer.bottom_depth
    )


def _check_unique(intervals: Iterable[HorizonInterval]) -> None:
    seen: Set[Tuple[Location, int]] = set()
    for interval in intervals:
        if interval.key in seen:
            raise DuplicateIntervalError(
                f"Pair {interval.pair_index} appears more than once at {interval.location}."
            )
        seen.add(interval.key)


def _split_intervals(intervals: List[HorizonInterval]) -> Tuple[List[HorizonInterval], int, int]:
    _check_unique(intervals)
    valid = [interval for interval in intervals if is_valid_interval(interval)]
    # Containment is judged against every valid interval, including ones that are themselves nested.
    snapshot = tuple(valid)
    kept = [
        interval
        for interval in valid
        if not any(is_contained(interval, other) for other in snapshot if other is not interval)
    ]
    return kept, len(intervals) - len(valid), len(valid) - len(kept)


def trim_intervals(intervals: Iterable[HorizonInterval]) -> List[HorizonInterval]:
    """Return the intervals of one location that are valid and not nested in another."""
    kept, _, _ = _split_intervals(list(intervals))
    return kept


def trim_table(
    table: LocationTable,
    *,
    progress: Optional[Callable[[float, str], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> TrimSummary:
    """Trim every location of ``table`` in place and drop locations left empty.

    The table is only modified once every location has been trimmed, so an
    interrupted run leaves it as it was.
    """
    summary = TrimSummary(locations_in=len(table))
    locations = list(table)
    total = len(locations)
    step = max(1, total // 100)
    trimmed: Dict[Location, List[HorizonInterval]] = {}
    for count, location in enumerate(locations, start=1):
        if should_stop and should_stop():
            raise InterruptedError("Horizon trimming interrupted by user.")
        kept, invalid, nested = _split_intervals(table[location])
        summary.invalid_removed += invalid
        summary.nested_removed += nested
        trimmed[location] = kept
        if progress and (count % step == 0 or count == total):
            progress(count / total, "Trimming horizons")

    for location, kept in trimmed.items():
        if kept:
            table[location] = kept
        else:
            del table[location]
    summary.locations_out = len(table)
    LOGGER.debug(
        "Trimmed %d invalid and %d nested intervals; %d of %d locations remain",
        summary.invalid_removed,
        summary.nested_removed,
        summary.locations_out,
        summary.locations_in,
    )
    return summary
