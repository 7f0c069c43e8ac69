"""Net thickness accumulation over trimmed horizon intervals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

import numpy as np
import pandas as pd

from .horizons import HorizonInterval, Location, LocationTable

THICKNESS_COLUMNS = ["iline", "xline", "net_thickness"]


@dataclass(frozen=True)
class ThicknessRecord:
    location: Location
    net_thickness: float


def sort_intervals(intervals: Iterable[HorizonInterval]) -> List[HorizonInterval]:
    """Order intervals by top depth; equal tops keep pair index order."""
    return sorted(intervals, key=lambda interval: (interval.top_depth, interval.pair_index))


def net_thickness(intervals: Iterable[HorizonInterval]) -> float:
    """Sum interval thicknesses, removing the overlap between neighbours in depth order.

    Only the next interval down is compared with the current one, so three or
    more mutually overlapping intervals are not reduced to their exact union.
    A positive running total means no measurable thickness and gives 0.
    """
    ordered = sort_intervals(intervals)
    total = 0.0
    for current, following in zip(ordered, ordered[1:] + [None]):
        total += current.top_depth - current.bottom_depth
        if following is not None and following.top_depth < current.bottom_depth:
            total += current.bottom_depth - following.top_depth
    return 0.0 if total >= 0 else -total


def accumulate_thickness(
    table: LocationTable,
    *,
    progress: Optional[Callable[[float, str], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> List[ThicknessRecord]:
    records: List[ThicknessRecord] = []
    total = len(table)
    step = max(1, total // 100)
    for count, location in enumerate(table, start=1):
        if should_stop and should_stop():
            raise InterruptedError("Thickness computation interrupted by user.")
        records.append(ThicknessRecord(location, net_thickness(table[location])))
        if progress and (count % step == 0 or count == total):
            progress(count / total, "Salt thickness")
    return records


def thickness_frame(records: Iterable[ThicknessRecord]) -> pd.DataFrame:
    records = list(records)
    return pd.DataFrame(
        {
            "iline": np.array([record.location.iline for record in records], dtype=int),
            "xline": np.array([record.location.xline for record in records], dtype=int),
            "net_thickness": np.array([record.net_thickness for record in records], dtype=float),
        },
        columns=THICKNESS_COLUMNS,
    )
