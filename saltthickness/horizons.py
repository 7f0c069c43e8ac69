"""Horizon pick data model: grid locations, top/bottom intervals and the location table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, MutableMapping, Optional, Tuple

TOP = "top"
BOTTOM = "bottom"
SIDES = (TOP, BOTTOM)


class SaltThicknessError(Exception):
    """Base class for errors raised while computing salt thickness."""


class DuplicateIntervalError(SaltThicknessError, ValueError):
    """Raised when two intervals share the same location and pair index."""


@dataclass(frozen=True, order=True)
class Location:
    iline: int
    xline: int

    def __str__(self) -> str:
        return f"({self.iline}, {self.xline})"


@dataclass(eq=False)
class HorizonInterval:
    """One top/bottom pick pair at a location.

    Two intervals are the same interval when they come from the same horizon
    pair at the same location; the depths play no part in equality. A side
    that has not been picked is ``None``.
    """

    location: Location
    pair_index: int
    top_depth: Optional[float] = None
    bottom_depth: Optional[float] = None

    @property
    def key(self) -> Tuple[Location, int]:
        return (self.location, self.pair_index)

    @property
    def is_complete(self) -> bool:
        return self.top_depth is not None and self.bottom_depth is not None

    @property
    def thickness(self) -> float:
        if not self.is_complete:
            raise ValueError(f"Interval {self.pair_index} at {self.location} is missing a pick.")
        return self.bottom_depth - self.top_depth

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HorizonInterval):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class LocationTable(MutableMapping[Location, List[HorizonInterval]]):
    """Intervals grouped by grid location, iterated in (iline, xline) order."""

    def __init__(self, data: Optional[Dict[Location, List[HorizonInterval]]] = None) -> None:
        self._data: Dict[Location, List[HorizonInterval]] = {}
        if data:
            for location, intervals in data.items():
                self[location] = intervals

    def __getitem__(self, location: Location) -> List[HorizonInterval]:
        return self._data[location]

    def __setitem__(self, location: Location, intervals: List[HorizonInterval]) -> None:
        self._data[location] = list(intervals)

    def __delitem__(self, location: Location) -> None:
        del self._data[location]

    def __iter__(self) -> Iterator[Location]:
        return iter(sorted(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"LocationTable(locations={len(self)}, intervals={self.interval_count})"

    @property
    def interval_count(self) -> int:
        return sum(len(intervals) for intervals in self._data.values())

    def intervals(self) -> Iterator[HorizonInterval]:
        for location in self:
            yield from self._data[location]

    def find(self, location: Location, pair_index: int) -> Optional[HorizonInterval]:
        for interval in self._data.get(location, ()):
            if interval.pair_index == pair_index:
                return interval
        return None

    def add_pick(self, location: Location, pair_index: int, depth: float, side: str) -> HorizonInterval:
        """Record one depth pick for ``pair_index`` at ``location``.

        A pick for a pair that has no interval yet opens one on ``side``.
        A further pick for an existing interval fills the bottom when the top
        is already set and the top otherwise, whichever source it came from.
        """
        if side not in SIDES:
            raise ValueError(f"Unknown pick side {side!r}; expected one of {SIDES}.")
        interval = self.find(location, pair_index)
        if interval is None:
            interval = HorizonInterval(location=location, pair_index=pair_index)
            if side == TOP:
                interval.top_depth = depth
            else:
                interval.bottom_depth = depth
            self._data.setdefault(location, []).append(interval)
        elif interval.top_depth is not None:
            interval.bottom_depth = depth
        else:
            interval.top_depth = depth
        return interval
