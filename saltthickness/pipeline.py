"""End-to-end salt thickness computation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import pandas as pd

from .config import ThicknessParameters, default_parameters
from .data import build_location_table
from .thickness import accumulate_thickness, thickness_frame
from .trimming import TrimSummary, trim_table

LOGGER = logging.getLogger(__name__)


@dataclass
class ThicknessResult:
    thickness: pd.DataFrame
    summary: TrimSummary
    picks_locations: int

    @property
    def locations(self) -> int:
        return len(self.thickness)


def _stage_progress(
    progress: Optional[Callable[[float, str], None]], start: float, span: float
) -> Optional[Callable[[float, str], None]]:
    if progress is None:
        return None

    def update(fraction: float, message: str) -> None:
        progress(start + span * fraction, message)

    return update


def compute_salt_thickness(
    sources: Sequence,
    params: Optional[ThicknessParameters] = None,
    *,
    logger: Optional[Callable[[str], None]] = None,
    progress: Optional[Callable[[float, str], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> ThicknessResult:
    """Read alternating top/bottom pick sources and compute net thickness per location."""
    params = params or default_parameters()
    notify = logger or LOGGER.info

    notify("Reading horizon files...")
    table = build_location_table(
        sources,
        params=params,
        logger=logger,
        progress=_stage_progress(progress, 0.0, 0.4),
    )
    picks_locations = len(table)

    notify("Trimming the horizons...")
    summary = trim_table(
        table,
        progress=_stage_progress(progress, 0.4, 0.3),
        should_stop=should_stop,
    )
    if summary.locations_dropped:
        LOGGER.info("%d locations have no valid horizon pair", summary.locations_dropped)

    notify("Calculating salt thickness...")
    records = accumulate_thickness(
        table,
        progress=_stage_progress(progress, 0.7, 0.3),
        should_stop=should_stop,
    )
    return ThicknessResult(thickness=thickness_frame(records), summary=summary, picks_locations=picks_locations)
