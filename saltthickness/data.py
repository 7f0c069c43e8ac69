"""Horizon pick loading utilities."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import ThicknessParameters, default_parameters
from .horizons import BOTTOM, TOP, Location, LocationTable, SaltThicknessError

LOGGER = logging.getLogger(__name__)

PICK_COLUMNS = ["iline", "xline", "x", "y", "depth"]


class MalformedRecordError(SaltThicknessError, ValueError):
    """Raised when a pick record does not hold exactly five numeric fields."""

    def __init__(self, source: str, record: Optional[int], detail: str) -> None:
        self.source = source
        self.record = record
        where = f"record {record}" if record is not None else "input"
        super().__init__(f"Bad file \"{source}\": {where}: {detail}")


def source_name(source, position: Optional[int] = None) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    name = getattr(source, "name", None)
    if name:
        return str(name)
    return f"source {position}" if position is not None else "<memory>"


def _buffer(source):
    if isinstance(source, (str, Path)):
        return source
    if isinstance(source, bytes):
        return io.BytesIO(source)
    if hasattr(source, "read"):
        content = source.read()
        if isinstance(content, bytes):
            return io.BytesIO(content)
        return io.StringIO(content)
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def _empty_picks() -> pd.DataFrame:
    frame = pd.DataFrame({column: pd.Series(dtype=float) for column in PICK_COLUMNS})
    frame["iline"] = frame["iline"].astype(int)
    frame["xline"] = frame["xline"].astype(int)
    return frame


def read_picks(source, *, name: Optional[str] = None) -> pd.DataFrame:
    """Read whitespace separated ``iline xline x y depth`` records.

    Any record with another field count (a blank line included) or a field
    that is not a finite number raises :class:`MalformedRecordError`.
    """
    name = name or source_name(source)
    try:
        raw = pd.read_csv(
            _buffer(source),
            sep=r"\s+",
            header=None,
            dtype=str,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError:
        return _empty_picks()
    except pd.errors.ParserError as exc:
        raise MalformedRecordError(name, None, str(exc).strip()) from exc

    if raw.empty:
        return _empty_picks()

    field_counts = raw.notna().sum(axis=1)
    if raw.shape[1] != len(PICK_COLUMNS) or (field_counts != len(PICK_COLUMNS)).any():
        bad = field_counts[field_counts != len(PICK_COLUMNS)]
        position = int(bad.index[0]) + 1 if not bad.empty else 1
        count = int(bad.iloc[0]) if not bad.empty else raw.shape[1]
        raise MalformedRecordError(name, position, f"expected {len(PICK_COLUMNS)} fields, found {count}")

    raw.columns = PICK_COLUMNS
    numeric = raw.apply(pd.to_numeric, errors="coerce")
    invalid = pd.Series(~np.isfinite(numeric.to_numpy(dtype=float)).all(axis=1), index=numeric.index)
    if invalid.any():
        position = int(invalid[invalid].index[0])
        raise MalformedRecordError(
            name,
            position + 1,
            f"non-numeric field in {' '.join(raw.iloc[position].astype(str))!r}",
        )

    numeric["iline"] = numeric["iline"].astype(int)
    numeric["xline"] = numeric["xline"].astype(int)
    numeric["x"] = numeric["x"].astype(float)
    numeric["y"] = numeric["y"].astype(float)
    numeric["depth"] = numeric["depth"].astype(float)
    return numeric.reset_index(drop=True)


def pair_index_for(position: int) -> int:
    """Pair index of the 1-based source ``position`` (1, 2 -> 1; 3, 4 -> 2; ...)."""
    if position < 1:
        raise ValueError(f"Source positions start at 1, got {position}.")
    return (position + 1) // 2


def side_for(position: int) -> str:
    if position < 1:
        raise ValueError(f"Source positions start at 1, got {position}.")
    return TOP if position % 2 else BOTTOM


def populate_table(table: LocationTable, picks: pd.DataFrame, pair_index: int, side: str) -> int:
    """Add every positive-depth pick to ``table``; returns the number of picks added."""
    kept = picks.loc[picks["depth"] > 0, ["iline", "xline", "depth"]]
    for iline, xline, depth in kept.itertuples(index=False):
        table.add_pick(Location(int(iline), int(xline)), pair_index, float(depth), side)
    return len(kept)


def build_location_table(
    sources: Sequence,
    *,
    params: Optional[ThicknessParameters] = None,
    logger: Optional[Callable[[str], None]] = None,
    progress: Optional[Callable[[float, str], None]] = None,
) -> LocationTable:
    """Build the location table from alternating top/bottom pick sources."""
    params = params or default_parameters()
    if not sources:
        raise ValueError("At least one top/bottom pair of horizon sources is required.")
    if len(sources) % 2:
        raise ValueError(f"Horizon sources must come in top/bottom pairs, got {len(sources)}.")

    missing: List[str] = [
        str(source) for source in sources if isinstance(source, (str, Path)) and not Path(source).exists()
    ]
    if missing:
        raise FileNotFoundError(f"Horizon file(s) not found: {', '.join(missing)}")

    notify = logger or LOGGER.info
    table = LocationTable()
    large_reported = False
    for position, source in enumerate(sources, start=1):
        name = source_name(source, position)
        picks = read_picks(source, name=name)
        added = populate_table(table, picks, pair_index_for(position), side_for(position))
        LOGGER.debug("Read %d picks (%d kept) from %s", len(picks), added, name)
        if added > params.large_input_records and not large_reported:
            notify("Horizon files are pretty big... it may take a while.")
            large_reported = True
        if progress:
            progress(position / len(sources), "Reading horizons")
    return table
