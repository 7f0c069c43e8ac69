"""Fixed-width thickness file export."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .config import ThicknessParameters, default_parameters


def format_record(iline: int, xline: int, thickness: float, params: Optional[ThicknessParameters] = None) -> str:
    params = params or default_parameters()
    width, precision = params.field_width, params.precision
    placeholder = params.placeholder()
    return (
        f"{float(iline):>{width}.{precision}f}"
        f"{float(xline):>{width}.{precision}f}"
        f"{placeholder:>{width}}"
        f"{placeholder:>{width}}"
        f"{float(thickness):>{width}.{precision}f}"
    )


def select_rows(frame: pd.DataFrame, params: Optional[ThicknessParameters] = None) -> pd.DataFrame:
    params = params or default_parameters()
    if params.skip_zero_thickness:
        return frame.loc[frame["net_thickness"] != 0]
    return frame


def format_thickness(frame: pd.DataFrame, params: Optional[ThicknessParameters] = None) -> str:
    params = params or default_parameters()
    rows = select_rows(frame, params)
    lines = [
        format_record(iline, xline, thickness, params)
        for iline, xline, thickness in rows[["iline", "xline", "net_thickness"]].itertuples(index=False)
    ]
    return "".join(f"{line}\n" for line in lines)


def thickness_file_bytes(frame: pd.DataFrame, params: Optional[ThicknessParameters] = None) -> bytes:
    return format_thickness(frame, params).encode("ascii")


def write_thickness_file(
    frame: pd.DataFrame,
    path: Union[str, Path],
    params: Optional[ThicknessParameters] = None,
) -> int:
    """Write the thickness records to ``path``; returns the number of rows written."""
    params = params or default_parameters()
    text = format_thickness(frame, params)
    Path(path).write_text(text, encoding="ascii")
    return text.count("\n")
