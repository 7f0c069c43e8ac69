"""Static salt thickness map rendering."""

from __future__ import annotations

import io
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from cmcrameri import cm as cmc
from matplotlib.colors import BoundaryNorm


def _auto_levels(values: np.ndarray, *, n: int = 12) -> np.ndarray:
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return np.linspace(0.0, 1.0, n)
    zmin, zmax = float(finite.min()), float(finite.max())
    if zmax <= zmin:
        return np.linspace(zmin, zmin + 1.0, n)
    return np.linspace(zmin, zmax, n)


def thickness_grid(df: pd.DataFrame, value_col: str = "net_thickness") -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Pivot thickness records onto the ilines and xlines present; absent cells are NaN."""
    if df.empty:
        raise ValueError("Cannot grid an empty thickness table.")
    pivot = (
        df.pivot(index="iline", columns="xline", values=value_col)
        .sort_index(axis=0)
        .sort_index(axis=1)
    )
    return pivot.index.to_numpy(), pivot.columns.to_numpy(), pivot.to_numpy(dtype=float)


def render_thickness_map(
    df: pd.DataFrame,
    *,
    value_col: str = "net_thickness",
    cmap=cmc.batlow,
    levels: Optional[Sequence[float]] = None,
    title: Optional[str] = None,
) -> plt.Figure:
    if value_col not in df.columns:
        raise KeyError(f"Column '{value_col}' not available for mapping.")
    ilines, xlines, Z = thickness_grid(df, value_col)
    if levels is None:
        levels = _auto_levels(Z)
    norm = BoundaryNorm(np.asarray(levels), ncolors=cmap.N, extend="both")

    fig, ax = plt.subplots(figsize=(10, 8))
    mesh = ax.pcolormesh(xlines, ilines, np.ma.masked_invalid(Z), cmap=cmap, norm=norm, shading="nearest")
    cb = fig.colorbar(mesh, ax=ax)
    cb.set_label(value_col.replace("_", " "))
    ax.set_xlabel("Xline")
    ax.set_ylabel("Iline")
    ax.set_title(title or "Net salt thickness", fontsize=10)
    ax.set_aspect("auto")
    return fig


def figure_png_bytes(fig: plt.Figure, *, dpi: int = 200) -> bytes:
    """Serialize a Matplotlib figure to PNG bytes."""
    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=dpi, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)
    buffer.seek(0)
    return buffer.getvalue()
