"""Top-level package for SaltThickness."""

from .config import ThicknessParameters, default_parameters
from .data import (
    MalformedRecordError,
    build_location_table,
    read_picks,
)
from .horizons import (
    DuplicateIntervalError,
    HorizonInterval,
    Location,
    LocationTable,
    SaltThicknessError,
)
from .output import format_thickness, write_thickness_file
from .pipeline import ThicknessResult, compute_salt_thickness
from .thickness import (
    ThicknessRecord,
    accumulate_thickness,
    net_thickness,
    sort_intervals,
    thickness_frame,
)
from .trimming import TrimSummary, trim_intervals, trim_table

__all__ = [
    "ThicknessParameters",
    "default_parameters",
    "MalformedRecordError",
    "build_location_table",
    "read_picks",
    "DuplicateIntervalError",
    "HorizonInterval",
    "Location",
    "LocationTable",
    "SaltThicknessError",
    "format_thickness",
    "write_thickness_file",
    "ThicknessResult",
    "compute_salt_thickness",
    "ThicknessRecord",
    "accumulate_thickness",
    "net_thickness",
    "sort_intervals",
    "thickness_frame",
    "TrimSummary",
    "trim_intervals",
    "trim_table",
]
