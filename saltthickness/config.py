"""Configuration helpers for SaltThickness."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

LOGGER = logging.getLogger(__name__)


@dataclass
class ThicknessParameters:
    """User-configurable parameters for reading picks and writing thickness files."""

    precision: int = 2
    field_width: int = 12
    skip_zero_thickness: bool = False
    large_input_records: int = 100_000
    horizon_suffix: str = ".lmk"
    output_prefix: str = "output="

    def placeholder(self) -> str:
        return f"{0.0:.{self.precision}f}"


DEFAULT_PARAMETER_NAMES = [
    "PRECISION",
    "FIELD_WIDTH",
    "SKIP_ZERO_THICKNESS",
    "LARGE_INPUT_RECORDS",
    "HORIZON_SUFFIX",
    "OUTPUT_PREFIX",
]


def default_parameters() -> ThicknessParameters:
    return ThicknessParameters()


def parse_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"1", "true", "yes", "on"}:
            return True
        if text in {"0", "false", "no", "off"}:
            return False
        return default
    if value is None:
        return default
    return bool(value)


def warn_missing_parameter(name: str, default_value: object, logger: Optional[Callable[[str], None]] = None) -> None:
    message = f"Parameter '{name}' missing; using default value {default_value!r}."
    if logger is not None:
        logger(message)
    else:
        LOGGER.warning(message)


def parameter_from_inputs(inputs: Dict[str, object], logger: Optional[Callable[[str], None]] = None) -> ThicknessParameters:
    params = default_parameters()

    def get(keys: Iterable[str] | str, default: object) -> object:
        if isinstance(keys, str):
            keys = (keys,)
        primary = next(iter(keys))
        for key in keys:
            if key in inputs and inputs[key] not in (None, ""):
                return inputs[key]
        warn_missing_parameter(primary, default, logger)
        return default

    params.precision = int(get("PRECISION", params.precision))
    params.field_width = int(get("FIELD_WIDTH", params.field_width))
    params.skip_zero_thickness = parse_bool(
        get("SKIP_ZERO_THICKNESS", params.skip_zero_thickness),
        params.skip_zero_thickness,
    )
    params.large_input_records = int(get("LARGE_INPUT_RECORDS", params.large_input_records))
    params.horizon_suffix = str(get("HORIZON_SUFFIX", params.horizon_suffix))
    params.output_prefix = str(get("OUTPUT_PREFIX", params.output_prefix))
    if params.precision < 0:
        raise ValueError(f"PRECISION must be non-negative, got {params.precision}.")
    if params.field_width < 1:
        raise ValueError(f"FIELD_WIDTH must be positive, got {params.field_width}.")
    return params


def parameter_dict(params: ThicknessParameters) -> Dict[str, object]:
    return {
        "PRECISION": params.precision,
        "FIELD_WIDTH": params.field_width,
        "SKIP_ZERO_THICKNESS": params.skip_zero_thickness,
        "LARGE_INPUT_RECORDS": params.large_input_records,
        "HORIZON_SUFFIX": params.horizon_suffix,
        "OUTPUT_PREFIX": params.output_prefix,
    }
