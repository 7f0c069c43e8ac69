"""Command line entry points."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import ThicknessParameters, default_parameters
from .horizons import SaltThicknessError
from .output import write_thickness_file
from .pipeline import compute_salt_thickness

logger = logging.getLogger(__name__)

USAGE = "%(prog)s T1.lmk B1.lmk [T2.lmk] [B2.lmk] .. .. [Tn.lmk] [Bn.lmk] output=outputsaltthicknessfile.lmk"


class UsageError(ValueError):
    """Raised when the command line arguments are unusable."""


def validate_arguments(files: Sequence[str], params: ThicknessParameters) -> Tuple[List[Path], Path]:
    """Split positional arguments into horizon files and the output path."""
    if not files:
        raise UsageError("Need horizon names...")
    if len(files) == 1:
        raise UsageError("Need at least two horizon names...")

    suffix = params.horizon_suffix
    horizons = list(files[:-1])
    for name in horizons:
        if len(name) <= len(suffix) or not name.endswith(suffix):
            raise UsageError(
                f"Please input {suffix.lstrip('.')} files...file \"{name}\" is not a valid file or doesn't end in {suffix.lstrip('.')}"
            )
        if not Path(name).is_file():
            raise UsageError(f"Please input valid {suffix.lstrip('.')} files...file \"{name}\" does not exist")

    output = files[-1]
    prefix = params.output_prefix
    if not output.startswith(prefix) or len(output) <= len(prefix):
        raise UsageError("Please specify output file...")

    if len(horizons) % 2:
        raise UsageError("Need even number of horizon names...")

    return [Path(name) for name in horizons], Path(output[len(prefix):])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salt-thickness",
        usage=USAGE,
        description="Compute net salt thickness per (iline, xline) from top/bottom horizon pick files.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Alternating top and bottom horizon files followed by output=FILE",
    )
    parser.add_argument(
        "--skip-zero",
        action="store_true",
        help="Do not write locations whose net thickness is zero",
    )
    parser.add_argument(
        "--map",
        type=Path,
        default=None,
        help="Also render a PNG thickness map to this path",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")

    params = default_parameters()
    params.skip_zero_thickness = args.skip_zero
    try:
        horizons, output_path = validate_arguments(args.files, params)
    except UsageError as exc:
        logger.error("%s", exc)
        parser.print_usage(sys.stderr)
        logger.error("Arguments bad. Exiting...")
        return 1

    logger.info("Arguments good... working on calculating salt thickness")
    try:
        result = compute_salt_thickness(horizons, params, logger=logger.info)
        logger.info("Writing salt thickness file \"%s\"...", output_path)
        written = write_thickness_file(result.thickness, output_path, params)
    except (SaltThicknessError, OSError) as exc:
        logger.error("%s", exc)
        logger.error("Exiting.")
        return 1

    logger.info(
        "done: %d locations written, %d dropped without a valid horizon pair",
        written,
        result.summary.locations_dropped,
    )

    if args.map is not None:
        if result.thickness.empty:
            logger.warning("No thickness values to map; skipping %s", args.map)
        else:
            from .maps import figure_png_bytes, render_thickness_map

            args.map.write_bytes(figure_png_bytes(render_thickness_map(result.thickness)))
            logger.info("Thickness map written to %s", args.map)
    return 0


def run_app() -> None:
    """Launch the Streamlit application."""
    try:
        from streamlit.web import bootstrap
    except ImportError:  # pragma: no cover
        raise SystemExit("Streamlit is required to run the SaltThickness app.")

    script_path = Path(__file__).with_name("streamlit_app.py")
    bootstrap.run(str(script_path), False, [], {})


if __name__ == "__main__":
    sys.exit(main())
