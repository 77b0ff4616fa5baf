"""Command-line entry point: plot a GPS altitude CSV as a filled raster."""

import argparse
import logging
import sys
from typing import List, Optional

import structlog
from pydantic import ValidationError

from .config import Settings, settings
from .core.convergence import FillStatus
from .core.exceptions import ElevationError
from .pipeline import raster_from_csv
from .render.plotter import render_raster

logger = structlog.get_logger()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(config: Settings) -> None:
    """Route structlog through stdlib logging at the configured level."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=config.log_level)

    renderer = (
        structlog.processors.JSONRenderer()
        if config.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plot sparse GPS altitude samples as a gap-filled elevation raster"
    )
    parser.add_argument("csv_path", help="CSV with a header row and lat, lon, alt columns")
    parser.add_argument("--output", help=f"PNG output path (default: {settings.output_path})")
    parser.add_argument("--width", type=int, help="Image width in pixels")
    parser.add_argument("--padding", type=int, help="Blank border in pixels")
    parser.add_argument(
        "--propagation",
        choices=["in_place", "double_buffer"],
        help="Visibility of same-sweep writes during the fill",
    )
    parser.add_argument(
        "--on-out-of-bounds",
        choices=["raise", "skip"],
        help="Handling of samples outside the grid",
    )
    parser.add_argument("--max-sweeps", type=int, help="Cap on fill sweeps")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {
        "output_path": args.output,
        "sketch_width": args.width,
        "sketch_padding": args.padding,
        "propagation": args.propagation,
        "on_out_of_bounds": args.on_out_of_bounds,
        "max_sweeps": args.max_sweeps,
        "log_level": args.log_level,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return Settings(**{**settings.model_dump(), **overrides})


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = settings_from_args(args)
    except ValidationError as e:
        parser.error(str(e))
    configure_logging(config)

    try:
        raster, layout = raster_from_csv(args.csv_path, config)
    except (ElevationError, OSError) as e:
        logger.error("Could not build elevation raster", path=args.csv_path, error=str(e))
        return 1

    status = raster.fill.status
    if status is FillStatus.UNFILLED:
        logger.error("Could not interpolate any altitude", path=args.csv_path)
        return 1

    try:
        render_raster(
            raster,
            config.output_path,
            layout=layout,
            dpi=config.render_dpi,
            no_data_color=config.no_data_color,
        )
    except OSError as e:
        logger.error("Could not write image", path=config.output_path, error=str(e))
        return 1

    if status is FillStatus.PARTIAL:
        logger.warning(
            "Partially interpolated; unknown cells drawn in the no-data color",
            unfilled=raster.fill.unfilled_count,
            sweeps=raster.fill.sweeps,
        )
    else:
        logger.info("Fully interpolated", sweeps=raster.fill.sweeps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
