"""
End-to-end raster construction.

The result of a run is an explicit ``ElevationRaster`` value handed to the
renderer; nothing is shared through module state.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

import structlog

from .config import Settings, settings as default_settings
from .core.convergence import FillOptions, FillResult, FillStatus, fill
from .core.grid_store import ElevationGrid, Extrema, compute_extrema, create_grid
from .core.rasterizer import OutOfBoundsPolicy, Sample, scatter
from .data.csv_loader import load_points
from .data.projection import (
    SketchLayout,
    compute_layout,
    project_wgs84_to_meters,
    round_samples,
    scale_map_data,
)

logger = structlog.get_logger()


@dataclass
class ElevationRaster:
    """A rasterized, gap-filled altitude grid ready for rendering."""

    grid: ElevationGrid
    n: int
    m: int
    fill: FillResult
    extrema: Optional[Extrema]  # None when no cell is known


def build_raster(
    samples: Iterable[Union[Sample, Tuple[int, int, float]]],
    n: int,
    m: int,
    options: Optional[FillOptions] = None,
    on_out_of_bounds: Union[OutOfBoundsPolicy, str] = OutOfBoundsPolicy.RAISE,
) -> ElevationRaster:
    """
    Scatter samples into a fresh ``n`` by ``m`` grid and fill the gaps.

    Args:
        samples: ``(x, y, z)`` samples in grid coordinates
        n: Grid width
        m: Grid height
        options: Fill options
        on_out_of_bounds: Scatter policy for samples outside the grid

    Returns:
        ElevationRaster with the fill result and altitude extrema
    """
    grid = create_grid(n, m)
    scatter(grid, n, samples, on_out_of_bounds)
    result = fill(grid, n, options)

    extrema = None if result.status is FillStatus.UNFILLED else compute_extrema(grid)

    return ElevationRaster(grid=grid, n=n, m=m, fill=result, extrema=extrema)


def fill_options_from_settings(config: Settings) -> FillOptions:
    return FillOptions(propagation=config.propagation, max_sweeps=config.max_sweeps)


def raster_from_csv(
    csv_path: Union[str, Path], config: Optional[Settings] = None
) -> Tuple[ElevationRaster, SketchLayout]:
    """
    Load a GPS altitude CSV and build its raster.

    Returns:
        The raster and the sketch layout it was sized for
    """
    config = config or default_settings

    points = load_points(csv_path)
    points_m = project_wgs84_to_meters(points)
    layout = compute_layout(points_m, config.sketch_width, config.sketch_padding)

    n, m = layout.plot_width, layout.plot_height
    scaled = scale_map_data(n - 1, m - 1, points_m)
    samples = round_samples(scaled)

    logger.info("Rasterizing samples", samples=len(samples), width=n, height=m)

    raster = build_raster(
        samples,
        n,
        m,
        options=fill_options_from_settings(config),
        on_out_of_bounds=config.on_out_of_bounds,
    )
    return raster, layout
