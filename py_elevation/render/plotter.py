"""
PNG rendering of a filled elevation raster.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
import structlog

from ..data.projection import SketchLayout
from ..pipeline import ElevationRaster
from .colors import COLORS, hsb_to_rgb, hue_array

logger = structlog.get_logger()

BACKGROUND = hsb_to_rgb(np.array(COLORS["black"]))


def raster_to_rgb(
    raster: ElevationRaster, no_data_color: Sequence[float] = (0.0, 0.0, 0.0)
) -> np.ndarray:
    """
    Color every cell of the raster.

    Returns:
        ``(m, n, 3)`` RGB float image; unknown cells get ``no_data_color``
    """
    values = raster.grid.values.reshape(raster.m, raster.n)
    known = raster.grid.known.reshape(raster.m, raster.n)

    image = np.empty((raster.m, raster.n, 3), dtype=np.float64)
    image[:] = no_data_color
    if raster.extrema is None:
        return image

    hsb = np.stack(
        [
            hue_array(values, raster.extrema.min, raster.extrema.max),
            np.full(values.shape, 100.0),
            np.full(values.shape, 100.0),
        ],
        axis=-1,
    )
    image[known] = hsb_to_rgb(hsb)[known]
    return image


def render_raster(
    raster: ElevationRaster,
    output_path: Union[str, Path],
    layout: Optional[SketchLayout] = None,
    dpi: int = 100,
    no_data_color: Sequence[float] = (0.0, 0.0, 0.0),
) -> Path:
    """
    Render the raster to a PNG file.

    Args:
        raster: Filled (or partially filled) raster
        output_path: Destination PNG path
        layout: Sketch layout; the raster is drawn inside its padding. When
            omitted the image is exactly the raster size.
        dpi: Output resolution
        no_data_color: RGB color for cells left unknown

    Returns:
        Path of the written file
    """
    image = raster_to_rgb(raster, no_data_color)

    if layout is not None:
        canvas = np.empty((layout.height, layout.width, 3), dtype=np.float64)
        canvas[:] = BACKGROUND
        pad = layout.padding
        canvas[pad:pad + raster.m, pad:pad + raster.n] = image
        image = canvas

    height, width = image.shape[:2]
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    try:
        ax = fig.add_axes([0, 0, 1, 1])
        ax.imshow(image, interpolation="nearest")
        ax.set_axis_off()

        output_path = Path(output_path)
        fig.savefig(output_path, dpi=dpi)
    finally:
        plt.close(fig)

    logger.info(
        "Raster rendered",
        path=str(output_path),
        width=width,
        height=height,
        status=raster.fill.status.value,
        unfilled=raster.fill.unfilled_count,
    )
    return output_path
