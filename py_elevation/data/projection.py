"""
Projection of WGS84 points into sketch pixel coordinates.

Points arrive as ``(latitude, longitude, altitude)`` rows in decimal degrees
and meters. They are turned into meter offsets from the south-west corner of
the data, fitted into the plot area of the sketch, and rounded to integer
pixel samples for the rasterizer.
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import List

import numpy as np

from ..core.exceptions import InvalidDimensionsError
from ..core.rasterizer import Sample


@lru_cache(maxsize=None)
def m_per_deg_lat(phi: float) -> float:
    """
    Meters in one degree of latitude at latitude ``phi`` (degrees) on the
    WGS84 spheroid. Accurate to about one centimeter.
    """
    phi = math.radians(phi)
    return (
        111132.92
        - 559.82 * math.cos(2 * phi)
        + 1.175 * math.cos(4 * phi)
        - 0.0023 * math.cos(6 * phi)
    )


@lru_cache(maxsize=None)
def m_per_deg_lon(phi: float) -> float:
    """
    Meters in one degree of longitude at latitude ``phi`` (degrees) on the
    WGS84 spheroid. Accurate to about one centimeter.
    """
    phi = math.radians(phi)
    return (
        111412.84 * math.cos(phi)
        - 93.5 * math.cos(3 * phi)
        + 0.118 * math.cos(5 * phi)
    )


def project_wgs84_to_meters(points: np.ndarray) -> np.ndarray:
    """
    Convert lat/lon degrees to meter offsets.

    Args:
        points: ``(k, 3)`` array of latitude, longitude, altitude

    Returns:
        ``(k, 3)`` array of north offset, east offset (meters from the
        south-most and west-most point), altitude unchanged. Scale factors
        are taken at the middle latitude of the data.
    """
    points = np.asarray(points, dtype=np.float64)
    lat, lon, alt = points[:, 0], points[:, 1], points[:, 2]

    mid_lat = float((lat.min() + lat.max()) / 2)

    north = m_per_deg_lat(mid_lat) * (lat - lat.min())
    east = m_per_deg_lon(mid_lat) * (lon - lon.min())
    return np.column_stack([north, east, alt])


def data_proportion(points_m: np.ndarray) -> float:
    """North-south extent divided by east-west extent."""
    north_span = float(np.ptp(points_m[:, 0]))
    east_span = float(np.ptp(points_m[:, 1]))
    if east_span == 0:
        raise InvalidDimensionsError("Data has no east-west extent")
    return north_span / east_span


@dataclass
class SketchLayout:
    """Image size and the padded plot area inside it."""

    width: int
    height: int
    padding: int

    @property
    def plot_width(self) -> int:
        return self.width - 2 * self.padding

    @property
    def plot_height(self) -> int:
        return self.height - 2 * self.padding


def compute_layout(points_m: np.ndarray, sketch_width: int, padding: int) -> SketchLayout:
    """
    Size the sketch so its aspect ratio matches the data.

    Raises:
        InvalidDimensionsError: If the padded plot area would be empty
    """
    height = int(round(sketch_width * data_proportion(points_m)))
    layout = SketchLayout(width=sketch_width, height=height, padding=padding)

    if layout.plot_width <= 0 or layout.plot_height <= 0:
        raise InvalidDimensionsError(
            f"Plot area {layout.plot_width}x{layout.plot_height} is empty "
            f"for a {sketch_width}x{height} sketch with padding {padding}"
        )
    return layout


def _map_range(values: np.ndarray, start: float, stop: float) -> np.ndarray:
    lo, hi = values.min(), values.max()
    if hi == lo:
        return np.zeros_like(values)
    return start + (values - lo) / (hi - lo) * (stop - start)


def scale_map_data(x_max: float, y_max: float, points_m: np.ndarray) -> np.ndarray:
    """
    Fit meter offsets into ``[0, x_max] x [0, y_max]`` pixel space.

    East maps to x. North maps to y reversed, so north ends up at the top of
    the image.
    """
    points_m = np.asarray(points_m, dtype=np.float64)
    x = _map_range(points_m[:, 1], 0.0, x_max)
    y = _map_range(points_m[:, 0], y_max, 0.0)
    return np.column_stack([x, y, points_m[:, 2]])


def round_samples(points: np.ndarray) -> List[Sample]:
    """Round pixel coordinates half-up to integers."""
    xs = np.floor(points[:, 0] + 0.5).astype(int)
    ys = np.floor(points[:, 1] + 0.5).astype(int)
    return [Sample(int(x), int(y), float(z)) for x, y, z in zip(xs, ys, points[:, 2])]
