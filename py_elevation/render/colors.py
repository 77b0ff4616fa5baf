"""
Altitude to color mapping.

Colors are HSB with hue in degrees (0-360) and saturation/brightness in
percent (0-100). Low altitudes are blue, high altitudes red.
"""

from typing import Optional, Tuple

import numpy as np
from matplotlib.colors import hsv_to_rgb

COLORS = {
    "black": (0.0, 0.0, 0.0),
    "red": (0.0, 100.0, 100.0),
    "blue": (240.0, 100.0, 100.0),
}

HUE_LOW = COLORS["blue"][0]
HUE_HIGH = COLORS["red"][0]


def z_height_to_hue(
    z: Optional[float], z_min: float, z_max: float
) -> Tuple[float, float, float]:
    """
    Rainbow color for altitude ``z`` relative to ``[z_min, z_max]``.

    Unknown or out-of-range altitudes map to black.
    """
    if z is None or not z_min <= z <= z_max:
        return COLORS["black"]
    if z_max == z_min:
        return COLORS["blue"]

    hue = HUE_LOW + (z - z_min) / (z_max - z_min) * (HUE_HIGH - HUE_LOW)
    return (hue, 100.0, 100.0)


def hue_array(values: np.ndarray, z_min: float, z_max: float) -> np.ndarray:
    """Vectorized hue in degrees for an array of altitudes."""
    if z_max == z_min:
        return np.full(values.shape, HUE_LOW)
    return HUE_LOW + (values - z_min) / (z_max - z_min) * (HUE_HIGH - HUE_LOW)


def hsb_to_rgb(hsb: np.ndarray) -> np.ndarray:
    """Convert HSB(360, 100, 100) triples to RGB floats in [0, 1]."""
    hsv = np.asarray(hsb, dtype=np.float64) / np.array([360.0, 100.0, 100.0])
    return hsv_to_rgb(np.clip(hsv, 0.0, 1.0))
