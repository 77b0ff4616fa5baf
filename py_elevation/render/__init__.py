"""
Altitude color mapping and PNG rendering.
"""

from .colors import COLORS, z_height_to_hue, hue_array, hsb_to_rgb
from .plotter import raster_to_rgb, render_raster

__all__ = ['COLORS', 'z_height_to_hue', 'hue_array', 'hsb_to_rgb', 'raster_to_rgb', 'render_raster']
