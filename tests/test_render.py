"""Tests for color mapping and PNG rendering."""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest
from py_elevation.core.convergence import FillStatus
from py_elevation.data.projection import SketchLayout
from py_elevation.pipeline import build_raster
from py_elevation.render.colors import COLORS, hsb_to_rgb, hue_array, z_height_to_hue
from py_elevation.render.plotter import raster_to_rgb, render_raster


class TestColors:
    """Test altitude to hue mapping."""

    def test_range_ends(self):
        """Test that the minimum is blue and the maximum red."""
        assert z_height_to_hue(10.0, 10.0, 20.0) == COLORS["blue"]
        assert z_height_to_hue(20.0, 10.0, 20.0) == COLORS["red"]
        assert z_height_to_hue(15.0, 10.0, 20.0) == (120.0, 100.0, 100.0)

    def test_unknown_and_out_of_range_are_black(self):
        """Test the no-data color."""
        assert z_height_to_hue(None, 0.0, 1.0) == COLORS["black"]
        assert z_height_to_hue(-0.1, 0.0, 1.0) == COLORS["black"]
        assert z_height_to_hue(1.1, 0.0, 1.0) == COLORS["black"]

    def test_flat_range(self):
        """Test that a single altitude maps to blue."""
        assert z_height_to_hue(5.0, 5.0, 5.0) == COLORS["blue"]
        np.testing.assert_array_equal(hue_array(np.array([5.0, 5.0]), 5.0, 5.0), [240.0, 240.0])

    def test_hue_array_matches_scalar(self):
        """Test that the vectorized hue agrees with the scalar mapping."""
        zs = np.linspace(-3.0, 9.0, 7)
        expected = [z_height_to_hue(z, -3.0, 9.0)[0] for z in zs]

        np.testing.assert_allclose(hue_array(zs, -3.0, 9.0), expected)

    def test_hsb_to_rgb(self):
        """Test primary colors."""
        np.testing.assert_allclose(hsb_to_rgb(np.array(COLORS["red"])), [1.0, 0.0, 0.0])
        np.testing.assert_allclose(hsb_to_rgb(np.array(COLORS["blue"])), [0.0, 0.0, 1.0])
        np.testing.assert_allclose(hsb_to_rgb(np.array(COLORS["black"])), [0.0, 0.0, 0.0])


class TestRasterToRgb:
    """Test raster coloring."""

    def test_filled_raster(self):
        """Test that extrema map to blue and red."""
        raster = build_raster([(0, 0, 0.0), (1, 0, 10.0), (0, 1, 5.0), (1, 1, 5.0)], 2, 2)
        image = raster_to_rgb(raster)

        assert image.shape == (2, 2, 3)
        np.testing.assert_allclose(image[0, 0], [0.0, 0.0, 1.0])
        np.testing.assert_allclose(image[0, 1], [1.0, 0.0, 0.0])

    def test_unknown_cells_use_no_data_color(self):
        """Test that unfilled cells get the no-data color."""
        raster = build_raster([(2, 2, 1.0)], 5, 5)
        image = raster_to_rgb(raster, no_data_color=(0.5, 0.5, 0.5))

        assert raster.fill.status is FillStatus.PARTIAL
        np.testing.assert_allclose(image[0, 0], [0.5, 0.5, 0.5])
        np.testing.assert_allclose(image[2, 2], [0.0, 0.0, 1.0])

    def test_empty_raster(self):
        """Test that an empty raster renders entirely as no-data."""
        raster = build_raster([], 3, 2)
        image = raster_to_rgb(raster, no_data_color=(0.2, 0.3, 0.4))

        assert raster.extrema is None
        assert np.all(image == np.array([0.2, 0.3, 0.4]))


class TestRenderRaster:
    """Test PNG output."""

    def test_png_written_with_layout_size(self, tmp_path):
        """Test that the PNG has the sketch size."""
        raster = build_raster([(0, 0, 1.0), (3, 0, 2.0), (0, 2, 3.0), (3, 2, 4.0), (1, 1, 2.5)], 4, 3)
        layout = SketchLayout(width=8, height=7, padding=2)

        path = render_raster(raster, tmp_path / "plot.png", layout=layout, dpi=10)

        assert path.exists()
        assert plt.imread(path).shape[:2] == (7, 8)

    def test_partial_raster_renders(self, tmp_path):
        """Test that a partial fill still renders."""
        raster = build_raster([(1, 1, 7.0)], 4, 4)
        path = render_raster(raster, tmp_path / "partial.png", dpi=10)

        assert raster.fill.status is FillStatus.PARTIAL
        assert path.exists()
