"""Tests for WGS84 projection and sketch layout."""

import numpy as np
import pytest
from py_elevation.data.projection import (
    SketchLayout, compute_layout, data_proportion, m_per_deg_lat, m_per_deg_lon,
    project_wgs84_to_meters, round_samples, scale_map_data
)
from py_elevation.core.exceptions import InvalidDimensionsError
from py_elevation.core.rasterizer import Sample


@pytest.fixture
def gps_points():
    """A few points around Dayton, Ohio."""
    return np.array([
        [39.661031139, -84.025190726, 276.5],
        [39.662031139, -84.023190726, 280.0],
        [39.660531139, -84.024190726, 271.25],
        [39.663031139, -84.021190726, 290.0],
    ])


class TestMetersPerDegree:
    """Test WGS84 meters-per-degree series."""

    def test_equator(self):
        """Test known values at the equator."""
        assert m_per_deg_lat(0.0) == pytest.approx(110574.3, abs=1.0)
        assert m_per_deg_lon(0.0) == pytest.approx(111319.5, abs=1.0)

    def test_mid_latitude(self):
        """Test known values at 45 degrees."""
        assert m_per_deg_lat(45.0) == pytest.approx(111131.7, abs=1.0)
        assert m_per_deg_lon(45.0) == pytest.approx(78846.8, abs=1.0)

    def test_longitude_shrinks_toward_pole(self):
        """Test that a degree of longitude shrinks with latitude."""
        assert m_per_deg_lon(60.0) < m_per_deg_lon(30.0) < m_per_deg_lon(0.0)


class TestProjection:
    """Test projection to meter offsets."""

    def test_origin_is_south_west(self, gps_points):
        """Test that offsets start at zero and altitude is unchanged."""
        projected = project_wgs84_to_meters(gps_points)

        assert projected[:, 0].min() == 0.0
        assert projected[:, 1].min() == 0.0
        np.testing.assert_array_equal(projected[:, 2], gps_points[:, 2])

    def test_offsets_in_meters(self, gps_points):
        """Test that 0.0025 degrees of latitude is a few hundred meters."""
        projected = project_wgs84_to_meters(gps_points)

        mid = (gps_points[:, 0].min() + gps_points[:, 0].max()) / 2
        assert projected[:, 0].max() == pytest.approx(0.0025 * m_per_deg_lat(mid))
        assert 250 < projected[:, 0].max() < 300

    def test_data_proportion(self, gps_points):
        """Test north-south over east-west extent."""
        projected = project_wgs84_to_meters(gps_points)
        expected = np.ptp(projected[:, 0]) / np.ptp(projected[:, 1])

        assert data_proportion(projected) == pytest.approx(expected)

    def test_data_proportion_no_width(self):
        """Test that a north-south line has no proportion."""
        points = np.array([[0.0, 5.0, 1.0], [10.0, 5.0, 2.0]])

        with pytest.raises(InvalidDimensionsError):
            data_proportion(points)


class TestLayout:
    """Test sketch sizing."""

    def test_layout_matches_data_aspect(self):
        """Test that height follows the data proportion."""
        points = np.array([[0.0, 0.0, 1.0], [50.0, 100.0, 2.0]])
        layout = compute_layout(points, 700, 10)

        assert layout == SketchLayout(width=700, height=350, padding=10)
        assert layout.plot_width == 680
        assert layout.plot_height == 330

    def test_layout_too_flat(self):
        """Test that a layout with no plot area is rejected."""
        points = np.array([[0.0, 0.0, 1.0], [1.0, 1000.0, 2.0]])

        with pytest.raises(InvalidDimensionsError):
            compute_layout(points, 700, 10)


class TestScaling:
    """Test scaling into pixel space and rounding."""

    def test_scale_bounds_and_orientation(self):
        """Test that east maps to x and north maps to decreasing y."""
        points = np.array([
            [0.0, 0.0, 5.0],     # south-west
            [100.0, 200.0, 6.0], # north-east
            [50.0, 100.0, 7.0],
        ])
        scaled = scale_map_data(99, 49, points)

        np.testing.assert_allclose(scaled[0], [0.0, 49.0, 5.0])
        np.testing.assert_allclose(scaled[1], [99.0, 0.0, 6.0])
        np.testing.assert_allclose(scaled[2], [49.5, 24.5, 7.0])

    def test_flat_axis_maps_to_zero(self):
        """Test that an axis with no extent maps to 0."""
        points = np.array([[3.0, 0.0, 1.0], [3.0, 10.0, 2.0]])
        scaled = scale_map_data(9, 9, points)

        np.testing.assert_array_equal(scaled[:, 1], [0.0, 0.0])

    def test_round_half_up(self):
        """Test rounding to integer samples."""
        points = np.array([[0.5, 1.49, 3.0], [2.5, 0.51, -1.0]])
        samples = round_samples(points)

        assert samples == [Sample(1, 1, 3.0), Sample(3, 1, -1.0)]
        assert all(isinstance(s.x, int) and isinstance(s.y, int) for s in samples)
