"""
Input collaborators: CSV ingestion and coordinate projection.
"""

from .csv_loader import load_csv, clean_csv_data, csv_to_points, load_points
from .projection import (
    SketchLayout, compute_layout, data_proportion, m_per_deg_lat, m_per_deg_lon,
    project_wgs84_to_meters, round_samples, scale_map_data
)

__all__ = ['load_csv', 'clean_csv_data', 'csv_to_points', 'load_points',
           'SketchLayout', 'compute_layout', 'data_proportion', 'm_per_deg_lat', 'm_per_deg_lon',
           'project_wgs84_to_meters', 'round_samples', 'scale_map_data']
