"""
Core rasterization and gap-fill engine.
"""

from .exceptions import (
    ElevationError, InvalidDimensionsError, OutOfBoundsError, EmptyGridError, CsvFormatError
)
from .grid_store import (
    SENTINEL, ElevationGrid, Extrema, create_grid, grid_index, get_value, set_value,
    compute_extrema, unknown_positions
)
from .rasterizer import Sample, OutOfBoundsPolicy, scatter
from .neighborhood import subgrid, subgrid_at_index
from .interpolator import interpolate, interpolate_at
from .convergence import FillOptions, FillResult, FillStatus, Propagation, fill

__all__ = ['ElevationError', 'InvalidDimensionsError', 'OutOfBoundsError', 'EmptyGridError',
           'CsvFormatError', 'SENTINEL', 'ElevationGrid', 'Extrema', 'create_grid', 'grid_index',
           'get_value', 'set_value', 'compute_extrema', 'unknown_positions',
           'Sample', 'OutOfBoundsPolicy', 'scatter', 'subgrid', 'subgrid_at_index',
           'interpolate', 'interpolate_at',
           'FillOptions', 'FillResult', 'FillStatus', 'Propagation', 'fill']
