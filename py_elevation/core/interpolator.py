"""
Distance-weighted gap filling for a single cell.

An unknown cell takes the weighted mean of its known neighbors. Diagonal
neighbors sit sqrt(2) cells away and get weight ~1/sqrt(2); edge-adjacent
neighbors get weight 1. A cell needs at least ``MIN_KNOWN_NEIGHBORS`` known
neighbors before it is filled; otherwise it waits for a later sweep.
"""

from typing import Optional, Sequence

from .grid_store import SENTINEL, ElevationGrid
from .neighborhood import CENTER, CORNER_POSITIONS, LATERAL_POSITIONS, subgrid_at_index

CORNER_WEIGHT = 0.70711356
LATERAL_WEIGHT = 1.0
MIN_KNOWN_NEIGHBORS = 3


def interpolate(neighborhood: Sequence[Optional[float]]) -> Optional[float]:
    """
    Value for the center of a 3x3 neighborhood.

    Args:
        neighborhood: 9 values as produced by ``subgrid``

    Returns:
        The center value if already known, ``SENTINEL`` if fewer than
        ``MIN_KNOWN_NEIGHBORS`` positions are known, otherwise the weighted
        mean of the known corner and lateral values.
    """
    if len(neighborhood) != 9:
        raise ValueError(f"Neighborhood must have 9 cells, got {len(neighborhood)}")

    center = neighborhood[CENTER]
    if center is not SENTINEL:
        return center

    known_count = sum(1 for v in neighborhood if v is not SENTINEL)
    if known_count < MIN_KNOWN_NEIGHBORS:
        return SENTINEL

    corners = [neighborhood[i] for i in CORNER_POSITIONS if neighborhood[i] is not SENTINEL]
    laterals = [neighborhood[i] for i in LATERAL_POSITIONS if neighborhood[i] is not SENTINEL]

    weight_sum = CORNER_WEIGHT * len(corners) + LATERAL_WEIGHT * len(laterals)
    assert weight_sum > 0, "known neighbor threshold guarantees a positive weight"

    return (CORNER_WEIGHT * sum(corners) + LATERAL_WEIGHT * sum(laterals)) / weight_sum


def interpolate_at(grid: ElevationGrid, n: int, i: int) -> Optional[float]:
    """Interpolated value for the cell at linear index ``i``."""
    return interpolate(subgrid_at_index(grid, n, i))
