"""
3x3 neighborhood sampling around a grid cell.

A neighborhood is the 9 cells ``{x-1, x, x+1} x {y-1, y, y+1}`` listed with
x as the outer loop:

    0: (x-1, y-1)   3: (x, y-1)   6: (x+1, y-1)
    1: (x-1, y)     4: (x, y)     7: (x+1, y)
    2: (x-1, y+1)   5: (x, y+1)   8: (x+1, y+1)

Positions outside the grid read as unknown, so edge cells see a halo of
unknown neighbors instead of wrapping around.
"""

from typing import List, Optional

from .exceptions import InvalidDimensionsError, OutOfBoundsError
from .grid_store import SENTINEL, ElevationGrid, get_value, grid_index

Neighborhood = List[Optional[float]]

NEIGHBOR_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)]
CENTER = 4
CORNER_POSITIONS = (0, 2, 6, 8)
LATERAL_POSITIONS = (1, 3, 5, 7)


def subgrid(grid: ElevationGrid, n: int, m: int, x: int, y: int) -> Neighborhood:
    """
    Snapshot the 3x3 neighborhood centered on ``(x, y)``.

    Args:
        grid: Grid to read
        n: Grid width
        m: Grid height
        x, y: Center cell

    Returns:
        9 values, ``SENTINEL`` for unknown or out-of-grid positions
    """
    cells = []
    for dx, dy in NEIGHBOR_OFFSETS:
        px, py = x + dx, y + dy
        if 0 <= px < n and 0 <= py < m and grid_index(n, px, py) < len(grid):
            cells.append(get_value(grid, n, px, py))
        else:
            cells.append(SENTINEL)
    return cells


def subgrid_at_index(grid: ElevationGrid, n: int, i: int) -> Neighborhood:
    """Neighborhood of the cell at linear index ``i``."""
    if n <= 0:
        raise InvalidDimensionsError(f"Grid width must be positive, got {n}")
    if not 0 <= i < len(grid):
        raise OutOfBoundsError(f"Index {i} is outside a grid of {len(grid)} cells")

    m = -(-len(grid) // n)
    return subgrid(grid, n, m, i % n, i // n)
