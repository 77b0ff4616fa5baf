"""
Flat altitude grid storage.

A grid of width ``n`` and height ``m`` is stored row-major in two parallel
flat buffers: ``values`` holds altitudes and ``known`` marks which cells hold
one. Cell ``(x, y)`` lives at index ``x + n * y``. The grid carries no shape,
so ``n`` travels alongside it wherever it is used.

Unknown cells are reported as ``SENTINEL`` (``None``) at the API boundary;
every float, including zero and negative altitudes, is a valid value.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .exceptions import EmptyGridError, InvalidDimensionsError, OutOfBoundsError

SENTINEL = None


class Extrema(NamedTuple):
    """Smallest and largest known altitude in a grid."""

    min: float
    max: float


@dataclass
class ElevationGrid:
    """Flat altitude buffer with a parallel known-cell mask."""

    values: np.ndarray  # float64 altitudes, meaningless where known is False
    known: np.ndarray   # bool, True once a cell holds an altitude

    def __len__(self) -> int:
        return len(self.values)

    @property
    def size(self) -> int:
        return len(self.values)

    @classmethod
    def from_values(cls, cells: Sequence[Optional[float]]) -> "ElevationGrid":
        """Build a grid from a flat sequence where ``None`` marks unknown cells."""
        known = np.array([c is not SENTINEL for c in cells], dtype=bool)
        values = np.array(
            [0.0 if c is SENTINEL else float(c) for c in cells], dtype=np.float64
        )
        if not np.isfinite(values).all():
            raise ValueError("Known cells must hold finite altitudes")
        return cls(values=values, known=known)

    def to_list(self) -> List[Optional[float]]:
        return [
            float(v) if k else SENTINEL for v, k in zip(self.values, self.known)
        ]

    def copy(self) -> "ElevationGrid":
        return ElevationGrid(values=self.values.copy(), known=self.known.copy())

    def known_count(self) -> int:
        return int(np.count_nonzero(self.known))

    def unknown_count(self) -> int:
        return self.size - self.known_count()


def create_grid(n: int, m: int) -> ElevationGrid:
    """
    Allocate an ``n`` by ``m`` grid with every cell unknown.

    Args:
        n: Row width (number of columns)
        m: Number of rows

    Returns:
        ElevationGrid of ``n * m`` unknown cells

    Raises:
        InvalidDimensionsError: If either dimension is not positive
    """
    if n <= 0 or m <= 0:
        raise InvalidDimensionsError(f"Grid dimensions must be positive, got {n}x{m}")

    return ElevationGrid(
        values=np.zeros(n * m, dtype=np.float64),
        known=np.zeros(n * m, dtype=bool),
    )


def grid_index(n: int, x: int, y: int) -> int:
    """Linear index of ``(x, y)`` in a grid of width ``n``. No bounds check."""
    return x + n * y


def grid_height(grid: ElevationGrid, n: int) -> int:
    """Number of rows of ``grid`` when read with width ``n``."""
    if n <= 0:
        raise InvalidDimensionsError(f"Grid width must be positive, got {n}")
    if len(grid) % n != 0:
        raise InvalidDimensionsError(
            f"Grid of {len(grid)} cells is not a whole number of rows of width {n}"
        )
    return len(grid) // n


def _checked_index(grid: ElevationGrid, n: int, x: int, y: int) -> int:
    if not 0 <= x < n:
        raise OutOfBoundsError(f"x={x} is outside [0, {n})")

    idx = grid_index(n, x, y)
    if not 0 <= idx < len(grid):
        raise OutOfBoundsError(
            f"({x}, {y}) maps to index {idx}, outside a grid of {len(grid)} cells"
        )
    return idx


def get_value(grid: ElevationGrid, n: int, x: int, y: int) -> Optional[float]:
    """Altitude at ``(x, y)``, or ``SENTINEL`` if the cell is unknown."""
    idx = _checked_index(grid, n, x, y)
    if not grid.known[idx]:
        return SENTINEL
    return float(grid.values[idx])


def set_value(
    grid: ElevationGrid, n: int, x: int, y: int, value: float
) -> ElevationGrid:
    """
    Store ``value`` at ``(x, y)``.

    The grid is updated in place and returned so calls can be chained. Only
    the addressed cell changes.

    Raises:
        OutOfBoundsError: If ``(x, y)`` is outside the grid
        ValueError: If ``value`` is the sentinel (cells are never reset) or
            not a finite number
    """
    if value is SENTINEL:
        raise ValueError("Cannot reset a cell to unknown")
    if not np.isfinite(value):
        raise ValueError(f"Altitude must be finite, got {value}")

    idx = _checked_index(grid, n, x, y)
    grid.values[idx] = value
    grid.known[idx] = True
    return grid


def unknown_positions(grid: ElevationGrid, n: int) -> List[Tuple[int, int]]:
    """``(x, y)`` of every unknown cell, in linear index order."""
    return [(int(i % n), int(i // n)) for i in np.flatnonzero(~grid.known)]


def compute_extrema(grid: ElevationGrid) -> Extrema:
    """
    Smallest and largest known altitude.

    Raises:
        EmptyGridError: If no cell of the grid is known
    """
    if not grid.known.any():
        raise EmptyGridError("Extrema are undefined for a grid with no known cells")

    known_values = grid.values[grid.known]
    return Extrema(min=float(known_values.min()), max=float(known_values.max()))
