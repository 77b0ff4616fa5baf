"""
Iterative gap filling of a whole grid.

The driver sweeps the grid in linear index order and interpolates every
unknown cell, repeating until no unknown cell remains. Two propagation modes
are supported:

- ``in_place``: a value written during a sweep is visible to cells visited
  later in the same sweep. Fills flow toward increasing index within a sweep
  and converge in fewer sweeps, but the result depends on sweep order.
- ``double_buffer``: every sweep reads a snapshot taken before the sweep, so
  the result does not depend on visiting order.

Cells that never gather enough known neighbors (isolated samples, regions
far from any data) would stall the loop forever, so the driver stops as soon
as a sweep fills nothing and reports a partial result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np
import structlog

from .grid_store import SENTINEL, ElevationGrid, grid_height, set_value, unknown_positions
from .interpolator import CORNER_WEIGHT, LATERAL_WEIGHT, MIN_KNOWN_NEIGHBORS, interpolate
from .neighborhood import CORNER_POSITIONS, LATERAL_POSITIONS, NEIGHBOR_OFFSETS, subgrid_at_index

logger = structlog.get_logger()


class Propagation(str, Enum):
    """Visibility of same-sweep writes."""

    IN_PLACE = "in_place"
    DOUBLE_BUFFER = "double_buffer"


class FillStatus(str, Enum):
    """How far the fill got."""

    FILLED = "filled"      # every cell known
    PARTIAL = "partial"    # stalled with unknown cells left
    UNFILLED = "unfilled"  # no known cell at all


@dataclass
class FillOptions:
    """Options for the convergence driver."""

    propagation: Union[Propagation, str] = Propagation.IN_PLACE
    max_sweeps: Optional[int] = None  # None = sweep until filled or stalled

    def __post_init__(self):
        self.propagation = Propagation(self.propagation)
        if self.max_sweeps is not None and self.max_sweeps < 1:
            raise ValueError(f"max_sweeps must be at least 1, got {self.max_sweeps}")


@dataclass
class FillResult:
    """Outcome of ``fill``: the grid plus any cells left unknown."""

    grid: ElevationGrid
    n: int
    status: FillStatus
    sweeps: int
    unfilled: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return self.status is FillStatus.FILLED

    @property
    def unfilled_count(self) -> int:
        return len(self.unfilled)


def _sweep_in_place(grid: ElevationGrid, n: int) -> int:
    """One sweep writing results straight back into ``grid``."""
    filled = 0
    for i in range(len(grid)):
        if grid.known[i]:
            continue
        value = interpolate(subgrid_at_index(grid, n, i))
        if value is not SENTINEL:
            set_value(grid, n, i % n, i // n, value)
            filled += 1
    return filled


def _sweep_double_buffer(grid: ElevationGrid, n: int, m: int) -> int:
    """One sweep reading only values known before the sweep started."""
    # Pad by one cell of unknowns so edge cells see the same halo as subgrid()
    values = np.zeros((m + 2, n + 2), dtype=np.float64)
    known = np.zeros((m + 2, n + 2), dtype=bool)
    values[1:-1, 1:-1] = np.where(grid.known, grid.values, 0.0).reshape(m, n)
    known[1:-1, 1:-1] = grid.known.reshape(m, n)

    def accumulate(positions):
        total = np.zeros((m, n), dtype=np.float64)
        count = np.zeros((m, n), dtype=np.int64)
        for pos in positions:
            dx, dy = NEIGHBOR_OFFSETS[pos]
            window = (slice(1 + dy, 1 + dy + m), slice(1 + dx, 1 + dx + n))
            total += values[window]
            count += known[window]
        return total, count

    corner_sum, corner_count = accumulate(CORNER_POSITIONS)
    lateral_sum, lateral_count = accumulate(LATERAL_POSITIONS)

    center_known = grid.known.reshape(m, n)
    eligible = ~center_known & (corner_count + lateral_count >= MIN_KNOWN_NEIGHBORS)
    if not eligible.any():
        return 0

    weight_sum = CORNER_WEIGHT * corner_count + LATERAL_WEIGHT * lateral_count
    weighted = CORNER_WEIGHT * corner_sum + LATERAL_WEIGHT * lateral_sum

    flat = np.flatnonzero(eligible.ravel())
    grid.values[flat] = weighted.ravel()[flat] / weight_sum.ravel()[flat]
    grid.known[flat] = True
    return len(flat)


def fill(
    grid: ElevationGrid, n: int, options: Optional[FillOptions] = None
) -> FillResult:
    """
    Interpolate unknown cells until the grid is full or no progress is made.

    Args:
        grid: Grid to fill (updated in place)
        n: Grid width
        options: Propagation mode and optional sweep limit

    Returns:
        FillResult with the grid, final status, sweep count and the
        positions of any cells still unknown

    Raises:
        InvalidDimensionsError: If ``n`` does not evenly divide the grid
    """
    options = options or FillOptions()
    m = grid_height(grid, n)

    logger.info(
        "Starting fill",
        width=n,
        height=m,
        known=grid.known_count(),
        propagation=options.propagation.value,
    )

    sweeps = 0
    while not grid.known.all():
        if options.max_sweeps is not None and sweeps >= options.max_sweeps:
            logger.warning("Sweep limit reached", sweeps=sweeps, remaining=grid.unknown_count())
            break

        if options.propagation is Propagation.IN_PLACE:
            filled = _sweep_in_place(grid, n)
        else:
            filled = _sweep_double_buffer(grid, n, m)
        sweeps += 1

        logger.debug("Sweep complete", sweep=sweeps, filled=filled, remaining=grid.unknown_count())

        if filled == 0:
            logger.warning("Fill stalled", sweeps=sweeps, remaining=grid.unknown_count())
            break

    if grid.known.all():
        status = FillStatus.FILLED
    elif grid.known.any():
        status = FillStatus.PARTIAL
    else:
        status = FillStatus.UNFILLED

    unfilled = unknown_positions(grid, n) if status is not FillStatus.FILLED else []

    logger.info("Fill complete", status=status.value, sweeps=sweeps, remaining=len(unfilled))

    return FillResult(grid=grid, n=n, status=status, sweeps=sweeps, unfilled=unfilled)
