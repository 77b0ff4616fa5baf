"""
Scatter known altitude samples into a grid before gap filling.
"""

from enum import Enum
from typing import Iterable, NamedTuple, Tuple, Union

import structlog

from .exceptions import OutOfBoundsError
from .grid_store import ElevationGrid, set_value

logger = structlog.get_logger()


class Sample(NamedTuple):
    """Altitude ``z`` at integer pixel coordinates ``(x, y)``."""

    x: int
    y: int
    z: float


class OutOfBoundsPolicy(str, Enum):
    """What ``scatter`` does with a sample that lands outside the grid."""

    RAISE = "raise"  # propagate OutOfBoundsError, stop at the bad sample
    SKIP = "skip"    # drop the sample and log a warning


def scatter(
    grid: ElevationGrid,
    n: int,
    samples: Iterable[Union[Sample, Tuple[int, int, float]]],
    on_out_of_bounds: Union[OutOfBoundsPolicy, str] = OutOfBoundsPolicy.RAISE,
) -> ElevationGrid:
    """
    Write each sample's altitude into its grid cell.

    Samples are applied in input order, so a later sample for the same cell
    overwrites an earlier one.

    Args:
        grid: Grid to write into (updated in place)
        n: Grid width
        samples: ``(x, y, z)`` samples in grid coordinates
        on_out_of_bounds: ``"raise"`` to fail on the first sample outside the
            grid (samples before it stay written), ``"skip"`` to drop such
            samples with a logged warning

    Returns:
        The updated grid
    """
    policy = OutOfBoundsPolicy(on_out_of_bounds)
    written = 0
    skipped = 0

    for x, y, z in samples:
        try:
            set_value(grid, n, x, y, z)
        except OutOfBoundsError:
            if policy is OutOfBoundsPolicy.RAISE:
                raise
            skipped += 1
            logger.warning("Skipping sample outside grid", x=x, y=y, z=z, width=n)
            continue
        written += 1

    if skipped:
        logger.warning("Samples skipped during scatter", skipped=skipped, written=written)
    logger.debug("Scatter complete", written=written, known=grid.known_count())

    return grid
