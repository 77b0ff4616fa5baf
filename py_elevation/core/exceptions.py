"""Error types raised by the elevation grid engine."""


class ElevationError(Exception):
    """Base class for py-elevation errors."""


class InvalidDimensionsError(ElevationError, ValueError):
    """Grid width/height is not positive, or does not match the buffer."""


class OutOfBoundsError(ElevationError, IndexError):
    """A coordinate or linear index addresses a cell outside the grid."""


class EmptyGridError(ElevationError, ValueError):
    """The grid holds no known altitude."""


class CsvFormatError(ElevationError, ValueError):
    """Input CSV data cannot be turned into altitude points."""
