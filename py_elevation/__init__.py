"""py-elevation: plot sparse altitude samples as a gap-filled raster."""

__version__ = "0.1.0"
