"""Utility functions for budykogrid."""

from .raster import GridHeader, cell_latitudes, read_grid, write_grid

__all__ = [
    "GridHeader",
    "cell_latitudes",
    "read_grid",
    "write_grid",
]
