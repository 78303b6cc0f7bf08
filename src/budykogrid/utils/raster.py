"""Raster grid I/O utilities.

Reads and writes georeferenced grids (ESRI ASCII by default) with rasterio and
derives per-row latitudes from the grid header. These helpers are the only
place where the model touches files; the core works on flat numpy arrays.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import rasterio
from rasterio.errors import RasterioIOError
from rasterio.transform import Affine, from_origin

from budykogrid.constants import GRID_CELLSIZE, GRID_NODATA, GRID_XLLCORNER, GRID_YLLCORNER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridHeader:
    """Georeferencing of a regular latitude/longitude grid.

    Defaults describe the 5 km continental grid.

    Attributes:
        ncols: Number of columns.
        nrows: Number of rows.
        xllcorner: Western edge of the grid [deg].
        yllcorner: Southern edge of the grid [deg].
        cellsize: Cell size [deg].
        nodata: Sentinel written for missing cells, or None.
    """

    ncols: int
    nrows: int
    xllcorner: float = GRID_XLLCORNER
    yllcorner: float = GRID_YLLCORNER
    cellsize: float = GRID_CELLSIZE
    nodata: float | None = GRID_NODATA

    @property
    def shape(self) -> tuple[int, int]:
        """Grid shape as (nrows, ncols)."""
        return self.nrows, self.ncols

    @property
    def n_cells(self) -> int:
        return self.nrows * self.ncols

    @property
    def transform(self) -> Affine:
        """Affine transform of the upper-left corner, north-up."""
        top = self.yllcorner + self.nrows * self.cellsize
        return from_origin(self.xllcorner, top, self.cellsize, self.cellsize)

    @classmethod
    def from_dataset(cls, src: rasterio.io.DatasetReader) -> GridHeader:
        """Build a header from an open rasterio dataset.

        Raises:
            ValueError: If the grid is rotated or its cells are not square.
        """
        transform = src.transform
        if transform.b != 0.0 or transform.d != 0.0:
            raise ValueError("Rotated grids are not supported")
        if not np.isclose(transform.a, -transform.e):
            raise ValueError(f"Grid cells must be square, got {transform.a} x {-transform.e}")
        return cls(
            ncols=src.width,
            nrows=src.height,
            xllcorner=transform.c,
            yllcorner=transform.f + transform.e * src.height,
            cellsize=transform.a,
            nodata=src.nodata,
        )


def read_grid(path: str | Path) -> tuple[np.ndarray, GridHeader]:
    """Read the first band of a raster grid.

    NoData cells are returned as NaN, which the model treats as missing.

    Args:
        path: Path to the raster file (e.g., an ESRI ASCII ``.asc`` grid).

    Returns:
        Tuple of (data, header) where data is a float64 array of shape
        (nrows, ncols).

    Raises:
        FileNotFoundError: If the specified file does not exist.
        ValueError: If the raster file cannot be read.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Grid file not found: {path}")

    try:
        with rasterio.open(path) as src:
            data = src.read(1).astype(np.float64)
            header = GridHeader.from_dataset(src)
    except RasterioIOError as e:
        raise ValueError(f"Invalid raster file: {path}") from e

    if header.nodata is not None:
        data[data == header.nodata] = np.nan

    logger.debug("Read grid %s: %d x %d cells", path.name, header.nrows, header.ncols)
    return data, header


def write_grid(path: str | Path, data: np.ndarray, header: GridHeader, driver: str = "AAIGrid") -> Path:
    """Write a 2D array as a single-band georeferenced grid.

    Non-finite values are written as the header's no-data sentinel.

    Args:
        path: Destination file path.
        data: Array of shape (nrows, ncols).
        header: Georeferencing of the grid.
        driver: GDAL driver name. Default writes an ESRI ASCII grid.

    Returns:
        The path written.

    Raises:
        ValueError: If data does not match the header shape.
    """
    path = Path(path)
    data = np.asarray(data, dtype=np.float64)
    if data.shape != header.shape:
        msg = f"Grid shape {data.shape} does not match header shape {header.shape}"
        raise ValueError(msg)

    if header.nodata is not None:
        data = np.where(np.isfinite(data), data, header.nodata)

    with rasterio.open(
        path,
        "w",
        driver=driver,
        height=header.nrows,
        width=header.ncols,
        count=1,
        dtype="float32",
        transform=header.transform,
        nodata=header.nodata,
    ) as dst:
        dst.write(data.astype(np.float32), 1)

    logger.debug("Wrote grid %s", path.name)
    return path


def cell_latitudes(header: GridHeader) -> np.ndarray:
    """Latitude of each grid row centre, northernmost row first.

    This is not the ``yllcorner + (nrows - 1 - row) * cellsize`` row
    convention of the legacy 5 km grid tooling, which sits half a cell south.

    Args:
        header: Georeferencing of the grid.

    Returns:
        Array of shape (nrows,) with latitudes [rad].
    """
    top = header.yllcorner + header.nrows * header.cellsize
    latitudes_deg = top - (np.arange(header.nrows) + 0.5) * header.cellsize
    return np.deg2rad(latitudes_deg)
