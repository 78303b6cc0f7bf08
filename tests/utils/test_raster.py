"""Tests for raster grid I/O utilities.

Grids are written to temporary ESRI ASCII files with rasterio and read back.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import numpy as np
import pytest
from budykogrid.utils.raster import GridHeader, cell_latitudes, read_grid, write_grid


@pytest.fixture
def small_header() -> GridHeader:
    """3 x 4 one-degree grid spanning 110-114 E, 30-27 S."""
    return GridHeader(ncols=4, nrows=3, xllcorner=110.0, yllcorner=-30.0, cellsize=1.0, nodata=-9999.0)


class TestGridHeader:
    """Tests for the GridHeader dataclass."""

    def test_defaults_describe_continental_grid(self) -> None:
        header = GridHeader(ncols=886, nrows=691)

        assert header.xllcorner == 111.975
        assert header.yllcorner == -44.525
        assert header.cellsize == 0.05
        assert header.nodata == -9999.0

    def test_shape_and_cells(self, small_header: GridHeader) -> None:
        assert small_header.shape == (3, 4)
        assert small_header.n_cells == 12

    def test_transform_origin_is_upper_left(self, small_header: GridHeader) -> None:
        transform = small_header.transform

        assert transform.c == 110.0
        assert transform.f == -27.0
        assert transform.a == 1.0
        assert transform.e == -1.0

    def test_is_frozen(self, small_header: GridHeader) -> None:
        with pytest.raises(FrozenInstanceError):
            small_header.nrows = 5  # type: ignore[misc]


class TestCellLatitudes:
    """Tests for cell_latitudes function."""

    def test_row_centres_north_first(self, small_header: GridHeader) -> None:
        latitudes = cell_latitudes(small_header)

        np.testing.assert_allclose(np.rad2deg(latitudes), [-27.5, -28.5, -29.5])

    def test_returns_radians(self) -> None:
        header = GridHeader(ncols=1, nrows=1, xllcorner=0.0, yllcorner=-0.5, cellsize=1.0)

        assert cell_latitudes(header)[0] == pytest.approx(0.0)

    def test_continental_grid_extent(self) -> None:
        latitudes = np.rad2deg(cell_latitudes(GridHeader(ncols=886, nrows=691)))

        assert latitudes.shape == (691,)
        assert latitudes[-1] == pytest.approx(-44.5)
        assert latitudes[0] == pytest.approx(-10.0)


class TestReadWriteGrid:
    """Tests for read_grid and write_grid functions."""

    def test_roundtrip_values(self, tmp_path: Path, small_header: GridHeader) -> None:
        data = np.arange(12, dtype=np.float64).reshape(3, 4) * 1.5
        path = write_grid(tmp_path / "grid.asc", data, small_header)

        read, header = read_grid(path)

        np.testing.assert_allclose(read, data)
        assert header.shape == (3, 4)

    def test_roundtrip_header(self, tmp_path: Path, small_header: GridHeader) -> None:
        write_grid(tmp_path / "grid.asc", np.zeros((3, 4)), small_header)

        _, header = read_grid(tmp_path / "grid.asc")

        assert header.xllcorner == pytest.approx(110.0)
        assert header.yllcorner == pytest.approx(-30.0)
        assert header.cellsize == pytest.approx(1.0)
        assert header.nodata == pytest.approx(-9999.0)

    def test_nan_written_as_nodata_and_read_as_nan(self, tmp_path: Path, small_header: GridHeader) -> None:
        data = np.ones((3, 4))
        data[1, 2] = np.nan
        write_grid(tmp_path / "grid.asc", data, small_header)

        read, _ = read_grid(tmp_path / "grid.asc")

        assert np.isnan(read[1, 2])
        assert np.isfinite(read).sum() == 11

    def test_write_rejects_wrong_shape(self, tmp_path: Path, small_header: GridHeader) -> None:
        with pytest.raises(ValueError, match="does not match header shape"):
            write_grid(tmp_path / "grid.asc", np.zeros((4, 3)), small_header)

    def test_read_raises_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Grid file not found"):
            read_grid(tmp_path / "missing.asc")

    def test_read_returns_float64(self, tmp_path: Path, small_header: GridHeader) -> None:
        write_grid(tmp_path / "grid.asc", np.ones((3, 4)), small_header)

        read, _ = read_grid(tmp_path / "grid.asc")

        assert read.dtype == np.float64
