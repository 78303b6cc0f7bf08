"""Input data structures for the Budyko bucket model.

This module defines validated input containers:
- GridInputs: Static and monthly climatological grids, flattened to cells
- SimulationConfig: Spin-up policy and run options
- BucketState: Per-cell soil water storage carried between months
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from budykogrid.constants import JULIAN_DAYS, N_MONTHS, N_YEARS, STORAGE_INIT_FRACTION

_CELL_FIELDS: tuple[str, ...] = ("elevation", "max_capacity", "krs", "latitude")
_MONTHLY_FIELDS: tuple[str, ...] = ("precip", "tmin", "tmax")


def _frozen_copy(arr: np.ndarray) -> np.ndarray:
    """Copy into a read-only float64 array."""
    out = np.array(arr, dtype=np.float64)
    out.setflags(write=False)
    return out


def missing_mask(arr: np.ndarray, nodata: float | None) -> np.ndarray:
    """Flag missing entries: non-finite values or values equal to the sentinel."""
    mask = ~np.isfinite(arr)
    if nodata is not None:
        mask |= arr == nodata
    return mask


class GridInputs(BaseModel):
    """Validated grid inputs for the Budyko bucket model.

    Cells are flattened into a single index shared by every array. Per-cell
    arrays are 1D with shape (n_cells,); monthly climatologies are 2D with
    shape (n_cells, 12), columns ordered January to December. Arrays are
    copied to read-only float64.

    Cells where any input is NaN or equals ``nodata`` are treated as missing
    and are never simulated.

    Attributes:
        elevation: Elevation above sea level [m].
        precip: Monthly precipitation [mm/month].
        tmin: Monthly mean minimum temperature [C].
        tmax: Monthly mean maximum temperature [C].
        max_capacity: Plant available water holding capacity [mm].
        krs: Hargreaves coastal/interior radiation coefficient [-].
        latitude: Latitude of each cell [rad].
        nodata: Missing-value sentinel of the input grids, or None.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    elevation: np.ndarray  # [m]
    precip: np.ndarray  # [mm/month]
    tmin: np.ndarray  # [C]
    tmax: np.ndarray  # [C]
    max_capacity: np.ndarray  # [mm]
    krs: np.ndarray  # [-]
    latitude: np.ndarray  # [rad]
    nodata: float | None = -9999.0

    @field_validator(*_CELL_FIELDS, mode="before")
    @classmethod
    def validate_cell_array(cls, v: np.ndarray, info: ValidationInfo) -> np.ndarray:
        """Validate per-cell arrays: must be 1D, coerced to float64."""
        arr = np.asarray(v, dtype=np.float64)
        if arr.ndim != 1:
            msg = f"{info.field_name} array must be 1D, got {arr.ndim}D"
            raise ValueError(msg)
        return _frozen_copy(arr)

    @field_validator(*_MONTHLY_FIELDS, mode="before")
    @classmethod
    def validate_monthly_array(cls, v: np.ndarray, info: ValidationInfo) -> np.ndarray:
        """Validate monthly arrays: must be 2D with 12 columns, coerced to float64."""
        arr = np.asarray(v, dtype=np.float64)
        if arr.ndim != 2:
            msg = f"{info.field_name} array must be 2D (n_cells, {N_MONTHS}), got {arr.ndim}D"
            raise ValueError(msg)
        if arr.shape[1] != N_MONTHS:
            msg = f"{info.field_name} array must have {N_MONTHS} monthly columns, got {arr.shape[1]}"
            raise ValueError(msg)
        return _frozen_copy(arr)

    @model_validator(mode="after")
    def validate_cell_counts(self) -> GridInputs:
        """Ensure every grid describes the same cells as elevation."""
        n = len(self.elevation)
        for name in (*_MONTHLY_FIELDS, *_CELL_FIELDS[1:]):
            size = len(getattr(self, name))
            if size != n:
                msg = f"{name} has {size} cells but elevation has {n}"
                raise ValueError(msg)
        return self

    def __len__(self) -> int:
        """Return the number of cells."""
        return len(self.elevation)

    @property
    def n_cells(self) -> int:
        return len(self.elevation)

    @property
    def valid_mask(self) -> np.ndarray:
        """Boolean mask of cells with complete input data, shape (n_cells,)."""
        missing = np.zeros(self.n_cells, dtype=bool)
        for name in _CELL_FIELDS:
            missing |= missing_mask(getattr(self, name), self.nodata)
        for name in _MONTHLY_FIELDS:
            missing |= missing_mask(getattr(self, name), self.nodata).any(axis=1)
        return ~missing


class SimulationConfig(BaseModel):
    """Run options for the simulation driver.

    Attributes:
        n_years: Number of annual cycles to simulate. Only the last one is
            kept; earlier cycles spin the soil storage up.
        julian_days: Representative day of year for each calendar month.
        missing_value: Sentinel written to outputs of skipped cells.
        parallel: Distribute cells over threads with numba prange.
    """

    model_config = ConfigDict(frozen=True)

    n_years: int = Field(default=N_YEARS, ge=1)
    julian_days: tuple[int, ...] = JULIAN_DAYS
    missing_value: float = float("nan")
    parallel: bool = False

    @field_validator("julian_days")
    @classmethod
    def validate_julian_days(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """One day of year per month, each within 1-366."""
        if len(v) != N_MONTHS:
            msg = f"julian_days must have {N_MONTHS} entries, got {len(v)}"
            raise ValueError(msg)
        if any(day < 1 or day > 366 for day in v):
            msg = f"julian_days must lie within 1-366, got {v}"
            raise ValueError(msg)
        return v


@dataclass
class BucketState:
    """Budyko bucket state variables.

    Mutable state that evolves during simulation: one soil water store per cell.

    Attributes:
        storage: Soil water storage per cell [mm], shape (n_cells,).
    """

    storage: np.ndarray  # [mm]

    @property
    def n_cells(self) -> int:
        """Number of cells."""
        return self.storage.shape[0]

    @classmethod
    def initialize(cls, max_capacity: np.ndarray, valid: np.ndarray | None = None) -> BucketState:
        """Create initial state with every store half full.

        Args:
            max_capacity: Water holding capacity per cell [mm].
            valid: Optional mask of cells to initialize. Other cells are left
                at zero so missing capacities never enter arithmetic.

        Returns:
            Initialized BucketState ready for simulation.
        """
        max_capacity = np.asarray(max_capacity, dtype=np.float64)
        storage = np.zeros(max_capacity.shape[0], dtype=np.float64)
        if valid is None:
            storage[:] = STORAGE_INIT_FRACTION * max_capacity
        else:
            storage[valid] = STORAGE_INIT_FRACTION * max_capacity[valid]
        return cls(storage=storage)

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert state to a 1D array for Numba.

        Layout: [storage_0, ..., storage_n-1]
        """
        arr = np.array(self.storage, dtype=np.float64)
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> BucketState:
        """Reconstruct BucketState from array."""
        return cls(storage=np.array(arr, dtype=np.float64))
