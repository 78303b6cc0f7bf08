"""Structured output dataclasses for model results.

This module provides dataclasses for organizing and accessing model outputs:
- BudykoFluxes: The four retained cell-month grids
- GridOutput: Fluxes plus the cell mask and spin-up diagnostics
"""

from __future__ import annotations

from dataclasses import dataclass, fields

import numpy as np
import pandas as pd

from budykogrid.constants import N_MONTHS


@dataclass(frozen=True)
class BudykoFluxes:
    """Budyko bucket model flux outputs as arrays.

    All arrays have shape (n_cells, 12), columns ordered January to December.
    Cells skipped as missing hold the run's missing value in every month.

    Attributes:
        actual_evaporation: Actual evaporation in the retained year [mm].
        potential_evaporation: Priestley-Taylor potential evaporation [mm].
        runoff: Runoff in the retained year [mm].
        net_radiation: Net radiation [MJ m-2 day-1].
    """

    actual_evaporation: np.ndarray
    potential_evaporation: np.ndarray
    runoff: np.ndarray
    net_radiation: np.ndarray

    def to_dict(self) -> dict[str, np.ndarray]:
        """Convert to dictionary of arrays.

        Returns:
            Dictionary mapping field names to their numpy array values.
        """
        return {field.name: getattr(self, field.name) for field in fields(self)}


@dataclass(frozen=True)
class GridOutput:
    """Complete output of a gridded Budyko bucket run.

    Attributes:
        fluxes: The four retained cell-month grids.
        valid_mask: Cells that were simulated, shape (n_cells,).
        storage_drift: Absolute change of year-end storage between the last
            two simulated years [mm], shape (n_cells,). NaN when only one
            year was simulated; missing value for skipped cells.
        n_years: Number of annual cycles simulated.
        missing_value: Sentinel held by skipped cells.
    """

    fluxes: BudykoFluxes
    valid_mask: np.ndarray
    storage_drift: np.ndarray
    n_years: int
    missing_value: float

    @property
    def actual_evaporation(self) -> np.ndarray:
        return self.fluxes.actual_evaporation

    @property
    def potential_evaporation(self) -> np.ndarray:
        return self.fluxes.potential_evaporation

    @property
    def runoff(self) -> np.ndarray:
        return self.fluxes.runoff

    @property
    def net_radiation(self) -> np.ndarray:
        return self.fluxes.net_radiation

    def __len__(self) -> int:
        """Return the number of cells."""
        return len(self.valid_mask)

    def month(self, month: int) -> dict[str, np.ndarray]:
        """Return the four flux columns for one calendar month.

        Args:
            month: Calendar month, 1 (January) to 12 (December).

        Returns:
            Dictionary mapping flux names to (n_cells,) arrays.

        Raises:
            ValueError: If month is outside 1-12.
        """
        if not 1 <= month <= N_MONTHS:
            msg = f"month must be within 1-{N_MONTHS}, got {month}"
            raise ValueError(msg)
        return {name: values[:, month - 1] for name, values in self.fluxes.to_dict().items()}

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a long DataFrame indexed by (cell, month).

        Returns:
            DataFrame with one row per cell-month and one column per flux.
        """
        n_cells = len(self)
        index = pd.MultiIndex.from_product(
            [np.arange(n_cells), np.arange(1, N_MONTHS + 1)],
            names=["cell", "month"],
        )
        data = {name: values.reshape(-1) for name, values in self.fluxes.to_dict().items()}
        return pd.DataFrame(data, index=index)
