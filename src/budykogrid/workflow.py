"""File-based workflow for the 5 km grid layout.

Loads the static and monthly climatology grids from a directory, flattens
them into GridInputs in row-major cell order, runs the model and writes one
grid per output flux and month.

Input files:
    DEM_5km.asc, kRs_5km.asc, PAWHC_5km.asc,
    pr01.asc..pr12.asc, tasmin01.asc..tasmin12.asc, tasmax01.asc..tasmax12.asc

Output files:
    Ea_01.asc.., Epot_01.asc.., Runoff_01.asc.., rn01.asc..
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from budykogrid.constants import N_MONTHS
from budykogrid.outputs import GridOutput
from budykogrid.run import run
from budykogrid.types import GridInputs, SimulationConfig
from budykogrid.utils.raster import GridHeader, cell_latitudes, read_grid, write_grid

logger = logging.getLogger(__name__)

ELEVATION_FILE: str = "DEM_5km.asc"
STATIC_FILES: dict[str, str] = {
    "krs": "kRs_5km.asc",
    "max_capacity": "PAWHC_5km.asc",
}
MONTHLY_PATTERNS: dict[str, str] = {
    "precip": "pr{month:02d}.asc",
    "tmin": "tasmin{month:02d}.asc",
    "tmax": "tasmax{month:02d}.asc",
}
OUTPUT_PATTERNS: dict[str, str] = {
    "actual_evaporation": "Ea_{month:02d}.asc",
    "potential_evaporation": "Epot_{month:02d}.asc",
    "runoff": "Runoff_{month:02d}.asc",
    "net_radiation": "rn{month:02d}.asc",
}


def _read_matching(path: Path, header: GridHeader) -> np.ndarray:
    """Read a grid and check it has the same shape as the reference header."""
    data, other = read_grid(path)
    if other.shape != header.shape:
        msg = f"{path.name} has shape {other.shape} but {ELEVATION_FILE} has shape {header.shape}"
        raise ValueError(msg)
    return data


def load_inputs(directory: str | Path) -> tuple[GridInputs, GridHeader]:
    """Load every input grid from a directory.

    Args:
        directory: Directory holding the input grids.

    Returns:
        Tuple of (inputs, header) where header is the elevation grid's
        georeferencing, used to write outputs back.

    Raises:
        FileNotFoundError: If an input grid is missing.
        ValueError: If a grid's shape disagrees with the elevation grid.
    """
    directory = Path(directory)

    elevation, header = read_grid(directory / ELEVATION_FILE)
    static = {name: _read_matching(directory / filename, header).ravel() for name, filename in STATIC_FILES.items()}
    monthly = {
        name: np.stack(
            [_read_matching(directory / pattern.format(month=m), header).ravel() for m in range(1, N_MONTHS + 1)],
            axis=1,
        )
        for name, pattern in MONTHLY_PATTERNS.items()
    }
    latitude = np.repeat(cell_latitudes(header), header.ncols)

    logger.info("Loaded %d x %d grid from %s", header.nrows, header.ncols, directory)

    inputs = GridInputs(
        elevation=elevation.ravel(),
        latitude=latitude,
        **static,
        **monthly,
    )
    return inputs, header


def write_outputs(output: GridOutput, header: GridHeader, directory: str | Path) -> list[Path]:
    """Write each output flux as one grid per month.

    Args:
        output: Model output with cells in row-major order of the header.
        header: Georeferencing of the grid.
        directory: Destination directory, created if needed.

    Returns:
        List of paths written.

    Raises:
        ValueError: If the output cell count does not match the header.
    """
    if len(output) != header.n_cells:
        msg = f"Output has {len(output)} cells but header describes {header.n_cells}"
        raise ValueError(msg)

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for name, pattern in OUTPUT_PATTERNS.items():
        # Skipped cells become NaN so write_grid stores them as no-data whatever the run's missing value
        values = np.where(output.valid_mask[:, None], getattr(output.fluxes, name), np.nan)
        for m in range(1, N_MONTHS + 1):
            path = directory / pattern.format(month=m)
            written.append(write_grid(path, values[:, m - 1].reshape(header.shape), header))

    logger.info("Wrote %d grids to %s", len(written), directory)
    return written


def run_directory(
    input_dir: str | Path,
    output_dir: str | Path,
    config: SimulationConfig | None = None,
) -> GridOutput:
    """Load inputs from a directory, run the model and write the outputs.

    Args:
        input_dir: Directory holding the input grids.
        output_dir: Directory receiving the output grids.
        config: Run options. If None, uses SimulationConfig() defaults.

    Returns:
        The model output that was written.
    """
    inputs, header = load_inputs(input_dir)
    output = run(inputs, config)
    write_outputs(output, header, output_dir)
    return output
