"""Budyko bucket model orchestration functions.

This module provides the main entry points for running the model:
- step(): Advance the soil bucket of every cell by one month
- run(): Spin the bucket up over repeated climatological years and keep the last
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit, prange

from budykogrid.constants import JULIAN_DAYS, N_MONTHS
from budykogrid.outputs import BudykoFluxes, GridOutput
from budykogrid.processes.bucket import bucket_step
from budykogrid.processes.evaporation import potential_evaporation
from budykogrid.processes.radiation import inverse_relative_distance, net_radiation, solar_declination
from budykogrid.types import BucketState, GridInputs, SimulationConfig

logger = logging.getLogger(__name__)


@njit(cache=True, error_model="numpy")
def _climatology_numba(
    elevation: np.ndarray,
    tmin: np.ndarray,
    tmax: np.ndarray,
    krs: np.ndarray,
    latitude: np.ndarray,
    dr: np.ndarray,
    declination: np.ndarray,
    valid: np.ndarray,
    rn_out: np.ndarray,  # shape (n_cells, 12), written for valid cells only
    pet_out: np.ndarray,  # shape (n_cells, 12), written for valid cells only
) -> None:
    """Net radiation and potential evaporation for every valid cell-month."""
    n_cells = elevation.shape[0]
    for i in range(n_cells):
        if not valid[i]:
            continue
        for m in range(12):
            rn = net_radiation(latitude[i], elevation[i], dr[m], declination[m], krs[i], tmax[i, m], tmin[i, m])
            tmean = (tmax[i, m] + tmin[i, m]) / 2.0
            rn_out[i, m] = rn
            pet_out[i, m] = potential_evaporation(tmean, elevation[i], rn)


@njit(cache=True, error_model="numpy")
def _simulate_cell(
    storage: float,
    precip: np.ndarray,  # shape (12,)
    pet: np.ndarray,  # shape (12,)
    max_capacity: float,
    n_years: int,
    aet_out: np.ndarray,  # shape (12,)
    runoff_out: np.ndarray,  # shape (12,)
) -> tuple[float, float]:
    """Run one cell through n_years annual cycles, keeping the last year.

    Returns the final storage and the change of year-end storage over the
    last year (NaN when n_years == 1).
    """
    drift = np.nan
    for year in range(n_years):
        year_start = storage
        for m in range(12):
            aet, runoff, storage = bucket_step(storage, precip[m], pet[m], max_capacity)
            if year == n_years - 1:
                aet_out[m] = aet
                runoff_out[m] = runoff
        if year > 0:
            drift = abs(storage - year_start)
    return storage, drift


def _simulate_cells(
    storage: np.ndarray,  # Modified in place
    precip: np.ndarray,
    pet: np.ndarray,
    max_capacity: np.ndarray,
    valid: np.ndarray,
    n_years: int,
    aet_out: np.ndarray,  # shape (n_cells, 12)
    runoff_out: np.ndarray,  # shape (n_cells, 12)
    drift_out: np.ndarray,  # shape (n_cells,)
) -> None:
    """Run the bucket for every valid cell. Cells are independent."""
    n_cells = storage.shape[0]
    for i in prange(n_cells):
        if valid[i]:
            final, drift = _simulate_cell(
                storage[i],
                precip[i],
                pet[i],
                max_capacity[i],
                n_years,
                aet_out[i],
                runoff_out[i],
            )
            storage[i] = final
            drift_out[i] = drift


_run_numba = njit(cache=True, error_model="numpy")(_simulate_cells)
_run_numba_parallel = njit(error_model="numpy", parallel=True)(_simulate_cells)


@njit(cache=True, error_model="numpy")
def _step_numba(
    storage: np.ndarray,  # Modified in place
    precip: np.ndarray,
    pet: np.ndarray,
    max_capacity: np.ndarray,
    output_arr: np.ndarray,  # shape (n_cells, 2): [actual_evap, runoff]
) -> None:
    """Advance every cell by one month."""
    for i in range(storage.shape[0]):
        aet, runoff, new_storage = bucket_step(storage[i], precip[i], pet[i], max_capacity[i])
        storage[i] = new_storage
        output_arr[i, 0] = aet
        output_arr[i, 1] = runoff


def monthly_orbital_terms(julian_days: tuple[int, ...] = JULIAN_DAYS) -> tuple[np.ndarray, np.ndarray]:
    """Inverse Earth-Sun distance and solar declination for each month.

    Args:
        julian_days: Representative day of year of each month.

    Returns:
        Tuple of (dr, declination) arrays, one value per month.
    """
    dr = np.array([inverse_relative_distance(float(day)) for day in julian_days], dtype=np.float64)
    declination = np.array([solar_declination(float(day)) for day in julian_days], dtype=np.float64)
    return dr, declination


def potential_evaporation_climatology(
    inputs: GridInputs,
    julian_days: tuple[int, ...] = JULIAN_DAYS,
    missing_value: float = np.nan,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute net radiation and potential evaporation for every cell-month.

    The result depends only on the climatological inputs, so it is evaluated
    once per run and reused for every simulated year.

    Args:
        inputs: Validated grid inputs.
        julian_days: Representative day of year of each month.
        missing_value: Value held by cells flagged as missing.

    Returns:
        Tuple of (net_radiation, potential_evaporation), each (n_cells, 12).
    """
    dr, declination = monthly_orbital_terms(julian_days)
    shape = (inputs.n_cells, N_MONTHS)
    rn = np.full(shape, missing_value, dtype=np.float64)
    pet = np.full(shape, missing_value, dtype=np.float64)

    _climatology_numba(
        inputs.elevation,
        inputs.tmin,
        inputs.tmax,
        inputs.krs,
        inputs.latitude,
        dr,
        declination,
        inputs.valid_mask,
        rn,
        pet,
    )
    return rn, pet


def step(
    state: BucketState,
    precip: np.ndarray | float,
    pet: np.ndarray | float,
    max_capacity: np.ndarray | float,
) -> tuple[BucketState, dict[str, np.ndarray]]:
    """Execute one monthly bucket update for every cell of a state.

    Args:
        state: Current bucket state.
        precip: Monthly precipitation per cell [mm], or a scalar for all cells.
        pet: Potential evaporation per cell [mm], or a scalar for all cells.
        max_capacity: Water holding capacity per cell [mm], or a scalar.

    Returns:
        Tuple of (new_state, fluxes) where:
        - new_state: Updated BucketState after the month
        - fluxes: Dictionary with actual_evaporation, runoff and storage arrays
    """
    n_cells = state.n_cells
    storage = np.asarray(state)
    output_arr = np.zeros((n_cells, 2), dtype=np.float64)

    _step_numba(
        storage,
        np.broadcast_to(np.asarray(precip, dtype=np.float64), (n_cells,)).copy(),
        np.broadcast_to(np.asarray(pet, dtype=np.float64), (n_cells,)).copy(),
        np.broadcast_to(np.asarray(max_capacity, dtype=np.float64), (n_cells,)).copy(),
        output_arr,
    )

    new_state = BucketState.from_array(storage)
    fluxes = {
        "actual_evaporation": output_arr[:, 0],
        "runoff": output_arr[:, 1],
        "storage": new_state.storage.copy(),
    }
    return new_state, fluxes


def run(inputs: GridInputs, config: SimulationConfig | None = None) -> GridOutput:
    """Run the Budyko bucket model over a grid.

    Net radiation and potential evaporation are computed once per cell-month.
    Each store starts half full and is cycled through ``config.n_years``
    climatological years in calendar order; actual evaporation and runoff of
    the last year are retained.

    Cells with missing inputs are skipped and hold ``config.missing_value``
    in every output. Numerical degeneracies (e.g. polar night) produce
    non-finite values in the affected cells only.

    Args:
        inputs: Validated grid inputs.
        config: Run options. If None, uses SimulationConfig() defaults.

    Returns:
        GridOutput with the four (n_cells, 12) flux grids.
    """
    config = SimulationConfig() if config is None else config

    valid = inputs.valid_mask
    n_cells = inputs.n_cells
    n_valid = int(valid.sum())
    logger.debug(
        "Running Budyko bucket over %d cells (%d missing) for %d years",
        n_cells,
        n_cells - n_valid,
        config.n_years,
    )

    rn, pet = potential_evaporation_climatology(inputs, config.julian_days, config.missing_value)

    state = BucketState.initialize(inputs.max_capacity, valid)
    storage = np.asarray(state)

    shape = (n_cells, N_MONTHS)
    aet = np.full(shape, config.missing_value, dtype=np.float64)
    runoff = np.full(shape, config.missing_value, dtype=np.float64)
    drift = np.full(n_cells, config.missing_value, dtype=np.float64)

    kernel = _run_numba_parallel if config.parallel else _run_numba
    kernel(
        storage,
        inputs.precip,
        pet,
        inputs.max_capacity,
        valid,
        config.n_years,
        aet,
        runoff,
        drift,
    )

    fluxes = BudykoFluxes(
        actual_evaporation=aet,
        potential_evaporation=pet,
        runoff=runoff,
        net_radiation=rn,
    )

    degenerate = valid & ~(np.isfinite(aet) & np.isfinite(runoff) & np.isfinite(pet) & np.isfinite(rn)).all(axis=1)
    n_degenerate = int(degenerate.sum())
    if n_degenerate:
        logger.warning("%d of %d simulated cells produced non-finite outputs", n_degenerate, n_valid)

    if config.n_years > 1 and n_valid:
        logger.debug("Maximum year-end storage drift: %.6f mm", float(np.nanmax(drift[valid], initial=0.0)))

    return GridOutput(
        fluxes=fluxes,
        valid_mask=valid,
        storage_drift=drift,
        n_years=config.n_years,
        missing_value=config.missing_value,
    )
