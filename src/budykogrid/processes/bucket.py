"""Budyko bucket process functions.

Numba-compiled soil water balance for one cell and one month: a Fu-type
curve partitions available water between actual evaporation and storage, and
storage above capacity spills as runoff.
"""

from numba import njit

from budykogrid.constants import BUDYKO_EXPONENT


@njit(cache=True, error_model="numpy")
def budyko_actual_evaporation(water: float, pet: float) -> float:
    """Partition available water into actual evaporation.

    E = pet * W / (W**n + pet**n) ** (1/n) with n = 1.9. Tends to
    min(W, pet) as either argument grows.

    Args:
        water: Available water W = storage + precipitation [mm].
        pet: Potential evaporation [mm].

    Returns:
        Actual evaporation [mm]. Zero when no water is available.
    """
    if water <= 0.0:
        return 0.0
    return pet * water / (water**BUDYKO_EXPONENT + pet**BUDYKO_EXPONENT) ** (1.0 / BUDYKO_EXPONENT)


@njit(cache=True, error_model="numpy")
def bucket_step(storage: float, precip: float, pet: float, max_capacity: float) -> tuple[float, float, float]:
    """Advance the soil bucket by one month.

    Args:
        storage: Soil water storage at the start of the month [mm].
        precip: Monthly precipitation [mm].
        pet: Potential evaporation [mm].
        max_capacity: Plant available water holding capacity [mm].

    Returns:
        Tuple of (actual_evap, runoff, new_storage) in mm, with
        precip + storage == actual_evap + runoff + new_storage.
    """
    water = storage + precip
    actual_evap = budyko_actual_evaporation(water, pet)

    new_storage = water - actual_evap
    if new_storage > max_capacity:
        runoff = new_storage - max_capacity
        new_storage = max_capacity
    else:
        runoff = 0.0

    return actual_evap, runoff, new_storage
