"""Priestley-Taylor potential evaporation process functions.

Numba-compiled functions for the psychrometric terms and the Priestley-Taylor
equation. Temperatures in C, pressures in kPa, latent heat in MJ kg-1.
"""

import numpy as np
from numba import njit

from budykogrid.constants import (
    LAPSE_RATE,
    LATENT_HEAT_BASE,
    LATENT_HEAT_SLOPE,
    PRESSURE_EXPONENT,
    PRIESTLEY_TAYLOR_ALPHA,
    PSYCHROMETRIC_COEFFICIENT,
    REFERENCE_TEMPERATURE_K,
    SEA_LEVEL_PRESSURE,
    SVP_COEFFICIENT,
    SVP_EXPONENT,
    SVP_OFFSET,
    SVP_SLOPE_NUMERATOR,
    SVP_SLOPE_OFFSET,
)


@njit(cache=True, error_model="numpy")
def atmospheric_pressure(elevation: float) -> float:
    """Atmospheric pressure [kPa] from elevation [m] (barometric power law)."""
    ratio = (REFERENCE_TEMPERATURE_K - LAPSE_RATE * elevation) / REFERENCE_TEMPERATURE_K
    return SEA_LEVEL_PRESSURE * ratio**PRESSURE_EXPONENT


@njit(cache=True, error_model="numpy")
def saturation_vapour_pressure(temp: float) -> float:
    """Saturation vapour pressure [kPa] at temperature [C]."""
    return SVP_COEFFICIENT * np.exp(SVP_EXPONENT * temp / (temp + SVP_OFFSET))


@njit(cache=True, error_model="numpy")
def latent_heat(temp: float) -> float:
    """Latent heat of vaporization [MJ kg-1], linear in temperature."""
    return LATENT_HEAT_BASE - LATENT_HEAT_SLOPE * temp


@njit(cache=True, error_model="numpy")
def psychrometric_constant(pressure: float, lam: float) -> float:
    """Psychrometric constant [kPa C-1] from pressure [kPa] and latent heat."""
    return PSYCHROMETRIC_COEFFICIENT * pressure / lam


@njit(cache=True, error_model="numpy")
def vapour_pressure_slope(temp: float) -> float:
    """Slope of the saturation vapour pressure curve [kPa C-1].

    The denominator vanishes at temp == -237.3 C; the slope is then infinite.
    """
    return SVP_SLOPE_NUMERATOR * saturation_vapour_pressure(temp) / (temp + SVP_SLOPE_OFFSET) ** 2


@njit(cache=True, error_model="numpy")
def potential_evaporation(tmean: float, elevation: float, rn: float) -> float:
    """Compute Priestley-Taylor potential evaporation.

    PET = alpha * Rn / (lambda * (1 + gamma / Delta)), alpha = 1.26.

    Args:
        tmean: Mean air temperature [C].
        elevation: Elevation above sea level [m].
        rn: Net radiation [MJ m-2 day-1].

    Returns:
        Potential evaporation [mm day-1]. Negative when rn is negative,
        NaN when rn is NaN.
    """
    pressure = atmospheric_pressure(elevation)
    lam = latent_heat(tmean)
    gamma = psychrometric_constant(pressure, lam)
    delta = vapour_pressure_slope(tmean)

    return PRIESTLEY_TAYLOR_ALPHA * rn / (lam * (1.0 + gamma / delta))
