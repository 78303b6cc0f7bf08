"""Clear-sky net radiation process functions.

Numba-compiled functions implementing the FAO-56 style radiation chain
(Allen et al.): orbital terms, sunset hour angle, extraterrestrial radiation,
Hargreaves shortwave estimate and net longwave correction. All angles are in
radians and all radiation terms in MJ m-2 day-1.

Compiled with ``error_model="numpy"`` so out-of-domain arguments (polar
day/night, tmax < tmin) give NaN instead of raising.
"""

import numpy as np
from numba import njit

from budykogrid.constants import (
    ALBEDO_COMPLEMENT,
    CLEAR_SKY_BASE,
    CLEAR_SKY_ELEVATION_FACTOR,
    CLOUDINESS_FACTOR,
    DAYS_PER_YEAR,
    DECLINATION_AMPLITUDE,
    DECLINATION_PHASE,
    ECCENTRICITY_AMPLITUDE,
    EXTRATERRESTRIAL_FACTOR,
    HUMIDITY_BASE,
    HUMIDITY_SLOPE,
    SIGMA_T4_INTERCEPT,
    SIGMA_T4_SLOPE,
    SVP_COEFFICIENT,
    SVP_EXPONENT,
    SVP_OFFSET,
)


@njit(cache=True, error_model="numpy")
def inverse_relative_distance(julian_day: float) -> float:
    """Inverse relative Earth-Sun distance factor dr (Allen eq. 23).

    Args:
        julian_day: Day of year [1-365].

    Returns:
        Dimensionless distance factor, between ~0.967 and ~1.033.
    """
    return 1.0 + ECCENTRICITY_AMPLITUDE * np.cos(2.0 * np.pi * julian_day / DAYS_PER_YEAR)


@njit(cache=True, error_model="numpy")
def solar_declination(julian_day: float) -> float:
    """Solar declination (Allen eq. 24).

    Args:
        julian_day: Day of year [1-365].

    Returns:
        Declination [rad].
    """
    return DECLINATION_AMPLITUDE * np.sin(2.0 * np.pi * julian_day / DAYS_PER_YEAR - DECLINATION_PHASE)


@njit(cache=True, error_model="numpy")
def sunset_hour_angle(lat: float, declination: float) -> float:
    """Sunset hour angle omega (Allen eq. 25).

    NaN when -tan(lat)*tan(declination) lies outside [-1, 1], i.e. during
    polar day or polar night.
    """
    return np.arccos(-np.tan(lat) * np.tan(declination))


@njit(cache=True, error_model="numpy")
def extraterrestrial_radiation(lat: float, dr: float, declination: float) -> float:
    """Radiation at the top of the atmosphere Ra (Allen eq. 21).

    Args:
        lat: Latitude [rad].
        dr: Inverse relative Earth-Sun distance [-].
        declination: Solar declination [rad].

    Returns:
        Extraterrestrial radiation [MJ m-2 day-1].
    """
    omega = sunset_hour_angle(lat, declination)
    return (
        EXTRATERRESTRIAL_FACTOR
        * dr
        * (omega * np.sin(lat) * np.sin(declination) + np.cos(lat) * np.cos(declination) * np.sin(omega))
    )


@njit(cache=True, error_model="numpy")
def net_radiation(
    lat: float,
    elevation: float,
    dr: float,
    declination: float,
    krs: float,
    tmax: float,
    tmin: float,
) -> float:
    """Compute net radiation at the surface for one cell-month.

    Incoming shortwave is estimated from the temperature range (Hargreaves,
    Allen eq. 50) and the net longwave term uses the linearised
    Stefan-Boltzmann temperatures, actual vapour pressure at tmin and a
    cloudiness correction from Rs/Rso.

    Args:
        lat: Latitude [rad].
        elevation: Elevation above sea level [m].
        dr: Inverse relative Earth-Sun distance [-].
        declination: Solar declination [rad].
        krs: Hargreaves coastal/interior adjustment coefficient [-].
        tmax: Mean maximum temperature [C].
        tmin: Mean minimum temperature [C].

    Returns:
        Net radiation Rn [MJ m-2 day-1]. NaN for polar day/night or tmax < tmin.
    """
    ra = extraterrestrial_radiation(lat, dr, declination)

    # Shortwave
    rs = krs * np.sqrt(tmax - tmin) * ra
    rso = (CLEAR_SKY_BASE + CLEAR_SKY_ELEVATION_FACTOR * elevation) * ra
    rns = ALBEDO_COMPLEMENT * rs

    # Longwave
    sigma_tmax4 = SIGMA_T4_SLOPE * tmax + SIGMA_T4_INTERCEPT
    sigma_tmin4 = SIGMA_T4_SLOPE * tmin + SIGMA_T4_INTERCEPT
    sigma_t4 = (sigma_tmax4 + sigma_tmin4) / 2.0
    ea = SVP_COEFFICIENT * np.exp(SVP_EXPONENT * tmin / (tmin + SVP_OFFSET))
    humidity = HUMIDITY_BASE - HUMIDITY_SLOPE * np.sqrt(ea)
    cloudiness = CLOUDINESS_FACTOR * (rs / rso) - CLOUDINESS_FACTOR
    rnl = sigma_t4 * humidity * cloudiness

    return rns - rnl
