"""Process functions for the Budyko bucket model."""

from .bucket import bucket_step, budyko_actual_evaporation
from .evaporation import (
    atmospheric_pressure,
    latent_heat,
    potential_evaporation,
    psychrometric_constant,
    saturation_vapour_pressure,
    vapour_pressure_slope,
)
from .radiation import (
    extraterrestrial_radiation,
    inverse_relative_distance,
    net_radiation,
    solar_declination,
    sunset_hour_angle,
)

__all__ = [
    "atmospheric_pressure",
    "bucket_step",
    "budyko_actual_evaporation",
    "extraterrestrial_radiation",
    "inverse_relative_distance",
    "latent_heat",
    "net_radiation",
    "potential_evaporation",
    "psychrometric_constant",
    "saturation_vapour_pressure",
    "solar_declination",
    "sunset_hour_angle",
    "vapour_pressure_slope",
]
