"""Budyko bucket model numerical constants.

Fixed values used by the radiation, Priestley-Taylor and bucket computations,
the spin-up policy of the simulation driver, and the default georeferencing
of the 5 km continental grid read and written by the I/O helpers.
"""

# Representative Julian day of each calendar month (January..December)
JULIAN_DAYS: tuple[int, ...] = (15, 45, 74, 105, 135, 166, 196, 227, 258, 288, 319, 349)
N_MONTHS: int = 12
DAYS_PER_YEAR: float = 365.0

# Orbital terms (Allen et al. eq. 23 and 24)
ECCENTRICITY_AMPLITUDE: float = 0.033
DECLINATION_AMPLITUDE: float = 0.409  # [rad]
DECLINATION_PHASE: float = 1.39  # [rad]

# Radiation (Allen et al.)
EXTRATERRESTRIAL_FACTOR: float = 37.58603136  # 24*60/pi * Gsc [MJ m-2 day-1]
CLEAR_SKY_BASE: float = 0.75  # [-]
CLEAR_SKY_ELEVATION_FACTOR: float = 2e5  # [m-1]
ALBEDO_COMPLEMENT: float = 0.77  # 1 - 0.23 grass reference albedo
SIGMA_T4_SLOPE: float = 0.5195  # linearised sigma*T^4 [MJ m-2 day-1 C-1]
SIGMA_T4_INTERCEPT: float = 26.361  # [MJ m-2 day-1]
HUMIDITY_BASE: float = 0.34
HUMIDITY_SLOPE: float = 0.14
CLOUDINESS_FACTOR: float = 1.35

# Vapour pressure (Tetens form)
SVP_COEFFICIENT: float = 0.6108  # [kPa]
SVP_EXPONENT: float = 17.27
SVP_OFFSET: float = 273.3  # [C]
SVP_SLOPE_NUMERATOR: float = 4098.0
SVP_SLOPE_OFFSET: float = 237.3  # [C]

# Priestley-Taylor
SEA_LEVEL_PRESSURE: float = 101.38  # [kPa]
PRESSURE_EXPONENT: float = 5.26
REFERENCE_TEMPERATURE_K: float = 293.0
LAPSE_RATE: float = 0.0065  # [K m-1]
LATENT_HEAT_BASE: float = 2.501  # [MJ kg-1]
LATENT_HEAT_SLOPE: float = 0.002361  # [MJ kg-1 C-1]
PSYCHROMETRIC_COEFFICIENT: float = 0.0016286
PRIESTLEY_TAYLOR_ALPHA: float = 1.26

# Budyko bucket
BUDYKO_EXPONENT: float = 1.9
STORAGE_INIT_FRACTION: float = 0.5  # initial storage as a fraction of capacity

# Spin-up policy: simulate N_YEARS annual cycles, keep the last one
N_YEARS: int = 4

# Default georeferencing of the 5 km grid
GRID_XLLCORNER: float = 111.975
GRID_YLLCORNER: float = -44.525
GRID_CELLSIZE: float = 0.05
GRID_NODATA: float = -9999.0
