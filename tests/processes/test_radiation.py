"""Tests for net radiation process functions.

Tests verify the orbital terms, extraterrestrial radiation and the net
radiation chain against a direct evaluation of the Allen et al. equations.
"""

import math

import numpy as np
import pytest
from budykogrid.processes.radiation import (
    extraterrestrial_radiation,
    inverse_relative_distance,
    net_radiation,
    solar_declination,
    sunset_hour_angle,
)


def _reference_net_radiation(
    lat: float, z: float, dr: float, decl: float, krs: float, tmax: float, tmin: float
) -> float:
    """Evaluate the radiation chain step by step with the math module."""
    omega = math.acos(-math.tan(lat) * math.tan(decl))
    ra = 37.58603136 * dr * (omega * math.sin(lat) * math.sin(decl) + math.cos(lat) * math.cos(decl) * math.sin(omega))
    rs = krs * math.sqrt(tmax - tmin) * ra
    rso = (0.75 + 2e5 * z) * ra
    rns = 0.77 * rs
    sigma = ((0.5195 * tmax + 26.361) + (0.5195 * tmin + 26.361)) / 2
    ea = 0.6108 * math.exp(17.27 * tmin / (tmin + 273.3))
    rnl = sigma * (0.34 - 0.14 * math.sqrt(ea)) * (1.35 * (rs / rso) - 1.35)
    return rns - rnl


class TestOrbitalTerms:
    """Tests for inverse_relative_distance and solar_declination."""

    def test_distance_factor_at_perihelion(self) -> None:
        """Start of the year is closest to the sun: dr near 1.033."""
        assert inverse_relative_distance(0.0) == pytest.approx(1.033)

    def test_distance_factor_at_aphelion(self) -> None:
        """Mid-year is furthest from the sun: dr near 0.967."""
        assert inverse_relative_distance(182.5) == pytest.approx(0.967)

    def test_declination_at_june_solstice(self) -> None:
        """Declination peaks near +0.409 rad around day 172."""
        assert solar_declination(172.0) == pytest.approx(0.409, rel=1e-3)

    def test_declination_at_december_solstice(self) -> None:
        """Declination bottoms near -0.409 rad around day 355."""
        assert solar_declination(355.0) == pytest.approx(-0.409, rel=1e-2)

    def test_declination_bounded(self) -> None:
        """Declination never exceeds the tilt amplitude."""
        for day in range(1, 366):
            assert abs(solar_declination(float(day))) <= 0.409 + 1e-12


class TestExtraterrestrialRadiation:
    """Tests for sunset_hour_angle and extraterrestrial_radiation."""

    def test_equator_equinox_hour_angle(self) -> None:
        """Twelve hours of daylight at the equator: omega = pi/2."""
        assert sunset_hour_angle(0.0, 0.0) == pytest.approx(math.pi / 2)

    def test_equator_equinox_radiation(self) -> None:
        """At lat=0, decl=0, dr=1 Ra equals the extraterrestrial factor."""
        assert extraterrestrial_radiation(0.0, 1.0, 0.0) == pytest.approx(37.58603136)

    def test_summer_hemisphere_receives_more(self) -> None:
        """Southern latitudes receive more radiation in the southern summer."""
        decl = solar_declination(349.0)
        dr = inverse_relative_distance(349.0)
        south = extraterrestrial_radiation(math.radians(-35.0), dr, decl)
        north = extraterrestrial_radiation(math.radians(35.0), dr, decl)
        assert south > north

    def test_polar_night_is_nan(self) -> None:
        """Hour angle outside the acos domain gives NaN, not an exception."""
        assert np.isnan(sunset_hour_angle(math.radians(80.0), 0.4))


class TestNetRadiation:
    """Tests for the net_radiation function."""

    def test_matches_reference_equations(self) -> None:
        """Compiled function agrees with a step-by-step evaluation."""
        cases = [
            (0.0, 0.0, 1.0, 0.0, 0.17, 25.0, 15.0),
            (math.radians(-30.0), 0.0, 1.03, -0.4, 0.16, 32.0, 18.0),
            (math.radians(-42.0), 0.0, 0.97, 0.4, 0.19, 12.0, 2.0),
        ]
        for args in cases:
            assert net_radiation(*args) == pytest.approx(_reference_net_radiation(*args), rel=1e-9)

    def test_equator_within_physical_range(self) -> None:
        """Equatorial grass reference surface: Rn between 5 and 20 MJ/m2/day."""
        rn = net_radiation(0.0, 0.0, 1.0, 0.0, 0.17, 25.0, 15.0)
        assert 5.0 <= rn <= 20.0

    def test_is_pure(self) -> None:
        """Identical inputs give identical outputs."""
        args = (math.radians(-25.0), 350.0, 1.01, -0.2, 0.16, 30.0, 14.0)
        assert net_radiation(*args) == net_radiation(*args)

    def test_larger_temperature_range_more_shortwave(self) -> None:
        """The Hargreaves estimate grows with the diurnal temperature range."""
        narrow = net_radiation(0.0, 0.0, 1.0, 0.0, 0.17, 22.0, 18.0)
        wide = net_radiation(0.0, 0.0, 1.0, 0.0, 0.17, 30.0, 10.0)
        assert wide > narrow

    def test_polar_night_propagates_nan(self) -> None:
        """Out-of-domain latitude/declination give NaN net radiation."""
        assert np.isnan(net_radiation(math.radians(80.0), 0.0, 1.0, -0.4, 0.17, 5.0, -5.0))

    def test_inverted_temperatures_give_nan(self) -> None:
        """tmax < tmin leaves the square root domain."""
        assert np.isnan(net_radiation(0.0, 0.0, 1.0, 0.0, 0.17, 10.0, 15.0))
