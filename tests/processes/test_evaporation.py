"""Tests for Priestley-Taylor potential evaporation process functions."""

import math

import numpy as np
import pytest
from budykogrid.processes.evaporation import (
    atmospheric_pressure,
    latent_heat,
    potential_evaporation,
    psychrometric_constant,
    saturation_vapour_pressure,
    vapour_pressure_slope,
)


class TestPsychrometricTerms:
    """Tests for the helper terms of the Priestley-Taylor equation."""

    def test_sea_level_pressure(self) -> None:
        assert atmospheric_pressure(0.0) == pytest.approx(101.38)

    def test_pressure_decreases_with_elevation(self) -> None:
        """About 90 kPa at 1000 m."""
        p = atmospheric_pressure(1000.0)
        assert p < atmospheric_pressure(0.0)
        assert p == pytest.approx(90.1, rel=1e-2)

    def test_saturation_vapour_pressure_at_freezing(self) -> None:
        assert saturation_vapour_pressure(0.0) == pytest.approx(0.6108)

    def test_saturation_vapour_pressure_increases(self) -> None:
        assert saturation_vapour_pressure(30.0) > saturation_vapour_pressure(10.0)

    def test_latent_heat_linear(self) -> None:
        assert latent_heat(0.0) == pytest.approx(2.501)
        assert latent_heat(20.0) == pytest.approx(2.501 - 0.002361 * 20.0)

    def test_psychrometric_constant(self) -> None:
        assert psychrometric_constant(101.38, 2.45) == pytest.approx(0.0016286 * 101.38 / 2.45)

    def test_slope_positive(self) -> None:
        for temp in (-20.0, 0.0, 15.0, 35.0):
            assert vapour_pressure_slope(temp) > 0.0


class TestPotentialEvaporation:
    """Tests for the potential_evaporation function."""

    def test_matches_reference_equation(self) -> None:
        """Agrees with a direct evaluation of the Priestley-Taylor equation."""
        t, z, rn = 20.0, 250.0, 15.0
        p = 101.38 * ((293 - 0.0065 * z) / 293) ** 5.26
        es = 0.6108 * math.exp(17.27 * t / (t + 273.3))
        lam = 2.501 - 0.002361 * t
        gamma = 0.0016286 * p / lam
        delta = 4098 * es / (t + 237.3) ** 2
        expected = 1.26 * rn / (lam * (1 + gamma / delta))

        assert potential_evaporation(t, z, rn) == pytest.approx(expected, rel=1e-9)

    def test_zero_radiation_no_evaporation(self) -> None:
        assert potential_evaporation(20.0, 0.0, 0.0) == 0.0

    def test_linear_in_net_radiation(self) -> None:
        single = potential_evaporation(18.0, 100.0, 5.0)
        double = potential_evaporation(18.0, 100.0, 10.0)
        assert double == pytest.approx(2.0 * single)

    def test_negative_radiation_not_clamped(self) -> None:
        assert potential_evaporation(5.0, 0.0, -2.0) < 0.0

    def test_higher_elevation_more_evaporation(self) -> None:
        """Lower pressure reduces the psychrometric constant."""
        assert potential_evaporation(15.0, 2000.0, 12.0) > potential_evaporation(15.0, 0.0, 12.0)

    def test_warmer_air_more_evaporation(self) -> None:
        assert potential_evaporation(30.0, 0.0, 12.0) > potential_evaporation(5.0, 0.0, 12.0)

    def test_nan_radiation_propagates(self) -> None:
        assert np.isnan(potential_evaporation(20.0, 0.0, np.nan))
