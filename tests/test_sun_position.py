"""Tests for the sun position adapter."""

import math
from datetime import datetime

import pytest

from sun_cave_simulator.core.ephemeris import Ephemeris
from sun_cave_simulator.core.sun_position import calculate_solar_position, canonical_azimuth


class FixedEphemeris(Ephemeris):
    """Ephemeris that always reports the same raw angles."""

    name = "fixed"

    def __init__(self, azimuth_rad: float, altitude_rad: float):
        self.azimuth_rad = azimuth_rad
        self.altitude_rad = altitude_rad
        self.calls = []

    def position(self, when, latitude, longitude):
        self.calls.append((when, latitude, longitude))
        return self.azimuth_rad, self.altitude_rad


class TestCanonicalAzimuth:
    """Tests for canonical_azimuth."""

    @pytest.mark.parametrize(
        "raw_deg, expected",
        [
            (0.0, 180.0),  # South
            (-90.0, 90.0),  # East
            (90.0, 270.0),  # West
            (180.0, 0.0),  # North
            (-180.0, 0.0),  # North
            (45.0, 225.0),
            (-135.0, 45.0),
        ],
    )
    def test_compass_convention(self, raw_deg, expected):
        assert canonical_azimuth(math.radians(raw_deg)) == pytest.approx(expected, abs=1e-9)

    @pytest.mark.parametrize(
        "raw_rad",
        [
            -4 * math.pi,
            -math.pi - 1e-15,
            -math.pi,
            -1e-300,
            -1e-15,
            0.0,
            1e-15,
            math.pi - 1e-15,
            math.pi,
            2.5 * math.pi,
            123.456,
            -987.654,
        ],
    )
    def test_always_in_range(self, raw_rad):
        azimuth = canonical_azimuth(raw_rad)
        assert 0.0 <= azimuth < 360.0

    def test_dense_sweep_in_range(self):
        for i in range(-2000, 2001):
            azimuth = canonical_azimuth(i * 0.01)
            assert 0.0 <= azimuth < 360.0

    def test_nan(self):
        assert math.isnan(canonical_azimuth(math.nan))


class TestCalculateSolarPosition:
    """Tests for calculate_solar_position."""

    def test_converts_units(self):
        ephemeris = FixedEphemeris(azimuth_rad=math.radians(-90), altitude_rad=math.radians(30))
        when = datetime(2024, 6, 21, 9, 0)

        position = calculate_solar_position(when, 31.95, 35.91, ephemeris)

        assert position.azimuth_deg == pytest.approx(90.0)
        assert position.elevation_deg == pytest.approx(30.0)
        assert position.distance == 1.0
        assert ephemeris.calls == [(when, 31.95, 35.91)]

    def test_negative_altitude_kept(self):
        ephemeris = FixedEphemeris(azimuth_rad=0.0, altitude_rad=math.radians(-12))
        position = calculate_solar_position(datetime(2024, 1, 1), 0, 0, ephemeris)
        assert position.elevation_deg == pytest.approx(-12.0)

    @pytest.mark.parametrize(
        "latitude, longitude",
        [(math.nan, 0.0), (0.0, math.nan), (math.inf, 10.0), (10.0, -math.inf)],
    )
    def test_non_finite_coordinates_give_nan(self, latitude, longitude):
        ephemeris = FixedEphemeris(azimuth_rad=0.0, altitude_rad=0.5)
        position = calculate_solar_position(datetime(2024, 1, 1, 12), latitude, longitude, ephemeris)

        assert math.isnan(position.azimuth_deg)
        assert math.isnan(position.elevation_deg)
        assert ephemeris.calls == []

    def test_default_backend_is_astral(self):
        """Without an explicit backend the astral ephemeris is used."""
        position = calculate_solar_position(datetime(2024, 6, 21, 12, 0), 31.95, 35.91)
        assert 0.0 <= position.azimuth_deg < 360.0
        assert -90.0 <= position.elevation_deg <= 90.0
