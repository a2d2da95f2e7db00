"""Shared test fixtures."""

import math
from datetime import datetime, time

import pytest

from sun_cave_simulator.core.ephemeris import Ephemeris, SunTimes


class ClockEphemeris(Ephemeris):
    """Toy sun driven by the wall-clock hour.

    The azimuth sweeps 15° per hour (North at midnight, East at 06:00,
    South at noon, West at 18:00) and the elevation rises linearly from 0° at
    06:00 to 90° at noon, back to 0° at 18:00.
    """

    name = "clock"

    def __init__(self):
        self.position_calls = 0
        self.times_calls = []

    def position(self, when, latitude, longitude):
        self.position_calls += 1
        hour = when.hour + when.minute / 60 + when.second / 3600
        azimuth_deg = hour * 15.0
        elevation_deg = 90.0 - 15.0 * abs(hour - 12.0)
        return math.radians(azimuth_deg - 180.0), math.radians(elevation_deg)

    def times(self, day, latitude, longitude):
        self.times_calls.append((day, latitude, longitude))
        return SunTimes(
            sunrise=datetime.combine(day, time(6, 0)),
            sunset=datetime.combine(day, time(18, 0)),
            solar_noon=datetime.combine(day, time(12, 0)),
        )


@pytest.fixture
def clock_ephemeris():
    return ClockEphemeris()
