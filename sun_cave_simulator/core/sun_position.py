"""Sun position for a location and time.

This module turns the raw output of an ephemeris backend into the compass
convention used everywhere else in the package:

- Azimuth: 0° = North, 90° = East, 180° = South, 270° = West
- Elevation: degrees above the horizon
"""

import math
from datetime import datetime
from typing import Optional

from .ephemeris import DEFAULT_EPHEMERIS, Ephemeris
from .models import SolarPosition


def canonical_azimuth(raw_azimuth_rad: float) -> float:
    """Convert a South-origin azimuth in radians to compass degrees [0, 360).

    Args:
        raw_azimuth_rad: Azimuth in radians, 0 = South, positive toward West.

    Returns:
        Azimuth in degrees clockwise from North. NaN input gives NaN.
    """
    azimuth_deg = (math.degrees(raw_azimuth_rad) + 180.0) % 360.0
    # A tiny negative value can round up to exactly 360.0
    if azimuth_deg >= 360.0:
        azimuth_deg = 0.0
    return azimuth_deg


def calculate_solar_position(
    when: datetime,
    latitude: float,
    longitude: float,
    ephemeris: Optional[Ephemeris] = None,
) -> SolarPosition:
    """Calculate sun position for a given location and time.

    Non-finite coordinates are not rejected; they produce a NaN position,
    which later reads as "sun not visible".

    Args:
        when: Instant to evaluate. Naive datetimes are host-local time.
        latitude: Latitude in degrees (positive = North).
        longitude: Longitude in degrees (positive = East).
        ephemeris: Backend to use. Defaults to the astral backend.

    Returns:
        SolarPosition with azimuth and elevation in degrees.
    """
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return SolarPosition(azimuth_deg=math.nan, elevation_deg=math.nan)

    backend = ephemeris or DEFAULT_EPHEMERIS
    azimuth_rad, altitude_rad = backend.position(when, latitude, longitude)

    return SolarPosition(
        azimuth_deg=canonical_azimuth(azimuth_rad),
        elevation_deg=math.degrees(altitude_rad),
    )
