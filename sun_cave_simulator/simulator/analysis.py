"""Day-level analysis of sunlight reaching the cave."""

import logging
from datetime import date, datetime, time
from typing import Optional

from ..core.ephemeris import DEFAULT_EPHEMERIS, Ephemeris
from ..core.models import AnalysisResult, SimulationParams, TimeRange
from .time_range import find_avoidance_periods, generate_solar_path

logger = logging.getLogger(__name__)

# Day-level analysis always samples at this cadence
DAY_INTERVAL_MINUTES = 15


def day_time_range(day: date, interval_minutes: float = DAY_INTERVAL_MINUTES) -> TimeRange:
    """Time range covering 00:00:00.000 to 23:59:59.999 of a local day."""
    return TimeRange(
        start=datetime.combine(day, time.min),
        end=datetime.combine(day, time(23, 59, 59, 999000)),
        interval_minutes=interval_minutes,
    )


def analyze_solar_behavior(
    params: SimulationParams,
    ephemeris: Optional[Ephemeris] = None,
) -> AnalysisResult:
    """Analyze a full day of sun positions against the cave geometry.

    The caller's time range is replaced by the whole of params.date sampled
    every 15 minutes. params itself is left untouched.

    Args:
        params: Location, date and cave geometry.
        ephemeris: Sun position backend. Defaults to astral.

    Returns:
        AnalysisResult with sun times, path points and avoidance periods.
    """
    backend = ephemeris or DEFAULT_EPHEMERIS
    day = params.day

    times = backend.times(day, params.latitude, params.longitude)

    day_params = SimulationParams(
        latitude=params.latitude,
        longitude=params.longitude,
        date=day,
        cave=params.cave,
        time_range=day_time_range(day),
    )
    path_points = generate_solar_path(day_params, backend)
    avoidance_periods = find_avoidance_periods(path_points)

    logger.debug(
        "Analyzed %s at (%.4f, %.4f) with %s: %d points, %d avoidance periods",
        day, params.latitude, params.longitude, backend.name,
        len(path_points), len(avoidance_periods),
    )

    return AnalysisResult(
        sunrise_time=times.sunrise,
        sunset_time=times.sunset,
        solar_noon=times.solar_noon,
        path_points=path_points,
        avoidance_periods=avoidance_periods,
    )
