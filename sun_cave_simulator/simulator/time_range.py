"""Time-range sampling of the sun path and avoidance-period segmentation.

This module walks a time range at a fixed interval, runs the cave hit test at
every sample, and groups consecutive samples where the sun is up but misses
the cave into avoidance periods.
"""

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from ..core.ephemeris import Ephemeris
from ..core.hit_test import check_sun_hits_cave
from ..core.models import AnalysisResult, AvoidancePeriod, SimulationParams, SolarPathPoint
from ..core.sun_position import calculate_solar_position


def generate_sample_times(
    start: datetime,
    end: datetime,
    interval_minutes: float,
) -> list[datetime]:
    """Build the sample instants start + k * interval that do not pass end.

    Args:
        start: First instant.
        end: Last allowed instant (inclusive).
        interval_minutes: Step between instants in minutes.

    Returns:
        Chronological list of instants. Empty if start is after end.

    Raises:
        ValueError: If interval_minutes is not positive.
    """
    if not interval_minutes > 0:
        raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")

    if start > end:
        return []

    step = timedelta(minutes=interval_minutes)
    n_steps = (end - start) // step
    return [start + k * step for k in range(n_steps + 1)]


def generate_solar_path(
    params: SimulationParams,
    ephemeris: Optional[Ephemeris] = None,
) -> list[SolarPathPoint]:
    """Sample the sun path over params.time_range.

    Args:
        params: Simulation parameters; only location, cave and time range are used.
        ephemeris: Sun position backend. Defaults to astral.

    Returns:
        One SolarPathPoint per sample, in chronological order.

    Raises:
        ValueError: If the time range interval is not positive.
    """
    time_range = params.time_range
    points = []

    for when in generate_sample_times(time_range.start, time_range.end, time_range.interval_minutes):
        position = calculate_solar_position(when, params.latitude, params.longitude, ephemeris)
        points.append(
            SolarPathPoint(
                time=when,
                position=position,
                is_visible=position.elevation_deg > 0,
                hits_cave=check_sun_hits_cave(position, params.cave),
            )
        )

    return points


def find_avoidance_periods(points: list[SolarPathPoint]) -> list[AvoidancePeriod]:
    """Group consecutive avoiding samples into avoidance periods.

    A sample is avoiding when the sun is visible but misses the cave. A period
    that is interrupted ends at the time of the last avoiding sample; a period
    still open after the final sample ends at that sample's time.

    Args:
        points: Samples in chronological order.

    Returns:
        Non-overlapping AvoidancePeriods in chronological order.
    """
    periods = []
    period_start: Optional[datetime] = None

    for i, point in enumerate(points):
        if point.is_visible and not point.hits_cave:
            if period_start is None:
                period_start = point.time
        elif period_start is not None:
            periods.append(AvoidancePeriod(start=period_start, end=points[i - 1].time))
            period_start = None

    # Avoidance runs to the end of the samples
    if period_start is not None:
        periods.append(AvoidancePeriod(start=period_start, end=points[-1].time))

    return periods


def save_analysis_result(
    result: AnalysisResult,
    path: str | Path,
    include_points: bool = False,
) -> None:
    """Save an analysis result to a JSON file.

    Args:
        result: The analysis result.
        path: Output file path.
        include_points: Whether to include every sampled point.
    """
    with open(path, "w") as f:
        json.dump(result.to_dict(include_points), f, indent=2)
