"""Core sun position and cave hit-test components."""

from .models import (
    AnalysisResult,
    AvoidancePeriod,
    CaveGeometry,
    Config,
    SimulationParams,
    SolarPathPoint,
    SolarPosition,
    TimeRange,
)
from .ephemeris import AstralEphemeris, NoaaEphemeris, SunTimes, get_ephemeris
from .sun_position import calculate_solar_position, canonical_azimuth
from .geometry import angular_separation, compass_direction, field_of_view_deg
from .hit_test import HitResult, check_sun_hits_cave, evaluate_cave_exposure

__all__ = [
    "AnalysisResult",
    "AvoidancePeriod",
    "CaveGeometry",
    "Config",
    "SimulationParams",
    "SolarPathPoint",
    "SolarPosition",
    "TimeRange",
    "AstralEphemeris",
    "NoaaEphemeris",
    "SunTimes",
    "get_ephemeris",
    "calculate_solar_position",
    "canonical_azimuth",
    "angular_separation",
    "compass_direction",
    "field_of_view_deg",
    "HitResult",
    "check_sun_hits_cave",
    "evaluate_cave_exposure",
]
