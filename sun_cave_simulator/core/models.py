"""Data models for the sun-cave simulation."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Optional, Union

AVOIDANCE_DESCRIPTION = "Sunlight avoids cave"
DEFAULT_INTERVAL_MINUTES = 15
EPHEMERIS_NAMES = ("astral", "noaa")


@dataclass(frozen=True)
class SolarPosition:
    """Sun position in the compass convention.

    Attributes:
        azimuth_deg: Azimuth in degrees, clockwise from North [0, 360).
        elevation_deg: Elevation above horizon in degrees [-90, +90].
        distance: Distance to the sun in AU (constant placeholder).
    """

    azimuth_deg: float
    elevation_deg: float
    distance: float = 1.0


@dataclass
class CaveGeometry:
    """Simplified cave mouth geometry.

    Attributes:
        orientation: Compass heading the cave mouth faces, in degrees (0 = North).
        tilt: Mouth tilt in degrees (0 = horizontal, 90 = vertical). Informational.
        width: Mouth width in meters.
        height: Mouth height in meters. Informational.
        depth: Depth of the cave in meters.
    """

    orientation: float = 180.0
    tilt: float = 15.0
    width: float = 10.0
    height: float = 5.0
    depth: float = 20.0

    @classmethod
    def default(cls) -> CaveGeometry:
        """South-facing cave, 10 m wide and 20 m deep."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> CaveGeometry:
        """Create from config dictionary."""
        defaults = cls()
        return cls(
            orientation=float(data.get("orientation", defaults.orientation)),
            tilt=float(data.get("tilt", defaults.tilt)),
            width=float(data.get("width", defaults.width)),
            height=float(data.get("height", defaults.height)),
            depth=float(data.get("depth", defaults.depth)),
        )

    def to_dict(self) -> dict:
        return {
            "orientation": self.orientation,
            "tilt": self.tilt,
            "width": self.width,
            "height": self.height,
            "depth": self.depth,
        }


@dataclass
class TimeRange:
    """Sampling window.

    Attributes:
        start: First instant to sample.
        end: Last instant that may be sampled (inclusive).
        interval_minutes: Step between samples in minutes.
    """

    start: datetime
    end: datetime
    interval_minutes: float = DEFAULT_INTERVAL_MINUTES


@dataclass
class SimulationParams:
    """Full set of inputs for one analysis.

    Attributes:
        latitude: Latitude in degrees (positive = North).
        longitude: Longitude in degrees (positive = East).
        date: Calendar day to analyze. A datetime's time of day is ignored.
        cave: Cave mouth geometry.
        time_range: Caller-selected sampling window.
    """

    latitude: float
    longitude: float
    date: Union[date, datetime]
    cave: CaveGeometry
    time_range: TimeRange

    @property
    def day(self) -> date:
        """The calendar day, without any time component."""
        if isinstance(self.date, datetime):
            return self.date.date()
        return self.date


@dataclass(frozen=True)
class SolarPathPoint:
    """A single sample of the sun's path.

    Attributes:
        time: Sample instant (naive, host-local wall clock).
        position: Sun position at this instant.
        is_visible: Whether the sun is above the horizon.
        hits_cave: Whether direct sunlight enters the cave mouth.
    """

    time: datetime
    position: SolarPosition
    is_visible: bool
    hits_cave: bool

    @property
    def is_avoiding(self) -> bool:
        """Sun is up but outside the cave's field of view."""
        return self.is_visible and not self.hits_cave

    def to_dict(self) -> dict:
        return {
            "time": self.time.isoformat(),
            "azimuth_deg": round(self.position.azimuth_deg, 2),
            "elevation_deg": round(self.position.elevation_deg, 2),
            "is_visible": self.is_visible,
            "hits_cave": self.hits_cave,
        }


@dataclass(frozen=True)
class AvoidancePeriod:
    """A contiguous run of samples where sunlight avoids the cave.

    Attributes:
        start: Time of the first avoiding sample.
        end: Time of the last avoiding sample (inclusive).
        description: Fixed label.
    """

    start: datetime
    end: datetime
    description: str = AVOIDANCE_DESCRIPTION

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "duration_minutes": round(self.duration_minutes, 1),
            "description": self.description,
        }


@dataclass
class AnalysisResult:
    """Result of a day-level analysis.

    Attributes:
        sunrise_time: Sunrise, or None if the sun does not rise that day.
        sunset_time: Sunset, or None if the sun does not set that day.
        solar_noon: Time of the sun's upper transit.
        path_points: Day samples in chronological order.
        avoidance_periods: Avoidance periods in chronological order.
    """

    sunrise_time: Optional[datetime]
    sunset_time: Optional[datetime]
    solar_noon: Optional[datetime]
    path_points: list[SolarPathPoint] = field(default_factory=list)
    avoidance_periods: list[AvoidancePeriod] = field(default_factory=list)

    @property
    def visible_points(self) -> list[SolarPathPoint]:
        return [p for p in self.path_points if p.is_visible]

    @property
    def avoidance_points(self) -> list[SolarPathPoint]:
        return [p for p in self.path_points if p.is_avoiding]

    @property
    def direct_sunlight_points(self) -> list[SolarPathPoint]:
        return [p for p in self.path_points if p.is_visible and p.hits_cave]

    @property
    def daylight_hours(self) -> Optional[float]:
        """Hours between sunrise and sunset, None when either is undefined."""
        if self.sunrise_time is None or self.sunset_time is None:
            return None
        return (self.sunset_time - self.sunrise_time).total_seconds() / 3600

    @property
    def avoidance_rate(self) -> float:
        """Percentage of visible samples during which sunlight avoids the cave."""
        n_visible = len(self.visible_points)
        if n_visible == 0:
            return 0.0
        return 100.0 * len(self.avoidance_points) / n_visible

    def to_dict(self, include_points: bool = False) -> dict:
        """Convert to dictionary."""

        def _iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value is not None else None

        daylight = self.daylight_hours
        result = {
            "sunrise": _iso(self.sunrise_time),
            "sunset": _iso(self.sunset_time),
            "solar_noon": _iso(self.solar_noon),
            "daylight_hours": round(daylight, 2) if daylight is not None else None,
            "n_points": len(self.path_points),
            "n_visible": len(self.visible_points),
            "n_avoidance_points": len(self.avoidance_points),
            "n_direct_sunlight_points": len(self.direct_sunlight_points),
            "avoidance_rate": round(self.avoidance_rate, 2),
            "avoidance_periods": [p.to_dict() for p in self.avoidance_periods],
        }
        if include_points:
            result["path_points"] = [p.to_dict() for p in self.path_points]
        return result


@dataclass
class Location:
    """Geographic location.

    Attributes:
        latitude: Latitude in degrees (positive = North).
        longitude: Longitude in degrees (positive = East, negative = West).
    """

    latitude: float
    longitude: float


def validate_coordinates(latitude: float, longitude: float) -> None:
    """Raise ValueError unless latitude/longitude are finite and in range."""
    if not (math.isfinite(latitude) and -90.0 <= latitude <= 90.0):
        raise ValueError(f"Latitude must be within [-90, 90], got {latitude}")
    if not (math.isfinite(longitude) and -180.0 <= longitude <= 180.0):
        raise ValueError(f"Longitude must be within [-180, 180], got {longitude}")


def validate_cave(cave: CaveGeometry) -> None:
    """Raise ValueError if the cave geometry gives a degenerate field of view."""
    if not cave.width > 0:
        raise ValueError(f"Cave width must be positive, got {cave.width}")
    if not cave.depth > 0:
        raise ValueError(f"Cave depth must be positive, got {cave.depth}")


def validate_params(params: SimulationParams) -> None:
    """Check a SimulationParams before handing it to the engine.

    The engine itself never raises on bad coordinates or geometry (results
    just fill with NaN), so callers building params by hand should run this.

    Raises:
        ValueError: On the first invalid field found.
    """
    validate_coordinates(params.latitude, params.longitude)
    validate_cave(params.cave)
    if not params.time_range.interval_minutes > 0:
        raise ValueError(
            f"interval_minutes must be positive, got {params.time_range.interval_minutes}"
        )


@dataclass
class Config:
    """Complete configuration for the simulation.

    Attributes:
        location: Where the cave is.
        cave: Cave mouth geometry.
        interval_minutes: Sampling interval for caller-selected time ranges.
        ephemeris: Name of the astronomical backend ("astral" or "noaa").
    """

    location: Location
    cave: CaveGeometry = field(default_factory=CaveGeometry.default)
    interval_minutes: float = DEFAULT_INTERVAL_MINUTES
    ephemeris: str = "astral"

    @classmethod
    def from_json_file(cls, path: str | Path) -> Config:
        """Load configuration from a JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Create configuration from a dictionary.

        Raises:
            ValueError: If a location, geometry or simulation value is invalid.
        """
        location_data = data.get("location")
        if not location_data:
            raise ValueError("Config must include a location with latitude/longitude")
        if "latitude" not in location_data or "longitude" not in location_data:
            raise ValueError("Location missing latitude/longitude")

        location = Location(
            latitude=float(location_data["latitude"]),
            longitude=float(location_data["longitude"]),
        )
        validate_coordinates(location.latitude, location.longitude)

        cave = CaveGeometry.from_dict(data.get("cave", {}) or {})
        validate_cave(cave)

        sim_data = data.get("simulation", {}) or {}
        interval = float(sim_data.get("interval_minutes", DEFAULT_INTERVAL_MINUTES))
        if not interval > 0:
            raise ValueError(f"interval_minutes must be positive, got {interval}")

        ephemeris = sim_data.get("ephemeris", "astral")
        if ephemeris not in EPHEMERIS_NAMES:
            raise ValueError(
                f"Unknown ephemeris '{ephemeris}', expected one of {EPHEMERIS_NAMES}"
            )

        return cls(
            location=location,
            cave=cave,
            interval_minutes=interval,
            ephemeris=ephemeris,
        )

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return {
            "location": {
                "latitude": self.location.latitude,
                "longitude": self.location.longitude,
            },
            "cave": self.cave.to_dict(),
            "simulation": {
                "interval_minutes": self.interval_minutes,
                "ephemeris": self.ephemeris,
            },
        }

    def to_params(self, target_date: date) -> SimulationParams:
        """Build SimulationParams covering the whole of target_date."""
        return SimulationParams(
            latitude=self.location.latitude,
            longitude=self.location.longitude,
            date=target_date,
            cave=self.cave,
            time_range=TimeRange(
                start=datetime.combine(target_date, time.min),
                end=datetime.combine(target_date, time(23, 59, 59, 999000)),
                interval_minutes=self.interval_minutes,
            ),
        )
