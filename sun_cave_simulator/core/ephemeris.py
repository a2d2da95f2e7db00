"""Raw solar ephemeris backends.

The engine treats the astronomy as a black box with two operations:

- ``position(time, latitude, longitude)`` returns ``(azimuth_rad, altitude_rad)``
  with the azimuth measured from South, positive toward West.
- ``times(day, latitude, longitude)`` returns sunrise, sunset and solar noon.

Naive datetimes are host-local wall-clock time, both on input and on output.

Two backends are provided:

- ``AstralEphemeris`` uses the ``astral`` library (default).
- ``NoaaEphemeris`` uses the NOAA general solar position approximation and
  needs no third-party code.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from astral import Observer
from astral.sun import azimuth, elevation, noon, sunrise, sunset

logger = logging.getLogger(__name__)

# Zenith of the sun's upper limb at sunrise/sunset, including standard refraction
SUNRISE_ZENITH_DEG = 90.833


@dataclass
class SunTimes:
    """Day reference times in host-local wall clock.

    Attributes:
        sunrise: Sunrise, None if the sun never rises or never sets that day.
        sunset: Sunset, None if the sun never rises or never sets that day.
        solar_noon: Upper transit of the sun.
    """

    sunrise: Optional[datetime]
    sunset: Optional[datetime]
    solar_noon: Optional[datetime]


class Ephemeris:
    """Interface for raw sun position providers."""

    name = "base"

    def position(self, when: datetime, latitude: float, longitude: float) -> tuple[float, float]:
        """Return (azimuth_rad from South, altitude_rad) for an instant."""
        raise NotImplementedError

    def times(self, day: date, latitude: float, longitude: float) -> SunTimes:
        """Return sunrise, sunset and solar noon for a calendar day."""
        raise NotImplementedError


def to_utc(when: datetime) -> datetime:
    """Convert a datetime to aware UTC, reading naive values as host-local."""
    return when.astimezone(timezone.utc)


def to_local_naive(when: datetime) -> datetime:
    """Convert an aware datetime to naive host-local wall clock."""
    return when.astimezone().replace(tzinfo=None)


def local_timezone(day: date) -> tzinfo:
    """Host-local UTC offset in effect at noon of the given day."""
    return datetime.combine(day, time(12)).astimezone().tzinfo


def _undefined_times(day: date, latitude: float, longitude: float) -> SunTimes:
    logger.warning(
        "Sun times undefined on %s for non-finite coordinates (%s, %s)",
        day, latitude, longitude,
    )
    return SunTimes(sunrise=None, sunset=None, solar_noon=None)


class AstralEphemeris(Ephemeris):
    """Sun position and times from the astral library."""

    name = "astral"

    def position(self, when: datetime, latitude: float, longitude: float) -> tuple[float, float]:
        observer = Observer(latitude=latitude, longitude=longitude)
        when_utc = to_utc(when)

        # astral reports azimuth clockwise from North
        azimuth_deg = azimuth(observer, when_utc)
        elevation_deg = elevation(observer, when_utc, with_refraction=False)

        return math.radians(azimuth_deg - 180.0), math.radians(elevation_deg)

    def times(self, day: date, latitude: float, longitude: float) -> SunTimes:
        # astral clamps infinite coordinates instead of rejecting them
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return _undefined_times(day, latitude, longitude)

        observer = Observer(latitude=latitude, longitude=longitude)
        tz = local_timezone(day)

        rise = self._event(sunrise, observer, day, tz)
        setting = self._event(sunset, observer, day, tz)
        transit = self._event(noon, observer, day, tz)

        if rise is None or setting is None:
            # Polar day or night: neither boundary is meaningful on its own
            rise = setting = None

        return SunTimes(sunrise=rise, sunset=setting, solar_noon=transit)

    @staticmethod
    def _event(func, observer: Observer, day: date, tz: tzinfo) -> Optional[datetime]:
        try:
            return func(observer, day, tzinfo=tz).replace(tzinfo=None)
        except ValueError as e:
            logger.warning(
                "%s undefined on %s at (%.4f, %.4f): %s",
                func.__name__, day, observer.latitude, observer.longitude, e,
            )
            return None


class NoaaEphemeris(Ephemeris):
    """NOAA general solar position approximation.

    Accuracy is around a few arc-minutes for elevation, which is well below
    the resolution of the cave model.
    """

    name = "noaa"

    def position(self, when: datetime, latitude: float, longitude: float) -> tuple[float, float]:
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return math.nan, math.nan

        when_utc = to_utc(when)
        lat_rad = math.radians(latitude)

        hour = when_utc.hour + when_utc.minute / 60 + when_utc.second / 3600
        eqtime, decl = _eqtime_and_declination(when_utc.date(), hour)

        # True solar time (minutes)
        tst = hour * 60 + eqtime + 4 * longitude

        # Hour angle (degrees), negative in the morning
        ha = (tst / 4) - 180
        ha_rad = math.radians(ha)

        cos_zenith = (
            math.sin(lat_rad) * math.sin(decl)
            + math.cos(lat_rad) * math.cos(decl) * math.cos(ha_rad)
        )
        cos_zenith = max(-1.0, min(1.0, cos_zenith))
        zenith_rad = math.acos(cos_zenith)
        elevation_deg = 90 - math.degrees(zenith_rad)

        sin_zenith = math.sin(zenith_rad)
        if abs(sin_zenith) < 1e-10 or abs(math.cos(lat_rad)) < 1e-10:
            # Sun at zenith or observer at a pole: azimuth is undefined
            azimuth_deg = 180.0
        else:
            cos_azimuth = (
                (math.sin(lat_rad) * cos_zenith - math.sin(decl))
                / (math.cos(lat_rad) * sin_zenith)
            )
            cos_azimuth = max(-1.0, min(1.0, cos_azimuth))

            # Angle from South, toward West in the afternoon
            azimuth_from_south = math.degrees(math.acos(cos_azimuth))
            if ha <= 0:
                azimuth_deg = 180 - azimuth_from_south
            else:
                azimuth_deg = 180 + azimuth_from_south

        return math.radians(azimuth_deg - 180.0), math.radians(elevation_deg)

    def times(self, day: date, latitude: float, longitude: float) -> SunTimes:
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return _undefined_times(day, latitude, longitude)

        eqtime, decl = _eqtime_and_declination(day, 12.0)
        midnight_utc = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)

        def _at(minutes: float) -> datetime:
            return to_local_naive(midnight_utc + timedelta(minutes=minutes))

        solar_noon = _at(720 - 4 * longitude - eqtime)

        lat_rad = math.radians(latitude)
        denominator = math.cos(lat_rad) * math.cos(decl)
        if abs(denominator) < 1e-12:
            logger.warning("sunrise/sunset undefined at latitude %.4f", latitude)
            return SunTimes(sunrise=None, sunset=None, solar_noon=solar_noon)

        cos_ha = (
            math.cos(math.radians(SUNRISE_ZENITH_DEG)) / denominator
            - math.tan(lat_rad) * math.tan(decl)
        )
        if not -1.0 <= cos_ha <= 1.0:
            logger.warning(
                "Sun does not %s on %s at latitude %.4f",
                "set" if cos_ha < -1.0 else "rise", day, latitude,
            )
            return SunTimes(sunrise=None, sunset=None, solar_noon=solar_noon)

        ha = math.degrees(math.acos(cos_ha))
        return SunTimes(
            sunrise=_at(720 - 4 * (longitude + ha) - eqtime),
            sunset=_at(720 - 4 * (longitude - ha) - eqtime),
            solar_noon=solar_noon,
        )


def _eqtime_and_declination(day: date, hour: float) -> tuple[float, float]:
    """Equation of time (minutes) and solar declination (radians)."""
    day_of_year = day.timetuple().tm_yday
    days_in_year = 366 if _is_leap_year(day.year) else 365

    # Fractional year (radians)
    gamma = 2 * math.pi / days_in_year * (day_of_year - 1 + (hour - 12) / 24)

    eqtime = 229.18 * (
        0.000075
        + 0.001868 * math.cos(gamma)
        - 0.032077 * math.sin(gamma)
        - 0.014615 * math.cos(2 * gamma)
        - 0.040849 * math.sin(2 * gamma)
    )

    decl = (
        0.006918
        - 0.399912 * math.cos(gamma)
        + 0.070257 * math.sin(gamma)
        - 0.006758 * math.cos(2 * gamma)
        + 0.000907 * math.sin(2 * gamma)
        - 0.002697 * math.cos(3 * gamma)
        + 0.00148 * math.sin(3 * gamma)
    )
    return eqtime, decl


def _is_leap_year(year: int) -> bool:
    """Check if a year is a leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


_EPHEMERIDES = {
    AstralEphemeris.name: AstralEphemeris,
    NoaaEphemeris.name: NoaaEphemeris,
}


def get_ephemeris(name: str = "astral") -> Ephemeris:
    """Return an ephemeris backend by name.

    Raises:
        ValueError: If the name is not a known backend.
    """
    try:
        return _EPHEMERIDES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown ephemeris '{name}', expected one of {sorted(_EPHEMERIDES)}"
        ) from None


DEFAULT_EPHEMERIS = AstralEphemeris()
