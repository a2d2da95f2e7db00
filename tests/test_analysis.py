"""Tests for the day-level analysis."""

import math
from datetime import date, datetime, time, timedelta

import pytest

from sun_cave_simulator.core.ephemeris import AstralEphemeris, NoaaEphemeris
from sun_cave_simulator.core.models import CaveGeometry, SimulationParams, TimeRange
from sun_cave_simulator.simulator.analysis import analyze_solar_behavior, day_time_range

DAY = date(2024, 6, 21)


def make_params(interval_minutes=60, start=None, end=None, cave=None, day=DAY) -> SimulationParams:
    return SimulationParams(
        latitude=31.9539,
        longitude=35.9106,
        date=day,
        cave=cave or CaveGeometry.default(),
        time_range=TimeRange(
            start=start or datetime.combine(DAY, time(9, 0)),
            end=end or datetime.combine(DAY, time(10, 0)),
            interval_minutes=interval_minutes,
        ),
    )


class TestDayTimeRange:
    """Tests for day_time_range."""

    def test_bounds(self):
        time_range = day_time_range(DAY)
        assert time_range.start == datetime(2024, 6, 21, 0, 0, 0)
        assert time_range.end == datetime(2024, 6, 21, 23, 59, 59, 999000)
        assert time_range.interval_minutes == 15


class TestAnalyzeSolarBehavior:
    """Tests for analyze_solar_behavior."""

    def test_forced_quarter_hour_cadence(self, clock_ephemeris):
        """A caller-selected 60 minute interval is ignored."""
        result = analyze_solar_behavior(make_params(interval_minutes=60), clock_ephemeris)

        times = [p.time for p in result.path_points]
        assert len(times) == 96
        assert times[0] == datetime(2024, 6, 21, 0, 0)
        assert times[-1] == datetime(2024, 6, 21, 23, 45)
        assert all(b - a == timedelta(minutes=15) for a, b in zip(times, times[1:]))

    def test_caller_time_range_ignored(self, clock_ephemeris):
        narrow = make_params(
            interval_minutes=5,
            start=datetime(2024, 6, 21, 12, 0),
            end=datetime(2024, 6, 21, 12, 30),
        )
        result = analyze_solar_behavior(narrow, clock_ephemeris)
        assert len(result.path_points) == 96

    def test_params_not_mutated(self, clock_ephemeris):
        params = make_params(interval_minutes=60)
        analyze_solar_behavior(params, clock_ephemeris)

        assert params.time_range.interval_minutes == 60
        assert params.time_range.start == datetime(2024, 6, 21, 9, 0)
        assert params.time_range.end == datetime(2024, 6, 21, 10, 0)
        assert params.date == DAY

    def test_sun_times_from_ephemeris(self, clock_ephemeris):
        params = make_params()
        result = analyze_solar_behavior(params, clock_ephemeris)

        assert clock_ephemeris.times_calls == [(DAY, params.latitude, params.longitude)]
        assert result.sunrise_time == datetime(2024, 6, 21, 6, 0)
        assert result.sunset_time == datetime(2024, 6, 21, 18, 0)
        assert result.solar_noon == datetime(2024, 6, 21, 12, 0)

    def test_datetime_date_uses_calendar_day(self, clock_ephemeris):
        params = make_params(day=datetime(2024, 6, 21, 17, 42))
        result = analyze_solar_behavior(params, clock_ephemeris)

        assert clock_ephemeris.times_calls[0][0] == DAY
        assert result.path_points[0].time == datetime(2024, 6, 21, 0, 0)

    def test_avoidance_periods_and_summary(self, clock_ephemeris):
        result = analyze_solar_behavior(make_params(), clock_ephemeris)

        assert [(p.start.strftime("%H:%M"), p.end.strftime("%H:%M")) for p in result.avoidance_periods] == [
            ("06:15", "11:00"),
            ("13:00", "17:45"),
        ]
        assert len(result.visible_points) == 47
        assert len(result.direct_sunlight_points) == 7
        assert len(result.avoidance_points) == 40
        assert result.avoidance_rate == pytest.approx(100 * 40 / 47)
        assert result.daylight_hours == pytest.approx(12.0)

    def test_all_hit_day(self, clock_ephemeris):
        """A cave that sees the whole sky never has the sun avoiding it."""
        cave = CaveGeometry(orientation=180, width=1000, depth=0.001)
        result = analyze_solar_behavior(make_params(cave=cave), clock_ephemeris)

        assert result.avoidance_periods == []
        assert len(result.direct_sunlight_points) == len(result.visible_points)
        assert result.avoidance_rate == 0.0

    def test_recomputes_on_every_call(self, clock_ephemeris):
        params = make_params()
        first = analyze_solar_behavior(params, clock_ephemeris)
        second = analyze_solar_behavior(params, clock_ephemeris)

        assert first == second
        assert first is not second
        assert clock_ephemeris.position_calls == 2 * 96

    def test_to_dict(self, clock_ephemeris):
        data = analyze_solar_behavior(make_params(), clock_ephemeris).to_dict(include_points=True)

        assert data["n_points"] == 96
        assert data["daylight_hours"] == 12.0
        assert data["solar_noon"] == "2024-06-21T12:00:00"
        assert len(data["avoidance_periods"]) == 2
        assert data["avoidance_periods"][0]["duration_minutes"] == 285.0
        assert len(data["path_points"]) == 96


class TestRealEphemeris:
    """End-to-end runs with a real sun model."""

    def test_noaa_day(self):
        result = analyze_solar_behavior(make_params(), NoaaEphemeris())

        assert len(result.path_points) == 96
        assert 40 <= len(result.visible_points) <= 62
        assert result.daylight_hours == pytest.approx(14.3, abs=0.25)
        for period in result.avoidance_periods:
            assert period.start <= period.end

    def test_astral_day(self):
        result = analyze_solar_behavior(make_params())

        assert len(result.path_points) == 96
        assert result.sunrise_time < result.solar_noon < result.sunset_time
        assert max(p.position.elevation_deg for p in result.path_points) > 75

    def test_polar_night_has_no_periods(self):
        params = SimulationParams(
            latitude=78.22,
            longitude=15.65,
            date=date(2024, 12, 21),
            cave=CaveGeometry.default(),
            time_range=day_time_range(date(2024, 12, 21)),
        )
        result = analyze_solar_behavior(params, NoaaEphemeris())

        assert result.sunrise_time is None
        assert result.sunset_time is None
        assert result.daylight_hours is None
        assert result.visible_points == []
        assert result.avoidance_periods == []
        assert result.avoidance_rate == 0.0

    @pytest.mark.parametrize("ephemeris", [AstralEphemeris(), NoaaEphemeris()], ids=lambda e: e.name)
    @pytest.mark.parametrize("longitude", [math.nan, math.inf, -math.inf])
    def test_non_finite_longitude_does_not_raise(self, ephemeris, longitude):
        params = SimulationParams(
            latitude=31.9,
            longitude=longitude,
            date=DAY,
            cave=CaveGeometry.default(),
            time_range=day_time_range(DAY),
        )
        result = analyze_solar_behavior(params, ephemeris)

        assert len(result.path_points) == 96
        assert result.sunrise_time is None
        assert result.sunset_time is None
        assert result.solar_noon is None
        assert result.daylight_hours is None
        assert result.visible_points == []
        assert result.avoidance_periods == []
        assert all(math.isnan(p.position.elevation_deg) for p in result.path_points)
