"""Service functions for scripts and automations.

These wrap the core engine behind a config file so that callers only need to
pass a sun position or a date.

Example:
    ```python
    from sun_cave_simulator.service import check_cave_sunlight

    if check_cave_sunlight(azimuth=185, elevation=40):
        print("Sunlight is entering the cave")
    ```
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union

from ..core.ephemeris import get_ephemeris
from ..core.hit_test import evaluate_cave_exposure
from ..core.models import AnalysisResult, Config, SolarPosition
from ..core.sun_position import calculate_solar_position
from ..simulator.analysis import analyze_solar_behavior

# Default config path (can be overridden)
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "default_config.json"

# Cached config to avoid reloading on every call
_cached_config: Optional[Config] = None
_cached_config_path: Optional[str] = None


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """Load configuration, with caching for performance.

    Args:
        config_path: Path to config file. If None, uses default.

    Returns:
        Config object.
    """
    global _cached_config, _cached_config_path

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_path_str = str(config_path)

    if _cached_config is not None and _cached_config_path == config_path_str:
        return _cached_config

    _cached_config = Config.from_json_file(config_path)
    _cached_config_path = config_path_str

    return _cached_config


def clear_config_cache() -> None:
    """Clear the cached configuration.

    Call this if you've modified the config file and want to reload it.
    """
    global _cached_config, _cached_config_path
    _cached_config = None
    _cached_config_path = None


def current_sun_position(
    config_path: Optional[Union[str, Path]] = None,
    when: Optional[datetime] = None,
) -> SolarPosition:
    """Sun position at the configured location, now or at a given time."""
    config = load_config(config_path)
    return calculate_solar_position(
        when or datetime.now(),
        config.location.latitude,
        config.location.longitude,
        get_ephemeris(config.ephemeris),
    )


def check_cave_sunlight(
    sun_azimuth: float,
    sun_elevation: float,
    config_path: Optional[Union[str, Path]] = None,
) -> bool:
    """Check if direct sunlight is entering the cave.

    Args:
        sun_azimuth: Sun azimuth in degrees, clockwise from North.
        sun_elevation: Sun elevation in degrees.
        config_path: Optional path to config file.

    Returns:
        True if the sun is up and inside the cave's field of view.
    """
    config = load_config(config_path)
    position = SolarPosition(azimuth_deg=sun_azimuth, elevation_deg=sun_elevation)
    return evaluate_cave_exposure(position, config.cave).is_hit


def get_cave_sunlight_details(
    sun_azimuth: float,
    sun_elevation: float,
    config_path: Optional[Union[str, Path]] = None,
) -> dict:
    """Get detailed information about the current sunlight status.

    Returns:
        Dictionary with is_hit, reason, the input sun angles, the sun's
        angular separation from the cave orientation and the half field of view.
    """
    config = load_config(config_path)
    position = SolarPosition(azimuth_deg=sun_azimuth, elevation_deg=sun_elevation)
    result = evaluate_cave_exposure(position, config.cave)

    return {
        "is_hit": result.is_hit,
        "reason": result.reason,
        "sun_azimuth": sun_azimuth,
        "sun_elevation": sun_elevation,
        "angular_separation": result.angular_separation_deg,
        "half_field_of_view": result.half_fov_deg,
    }


def get_cave_sunlight_state(
    sun_azimuth: float,
    sun_elevation: float,
    config_path: Optional[Union[str, Path]] = None,
) -> str:
    """Get a human-readable state string for the current sunlight status.

    Returns:
        One of: "direct_sun", "below_horizon", "sun_avoids_cave"
    """
    config = load_config(config_path)
    position = SolarPosition(azimuth_deg=sun_azimuth, elevation_deg=sun_elevation)
    result = evaluate_cave_exposure(position, config.cave)

    if result.is_hit:
        return "direct_sun"
    elif result.reason == "sun_below_horizon":
        return "below_horizon"
    else:
        return "sun_avoids_cave"


def analyze_date(
    target_date: date,
    config_path: Optional[Union[str, Path]] = None,
) -> AnalysisResult:
    """Run the day-level analysis for the configured cave on target_date."""
    config = load_config(config_path)
    return analyze_solar_behavior(
        config.to_params(target_date),
        get_ephemeris(config.ephemeris),
    )
