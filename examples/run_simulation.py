#!/usr/bin/env python3
"""Example script demonstrating the sun-cave simulator.

This script shows how to:
1. Load configuration
2. Run a single hit test
3. Sample the sun path over a custom time range
4. Run the day-level analysis and save a chart

Usage:
    python examples/run_simulation.py
"""

from datetime import date, datetime
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from sun_cave_simulator.core.ephemeris import get_ephemeris
from sun_cave_simulator.core.geometry import compass_direction, field_of_view_deg
from sun_cave_simulator.core.hit_test import evaluate_cave_exposure
from sun_cave_simulator.core.models import Config, SolarPosition, TimeRange
from sun_cave_simulator.simulator.analysis import analyze_solar_behavior
from sun_cave_simulator.simulator.time_range import find_avoidance_periods, generate_solar_path
from sun_cave_simulator.visualization.solar_path_chart import save_solar_path_html


def main():
    """Run example simulation."""
    project_root = Path(__file__).parent.parent
    config_path = project_root / "config" / "default_config.json"
    target_date = date(2024, 6, 21)

    print("=" * 60)
    print("Sun-Cave Simulator - Example")
    print("=" * 60)

    print("\n1. Loading configuration...")
    config = Config.from_json_file(config_path)
    ephemeris = get_ephemeris(config.ephemeris)
    print(f"   - Location: ({config.location.latitude}, {config.location.longitude})")
    print(f"   - Cave facing {config.cave.orientation}°, field of view {field_of_view_deg(config.cave):.2f}°")

    print("\n2. Running single hit test...")
    position = SolarPosition(azimuth_deg=190, elevation_deg=45)
    result = evaluate_cave_exposure(position, config.cave)
    print(f"   - Sun position: azimuth={position.azimuth_deg}°, elevation={position.elevation_deg}°")
    print(f"   - Result: {'HIT' if result.is_hit else 'MISS'}")
    if not result.is_hit:
        print(f"   - Reason: {result.reason}")

    print("\n3. Sampling the morning every 30 minutes...")
    params = config.to_params(target_date)
    params.time_range = TimeRange(
        start=datetime(2024, 6, 21, 6, 0),
        end=datetime(2024, 6, 21, 12, 0),
        interval_minutes=30,
    )
    points = generate_solar_path(params, ephemeris)
    for point in points:
        status = "direct sun" if point.hits_cave else ("avoids" if point.is_visible else "night")
        print(
            f"   - {point.time:%H:%M}  az={point.position.azimuth_deg:6.1f}°"
            f" ({compass_direction(point.position.azimuth_deg):>2})"
            f"  el={point.position.elevation_deg:5.1f}°  {status}"
        )
    print(f"   - Avoidance periods: {len(find_avoidance_periods(points))}")

    print("\n4. Full day analysis...")
    analysis = analyze_solar_behavior(params, ephemeris)
    print(f"   - Sunrise {analysis.sunrise_time:%H:%M}, sunset {analysis.sunset_time:%H:%M}")
    print(f"   - {len(analysis.path_points)} samples, avoidance rate {analysis.avoidance_rate:.0f}%")
    for period in analysis.avoidance_periods:
        print(f"     - {period.start:%H:%M} to {period.end:%H:%M} ({period.duration_minutes:.0f} min)")

    output_path = project_root / "examples" / "solar_path.html"
    save_solar_path_html(analysis, config.cave, output_path)
    print(f"   - Saved chart to: {output_path}")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
