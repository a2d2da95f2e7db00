#!/usr/bin/env python3
"""Analyze a day and generate the sun path chart from the current config.

Run this script after editing config/default_config.json to update the chart.

Usage:
    python generate_visualization.py                    # Use today's date
    python generate_visualization.py 2024-06-21        # Summer solstice
    python generate_visualization.py 2024-12-21 --json # Winter solstice, JSON summary
"""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from sun_cave_simulator.core.geometry import field_of_view_deg
from sun_cave_simulator.service.service import analyze_date, load_config
from sun_cave_simulator.simulator.time_range import save_analysis_result
from sun_cave_simulator.visualization.solar_path_chart import save_solar_path_html


def _format_time(value) -> str:
    return value.strftime("%H:%M") if value is not None else "--:--"


def main():
    parser = argparse.ArgumentParser(description="Analyze sunlight reaching the cave for a day")
    parser.add_argument("date", nargs="?", help="Date in YYYY-MM-DD format (default: today)")
    parser.add_argument("--config", type=str, default="config/default_config.json", help="Path to config file")
    parser.add_argument("--output", type=str, default="examples/solar_path.html", help="HTML output path")
    parser.add_argument("--json", type=str, help="Also save the analysis as JSON to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.date:
        try:
            target_date = datetime.strptime(args.date, "%Y-%m-%d").date()
        except ValueError:
            print(f"Invalid date format: {args.date}")
            print("Use YYYY-MM-DD format, e.g., 2024-06-21")
            sys.exit(1)
    else:
        target_date = date.today()

    print("=" * 60)
    print("Sun-Cave Analysis")
    print("=" * 60)

    config = load_config(args.config)
    cave = config.cave

    print(f"\nLocation: {config.location.latitude:.4f}, {config.location.longitude:.4f}")
    print(f"Date: {target_date.strftime('%Y-%m-%d (%A)')}")
    print(f"Cave: facing {cave.orientation:.0f}°, {cave.width} m wide, {cave.depth} m deep")
    print(f"Field of view: {field_of_view_deg(cave):.2f}°")

    result = analyze_date(target_date, args.config)

    print(f"\nSunrise:    {_format_time(result.sunrise_time)}")
    print(f"Solar noon: {_format_time(result.solar_noon)}")
    print(f"Sunset:     {_format_time(result.sunset_time)}")
    if result.daylight_hours is not None:
        print(f"Daylight:   {result.daylight_hours:.2f} h")

    print(f"\nVisible samples:        {len(result.visible_points)}")
    print(f"Direct sunlight samples: {len(result.direct_sunlight_points)}")
    print(f"Avoidance samples:       {len(result.avoidance_points)}")
    print(f"Avoidance rate:          {result.avoidance_rate:.0f}%")

    print(f"\nAvoidance periods: {len(result.avoidance_periods)}")
    for period in result.avoidance_periods:
        print(
            f"  - {_format_time(period.start)} - {_format_time(period.end)}"
            f" ({period.duration_minutes:.0f} minutes)"
        )

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    save_solar_path_html(result, cave, output_path, title=f"Solar Path & Cave Interaction, {target_date}")
    print(f"\nSaved chart to: {output_path}")

    if args.json:
        save_analysis_result(result, args.json, include_points=True)
        print(f"Saved analysis to: {args.json}")


if __name__ == "__main__":
    main()
