#!/usr/bin/env python3
"""Command-line check of whether direct sunlight is entering the cave.

Usage:
    # With explicit sun position:
    python check_cave_sun.py <azimuth> <elevation> [--config path]
    python check_cave_sun.py 180 45

    # Sun position computed for the configured location, right now:
    python check_cave_sun.py --config /path/to/config.json
    python check_cave_sun.py --config /path/to/config.json --json

Returns:
    Prints "on" if sunlight enters the cave, "off" otherwise.
    Exit code 0 on success, 1 on error.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from sun_cave_simulator.service.service import (
    check_cave_sunlight,
    current_sun_position,
    get_cave_sunlight_details,
)


def main():
    parser = argparse.ArgumentParser(description="Check if direct sunlight enters the cave")
    parser.add_argument("azimuth", nargs="?", type=float, help="Sun azimuth angle")
    parser.add_argument("elevation", nargs="?", type=float, help="Sun elevation angle")
    parser.add_argument("--config", type=str, help="Path to config file")
    parser.add_argument("--json", action="store_true", help="Output JSON format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.azimuth is not None and args.elevation is not None:
            azimuth = args.azimuth
            elevation = args.elevation
        else:
            position = current_sun_position(args.config)
            azimuth, elevation = position.azimuth_deg, position.elevation_deg

        if args.json:
            details = get_cave_sunlight_details(azimuth, elevation, args.config)
            print(json.dumps(details))
        else:
            is_hit = check_cave_sunlight(azimuth, elevation, args.config)
            print("on" if is_hit else "off")

    except (OSError, ValueError) as e:
        if args.json:
            print(json.dumps({"is_hit": False, "error": str(e)}))
        else:
            print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
