"""Config-backed service functions."""

from .service import (
    analyze_date,
    check_cave_sunlight,
    get_cave_sunlight_details,
    get_cave_sunlight_state,
)

__all__ = [
    "analyze_date",
    "check_cave_sunlight",
    "get_cave_sunlight_details",
    "get_cave_sunlight_state",
]
