"""Time-range simulation module."""

from .time_range import (
    find_avoidance_periods,
    generate_sample_times,
    generate_solar_path,
    save_analysis_result,
)
from .analysis import analyze_solar_behavior, day_time_range

__all__ = [
    "find_avoidance_periods",
    "generate_sample_times",
    "generate_solar_path",
    "save_analysis_result",
    "analyze_solar_behavior",
    "day_time_range",
]
