"""Visualization module for the sun path and cave field of view."""

from .solar_path_chart import build_solar_path_figure, field_of_view_bands, save_solar_path_html

__all__ = [
    "build_solar_path_figure",
    "field_of_view_bands",
    "save_solar_path_html",
]
