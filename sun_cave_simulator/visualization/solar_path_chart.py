"""Plotly chart of the sun path against the cave field of view.

The chart plots elevation against azimuth for every sample where the sun is
above the horizon. Samples are coloured by whether direct sunlight enters the
cave, and the cave's field of view is drawn as a shaded azimuth band.
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np
import plotly.graph_objects as go

from ..core.geometry import compass_direction, field_of_view_bounds
from ..core.models import AnalysisResult, CaveGeometry, SolarPathPoint

DIRECT_SUN_COLOR = "#ef4444"
AVOIDANCE_COLOR = "#10b981"
PATH_COLOR = "#f59e0b"
FOV_COLOR = "#3b82f6"


def _sample_trace(points: list[SolarPathPoint], name: str, color: str) -> go.Scatter:
    """Marker trace for a group of samples."""
    azimuths = np.array([p.position.azimuth_deg for p in points], dtype=float)
    elevations = np.array([p.position.elevation_deg for p in points], dtype=float)
    labels = [
        f"{p.time:%H:%M} {compass_direction(p.position.azimuth_deg)}"
        for p in points
    ]

    return go.Scatter(
        x=azimuths,
        y=elevations,
        mode="markers",
        marker=dict(color=color, size=8, line=dict(color="white", width=1)),
        text=labels,
        hovertemplate="%{text}<br>Azimuth %{x:.1f}°<br>Elevation %{y:.1f}°<extra></extra>",
        name=name,
    )


def field_of_view_bands(cave: CaveGeometry) -> list[tuple[float, float]]:
    """Azimuth intervals covered by the field of view, split at North.

    Returns:
        One (start, end) pair, or two when the cone spans 0°.
    """
    left, right = field_of_view_bounds(cave)
    if left <= right:
        return [(left, right)]
    return [(left, 360.0), (0.0, right)]


def build_solar_path_figure(
    result: AnalysisResult,
    cave: CaveGeometry,
    title: Optional[str] = None,
) -> go.Figure:
    """Build the sun path chart for a day analysis.

    Args:
        result: Output of the day-level analysis.
        cave: Cave geometry used for the analysis.
        title: Optional chart title.

    Returns:
        Plotly Figure.
    """
    fig = go.Figure()

    for x0, x1 in field_of_view_bands(cave):
        fig.add_vrect(
            x0=x0,
            x1=x1,
            fillcolor=FOV_COLOR,
            opacity=0.15,
            line_width=0,
            layer="below",
        )
    fig.add_vline(
        x=cave.orientation % 360.0,
        line=dict(color=FOV_COLOR, dash="dash", width=1),
        annotation_text="Cave",
        annotation_position="top",
    )

    visible = result.visible_points
    if visible:
        fig.add_trace(
            go.Scatter(
                x=[p.position.azimuth_deg for p in visible],
                y=[p.position.elevation_deg for p in visible],
                mode="lines",
                line=dict(color=PATH_COLOR, width=2),
                name="Solar path",
                hoverinfo="skip",
            )
        )

        direct = [p for p in visible if p.hits_cave]
        avoiding = [p for p in visible if not p.hits_cave]
        if direct:
            fig.add_trace(_sample_trace(direct, "Direct sunlight", DIRECT_SUN_COLOR))
        if avoiding:
            fig.add_trace(_sample_trace(avoiding, "Sunlight avoids cave", AVOIDANCE_COLOR))

        first, last = visible[0], visible[-1]
        fig.add_annotation(
            x=first.position.azimuth_deg,
            y=first.position.elevation_deg,
            text=f"Rise {first.time:%H:%M}",
            showarrow=True,
            arrowhead=2,
        )
        fig.add_annotation(
            x=last.position.azimuth_deg,
            y=last.position.elevation_deg,
            text=f"Set {last.time:%H:%M}",
            showarrow=True,
            arrowhead=2,
        )

    fig.update_layout(
        title=title or "Solar Path & Cave Interaction",
        xaxis=dict(title="Azimuth", range=[0, 360], dtick=45, ticksuffix="°"),
        yaxis=dict(title="Elevation", range=[0, 90], dtick=15, ticksuffix="°"),
        template="plotly_white",
        legend=dict(orientation="h", y=-0.2),
    )

    return fig


def save_solar_path_html(
    result: AnalysisResult,
    cave: CaveGeometry,
    output_path: Union[str, Path],
    title: Optional[str] = None,
) -> str:
    """Write the sun path chart to a standalone HTML file.

    Returns:
        The output path as a string.
    """
    fig = build_solar_path_figure(result, cave, title)
    fig.write_html(str(output_path))
    return str(output_path)
