"""Angular helpers for the cave field-of-view model.

Azimuth Convention:
    - 0° = North
    - 90° = East
    - 180° = South
    - 270° = West
    - Clockwise from North

The cave is modelled in the horizontal plane only: its mouth is a triangular
aperture seen from the innermost point, so the field of view is a cone of
azimuths centred on the cave orientation.
"""

import math

from .models import CaveGeometry

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def field_of_view_deg(cave: CaveGeometry) -> float:
    """Full angular width of the cave's illuminable cone.

    Args:
        cave: Cave geometry. Width and depth should be positive.

    Returns:
        Field of view in degrees. Wider or shallower caves see more sky.

    Examples:
        >>> round(field_of_view_deg(CaveGeometry(width=10, depth=20)), 2)
        28.07
    """
    return 2 * math.degrees(math.atan2(cave.width / 2, cave.depth))


def angular_separation(azimuth_a: float, azimuth_b: float) -> float:
    """Shortest-arc distance between two azimuths, in degrees [0, 180].

    Examples:
        >>> angular_separation(350, 10)
        20.0
    """
    return abs(((azimuth_a - azimuth_b + 180.0) % 360.0) - 180.0)


def field_of_view_bounds(cave: CaveGeometry) -> tuple[float, float]:
    """Azimuths of the left and right edges of the field of view, in [0, 360).

    The first bound can be greater than the second when the cone spans North.
    """
    half = field_of_view_deg(cave) / 2
    return (cave.orientation - half) % 360.0, (cave.orientation + half) % 360.0


def compass_direction(azimuth_deg: float) -> str:
    """Eight-point compass label for an azimuth (e.g. 100° -> "E")."""
    if not math.isfinite(azimuth_deg):
        return "-"
    index = int(((azimuth_deg % 360.0) + 22.5) // 45) % 8
    return COMPASS_POINTS[index]
