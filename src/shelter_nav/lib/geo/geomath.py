"""Great-circle distance, initial bearing, and compass labels.

Pure functions over :class:`Coordinate`; no state and no failure modes.
"""

import math

from shelter_nav.lib.geo.types import Coordinate

EARTH_RADIUS_M = 6_371_000.0

COMPASS_POINTS = (
    "North",
    "Northeast",
    "East",
    "Southeast",
    "South",
    "Southwest",
    "West",
    "Northwest",
)


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates.

    Args:
        a: First coordinate.
        b: Second coordinate.

    Returns:
        Distance in metres, symmetric in its arguments.
    """
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)
    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push h a hair past 1 for antipodal points.
    h = min(1.0, h)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing(origin: Coordinate, target: Coordinate) -> float:
    """Initial great-circle bearing from ``origin`` toward ``target``.

    Args:
        origin: Start point.
        target: Destination point.

    Returns:
        Degrees clockwise from true north in ``[0, 360)``.  Identical points
        yield an arbitrary in-range value.
    """
    phi1 = math.radians(origin.lat)
    phi2 = math.radians(target.lat)
    d_lambda = math.radians(target.lng - origin.lng)
    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)
    result = math.degrees(math.atan2(y, x)) % 360.0
    # -1e-15 % 360 == 360.0 in floating point
    return 0.0 if result >= 360.0 else result


def direction_label(bearing_deg: float) -> str:
    """Name of the nearest of the eight principal compass points."""
    index = math.floor(bearing_deg / 45 + 0.5) % 8
    return COMPASS_POINTS[index]


def direction_text(bearing_deg: float) -> str:
    """Compass label followed by the rounded bearing, e.g. ``Northeast (47°)``."""
    return f"{direction_label(bearing_deg)} ({math.floor(bearing_deg + 0.5) % 360}°)"


def format_distance(meters: float) -> str:
    """Short distance label: whole metres below 1 km, tenths of a km above.

    Examples:
        ``format_distance(849.6)`` -> ``"850m"``;
        ``format_distance(1234)`` -> ``"1.2km"``.
    """
    if meters < 1000:
        return f"{math.floor(meters + 0.5)}m"
    return f"{meters / 1000:.1f}km"
