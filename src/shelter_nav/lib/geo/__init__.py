"""Geo library — geodesy, nearest-shelter ranking, and pointer rotation.

Public API:
    - Coordinate / ShelterFeature / RankedShelter: Value types
    - distance / bearing: Great-circle distance and initial bearing
    - direction_label / direction_text: Eight-point compass labels
    - format_distance: Short human distance label
    - select_nearest: k-nearest selection, stable by input order
    - RotationTracker: Shortest-arc accumulated rotation
"""

from shelter_nav.lib.geo.geomath import (
    COMPASS_POINTS,
    EARTH_RADIUS_M,
    bearing,
    direction_label,
    direction_text,
    distance,
    format_distance,
)
from shelter_nav.lib.geo.nearest import DEFAULT_NEAREST_COUNT, rank_shelters, select_nearest
from shelter_nav.lib.geo.rotation import RotationTracker
from shelter_nav.lib.geo.types import Coordinate, RankedShelter, ShelterFeature

__all__ = [
    "COMPASS_POINTS",
    "DEFAULT_NEAREST_COUNT",
    "EARTH_RADIUS_M",
    "Coordinate",
    "RankedShelter",
    "RotationTracker",
    "ShelterFeature",
    "bearing",
    "direction_label",
    "direction_text",
    "distance",
    "format_distance",
    "rank_shelters",
    "select_nearest",
]
