"""Value types shared across the geo, geocoder, and shelter libraries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_NAME_KEYS = ("name", "名称")
_ADDRESS_KEYS = ("address", "住所")
UNKNOWN_NAME = "Unknown name"
UNKNOWN_ADDRESS = "Unknown address"


@dataclass(frozen=True)
class Coordinate:
    """Immutable WGS84 coordinate in decimal degrees."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (-90 <= self.lat <= 90):
            msg = f"lat must be between -90 and 90, got {self.lat}"
            raise ValueError(msg)
        if not (-180 <= self.lng <= 180):
            msg = f"lng must be between -180 and 180, got {self.lng}"
            raise ValueError(msg)


def _first_present(properties: dict[str, Any], keys: tuple[str, ...], default: str) -> str:
    for key in keys:
        value = properties.get(key)
        if value:
            return str(value)
    return default


@dataclass(frozen=True)
class ShelterFeature:
    """A single shelter point as published by the dataset provider.

    Attributes:
        coordinate: Shelter location.
        properties: Provider properties, kept verbatim (name, address,
            locale-specific key variants).
    """

    coordinate: Coordinate
    properties: dict[str, Any] = field(default_factory=dict, hash=False)

    @classmethod
    def from_geojson(cls, feature: dict[str, Any]) -> ShelterFeature:
        """Build a feature from a GeoJSON point feature.

        Args:
            feature: Mapping with ``geometry.coordinates`` as ``[lng, lat]``.

        Returns:
            The parsed ShelterFeature.

        Raises:
            ValueError: If the geometry is missing or not a valid point.
        """
        try:
            lng, lat = feature["geometry"]["coordinates"][:2]
            coordinate = Coordinate(lat=float(lat), lng=float(lng))
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Invalid shelter geometry: {e}"
            raise ValueError(msg) from e
        properties = feature.get("properties")
        return cls(coordinate=coordinate, properties=dict(properties) if isinstance(properties, dict) else {})

    @property
    def name(self) -> str:
        return _first_present(self.properties, _NAME_KEYS, UNKNOWN_NAME)

    @property
    def address(self) -> str:
        return _first_present(self.properties, _ADDRESS_KEYS, UNKNOWN_ADDRESS)


@dataclass(frozen=True)
class RankedShelter:
    """A shelter with distance and bearing measured from a specific origin.

    Recreated in full whenever the origin or the shelter set changes.
    """

    feature: ShelterFeature
    distance_m: float
    bearing_deg: float

    @property
    def lat(self) -> float:
        return self.feature.coordinate.lat

    @property
    def lng(self) -> float:
        return self.feature.coordinate.lng

    @property
    def name(self) -> str:
        return self.feature.name

    @property
    def address(self) -> str:
        return self.feature.address
