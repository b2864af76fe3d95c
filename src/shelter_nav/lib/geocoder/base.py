"""Abstract reverse geocoder interface for pluggable provider support."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from shelter_nav.lib.geo.types import Coordinate


@dataclass(frozen=True)
class RegionNames:
    """City- and prefecture-level names for a coordinate.

    Attributes:
        city: Municipality name (city, town, village, or suburb).
        prefecture: First-level administrative name (province or state).
    """

    city: str
    prefecture: str

    def __post_init__(self) -> None:
        if not self.city or not self.prefecture:
            msg = "city and prefecture must both be non-empty"
            raise ValueError(msg)

    @property
    def full_name(self) -> str:
        """Prefecture followed by city, the catalog's key format."""
        return self.prefecture + self.city


class BaseReverseGeocoder(ABC):
    """Abstract reverse geocoder interface. All providers must implement this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this geocoder provider."""

    @abstractmethod
    async def reverse(self, coordinate: Coordinate) -> RegionNames:
        """Resolve a coordinate to its city and prefecture names.

        Args:
            coordinate: Point to look up.

        Returns:
            RegionNames for the point.

        Raises:
            NetworkFailureError: On transport, HTTP, or parse errors.
            IncompleteAddressError: If the address lacks a city or prefecture.
        """
