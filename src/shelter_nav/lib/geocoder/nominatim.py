"""OpenStreetMap Nominatim reverse geocoder provider.

Uses the Nominatim reverse API (https://nominatim.org/release-docs/develop/api/Reverse/)
for coordinate-to-address resolution. Free but rate-limited to 1 req/sec.
"""

import httpx
from loguru import logger

from shelter_nav.core.errors import IncompleteAddressError, NetworkFailureError
from shelter_nav.lib.geo.types import Coordinate
from shelter_nav.lib.geocoder.base import BaseReverseGeocoder, RegionNames

NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "ShelterNavigationApp/1.0"

# Checked in order; the first non-empty field wins.
CITY_FIELDS = ("city", "town", "village", "suburb")
PREFECTURE_FIELDS = ("province", "state")


class NominatimReverseGeocoder(BaseReverseGeocoder):
    """OpenStreetMap Nominatim reverse geocoder provider."""

    def __init__(
        self,
        url: str = NOMINATIM_REVERSE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        email: str = "",
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._email = email
        self._user_agent = user_agent

    @property
    def provider_name(self) -> str:
        return "nominatim"

    async def reverse(self, coordinate: Coordinate) -> RegionNames:
        """Reverse geocode a coordinate using the Nominatim API.

        Args:
            coordinate: Point to look up.

        Returns:
            RegionNames extracted from the address details.

        Raises:
            NetworkFailureError: On transport or service errors.
            IncompleteAddressError: If no city or prefecture name is present.
        """
        params: dict[str, str | float | int] = {
            "lat": coordinate.lat,
            "lon": coordinate.lng,
            "format": "json",
            "addressdetails": 1,
        }
        if self._email:
            params["email"] = self._email

        headers = {"User-Agent": self._user_agent}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._url, params=params, headers=headers)
                response.raise_for_status()

            data = response.json()
        except httpx.TimeoutException as e:
            logger.warning("Nominatim reverse geocoder timeout")
            raise NetworkFailureError("nominatim", "Reverse geocoding request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Nominatim reverse geocoder HTTP error {e.response.status_code}")
            raise NetworkFailureError(
                "nominatim",
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Nominatim reverse geocoder connection error")
            raise NetworkFailureError("nominatim", "Connection to geocoding provider failed") from e
        except ValueError as e:
            logger.warning(f"Nominatim returned a non-JSON body: {e}")
            raise NetworkFailureError("nominatim", "Failed to parse response") from e

        return self._parse_response(data)

    def _parse_response(self, data: object) -> RegionNames:
        """Extract city and prefecture names from a Nominatim reverse response.

        Args:
            data: Decoded JSON body.

        Returns:
            RegionNames for the address.

        Raises:
            IncompleteAddressError: If the address block or either name is missing.
        """
        address = data.get("address") if isinstance(data, dict) else None
        if not isinstance(address, dict):
            raise IncompleteAddressError("Reverse geocoding returned no address")

        city = _first_field(address, CITY_FIELDS)
        prefecture = _first_field(address, PREFECTURE_FIELDS)
        logger.debug("Nominatim address parsed: city={!r} prefecture={!r}", city, prefecture)

        if not city or not prefecture:
            raise IncompleteAddressError("Address is missing a city or prefecture name")
        return RegionNames(city=city, prefecture=prefecture)


def _first_field(address: dict, fields: tuple[str, ...]) -> str | None:
    for name in fields:
        value = address.get(name)
        if value:
            return str(value)
    return None
