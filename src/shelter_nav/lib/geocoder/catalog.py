"""Region-code catalog: fetch the name → code table and match names against it.

The catalog is a single JSON object mapping full region names (prefecture
followed by municipality, e.g. ``"東京都千代田区"``) to opaque region codes.
Matching runs an ordered list of matchers; the first one that finds an
entry wins.  Within a matcher, ties go to the first entry in catalog order.
"""

from collections.abc import Callable

import httpx
from loguru import logger

from shelter_nav.core.errors import NetworkFailureError
from shelter_nav.lib.geocoder.base import RegionNames

DEFAULT_TIMEOUT = 10.0

RegionCatalog = dict[str, str]
CatalogMatcher = Callable[[RegionCatalog, RegionNames], str | None]


class RegionCatalogClient:
    """Fetches the region name → code catalog from the dataset provider.

    Args:
        url: Full catalog URL.
        timeout: Request timeout in seconds.
        user_agent: User-Agent header value.
    """

    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT, user_agent: str | None = None) -> None:
        self._url = url
        self._timeout = timeout
        self._user_agent = user_agent

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self) -> RegionCatalog:
        """Download and validate the catalog.

        Returns:
            Mapping of region name to region code, in provider order.

        Raises:
            NetworkFailureError: On transport, HTTP, or parse errors.
        """
        headers = {"User-Agent": self._user_agent} if self._user_agent else None
        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.get(self._url, headers=headers)
                response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Region catalog HTTP error {e.response.status_code}")
            raise NetworkFailureError(
                "region-catalog",
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Region catalog request failed: {e.__class__.__name__}")
            raise NetworkFailureError("region-catalog", "Catalog request failed") from e
        except ValueError as e:
            raise NetworkFailureError("region-catalog", f"Failed to parse catalog: {e}") from e

        if not isinstance(data, dict):
            raise NetworkFailureError("region-catalog", "Catalog must be a JSON object")

        catalog = {str(name): str(code) for name, code in data.items()}
        logger.info("Region catalog loaded: {} entries", len(catalog))
        return catalog


def match_exact(catalog: RegionCatalog, names: RegionNames) -> str | None:
    """Entry whose name is exactly prefecture + city."""
    return catalog.get(names.full_name)


def match_city_and_prefecture(catalog: RegionCatalog, names: RegionNames) -> str | None:
    """First entry whose name contains both the city and the prefecture."""
    for name, code in catalog.items():
        if names.city in name and names.prefecture in name:
            return code
    return None


def match_city_only(catalog: RegionCatalog, names: RegionNames) -> str | None:
    """First entry whose name contains the city.

    Ambiguous when several prefectures share a municipality name; catalog
    order decides.
    """
    for name, code in catalog.items():
        if names.city in name:
            return code
    return None


CATALOG_MATCHERS: tuple[CatalogMatcher, ...] = (
    match_exact,
    match_city_and_prefecture,
    match_city_only,
)


def match_region_code(
    catalog: RegionCatalog,
    names: RegionNames,
    matchers: tuple[CatalogMatcher, ...] = CATALOG_MATCHERS,
) -> str | None:
    """Run ``matchers`` in order and return the first region code found.

    Args:
        catalog: Region name → code mapping.
        names: City and prefecture names to look up.
        matchers: Ordered matcher functions.

    Returns:
        The matched region code, or None if no matcher succeeds.
    """
    for matcher in matchers:
        code = matcher(catalog, names)
        if code is not None:
            logger.info("Region code {} matched by {}", code, matcher.__name__)
            return code
    logger.info("No catalog entry matched {!r}", names.full_name)
    return None
