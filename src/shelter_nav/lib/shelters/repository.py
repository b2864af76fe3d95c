"""Shelter dataset fetching.

Shelters are published per region and per category at
``{base_url}/{category}/{region_code}.json`` as GeoJSON feature
collections.  Categories are tried in order and the first one with any
features wins; a failed or empty category is skipped, never retried.
"""

from collections.abc import Sequence

import httpx
from loguru import logger

from shelter_nav.core.errors import NoDataFoundError
from shelter_nav.lib.geo.types import ShelterFeature

DEFAULT_CATEGORIES = ("emergency", "evacuation")
DEFAULT_TIMEOUT = 10.0


class ShelterRepository:
    """Fetches shelter features for a region from the dataset provider.

    Args:
        base_url: Dataset base URL (no trailing slash needed).
        categories: Category keys in priority order.
        timeout: Request timeout in seconds.
        user_agent: Optional User-Agent header value.
    """

    def __init__(
        self,
        base_url: str,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._categories = tuple(categories)
        self._timeout = timeout
        self._user_agent = user_agent

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories

    def category_url(self, category: str, region_code: str) -> str:
        return f"{self._base_url}/{category}/{region_code}.json"

    async def fetch(self, region_code: str) -> list[ShelterFeature]:
        """Fetch shelters for a region, trying each category in order.

        Args:
            region_code: Region code from the resolver.

        Returns:
            Non-empty list of shelters from the first productive category.

        Raises:
            NoDataFoundError: If every category errored or had no features.
        """
        headers = {"User-Agent": self._user_agent} if self._user_agent else None

        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            for category in self._categories:
                url = self.category_url(category, region_code)
                try:
                    response = await client.get(url, headers=headers)
                    response.raise_for_status()
                    data = response.json()
                except httpx.HTTPStatusError as e:
                    logger.warning(f"Shelter category {category!r} HTTP {e.response.status_code}, skipping")
                    continue
                except httpx.HTTPError as e:
                    logger.warning(f"Shelter category {category!r} request failed ({e.__class__.__name__}), skipping")
                    continue
                except ValueError as e:
                    logger.warning(f"Shelter category {category!r} returned invalid JSON, skipping: {e}")
                    continue

                shelters = self._parse_features(data, category)
                if shelters:
                    logger.info("Loaded {} shelters for region {} from {!r}", len(shelters), region_code, category)
                    return shelters
                logger.info("Shelter category {!r} has no features for region {}", category, region_code)

        raise NoDataFoundError("No shelter data was found for this area")

    @staticmethod
    def _parse_features(data: object, category: str) -> list[ShelterFeature]:
        """Parse a feature collection, skipping malformed features."""
        features = data.get("features") if isinstance(data, dict) else None
        if not isinstance(features, list):
            return []

        shelters: list[ShelterFeature] = []
        for i, raw in enumerate(features):
            try:
                shelters.append(ShelterFeature.from_geojson(raw))
            except ValueError as e:
                logger.warning(f"Skipping malformed feature {i} in {category!r}: {e}")
        return shelters
