"""Geocoder library — coordinate to region-code resolution.

Public API:
    - RegionNames: City/prefecture pair from a reverse geocode
    - BaseReverseGeocoder: Abstract provider interface
    - NominatimReverseGeocoder: OpenStreetMap Nominatim provider
    - RegionCatalogClient: Region name → code catalog fetcher
    - match_region_code: Ordered exact / substring catalog matching
    - REGIONAL_CAPITALS / nearest_capital: Offline fallback table
    - RegionStrategy / CatalogRegionStrategy / CapitalFallbackStrategy: Resolution strategies
    - RegionResolver: Strategy chain, first success wins
    - create_region_resolver: Build the default chain from settings
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shelter_nav.lib.geocoder.base import BaseReverseGeocoder, RegionNames
from shelter_nav.lib.geocoder.capitals import REGIONAL_CAPITALS, RegionalCapital, nearest_capital
from shelter_nav.lib.geocoder.catalog import (
    CATALOG_MATCHERS,
    RegionCatalogClient,
    match_city_and_prefecture,
    match_city_only,
    match_exact,
    match_region_code,
)
from shelter_nav.lib.geocoder.nominatim import NominatimReverseGeocoder
from shelter_nav.lib.geocoder.resolver import (
    CapitalFallbackStrategy,
    CatalogRegionStrategy,
    RegionResolver,
    RegionStrategy,
)

if TYPE_CHECKING:
    from shelter_nav.core.config import Settings


def create_region_resolver(settings: Settings) -> RegionResolver:
    """Build the default resolver: catalog lookup, then nearest capital.

    Args:
        settings: Application settings.

    Returns:
        A configured RegionResolver.
    """
    geocoder = NominatimReverseGeocoder(
        url=settings.reverse_geocoder_url,
        timeout=settings.reverse_geocoder_timeout,
        email=settings.reverse_geocoder_email,
        user_agent=settings.http_user_agent,
    )
    catalog_client = RegionCatalogClient(
        settings.region_catalog_url,
        timeout=settings.shelter_api_timeout,
        user_agent=settings.http_user_agent,
    )
    return RegionResolver([CatalogRegionStrategy(geocoder, catalog_client), CapitalFallbackStrategy()])


__all__ = [
    "CATALOG_MATCHERS",
    "REGIONAL_CAPITALS",
    "BaseReverseGeocoder",
    "CapitalFallbackStrategy",
    "CatalogRegionStrategy",
    "NominatimReverseGeocoder",
    "RegionCatalogClient",
    "RegionNames",
    "RegionResolver",
    "RegionStrategy",
    "RegionalCapital",
    "create_region_resolver",
    "match_city_and_prefecture",
    "match_city_only",
    "match_exact",
    "match_region_code",
    "nearest_capital",
]
