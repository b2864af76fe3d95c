"""Region resolution: an ordered chain of strategies, first success wins.

The default chain is online catalog lookup (reverse geocode, then match
against the region-code catalog) followed by the offline nearest-capital
fallback, which cannot fail.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from loguru import logger

from shelter_nav.core.errors import IncompleteAddressError, NetworkFailureError, NoDataFoundError
from shelter_nav.lib.geo.types import Coordinate
from shelter_nav.lib.geocoder.base import BaseReverseGeocoder
from shelter_nav.lib.geocoder.capitals import nearest_capital
from shelter_nav.lib.geocoder.catalog import CATALOG_MATCHERS, CatalogMatcher, RegionCatalogClient, match_region_code

# Errors a strategy may raise that just mean "try the next one".
RECOVERABLE_ERRORS = (NetworkFailureError, IncompleteAddressError, NoDataFoundError)


class RegionStrategy(ABC):
    """One way of turning a coordinate into a region code."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name used in log messages."""

    @abstractmethod
    async def resolve(self, coordinate: Coordinate) -> str | None:
        """Resolve a coordinate.

        Args:
            coordinate: Point to resolve.

        Returns:
            Region code, or None if this strategy found no match.

        Raises:
            NetworkFailureError, IncompleteAddressError: Recoverable failures.
        """


class CatalogRegionStrategy(RegionStrategy):
    """Reverse geocode to names, then look the names up in the region catalog.

    Args:
        geocoder: Reverse geocoding provider.
        catalog_client: Region catalog client.
        matchers: Ordered catalog matchers.
    """

    def __init__(
        self,
        geocoder: BaseReverseGeocoder,
        catalog_client: RegionCatalogClient,
        matchers: tuple[CatalogMatcher, ...] = CATALOG_MATCHERS,
    ) -> None:
        self._geocoder = geocoder
        self._catalog_client = catalog_client
        self._matchers = matchers

    @property
    def name(self) -> str:
        return f"catalog({self._geocoder.provider_name})"

    async def resolve(self, coordinate: Coordinate) -> str | None:
        names = await self._geocoder.reverse(coordinate)
        catalog = await self._catalog_client.fetch()
        return match_region_code(catalog, names, self._matchers)


class CapitalFallbackStrategy(RegionStrategy):
    """Nearest prefectural capital; always returns a code."""

    @property
    def name(self) -> str:
        return "nearest-capital"

    async def resolve(self, coordinate: Coordinate) -> str | None:
        capital, _ = nearest_capital(coordinate)
        return capital.code


class RegionResolver:
    """Runs region strategies in order until one yields a code.

    Args:
        strategies: Strategies in priority order.
    """

    def __init__(self, strategies: Sequence[RegionStrategy]) -> None:
        if not strategies:
            msg = "RegionResolver needs at least one strategy"
            raise ValueError(msg)
        self._strategies = tuple(strategies)

    @property
    def strategies(self) -> tuple[RegionStrategy, ...]:
        return self._strategies

    async def resolve(self, coordinate: Coordinate) -> str:
        """Resolve a coordinate to a region code.

        Args:
            coordinate: Point to resolve.

        Returns:
            The region code from the first strategy that succeeds.

        Raises:
            NoDataFoundError: If every strategy failed or found nothing.
        """
        for strategy in self._strategies:
            try:
                code = await strategy.resolve(coordinate)
            except RECOVERABLE_ERRORS as e:
                logger.warning(f"Region strategy {strategy.name} failed: {e}")
                continue
            if code:
                logger.info("Region resolved to {} via {}", code, strategy.name)
                return code
            logger.info("Region strategy {} found no match", strategy.name)

        raise NoDataFoundError("Could not determine the region for this location")
