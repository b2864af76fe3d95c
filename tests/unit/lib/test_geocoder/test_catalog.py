"""Unit tests for the region-code catalog client and matchers."""

import httpx
import pytest

from shelter_nav.core.errors import NetworkFailureError
from shelter_nav.lib.geocoder import (
    RegionCatalogClient,
    RegionNames,
    match_city_and_prefecture,
    match_city_only,
    match_exact,
    match_region_code,
)

CATALOG_URL = "https://data.example.com/api/v0/city-to-code.json"

CATALOG = {
    "北海道札幌市中央区": "011011",
    "東京都府中市": "132063",
    "広島県府中市": "342084",
    "大阪府大阪市": "271004",
    "東京都千代田区": "131016",
}


class TestMatchers:
    """Tests for the individual catalog matchers."""

    def test_exact_match(self) -> None:
        names = RegionNames(city="大阪市", prefecture="大阪府")
        assert match_exact(CATALOG, names) == "271004"

    def test_exact_match_misses_partial(self) -> None:
        names = RegionNames(city="札幌市", prefecture="北海道")
        assert match_exact(CATALOG, names) is None

    def test_city_and_prefecture_substring(self) -> None:
        names = RegionNames(city="札幌市", prefecture="北海道")
        assert match_city_and_prefecture(CATALOG, names) == "011011"

    def test_city_and_prefecture_requires_both(self) -> None:
        names = RegionNames(city="府中市", prefecture="広島県")
        assert match_city_and_prefecture(CATALOG, names) == "342084"

    def test_city_only_takes_first_in_catalog_order(self) -> None:
        names = RegionNames(city="府中市", prefecture="Hiroshima")
        assert match_city_only(CATALOG, names) == "132063"

    def test_city_only_no_match(self) -> None:
        names = RegionNames(city="那覇市", prefecture="沖縄県")
        assert match_city_only(CATALOG, names) is None


class TestMatchRegionCode:
    """Tests for match_region_code() ordering."""

    def test_exact_wins_over_substring(self) -> None:
        catalog = {"東京都千代田区役所前": "999999", "東京都千代田区": "131016"}
        names = RegionNames(city="千代田区", prefecture="東京都")
        assert match_region_code(catalog, names) == "131016"

    def test_falls_through_to_city_only(self) -> None:
        names = RegionNames(city="府中市", prefecture="Tokyo")
        assert match_region_code(CATALOG, names) == "132063"

    def test_no_match_returns_none(self) -> None:
        names = RegionNames(city="那覇市", prefecture="沖縄県")
        assert match_region_code(CATALOG, names) is None

    def test_custom_matchers(self) -> None:
        names = RegionNames(city="府中市", prefecture="Tokyo")
        assert match_region_code(CATALOG, names, matchers=(match_exact,)) is None


class TestRegionCatalogClient:
    """Tests for RegionCatalogClient.fetch()."""

    async def test_successful_fetch_preserves_order(self, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=CATALOG_URL, json=CATALOG)

        catalog = await RegionCatalogClient(CATALOG_URL).fetch()

        assert list(catalog) == list(CATALOG)
        assert catalog["大阪府大阪市"] == "271004"

    async def test_values_coerced_to_strings(self, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=CATALOG_URL, json={"大阪府大阪市": 271004})

        catalog = await RegionCatalogClient(CATALOG_URL).fetch()
        assert catalog == {"大阪府大阪市": "271004"}

    async def test_user_agent_sent(self, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=CATALOG_URL, json={})

        await RegionCatalogClient(CATALOG_URL, user_agent="agent/2").fetch()
        assert httpx_mock.get_request().headers["User-Agent"] == "agent/2"

    async def test_http_error(self, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=CATALOG_URL, status_code=503)

        with pytest.raises(NetworkFailureError) as exc_info:
            await RegionCatalogClient(CATALOG_URL).fetch()
        assert exc_info.value.status_code == 503

    async def test_network_error(self, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_exception(httpx.ConnectError("refused"), url=CATALOG_URL)

        with pytest.raises(NetworkFailureError, match="region-catalog"):
            await RegionCatalogClient(CATALOG_URL).fetch()

    async def test_invalid_json(self, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=CATALOG_URL, text="not json")

        with pytest.raises(NetworkFailureError, match="parse"):
            await RegionCatalogClient(CATALOG_URL).fetch()

    async def test_non_object_rejected(self, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=CATALOG_URL, json=["大阪府大阪市"])

        with pytest.raises(NetworkFailureError, match="JSON object"):
            await RegionCatalogClient(CATALOG_URL).fetch()
