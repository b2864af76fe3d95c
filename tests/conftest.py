"""Shared test fixtures: settings and fake resolver/repository collaborators."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from shelter_nav.core.config import Settings
from tests.factories import make_shelter


@pytest.fixture
def settings() -> Settings:
    """Test application settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def fake_resolver() -> MagicMock:
    """Resolver whose resolve() returns a fixed region code."""
    resolver = MagicMock()
    resolver.resolve = AsyncMock(return_value="271004")
    return resolver


@pytest.fixture
def fake_repository() -> MagicMock:
    """Repository whose fetch() returns four shelters around (35.0, 135.0)."""
    repository = MagicMock()
    repository.fetch = AsyncMock(
        return_value=[
            make_shelter(35.010, 135.000, "North School", address="1-1 Kita"),
            make_shelter(35.000, 135.005, "East Park", address="2-2 Higashi"),
            make_shelter(34.980, 135.000, "South Hall"),
            make_shelter(35.000, 134.960, "West Gym", 住所="4-4 Nishi"),
        ]
    )
    return repository
