"""Unit tests for the navigation CLI commands."""

from __future__ import annotations

import json
from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from loguru import logger
from typer.testing import CliRunner

from shelter_nav.cli.app import app
from shelter_nav.core.errors import NoDataFoundError

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep log records out of the captured command output."""
    monkeypatch.setenv("LOG_LEVEL", "CRITICAL")
    monkeypatch.delenv("LOG_DIR", raising=False)
    yield
    logger.remove()


@pytest.fixture
def wired(fake_resolver: MagicMock, fake_repository: MagicMock) -> Iterator[tuple[MagicMock, MagicMock]]:
    """Route the settings-driven factories to the fake collaborators."""
    with (
        patch("shelter_nav.lib.geocoder.create_region_resolver", return_value=fake_resolver),
        patch("shelter_nav.lib.shelters.create_shelter_repository", return_value=fake_repository),
    ):
        yield fake_resolver, fake_repository


class TestRegionCommand:
    """Tests for the region command."""

    def test_prints_code(self) -> None:
        with patch("shelter_nav.cli.navigate_cmd._resolve_region", AsyncMock(return_value="271004")) as mock:
            result = runner.invoke(app, ["region", "--lat", "34.69", "--lng", "135.50"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "271004"
        mock.assert_awaited_once_with(34.69, 135.5)

    def test_unresolved_region_exits_nonzero(self) -> None:
        with patch("shelter_nav.cli.navigate_cmd._resolve_region", AsyncMock(return_value=None)):
            result = runner.invoke(app, ["region", "--lat", "0", "--lng", "0"])
        assert result.exit_code == 1

    def test_latitude_out_of_range(self) -> None:
        result = runner.invoke(app, ["region", "--lat", "91", "--lng", "0"])
        assert result.exit_code == 2

    def test_resolver_no_data(self, fake_resolver: MagicMock) -> None:
        fake_resolver.resolve = AsyncMock(side_effect=NoDataFoundError("Could not determine the region"))
        with patch("shelter_nav.lib.geocoder.create_region_resolver", return_value=fake_resolver):
            result = runner.invoke(app, ["region", "--lat", "0", "--lng", "0"])
        assert result.exit_code == 1


class TestNearestCommand:
    """Tests for the nearest command."""

    def test_lists_ranked_shelters(self, wired: tuple[MagicMock, MagicMock]) -> None:
        result = runner.invoke(app, ["nearest", "--lat", "35.0", "--lng", "135.0"])

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "Region: 271004"
        assert lines[1] == "  1. East Park - 455m, East (90°) - 2-2 Higashi"
        assert lines[2].startswith("  2. North School - 1.1km, North (0°)")
        assert lines[3].startswith("  3. South Hall - 2.2km, South (180°) - Unknown address")
        assert len(lines) == 4

    def test_count_option(self, wired: tuple[MagicMock, MagicMock]) -> None:
        result = runner.invoke(app, ["nearest", "--lat", "35.0", "--lng", "135.0", "--count", "1"])
        assert result.exit_code == 0
        assert len(result.stdout.splitlines()) == 2

    def test_no_shelters(self, wired: tuple[MagicMock, MagicMock]) -> None:
        _, repository = wired
        repository.fetch = AsyncMock(side_effect=NoDataFoundError("No shelter data was found for this area"))

        result = runner.invoke(app, ["nearest", "--lat", "35.0", "--lng", "135.0"])

        assert result.exit_code == 1
        assert "No shelters found." in result.stdout


class TestSimulateCommand:
    """Tests for the simulate command."""

    def test_json_frames(self, wired: tuple[MagicMock, MagicMock]) -> None:
        result = runner.invoke(
            app,
            ["simulate", "--lat", "35.0", "--lng", "135.0", "--heading", "0", "--heading", "90", "--json"],
        )

        assert result.exit_code == 0
        frames = [json.loads(line) for line in result.stdout.splitlines()]
        assert [f["state"] for f in frames[:4]] == [
            "locating_user",
            "resolving_region",
            "loading_shelters",
            "tracking",
        ]
        assert len(frames) == 6
        last = frames[-1]
        assert len(last["arrows"]) == 3
        assert last["needle"]["rotation_degrees"] == pytest.approx(-90.0)

    def test_text_frames(self, wired: tuple[MagicMock, MagicMock]) -> None:
        result = runner.invoke(app, ["simulate", "--lat", "35.0", "--lng", "135.0", "--move", "34.985,135.0"])

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "[locating_user] Getting your location..."
        assert lines[-1].startswith("[tracking] Ready | needle 0.0° | #1 180.0° 556m")

    def test_failure_exits_nonzero(self, wired: tuple[MagicMock, MagicMock]) -> None:
        _, repository = wired
        repository.fetch = AsyncMock(side_effect=NoDataFoundError("No shelter data was found for this area"))

        result = runner.invoke(app, ["simulate", "--lat", "35.0", "--lng", "135.0"])

        assert result.exit_code == 1
        assert "[failed] An error occurred | error: No shelter data was found for this area" in result.stdout

    def test_bad_move_value(self) -> None:
        result = runner.invoke(app, ["simulate", "--lat", "35.0", "--lng", "135.0", "--move", "north"])
        assert result.exit_code == 2
