"""Navigation service — the session state machine behind the shelter compass.

A :class:`NavigationSession` owns every piece of mutable state: the user's
location and heading, the ranked nearest shelters, and one rotation tracker
per pointer.  Startup runs once (locate → resolve region → load shelters →
orientation permission); afterwards location and heading events are applied
one at a time, each producing a fresh view model for the renderer.

The region is resolved only from the first location fix.  Later location
updates re-rank the already loaded shelters but never re-fetch them.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger

from shelter_nav.core.errors import NoDataFoundError, SensorUnsupportedError, ShelterNavError
from shelter_nav.core.logging import json_logger
from shelter_nav.lib.geo import (
    DEFAULT_NEAREST_COUNT,
    Coordinate,
    RankedShelter,
    RotationTracker,
    ShelterFeature,
    direction_text,
    format_distance,
    select_nearest,
)
from shelter_nav.schemas.navigation import (
    ArrowView,
    NavigationViewModel,
    NeedleView,
    SessionState,
    ShelterCard,
)

if TYPE_CHECKING:
    from shelter_nav.core.config import Settings
    from shelter_nav.lib.geocoder import RegionResolver
    from shelter_nav.lib.sensors import SensorSource
    from shelter_nav.lib.shelters import ShelterRepository

Renderer = Callable[[NavigationViewModel], None]

STATUS_MESSAGES: dict[SessionState, str] = {
    SessionState.IDLE: "Starting...",
    SessionState.LOCATING_USER: "Getting your location...",
    SessionState.RESOLVING_REGION: "Finding your area...",
    SessionState.LOADING_SHELTERS: "Loading shelter data...",
    SessionState.AWAITING_ORIENTATION: "Waiting for compass permission...",
    SessionState.TRACKING: "Ready",
    SessionState.FAILED: "An error occurred",
}

ORIENTATION_PERMISSION_REQUIRED = "Compass permission is required"
ORIENTATION_PERMISSION_FAILED = "Could not obtain compass permission"

_CARD_STATES = frozenset({SessionState.AWAITING_ORIENTATION, SessionState.TRACKING})


def rank_label(rank: int) -> str:
    """Display label for a 1-based shelter rank."""
    if rank == 1:
        return "Nearest"
    if rank % 100 in (11, 12, 13):
        return f"{rank}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(rank % 10, "th")
    return f"{rank}{suffix}"


class NavigationSession:
    """Orchestrates region lookup, shelter ranking, and pointer tracking.

    Args:
        sensors: Device location and orientation source.
        resolver: Coordinate → region code resolver.
        repository: Region code → shelters fetcher.
        nearest_count: Number of shelters (and arrows) tracked.
        renderer: Optional callback invoked with a fresh view model after
            every state change and every processed sensor event.
    """

    def __init__(
        self,
        sensors: SensorSource,
        resolver: RegionResolver,
        repository: ShelterRepository,
        *,
        nearest_count: int = DEFAULT_NEAREST_COUNT,
        renderer: Renderer | None = None,
    ) -> None:
        if nearest_count < 1:
            msg = f"nearest_count must be positive, got {nearest_count}"
            raise ValueError(msg)
        self._sensors = sensors
        self._resolver = resolver
        self._repository = repository
        self._nearest_count = nearest_count
        self._renderer = renderer

        self._state = SessionState.IDLE
        self._error: str | None = None
        self._location: Coordinate | None = None
        self._heading: float | None = None
        self._region_code: str | None = None
        self._shelters: list[ShelterFeature] = []
        self._nearest: tuple[RankedShelter, ...] = ()
        self._needle = RotationTracker()
        self._arrows = [RotationTracker() for _ in range(nearest_count)]

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def location(self) -> Coordinate | None:
        return self._location

    @property
    def heading(self) -> float | None:
        return self._heading

    @property
    def region_code(self) -> str | None:
        return self._region_code

    @property
    def nearest(self) -> tuple[RankedShelter, ...]:
        return self._nearest

    @property
    def needle(self) -> RotationTracker:
        return self._needle

    @property
    def arrows(self) -> tuple[RotationTracker, ...]:
        return tuple(self._arrows)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self) -> SessionState:
        """Run startup until tracking, a permission wait, or failure.

        Returns:
            The resulting state: TRACKING, AWAITING_ORIENTATION, or FAILED.

        Raises:
            RuntimeError: If the session was already started.
        """
        if self._state is not SessionState.IDLE:
            msg = f"Session already started (state={self._state})"
            raise RuntimeError(msg)

        try:
            await self._load_shelters()
            await self._setup_orientation()
        except ShelterNavError as e:
            self._fail(e)
        return self._state

    async def retry_orientation_permission(self) -> SessionState:
        """Ask for orientation permission again without redoing location or shelter work.

        Returns:
            TRACKING if granted, otherwise the unchanged waiting state (or
            FAILED if the sensor errors).

        Raises:
            RuntimeError: If the session is not waiting for permission.
        """
        if self._state is not SessionState.AWAITING_ORIENTATION:
            msg = f"No permission request pending (state={self._state})"
            raise RuntimeError(msg)

        try:
            granted = await self._sensors.request_orientation_permission()
        except ShelterNavError as e:
            self._fail(e)
            return self._state

        if granted:
            self._enter_tracking()
        else:
            logger.info("Orientation permission denied again")
            self._error = ORIENTATION_PERMISSION_FAILED
            self._emit()
        return self._state

    async def _load_shelters(self) -> None:
        self._transition(SessionState.LOCATING_USER)
        if not self._sensors.supports_location:
            raise SensorUnsupportedError("Location is not supported on this device")
        self._location = await self._sensors.current_location()
        logger.debug("Initial location: {}", self._location)

        self._transition(SessionState.RESOLVING_REGION)
        self._region_code = await self._resolver.resolve(self._location)

        self._transition(SessionState.LOADING_SHELTERS)
        self._shelters = list(await self._repository.fetch(self._region_code))
        self._nearest = select_nearest(self._location, self._shelters, self._nearest_count)
        if not self._nearest:
            raise NoDataFoundError("No shelter data was found for this area")
        logger.info(
            "Nearest shelters: {}",
            ", ".join(f"{s.name} ({format_distance(s.distance_m)})" for s in self._nearest),
        )

    async def _setup_orientation(self) -> None:
        if not self._sensors.supports_orientation:
            raise SensorUnsupportedError("Device orientation is not supported on this device")

        if self._sensors.requires_orientation_permission:
            granted = await self._sensors.request_orientation_permission()
            if not granted:
                logger.info("Orientation permission denied; waiting for retry")
                self._error = ORIENTATION_PERMISSION_REQUIRED
                self._transition(SessionState.AWAITING_ORIENTATION)
                return

        self._enter_tracking()

    def _enter_tracking(self) -> None:
        self._error = None
        self._update_pointers()
        self._transition(SessionState.TRACKING)

    # ------------------------------------------------------------------
    # Continuous tracking
    # ------------------------------------------------------------------

    async def track(self) -> None:
        """Consume location and heading subscriptions until both end.

        Both streams feed the same event loop, so each event is fully
        applied before the next one is handled.

        Raises:
            RuntimeError: If the session is not tracking.
        """
        if self._state is not SessionState.TRACKING:
            msg = f"Cannot track in state {self._state}"
            raise RuntimeError(msg)
        await asyncio.gather(self._consume_locations(), self._consume_headings())

    async def _consume_locations(self) -> None:
        try:
            async for location in self._sensors.watch_location():
                self.on_location(location)
        except ShelterNavError as e:
            logger.warning(f"Location updates stopped: {e}")

    async def _consume_headings(self) -> None:
        try:
            async for heading in self._sensors.watch_heading():
                self.on_heading(heading)
        except ShelterNavError as e:
            logger.warning(f"Heading updates stopped: {e}")

    def on_location(self, location: Coordinate) -> None:
        """Apply a location update: re-rank shelters and re-aim the arrows."""
        if self._state is not SessionState.TRACKING:
            logger.debug("Ignoring location update in state {}", self._state)
            return
        self._location = location
        self._nearest = select_nearest(location, self._shelters, self._nearest_count)
        self._update_pointers()
        self._emit()

    def on_heading(self, heading: float | None) -> None:
        """Apply a compass heading update; ``None`` and non-finite readings are dropped."""
        if heading is None or not math.isfinite(heading):
            if heading is not None:
                logger.debug("Ignoring non-finite heading {}", heading)
            return
        if self._state is not SessionState.TRACKING:
            logger.debug("Ignoring heading update in state {}", self._state)
            return
        self._heading = heading % 360
        self._update_pointers()
        self._emit()

    def _update_pointers(self) -> None:
        heading = self._heading if self._heading is not None else 0.0
        self._needle.update(-heading % 360)
        for index, (tracker, shelter) in enumerate(zip(self._arrows, self._nearest, strict=False)):
            target = (shelter.bearing_deg - heading) % 360
            tracker.update(target)
            logger.debug(
                "Arrow {}: bearing={:.0f} heading={:.0f} relative={:.0f} accumulated={:.0f}",
                index + 1,
                shelter.bearing_deg,
                heading,
                target,
                tracker.accumulated,
            )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def view_model(self) -> NavigationViewModel:
        """Build the render-ready snapshot of the current session state."""
        cards: list[ShelterCard] = []
        arrows: list[ArrowView] = []

        if self._state in _CARD_STATES:
            for rank, shelter in enumerate(self._nearest, start=1):
                cards.append(
                    ShelterCard(
                        rank=rank,
                        rank_label=rank_label(rank),
                        name=shelter.name,
                        distance_label=format_distance(shelter.distance_m),
                        direction_label=direction_text(shelter.bearing_deg),
                        address=shelter.address,
                    )
                )

        if self._state is SessionState.TRACKING:
            for rank, (tracker, shelter) in enumerate(zip(self._arrows, self._nearest, strict=False), start=1):
                arrows.append(
                    ArrowView(
                        rank=rank,
                        rotation_degrees=tracker.accumulated,
                        distance_label=format_distance(shelter.distance_m),
                    )
                )

        return NavigationViewModel(
            state=self._state,
            status=STATUS_MESSAGES[self._state],
            error=self._error,
            arrows=arrows,
            needle=NeedleView(rotation_degrees=self._needle.accumulated),
            shelters=cards,
        )

    def _transition(self, state: SessionState) -> None:
        logger.info("Navigation session: {} -> {}", self._state, state)
        self._state = state
        self._emit()

    def _fail(self, error: ShelterNavError) -> None:
        json_logger().bind(error_type=error.__class__.__name__).error(
            f"Navigation session failed in state {self._state}: {error}"
        )
        self._error = error.message
        self._transition(SessionState.FAILED)

    def _emit(self) -> None:
        if self._renderer is not None:
            self._renderer(self.view_model())


def create_navigation_session(
    settings: Settings,
    sensors: SensorSource,
    renderer: Renderer | None = None,
) -> NavigationSession:
    """Wire a session with the default resolver and repository from settings."""
    from shelter_nav.lib.geocoder import create_region_resolver
    from shelter_nav.lib.shelters import create_shelter_repository

    return NavigationSession(
        sensors,
        create_region_resolver(settings),
        create_shelter_repository(settings),
        nearest_count=settings.nearest_shelter_count,
        renderer=renderer,
    )
