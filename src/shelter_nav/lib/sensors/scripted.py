"""In-memory sensor source that replays fixed readings."""

from collections.abc import AsyncIterator, Sequence

from shelter_nav.core.errors import PermissionDeniedError, SensorUnsupportedError
from shelter_nav.lib.geo.types import Coordinate


class ScriptedSensorSource:
    """Replays a scripted initial fix, location track, and heading sequence.

    Args:
        initial_location: Fix returned by ``current_location()``; None
            simulates a denied location prompt.
        locations: Updates yielded by ``watch_location()``.
        headings: Updates yielded by ``watch_heading()``.
        supports_location: Whether location is available at all.
        supports_orientation: Whether orientation is available at all.
        permission_answers: Answers to successive orientation permission
            prompts; an empty sequence means no prompt is required.
    """

    def __init__(
        self,
        initial_location: Coordinate | None,
        locations: Sequence[Coordinate] = (),
        headings: Sequence[float | None] = (),
        *,
        supports_location: bool = True,
        supports_orientation: bool = True,
        permission_answers: Sequence[bool] = (),
    ) -> None:
        self._initial_location = initial_location
        self._locations = list(locations)
        self._headings = list(headings)
        self._supports_location = supports_location
        self._supports_orientation = supports_orientation
        self._permission_answers = list(permission_answers)
        self.permission_requests = 0

    @property
    def supports_location(self) -> bool:
        return self._supports_location

    @property
    def supports_orientation(self) -> bool:
        return self._supports_orientation

    @property
    def requires_orientation_permission(self) -> bool:
        return bool(self._permission_answers)

    async def current_location(self) -> Coordinate:
        if not self._supports_location:
            raise SensorUnsupportedError("Location is not supported on this device")
        if self._initial_location is None:
            raise PermissionDeniedError("Location access was denied")
        return self._initial_location

    async def watch_location(self) -> AsyncIterator[Coordinate]:
        for location in self._locations:
            yield location

    async def watch_heading(self) -> AsyncIterator[float | None]:
        for heading in self._headings:
            yield heading

    async def request_orientation_permission(self) -> bool:
        index = min(self.permission_requests, len(self._permission_answers) - 1)
        self.permission_requests += 1
        return self._permission_answers[index] if index >= 0 else True
