"""Sensor source abstraction.

Provides a ``SensorSource`` Protocol for location and orientation readings
and the conversion from raw orientation events to compass headings.
"""

import math
from collections.abc import AsyncIterator
from typing import Protocol

from shelter_nav.lib.geo.types import Coordinate


class SensorSource(Protocol):
    """Device location and orientation readings.

    Implementations deliver one-shot and continuous location fixes plus a
    stream of compass headings (clockwise from true north, ``None`` while
    the sensor has no fix).
    """

    @property
    def supports_location(self) -> bool:
        """Whether the device can report its location."""
        ...

    @property
    def supports_orientation(self) -> bool:
        """Whether the device can report its orientation."""
        ...

    @property
    def requires_orientation_permission(self) -> bool:
        """Whether orientation readings are gated behind a permission prompt."""
        ...

    async def current_location(self) -> Coordinate:
        """Request a single location fix.

        Raises:
            PermissionDeniedError: If the user refused location access.
            SensorUnsupportedError: If no fix can be obtained.
        """
        ...

    def watch_location(self) -> AsyncIterator[Coordinate]:
        """Continuous location updates."""
        ...

    def watch_heading(self) -> AsyncIterator[float | None]:
        """Continuous compass heading updates."""
        ...

    async def request_orientation_permission(self) -> bool:
        """Prompt for orientation access.

        Returns:
            True if granted.
        """
        ...


def heading_from_orientation(alpha: float | None, compass_heading: float | None = None) -> float | None:
    """Convert a raw device orientation event into a compass heading.

    ``alpha`` rotates counter-clockwise with the device; some platforms also
    report a clockwise ``compass_heading`` directly, which takes precedence.

    Args:
        alpha: Device rotation about the z axis in degrees, or None.
        compass_heading: Platform compass heading in degrees, if available.

    Returns:
        Heading in ``[0, 360)`` clockwise from north, or None if neither
        reading is available and finite.
    """
    if compass_heading is not None and math.isfinite(compass_heading):
        return compass_heading % 360
    if alpha is None or not math.isfinite(alpha):
        return None
    return (360 - alpha) % 360
