"""Sensors library — device location and orientation sources.

Public API:
    - SensorSource: Protocol consumed by the navigation session
    - heading_from_orientation: Raw orientation event → compass heading
    - ScriptedSensorSource: Replays fixed readings (simulation and tests)
"""

from shelter_nav.lib.sensors.base import SensorSource, heading_from_orientation
from shelter_nav.lib.sensors.scripted import ScriptedSensorSource

__all__ = [
    "ScriptedSensorSource",
    "SensorSource",
    "heading_from_orientation",
]
