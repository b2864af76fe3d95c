"""Continuous rotation tracking for on-screen pointers.

A pointer driven by absolute angles snaps the long way round whenever the
target crosses 0°/360° (e.g. 350° then 10° would animate through -340°).
:class:`RotationTracker` keeps an unbounded accumulated angle instead and
moves it by the shortest signed arc on every update.
"""

import math

from loguru import logger


class RotationTracker:
    """Accumulated rotation for one pointer (the compass needle or one arrow).

    The accumulated value is only meaningful as a rotate-by angle: it can
    grow past ±360 after many updates, but ``accumulated % 360`` always equals
    the most recent target.

    Args:
        initial: Starting accumulated rotation in degrees.
    """

    def __init__(self, initial: float = 0.0) -> None:
        self.accumulated = initial

    def update(self, target_deg: float) -> float:
        """Advance toward an absolute target angle along the shortest arc.

        Args:
            target_deg: Absolute target angle, normally in ``[0, 360)``.

        Returns:
            The new accumulated rotation.
        """
        diff = target_deg - math.fmod(self.accumulated, 360)
        while diff > 180:
            diff -= 360
        while diff < -180:
            diff += 360
        self.accumulated += diff
        logger.trace("Rotation target={:.1f} delta={:+.1f} accumulated={:.1f}", target_deg, diff, self.accumulated)
        return self.accumulated

    def reset(self, initial: float = 0.0) -> None:
        """Re-initialize the accumulated rotation."""
        self.accumulated = initial

    def __repr__(self) -> str:
        return f"RotationTracker(accumulated={self.accumulated!r})"
