"""Unit tests for RotationTracker shortest-arc accumulation."""

import random

import pytest

from shelter_nav.lib.geo import RotationTracker


def _circular_gap(a: float, b: float) -> float:
    """Smallest absolute angular distance between two angles."""
    return abs((a - b + 180) % 360 - 180)


class TestRotationTracker:
    """Tests for RotationTracker.update()."""

    def test_starts_at_zero(self) -> None:
        assert RotationTracker().accumulated == 0.0

    def test_wraps_clockwise_through_north(self) -> None:
        tracker = RotationTracker(350.0)
        assert tracker.update(0.0) == pytest.approx(360.0)
        assert tracker.update(10.0) == pytest.approx(370.0)

    def test_wraps_counter_clockwise_through_north(self) -> None:
        tracker = RotationTracker(10.0)
        assert tracker.update(350.0) == pytest.approx(-10.0)

    def test_negative_accumulated_keeps_shortest_path(self) -> None:
        tracker = RotationTracker(-10.0)
        assert tracker.update(340.0) == pytest.approx(-20.0)

    def test_half_turn_is_not_exceeded(self) -> None:
        tracker = RotationTracker()
        assert tracker.update(180.0) == pytest.approx(180.0)
        tracker.reset()
        assert tracker.update(181.0) == pytest.approx(-179.0)

    def test_half_turn_from_negative_goes_clockwise(self) -> None:
        tracker = RotationTracker(-90.0)
        assert tracker.update(90.0) == pytest.approx(90.0)

    def test_half_turn_from_positive_goes_clockwise(self) -> None:
        tracker = RotationTracker(450.0)
        assert tracker.update(270.0) == pytest.approx(630.0)

    def test_unbounded_after_many_turns(self) -> None:
        tracker = RotationTracker()
        for step in range(1, 9):
            tracker.update((step * 90) % 360)
        assert tracker.accumulated == pytest.approx(720.0)

    def test_random_walk_invariants(self) -> None:
        rng = random.Random(42)
        tracker = RotationTracker()
        previous = tracker.accumulated
        for _ in range(500):
            target = rng.uniform(0, 360)
            result = tracker.update(target)
            assert abs(result - previous) <= 180.0
            assert _circular_gap(result % 360, target) < 1e-9
            previous = result

    def test_same_target_is_stable(self) -> None:
        tracker = RotationTracker(725.0)
        assert tracker.update(5.0) == pytest.approx(725.0)

    def test_reset(self) -> None:
        tracker = RotationTracker()
        tracker.update(90.0)
        tracker.reset(45.0)
        assert tracker.accumulated == 45.0

    def test_repr(self) -> None:
        assert repr(RotationTracker(12.5)) == "RotationTracker(accumulated=12.5)"
