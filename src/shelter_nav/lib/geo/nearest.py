"""k-nearest shelter selection."""

from collections.abc import Iterable
from operator import attrgetter

from loguru import logger

from shelter_nav.lib.geo.geomath import bearing, distance
from shelter_nav.lib.geo.types import Coordinate, RankedShelter, ShelterFeature

DEFAULT_NEAREST_COUNT = 3


def rank_shelters(origin: Coordinate, shelters: Iterable[ShelterFeature]) -> list[RankedShelter]:
    """Measure every shelter from ``origin``, in input order."""
    return [
        RankedShelter(
            feature=shelter,
            distance_m=distance(origin, shelter.coordinate),
            bearing_deg=bearing(origin, shelter.coordinate),
        )
        for shelter in shelters
    ]


def select_nearest(
    origin: Coordinate,
    shelters: Iterable[ShelterFeature],
    k: int = DEFAULT_NEAREST_COUNT,
) -> tuple[RankedShelter, ...]:
    """Return the ``k`` shelters closest to ``origin``, nearest first.

    The sort is stable, so shelters at equal distance keep their input
    order.  Fewer than ``k`` shelters yields all of them; none yields an
    empty tuple.

    Args:
        origin: The user's position.
        shelters: Candidate shelters.
        k: Maximum number of shelters to return.

    Returns:
        Up to ``k`` RankedShelter, ascending by distance.

    Raises:
        ValueError: If ``k`` is negative.
    """
    if k < 0:
        msg = f"k must be non-negative, got {k}"
        raise ValueError(msg)

    ranked = sorted(rank_shelters(origin, shelters), key=attrgetter("distance_m"))
    nearest = tuple(ranked[:k])
    logger.debug(
        "Selected {} of {} shelters, nearest at {}",
        len(nearest),
        len(ranked),
        f"{nearest[0].distance_m:.0f}m" if nearest else "n/a",
    )
    return nearest
