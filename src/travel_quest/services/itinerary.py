"""Ordered-list operations over an Itinerary.

Every function returns a new Itinerary and leaves its input untouched.
"""

from collections.abc import Iterable
from uuid import UUID

from travel_quest.models.itinerary import Itinerary
from travel_quest.models.poi import POI, total_duration


def create_itinerary(trip_id: UUID) -> Itinerary:
    return Itinerary(trip_id=trip_id)


def add_poi(itinerary: Itinerary, poi: POI) -> Itinerary:
    return _with_pois(itinerary, [*itinerary.points_of_interest, poi])


def remove_poi(itinerary: Itinerary, poi_id: UUID) -> Itinerary:
    return _with_pois(
        itinerary, [p for p in itinerary.points_of_interest if p.id != poi_id]
    )


def reorder_pois(
    itinerary: Itinerary, from_indices: Iterable[int], to_index: int
) -> Itinerary:
    """Move the POIs at `from_indices` so they land before the element
    originally at `to_index` (`to_index == len` appends them at the end).

    The moved POIs keep their relative order. Indices outside the list are
    ignored and `to_index` is clamped into range.
    """
    pois = itinerary.points_of_interest
    n = len(pois)
    moving = sorted({i for i in from_indices if 0 <= i < n})
    to_index = max(0, min(to_index, n))

    moving_set = set(moving)
    before = [p for i, p in enumerate(pois[:to_index]) if i not in moving_set]
    after = [p for i, p in enumerate(pois[to_index:], start=to_index) if i not in moving_set]
    moved = [pois[i] for i in moving]
    return _with_pois(itinerary, before + moved + after)


def replace_poi(itinerary: Itinerary, poi: POI) -> Itinerary:
    """Swap in `poi` wherever an entry shares its id; no-op when absent."""
    if not itinerary.contains(poi.id):
        return itinerary
    return _with_pois(
        itinerary,
        [poi if p.id == poi.id else p for p in itinerary.points_of_interest],
    )


def _with_pois(itinerary: Itinerary, pois: list[POI]) -> Itinerary:
    return itinerary.model_copy(
        update={
            "points_of_interest": pois,
            "total_estimated_duration": total_duration(pois),
        }
    )
