"""Tests for itinerary list operations."""

from uuid import uuid4

import pytest

from travel_quest.models.itinerary import Itinerary
from travel_quest.models.poi import POI, POICategory
from travel_quest.services.itinerary import (
    add_poi,
    create_itinerary,
    remove_poi,
    reorder_pois,
    replace_poi,
)

from conftest import make_poi


def _names(itinerary: Itinerary) -> list[str]:
    return [p.name for p in itinerary.points_of_interest]


def _assert_duration_invariant(itinerary: Itinerary) -> None:
    expected = sum(p.estimated_visit_duration for p in itinerary.points_of_interest)
    assert itinerary.total_estimated_duration == expected


@pytest.fixture
def five() -> Itinerary:
    itinerary = create_itinerary(uuid4())
    for i, name in enumerate("ABCDE"):
        itinerary = add_poi(itinerary, make_poi(name=name, duration=600 * (i + 1)))
    return itinerary


class TestCreateAndAdd:
    def test_create_is_empty(self) -> None:
        trip_id = uuid4()
        itinerary = create_itinerary(trip_id)
        assert itinerary.trip_id == trip_id
        assert itinerary.points_of_interest == []
        assert itinerary.total_estimated_duration == 0

    def test_add_appends_and_recomputes(self) -> None:
        itinerary = create_itinerary(uuid4())
        itinerary = add_poi(itinerary, make_poi(name="A", duration=1800))
        itinerary = add_poi(itinerary, make_poi(name="B", duration=2700))
        assert _names(itinerary) == ["A", "B"]
        assert itinerary.total_estimated_duration == 4500

    def test_add_does_not_mutate_input(self) -> None:
        original = create_itinerary(uuid4())
        add_poi(original, make_poi())
        assert original.points_of_interest == []
        assert original.total_estimated_duration == 0


class TestRemove:
    def test_remove_by_id(self, five: Itinerary) -> None:
        target = five.points_of_interest[2]
        result = remove_poi(five, target.id)
        assert _names(result) == ["A", "B", "D", "E"]
        _assert_duration_invariant(result)
        assert len(five.points_of_interest) == 5

    def test_remove_all_duplicates(self) -> None:
        poi = make_poi(name="Twice")
        itinerary = add_poi(add_poi(create_itinerary(uuid4()), poi), poi)
        assert remove_poi(itinerary, poi.id).points_of_interest == []

    def test_remove_absent_is_noop(self, five: Itinerary) -> None:
        result = remove_poi(five, uuid4())
        assert _names(result) == _names(five)
        _assert_duration_invariant(result)


class TestReorder:
    def test_move_single_forward(self, five: Itinerary) -> None:
        # Move A before the element originally at index 3 (D)
        assert _names(reorder_pois(five, [0], 3)) == ["B", "C", "A", "D", "E"]

    def test_move_single_to_end(self, five: Itinerary) -> None:
        assert _names(reorder_pois(five, [1], 5)) == ["A", "C", "D", "E", "B"]

    def test_move_single_backward(self, five: Itinerary) -> None:
        assert _names(reorder_pois(five, [4], 0)) == ["E", "A", "B", "C", "D"]

    def test_move_subset_preserves_relative_order(self, five: Itinerary) -> None:
        assert _names(reorder_pois(five, [3, 0], 2)) == ["B", "A", "D", "C", "E"]

    def test_out_of_range_is_ignored_and_clamped(self, five: Itinerary) -> None:
        assert _names(reorder_pois(five, [0, 42], 99)) == ["B", "C", "D", "E", "A"]

    def test_reorder_keeps_duration(self, five: Itinerary) -> None:
        result = reorder_pois(five, [0, 1], 4)
        assert result.total_estimated_duration == five.total_estimated_duration
        _assert_duration_invariant(result)


class TestReplace:
    def test_replace_in_place(self, five: Itinerary) -> None:
        target = five.points_of_interest[1]
        edited = target.model_copy(update={"user_notes": "bring camera"})
        result = replace_poi(five, edited)
        assert result.points_of_interest[1].user_notes == "bring camera"
        assert _names(result) == _names(five)

    def test_replace_absent_returns_same(self, five: Itinerary) -> None:
        assert replace_poi(five, make_poi()) is five


class TestDurationInvariant:
    def test_mixed_sequence(self) -> None:
        itinerary = create_itinerary(uuid4())
        added: list[POI] = []
        for i, category in enumerate([POICategory.park, POICategory.cafe, POICategory.market, POICategory.beach]):
            poi = make_poi(category=category, duration=900 + i * 450)
            added.append(poi)
            itinerary = add_poi(itinerary, poi)
            _assert_duration_invariant(itinerary)
        for poi in added[::2]:
            itinerary = remove_poi(itinerary, poi.id)
            _assert_duration_invariant(itinerary)
        assert [p.id for p in itinerary.points_of_interest] == [added[1].id, added[3].id]
