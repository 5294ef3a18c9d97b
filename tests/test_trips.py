"""Tests for TripManager aggregate operations."""

from datetime import datetime, timedelta
from pathlib import Path
from uuid import uuid4

import pytest

from travel_quest.clients.storage import PersistenceStore
from travel_quest.models.poi import POICategory
from travel_quest.models.trip import NewTripRequest, Trip
from travel_quest.services.trips import TripManager

from conftest import NOW, make_poi


@pytest.fixture
def manager(store: PersistenceStore) -> TripManager:
    return TripManager(store, clock=lambda: NOW)


def _create(manager: TripManager, name: str, start_offset: int, length: int = 3) -> Trip:
    start = NOW + timedelta(days=start_offset)
    return manager.create_trip(name, "Lisbon, Portugal", start, start + timedelta(days=length), "")


class TestTripLifecycle:
    def test_create_persists(self, manager: TripManager, store: PersistenceStore) -> None:
        trip = _create(manager, "Lisbon", 10)
        assert manager.trips == [trip]
        assert trip.itinerary is None
        assert store.load_trips() == [trip]

    def test_create_from_request(self, manager: TripManager) -> None:
        request = NewTripRequest(
            name="Porto",
            destination="Porto, Portugal",
            start_date=datetime(2026, 7, 1),
            end_date=datetime(2026, 7, 4),
            description="Port wine",
        )
        trip = manager.create_trip_from_request(request)
        assert trip.name == "Porto"
        assert trip.description == "Port wine"

    def test_reload_from_store(self, manager: TripManager, store: PersistenceStore) -> None:
        trip = _create(manager, "Lisbon", 10)
        reloaded = TripManager(store, clock=lambda: NOW)
        assert reloaded.trips == [trip]

    def test_update_replaces_by_id(self, manager: TripManager, store: PersistenceStore) -> None:
        trip = _create(manager, "Lisbon", 10)
        manager.update_trip(trip.model_copy(update={"name": "Lisboa"}))
        assert manager.trips[0].name == "Lisboa"
        assert store.load_trips()[0].name == "Lisboa"

    def test_update_unknown_is_noop(self, manager: TripManager) -> None:
        trip = _create(manager, "Lisbon", 10)
        stranger = trip.model_copy(update={"id": uuid4(), "name": "Stranger"})
        manager.update_trip(stranger)
        assert manager.trips == [trip]

    def test_delete_clears_selection(self, manager: TripManager, store: PersistenceStore) -> None:
        keep = _create(manager, "Keep", 10)
        drop = _create(manager, "Drop", 20)
        manager.select_trip(drop)
        manager.delete_trip(drop)
        assert manager.trips == [keep]
        assert manager.current_trip is None
        assert store.load_trips() == [keep]

    def test_delete_keeps_other_selection(self, manager: TripManager) -> None:
        keep = _create(manager, "Keep", 10)
        drop = _create(manager, "Drop", 20)
        manager.select_trip(keep)
        manager.delete_trip(drop)
        assert manager.current_trip == keep

    def test_get_trip(self, manager: TripManager) -> None:
        trip = _create(manager, "Lisbon", 10)
        assert manager.get_trip(trip.id) == trip
        assert manager.get_trip(uuid4()) is None

    def test_complete_trip(self, manager: TripManager) -> None:
        trip = _create(manager, "Lisbon", -5)
        done = manager.complete_trip(trip)
        assert done.is_completed is True
        assert manager.trips[0].is_completed is True


class TestItineraryThroughManager:
    def test_first_poi_creates_itinerary(self, manager: TripManager) -> None:
        trip = _create(manager, "Lisbon", 10)
        poi = make_poi(duration=1800)
        updated = manager.add_poi_to_trip(poi, trip)
        assert updated.itinerary is not None
        assert updated.itinerary.trip_id == trip.id
        assert [p.id for p in updated.itinerary.points_of_interest] == [poi.id]
        assert updated.itinerary.total_estimated_duration == 1800
        assert manager.trips[0] == updated
        assert trip.itinerary is None

    def test_second_poi_reuses_itinerary(self, manager: TripManager) -> None:
        trip = _create(manager, "Lisbon", 10)
        trip = manager.add_poi_to_trip(make_poi(name="A"), trip)
        itinerary_id = trip.itinerary.id if trip.itinerary else None
        trip = manager.add_poi_to_trip(make_poi(name="B"), trip)
        assert trip.itinerary is not None
        assert trip.itinerary.id == itinerary_id
        assert [p.name for p in trip.itinerary.points_of_interest] == ["A", "B"]

    def test_remove_and_reorder(self, manager: TripManager) -> None:
        trip = _create(manager, "Lisbon", 10)
        pois = [make_poi(name=n) for n in "ABC"]
        for poi in pois:
            trip = manager.add_poi_to_trip(poi, trip)
        trip = manager.reorder_pois_in_trip([2], 0, trip)
        assert trip.itinerary is not None
        assert [p.name for p in trip.itinerary.points_of_interest] == ["C", "A", "B"]
        trip = manager.remove_poi_from_trip(pois[0].id, trip)
        assert trip.itinerary is not None
        assert [p.name for p in trip.itinerary.points_of_interest] == ["C", "B"]
        assert manager.trips[0] == trip

    def test_remove_without_itinerary_is_noop(self, manager: TripManager) -> None:
        trip = _create(manager, "Lisbon", 10)
        assert manager.remove_poi_from_trip(uuid4(), trip) is trip


class TestVisitsThroughManager:
    def test_mark_visited_persists(self, manager: TripManager, store: PersistenceStore) -> None:
        trip = _create(manager, "Lisbon", -1)
        museums = [make_poi(category=POICategory.museum, name=f"M{i}") for i in range(3)]
        for poi in museums:
            trip = manager.add_poi_to_trip(poi, trip)
        for poi in museums:
            trip = manager.mark_poi_visited(poi, trip)

        stored = store.load_trips()[0]
        assert stored.earned_points == 45
        assert [b.name for b in stored.badges] == ["Museum Explorer"]
        assert stored.completion_percentage == 1.0
        assert all(p.visited_date == NOW for p in stored.visited_pois)

    def test_repeat_visit_does_not_notify(self, manager: TripManager) -> None:
        trip = _create(manager, "Lisbon", -1)
        poi = make_poi()
        trip = manager.mark_poi_visited(poi, trip)
        calls: list[int] = []
        manager.changed.subscribe(lambda: calls.append(1))
        again = manager.mark_poi_visited(poi, trip)
        assert again is trip
        assert calls == []


class TestQueries:
    def test_upcoming_current_past(self, manager: TripManager) -> None:
        later = _create(manager, "Later", 30)
        soon = _create(manager, "Soon", 5)
        now_trip = _create(manager, "Now", -1)
        old = _create(manager, "Old", -40)
        older = _create(manager, "Older", -90)
        finished = manager.complete_trip(_create(manager, "Finished early", 60))

        assert manager.upcoming_trips() == [soon, later]
        assert manager.current_trips() == [now_trip]
        assert [t.name for t in manager.past_trips()] == ["Finished early", "Old", "Older"]
        assert finished in manager.past_trips()
        assert old in manager.past_trips() and older in manager.past_trips()

    def test_completed_current_trip_is_past(self, manager: TripManager) -> None:
        trip = manager.complete_trip(_create(manager, "Now", -1))
        assert manager.current_trips() == []
        assert manager.past_trips() == [trip]


class TestChangeSignal:
    def test_mutations_emit(self, manager: TripManager) -> None:
        calls: list[str] = []
        manager.changed.subscribe(lambda: calls.append("changed"))
        trip = _create(manager, "Lisbon", 10)
        trip = manager.add_poi_to_trip(make_poi(), trip)
        manager.delete_trip(trip)
        assert calls == ["changed"] * 3

    def test_unsubscribe(self, manager: TripManager) -> None:
        calls: list[int] = []
        unsubscribe = manager.changed.subscribe(lambda: calls.append(1))
        unsubscribe()
        _create(manager, "Lisbon", 10)
        assert calls == []


class TestSaveFailure:
    def test_in_memory_state_survives(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        manager = TripManager(PersistenceStore(blocker / "trips.json", tmp_path / "user.json"), clock=lambda: NOW)
        trip = _create(manager, "Lisbon", 10)
        assert manager.trips == [trip]
        assert manager.error_message == "Failed to save trips"
