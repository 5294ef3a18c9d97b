"""Aggregate-root operations over the in-memory trip collection."""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from uuid import UUID

from travel_quest.clients.storage import PersistenceStore
from travel_quest.models.poi import POI
from travel_quest.models.trip import NewTripRequest, Trip
from travel_quest.services import itinerary as itinerary_ops
from travel_quest.services.events import ChangeSignal
from travel_quest.services.rewards import mark_visited

logger = logging.getLogger(__name__)


class TripManager:
    def __init__(
        self,
        store: PersistenceStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock
        self.trips: list[Trip] = store.load_trips()
        self.current_trip: Trip | None = None
        self.changed = ChangeSignal()

    @property
    def error_message(self) -> str | None:
        return self._store.error_message

    # --- trip management ---

    def create_trip(
        self,
        name: str,
        destination: str,
        start_date: datetime,
        end_date: datetime,
        description: str = "",
    ) -> Trip:
        trip = Trip(
            name=name,
            destination=destination,
            start_date=start_date,
            end_date=end_date,
            description=description,
        )
        self.trips = [*self.trips, trip]
        self._commit()
        return trip

    def create_trip_from_request(self, request: NewTripRequest) -> Trip:
        return self.create_trip(
            request.name,
            request.destination,
            request.start_date,
            request.end_date,
            request.description,
        )

    def get_trip(self, trip_id: UUID) -> Trip | None:
        return next((t for t in self.trips if t.id == trip_id), None)

    def update_trip(self, trip: Trip) -> None:
        """Replace the stored trip with the same id; unknown ids are ignored."""
        index = next((i for i, t in enumerate(self.trips) if t.id == trip.id), None)
        if index is None:
            return
        trips = list(self.trips)
        trips[index] = trip
        self.trips = trips
        if self.current_trip is not None and self.current_trip.id == trip.id:
            self.current_trip = trip
        self._commit()

    def delete_trip(self, trip: Trip) -> None:
        self.trips = [t for t in self.trips if t.id != trip.id]
        if self.current_trip is not None and self.current_trip.id == trip.id:
            self.current_trip = None
        self._commit()

    def select_trip(self, trip: Trip | None) -> None:
        self.current_trip = trip
        self.changed.emit()

    def complete_trip(self, trip: Trip) -> Trip:
        updated = trip.model_copy(update={"is_completed": True})
        self.update_trip(updated)
        return updated

    # --- itinerary ---

    def add_poi_to_trip(self, poi: POI, trip: Trip) -> Trip:
        itinerary = trip.itinerary or itinerary_ops.create_itinerary(trip.id)
        updated = trip.model_copy(update={"itinerary": itinerary_ops.add_poi(itinerary, poi)})
        self.update_trip(updated)
        return updated

    def remove_poi_from_trip(self, poi_id: UUID, trip: Trip) -> Trip:
        if trip.itinerary is None:
            return trip
        updated = trip.model_copy(
            update={"itinerary": itinerary_ops.remove_poi(trip.itinerary, poi_id)}
        )
        self.update_trip(updated)
        return updated

    def reorder_pois_in_trip(self, from_indices: Iterable[int], to_index: int, trip: Trip) -> Trip:
        if trip.itinerary is None:
            return trip
        updated = trip.model_copy(
            update={"itinerary": itinerary_ops.reorder_pois(trip.itinerary, from_indices, to_index)}
        )
        self.update_trip(updated)
        return updated

    # --- progress ---

    def mark_poi_visited(self, poi: POI, trip: Trip) -> Trip:
        updated = mark_visited(trip, poi, self._clock())
        if updated is not trip:
            self.update_trip(updated)
        return updated

    # --- queries ---

    def upcoming_trips(self) -> list[Trip]:
        now = self._clock()
        return sorted(
            (t for t in self.trips if t.start_date > now and not t.is_completed),
            key=lambda t: t.start_date,
        )

    def current_trips(self) -> list[Trip]:
        now = self._clock()
        return [
            t for t in self.trips
            if t.start_date <= now <= t.end_date and not t.is_completed
        ]

    def past_trips(self) -> list[Trip]:
        now = self._clock()
        return sorted(
            (t for t in self.trips if t.end_date < now or t.is_completed),
            key=lambda t: t.start_date,
            reverse=True,
        )

    def _commit(self) -> None:
        if not self._store.save_trips(self.trips):
            logger.warning("Trips kept in memory only: %s", self._store.error_message)
        self.changed.emit()
