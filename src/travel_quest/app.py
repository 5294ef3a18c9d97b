"""Process-wide application state, built once at startup."""

import random
from dataclasses import dataclass

from travel_quest.clients.discovery import DiscoveryService
from travel_quest.clients.location import AuthorizationStatus, LocationService
from travel_quest.clients.storage import PersistenceStore
from travel_quest.config import Settings, settings as default_settings
from travel_quest.models.poi import Coordinate
from travel_quest.services.preferences import PreferencesStore
from travel_quest.services.trips import TripManager


@dataclass
class TravelQuestApp:
    store: PersistenceStore
    location: LocationService
    discovery: DiscoveryService
    trips: TripManager
    preferences: PreferencesStore

    @property
    def error_message(self) -> str | None:
        return self.store.error_message


def build_app(
    settings: Settings | None = None,
    current_location: Coordinate | None = None,
) -> TravelQuestApp:
    settings = settings or default_settings
    store = PersistenceStore(settings.trips_path, settings.user_path)
    location = LocationService()
    if current_location is not None:
        location.change_authorization(AuthorizationStatus.authorized_when_in_use)
        location.update_location(current_location)
    discovery = DiscoveryService(
        location,
        rng=random.Random(settings.discovery_seed),
        candidate_count=settings.discovery_count,
    )
    return TravelQuestApp(
        store=store,
        location=location,
        discovery=discovery,
        trips=TripManager(store),
        preferences=PreferencesStore(store),
    )
