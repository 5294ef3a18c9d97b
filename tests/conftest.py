"""Shared fixtures for travel-quest tests."""

import random
from datetime import datetime
from pathlib import Path

import pytest

from travel_quest.clients.discovery import DiscoveryService
from travel_quest.clients.location import AuthorizationStatus, LocationService
from travel_quest.clients.storage import PersistenceStore
from travel_quest.models.poi import POI, Coordinate, POICategory
from travel_quest.models.trip import Trip

NOW = datetime(2026, 6, 15, 12, 0, 0)


def make_poi(
    category: POICategory = POICategory.museum,
    name: str = "",
    duration: float = 3600.0,
) -> POI:
    return POI(
        name=name or f"Test {category.label}",
        description="A place worth seeing",
        category=category,
        coordinate=Coordinate(latitude=38.7223, longitude=-9.1393),
        address="1 Main Street",
        rating=4.2,
        estimated_visit_duration=duration,
    )


@pytest.fixture
def store(tmp_path: Path) -> PersistenceStore:
    return PersistenceStore(tmp_path / "trips.json", tmp_path / "user.json")


@pytest.fixture
def lisbon() -> Coordinate:
    return Coordinate(latitude=38.7223, longitude=-9.1393)


@pytest.fixture
def location(lisbon: Coordinate) -> LocationService:
    service = LocationService()
    service.change_authorization(AuthorizationStatus.authorized_when_in_use)
    service.update_location(lisbon)
    return service


@pytest.fixture
def discovery(location: LocationService) -> DiscoveryService:
    return DiscoveryService(location, rng=random.Random(1234), candidate_count=20)


@pytest.fixture
def sample_trip() -> Trip:
    return Trip(
        name="Lisbon Long Weekend",
        destination="Lisbon, Portugal",
        start_date=datetime(2026, 6, 12),
        end_date=datetime(2026, 6, 16),
        description="Trams and tiles",
    )
