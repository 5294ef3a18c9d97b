"""POI discovery backed by generated mock data.

There is no places API behind this client. Candidates are scattered around
the requested center from fixed per-category templates, using an injectable
`random.Random` so results can be reproduced.
"""

import logging
import random

from travel_quest.clients.location import LocationService, haversine_km
from travel_quest.config import settings
from travel_quest.models.poi import POI, Coordinate, POICategory, PriceLevel
from travel_quest.models.preferences import TransportMode

logger = logging.getLogger(__name__)

NEARBY_RADIUS_KM = 5.0
SEARCH_RADIUS_KM = 10.0
SCATTER_DEGREES = 0.01  # applied per axis regardless of radius
ROUTE_STEPS = 10

_GENERATED_CATEGORIES: list[POICategory] = [
    POICategory.restaurant,
    POICategory.museum,
    POICategory.park,
    POICategory.historical,
    POICategory.shopping,
    POICategory.cafe,
    POICategory.gallery,
]

_NAME_TEMPLATES: dict[POICategory, list[str]] = {
    POICategory.restaurant: ["The Golden Spoon", "Bistro Luna", "Coastal Kitchen", "Urban Garden", "Fire & Stone"],
    POICategory.museum: ["City Art Museum", "History Center", "Science Discovery", "Cultural Heritage", "Modern Arts"],
    POICategory.park: ["Central Park", "Riverside Gardens", "Mountain View Park", "Botanical Gardens", "City Square"],
    POICategory.historical: ["Old Town Hall", "Heritage Church", "Ancient Castle", "Historic Bridge", "Memorial Plaza"],
    POICategory.shopping: ["Market Square", "Fashion District", "Artisan Alley", "Downtown Mall", "Local Bazaar"],
    POICategory.cafe: ["Coffee Corner", "Morning Brew", "Café Central", "Bean & Leaf", "Roasted Dreams"],
    POICategory.gallery: ["Contemporary Gallery", "Local Artists", "Photo Exhibition", "Sculpture Hall", "Creative Space"],
}

_DESCRIPTIONS: dict[POICategory, str] = {
    POICategory.restaurant: "Delicious local cuisine with fresh ingredients and authentic flavors.",
    POICategory.museum: "Fascinating exhibits showcasing local history, art, and culture.",
    POICategory.park: "Beautiful green space perfect for relaxation and outdoor activities.",
    POICategory.historical: "Significant historical site with rich heritage and architecture.",
    POICategory.shopping: "Unique shopping experience with local crafts and specialty items.",
    POICategory.cafe: "Cozy atmosphere with excellent coffee and light refreshments.",
    POICategory.gallery: "Inspiring art collection featuring local and international artists.",
}
_DEFAULT_DESCRIPTION = "Interesting local attraction worth visiting."

_STREETS = ["Main Street", "Oak Avenue", "River Road", "Park Lane", "First Street"]
_STREET_NUMBERS = [100, 250, 380, 450, 520]

HISTORICAL_FACTS: list[str] = [
    "Built in the 18th century by local craftsmen",
    "Served as a gathering place for important historical events",
    "Features unique architectural elements from the colonial period",
    "Witnessed significant moments in local history",
]


class DiscoveryService:
    def __init__(
        self,
        location: LocationService,
        rng: random.Random | None = None,
        candidate_count: int | None = None,
    ) -> None:
        self._location = location
        self._rng = rng or random.Random(settings.discovery_seed)
        self._candidate_count = candidate_count if candidate_count is not None else settings.discovery_count

    def nearby(self, center: Coordinate | None = None, radius_km: float = NEARBY_RADIUS_KM) -> list[POI]:
        """Candidate POIs around `center` (default: the current location).

        `radius_km` is advisory: candidates always fall within
        ±SCATTER_DEGREES of the center on each axis.
        """
        center = center or self._location.current_location
        if center is None:
            return []
        pois = [self._generate_poi(center, i) for i in range(self._candidate_count)]
        logger.debug("Generated %d candidates around %s (radius %.1f km)", len(pois), center, radius_km)
        return pois

    def search(self, query: str, location: Coordinate | None = None) -> list[POI]:
        q = query.casefold()
        return [
            poi
            for poi in self.nearby(location, SEARCH_RADIUS_KM)
            if q in poi.name.casefold()
            or q in poi.description.casefold()
            or q in poi.category.label.casefold()
        ]

    def estimated_travel_time(
        self,
        destination: Coordinate,
        transport_mode: TransportMode,
        current_location: Coordinate | None = None,
    ) -> float | None:
        """Seconds to reach `destination`, or None without a known location."""
        origin = current_location or self._location.current_location
        if origin is None:
            return None
        return haversine_km(origin, destination) / transport_mode.speed_kmh * 3600

    def directions(self, destination: Coordinate) -> list[Coordinate]:
        """Straight-line route from the current location, ROUTE_STEPS legs long."""
        origin = self._location.current_location
        if origin is None:
            return []
        lat_step = (destination.latitude - origin.latitude) / ROUTE_STEPS
        lon_step = (destination.longitude - origin.longitude) / ROUTE_STEPS
        return [
            Coordinate(
                latitude=origin.latitude + lat_step * i,
                longitude=origin.longitude + lon_step * i,
            )
            for i in range(ROUTE_STEPS + 1)
        ]

    def _generate_poi(self, center: Coordinate, index: int) -> POI:
        rng = self._rng
        category = rng.choice(_GENERATED_CATEGORIES)
        return POI(
            name=_poi_name(category, index),
            description=_DESCRIPTIONS.get(category, _DEFAULT_DESCRIPTION),
            category=category,
            coordinate=Coordinate(
                latitude=center.latitude + rng.uniform(-SCATTER_DEGREES, SCATTER_DEGREES),
                longitude=center.longitude + rng.uniform(-SCATTER_DEGREES, SCATTER_DEGREES),
            ),
            address=f"{_STREET_NUMBERS[index % 5]} {_STREETS[index % 5]}",
            rating=rng.uniform(3.0, 5.0),
            price_level=rng.choice(list(PriceLevel)),
            estimated_visit_duration=rng.uniform(1800, 7200),
            ar_content_available=rng.random() < 0.5,
            historical_facts=list(HISTORICAL_FACTS) if category == POICategory.historical else [],
        )


def _poi_name(category: POICategory, index: int) -> str:
    names = _NAME_TEMPLATES.get(category)
    if names is None:
        return f"Local {category.label} {index + 1}"
    return names[index % len(names)]
