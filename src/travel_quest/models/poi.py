"""Points of interest and the static per-category attribute table."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from travel_quest.models.badge import BadgeCategory

DEFAULT_VISIT_DURATION = 3600.0  # seconds


class POICategory(str, Enum):
    restaurant = "restaurant"
    museum = "museum"
    park = "park"
    historical = "historical"
    shopping = "shopping"
    entertainment = "entertainment"
    accommodation = "accommodation"
    transport = "transport"
    viewpoint = "viewpoint"
    cafe = "cafe"
    gallery = "gallery"
    beach = "beach"
    church = "church"
    market = "market"

    @property
    def attributes(self) -> "CategoryAttributes":
        return CATEGORY_ATTRIBUTES[self]

    @property
    def label(self) -> str:
        return CATEGORY_ATTRIBUTES[self].label


class PriceLevel(str, Enum):
    free = "Free"
    budget = "$"
    moderate = "$$"
    expensive = "$$$"
    luxury = "$$$$"


@dataclass(frozen=True)
class CategoryAttributes:
    label: str
    icon_name: str
    color: str
    visit_points: int
    badge_category: BadgeCategory


CATEGORY_ATTRIBUTES: dict[POICategory, CategoryAttributes] = {
    POICategory.restaurant: CategoryAttributes("Restaurant", "fork.knife", "#fcc418", 10, BadgeCategory.culinary),
    POICategory.museum: CategoryAttributes("Museum", "building.columns", "#3cc45b", 15, BadgeCategory.historical),
    POICategory.park: CategoryAttributes("Park", "tree", "#3cc45b", 12, BadgeCategory.nature),
    POICategory.historical: CategoryAttributes("Historical Site", "building.2", "#3cc45b", 15, BadgeCategory.historical),
    POICategory.shopping: CategoryAttributes("Shopping", "bag", "#fcc418", 8, BadgeCategory.adventure),
    POICategory.entertainment: CategoryAttributes("Entertainment", "theatermasks", "#fcc418", 10, BadgeCategory.culture),
    POICategory.accommodation: CategoryAttributes("Hotel", "bed.double", "#3e4464", 5, BadgeCategory.photography),
    POICategory.transport: CategoryAttributes("Transportation", "car", "#3e4464", 5, BadgeCategory.photography),
    POICategory.viewpoint: CategoryAttributes("Viewpoint", "mountain.2", "#3cc45b", 12, BadgeCategory.nature),
    POICategory.cafe: CategoryAttributes("Cafe", "cup.and.saucer", "#fcc418", 10, BadgeCategory.culinary),
    POICategory.gallery: CategoryAttributes("Art Gallery", "paintbrush", "#3cc45b", 15, BadgeCategory.culture),
    POICategory.beach: CategoryAttributes("Beach", "beach.umbrella", "#3cc45b", 12, BadgeCategory.nature),
    POICategory.church: CategoryAttributes("Church", "cross", "#3cc45b", 10, BadgeCategory.historical),
    POICategory.market: CategoryAttributes("Market", "cart", "#fcc418", 10, BadgeCategory.culinary),
}


class Coordinate(BaseModel):
    latitude: float
    longitude: float


class POI(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    description: str = ""
    category: POICategory
    coordinate: Coordinate
    address: str = ""
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    price_level: PriceLevel = PriceLevel.free
    estimated_visit_duration: float = DEFAULT_VISIT_DURATION
    image_names: list[str] = Field(default_factory=list)
    opening_hours: list[str] = Field(default_factory=list)
    website: str | None = None
    phone_number: str | None = None
    is_visited: bool = False
    visited_date: datetime | None = None
    user_notes: str = ""
    ar_content_available: bool = False
    historical_facts: list[str] = Field(default_factory=list)

    @field_validator("estimated_visit_duration")
    @classmethod
    def duration_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("estimated_visit_duration must be > 0")
        return v

    @model_validator(mode="after")
    def visited_date_matches_flag(self) -> "POI":
        if self.is_visited != (self.visited_date is not None):
            raise ValueError("visited_date must be set iff is_visited is true")
        return self

    def as_visited(self, when: datetime) -> "POI":
        """Return a copy flagged as visited at `when`."""
        return self.model_copy(update={"is_visited": True, "visited_date": when})


def total_duration(pois: list[POI]) -> float:
    return sum((p.estimated_visit_duration for p in pois), 0.0)
