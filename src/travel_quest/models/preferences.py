from enum import Enum

from pydantic import BaseModel, Field

from travel_quest.models.poi import POICategory


class TravelStyle(str, Enum):
    relaxed = "relaxed"      # Relaxed Explorer
    balanced = "balanced"    # Balanced Traveler
    intensive = "intensive"  # Adventure Seeker

    @property
    def description(self) -> str:
        return TRAVEL_STYLE_DESCRIPTIONS[self]


class BudgetRange(str, Enum):
    budget = "budget"        # $0-50 / day
    moderate = "moderate"    # $50-150 / day
    luxury = "luxury"        # $150+ / day

    @property
    def daily_range(self) -> str:
        return BUDGET_DAILY_RANGES[self]


class TransportMode(str, Enum):
    walking = "walking"
    bicycle = "bicycle"
    public_transport = "public_transport"
    car = "car"
    rideshare = "rideshare"

    @property
    def speed_kmh(self) -> float:
        return TRANSPORT_SPEEDS_KMH[self]


TRAVEL_STYLE_DESCRIPTIONS: dict[TravelStyle, str] = {
    TravelStyle.relaxed: "Take your time and enjoy each moment",
    TravelStyle.balanced: "Mix of activities with rest periods",
    TravelStyle.intensive: "Pack as much as possible into your trip",
}

BUDGET_DAILY_RANGES: dict[BudgetRange, str] = {
    BudgetRange.budget: "$0-50",
    BudgetRange.moderate: "$50-150",
    BudgetRange.luxury: "$150+",
}

TRANSPORT_SPEEDS_KMH: dict[TransportMode, float] = {
    TransportMode.walking: 5.0,
    TransportMode.bicycle: 15.0,
    TransportMode.public_transport: 25.0,
    TransportMode.car: 40.0,
    TransportMode.rideshare: 40.0,
}

STYLE_RECOMMENDATIONS: dict[TravelStyle, list[POICategory]] = {
    TravelStyle.relaxed: [POICategory.park, POICategory.cafe, POICategory.viewpoint],
    TravelStyle.balanced: [POICategory.restaurant, POICategory.museum, POICategory.shopping],
    TravelStyle.intensive: [POICategory.historical, POICategory.gallery, POICategory.entertainment],
}


class UserPreferences(BaseModel):
    favorite_categories: set[POICategory] = Field(default_factory=set)
    travel_style: TravelStyle = TravelStyle.balanced
    budget_range: BudgetRange = BudgetRange.moderate
    preferred_transport: set[TransportMode] = Field(
        default_factory=lambda: {TransportMode.walking}
    )
    interests: list[str] = Field(default_factory=list)
    language_preference: str = "en"
    notifications_enabled: bool = True
    ar_features_enabled: bool = True
