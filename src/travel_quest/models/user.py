"""The local user record: profile, preferences and aggregated travel stats."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, computed_field, field_validator

from travel_quest.models.badge import TravelBadge
from travel_quest.models.poi import POICategory
from travel_quest.models.preferences import UserPreferences

POINTS_PER_LEVEL = 100
MAX_LEVEL = 50


def level_for_points(points: int) -> int:
    return min(points // POINTS_PER_LEVEL + 1, MAX_LEVEL)


def progress_for_points(points: int) -> float:
    """Fraction of the way from the current level to the next.

    Clamped to 1.0 once the level cap is reached.
    """
    level = level_for_points(points)
    progress = (points - (level - 1) * POINTS_PER_LEVEL) / POINTS_PER_LEVEL
    return min(progress, 1.0)


class TravelStats(BaseModel):
    total_trips: int = 0
    total_places_visited: int = 0
    total_distance_traveled: float = 0.0  # kilometers
    total_points: int = 0
    badges_earned: list[TravelBadge] = Field(default_factory=list)
    countries_visited: set[str] = Field(default_factory=set)
    favorite_category: POICategory | None = None
    longest_trip: int = 0  # days

    @field_validator("total_points")
    @classmethod
    def points_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("total_points must be >= 0")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def level(self) -> int:
        return level_for_points(self.total_points)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress_to_next_level(self) -> float:
        return progress_for_points(self.total_points)


class User(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str = ""
    profile_image_name: str | None = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    travel_stats: TravelStats = Field(default_factory=TravelStats)
    has_completed_onboarding: bool = False
    created_date: datetime = Field(default_factory=datetime.now)
