from datetime import datetime, timedelta
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from travel_quest.models.badge import TravelBadge
from travel_quest.models.itinerary import Itinerary
from travel_quest.models.poi import POI


def to_local_naive(value: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class Trip(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    destination: str
    start_date: datetime
    end_date: datetime
    description: str = ""
    itinerary: Itinerary | None = None
    cover_image_name: str | None = None
    is_completed: bool = False
    visited_pois: list[POI] = Field(default_factory=list)
    total_distance: float = 0.0  # kilometers
    earned_points: int = 0
    badges: list[TravelBadge] = Field(default_factory=list)

    @field_validator("start_date", "end_date", mode="after")
    @classmethod
    def naive_local(cls, v: datetime) -> datetime:
        return to_local_naive(v)

    @field_validator("earned_points")
    @classmethod
    def points_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("earned_points must be >= 0")
        return v

    @property
    def duration(self) -> int:
        """Whole days between start and end, truncated toward zero."""
        return int((self.end_date - self.start_date) / timedelta(days=1))

    @property
    def completion_percentage(self) -> float:
        if self.itinerary is None or not self.itinerary.points_of_interest:
            return 0.0
        return len(self.visited_pois) / len(self.itinerary.points_of_interest)

    def has_visited(self, poi_id: UUID) -> bool:
        return any(p.id == poi_id for p in self.visited_pois)

    def has_badge(self, name: str) -> bool:
        return any(b.name == name for b in self.badges)


class NewTripRequest(BaseModel):
    """User input for a new trip, validated before it reaches the TripManager."""

    name: str
    destination: str
    start_date: datetime
    end_date: datetime
    description: str = ""

    @field_validator("start_date", "end_date", mode="after")
    @classmethod
    def naive_local(cls, v: datetime) -> datetime:
        return to_local_naive(v)

    @field_validator("name", "destination")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please fill in all required fields")
        return v

    @model_validator(mode="after")
    def end_not_before_start(self) -> "NewTripRequest":
        if self.end_date < self.start_date:
            raise ValueError("End date must be on or after the start date")
        return self
