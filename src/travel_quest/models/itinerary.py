from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from travel_quest.models.poi import POI, total_duration


class DailyPlan(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    date: datetime
    planned_pois: list[POI] = Field(default_factory=list)
    notes: str = ""
    estimated_budget: float = 0.0

    @property
    def total_duration(self) -> float:
        return total_duration(self.planned_pois)


class Itinerary(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    trip_id: UUID
    points_of_interest: list[POI] = Field(default_factory=list)
    daily_plans: list[DailyPlan] = Field(default_factory=list)
    total_estimated_duration: float = 0.0
    is_downloaded_for_offline: bool = False

    def contains(self, poi_id: UUID) -> bool:
        return any(p.id == poi_id for p in self.points_of_interest)
