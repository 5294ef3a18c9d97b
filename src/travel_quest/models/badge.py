from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class BadgeCategory(str, Enum):
    # Declaration order is the tie-break order for favorite category
    historical = "historical"
    culinary = "culinary"
    nature = "nature"
    culture = "culture"
    adventure = "adventure"
    photography = "photography"

    @property
    def label(self) -> str:
        return BADGE_CATEGORY_LABELS[self]


BADGE_CATEGORY_LABELS: dict[BadgeCategory, str] = {
    BadgeCategory.historical: "Historical Explorer",
    BadgeCategory.culinary: "Foodie Adventure",
    BadgeCategory.nature: "Nature Lover",
    BadgeCategory.culture: "Culture Enthusiast",
    BadgeCategory.adventure: "Adventure Seeker",
    BadgeCategory.photography: "Photo Hunter",
}


class TravelBadge(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    description: str = ""
    icon_name: str = ""
    category: BadgeCategory
    earned_date: datetime = Field(default_factory=datetime.now)
