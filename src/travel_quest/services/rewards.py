"""Visit marking, point accrual, badge unlocks and aggregate travel stats."""

import logging
from collections import Counter
from datetime import datetime

from pydantic import BaseModel

from travel_quest.models.badge import BadgeCategory, TravelBadge
from travel_quest.models.poi import CATEGORY_ATTRIBUTES, POI, POICategory
from travel_quest.models.trip import Trip
from travel_quest.models.user import (
    MAX_LEVEL,
    POINTS_PER_LEVEL,
    TravelStats,
    level_for_points,
    progress_for_points,
)
from travel_quest.services.itinerary import replace_poi

logger = logging.getLogger(__name__)

BADGE_THRESHOLD = 3
BADGE_BONUS_POINTS = 25

BADGE_TO_FAVORITE_CATEGORY: dict[BadgeCategory, POICategory] = {
    BadgeCategory.historical: POICategory.historical,
    BadgeCategory.culinary: POICategory.restaurant,
    BadgeCategory.nature: POICategory.park,
    BadgeCategory.culture: POICategory.gallery,
    BadgeCategory.adventure: POICategory.shopping,
    BadgeCategory.photography: POICategory.viewpoint,
}


class LevelProgress(BaseModel):
    level: int
    progress: float
    points_to_next: int


def points_for_category(category: POICategory) -> int:
    return CATEGORY_ATTRIBUTES[category].visit_points


def badge_category_for(category: POICategory) -> BadgeCategory:
    return CATEGORY_ATTRIBUTES[category].badge_category


def badge_name_for(category: POICategory) -> str:
    return f"{category.label} Explorer"


def mark_visited(trip: Trip, poi: POI, now: datetime | None = None) -> Trip:
    """Record a visit to `poi` and return the updated trip.

    Returns `trip` itself when the POI was already visited. The visited copy
    is written both to `visited_pois` and, when present, to the itinerary
    entry with the same id.
    """
    if trip.has_visited(poi.id):
        return trip

    now = now or datetime.now()
    visited = poi.as_visited(now)
    update: dict = {
        "visited_pois": [*trip.visited_pois, visited],
        "earned_points": trip.earned_points + points_for_category(poi.category),
    }
    if trip.itinerary is not None:
        update["itinerary"] = replace_poi(trip.itinerary, visited)

    updated = trip.model_copy(update=update)
    new_badges = evaluate_badges(updated, now)
    if new_badges:
        logger.info(
            "Trip %s unlocked %s", trip.id, ", ".join(b.name for b in new_badges)
        )
        updated = updated.model_copy(update={"badges": [*updated.badges, *new_badges]})
    return updated


def evaluate_badges(trip: Trip, now: datetime | None = None) -> list[TravelBadge]:
    """Return badges the trip qualifies for but does not hold yet."""
    counts = Counter(p.category for p in trip.visited_pois)
    earned_date = now or datetime.now()
    badges: list[TravelBadge] = []
    for category in POICategory:
        if counts[category] < BADGE_THRESHOLD:
            continue
        name = badge_name_for(category)
        if trip.has_badge(name):
            continue
        badges.append(
            TravelBadge(
                name=name,
                description=f"Visited {BADGE_THRESHOLD}+ {category.label.lower()} locations",
                icon_name=category.attributes.icon_name,
                category=badge_category_for(category),
                earned_date=earned_date,
            )
        )
    return badges


def extract_country(destination: str) -> str:
    return destination.split(",")[-1].strip()


def favorite_category(badges: list[TravelBadge]) -> POICategory | None:
    if not badges:
        return None
    counts = Counter(b.category for b in badges)
    # max() keeps the first maximum, so ties go to declaration order
    top = max(BadgeCategory, key=lambda c: counts[c])
    return BADGE_TO_FAVORITE_CATEGORY[top]


def update_travel_stats(stats: TravelStats, trip: Trip) -> TravelStats:
    """Fold a finished trip into the running totals."""
    known = {b.name for b in stats.badges_earned}
    badges = list(stats.badges_earned)
    for badge in trip.badges:
        if badge.name not in known:
            badges.append(badge)
            known.add(badge.name)

    countries = set(stats.countries_visited)
    country = extract_country(trip.destination)
    if country:
        countries.add(country)

    return stats.model_copy(
        update={
            "total_trips": stats.total_trips + 1,
            "total_places_visited": stats.total_places_visited + len(trip.visited_pois),
            "total_distance_traveled": stats.total_distance_traveled + trip.total_distance,
            "total_points": stats.total_points + trip.earned_points,
            "badges_earned": badges,
            "countries_visited": countries,
            "longest_trip": max(stats.longest_trip, trip.duration),
            "favorite_category": favorite_category(badges) or stats.favorite_category,
        }
    )


def award_badge(stats: TravelStats, badge: TravelBadge) -> TravelStats:
    """Grant a badge directly to the user with the bonus points."""
    if any(b.name == badge.name for b in stats.badges_earned):
        return stats
    badges = [*stats.badges_earned, badge]
    return stats.model_copy(
        update={
            "badges_earned": badges,
            "total_points": stats.total_points + BADGE_BONUS_POINTS,
            "favorite_category": favorite_category(badges) or stats.favorite_category,
        }
    )


def level_progress(stats: TravelStats) -> LevelProgress:
    """There is no next level at the cap, so `points_to_next` is 0 there."""
    level = level_for_points(stats.total_points)
    if level == MAX_LEVEL:
        points_to_next = 0
    else:
        points_to_next = level * POINTS_PER_LEVEL - stats.total_points
    return LevelProgress(
        level=level,
        progress=progress_for_points(stats.total_points),
        points_to_next=points_to_next,
    )
