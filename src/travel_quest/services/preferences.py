"""Mutations of the single local user record."""

import logging
from collections.abc import Iterable
from typing import Any

from travel_quest.clients.storage import PersistenceStore
from travel_quest.models.badge import TravelBadge
from travel_quest.models.poi import POICategory
from travel_quest.models.preferences import (
    STYLE_RECOMMENDATIONS,
    BudgetRange,
    TransportMode,
    TravelStyle,
)
from travel_quest.models.trip import Trip
from travel_quest.models.user import User
from travel_quest.services import rewards
from travel_quest.services.events import ChangeSignal

logger = logging.getLogger(__name__)


class PreferencesStore:
    def __init__(self, store: PersistenceStore) -> None:
        self._store = store
        self.user: User = store.load_user()
        self.changed = ChangeSignal()

    @property
    def error_message(self) -> str | None:
        return self._store.error_message

    # --- profile ---

    def update_user_name(self, name: str) -> None:
        self._update_user(name=name)

    def update_profile_image(self, image_name: str) -> None:
        self._update_user(profile_image_name=image_name)

    def complete_onboarding(self) -> None:
        logger.info("Onboarding completed for user %s", self.user.id)
        self._update_user(has_completed_onboarding=True)

    def reset_onboarding(self) -> None:
        self._update_user(has_completed_onboarding=False)

    # --- preferences ---

    def update_travel_style(self, style: TravelStyle) -> None:
        self._update_preferences(travel_style=style)

    def update_budget_range(self, budget_range: BudgetRange) -> None:
        self._update_preferences(budget_range=budget_range)

    def update_favorite_categories(self, categories: Iterable[POICategory]) -> None:
        self._update_preferences(favorite_categories=set(categories))

    def add_favorite_category(self, category: POICategory) -> None:
        current = self.user.preferences.favorite_categories
        if category in current:
            return
        self._update_preferences(favorite_categories=current | {category})

    def remove_favorite_category(self, category: POICategory) -> None:
        self._update_preferences(
            favorite_categories=self.user.preferences.favorite_categories - {category}
        )

    def update_preferred_transport(self, modes: Iterable[TransportMode]) -> None:
        self._update_preferences(preferred_transport=set(modes))

    def update_interests(self, interests: Iterable[str]) -> None:
        self._update_preferences(interests=list(dict.fromkeys(interests)))

    def add_interest(self, interest: str) -> None:
        current = self.user.preferences.interests
        if interest in current:
            return
        self._update_preferences(interests=[*current, interest])

    def remove_interest(self, interest: str) -> None:
        self._update_preferences(
            interests=[i for i in self.user.preferences.interests if i != interest]
        )

    def toggle_notifications(self) -> None:
        prefs = self.user.preferences
        self._update_preferences(notifications_enabled=not prefs.notifications_enabled)

    def toggle_ar_features(self) -> None:
        prefs = self.user.preferences
        self._update_preferences(ar_features_enabled=not prefs.ar_features_enabled)

    # --- stats ---

    def update_travel_stats(self, trip: Trip) -> None:
        self._update_user(travel_stats=rewards.update_travel_stats(self.user.travel_stats, trip))

    def add_badge(self, badge: TravelBadge) -> None:
        self._update_user(travel_stats=rewards.award_badge(self.user.travel_stats, badge))

    def level_progress(self) -> rewards.LevelProgress:
        return rewards.level_progress(self.user.travel_stats)

    def recommended_categories(self) -> list[POICategory]:
        favorites = self.user.preferences.favorite_categories
        if favorites:
            return [c for c in POICategory if c in favorites]
        return list(STYLE_RECOMMENDATIONS[self.user.preferences.travel_style])

    def _update_preferences(self, **changes: Any) -> None:
        self._update_user(preferences=self.user.preferences.model_copy(update=changes))

    def _update_user(self, **changes: Any) -> None:
        self.user = self.user.model_copy(update=changes)
        if not self._store.save_user(self.user):
            logger.warning("User kept in memory only: %s", self._store.error_message)
        self.changed.emit()
