"""Location-sensing collaborator: current coordinate and authorization state."""

import logging
import math
from collections.abc import Callable
from enum import Enum

from travel_quest.models.poi import Coordinate
from travel_quest.services.events import ChangeSignal

logger = logging.getLogger(__name__)

_EARTH_RADIUS_KM = 6371.0


class AuthorizationStatus(str, Enum):
    not_determined = "not_determined"
    restricted = "restricted"
    denied = "denied"
    authorized_when_in_use = "authorized_when_in_use"
    authorized_always = "authorized_always"

    @property
    def is_authorized(self) -> bool:
        return self in (
            AuthorizationStatus.authorized_when_in_use,
            AuthorizationStatus.authorized_always,
        )


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in kilometers."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    return _EARTH_RADIUS_KM * 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))


class LocationService:
    """Holds the last known coordinate reported by the platform.

    Updates only ever replace `current_location`; they never touch trips or
    the user record. No location means discovery is unavailable.
    """

    def __init__(
        self,
        current_location: Coordinate | None = None,
        authorization_status: AuthorizationStatus = AuthorizationStatus.not_determined,
        ask_authorization: Callable[[], AuthorizationStatus] | None = None,
    ) -> None:
        self._ask_authorization = ask_authorization
        self.current_location = current_location
        self.authorization_status = authorization_status
        self.is_location_enabled = False
        self.error_message: str | None = None
        self.changed = ChangeSignal()

    def request_permission(self) -> None:
        """Ask for access when undecided; otherwise start updates or explain the denial.

        The answer comes from `ask_authorization`, the platform prompt. Without
        one the status stays `not_determined` until the platform reports a
        decision through `change_authorization`.
        """
        if self.authorization_status == AuthorizationStatus.not_determined:
            if self._ask_authorization is None:
                logger.debug("No authorization prompt available; waiting for change_authorization")
                return
            self.change_authorization(self._ask_authorization())
        elif self.authorization_status in (AuthorizationStatus.denied, AuthorizationStatus.restricted):
            self.error_message = (
                "Location access is required for navigation features. Please enable in Settings."
            )
        elif self.authorization_status.is_authorized:
            self.start_updates()

    def change_authorization(self, status: AuthorizationStatus) -> None:
        self.authorization_status = status
        if status.is_authorized:
            self.start_updates()
        elif status in (AuthorizationStatus.denied, AuthorizationStatus.restricted):
            self.stop_updates()
            self.error_message = "Location access denied. Enable in Settings to use navigation features."
        self.changed.emit()

    def start_updates(self) -> None:
        if not self.authorization_status.is_authorized:
            return
        self.is_location_enabled = True

    def stop_updates(self) -> None:
        self.is_location_enabled = False

    def update_location(self, coordinate: Coordinate) -> None:
        self.current_location = coordinate
        self.changed.emit()

    def fail(self, error: Exception | str) -> None:
        logger.warning("Location update failed: %s", error)
        self.error_message = f"Failed to get location: {error}"

    def distance_km(self, a: Coordinate, b: Coordinate) -> float:
        return haversine_km(a, b)

    def distance_from_current(self, coordinate: Coordinate) -> float | None:
        if self.current_location is None:
            return None
        return haversine_km(self.current_location, coordinate)
