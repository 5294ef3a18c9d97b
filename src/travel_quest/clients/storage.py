"""JSON slot store for the trip collection and the user record."""

import logging
import os
import tempfile
import threading
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from travel_quest.config import settings
from travel_quest.models.trip import Trip
from travel_quest.models.user import User

logger = logging.getLogger(__name__)

_TRIPS_ADAPTER = TypeAdapter(list[Trip])


class PersistenceStore:
    """Two independent slots: one for trips, one for the user.

    Load and save failures never raise. They leave a user-facing advisory in
    `error_message` and fall back to defaults (on load) or leave the caller's
    in-memory state as the source of truth (on save).
    """

    def __init__(
        self,
        trips_path: Path | None = None,
        user_path: Path | None = None,
    ) -> None:
        self.trips_path = trips_path or settings.trips_path
        self.user_path = user_path or settings.user_path
        self.error_message: str | None = None
        self._lock = threading.Lock()

    def clear_error(self) -> None:
        self.error_message = None

    # --- trips ---

    def load_trips(self) -> list[Trip]:
        raw = self._read(self.trips_path, "Failed to load trips")
        if raw is None:
            return []
        try:
            return _TRIPS_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            logger.warning("Failed to load trips from %s: %s", self.trips_path, exc)
            self.error_message = "Failed to load trips"
            return []

    def save_trips(self, trips: list[Trip]) -> bool:
        try:
            payload = _TRIPS_ADAPTER.dump_json(trips, indent=2)
            self._write(self.trips_path, payload)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to save trips to %s: %s", self.trips_path, exc)
            self.error_message = "Failed to save trips"
            return False
        return True

    # --- user ---

    def load_user(self) -> User:
        raw = self._read(self.user_path, "Failed to load user data")
        if raw is None:
            return User()
        try:
            return User.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Failed to load user from %s: %s", self.user_path, exc)
            self.error_message = "Failed to load user data"
            return User()

    def save_user(self, user: User) -> bool:
        try:
            payload = user.model_dump_json(indent=2).encode("utf-8")
            self._write(self.user_path, payload)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to save user to %s: %s", self.user_path, exc)
            self.error_message = "Failed to save user data"
            return False
        return True

    # --- io ---

    def _read(self, path: Path, failure_message: str) -> bytes | None:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Could not read %s: %s", path, exc)
            self.error_message = failure_message
            return None

    def _write(self, path: Path, payload: bytes) -> None:
        """Write to a temp file beside `path`, then atomically swap it in."""
        with self._lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
