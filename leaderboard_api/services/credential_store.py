"""Process-wide in-memory credential store with two unique handle indexes."""

import logging
import threading
from functools import lru_cache

from leaderboard_api.models.user import UserRecord

logger = logging.getLogger(__name__)


class UniquenessError(Exception):
    """Raised when an insert would duplicate a kick or rainbet username."""

    def __init__(self, message: str, field: str) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class InMemoryCredentialStore:
    """
    Volatile user store; contents are lost on restart.

    Lookups read the indexes without locking. insert() checks both uniqueness
    constraints and writes all indexes inside one lock, so two concurrent
    registrations with the same handle cannot both succeed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, UserRecord] = {}
        self._by_primary: dict[str, UserRecord] = {}
        self._by_secondary: dict[str, UserRecord] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def find_by_primary(self, handle: str) -> UserRecord | None:
        """Return the user with this kick username, or None."""
        return self._by_primary.get(handle)

    def find_by_secondary(self, handle: str) -> UserRecord | None:
        """Return the user with this rainbet username, or None."""
        return self._by_secondary.get(handle)

    def insert(self, record: UserRecord) -> UserRecord:
        """Store a new user. Raises UniquenessError if either handle is taken."""
        with self._lock:
            if record.kick_username in self._by_primary:
                raise UniquenessError("Kick username already exists.", "kick_username")
            if record.rainbet_username in self._by_secondary:
                raise UniquenessError(
                    "Rainbet username already exists.", "rainbet_username"
                )
            if record.id in self._by_id:
                raise UniquenessError("User id already exists.", "id")
            self._by_id[record.id] = record
            self._by_primary[record.kick_username] = record
            self._by_secondary[record.rainbet_username] = record
        logger.debug("Stored user", extra={"user_id": record.id})
        return record


@lru_cache
def get_credential_store() -> InMemoryCredentialStore:
    """Return the process-wide store (safe to call from dependencies)."""
    return InMemoryCredentialStore()
