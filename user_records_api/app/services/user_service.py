"""
Business logic for users.

``UserService`` validates submitted payloads, rejects duplicate emails
and applies the change to its ``RecordStore``.  A single re-entrant
lock guards the store: reads never observe a half-applied write, and
the duplicate-email check runs in the same critical section as the
insert or replace it protects.
"""

import logging
import threading
from typing import List

from ..core.config import STORAGE_BACKENDS, Settings
from ..core.db import get_database_path
from ..core.exceptions import EmailConflictError
from ..schemas.user import UserPayload, UserRecord
from .conflicts import has_email_conflict
from .record_store import InMemoryRecordStore, RecordStore, SqliteRecordStore
from .validation import validate_user

logger = logging.getLogger(__name__)


class UserService:
    """Service for working with user records.

    One instance is created per application and stored on
    ``app.state.user_service``; handlers obtain it through the
    ``get_user_service`` dependency.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self._lock = threading.RLock()

    def list_users(self) -> List[UserRecord]:
        with self._lock:
            return self.store.list()

    def get_user(self, user_id: int) -> UserRecord:
        with self._lock:
            return self.store.get(user_id)

    def create_user(self, payload: UserPayload) -> UserRecord:
        """Validate ``payload`` and store it as a new user.

        Raises the first failing ``ValidationError`` or
        ``EmailConflictError`` if the email is already taken.
        """
        validate_user(payload)
        with self._lock:
            if has_email_conflict(self.store.list(), payload.email):
                raise EmailConflictError()
            record = self.store.insert(payload)
        logger.info("Created user %s (%s)", record.id, record.email)
        return record

    def update_user(self, user_id: int, payload: UserPayload) -> UserRecord:
        """Replace the editable fields of an existing user.

        The id is resolved first, so an unknown id is reported as
        ``UserNotFoundError`` even when the payload is invalid.  The
        record's own current email never counts as a conflict.
        """
        with self._lock:
            self.store.get(user_id)
            validate_user(payload)
            if has_email_conflict(self.store.list(), payload.email, exclude_id=user_id):
                raise EmailConflictError()
            record = self.store.replace(user_id, payload)
        logger.info("Updated user %s", user_id)
        return record

    def delete_user(self, user_id: int) -> None:
        with self._lock:
            self.store.remove(user_id)
        logger.info("Deleted user %s", user_id)


def build_store(settings: Settings) -> RecordStore:
    """Instantiate the record store selected by ``settings.storage_backend``."""
    backend = settings.storage_backend.strip().lower()
    if backend == "memory":
        return InMemoryRecordStore()
    if backend == "sqlite":
        return SqliteRecordStore(get_database_path(settings.database_url))
    raise ValueError(
        f"Unknown storage backend {settings.storage_backend!r}; "
        f"expected one of {', '.join(STORAGE_BACKENDS)}"
    )
