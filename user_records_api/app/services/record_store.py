"""
Record stores holding the authoritative collection of users.

Two backends share the ``RecordStore`` contract:

* ``InMemoryRecordStore`` keeps an ordered list inside the process.
* ``SqliteRecordStore`` persists to the ``users`` table created by
  ``core.db.init_db``.

Ids come from a counter owned by the store (a plain integer for the
list, ``AUTOINCREMENT`` for SQLite) and are never reused after a
delete.  Stores do no locking of their own: ``UserService`` serializes
every call.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..core.db import get_cursor, init_db
from ..core.exceptions import EmailConflictError, InternalFailureError, UserNotFoundError
from ..schemas.user import UserPayload, UserRecord

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore(ABC):
    """Contract shared by every backing store."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or utc_now

    @abstractmethod
    def list(self) -> List[UserRecord]:
        """Return every record ordered by ascending id."""

    @abstractmethod
    def get(self, user_id: int) -> UserRecord:
        """Return the record with ``user_id`` or raise ``UserNotFoundError``."""

    @abstractmethod
    def insert(self, payload: UserPayload) -> UserRecord:
        """Store a new record under the next id and return it."""

    @abstractmethod
    def replace(self, user_id: int, payload: UserPayload) -> UserRecord:
        """Overwrite everything but ``id`` and ``created_at``; refresh ``last_updated_at``."""

    @abstractmethod
    def remove(self, user_id: int) -> None:
        """Delete the record or raise ``UserNotFoundError``."""


class InMemoryRecordStore(RecordStore):
    """Ordered list of records with a running id counter."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        super().__init__(clock)
        self._records: List[UserRecord] = []
        self._last_id = 0

    def _index_of(self, user_id: int) -> int:
        for index, record in enumerate(self._records):
            if record.id == user_id:
                return index
        raise UserNotFoundError()

    def list(self) -> List[UserRecord]:
        # Ids are appended in increasing order and replaced in place.
        return list(self._records)

    def get(self, user_id: int) -> UserRecord:
        return self._records[self._index_of(user_id)]

    def insert(self, payload: UserPayload) -> UserRecord:
        now = self._clock()
        self._last_id += 1
        record = UserRecord(
            id=self._last_id,
            email=payload.email,
            full_name=payload.full_name,
            password=payload.password,
            created_at=now,
            last_updated_at=now,
        )
        self._records.append(record)
        return record

    def replace(self, user_id: int, payload: UserPayload) -> UserRecord:
        index = self._index_of(user_id)
        current = self._records[index]
        record = current.model_copy(
            update={
                "email": payload.email,
                "full_name": payload.full_name,
                "password": payload.password,
                "last_updated_at": self._clock(),
            }
        )
        self._records[index] = record
        return record

    def remove(self, user_id: int) -> None:
        del self._records[self._index_of(user_id)]


class SqliteRecordStore(RecordStore):
    """Records persisted in a single SQLite table.

    Each operation opens its own connection, in the manner of
    ``core.db.get_cursor``; ``path`` must therefore be a file, not
    ``:memory:``.
    """

    _COLUMNS = "id, email, fullname, password, createdat, lastupdatedat"

    def __init__(self, path: str, clock: Optional[Clock] = None) -> None:
        super().__init__(clock)
        self.path = path
        init_db(path)
        logger.info("SQLite record store ready at %s", path)

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> UserRecord:
        return UserRecord(
            id=row["id"],
            email=row["email"],
            full_name=row["fullname"],
            password=row["password"],
            created_at=datetime.fromisoformat(row["createdat"]),
            last_updated_at=datetime.fromisoformat(row["lastupdatedat"]),
        )

    def _fetch(self, cursor: sqlite3.Cursor, user_id: int) -> UserRecord:
        row = cursor.execute(
            f"SELECT {self._COLUMNS} FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        if row is None:
            raise UserNotFoundError()
        return self._row_to_record(row)

    def list(self) -> List[UserRecord]:
        try:
            with get_cursor(self.path) as cursor:
                rows = cursor.execute(
                    f"SELECT {self._COLUMNS} FROM users ORDER BY id"
                ).fetchall()
        except sqlite3.Error as exc:
            raise InternalFailureError(details=str(exc)) from exc
        return [self._row_to_record(row) for row in rows]

    def get(self, user_id: int) -> UserRecord:
        try:
            with get_cursor(self.path) as cursor:
                return self._fetch(cursor, user_id)
        except sqlite3.Error as exc:
            raise InternalFailureError(details=str(exc)) from exc

    def insert(self, payload: UserPayload) -> UserRecord:
        now = self._clock().isoformat()
        try:
            with get_cursor(self.path) as cursor:
                cursor.execute(
                    "INSERT INTO users (email, fullname, password, createdat, lastupdatedat) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (payload.email, payload.full_name, payload.password, now, now),
                )
                return self._fetch(cursor, cursor.lastrowid)
        except sqlite3.IntegrityError as exc:
            raise EmailConflictError() from exc
        except sqlite3.Error as exc:
            raise InternalFailureError(details=str(exc)) from exc

    def replace(self, user_id: int, payload: UserPayload) -> UserRecord:
        try:
            with get_cursor(self.path) as cursor:
                cursor.execute(
                    "UPDATE users SET email = ?, fullname = ?, password = ?, lastupdatedat = ? "
                    "WHERE id = ?",
                    (
                        payload.email,
                        payload.full_name,
                        payload.password,
                        self._clock().isoformat(),
                        user_id,
                    ),
                )
                if cursor.rowcount == 0:
                    raise UserNotFoundError()
                return self._fetch(cursor, user_id)
        except sqlite3.IntegrityError as exc:
            raise EmailConflictError() from exc
        except sqlite3.Error as exc:
            raise InternalFailureError(details=str(exc)) from exc

    def remove(self, user_id: int) -> None:
        try:
            with get_cursor(self.path) as cursor:
                cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
                if cursor.rowcount == 0:
                    raise UserNotFoundError()
        except sqlite3.Error as exc:
            raise InternalFailureError(details=str(exc)) from exc
