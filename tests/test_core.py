from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from user_records_api.app.core.db import get_database_path, init_db
from user_records_api.app.core.errors import error_envelope
from user_records_api.app.core.exceptions import (
    EmailConflictError,
    InternalFailureError,
    MalformedInputError,
    UserNotFoundError,
    UserRecordsError,
)


def test_absolute_database_path_is_kept(tmp_path: Path) -> None:
    path = str(tmp_path / "users.db")
    assert get_database_path(path) == path


def test_relative_database_path_resolves_under_project_root() -> None:
    project_root = Path(__file__).resolve().parent.parent
    assert get_database_path("data/users.db") == str(project_root / "data" / "users.db")


def test_init_db_is_idempotent(tmp_path: Path) -> None:
    path = str(tmp_path / "nested" / "users.db")
    init_db(path)
    init_db(path)

    conn = sqlite3.connect(path)
    try:
        columns = [row[1] for row in conn.execute("PRAGMA table_info(users)")]
        versions = conn.execute("SELECT version FROM migrations").fetchall()
    finally:
        conn.close()
    assert columns == ["id", "email", "fullname", "password", "createdat", "lastupdatedat"]
    assert versions == [(1,)]
    assert os.path.exists(path)


def test_error_kinds_and_statuses() -> None:
    assert (MalformedInputError.kind, MalformedInputError.status_code) == ("MalformedInput", 415)
    assert (EmailConflictError.kind, EmailConflictError.status_code) == ("Conflict", 409)
    assert (UserNotFoundError.kind, UserNotFoundError.status_code) == ("NotFound", 404)
    assert (InternalFailureError.kind, InternalFailureError.status_code) == ("InternalFailure", 500)
    assert issubclass(InternalFailureError, UserRecordsError)


def test_internal_failure_keeps_cause() -> None:
    error = InternalFailureError(details="database is locked")
    assert error.message == "internal failure"
    assert error.details == "database is locked"


def test_error_envelope_shape() -> None:
    body = error_envelope("NotFound", "incorrect endpoint", None)

    assert body["kind"] == "NotFound"
    assert body["error"] == "incorrect endpoint"
    assert body["details"] == ""
    assert isinstance(body["timestamp"], str)
