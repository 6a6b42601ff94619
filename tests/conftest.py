from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from user_records_api.app.core.config import Settings
from user_records_api.app.main import create_app
from user_records_api.app.schemas.user import UserPayload
from user_records_api.app.services.record_store import (
    InMemoryRecordStore,
    RecordStore,
    SqliteRecordStore,
)


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


def make_payload(
    email: str = "a@b.com",
    full_name: str = "Alice",
    password: str = "Secret1!",
) -> UserPayload:
    return UserPayload(email=email, full_name=full_name, password=password)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(params=["memory", "sqlite"])
def store(request: pytest.FixtureRequest, tmp_path: Path, clock: FakeClock) -> RecordStore:
    if request.param == "memory":
        return InMemoryRecordStore(clock=clock)
    return SqliteRecordStore(str(tmp_path / "users.sqlite3"), clock=clock)


@pytest.fixture()
def client(store: RecordStore) -> TestClient:
    app = create_app(Settings(), store=store)
    with TestClient(app) as test_client:
        yield test_client
