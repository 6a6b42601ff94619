"""End-to-end tests for the user record HTTP API, run against both stores."""

from __future__ import annotations

from datetime import datetime
from typing import List

import pytest
from fastapi.testclient import TestClient

from user_records_api.app.core.config import Settings
from user_records_api.app.main import create_app
from user_records_api.app.schemas.user import UserRecord
from user_records_api.app.services.record_store import InMemoryRecordStore

ALICE = {"email": "a@b.com", "fullName": "Alice", "password": "Secret1!"}
ENVELOPE_KEYS = {"error", "details", "timestamp", "kind"}


def _assert_envelope(body: dict, kind: str) -> None:
    assert ENVELOPE_KEYS <= set(body)
    assert body["kind"] == kind
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))


def test_create_returns_record_with_first_id(client: TestClient) -> None:
    response = client.post("/users", json=ALICE)

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["id"] == 1
    assert body["email"] == "a@b.com"
    assert body["full-name"] == "Alice"
    assert body["password"] == "Secret1!"
    assert body["created-at"] == body["last-updated-at"]
    assert set(body) == {"id", "email", "full-name", "password", "created-at", "last-updated-at"}


def test_duplicate_email_is_a_conflict(client: TestClient) -> None:
    assert client.post("/users", json=ALICE).status_code == 200

    response = client.post("/users", json={**ALICE, "fullName": "Alice Again"})
    assert response.status_code == 409
    body = response.json()
    _assert_envelope(body, "Conflict")
    assert body["details"] == "email already exists - conflict detected"
    assert len(client.get("/users").json()) == 1


def test_update_keeps_id_and_created_at(client: TestClient) -> None:
    created = client.post("/users", json=ALICE).json()

    response = client.put(
        "/users/1",
        json={"email": "a2@b.com", "fullName": "Alice2", "password": "Secret2!"},
    )
    assert response.status_code == 200, response.text
    updated = response.json()
    assert updated["id"] == 1
    assert updated["email"] == "a2@b.com"
    assert updated["full-name"] == "Alice2"
    assert updated["created-at"] == created["created-at"]
    assert updated["last-updated-at"] > created["last-updated-at"]
    assert client.get("/users/1").json() == updated


def test_update_with_own_email_succeeds(client: TestClient) -> None:
    client.post("/users", json=ALICE)
    response = client.put("/users/1", json={**ALICE, "fullName": "Alice Cooper"})

    assert response.status_code == 200, response.text
    assert response.json()["full-name"] == "Alice Cooper"


def test_update_to_taken_email_conflicts(client: TestClient) -> None:
    client.post("/users", json=ALICE)
    client.post("/users", json={**ALICE, "email": "c@d.com"})

    response = client.put("/users/2", json=ALICE)
    assert response.status_code == 409
    _assert_envelope(response.json(), "Conflict")


def test_delete_then_get_is_not_found(client: TestClient) -> None:
    client.post("/users", json=ALICE)

    deleted = client.delete("/users/1")
    assert deleted.status_code == 204
    assert deleted.content == b""

    response = client.get("/users/1")
    assert response.status_code == 404
    body = response.json()
    _assert_envelope(body, "NotFound")
    assert body["details"] == "no user with such ID"


def test_invalid_payload_reports_email_first(client: TestClient) -> None:
    response = client.post(
        "/users", json={"email": "bad", "fullName": "Al", "password": "short"}
    )

    assert response.status_code == 422
    body = response.json()
    _assert_envelope(body, "InvalidEmail")
    assert body["error"] == "incorrect email input"


@pytest.mark.parametrize(
    ("payload", "kind"),
    [
        ({**ALICE, "fullName": "Bob"}, "InvalidFullName"),
        ({**ALICE, "password": "has space!"}, "InvalidPassword"),
        ({"fullName": "Alice", "password": "Secret1!"}, "InvalidEmail"),
    ],
)
def test_field_rules_are_unprocessable(client: TestClient, payload: dict, kind: str) -> None:
    response = client.post("/users", json=payload)

    assert response.status_code == 422
    _assert_envelope(response.json(), kind)


@pytest.mark.parametrize(
    "body",
    [b"", b"{not json", b"[1, 2]", b'{"email": 123, "fullName": "Alice", "password": "Secret1!"}'],
)
def test_malformed_body_is_unsupported_media_type(client: TestClient, body: bytes) -> None:
    response = client.post(
        "/users", content=body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 415
    _assert_envelope(response.json(), "MalformedInput")


def test_full_name_key_variants_are_accepted(client: TestClient) -> None:
    hyphen = client.post("/users", json={"email": "h@b.com", "full-name": "Hyphen", "password": "Secret1!"})
    snake = client.post("/users", json={"email": "s@b.com", "full_name": "Snake", "password": "Secret1!"})

    assert hyphen.json()["full-name"] == "Hyphen"
    assert snake.json()["full-name"] == "Snake"


def test_client_cannot_choose_id_or_timestamps(client: TestClient) -> None:
    response = client.post(
        "/users", json={**ALICE, "id": 77, "created-at": "1999-01-01T00:00:00+00:00"}
    )

    body = response.json()
    assert body["id"] == 1
    assert not body["created-at"].startswith("1999")


def test_list_is_ordered_and_trailing_slash_is_accepted(client: TestClient) -> None:
    client.post("/users/", json=ALICE)
    client.post("/users", json={**ALICE, "email": "c@d.com"})

    listing = client.get("/users")
    assert [user["id"] for user in listing.json()] == [1, 2]
    assert client.get("/users/").json() == listing.json()


def test_empty_listing(client: TestClient) -> None:
    response = client.get("/users")
    assert response.status_code == 200
    assert response.json() == []


def test_repeated_get_is_stable_until_mutation(client: TestClient) -> None:
    client.post("/users", json=ALICE)
    first = client.get("/users/1").json()
    assert client.get("/users/1").json() == first

    client.put("/users/1", json={**ALICE, "fullName": "Alicia"})
    assert client.get("/users/1").json() != first


@pytest.mark.parametrize("method", ["get", "put", "delete"])
@pytest.mark.parametrize(
    "path",
    [
        "/users/5",
        "/users/abc",
        "/users/-1",
        "/users/9223372036854775808",
        "/users/99999999999999999999",
        "/users/" + "9" * 5000,
    ],
)
def test_unknown_ids_are_not_found(client: TestClient, method: str, path: str) -> None:
    response = getattr(client, method)(path)

    assert response.status_code == 404
    _assert_envelope(response.json(), "NotFound")


def test_long_zero_padded_id_still_finds_user(client: TestClient) -> None:
    client.post("/users", json=ALICE)

    response = client.get("/users/" + "0" * 30 + "1")
    assert response.status_code == 200
    assert response.json()["id"] == 1


def test_put_unknown_id_is_not_found_even_with_bad_body(client: TestClient) -> None:
    response = client.put("/users/3", content=b"{oops", headers={"Content-Type": "application/json"})

    assert response.status_code == 404
    _assert_envelope(response.json(), "NotFound")


def test_put_malformed_body_on_existing_user(client: TestClient) -> None:
    client.post("/users", json=ALICE)
    response = client.put("/users/1", content=b"{oops", headers={"Content-Type": "application/json"})

    assert response.status_code == 415
    _assert_envelope(response.json(), "MalformedInput")


def test_unknown_route_and_method_use_envelope(client: TestClient) -> None:
    missing = client.get("/nowhere")
    assert missing.status_code == 404
    _assert_envelope(missing.json(), "NotFound")

    not_allowed = client.patch("/users/1", json=ALICE)
    assert not_allowed.status_code == 405
    _assert_envelope(not_allowed.json(), "HTTPError")


class _BrokenStore(InMemoryRecordStore):
    def list(self) -> List[UserRecord]:
        raise RuntimeError("disk on fire")


def test_unexpected_failure_is_internal_error_with_cause() -> None:
    app = create_app(Settings(), store=_BrokenStore())
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/users")

    assert response.status_code == 500
    body = response.json()
    _assert_envelope(body, "InternalFailure")
    assert body["details"] == "disk on fire"
