"""
User endpoints for API v1.

Provide listing, retrieval, creation, replacement and deletion of user
records.  Request bodies are decoded here rather than by FastAPI's
parameter validation so that an undecodable or mistyped body is
reported as ``MalformedInput`` (415) and field rules as 422.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError as PydanticValidationError

from user_records_api.app.core.exceptions import MalformedInputError, UserNotFoundError
from user_records_api.app.schemas.user import UserPayload, UserRecord
from user_records_api.app.services.user_service import UserService


router = APIRouter()


def get_user_service(request: Request) -> UserService:
    """Return the service instance attached to the running application."""
    return request.app.state.user_service


# Largest value an SQLite INTEGER column can hold.
MAX_USER_ID = 2**63 - 1


def parse_user_id(raw: str) -> int:
    """Convert a path id to an integer; anything else names no user.

    Ids beyond the 64-bit range cannot exist in any store, so they are
    rejected before ``int()`` sees an arbitrarily long digit string.
    """
    if not (raw.isascii() and raw.isdigit()):
        raise UserNotFoundError()
    if len(raw.lstrip("0")) > len(str(MAX_USER_ID)):
        raise UserNotFoundError()
    user_id = int(raw)
    if user_id > MAX_USER_ID:
        raise UserNotFoundError()
    return user_id


async def read_payload(request: Request) -> UserPayload:
    """Decode the request body into a ``UserPayload``."""
    body = await request.body()
    try:
        return UserPayload.model_validate_json(body)
    except PydanticValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
            for error in exc.errors()
        )
        raise MalformedInputError(details=details) from exc


@router.get("", response_model=List[UserRecord])
@router.get("/", response_model=List[UserRecord], include_in_schema=False)
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRecord]:
    """Return every user ordered by ascending id."""
    return service.list_users()


@router.get("/{user_id}", response_model=UserRecord)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserRecord:
    return service.get_user(parse_user_id(user_id))


@router.post("", response_model=UserRecord, status_code=status.HTTP_200_OK)
@router.post("/", response_model=UserRecord, status_code=status.HTTP_200_OK, include_in_schema=False)
async def create_user(
    request: Request,
    service: UserService = Depends(get_user_service),
) -> UserRecord:
    """Create a user from ``email``, ``full-name`` and ``password``.

    The server assigns ``id``, ``created-at`` and ``last-updated-at``;
    any values the client sends for them are ignored.
    """
    payload = await read_payload(request)
    return service.create_user(payload)


@router.put("/{user_id}", response_model=UserRecord)
async def update_user(
    user_id: str,
    request: Request,
    service: UserService = Depends(get_user_service),
) -> UserRecord:
    """Replace every editable field of an existing user.

    ``id`` and ``created-at`` are kept; ``last-updated-at`` is refreshed.
    An unknown id is answered with 404 before the body is looked at.
    """
    record_id = parse_user_id(user_id)
    service.get_user(record_id)
    payload = await read_payload(request)
    return service.update_user(record_id, payload)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> Response:
    service.delete_user(parse_user_id(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
