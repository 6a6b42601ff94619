"""
Pydantic models for user data.

``UserPayload`` is what clients submit on create and update; it carries
only the editable fields.  ``UserRecord`` is what the stores hold and
what the API returns, serialized with hyphenated keys
(``full-name``, ``created-at``, ``last-updated-at``).
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserPayload(BaseModel):
    """Fields a client may set on a user.

    Missing fields decode to empty strings so that they are reported by
    the field validators rather than by the decoder.  The full name is
    accepted as ``full-name``, ``fullName`` or ``full_name``.  Unknown
    keys such as ``id`` or ``created-at`` are ignored.
    """

    email: str = Field("", examples=["user@example.com"])
    full_name: str = Field(
        "",
        validation_alias=AliasChoices("full-name", "fullName", "full_name"),
        serialization_alias="full-name",
        examples=["Alice Liddell"],
    )
    password: str = Field("", examples=["Secret1!"])

    model_config = ConfigDict(extra="ignore")


class UserRecord(BaseModel):
    """A stored user as returned by the API."""

    id: int
    email: str
    full_name: str = Field(alias="full-name")
    password: str
    created_at: datetime = Field(alias="created-at")
    last_updated_at: datetime = Field(alias="last-updated-at")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ErrorEnvelope(BaseModel):
    """JSON body of every error response."""

    error: str
    details: str
    timestamp: datetime
    kind: str
