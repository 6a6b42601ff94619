"""
Exception hierarchy for the User Records API.

Every failure the service reports to a client is a ``UserRecordsError``
carrying a ``kind`` tag, a short ``message``, ``details`` and the HTTP
status it maps to.  The handlers in ``core.errors`` turn them into the
JSON error envelope; nothing else serializes errors.
"""

from typing import Optional


class UserRecordsError(Exception):
    """Base exception for the User Records API."""

    kind = "InternalFailure"
    status_code = 500
    default_message = "internal failure"
    default_details = ""

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message if message is not None else self.default_message
        self.details = details if details is not None else self.default_details
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r}, details={self.details!r})"


class MalformedInputError(UserRecordsError):
    """Raised when a request body cannot be decoded into a user payload."""

    kind = "MalformedInput"
    status_code = 415
    default_message = "malformed request body"


class ValidationError(UserRecordsError):
    """Base class for field-level validation failures."""

    kind = "ValidationFailure"
    status_code = 422


class InvalidEmailError(ValidationError):
    kind = "InvalidEmail"
    default_message = "incorrect email input"
    default_details = "email must have 5-256 chars and contain @"


class InvalidFullNameError(ValidationError):
    kind = "InvalidFullName"
    default_message = "incorrect fullName input"
    default_details = "fullName must have more than 3 chars"


class InvalidPasswordError(ValidationError):
    kind = "InvalidPassword"
    default_message = "incorrect password input"
    default_details = "pass must have 8-256 chars and contain only printable ASCII"


class EmailConflictError(UserRecordsError):
    """Raised when another record already uses the submitted email."""

    kind = "Conflict"
    status_code = 409
    default_message = "incorrect email input"
    default_details = "email already exists - conflict detected"


class UserNotFoundError(UserRecordsError):
    """Raised when no record has the requested id."""

    kind = "NotFound"
    status_code = 404
    default_message = "incorrect endpoint"
    default_details = "no user with such ID"


class InternalFailureError(UserRecordsError):
    """Raised when persistence or encoding fails; ``details`` holds the cause."""
