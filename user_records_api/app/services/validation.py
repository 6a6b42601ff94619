"""
Field rules for submitted users.

Each ``validate_*`` function raises the matching ``ValidationError``
subclass; the ``is_valid_*`` predicates expose the same rules as
booleans.  ``validate_user`` applies them in a fixed order (email, full
name, password) and reports only the first failure.
"""

from ..core.exceptions import InvalidEmailError, InvalidFullNameError, InvalidPasswordError
from ..schemas.user import UserPayload

EMAIL_MIN_LENGTH = 5
EMAIL_MAX_LENGTH = 256
FULL_NAME_MIN_LENGTH = 4
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 256

# Printable ASCII without the space character.
PASSWORD_FIRST_CHAR = "!"
PASSWORD_LAST_CHAR = "~"


def is_valid_email(email: str) -> bool:
    return EMAIL_MIN_LENGTH <= len(email) <= EMAIL_MAX_LENGTH and "@" in email


def is_valid_full_name(full_name: str) -> bool:
    return len(full_name) >= FULL_NAME_MIN_LENGTH


def is_valid_password(password: str) -> bool:
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return False
    return all(PASSWORD_FIRST_CHAR <= char <= PASSWORD_LAST_CHAR for char in password)


def validate_email(email: str) -> None:
    if not is_valid_email(email):
        raise InvalidEmailError()


def validate_full_name(full_name: str) -> None:
    if not is_valid_full_name(full_name):
        raise InvalidFullNameError()


def validate_password(password: str) -> None:
    if not is_valid_password(password):
        raise InvalidPasswordError()


def validate_user(payload: UserPayload) -> None:
    """Raise the first failing rule for ``payload``, checking email first."""
    validate_email(payload.email)
    validate_full_name(payload.full_name)
    validate_password(payload.password)
