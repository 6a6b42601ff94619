"""Duplicate-email detection over a snapshot of stored records."""

from typing import Iterable, Optional

from ..schemas.user import UserRecord


def has_email_conflict(
    existing: Iterable[UserRecord],
    email: str,
    exclude_id: Optional[int] = None,
) -> bool:
    """Return ``True`` if any record other than ``exclude_id`` uses ``email``.

    Emails are compared as exact strings.  Updates pass the id of the
    record being replaced so that keeping one's own email is not a
    conflict.
    """
    for record in existing:
        if record.id == exclude_id:
            continue
        if record.email == email:
            return True
    return False
