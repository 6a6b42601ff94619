"""User Records API client.

This module defines a small client wrapper around the REST surface of
the User Records service.  It uses the ``requests`` library internally
and exposes one method per operation:

* :meth:`list_users` – return every user ordered by id.
* :meth:`get_user` – fetch a single user by its identifier.
* :meth:`create_user` – register a new user.
* :meth:`update_user` – replace the editable fields of a user.
* :meth:`delete_user` – remove a user.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary with
the keys ``status_code``, ``kind``, ``message`` and ``details`` taken
from the service's error envelope when one is available.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class UserRecordsAPI:
    """Client for interacting with the User Records API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _error_from_response(response: requests.Response) -> Error:
        error: Error = {
            "status_code": response.status_code,
            "kind": None,
            "message": "",
            "details": "",
        }
        try:
            body = response.json()
        except ValueError:
            error["message"] = response.text
            return error
        if isinstance(body, dict):
            error["kind"] = body.get("kind")
            error["message"] = body.get("error") or ""
            error["details"] = body.get("details") or ""
        else:
            error["message"] = str(body)
        return error

    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/users``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` is the parsed JSON body,
            or ``None`` for empty responses.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "kind": None, "message": str(exc), "details": ""}

        if not response.ok:
            error = self._error_from_response(response)
            logger.error(
                "API request failed (%s %s): %s %s",
                error["status_code"],
                error["kind"],
                error["message"],
                error["details"],
            )
            return None, error
        if response.content:
            return response.json(), None
        return None, None

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/users")
        if error:
            return [], error
        return data or [], None

    def get_user(self, user_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/users/{user_id}")

    def create_user(
        self, email: str, full_name: str, password: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Register a new user and return the stored record."""
        payload = {"email": email, "full-name": full_name, "password": password}
        return self._request("POST", "/users", json_body=payload)

    def update_user(
        self, user_id: Any, email: str, full_name: str, password: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace every editable field of user ``user_id``."""
        payload = {"email": email, "full-name": full_name, "password": password}
        return self._request("PUT", f"/users/{user_id}", json_body=payload)

    def delete_user(self, user_id: Any) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/users/{user_id}")
        if error:
            return False, error
        return True, None
