"""Event Hub API client.

This module defines a small client wrapper around the Event Hub REST
API.  It uses the ``requests`` library internally and mirrors the
operations exposed by the server:

* :meth:`EventHubClient.list_events` – return all events.
* :meth:`EventHubClient.get_event` – fetch a single event by id.
* :meth:`EventHubClient.create_event` – create an event owned by the caller.
* :meth:`EventHubClient.update_event` – partially update an owned event.
* :meth:`EventHubClient.delete_event` – delete an owned event.
* :meth:`EventHubClient.list_attendees` – users attending an event.
* :meth:`EventHubClient.add_attendee` / :meth:`EventHubClient.remove_attendee`.
* :meth:`EventHubClient.events_for_user` – events a user attends.
* :meth:`EventHubClient.get_user` / :meth:`EventHubClient.me`.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with keys ``status_code`` and ``message`` (the ``error``
field of the server's JSON body when there is one).

Authentication is optional: pass ``token='<bearer token>'`` to send an
``Authorization: Bearer`` header with every request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class EventHubClient:
    """Client for interacting with the Event Hub API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL including the version prefix, e.g.
                ``http://localhost:8080/api/v1``.
            token: Optional bearer token for endpoints that require
                authentication.
            session: Optional requests session (or a compatible object
                with a ``request`` method).  One is created if omitted.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``, etc.).
            path: Path relative to :attr:`base_url` (e.g. ``/events``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` is the parsed JSON body
            (``None`` for empty responses such as 204).
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method,
                url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        if response.status_code >= 400:
            try:
                body = response.json()
                message = body.get("error") or body.get("detail") or str(body)
            except (ValueError, AttributeError):
                message = response.text
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}

        if response.content:
            return response.json(), None
        return None, None

    # ------------------------------------------------------------------
    # Event operations
    # ------------------------------------------------------------------
    def list_events(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/events")
        return (data or [], error)

    def get_event(self, event_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/events/{event_id}")

    def create_event(
        self, *, name: str, description: str, location: str, date_time: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        payload = {
            "name": name,
            "description": description,
            "location": location,
            "dateTime": date_time,
        }
        return self._request("POST", "/events", json_body=payload)

    def update_event(self, event_id: int, **changes: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Send a partial update.

        Keyword arguments use Python names (``name``, ``description``,
        ``location``, ``date_time``); only the given fields change.
        """
        payload = {("dateTime" if key == "date_time" else key): value for key, value in changes.items()}
        return self._request("PATCH", f"/events/{event_id}", json_body=payload)

    def delete_event(self, event_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/events/{event_id}")
        return error is None, error

    # ------------------------------------------------------------------
    # Attendee operations
    # ------------------------------------------------------------------
    def list_attendees(self, event_id: int) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", f"/events/{event_id}/attendees")
        return (data or [], error)

    def add_attendee(self, event_id: int, user_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", f"/events/{event_id}/attendees/{user_id}")

    def remove_attendee(self, event_id: int, user_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/events/{event_id}/attendees/{user_id}")
        return error is None, error

    def events_for_user(self, user_id: int) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", f"/users/{user_id}/events")
        return (data or [], error)

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def get_user(self, user_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/users/{user_id}")

    def me(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/users/me")
