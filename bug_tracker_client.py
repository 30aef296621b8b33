"""Bug tracker API client.

A thin wrapper around the REST API of ``bug_tracker_api`` built on the
``requests`` library.  Every resource (``projects``, ``tickets``,
``labels``) supports the same operations:

* :meth:`BugTrackerAPI.query` – list entities (with paging for
  projects and tickets; the total count is returned alongside).
* :meth:`BugTrackerAPI.find` – fetch one entity by id.
* :meth:`BugTrackerAPI.create` – create an entity.
* :meth:`BugTrackerAPI.update` – replace an entity.
* :meth:`BugTrackerAPI.partial_update` – send a merge-patch.
* :meth:`BugTrackerAPI.delete` – delete an entity.

Authentication uses a bearer token, either passed as ``api_key`` or
obtained with :meth:`BugTrackerAPI.login`.  Methods never raise on HTTP
errors; they return ``(data, error)`` tuples where ``error`` is a
dictionary with ``status_code``, ``message`` and, for validation
failures, ``error_key``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

RESOURCES = ("projects", "tickets", "labels")
MERGE_PATCH = "application/merge-patch+json"

Error = Dict[str, Any]


class BugTrackerAPI:
    """Client for the bug tracker REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        api_prefix: str = "/api/v1",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            api_key: Optional bearer token sent in the ``Authorization``
                header of every request.
            api_prefix: Path prefix of the versioned API.
            session: Optional requests session (useful for tests).
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
        content_type: str | None = None,
    ) -> Tuple[Optional[requests.Response], Optional[Error]]:
        """Perform an HTTP request and return ``(response, error)``."""
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if content_type:
            headers["Content-Type"] = content_type
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response, None
        except requests.HTTPError as exc:
            return None, self._error_from_response(exc.response, exc)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "error_key": None}

    @staticmethod
    def _error_from_response(response: Optional[requests.Response], exc: Exception) -> Error:
        status = response.status_code if response is not None else None
        message = ""
        error_key = None
        if response is not None:
            try:
                body = response.json()
            except ValueError:
                message = response.text
            else:
                if isinstance(body, dict):
                    message = body.get("title") or body.get("detail") or str(body)
                    error_key = body.get("errorKey")
                else:
                    message = str(body)
        if not message:
            message = str(exc)
        logger.error("API request failed (%s): %s", status, message)
        return {"status_code": status, "message": message, "error_key": error_key}

    @staticmethod
    def _json(response: requests.Response) -> Any:
        return response.json() if response.content else None

    @staticmethod
    def _check_resource(resource: str) -> None:
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource {resource!r}; expected one of {RESOURCES}")

    @staticmethod
    def _payload_id(payload: Dict[str, Any]) -> str:
        entity_id = payload.get("id")
        if entity_id is None:
            raise ValueError("Payload must carry the 'id' of the entity to update")
        return entity_id

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def register(self, login: str, password: str, **profile: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Register a new account."""
        response, error = self._request("POST", "/users", json_body={"login": login, "password": password, **profile})
        if error:
            return None, error
        return self._json(response), None

    def login(self, login: str, password: str) -> Tuple[Optional[str], Optional[Error]]:
        """Obtain a token and use it for subsequent requests."""
        response, error = self._request("POST", "/users/login", json_body={"login": login, "password": password})
        if error:
            return None, error
        token = self._json(response)["access_token"]
        self.api_key = token
        return token, None

    # ------------------------------------------------------------------
    # Resource operations
    # ------------------------------------------------------------------
    def query(
        self,
        resource: str,
        *,
        page: Optional[int] = None,
        size: Optional[int] = None,
        sort: Optional[List[str]] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[int], Optional[Error]]:
        """List entities of ``resource``.

        Returns:
            ``(items, total, error)``; ``total`` comes from the
            ``X-Total-Count`` header and is ``None`` for unpaginated
            resources.
        """
        self._check_resource(resource)
        params: Dict[str, Any] = {}
        if page is not None:
            params["page"] = page
        if size is not None:
            params["size"] = size
        if sort:
            params["sort"] = sort
        response, error = self._request("GET", f"/{resource}", params=params or None)
        if error:
            return [], None, error
        total_header = response.headers.get("X-Total-Count")
        total = int(total_header) if total_header is not None else None
        return self._json(response) or [], total, None

    def find(self, resource: str, entity_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        self._check_resource(resource)
        response, error = self._request("GET", f"/{resource}/{entity_id}")
        if error:
            return None, error
        return self._json(response), None

    def create(self, resource: str, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        self._check_resource(resource)
        response, error = self._request("POST", f"/{resource}", json_body=payload)
        if error:
            return None, error
        return self._json(response), None

    def update(self, resource: str, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace the entity identified by ``payload["id"]``."""
        self._check_resource(resource)
        response, error = self._request("PUT", f"/{resource}/{self._payload_id(payload)}", json_body=payload)
        if error:
            return None, error
        return self._json(response), None

    def partial_update(self, resource: str, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Send ``payload`` as a merge-patch for the entity ``payload["id"]``."""
        self._check_resource(resource)
        response, error = self._request(
            "PATCH",
            f"/{resource}/{self._payload_id(payload)}",
            json_body=payload,
            content_type=MERGE_PATCH,
        )
        if error:
            return None, error
        return self._json(response), None

    def delete(self, resource: str, entity_id: str) -> Tuple[bool, Optional[Error]]:
        self._check_resource(resource)
        _, error = self._request("DELETE", f"/{resource}/{entity_id}")
        return error is None, error

    def self_tickets(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Tickets assigned to the authenticated user."""
        response, error = self._request("GET", "/tickets/self")
        if error:
            return [], error
        return self._json(response) or [], None
