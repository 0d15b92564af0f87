# casetasks/client/api.py
import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class ApiError(Exception):
    """An error envelope (or a transport failure) from the API."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or []

    def display_message(self) -> str:
        """``field: message`` pairs when the server sent details, else the message"""
        if self.details:
            return ", ".join(f"{d.get('field')}: {d.get('message')}" for d in self.details)
        return self.message


class ApiClient:
    """Thin wrapper over a requests-compatible session.

    ``session`` only needs ``request(method, url, json=, params=, headers=)``
    returning an object with ``status_code`` and ``json()``, so an httpx
    client works as well as a ``requests.Session``.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, session=None, token: Optional[str] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.token = token

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, json=None, params=None) -> Any:
        """Send a request and return the ``data`` of a success envelope"""
        url = f"{self.base_url}/api{path}"
        try:
            response = self.session.request(method, url, json=json, params=params, headers=self._headers())
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            raise ApiError(f"Unexpected response ({response.status_code})", response.status_code)

        if not body.get("success"):
            error = body.get("error") or {}
            raise ApiError(
                error.get("message", f"Request failed ({response.status_code})"),
                response.status_code,
                error.get("details"),
            )
        return body.get("data")

    def get(self, path: str, params=None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json=None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json=None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
