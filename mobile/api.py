"""
REST client for the Station Finder API.

Authenticated calls send the stored session id in the ``sessionid`` header.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from mobile.config import API_URL, REQUEST_TIMEOUT_S, SESSION_KEY
from mobile.storage import LocalStorage

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx answer from the API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SessionMissingError(ApiError):
    def __init__(self):
        super().__init__("Session ID not found. Please log in again.")


class ApiClient:
    def __init__(
        self,
        storage: LocalStorage,
        base_url: str = API_URL,
        http: requests.Session | None = None,
    ):
        self.storage = storage
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def session_id(self) -> str | None:
        return self.storage.get_item(SESSION_KEY)

    def _headers(self, *, authenticated: bool = True) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if authenticated:
            session_id = self.session_id
            if not session_id:
                raise SessionMissingError()
            headers["sessionid"] = session_id
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        authenticated: bool = True,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        headers = self._headers(authenticated=authenticated)
        response = self.http.request(
            method,
            f"{self.base_url}{path}",
            params=params,
            json=json,
            headers=headers,
            timeout=REQUEST_TIMEOUT_S,
        )
        if not response.ok:
            raise ApiError(f"HTTP Error! Status: {response.status_code}", response.status_code)
        return response.json()

    # ------------------------------------------------------------------
    # Maps
    # ------------------------------------------------------------------
    def _nearby(self, path: str, latitude: float, longitude: float, radius_km: int) -> list[dict]:
        return self._request(
            "GET",
            path,
            params={
                "latitude": latitude,
                "longitude": longitude,
                "radius": radius_km * 1000,
            },
        )

    def nearby_gas_stations(self, latitude: float, longitude: float, radius_km: int) -> list[dict]:
        return self._nearby("/maps/nearby-gas-stations", latitude, longitude, radius_km)

    def nearby_washing_stations(self, latitude: float, longitude: float, radius_km: int) -> list[dict]:
        return self._nearby("/maps/nearby-washing-stations", latitude, longitude, radius_km)

    def station_details(self, place_id: str) -> dict:
        return self._request("GET", f"/maps/station-details/{place_id}")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def profile(self) -> dict:
        return self._request("GET", "/users/profile")

    def login(self, email: str, password: str) -> str:
        """Log in and store the returned session id."""
        data = self._request(
            "POST",
            "/users/login",
            authenticated=False,
            json={"email": email, "password": password},
        )
        session_id = data["sessionId"]
        self.storage.set_item(SESSION_KEY, session_id)
        logger.info("Logged in as %s", email)
        return session_id

    def logout(self) -> None:
        """End the server session; the stored id is cleared either way."""
        try:
            self._request("POST", "/users/logout")
        finally:
            self.storage.remove_item(SESSION_KEY)
