"""
Profile page: account details and the search-radius slider.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from mobile.alerts import AlertCenter
from mobile.api import ApiClient, ApiError, SessionMissingError
from mobile.navigation import Navigator
from mobile.radius import RadiusContext

logger = logging.getLogger(__name__)

NO_PROFILE_MESSAGE = "No profile data available."


class ProfileScreen:
    def __init__(
        self,
        *,
        api: ApiClient,
        radius: RadiusContext,
        alerts: AlertCenter,
        navigator: Navigator,
    ):
        self.api = api
        self.radius = radius
        self.alerts = alerts
        self.navigator = navigator

        self.profile_data: dict[str, Any] | None = None
        self.loading = True

    def mount(self) -> None:
        """Fetch the profile once."""
        try:
            self.profile_data = self.api.profile()
        except SessionMissingError as exc:
            self.alerts.alert("Error", str(exc))
        except (ApiError, requests.RequestException, ValueError) as exc:
            logger.error("Error fetching profile: %s", exc)
            self.alerts.alert("Error", "Failed to fetch profile data. Please try again later.")
        finally:
            self.loading = False

    def set_radius(self, value: float) -> None:
        self.radius.set_radius(value)

    def logout(self) -> None:
        try:
            self.api.logout()
        except (ApiError, requests.RequestException, ValueError) as exc:
            logger.error("Error logging out: %s", exc)
        self.profile_data = None
        self.navigator.navigate("Login")

    def location_text(self) -> str:
        location = (self.profile_data or {}).get("location")
        if not isinstance(location, dict):
            return "Unknown"
        coordinates = ", ".join(str(c) for c in location.get("coordinates", []))
        return f"Type: {location.get('type')}, Coordinates: [{coordinates}]"

    def render(self) -> list[str]:
        """Text lines of what the screen shows."""
        if self.loading:
            return ["Loading..."]
        if not self.profile_data:
            return [NO_PROFILE_MESSAGE]
        return [
            "Profile Information",
            f"Email: {self.profile_data.get('email')}",
            f"Name: {self.profile_data.get('name')}",
            f"Location: {self.location_text()}",
            "Radius Setting",
            f"Selected Radius: {self.radius.radius} km",
        ]
