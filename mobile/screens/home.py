"""
Home page: the map with nearby gas and washing stations.

Lifecycle::

    permission-pending --denied--> error
    permission-pending --granted--> locating --> stations-loading --> ready

Each radius change re-runs both station requests; a failed request keeps
the markers it would have replaced.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

import folium
import requests

from mobile.alerts import AlertCenter
from mobile.api import ApiClient, ApiError
from mobile.location import LocationProvider, LocationUnavailableError
from mobile.navigation import Navigator
from mobile.radius import RadiusContext

logger = logging.getLogger(__name__)

PERMISSION_DENIED_MESSAGE = "Permission to access location was denied"
GAS_COLOR = "red"
WASHING_COLOR = "blue"


class ScreenState(str, enum.Enum):
    PERMISSION_PENDING = "permission-pending"
    LOCATING = "locating"
    STATIONS_LOADING = "stations-loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class Marker:
    latitude: float
    longitude: float
    title: str
    description: str
    color: str
    station: dict[str, Any]


def station_type(station: dict[str, Any]) -> str:
    return "gas" if "Gas" in (station.get("address") or "") else "washing"


class HomePageScreen:
    def __init__(
        self,
        *,
        api: ApiClient,
        location_provider: LocationProvider,
        radius: RadiusContext,
        alerts: AlertCenter,
        navigator: Navigator,
    ):
        self.api = api
        self.location_provider = location_provider
        self.radius = radius
        self.alerts = alerts
        self.navigator = navigator

        self.state = ScreenState.PERMISSION_PENDING
        self.location = None
        self.gas_stations: list[dict[str, Any]] = []
        self.washing_stations: list[dict[str, Any]] = []
        self.error_msg: str | None = None
        self.loading = True
        self._unsubscribe = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def mount(self) -> None:
        self.unmount()
        self._unsubscribe = self.radius.subscribe(self._on_radius_change)

        if not self.location_provider.request_permission():
            self.error_msg = PERMISSION_DENIED_MESSAGE
            self.state = ScreenState.ERROR
            self.loading = False
            return

        self.state = ScreenState.LOCATING
        try:
            self.location = self.location_provider.current_position()
        except LocationUnavailableError as exc:
            logger.error("Error getting location: %s", exc)
            self.error_msg = str(exc)
            self.state = ScreenState.ERROR
            self.loading = False
            return

        self.load_stations()

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_radius_change(self, radius: int) -> None:
        if self.location is None:
            return
        self.load_stations()

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    def load_stations(self) -> None:
        self.state = ScreenState.STATIONS_LOADING
        self.loading = True
        self.fetch_gas_stations()
        self.fetch_washing_stations()
        self.loading = False
        self.state = ScreenState.READY

    def fetch_gas_stations(self) -> None:
        try:
            self.gas_stations = self.api.nearby_gas_stations(
                self.location.latitude, self.location.longitude, self.radius.radius
            )
        except (ApiError, requests.RequestException, ValueError) as exc:
            logger.error("Error fetching gas stations: %s", exc)
            self.alerts.alert("Error", "Failed to fetch gas stations. Please try again later.")

    def fetch_washing_stations(self) -> None:
        try:
            self.washing_stations = self.api.nearby_washing_stations(
                self.location.latitude, self.location.longitude, self.radius.radius
            )
        except (ApiError, requests.RequestException, ValueError) as exc:
            logger.error("Error fetching washing stations: %s", exc)
            self.alerts.alert("Error", "Failed to fetch washing stations. Please try again later.")

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------
    def open_profile(self) -> None:
        self.navigator.navigate("Profile")

    def handle_info_press(self, station: dict[str, Any]) -> None:
        if not station.get("place_id"):
            self.alerts.alert("Error", "Station place_id is missing!")
            return

        self.navigator.navigate(
            "StationDetails",
            {"stationId": station["place_id"], "stationType": station_type(station)},
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def markers(self) -> list[Marker]:
        """Pins for every station that has a location; gas first."""
        pins = []
        for stations, color in (
            (self.gas_stations, GAS_COLOR),
            (self.washing_stations, WASHING_COLOR),
        ):
            for station in stations:
                location = station.get("location")
                if not location:
                    continue
                pins.append(
                    Marker(
                        latitude=location["lat"],
                        longitude=location["lng"],
                        title=station.get("name", ""),
                        description=station.get("address", ""),
                        color=color,
                        station=station,
                    )
                )
        return pins

    def build_map(self) -> folium.Map:
        if self.location is None:
            raise RuntimeError("No location to center the map on")

        m = folium.Map(
            location=[self.location.latitude, self.location.longitude],
            zoom_start=14,
            tiles="CartoDB positron",
        )
        folium.CircleMarker(
            [self.location.latitude, self.location.longitude],
            radius=6, color="#2563eb", fill=True, fill_opacity=0.9,
            tooltip="You are here",
        ).add_to(m)
        folium.Circle(
            [self.location.latitude, self.location.longitude],
            radius=self.radius.radius * 1000,
            color="#2563eb", weight=1, fill=False,
        ).add_to(m)

        for pin in self.markers():
            price = pin.station.get("price")
            popup_html = f"""
            <div style="font-family:system-ui;min-width:180px;font-size:13px">
                <b>{pin.title}</b><br>
                {pin.description}<br>
                {f"Price: {price}<br>" if price else ""}
                Status: {pin.station.get("status") or "N/A"}
            </div>
            """
            folium.Marker(
                location=[pin.latitude, pin.longitude],
                icon=folium.Icon(color=pin.color),
                popup=folium.Popup(popup_html, max_width=300),
                tooltip=pin.title,
            ).add_to(m)
        return m

    def render_map(self, path: str) -> str:
        """Write the map as standalone HTML and return the path."""
        self.build_map().save(path)
        logger.info("Map with %d stations saved to %s", len(self.markers()), path)
        return path
