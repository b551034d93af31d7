import os
import tempfile
import unittest
from unittest.mock import MagicMock, call

import requests

from mobile.alerts import AlertCenter
from mobile.api import ApiClient, ApiError, SessionMissingError
from mobile.location import FixedLocationProvider, LocationUnavailableError
from mobile.navigation import Navigator
from mobile.radius import RadiusContext
from mobile.screens import HomePageScreen, ProfileScreen, ScreenState

GAS = {
    "name": "Fuel Co",
    "location": {"lat": 52.21, "lng": 21.01},
    "address": "Gas Street 1",
    "status": "OPERATIONAL",
    "place_id": "g1",
    "price": "$$",
}
WASH = {
    "name": "Sparkle",
    "location": {"lat": 52.22, "lng": 21.02},
    "address": "Side Rd 4",
    "status": "OPERATIONAL",
    "place_id": "w1",
}


class HomePageScreenTestCase(unittest.TestCase):
    def setUp(self):
        self.api = MagicMock(spec=ApiClient)
        self.api.nearby_gas_stations.return_value = [GAS]
        self.api.nearby_washing_stations.return_value = [WASH]
        self.radius = RadiusContext(5)
        self.alerts = AlertCenter()
        self.navigator = Navigator()

    def _screen(self, provider=None):
        return HomePageScreen(
            api=self.api,
            location_provider=provider or FixedLocationProvider(52.2, 21.0),
            radius=self.radius,
            alerts=self.alerts,
            navigator=self.navigator,
        )

    def test_initial_state_is_permission_pending(self):
        screen = self._screen()
        self.assertEqual(screen.state, ScreenState.PERMISSION_PENDING)
        self.assertTrue(screen.loading)

    def test_denied_permission_shows_error_and_never_fetches(self):
        screen = self._screen(FixedLocationProvider(0, 0, granted=False))
        screen.mount()
        self.assertEqual(screen.state, ScreenState.ERROR)
        self.assertEqual(screen.error_msg, "Permission to access location was denied")
        self.assertFalse(screen.loading)

        self.radius.set_radius(10)
        self.api.nearby_gas_stations.assert_not_called()
        self.api.nearby_washing_stations.assert_not_called()

    def test_location_unavailable_shows_error(self):
        provider = MagicMock()
        provider.request_permission.return_value = True
        provider.current_position.side_effect = LocationUnavailableError("no fix")
        screen = self._screen(provider)
        screen.mount()
        self.assertEqual(screen.state, ScreenState.ERROR)
        self.api.nearby_gas_stations.assert_not_called()

    def test_granted_loads_both_station_types(self):
        screen = self._screen()
        screen.mount()
        self.assertEqual(screen.state, ScreenState.READY)
        self.assertFalse(screen.loading)
        self.assertEqual(screen.gas_stations, [GAS])
        self.assertEqual(screen.washing_stations, [WASH])
        self.api.nearby_gas_stations.assert_called_once_with(52.2, 21.0, 5)
        self.api.nearby_washing_stations.assert_called_once_with(52.2, 21.0, 5)

    def test_radius_change_refetches_once_per_type(self):
        screen = self._screen()
        screen.mount()
        self.radius.set_radius(12)

        self.assertEqual(
            self.api.nearby_gas_stations.call_args_list,
            [call(52.2, 21.0, 5), call(52.2, 21.0, 12)],
        )
        self.assertEqual(
            self.api.nearby_washing_stations.call_args_list,
            [call(52.2, 21.0, 5), call(52.2, 21.0, 12)],
        )

    def test_same_radius_does_not_refetch(self):
        screen = self._screen()
        screen.mount()
        self.radius.set_radius(5)
        self.assertEqual(self.api.nearby_gas_stations.call_count, 1)

    def test_remount_keeps_single_radius_listener(self):
        screen = self._screen()
        screen.mount()
        screen.mount()
        self.radius.set_radius(12)
        self.assertEqual(self.api.nearby_gas_stations.call_count, 3)
        self.assertEqual(self.api.nearby_washing_stations.call_count, 3)

    def test_unmount_stops_refetching(self):
        screen = self._screen()
        screen.mount()
        screen.unmount()
        self.radius.set_radius(15)
        self.assertEqual(self.api.nearby_gas_stations.call_count, 1)

    def test_gas_failure_alerts_and_keeps_previous_markers(self):
        screen = self._screen()
        screen.mount()
        self.api.nearby_gas_stations.side_effect = ApiError("HTTP Error! Status: 500", 500)
        self.api.nearby_washing_stations.return_value = []
        self.radius.set_radius(3)

        self.assertEqual(screen.gas_stations, [GAS])
        self.assertEqual(screen.washing_stations, [])
        self.assertEqual(screen.state, ScreenState.READY)
        self.assertEqual(
            self.alerts.last.message, "Failed to fetch gas stations. Please try again later."
        )

    def test_network_and_session_errors_alert(self):
        self.api.nearby_gas_stations.side_effect = SessionMissingError()
        self.api.nearby_washing_stations.side_effect = requests.ConnectionError("offline")
        screen = self._screen()
        screen.mount()
        messages = [a.message for a in self.alerts.alerts]
        self.assertEqual(
            messages,
            [
                "Failed to fetch gas stations. Please try again later.",
                "Failed to fetch washing stations. Please try again later.",
            ],
        )

    def test_markers_skip_stations_without_location(self):
        self.api.nearby_washing_stations.return_value = [WASH, {**WASH, "location": None}]
        screen = self._screen()
        screen.mount()
        pins = screen.markers()
        self.assertEqual([p.color for p in pins], ["red", "blue"])
        self.assertEqual(pins[0].title, "Fuel Co")
        self.assertEqual((pins[1].latitude, pins[1].longitude), (52.22, 21.02))

    def test_info_press_navigates_with_type(self):
        screen = self._screen()
        screen.handle_info_press(GAS)
        self.assertEqual(self.navigator.current.name, "StationDetails")
        self.assertEqual(
            self.navigator.current.params, {"stationId": "g1", "stationType": "gas"}
        )
        screen.handle_info_press(WASH)
        self.assertEqual(self.navigator.current.params["stationType"], "washing")

    def test_profile_button_navigates_to_profile(self):
        screen = self._screen()
        screen.open_profile()
        self.assertEqual(self.navigator.current.name, "Profile")

    def test_info_press_without_place_id_alerts(self):
        screen = self._screen()
        screen.handle_info_press({**WASH, "place_id": ""})
        self.assertEqual(self.alerts.last.message, "Station place_id is missing!")
        self.assertIsNone(self.navigator.current)

    def test_render_map_writes_html(self):
        screen = self._screen()
        screen.mount()
        with tempfile.TemporaryDirectory() as tmp:
            path = screen.render_map(os.path.join(tmp, "map.html"))
            with open(path, encoding="utf-8") as f:
                html = f.read()
        self.assertIn("Fuel Co", html)
        self.assertIn("Sparkle", html)

    def test_render_map_without_location_raises(self):
        with self.assertRaises(RuntimeError):
            self._screen().render_map("unused.html")


class ProfileScreenTestCase(unittest.TestCase):
    PROFILE = {
        "email": "ann@example.com",
        "name": "Ann",
        "location": {"type": "Point", "coordinates": [21.01, 52.23]},
    }

    def setUp(self):
        self.api = MagicMock(spec=ApiClient)
        self.api.profile.return_value = dict(self.PROFILE)
        self.radius = RadiusContext(5)
        self.alerts = AlertCenter()
        self.navigator = Navigator()
        self.screen = ProfileScreen(
            api=self.api, radius=self.radius, alerts=self.alerts, navigator=self.navigator
        )

    def test_loading_until_mounted(self):
        self.assertTrue(self.screen.loading)
        self.assertEqual(self.screen.render(), ["Loading..."])

    def test_mount_fetches_once_and_renders(self):
        self.screen.mount()
        self.api.profile.assert_called_once_with()
        self.assertFalse(self.screen.loading)
        lines = self.screen.render()
        self.assertIn("Email: ann@example.com", lines)
        self.assertIn("Location: Type: Point, Coordinates: [21.01, 52.23]", lines)
        self.assertIn("Selected Radius: 5 km", lines)

    def test_missing_session_alerts(self):
        self.api.profile.side_effect = SessionMissingError()
        self.screen.mount()
        self.assertEqual(self.alerts.last.message, "Session ID not found. Please log in again.")
        self.assertEqual(self.screen.render(), ["No profile data available."])

    def test_fetch_failure_alerts_and_shows_no_data(self):
        self.api.profile.side_effect = ApiError("HTTP Error! Status: 500", 500)
        self.screen.mount()
        self.assertFalse(self.screen.loading)
        self.assertIsNone(self.screen.profile_data)
        self.assertEqual(
            self.alerts.last.message, "Failed to fetch profile data. Please try again later."
        )

    def test_unknown_location(self):
        self.api.profile.return_value = {**self.PROFILE, "location": None}
        self.screen.mount()
        self.assertEqual(self.screen.location_text(), "Unknown")

    def test_slider_updates_shared_radius(self):
        seen = []
        self.radius.subscribe(seen.append)
        self.screen.set_radius(14)
        self.assertEqual(self.radius.radius, 14)
        self.assertEqual(seen, [14])
        self.screen.set_radius(40)
        self.assertEqual(self.radius.radius, 20)

    def test_logout_navigates_to_login(self):
        self.screen.mount()
        self.screen.logout()
        self.api.logout.assert_called_once_with()
        self.assertIsNone(self.screen.profile_data)
        self.assertEqual(self.navigator.current.name, "Login")
