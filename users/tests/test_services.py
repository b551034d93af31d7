from unittest.mock import MagicMock, patch

from django.contrib.auth.hashers import check_password
from django.test import TestCase
from geopy.exc import GeocoderTimedOut

from users.models import Session, User
from users.services import (
    geocode_to_coords,
    session_delete,
    user_login,
    user_register,
)


# ---------------------------------------------------------------------------
# geocode_to_coords
# ---------------------------------------------------------------------------


class GeocodeToCoordsTestCase(TestCase):
    """Tests for geocode_to_coords."""

    def test_empty_returns_none(self):
        self.assertIsNone(geocode_to_coords(""))
        self.assertIsNone(geocode_to_coords(None))
        self.assertIsNone(geocode_to_coords("   "))

    def test_lat_lon_string_parsed(self):
        lat, lon = geocode_to_coords("40.7, -74.0")
        self.assertAlmostEqual(lat, 40.7, places=5)
        self.assertAlmostEqual(lon, -74.0, places=5)

    def test_out_of_bounds_returns_none(self):
        self.assertIsNone(geocode_to_coords("91, 0"))
        self.assertIsNone(geocode_to_coords("0, 181"))

    @patch("users.services._get_geolocator")
    def test_address_calls_geocoder(self, mock_get_geo):
        mock_geo = MagicMock()
        mock_loc = MagicMock()
        mock_loc.latitude = 52.0
        mock_loc.longitude = 21.0
        mock_geo.geocode.return_value = mock_loc
        mock_get_geo.return_value = mock_geo
        self.assertEqual(geocode_to_coords("Warsaw"), (52.0, 21.0))
        mock_geo.geocode.assert_called_once()

    @patch("users.services._get_geolocator")
    def test_geocoder_timeout_returns_none(self, mock_get_geo):
        mock_geo = MagicMock()
        mock_geo.geocode.side_effect = GeocoderTimedOut("slow")
        mock_get_geo.return_value = mock_geo
        self.assertIsNone(geocode_to_coords("Warsaw"))


# ---------------------------------------------------------------------------
# Accounts and sessions
# ---------------------------------------------------------------------------


class UserServicesTestCase(TestCase):
    def test_register_hashes_password_and_normalizes_email(self):
        user = user_register(email=" Ann@Example.COM ", name="Ann", password="hunter22")
        self.assertEqual(user.email, "ann@example.com")
        self.assertNotEqual(user.password, "hunter22")
        self.assertTrue(check_password("hunter22", user.password))
        self.assertIsNone(user.location)

    def test_register_with_coordinates(self):
        user = user_register(
            email="a@b.co", name="A", password="hunter22", location="10.5,20.25"
        )
        self.assertEqual(user.location, {"type": "Point", "coordinates": [20.25, 10.5]})

    def test_register_duplicate_raises(self):
        user_register(email="a@b.co", name="A", password="hunter22")
        with self.assertRaises(ValueError):
            user_register(email="A@B.CO", name="A", password="hunter22")

    @patch("users.services.user_get_by_email", return_value=None)
    def test_register_concurrent_duplicate_raises(self, _mock_lookup):
        User.objects.create(email="a@b.co", name="A", password="x")
        with self.assertRaises(ValueError):
            user_register(email="a@b.co", name="B", password="hunter22")
        self.assertEqual(User.objects.count(), 1)

    def test_login_issues_unique_sessions(self):
        user_register(email="a@b.co", name="A", password="hunter22")
        first = user_login(email="a@b.co", password="hunter22")
        second = user_login(email="a@b.co", password="hunter22")
        self.assertIsNotNone(first)
        self.assertNotEqual(first.key, second.key)
        self.assertEqual(Session.objects.count(), 2)

    def test_login_rejects_bad_credentials(self):
        user_register(email="a@b.co", name="A", password="hunter22")
        self.assertIsNone(user_login(email="a@b.co", password="nope"))
        self.assertIsNone(user_login(email="ghost@b.co", password="hunter22"))

    def test_session_delete(self):
        user = User.objects.create(email="a@b.co", name="A", password="x")
        session = Session.objects.create(user=user, key="abc")
        session_delete(session=session)
        self.assertFalse(Session.objects.exists())
