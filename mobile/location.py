"""
Location providers standing in for the device GPS.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.geocoders import Nominatim

logger = logging.getLogger(__name__)


class Coordinates(NamedTuple):
    latitude: float
    longitude: float


class LocationUnavailableError(Exception):
    pass


class LocationProvider:
    """Permission prompt plus a one-shot position read."""

    def request_permission(self) -> bool:
        raise NotImplementedError

    def current_position(self) -> Coordinates:
        raise NotImplementedError


class FixedLocationProvider(LocationProvider):
    def __init__(self, latitude: float, longitude: float, *, granted: bool = True):
        self.coordinates = Coordinates(latitude, longitude)
        self.granted = granted

    def request_permission(self) -> bool:
        return self.granted

    def current_position(self) -> Coordinates:
        return self.coordinates


class AddressLocationProvider(LocationProvider):
    """Resolves a street address through Nominatim."""

    def __init__(self, address: str, geolocator: Nominatim | None = None):
        self.address = address
        self.geolocator = geolocator or Nominatim(user_agent="stationfinder_client_v1", timeout=10)

    def request_permission(self) -> bool:
        return True

    def current_position(self) -> Coordinates:
        try:
            loc = self.geolocator.geocode(self.address, exactly_one=True, timeout=10)
        except (GeocoderTimedOut, GeocoderServiceError, GeocoderUnavailable) as exc:
            raise LocationUnavailableError(f"Could not locate {self.address!r}") from exc
        if loc is None:
            raise LocationUnavailableError(f"Could not locate {self.address!r}")
        logger.debug("Resolved %r to (%s, %s)", self.address, loc.latitude, loc.longitude)
        return Coordinates(loc.latitude, loc.longitude)
