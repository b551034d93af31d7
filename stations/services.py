"""
Services — business logic and external API integrations.

Following the HackSoft Django Styleguide:
  - Services encapsulate write / business logic
  - Keyword-only args for the public interface
  - Type hints everywhere
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypedDict

import requests
from django.conf import settings
from django.db import transaction

from stations.constants import (
    PLACE_TYPES,
    PLACES_DETAILS_FIELDS,
    PLACES_DETAILS_URL,
    PLACES_NEARBY_URL,
    PLACES_OK_STATUSES,
    PLACES_TIMEOUT_S,
    PRICE_NOT_AVAILABLE,
    STATION_KIND_GAS,
    STATION_KIND_WASHING,
)
from stations.models import WashingStation
from stations.selectors import washing_station_get

logger = logging.getLogger(__name__)


class PlacesProviderError(Exception):
    """The places provider could not serve a request."""


class Station(TypedDict, total=False):
    """Station as returned by the nearby / details endpoints."""

    name: str
    location: dict[str, float] | None
    address: str
    status: str
    place_id: str
    # Gas stations only
    price: str


# ---------------------------------------------------------------------------
# Washing station CRUD
# ---------------------------------------------------------------------------

_WRITABLE_FIELDS = ("name", "address", "status", "place_id")


def _station_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Pick the model fields out of a request body.

    ``location`` may be given as ``{"lat": .., "lng": ..}``; flat
    ``latitude`` / ``longitude`` keys are accepted too. Unknown keys are
    ignored.
    """
    fields = {key: data[key] for key in _WRITABLE_FIELDS if key in data}

    location = data.get("location")
    if isinstance(location, Mapping):
        if "lat" in location:
            fields["latitude"] = location["lat"]
        if "lng" in location:
            fields["longitude"] = location["lng"]
    elif "location" in data and location is None:
        fields["latitude"] = None
        fields["longitude"] = None

    for key in ("latitude", "longitude"):
        if key in data:
            fields[key] = data[key]

    return fields


def washing_station_create(*, data: Mapping[str, Any]) -> WashingStation:
    station = WashingStation(**_station_fields(data))
    station.save()
    logger.info("[STATION] created %s (id=%s)", station.name, station.pk)
    return station


@transaction.atomic
def washing_station_update(
    *, station_id, data: Mapping[str, Any]
) -> WashingStation | None:
    """Apply the given fields to the station; ``None`` if it does not exist."""
    station = washing_station_get(station_id=station_id)
    if station is None:
        return None

    for field, value in _station_fields(data).items():
        setattr(station, field, value)
    station.save()
    logger.info("[STATION] updated id=%s", station.pk)
    return station


def washing_station_delete(*, station_id) -> bool:
    station = washing_station_get(station_id=station_id)
    if station is None:
        return False

    station.delete()
    logger.info("[STATION] deleted id=%s", station_id)
    return True


# ---------------------------------------------------------------------------
# Reusable singletons (keep SSL connection open between requests)
# ---------------------------------------------------------------------------
_http_session: requests.Session | None = None


def _get_http_session() -> requests.Session:
    """Persistent requests Session — reuses TCP/SSL connection with Places."""
    global _http_session
    if _http_session is None:
        _http_session = requests.Session()
    return _http_session


# ---------------------------------------------------------------------------
# Places provider
# ---------------------------------------------------------------------------


def _places_get(url: str, params: dict[str, Any]) -> dict[str, Any]:
    """
    GET a Places endpoint and return the decoded body.

    Raises ``PlacesProviderError`` on transport errors and non-200 responses;
    the provider ``status`` field is left to the caller.
    """
    params = {**params, "key": settings.GOOGLE_PLACES_API_KEY}
    try:
        response = _get_http_session().get(url, params=params, timeout=PLACES_TIMEOUT_S)
    except requests.RequestException as exc:
        raise PlacesProviderError(f"Places request failed: {exc}") from exc

    if response.status_code != 200:
        raise PlacesProviderError(
            f"Places responded with HTTP {response.status_code}"
        )

    try:
        data: dict[str, Any] = response.json()
    except ValueError as exc:
        raise PlacesProviderError("Places returned a non-JSON body") from exc

    return data


def format_price_level(price_level: int | None) -> str:
    """Render the provider's 0-4 price level as ``$``-signs."""
    if price_level is None:
        return PRICE_NOT_AVAILABLE
    try:
        level = int(price_level)
    except (TypeError, ValueError):
        return PRICE_NOT_AVAILABLE
    return "$" * level if level > 0 else "Free"


def place_to_station(place: Mapping[str, Any], *, kind: str) -> Station:
    """Map a Places result object to the station shape the client renders."""
    geometry = place.get("geometry") or {}
    location = geometry.get("location")
    station = Station(
        name=place.get("name", ""),
        location=(
            {"lat": location["lat"], "lng": location["lng"]} if location else None
        ),
        address=place.get("vicinity") or place.get("formatted_address") or "",
        status=place.get("business_status", ""),
        place_id=place.get("place_id", ""),
    )
    if kind == STATION_KIND_GAS:
        station["price"] = format_price_level(place.get("price_level"))
    return station


def nearby_stations(
    *,
    kind: str,
    latitude: float,
    longitude: float,
    radius: float,
) -> list[Station]:
    """
    One Nearby Search call for ``kind`` stations around a point.

    ``radius`` is in metres. Results are returned in provider order.
    """
    place_type = PLACE_TYPES[kind]
    data = _places_get(
        PLACES_NEARBY_URL,
        {
            "location": f"{latitude},{longitude}",
            "radius": radius,
            "type": place_type,
        },
    )

    status = data.get("status")
    if status not in PLACES_OK_STATUSES:
        message = data.get("error_message") or status or "unknown status"
        raise PlacesProviderError(f"Nearby search failed: {message}")

    results = data.get("results", [])
    logger.info(
        "[PLACES] %d %s near (%.5f, %.5f) r=%sm",
        len(results), place_type, latitude, longitude, radius,
    )
    return [place_to_station(place, kind=kind) for place in results]


def nearby_gas_stations(*, latitude: float, longitude: float, radius: float) -> list[Station]:
    return nearby_stations(
        kind=STATION_KIND_GAS, latitude=latitude, longitude=longitude, radius=radius
    )


def nearby_washing_stations(*, latitude: float, longitude: float, radius: float) -> list[Station]:
    return nearby_stations(
        kind=STATION_KIND_WASHING, latitude=latitude, longitude=longitude, radius=radius
    )


def station_details(*, place_id: str) -> Station | None:
    """
    Look up a single place; ``None`` when the provider does not know it.

    The station kind is derived from the place's types.
    """
    data = _places_get(
        PLACES_DETAILS_URL,
        {"place_id": place_id, "fields": PLACES_DETAILS_FIELDS},
    )

    status = data.get("status")
    if status in ("NOT_FOUND", "INVALID_REQUEST", "ZERO_RESULTS"):
        return None
    if status != "OK":
        message = data.get("error_message") or status or "unknown status"
        raise PlacesProviderError(f"Place details failed: {message}")

    place = data.get("result") or {}
    kind = (
        STATION_KIND_GAS
        if PLACE_TYPES[STATION_KIND_GAS] in place.get("types", [])
        else STATION_KIND_WASHING
    )
    return place_to_station(place, kind=kind)
