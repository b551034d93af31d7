"""
Services — account and session writes, plus home-location geocoding.
"""

from __future__ import annotations

import logging
import re
import secrets

from django.contrib.auth.hashers import check_password, make_password
from django.db import IntegrityError, transaction
from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.geocoders import Nominatim

from users.models import Session, User
from users.selectors import user_get_by_email

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Reusable singletons
# ---------------------------------------------------------------------------
_geolocator: Nominatim | None = None


def _get_geolocator() -> Nominatim:
    global _geolocator
    if _geolocator is None:
        _geolocator = Nominatim(user_agent="stationfinder_users_v1", timeout=10)
    return _geolocator


# ---------------------------------------------------------------------------
# Geocoding
# ---------------------------------------------------------------------------

_COORD_RE = re.compile(r"^(-?\d+\.?\d*)\s*,\s*(-?\d+\.?\d*)$")


def geocode_to_coords(place: str | None) -> tuple[float, float] | None:
    """
    Resolve a place string to ``(lat, lon)`` or ``None``.

    Accepts ``"lat,lon"`` or a textual address (Nominatim).
    """
    if not place or not str(place).strip():
        return None

    s = str(place).strip()

    match = _COORD_RE.match(s)
    if match:
        lat, lon = float(match.group(1)), float(match.group(2))
        if -90 <= lat <= 90 and -180 <= lon <= 180:
            return (lat, lon)
        return None  # coordinates out of bounds

    try:
        loc = _get_geolocator().geocode(s, exactly_one=True, timeout=10)
        if loc:
            return (loc.latitude, loc.longitude)
    except (GeocoderTimedOut, GeocoderServiceError, GeocoderUnavailable):
        logger.warning("[GEOCODE] lookup failed for %r", s)

    return None


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@transaction.atomic
def user_register(
    *,
    email: str,
    name: str,
    password: str,
    location: str | None = None,
) -> User:
    """
    Create an account.

    Raises ``ValueError`` if the email is already registered. A location
    that cannot be resolved is stored as empty rather than rejected.
    """
    email = email.strip().lower()
    if user_get_by_email(email=email) is not None:
        raise ValueError("Email is already registered.")

    coords = geocode_to_coords(location)
    try:
        with transaction.atomic():
            user = User.objects.create(
                email=email,
                name=name.strip(),
                password=make_password(password),
                latitude=coords[0] if coords else None,
                longitude=coords[1] if coords else None,
            )
    except IntegrityError as exc:
        # lost a race with a concurrent registration
        raise ValueError("Email is already registered.") from exc
    logger.info("[USER] registered %s", user.email)
    return user


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def session_create(*, user: User) -> Session:
    return Session.objects.create(user=user, key=secrets.token_hex(32))


def user_login(*, email: str, password: str) -> Session | None:
    """Issue a new session for valid credentials, ``None`` otherwise."""
    user = user_get_by_email(email=email)
    if user is None or not check_password(password, user.password):
        logger.info("[USER] rejected login for %s", email)
        return None

    session = session_create(user=user)
    logger.info("[USER] login %s", user.email)
    return session


def session_delete(*, session: Session) -> None:
    session.delete()
