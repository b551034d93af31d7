"""
Selectors — database *read* functions.

Following the HackSoft Django Styleguide: selectors never mutate data,
they only query and return QuerySets or derived values.
"""

from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from stations.models import WashingStation


def washing_station_list() -> QuerySet[WashingStation]:
    return WashingStation.objects.all()


def washing_station_get(*, station_id) -> WashingStation | None:
    """
    Return the station with primary key ``station_id`` or ``None``.

    Ids that cannot be a primary key (``"abc"``) are treated as absent.
    """
    try:
        return WashingStation.objects.filter(pk=station_id).first()
    except (ValueError, TypeError, ValidationError):
        return None
