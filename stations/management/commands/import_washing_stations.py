"""
import_washing_stations: Import washing stations from a CSV file.

Expected columns: ``Name``, ``Address`` and optionally ``Latitude``,
``Longitude``, ``Status``, ``Place ID``. Rows without coordinates are
geocoded with Nominatim (sequential, rate limited).
"""
import math
import time
from dataclasses import dataclass
from typing import Optional

import pandas as pd
from django.core.management.base import BaseCommand, CommandError
from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.geocoders import Nominatim

from stations.constants import DEFAULT_STATION_STATUS
from stations.models import WashingStation

# ---------------------------------------------------------------------------
# Dataclass
# ---------------------------------------------------------------------------

@dataclass
class StationRow:
    """A parsed CSV row ready for geocoding."""
    name: str
    address: str
    status: str
    place_id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    method: str = "N/A"


# ---------------------------------------------------------------------------
# Pure functions
# ---------------------------------------------------------------------------

def _cell(value) -> str:
    """CSV cell as stripped text; NaN becomes ``""``."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


def _coord(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def parse_rows(df: pd.DataFrame, existing_place_ids: set[str]) -> list[StationRow]:
    """Turn a DataFrame into StationRows, skipping known place ids and blank names."""
    rows: list[StationRow] = []
    for _, csv_row in df.iterrows():
        name = _cell(csv_row.get("Name"))
        if not name:
            continue
        place_id = _cell(csv_row.get("Place ID"))
        if place_id:
            if place_id in existing_place_ids:
                continue
            existing_place_ids.add(place_id)  # mark to avoid CSV duplicates
        row = StationRow(
            name=name,
            address=_cell(csv_row.get("Address")),
            status=_cell(csv_row.get("Status")) or DEFAULT_STATION_STATUS,
            place_id=place_id,
            latitude=_coord(csv_row.get("Latitude")),
            longitude=_coord(csv_row.get("Longitude")),
        )
        if row.latitude is not None and row.longitude is not None:
            row.method = "CSV"
        rows.append(row)
    return rows


def _geocode_nominatim(geolocator, query: str):
    """Nominatim with retry (rate limited: 1 req/s)."""
    for _ in range(2):
        try:
            return geolocator.geocode(query, timeout=5, exactly_one=True)
        except (GeocoderTimedOut, GeocoderServiceError, GeocoderUnavailable):
            time.sleep(2)
    return None


def geocode_missing(rows: list[StationRow], geolocator, delay: float = 1.2) -> list[StationRow]:
    """Fill coordinates for rows that have an address but no lat/lng."""
    for row in rows:
        if row.method == "CSV" or not row.address:
            continue
        loc = _geocode_nominatim(geolocator, row.address)
        if loc:
            row.latitude, row.longitude = loc.latitude, loc.longitude
            row.method = "ADDRESS (Nominatim)"
        else:
            row.method = "NO_LOCATION"
        time.sleep(delay)
    return rows


# ---------------------------------------------------------------------------
# Management Command
# ---------------------------------------------------------------------------

class Command(BaseCommand):
    help = "Import washing stations from CSV (geocoding rows without coordinates)"

    def add_arguments(self, parser):
        parser.add_argument("csv_path", help="Path to the CSV file.")
        parser.add_argument(
            "--batch-size", type=int, default=200, metavar="N",
            help="Stations per bulk_create (default: 200).",
        )
        parser.add_argument(
            "--no-geocode", action="store_true",
            help="Keep rows without coordinates as-is instead of geocoding them.",
        )

    def handle(self, *args, **options):
        batch_size = max(1, options["batch_size"])

        try:
            df = pd.read_csv(options["csv_path"])
        except FileNotFoundError as exc:
            raise CommandError(f"File not found: {options['csv_path']}") from exc

        existing = set(
            WashingStation.objects.exclude(place_id="").values_list("place_id", flat=True)
        )
        rows = parse_rows(df, existing)
        self.stdout.write(self.style.SUCCESS(f"--- Import: {len(rows)} to process ---"))

        if not options["no_geocode"]:
            geolocator = Nominatim(user_agent="stationfinder_import_v1", timeout=10)
            geocode_missing(rows, geolocator)

        stations = [
            WashingStation(
                name=row.name,
                address=row.address,
                status=row.status,
                place_id=row.place_id,
                latitude=row.latitude,
                longitude=row.longitude,
            )
            for row in rows
        ]
        WashingStation.objects.bulk_create(stations, batch_size=batch_size)

        located = sum(1 for row in rows if row.latitude is not None)
        self.stdout.write(self.style.SUCCESS("--- Summary ---"))
        self.stdout.write(self.style.SUCCESS(f"  Imported: {len(stations)}"))
        self.stdout.write(f"  With location: {located}  Without: {len(rows) - located}")
