"""
Constants shared by the stations app.
"""

# ---------------------------------------------------------------------------
# Google Places (legacy web service)
# ---------------------------------------------------------------------------
PLACES_NEARBY_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
PLACES_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
PLACES_DETAILS_FIELDS = "name,geometry,formatted_address,vicinity,business_status,place_id,price_level,types"
PLACES_TIMEOUT_S = 10

# Nearby Search rejects anything above 50 km.
PLACES_MAX_RADIUS_M = 50_000

# Places types per station kind
STATION_KIND_GAS = "gas"
STATION_KIND_WASHING = "washing"
PLACE_TYPES = {
    STATION_KIND_GAS: "gas_station",
    STATION_KIND_WASHING: "car_wash",
}

# Provider statuses that mean "request served"
PLACES_OK_STATUSES = ("OK", "ZERO_RESULTS")

# ---------------------------------------------------------------------------
# Washing stations
# ---------------------------------------------------------------------------
DEFAULT_STATION_STATUS = "OPERATIONAL"
PRICE_NOT_AVAILABLE = "N/A"

# ---------------------------------------------------------------------------
# Error envelopes
# ---------------------------------------------------------------------------
INTERNAL_ERROR_MESSAGE = "Internal Server Error"
WASHING_STATION_NOT_FOUND = "Washing Station not found"
WASHING_STATION_DELETED = "Washing Station deleted successfully"
