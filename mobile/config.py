"""
Client configuration, read from the environment.
"""

import os
from pathlib import Path

API_URL = os.getenv("STATION_FINDER_API_URL", "http://localhost:8000").rstrip("/")

STORAGE_PATH = Path(
    os.getenv("STATION_FINDER_STORAGE", str(Path.home() / ".stationfinder" / "storage.json"))
)

REQUEST_TIMEOUT_S = 15

# Radius slider bounds (km)
MIN_RADIUS_KM = 1
MAX_RADIUS_KM = 20
DEFAULT_RADIUS_KM = 5

SESSION_KEY = "sessionId"
