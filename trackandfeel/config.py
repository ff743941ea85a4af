"""Central configuration for the TrackAndFeel activity client.

All values are constants imported by the rest of the package. Settings are
read from environment variables (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_choice(key: str, choices: tuple[str, ...], default: str) -> str:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in choices:
        return normalized
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Backend API
# ---------------------------------------------------------------------------
# Base URL of the activity backend. In development the frontend proxy points
# at http://backend:8080 (compose) or http://localhost:8080 (local run).
API_BASE_URL = os.getenv("TRACKANDFEEL_API_URL", "http://localhost:8080").rstrip("/")

# Endpoint paths relative to API_BASE_URL.
ACTIVITIES_PATH = "/api/activities"
ACTIVITY_TRACK_PATH = "/api/activities/{activity_id}/track"


# ---------------------------------------------------------------------------
# HTTP tuning
# ---------------------------------------------------------------------------
# Request timeout in seconds. Requests cannot be cancelled, so this is the
# only bound on a stuck fetch.
REQUEST_TIMEOUT = _env_float("TRACKANDFEEL_REQUEST_TIMEOUT", 15.0)

# HTTP session pool sizes for concurrent requests.
HTTP_POOL_CONNECTIONS = _env_int("TRACKANDFEEL_HTTP_POOL_CONNECTIONS", 10)
HTTP_POOL_MAXSIZE = _env_int("TRACKANDFEEL_HTTP_POOL_MAXSIZE", 10)


# ---------------------------------------------------------------------------
# Store defaults
# ---------------------------------------------------------------------------
# Page size and offset used by fetch_list when the caller passes none.
DEFAULT_PAGE_LIMIT = 20
DEFAULT_PAGE_OFFSET = 0

# Display unit for speed-derived metrics: kmh, mps or pace (min/km).
# Unknown values fall back to kmh.
DEFAULT_UNIT = _env_choice("TRACKANDFEEL_DEFAULT_UNIT", ("kmh", "mps", "pace"), "kmh")
