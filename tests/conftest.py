"""Global pytest fixtures & helpers.

Adds project root to path and provides fake HTTP objects so no test touches
the network.
"""
from __future__ import annotations

import json
import os
import sys
from typing import Any, Callable, Dict, List

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from trackandfeel.api_client import ActivityAPI
from trackandfeel.errors import ActivityAPIError


class FakeResp:
    """Minimal fake response matching needed parts of requests.Response."""

    def __init__(self, status_code=200, data=None, text=None, url="http://test"):
        self.status_code = status_code
        self._data = data
        self._text = text
        self.url = url

    def json(self):
        if self._data is None:
            raise ValueError("No JSON object could be decoded")
        return self._data

    @property
    def text(self):
        if self._text is not None:
            return self._text
        return json.dumps(self._data)


class FakeSession:
    """Records GET calls and answers them from a handler."""

    def __init__(self, handler: Callable[..., Any]):
        self._handler = handler
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        return self._handler(url, params=params, timeout=timeout)

    def close(self):
        self.closed = True


class FakeActivityAPI:
    """Stand-in for ActivityAPI with scripted list/track answers."""

    def __init__(self, list_payload=None, tracks=None):
        self.list_payload = list_payload if list_payload is not None else {"items": []}
        self.tracks: Dict[str, Any] = dict(tracks or {})
        self.list_calls: List[tuple] = []
        self.track_calls: List[str] = []
        self.closed = False

    def list_activities(self, limit, offset):
        self.list_calls.append((limit, offset))
        if isinstance(self.list_payload, Exception):
            raise self.list_payload
        return self.list_payload

    def get_activity_track(self, activity_id):
        self.track_calls.append(activity_id)
        value = self.tracks.get(activity_id)
        if value is None:
            raise ActivityAPIError(f"activity {activity_id} track request failed (HTTP 404)")
        if isinstance(value, Exception):
            raise value
        return value

    def close(self):
        self.closed = True


def make_detail(activity_id: str = "a", speeds=None) -> Dict[str, Any]:
    return {
        "id": activity_id,
        "summary": {
            "started_at": "2025-03-01T08:00:00Z",
            "sport": "running",
            "duration_sec": 1800,
            "distance_m": 5000,
            "avg_hr": 150,
            "max_hr": 172,
        },
        "geojson": {
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": [[4.0, 52.0], [4.001, 52.001]]},
            "properties": {},
        },
        "series": {
            "elapsed_sec": [0, 1],
            "speed_mps": speeds if speeds is not None else [2.5, 3.5],
        },
    }


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def fake_api():
    return FakeActivityAPI()


@pytest.fixture
def make_api():
    """Build a real ActivityAPI around a FakeSession driven by ``handler``."""

    def _make(handler):
        session = FakeSession(handler)
        return ActivityAPI(base_url="http://backend:8080/", session=session, timeout=3), session

    return _make
