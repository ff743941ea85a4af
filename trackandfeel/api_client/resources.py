"""Activity backend endpoints: paginated list and per-activity track."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from ..config import (
    ACTIVITIES_PATH,
    ACTIVITY_TRACK_PATH,
    API_BASE_URL,
    REQUEST_TIMEOUT,
)
from ..errors import ActivityAPIError
from .response_handling import check_response_status
from .session import get_default_session

LOGGER = logging.getLogger(__name__)


class ActivityAPI:
    """Thin JSON client for the activity backend.

    Each call performs exactly one HTTP request; there is no retry or backoff.
    Every failure (status, transport, or undecodable body) is raised as an
    :class:`ActivityAPIError` whose message is suitable for display.
    """

    def __init__(
        self,
        *,
        base_url: str = API_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or get_default_session()
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        self._session.close()

    def fetch_json(
        self,
        path: str,
        params: Optional[Dict[str, Any]],
        context: str,
    ) -> Any:
        url = f"{self._base_url}{path}"
        LOGGER.debug("GET %s params=%s", url, params)
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            message = f"{context} network error: {exc.__class__.__name__}"
            LOGGER.warning("%s (%s)", message, exc)
            raise ActivityAPIError(message) from exc

        check_response_status(response, context)

        try:
            return response.json()
        except ValueError as exc:
            message = f"{context} returned non-JSON payload"
            LOGGER.warning(message)
            raise ActivityAPIError(message) from exc

    def list_activities(self, limit: int, offset: int) -> Dict[str, Any]:
        """Return the raw list payload ``{"items": [...], ...}``."""

        data = self.fetch_json(
            ACTIVITIES_PATH,
            {"limit": limit, "offset": offset},
            "list activities",
        )
        if not isinstance(data, dict):
            message = (
                f"list activities returned unexpected payload type "
                f"{type(data).__name__}"
            )
            LOGGER.warning(message)
            raise ActivityAPIError(message)
        return data

    def get_activity_track(self, activity_id: str) -> Dict[str, Any]:
        """Return the detail payload (summary, geojson, series) for one activity."""

        path = ACTIVITY_TRACK_PATH.format(activity_id=quote(str(activity_id), safe=""))
        context = f"activity {activity_id} track"
        data = self.fetch_json(path, None, context)
        if not isinstance(data, dict):
            message = f"{context} returned unexpected payload type {type(data).__name__}"
            LOGGER.warning(message)
            raise ActivityAPIError(message)
        return data
