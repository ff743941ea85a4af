"""Shared HTTP response helpers for activity backend interactions."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from ..errors import ActivityAPIError, ActivityNotFoundError

LOGGER = logging.getLogger(__name__)

__all__ = [
    "check_response_status",
    "extract_error",
]


def check_response_status(response: requests.Response, context: str) -> None:
    """Raise the matching :class:`ActivityAPIError` for a non-2xx response."""

    status = response.status_code
    if 200 <= status < 300:
        return
    detail = extract_error(response)
    message = f"{context} request failed (HTTP {status})"
    if detail:
        message = f"{message} | {detail}"
    if status == 404:
        LOGGER.info(message)
        raise ActivityNotFoundError(message)
    LOGGER.warning(message)
    raise ActivityAPIError(message)


def extract_error(resp: Optional[requests.Response]) -> Optional[str]:
    """Return a compact error string from the response body if present."""

    if resp is None:
        return None
    data = _safe_json(resp)
    if data is None:
        return _extract_error_text(resp)
    if not isinstance(data, dict):
        return None
    parts = _collect_error_parts(data)
    return " | ".join(parts) if parts else None


def _safe_json(resp: requests.Response) -> Optional[Any]:
    """Safely parse JSON; return None if parsing fails."""

    try:
        return resp.json()
    except ValueError as exc:
        LOGGER.debug(
            "Failed to decode JSON from %s: %s", getattr(resp, "url", "?"), exc
        )
        return None


def _extract_error_text(resp: requests.Response) -> Optional[str]:
    """Best-effort plain-text extraction when JSON parsing fails.

    The backend answers errors with ``http.Error`` which writes a short
    ``text/plain`` body such as ``db error`` or ``bad id``.
    """

    text = getattr(resp, "text", "")
    if not isinstance(text, str):
        return None
    trimmed = text.strip()
    if not trimmed:
        return None
    return (trimmed[:297] + "...") if len(trimmed) > 300 else trimmed


def _collect_error_parts(data: Dict[str, Any]) -> List[str]:
    parts: List[str] = []
    for key in ("error", "message"):
        value = data.get(key)
        if value:
            parts.append(str(value))
    return parts
