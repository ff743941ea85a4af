"""Central error types used across the application."""

from __future__ import annotations


class ActivityAPIError(RuntimeError):
    """Base error for activity backend failures (HTTP status, network, payload)."""


class ActivityNotFoundError(ActivityAPIError):
    """Raised when the backend reports that an activity does not exist."""


class InvalidUnitError(ValueError):
    """Raised when a display unit outside the supported set is selected."""


__all__ = [
    "ActivityAPIError",
    "ActivityNotFoundError",
    "InvalidUnitError",
]
