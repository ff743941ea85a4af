"""Display-unit helpers for speed-derived metrics.

The backend reports speed in metres per second. Views render it in the unit
the user picked on the store: km/h, m/s, or pace as decimal minutes per
kilometre (``5.5`` means 5'30").
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .errors import InvalidUnitError

SPEED_UNITS = ("kmh", "mps", "pace")

UNIT_LABELS = {
    "kmh": "km/h",
    "mps": "m/s",
    "pace": "min/km",
}


def normalize_unit(value: object) -> str:
    """Return the canonical unit key or raise :class:`InvalidUnitError`."""

    if not isinstance(value, str):
        raise InvalidUnitError(f"Unsupported unit {value!r}; expected one of {SPEED_UNITS}")
    normalized = value.strip().lower()
    if normalized not in SPEED_UNITS:
        raise InvalidUnitError(f"Unsupported unit {value!r}; expected one of {SPEED_UNITS}")
    return normalized


def mps_to_kmh(speed: Optional[float]) -> Optional[float]:
    if speed is None:
        return None
    return speed * 3.6


def mps_to_pace(speed: Optional[float]) -> Optional[float]:
    """Convert m/s into decimal minutes per km; stopped or missing -> None."""

    if speed is None or speed <= 0:
        return None
    sec_per_km = 1000.0 / speed
    return sec_per_km / 60.0


def convert_speed(speed: Optional[float], unit: str) -> Optional[float]:
    unit = normalize_unit(unit)
    if unit == "kmh":
        return mps_to_kmh(speed)
    if unit == "pace":
        return mps_to_pace(speed)
    return speed


def convert_speed_series(speeds: Iterable[Optional[float]], unit: str) -> List[Optional[float]]:
    """Convert a series of m/s samples, keeping gaps as ``None``."""

    unit = normalize_unit(unit)
    return [convert_speed(value, unit) for value in speeds]


def format_pace(minutes: float) -> str:
    """Format decimal minutes as ``M'SS"``."""

    total_seconds = int(round(minutes * 60))
    mins, sec = divmod(total_seconds, 60)
    return f"{mins}'{sec:02d}\""


def format_speed(value: Optional[float], unit: str) -> str:
    """Render an already-converted value with its unit label."""

    unit = normalize_unit(unit)
    if value is None:
        return "-"
    if unit == "pace":
        return f"{format_pace(value)} {UNIT_LABELS[unit]}"
    return f"{value:.1f} {UNIT_LABELS[unit]}"
