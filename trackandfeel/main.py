"""Command-line browser for the activity backend.

Usage examples:

    # First page of activities
    python run.py activities

    # Second page of ten
    python run.py activities --limit 10 --offset 10

    # One activity with speeds shown as pace
    python run.py activity 4c1e... --unit pace
"""

from __future__ import annotations

import argparse
import logging
import statistics
from typing import Any, Dict, List, Optional, Sequence

from .config import API_BASE_URL, DEFAULT_PAGE_LIMIT, DEFAULT_PAGE_OFFSET, DEFAULT_UNIT
from .errors import ActivityAPIError
from .store import ActivityStore, build_store
from .units import SPEED_UNITS, convert_speed, format_speed

LOGGER = logging.getLogger(__name__)


def _setup_logging(level: str = "INFO") -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, level),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def format_duration(seconds: Optional[int]) -> str:
    """Format seconds as ``H:MM:SS`` (or ``M:SS`` under an hour)."""

    if seconds is None:
        return "-"
    hours, rest = divmod(int(seconds), 3600)
    mins, sec = divmod(rest, 60)
    if hours:
        return f"{hours}:{mins:02d}:{sec:02d}"
    return f"{mins}:{sec:02d}"


def format_distance(metres: Optional[float]) -> str:
    if metres is None:
        return "-"
    return f"{metres / 1000:.2f} km"


def _format_entry(entry: Dict[str, Any]) -> str:
    return "  ".join(
        [
            str(entry.get("id", "?")),
            str(entry.get("started_at", "-")),
            str(entry.get("sport") or "-"),
            format_duration(entry.get("duration_sec")),
            format_distance(entry.get("distance_m")),
        ]
    )


def speed_stats(series: Dict[str, Any], unit: str) -> Dict[str, str]:
    """Average and best speed from the ``speed_mps`` series, in ``unit``."""

    speeds: List[float] = [
        float(v) for v in series.get("speed_mps") or [] if v is not None and v > 0
    ]
    if not speeds:
        return {"avg": format_speed(None, unit), "best": format_speed(None, unit)}
    avg = statistics.fmean(speeds)
    best = max(speeds)
    return {
        "avg": format_speed(convert_speed(avg, unit), unit),
        "best": format_speed(convert_speed(best, unit), unit),
    }


def _show_list(store: ActivityStore, limit: int, offset: int) -> int:
    store.fetch_list(limit, offset)
    if store.error:
        LOGGER.error("Could not load activities: %s", store.error)
        return 1
    if not store.items:
        print("No activities.")
        return 0
    for entry in store.items:
        print(_format_entry(entry))
    return 0


def _show_activity(store: ActivityStore, activity_id: str, unit: str) -> int:
    store.set_unit(unit)
    try:
        detail = store.fetch_detail(activity_id)
    except ActivityAPIError as exc:
        LOGGER.error("Could not load activity %s: %s", activity_id, exc)
        return 1

    summary = detail.get("summary") or {}
    series = detail.get("series") or {}
    geometry = (detail.get("geojson") or {}).get("geometry") or {}
    stats = speed_stats(series, store.unit)
    print(f"Activity {detail.get('id', activity_id)}")
    print(f"  started   {summary.get('started_at', '-')}")
    print(f"  sport     {summary.get('sport') or '-'}")
    print(f"  duration  {format_duration(summary.get('duration_sec'))}")
    print(f"  distance  {format_distance(summary.get('distance_m'))}")
    print(f"  avg hr    {summary.get('avg_hr') or '-'}")
    print(f"  max hr    {summary.get('max_hr') or '-'}")
    print(f"  avg speed {stats['avg']}")
    print(f"  best      {stats['best']}")
    print(f"  points    {len(geometry.get('coordinates') or [])}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse activities on a TrackAndFeel backend")
    parser.add_argument(
        "--api-url",
        default=API_BASE_URL,
        help=f"Backend base URL (default: {API_BASE_URL})",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Python logging level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("activities", help="List recorded activities")
    list_cmd.add_argument("--limit", type=int, default=DEFAULT_PAGE_LIMIT)
    list_cmd.add_argument("--offset", type=int, default=DEFAULT_PAGE_OFFSET)

    show_cmd = sub.add_parser("activity", help="Show one activity")
    show_cmd.add_argument("activity_id", help="Activity identifier")
    show_cmd.add_argument("--unit", choices=SPEED_UNITS, default=DEFAULT_UNIT)
    return parser


def main(argv: Sequence[str] | None = None, *, store: ActivityStore | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.log_level)

    if args.command == "activities" and (args.limit < 0 or args.offset < 0):
        parser.error("--limit and --offset must be non-negative")

    owned = store is None
    active = store or build_store(args.api_url)
    try:
        if args.command == "activities":
            return _show_list(active, args.limit, args.offset)
        return _show_activity(active, args.activity_id, args.unit)
    finally:
        if owned:
            active.close()
