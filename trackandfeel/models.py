from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, TypeAlias

from .config import DEFAULT_UNIT

# Both payloads are opaque JSON objects; only "id" is relied upon for entries.
ActivityListEntry: TypeAlias = Dict[str, Any]
ActivityDetail: TypeAlias = Dict[str, Any]


@dataclass
class ActivityStoreState:
    items: List[ActivityListEntry] = field(default_factory=list)
    # Count hint; the list endpoint does not report a total yet.
    total_known: int = 0
    loading: bool = False
    # Empty string means no error.
    error: str = ""
    details: Dict[str, ActivityDetail] = field(default_factory=dict)
    unit: str = DEFAULT_UNIT
