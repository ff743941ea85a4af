"""TrackAndFeel activity client package."""

from .main import main
from .models import ActivityStoreState
from .store import ActivityStore, build_store
from .errors import ActivityAPIError, ActivityNotFoundError, InvalidUnitError

__all__ = [
    "main",
    "ActivityStore",
    "ActivityStoreState",
    "build_store",
    "ActivityAPIError",
    "ActivityNotFoundError",
    "InvalidUnitError",
]
