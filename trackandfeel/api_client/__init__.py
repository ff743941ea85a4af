"""HTTP client components for the activity backend (session, resources)."""

from .resources import ActivityAPI  # noqa: F401
from .session import create_default_session, get_default_session  # noqa: F401
