"""Client-side activity store: list/detail fetching, detail cache, shared status.

One :class:`ActivityStore` is built per client session and handed to every
view that needs activity data. It is the only writer of its state. Views read
the public properties and may :meth:`ActivityStore.subscribe` to be told when a
field changes.

Operations block on network I/O and may be called from several threads. State
is mutated under a single lock that is never held across a request, so
concurrent operations interleave only at their I/O gaps.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .api_client import ActivityAPI, create_default_session
from .config import API_BASE_URL, DEFAULT_PAGE_LIMIT, DEFAULT_PAGE_OFFSET, DEFAULT_UNIT
from .errors import ActivityAPIError
from .models import ActivityDetail, ActivityListEntry, ActivityStoreState
from .units import normalize_unit

LOGGER = logging.getLogger(__name__)

Listener = Callable[[str, ActivityStoreState], None]

__all__ = ["ActivityStore", "Listener", "build_store"]


class ActivityStore:
    """Single source of truth for activity list/detail data and UI status.

    ``loading`` is true while at least one fetch issued by this store is
    outstanding. ``error`` holds the message of the most recent failure and
    is cleared whenever a new fetch starts (last write wins across
    overlapping operations). ``details`` only grows: a cached activity is
    never refetched during the session, and failed fetches are never cached.
    """

    def __init__(
        self,
        api: ActivityAPI | None = None,
        *,
        unit: str = DEFAULT_UNIT,
    ) -> None:
        self._api = api or ActivityAPI(session=create_default_session())
        self._lock = threading.RLock()
        self._state = ActivityStoreState(unit=normalize_unit(unit))
        self._in_flight = 0
        # id -> (shared result, ident of the thread issuing the request)
        self._pending: Dict[str, Tuple[Future, int]] = {}
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def items(self) -> List[ActivityListEntry]:
        return self._state.items

    @property
    def total_known(self) -> int:
        return self._state.total_known

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> str:
        return self._state.error

    @property
    def details(self) -> Dict[str, ActivityDetail]:
        return self._state.details

    @property
    def unit(self) -> str:
        return self._state.unit

    def snapshot(self) -> ActivityStoreState:
        """Return a shallow copy of the current state."""

        with self._lock:
            return replace(
                self._state,
                items=list(self._state.items),
                details=dict(self._state.details),
            )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(field, state)`` after each state change.

        Returns a function that removes the subscription.
        """

        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        self._api.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def fetch_list(
        self,
        limit: int = DEFAULT_PAGE_LIMIT,
        offset: int = DEFAULT_PAGE_OFFSET,
    ) -> None:
        """Replace ``items`` with one page of activities.

        Failures are recorded in ``error`` and never raised; ``items`` is
        left untouched when the fetch fails.
        """

        if limit < 0 or offset < 0:
            raise ValueError(
                f"limit and offset must be non-negative (limit={limit}, offset={offset})"
            )
        self._begin()
        try:
            data = self._api.list_activities(limit, offset)
            items = data.get("items") or []
            if not isinstance(items, list):
                raise ActivityAPIError(
                    f"list activities returned non-list items ({type(items).__name__})"
                )
        except ActivityAPIError as exc:
            LOGGER.warning(
                "Activity list fetch failed limit=%s offset=%s: %s", limit, offset, exc
            )
            self._finish(str(exc))
            return
        except BaseException:
            self._finish(None)
            raise

        with self._lock:
            self._state.items = list(items)
        LOGGER.debug(
            "Loaded %d activities limit=%s offset=%s", len(items), limit, offset
        )
        self._finish(None, changed=("items",))

    def fetch_detail(self, activity_id: str) -> ActivityDetail:
        """Return the detail payload for ``activity_id``, fetching it at most once.

        A cached id returns immediately without touching ``loading`` or
        ``error``. Concurrent callers asking for the same uncached id share
        one request and all receive its result or its exception.

        Raises:
            ActivityAPIError: when the request fails; the message is also
                stored in ``error``. Also raised when a listener asks for an
                id whose request its own thread is still issuing.
        """

        key = str(activity_id)
        me = threading.get_ident()
        with self._lock:
            if key in self._state.details:
                LOGGER.debug("Detail cache hit activity=%s", key)
                return self._state.details[key]
            entry = self._pending.get(key)
            if entry is None:
                pending: Future = Future()
                self._pending[key] = (pending, me)
            else:
                pending, owner = entry

        if entry is not None:
            if owner == me:
                # Re-entered from a listener on the owning thread.
                raise ActivityAPIError(
                    f"detail fetch for {key} already in progress on this thread"
                )
            LOGGER.debug("Joining in-flight detail fetch activity=%s", key)
            return pending.result()

        self._begin()
        try:
            data = self._api.get_activity_track(key)
        except ActivityAPIError as exc:
            LOGGER.warning("Activity detail fetch failed activity=%s: %s", key, exc)
            self._settle(key, pending, exc=exc)
            self._finish(str(exc))
            raise
        except BaseException as exc:
            self._settle(key, pending, exc=exc)
            self._finish(None)
            raise

        with self._lock:
            self._state.details[key] = data
        self._settle(key, pending, result=data)
        self._finish(None, changed=("details",))
        return data

    def set_unit(self, unit: str) -> None:
        """Select the display unit (``kmh``, ``mps`` or ``pace``).

        Raises:
            InvalidUnitError: for any other value; ``unit`` is left unchanged.
        """

        normalized = normalize_unit(unit)
        with self._lock:
            self._state.unit = normalized
        self._notify(("unit",))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _begin(self) -> None:
        with self._lock:
            self._in_flight += 1
            self._state.loading = True
            self._state.error = ""
        self._notify(("loading", "error"))

    def _finish(self, error: Optional[str], changed: Iterable[str] = ()) -> None:
        fields = list(changed)
        with self._lock:
            self._in_flight = max(0, self._in_flight - 1)
            self._state.loading = self._in_flight > 0
            if error is not None:
                self._state.error = error
                fields.append("error")
        fields.append("loading")
        self._notify(fields)

    def _settle(
        self,
        key: str,
        pending: Future,
        *,
        result: Optional[ActivityDetail] = None,
        exc: Optional[BaseException] = None,
    ) -> None:
        with self._lock:
            entry = self._pending.get(key)
            if entry is not None and entry[0] is pending:
                del self._pending[key]
        if exc is not None:
            pending.set_exception(exc)
        else:
            pending.set_result(result)

    def _notify(self, fields: Iterable[str]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        if not listeners:
            return
        for field_name in fields:
            for listener in listeners:
                try:
                    listener(field_name, self._state)
                except Exception:
                    LOGGER.exception(
                        "Store listener %r failed for field %s", listener, field_name
                    )


def build_store(base_url: str | None = None, *, unit: str = DEFAULT_UNIT) -> ActivityStore:
    """Construct the session's store with a fresh HTTP session."""

    api = ActivityAPI(
        base_url=base_url or API_BASE_URL,
        session=create_default_session(),
    )
    return ActivityStore(api, unit=unit)
