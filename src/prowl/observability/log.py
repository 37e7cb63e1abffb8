"""Event log — bounded, thread-safe store of generation and request events.

Page jobs record from worker tasks while the dev server records from
request handlers, so every access goes through one lock.  The newest
``max_events`` events are kept; older ones fall off the front.
"""

import threading
from collections import Counter, deque
from collections.abc import Iterator
from typing import Any

from prowl.observability.events import PageRendered, PageSkipped, ProwlEvent, RequestResolved


def _subject_of(event: ProwlEvent) -> str:
    """Path-like field used for substring filtering."""
    if isinstance(event, PageSkipped):
        return event.subject
    return event.path


class EventLog:
    """Ring buffer of :data:`ProwlEvent` objects.

    Args:
        max_events: Capacity; the oldest event is dropped when it is full.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[ProwlEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: ProwlEvent) -> None:
        with self._lock:
            self._events.append(event)

    def _snapshot(self) -> list[ProwlEvent]:
        with self._lock:
            return list(self._events)

    def __iter__(self) -> Iterator[ProwlEvent]:
        """Iterate over a copy, oldest first."""
        return iter(self._snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def query(
        self,
        *,
        event_type: type | None = None,
        path: str | None = None,
        limit: int = 100,
    ) -> list[ProwlEvent]:
        """Return matching events, newest first.

        Args:
            event_type: Keep only instances of this class.
            path: Keep only events whose path (or, for skips, subject)
                contains this substring.
            limit: Maximum number of events returned.

        """
        matches: list[ProwlEvent] = []
        for event in reversed(self._snapshot()):
            if len(matches) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if path is not None and path not in _subject_of(event):
                continue
            matches.append(event)
        return matches

    def recent(self, n: int = 20) -> list[ProwlEvent]:
        """The *n* newest events, oldest first."""
        return self._snapshot()[-n:]

    def skipped(self, kind: str | None = None) -> list[PageSkipped]:
        """Skip events in arrival order, optionally of one diagnostic kind."""
        return [
            event for event in self._snapshot()
            if isinstance(event, PageSkipped) and (kind is None or event.kind == kind)
        ]

    def clear(self) -> int:
        """Drop every event; return how many there were."""
        with self._lock:
            dropped = len(self._events)
            self._events.clear()
        return dropped

    def stats(self) -> dict[str, Any]:
        """Counts by event class, skip kind and response status."""
        events = self._snapshot()
        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": dict(Counter(type(event).__name__ for event in events)),
            "skipped_by_kind": dict(Counter(
                event.kind for event in events if isinstance(event, PageSkipped)
            )),
            "bytes_rendered": sum(
                event.size_bytes for event in events if isinstance(event, PageRendered)
            ),
            "requests_by_status": dict(Counter(
                event.status for event in events if isinstance(event, RequestResolved)
            )),
        }
