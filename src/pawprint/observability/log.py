"""Event log — queryable, thread-safe event store.

Stores a bounded ring buffer of :class:`BuildEvent` objects.  All methods
take the internal lock, so copy workers may append concurrently.
"""

import threading
from collections import deque
from typing import Any

from pawprint.observability.events import BuildEvent, BuildEventKind


class EventLog:
    """Bounded event store with query support.

    When the buffer is full, the oldest events are discarded.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[BuildEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: BuildEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        kind: BuildEventKind | None = None,
        source: str | None = None,
        limit: int = 100,
    ) -> list[BuildEvent]:
        """Return matching events, most recent first.

        Args:
            kind: Only return events of this kind.
            source: Only return events whose source contains this substring.
            limit: Maximum number of events to return.

        """
        with self._lock:
            results: list[BuildEvent] = []
            for event in reversed(self._events):
                if len(results) >= limit:
                    break
                if kind is not None and event.kind != kind:
                    continue
                if source is not None and source not in event.source:
                    continue
                results.append(event)
            return results

    def recent(self, n: int = 20) -> list[BuildEvent]:
        """Return the N most recent events, oldest first."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Clear all events and return the count that was cleared."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return event counts and total time per kind."""
        with self._lock:
            events = list(self._events)

        counts: dict[str, int] = {}
        durations: dict[str, float] = {}
        for event in events:
            counts[event.kind] = counts.get(event.kind, 0) + 1
            durations[event.kind] = durations.get(event.kind, 0.0) + event.duration_ms

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_kind": counts,
            "ms_by_kind": durations,
        }
