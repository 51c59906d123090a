"""Export collector — records pipeline actions into an :class:`EventLog`."""

from __future__ import annotations

from pawprint.observability.events import BuildEvent, BuildEventKind, now_ns
from pawprint.observability.log import EventLog


class ExportCollector:
    """Records build events for one or more export runs.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record(
        self,
        kind: BuildEventKind,
        source: str,
        target: str = "",
        *,
        duration_ms: float = 0.0,
    ) -> None:
        self._log.append(
            BuildEvent(
                kind=kind,
                source=source,
                target=target,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
