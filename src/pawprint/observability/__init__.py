"""Export observability — structured records of what an export did.

Quick Start:
    >>> from pawprint.observability import EventLog, ExportCollector
    >>> collector = ExportCollector(EventLog())
    >>> # pass collector to StaticExportCommand, then inspect collector.log

"""

from pawprint.observability.collector import ExportCollector
from pawprint.observability.events import BuildEvent, BuildEventKind, now_ns
from pawprint.observability.log import EventLog

__all__ = [
    "BuildEvent",
    "BuildEventKind",
    "EventLog",
    "ExportCollector",
    "now_ns",
]
