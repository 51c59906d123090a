"""Export events — what the pipeline did, and how long it took.

All events are frozen dataclasses with a monotonic ``timestamp_ns``, safe to
produce from the copy worker threads.
"""

import time
from dataclasses import dataclass
from typing import Literal

type BuildEventKind = Literal[
    "stage",
    "render",
    "write_page",
    "bundle",
    "copy_image",
    "copy_asset",
    "copy_svg",
    "copy_static",
]


@dataclass(frozen=True, slots=True)
class BuildEvent:
    """A pipeline action occurred.

    Attributes:
        kind: The type of action.
        source: Source path, entity id, or stage name.
        target: Output path (or description).
        duration_ms: Time taken in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: BuildEventKind
    source: str
    target: str
    duration_ms: float
    timestamp_ns: int


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
