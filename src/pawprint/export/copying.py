"""Bounded parallel copying for the registry-draining stages.

Records in one registry map are independent and uniquely keyed, so each
stage may copy them concurrently.  The first failure cancels work that has
not started yet and is re-raised as :class:`ExportIOError`.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path
from typing import TypeVar

from pawprint._errors import ExportError, ExportIOError

T = TypeVar("T")
R = TypeVar("R")


def copy_file(source: Path, target: Path) -> int:
    """Copy *source* to *target*, creating parent dirs.  Returns the size."""
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    return target.stat().st_size


def run_bounded(
    items: Iterable[T],
    work: Callable[[T], R],
    *,
    workers: int,
    describe: Callable[[T], str] = str,
) -> list[R]:
    """Apply *work* to every item on at most *workers* threads.

    Results come back in input order.

    Raises:
        ExportIOError: Wrapping the first ``OSError`` raised by *work*.
        ExportError: Re-raised unchanged.

    """
    pending = list(items)
    if not pending:
        return []

    executor = ThreadPoolExecutor(max_workers=max(1, min(workers, len(pending))))
    try:
        futures = [executor.submit(work, item) for item in pending]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        for future, item in zip(futures, pending, strict=True):
            if future in done and future.exception() is not None:
                _raise_for(future.exception(), describe(item))
        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=True, cancel_futures=True)


def _raise_for(exc: BaseException | None, what: str) -> None:
    if isinstance(exc, ExportError):
        raise exc
    if isinstance(exc, OSError):
        msg = f"Failed to copy {what}: {exc}"
        raise ExportIOError(msg) from exc
    if exc is not None:
        raise exc
