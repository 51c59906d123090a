"""Tests for pawprint.export.copying — bounded parallel copies."""

from __future__ import annotations

import threading
import time
from pathlib import Path

import pytest

from pawprint._errors import ExportError, ExportIOError
from pawprint.export.copying import copy_file, run_bounded


class TestCopyFile:
    def test_creates_parents(self, tmp_path: Path) -> None:
        source = tmp_path / "a.txt"
        source.write_text("hello")

        size = copy_file(source, tmp_path / "deep/er/b.txt")

        assert size == 5
        assert (tmp_path / "deep/er/b.txt").read_text() == "hello"

    def test_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            copy_file(tmp_path / "nope", tmp_path / "out")


class TestRunBounded:
    def test_results_in_input_order(self) -> None:
        def slow_square(n: int) -> int:
            time.sleep(0.001 * (5 - n))
            return n * n

        assert run_bounded(range(5), slow_square, workers=3) == [0, 1, 4, 9, 16]

    def test_empty(self) -> None:
        assert run_bounded([], lambda item: item, workers=4) == []

    def test_respects_worker_bound(self) -> None:
        lock = threading.Lock()
        active = 0
        peak = 0

        def work(item: int) -> int:
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.01)
            with lock:
                active -= 1
            return item

        run_bounded(range(12), work, workers=2)
        assert peak <= 2

    def test_oserror_becomes_export_io_error(self) -> None:
        def work(item: str) -> str:
            raise PermissionError(f"denied: {item}")

        with pytest.raises(ExportIOError, match="Failed to copy a.png") as info:
            run_bounded(["a.png"], work, workers=2)
        assert isinstance(info.value.__cause__, PermissionError)

    def test_export_errors_pass_through(self) -> None:
        def work(item: str) -> str:
            raise ExportError("bad bundle")

        with pytest.raises(ExportError, match="bad bundle"):
            run_bounded(["x"], work, workers=1)

    def test_other_errors_pass_through(self) -> None:
        def work(item: str) -> str:
            raise KeyError(item)

        with pytest.raises(KeyError):
            run_bounded(["x"], work, workers=1)
