"""Tests for pawprint.host.images — Pillow renditions."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from pawprint.host.images import PillowImageResizer

from .conftest import write_png


@pytest.fixture
def source(tmp_path: Path) -> Path:
    return write_png(tmp_path / "src/hero.png", (200, 100))


@pytest.fixture
def resizer(tmp_path: Path) -> PillowImageResizer:
    return PillowImageResizer(tmp_path / "cache")


def _size(path: Path) -> tuple[int, int]:
    with Image.open(path) as image:
        return image.size


class TestPillowImageResizer:
    def test_no_dimensions_returns_source(self, resizer: PillowImageResizer, source: Path) -> None:
        assert resizer.resize(source, None, None, False) == source

    def test_fit_width_keeps_aspect(self, resizer: PillowImageResizer, source: Path) -> None:
        rendition = resizer.resize(source, 100, None, False)
        assert _size(rendition) == (100, 50)

    def test_fit_box(self, resizer: PillowImageResizer, source: Path) -> None:
        rendition = resizer.resize(source, 100, 100, False)
        assert _size(rendition) == (100, 50)

    def test_forced_crops_exactly(self, resizer: PillowImageResizer, source: Path) -> None:
        rendition = resizer.resize(source, 60, 60, True)
        assert _size(rendition) == (60, 60)

    def test_never_upscales(self, resizer: PillowImageResizer, source: Path) -> None:
        rendition = resizer.resize(source, 400, None, False)
        assert _size(rendition) == (200, 100)

    def test_renditions_are_cached(
        self, resizer: PillowImageResizer, source: Path, tmp_path: Path,
    ) -> None:
        first = resizer.resize(source, 50, None, False)
        second = resizer.resize(source, 50, None, False)

        assert first == second
        assert first.parent == tmp_path / "cache/images"
        assert first.name.startswith("hero_")
        assert first.suffix == ".png"

    def test_different_geometry_different_file(
        self, resizer: PillowImageResizer, source: Path,
    ) -> None:
        assert resizer.resize(source, 50, None, False) != resizer.resize(source, 50, 50, True)
