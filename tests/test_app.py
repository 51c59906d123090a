"""Tests for pawprint.app — wiring and the one-call export."""

from __future__ import annotations

from pathlib import Path

import pytest

from pawprint.app import create_command, export_static
from pawprint.command import StaticExportCommand
from pawprint.config import StaticConfig

from .conftest import write


def test_create_command(project: Path) -> None:
    command = create_command(StaticConfig(root=project))
    assert isinstance(command, StaticExportCommand)
    assert command.resolve_destination() == project / ".pawprint/cache/static/export"


class TestExportStatic:
    """End-to-end export through the real collaborators (needs Kida)."""

    @pytest.fixture(autouse=True)
    def _kida(self) -> None:
        pytest.importorskip("kida")

    def test_export(self, project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write(
            project / "sites/base/pages/home/home.html",
            '{% include "base/modules/m-teaser/m-teaser.html" %}'
            "<img src=\"{{ 'base/global/assets/images/hero.png' | image_url(16, 16, true) }}\">",
        )
        destination = tmp_path / "out"

        result = export_static(project, "base", destination=destination)

        assert result.total_pages == 2
        assert (destination / "home.html").is_file()
        assert (destination / "about.html").is_file()
        assert (destination / "css/base-common.css").is_file()
        assert (destination / "assets/fonts/regular.woff").is_file()
        assert (destination / "assets/images/hero.png").is_file()
        (image,) = (destination / "images").iterdir()
        assert image.name.startswith("hero_")
        assert "Exported 2 pages" in capsys.readouterr().err

    def test_quiet(self, project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        export_static(project, destination=tmp_path / "out", quiet=True)
        assert capsys.readouterr().err == ""

    def test_build_layer(self, project: Path, tmp_path: Path) -> None:
        write(project / "pawprint.yaml", "builds:\n  prod:\n    static:\n      beautify: true\n")

        export_static(project, destination=tmp_path / "out", build="prod", quiet=True)

        html = (tmp_path / "out/home.html").read_text(encoding="utf-8")
        assert html.startswith("<h1>\n")
