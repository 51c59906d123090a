"""Shared test fixtures for pawprint."""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from pawprint.config import StaticConfig
from pawprint.export.pipeline import ExportPipeline
from pawprint.export.settings import TemplateContext
from pawprint.host.bundler import ConcatBundler
from pawprint.host.files import read_files, write_files
from pawprint.host.protocols import (
    EntityReferences,
    RenderedPage,
    RenderOutput,
    UrlHooks,
)
from pawprint.host.sites import FileSystemSites
from pawprint.observability import EventLog, ExportCollector
from pawprint.paths import PathResolver

FIXED_DATE = dt.date(2026, 10, 19)

HERO = "base/global/assets/images/hero.png"
VIDEO = "base/global/assets/videos/intro.mp4"
PDF = "base/global/assets/docs/manual.pdf"
ICON = "base/global/assets/icons/arrow.svg"
VENDOR_JS = "base/global/js/vendor.js"


def write_png(path: Path, size: tuple[int, int] = (64, 48)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, (200, 80, 40)).save(path)
    return path


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a project with a ``base`` site.

    Returns the project root; the site tree lives in ``root/sites``.
    """
    root = tmp_path / "project"
    sites = root / "sites"

    write_png(sites / HERO)
    (sites / VIDEO).parent.mkdir(parents=True)
    (sites / VIDEO).write_bytes(b"\x00\x00\x00\x18ftypmp42")
    write(sites / PDF, "%PDF-1.4\n")
    write(sites / ICON, '<svg xmlns="http://www.w3.org/2000/svg"><symbol id="icon"/></svg>\n')
    write(sites / VENDOR_JS, "window.vendor = true;\n")
    write(sites / "base/global/assets/fonts/regular.woff", "woff")
    write(sites / "base/global/assets/fonts/bold.woff2", "woff2")

    element = sites / "base/elements/e-image"
    write(element / "e-image.html", "<figure>{{ caption }}</figure>\n")
    write(element / "e-image.css", ".e-image { display: block; }\n")
    write(element / "e-image.print.css", ".e-image { display: none; }\n")
    write(element / "e-image.js", "console.log('e-image');\n")

    teaser = sites / "base/modules/m-teaser"
    write(teaser / "m-teaser.html", "<div>teaser</div>\n")
    write(teaser / "m-teaser.css", ".m-teaser { margin: 0; }\n")

    for page in ("home", "about"):
        write(sites / f"base/pages/{page}/{page}.html", f"<h1>{page}</h1>\n")

    return root


@pytest.fixture
def config(project: Path) -> StaticConfig:
    return StaticConfig(root=project, copy_assets={})


@pytest.fixture
def collector() -> ExportCollector:
    return ExportCollector(EventLog())


def fixed_context() -> TemplateContext:
    return TemplateContext(date=FIXED_DATE.isoformat(), git_hash="abc123", git_branch="main")


class ScriptedRenderer:
    """Renderer double: each page is a function that calls the URL hooks.

    Mirrors what a template engine does while rendering, without one.
    """

    def __init__(
        self,
        pages: dict[str, Callable[[UrlHooks], str]],
        references: EntityReferences | None = None,
    ) -> None:
        self.pages = pages
        self.references = references or EntityReferences()
        self.calls: list[str] = []

    def render(self, query: str, hooks: UrlHooks, page_path_template: str) -> RenderOutput:
        self.calls.append(query)
        rendered = tuple(
            RenderedPage(
                path=page_path_template.replace("${page}", name),
                html=build(hooks),
                source=f"base/pages/{name}",
            )
            for name, build in self.pages.items()
        )
        return RenderOutput(pages=rendered, references=self.references)


class PassThroughResizer:
    """Image resizer double returning the source and recording each call."""

    def __init__(self) -> None:
        self.calls: list[tuple[Path, int | None, int | None, bool]] = []

    def resize(self, source: Path, width: int | None, height: int | None, forced: bool) -> Path:
        self.calls.append((source, width, height, forced))
        return source


def make_pipeline(config: StaticConfig, renderer: Any, **overrides: Any) -> ExportPipeline:
    """ExportPipeline over the real filesystem collaborators and *renderer*."""
    sites = FileSystemSites(config.sites_path)
    kwargs: dict[str, Any] = {
        "paths": PathResolver(config),
        "entities": sites,
        "renderer": renderer,
        "style_bundler": ConcatBundler(".css"),
        "script_bundler": ConcatBundler(".js"),
        "image_resizer": PassThroughResizer(),
        "read_files": read_files,
        "write_files": write_files,
        "context_factory": fixed_context,
    }
    kwargs.update(overrides)
    return ExportPipeline(config, **kwargs)
