"""Tests for pawprint.host.renderer — URL filters, references, Kida rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from pawprint.config import StaticConfig
from pawprint.export.naming import ContentAddressedNamer
from pawprint.export.registry import AssetRegistry
from pawprint.export.settings import resolve_settings
from pawprint.host.protocols import ImageRequest
from pawprint.host.renderer import (
    KidaRenderer,
    entity_id_for,
    page_output_path,
    url_filters,
)
from pawprint.host.sites import FileSystemSites, Site

from .conftest import fixed_context, write


class RecordingHooks:
    """UrlHooks double that echoes its arguments."""

    def __init__(self) -> None:
        self.images: list[ImageRequest] = []

    def image_url(self, request: ImageRequest) -> str:
        self.images.append(request)
        return f"img:{request.path}"

    def asset_url(self, path: str) -> str:
        return f"asset:{path}"

    def svg_url(self, path: str) -> str:
        return f"svg:{path}"

    def css_url(self, site: Site, group: str = "common") -> str:
        return f"css:{site.name}:{group}"

    def js_url(self, site: Site | None = None, group: str = "common", *, link: str | None = None) -> str:
        if link is not None:
            return f"link:{link}"
        assert site is not None
        return f"js:{site.name}:{group}"


# ---------------------------------------------------------------------------
# url_filters
# ---------------------------------------------------------------------------


class TestUrlFilters:
    def test_image_arguments(self) -> None:
        hooks = RecordingHooks()
        filters = url_filters(hooks)

        filters["image_url"]("a.jpg", "800", 600, True)
        filters["image_url"]("b.jpg")
        filters["image_url"]("c.jpg", None, 200)

        assert hooks.images == [
            ImageRequest("a.jpg", 800, 600, True),
            ImageRequest("b.jpg", None, None, False),
            ImageRequest("c.jpg", None, 200, False),
        ]

    def test_asset_and_svg(self) -> None:
        filters = url_filters(RecordingHooks())
        assert filters["asset_url"]("x.mp4") == "asset:x.mp4"
        assert filters["svg_url"]("i.svg") == "svg:i.svg"

    def test_css(self) -> None:
        filters = url_filters(RecordingHooks())
        site = Site(name="base", path=Path("base"))
        assert filters["css_url"](site) == "css:base:common"
        assert filters["css_url"](site, "print") == "css:base:print"

    def test_js_site_is_bundle_string_is_link(self) -> None:
        filters = url_filters(RecordingHooks())
        site = Site(name="base", path=Path("base"))
        assert filters["js_url"](site, "print") == "js:base:print"
        assert filters["js_url"]("base/global/js/vendor.js") == "link:base/global/js/vendor.js"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_entity_id_for() -> None:
    assert entity_id_for("base/elements/e-image/e-image.html") == "base/elements/e-image"


def test_page_output_path(project: Path) -> None:
    page = FileSystemSites(project / "sites").get_by_id("base/pages/home")
    assert page is not None
    assert page_output_path(page, "${page}.html") == "home.html"
    assert page_output_path(page, "/${site}/${page}/index.html") == "base/home/index.html"


class TestScanReferences:
    def test_transitive(self, project: Path) -> None:
        sites = project / "sites"
        write(
            sites / "base/pages/home/home.html",
            '{% extends "base/layouts/l-main/l-main.html" %}\n'
            '{% include "base/elements/e-image/e-image.html" %}\n',
        )
        write(
            sites / "base/layouts/l-main/l-main.html",
            '{%- from "base/modules/m-teaser/m-teaser.html" import teaser %}\n',
        )

        renderer = KidaRenderer(FileSystemSites(sites))

        assert renderer.scan_references("base/pages/home/home.html") == [
            ("extends", "base/layouts/l-main/l-main.html"),
            ("include", "base/elements/e-image/e-image.html"),
            ("from", "base/modules/m-teaser/m-teaser.html"),
        ]

    def test_cycles_terminate(self, project: Path) -> None:
        sites = project / "sites"
        write(sites / "base/elements/e-a/e-a.html", '{% include "base/elements/e-b/e-b.html" %}')
        write(sites / "base/elements/e-b/e-b.html", '{% include "base/elements/e-a/e-a.html" %}')

        refs = KidaRenderer(FileSystemSites(sites)).scan_references("base/elements/e-a/e-a.html")

        assert len(refs) == 2

    def test_missing_template(self, project: Path) -> None:
        renderer = KidaRenderer(FileSystemSites(project / "sites"))
        assert renderer.scan_references("nope/nope.html") == []


# ---------------------------------------------------------------------------
# Rendering with Kida
# ---------------------------------------------------------------------------


class TestKidaRendering:
    def test_renders_pages_through_hooks(self, project: Path) -> None:
        pytest.importorskip("kida")
        sites = project / "sites"
        write(
            sites / "base/pages/home/home.html",
            '{% include "base/modules/m-teaser/m-teaser.html" %}'
            "<img src=\"{{ 'base/global/assets/images/hero.png' | image_url(32) }}\">"
            "<link href=\"{{ site | css_url('common') }}\">",
        )
        config = StaticConfig(root=project, copy_assets={})
        registry = AssetRegistry()
        namer = ContentAddressedNamer(resolve_settings(config, fixed_context()), registry)

        output = KidaRenderer(FileSystemSites(sites)).render("base/pages/home", namer, "${page}.html")

        (page,) = output.pages
        assert page.path == "home.html"
        assert page.source == "base/pages/home"
        (url,) = registry.images
        assert url in page.html
        assert "css/base-common.css" in page.html
        assert output.references.calls == ("base/pages/home", "base/modules/m-teaser")
