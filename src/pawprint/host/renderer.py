"""Page renderer — Kida templates with URL-rewriting filters.

Every page entity matching the query is rendered with the globals ``site``
and ``page``.  Templates reference resources through filters that forward
to the run's URL hooks::

    <img src="{{ 'base/global/assets/images/hero.jpg' | image_url(800, 450, true) }}">
    <video src="{{ 'base/global/assets/videos/intro.mp4' | asset_url }}"></video>
    <svg><use href="{{ 'base/global/assets/icons/arrow.svg' | svg_url }}"></use></svg>
    <link rel="stylesheet" href="{{ site | css_url('common') }}">
    <script src="{{ site | js_url('common') }}"></script>
    <script src="{{ 'base/global/js/vendor.js' | js_url }}"></script>

Entity references are collected from ``{% extends %}``, ``{% include %}``,
``{% import %}`` and ``{% from ... import %}`` tags, following referenced
templates transitively.

Requires the Kida template engine (``pip install pawprint[templates]``).
"""

from __future__ import annotations

import re
from collections import deque
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

from pawprint._errors import ConfigError, RenderError
from pawprint.export.naming import slug
from pawprint.host.protocols import (
    EntityReferences,
    ImageRequest,
    RenderedPage,
    RenderOutput,
)
from pawprint.host.sites import Entity, Site
from pawprint.paths import expand

if TYPE_CHECKING:
    from pawprint.host.protocols import UrlHooks
    from pawprint.host.sites import FileSystemSites

_REFERENCE_TAG = re.compile(
    r"""\{%-?\s*(extends|include|import|from)\s+["']([^"']+)["']""",
)


class KidaRenderer:
    """Renders page entities of a :class:`FileSystemSites` tree.

    Args:
        sites: The site tree; its directory is the template search path.
        autoescape: Enable Kida autoescaping.

    """

    __slots__ = ("_autoescape", "_sites")

    def __init__(self, sites: FileSystemSites, *, autoescape: bool = True) -> None:
        self._sites = sites
        self._autoescape = autoescape

    def render(
        self,
        query: str,
        hooks: UrlHooks,
        page_path_template: str,
    ) -> RenderOutput:
        env = self._create_environment(hooks)
        pages: list[RenderedPage] = []
        calls: dict[str, None] = {}
        extends: dict[str, None] = {}

        for page in self._sites.pages(query):
            try:
                template = env.get_template(page.template_name)
                html = template.render(site=page.site, page=page)
            except Exception as exc:
                msg = f"Failed to render page {page.id!r} (template={page.template_name!r}): {exc}"
                raise RenderError(msg) from exc

            pages.append(RenderedPage(
                path=page_output_path(page, page_path_template),
                html=html,
                source=page.id,
            ))
            calls[page.id] = None
            for kind, name in self.scan_references(page.template_name):
                target = extends if kind == "extends" else calls
                target[entity_id_for(name)] = None

        return RenderOutput(
            pages=tuple(pages),
            references=EntityReferences(calls=tuple(calls), extends=tuple(extends)),
        )

    def scan_references(self, template_name: str) -> list[tuple[str, str]]:
        """Return ``(tag, template)`` pairs reachable from *template_name*."""
        found: list[tuple[str, str]] = []
        seen = {template_name}
        queue = deque([template_name])
        while queue:
            source = self._read_template(queue.popleft())
            if source is None:
                continue
            for tag, name in _REFERENCE_TAG.findall(source):
                found.append((tag, name))
                if name not in seen:
                    seen.add(name)
                    queue.append(name)
        return found

    def _read_template(self, name: str) -> str | None:
        path = self._sites.path / name
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def _create_environment(self, hooks: UrlHooks) -> Any:
        try:
            from kida import Environment, FileSystemLoader
        except ImportError as exc:
            msg = (
                "Rendering requires the Kida template engine. "
                "Install with: pip install pawprint[templates]"
            )
            raise ConfigError(msg) from exc

        env = Environment(
            loader=FileSystemLoader([self._sites.path]),
            autoescape=self._autoescape,
        )
        env.update_filters(url_filters(hooks))
        return env


def url_filters(hooks: UrlHooks) -> dict[str, Any]:
    """Template filters that forward to *hooks*."""

    def image_url(
        value: object,
        width: object = None,
        height: object = None,
        forced: object = False,
    ) -> str:
        return hooks.image_url(ImageRequest(
            path=str(value),
            width=_dimension(width),
            height=_dimension(height),
            forced=bool(forced),
        ))

    def asset_url(value: object) -> str:
        return hooks.asset_url(str(value))

    def svg_url(value: object) -> str:
        return hooks.svg_url(str(value))

    def css_url(value: Site, group: str = "common") -> str:
        return hooks.css_url(value, group)

    def js_url(value: object, group: str = "common") -> str:
        if isinstance(value, Site):
            return hooks.js_url(value, group)
        return hooks.js_url(link=str(value))

    return {
        "image_url": image_url,
        "asset_url": asset_url,
        "svg_url": svg_url,
        "css_url": css_url,
        "js_url": js_url,
    }


def page_output_path(page: Entity, template: str) -> str:
    """Expand the page path template (``${site}``, ``${page}``)."""
    return expand(template, {"site": slug(page.site.name), "page": page.name}).lstrip("/")


def entity_id_for(template_name: str) -> str:
    """``base/elements/e-image/e-image.html`` -> ``base/elements/e-image``."""
    return PurePosixPath(template_name).parent.as_posix()


def _dimension(value: object) -> int | None:
    if value is None or value == "" or value is False:
        return None
    return int(value)  # type: ignore[call-overload]
