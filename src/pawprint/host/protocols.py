"""Collaborator contracts for the export pipeline.

The pipeline only talks to these protocols.  :mod:`pawprint.host` ships
filesystem-backed implementations; tests and embedding applications can
pass their own.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pawprint._types import EntityId, PublicUrl


# ---------------------------------------------------------------------------
# Data exchanged with collaborators
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ImageRequest:
    """An image reference as written in a template.

    Attributes:
        path: Source image, relative to the sites directory.
        width: Requested width in pixels, *None* to keep the original.
        height: Requested height in pixels, *None* to keep the original.
        forced: Crop to exactly ``width`` x ``height`` instead of fitting.

    """

    path: str
    width: int | None = None
    height: int | None = None
    forced: bool = False


@dataclass(frozen=True, slots=True)
class RenderedPage:
    """One rendered page, not yet written.

    Attributes:
        path: Output path relative to the export root (``index.html``).
        html: Rendered markup.
        source: Id of the page entity it was rendered from.

    """

    path: str
    html: str
    source: str = ""


@dataclass(frozen=True, slots=True)
class EntityReferences:
    """Entity ids touched while rendering.

    Attributes:
        calls: Ids used directly (the page itself, includes, imports).
        extends: Ids reached through template inheritance.

    """

    calls: tuple[EntityId, ...] = ()
    extends: tuple[EntityId, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderOutput:
    pages: tuple[RenderedPage, ...] = ()
    references: EntityReferences = field(default_factory=EntityReferences)


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A file read by :func:`~pawprint.host.files.read_files`.

    Attributes:
        relative_path: Path relative to the read base, POSIX separators.
        data: File contents.

    """

    relative_path: str
    data: bytes


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class SiteLike(Protocol):
    @property
    def name(self) -> str: ...


class EntityLike(Protocol):
    @property
    def id(self) -> EntityId: ...


@runtime_checkable
class UrlHooks(Protocol):
    """Naming callbacks a renderer calls for every resource reference."""

    def image_url(self, request: ImageRequest) -> PublicUrl: ...

    def asset_url(self, path: str) -> PublicUrl: ...

    def svg_url(self, path: str) -> PublicUrl: ...

    def css_url(self, site: SiteLike, group: str = "common") -> PublicUrl: ...

    def js_url(
        self,
        site: SiteLike | None = None,
        group: str = "common",
        *,
        link: str | None = None,
    ) -> PublicUrl: ...


class Renderer(Protocol):
    def render(
        self,
        query: str,
        hooks: UrlHooks,
        page_path_template: str,
    ) -> RenderOutput: ...


class Beautifier(Protocol):
    def beautify(self, pages: Sequence[RenderedPage]) -> list[RenderedPage]: ...


class Bundler(Protocol):
    """Stylesheet or script bundler.

    ``bundle_template`` is a destination-relative path containing
    ``${site}`` and ``${group}``.  Returns the written files.
    """

    def bundle(
        self,
        query: str,
        entities: Sequence[EntityLike],
        destination: Path,
        bundle_template: str,
    ) -> list[Path]: ...


class ImageResizer(Protocol):
    def resize(
        self,
        source: Path,
        width: int | None,
        height: int | None,
        forced: bool,
    ) -> Path: ...


class EntityRepository(Protocol):
    def get_by_id(self, entity_id: EntityId) -> EntityLike | None: ...


type ReadFiles = Callable[[Path, Path], list[SourceFile]]
type WriteFiles = Callable[[Sequence[SourceFile], Path], list[Path]]
