"""Content-addressed naming — URL hooks called while templates render.

Each hook derives a deterministic output filename from the identity of the
resource it is given, registers the resource for copying, and returns the
public URL to write into the HTML::

    image_url(ImageRequest("base/img/hero.jpg", 800, 600, False))
        -> "images/hero_3f1c...9a.jpg"
    asset_url("base/media/intro.mp4")
        -> "videos/intro_b07e...41.mp4"
    svg_url("base/icons/arrow.svg")
        -> "assets/arrow_5d2a...c3.svg#icon"
    css_url(site, "common")
        -> "css/base-common.css"

Equal inputs always give equal names, so a resource referenced by many
pages is written once.  Bundles are named structurally (site + group) and
are never registered: the bundlers write them directly.
"""

from __future__ import annotations

import hashlib
import re
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from pawprint.export.registry import AssetRecord

if TYPE_CHECKING:
    from pawprint._types import AssetKind, PrefixKind, PublicUrl
    from pawprint.export.registry import AssetRegistry
    from pawprint.export.settings import ExportSettings
    from pawprint.host.protocols import ImageRequest, SiteLike

# Extensions routed to the video prefixes by asset_url
VIDEO_SUFFIXES = frozenset({".mp4", ".webm", ".ogg"})

# Fragment appended to svg URLs so templates can reference the sprite symbol
SVG_FRAGMENT = "#icon"

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def content_hash(*parts: str) -> str:
    """Return the 128-bit hex digest of *parts*.

    Parts are NUL-separated so ``("a", "12")`` and ``("a1", "2")`` differ.
    """
    digest = hashlib.md5(usedforsecurity=False)
    digest.update("\0".join(parts).encode("utf-8"))
    return digest.hexdigest()


def strip_fragment(value: str) -> str:
    """Drop a URL fragment (``#icon``) so *value* can be used as a file path."""
    return value.partition("#")[0]


def slug(name: str) -> str:
    """Lower-case *name* and collapse non-alphanumeric runs into ``-``."""
    return _NON_SLUG.sub("-", name.lower()).strip("-")


def hashed_filename(source: str, digest: str, suffix: str | None = None) -> str:
    """``base/img/hero.min.jpg`` + digest -> ``hero_<digest>.jpg``.

    The stem is the basename up to its first dot; the suffix defaults to the
    source's last extension.
    """
    path = PurePosixPath(strip_fragment(source))
    stem = path.name.split(".", 1)[0]
    return f"{stem}_{digest}{path.suffix if suffix is None else suffix}"


class ContentAddressedNamer:
    """URL hooks bound to one export run's settings and registry.

    Args:
        settings: Resolved per-kind prefixes for the run.
        registry: Registry that receives every named resource.

    """

    __slots__ = ("_registry", "_settings")

    def __init__(self, settings: ExportSettings, registry: AssetRegistry) -> None:
        self._settings = settings
        self._registry = registry

    def image_url(self, request: ImageRequest) -> PublicUrl:
        """Name a (possibly resized) image.

        The hash covers path, width, height and the forced-crop flag, in
        that order, so every distinct rendition gets its own file.
        """
        identity = (
            request.path,
            "" if request.width is None else str(request.width),
            "" if request.height is None else str(request.height),
            "true" if request.forced else "false",
        )
        record = self._register(
            "image", "image", request.path, identity,
            width=request.width, height=request.height, forced=request.forced,
        )
        return record.public_url

    def asset_url(self, path: str) -> PublicUrl:
        """Name a video (``.mp4``, ``.webm``, ``.ogg``) or generic asset."""
        suffix = PurePosixPath(strip_fragment(path)).suffix.lower()
        if suffix in VIDEO_SUFFIXES:
            return self._register("video", "video", path, (path,)).public_url
        return self._register("asset", "asset", path, (path,)).public_url

    def svg_url(self, path: str) -> PublicUrl:
        """Name an svg sprite; the URL always ends in ``#icon``."""
        record = self._register(
            "svg", "svg", path, (path,), suffix=".svg", fragment=SVG_FRAGMENT,
        )
        return record.public_url

    def css_url(self, site: SiteLike, group: str = "common") -> PublicUrl:
        """URL of the stylesheet bundle for *site* and *group*."""
        return self.bundle_url("css", site, group)

    def js_url(
        self,
        site: SiteLike | None = None,
        group: str = "common",
        *,
        link: str | None = None,
    ) -> PublicUrl:
        """URL of a script bundle, or of an individually linked script.

        Linked scripts are hashed and registered with the assets so the
        asset copy stage picks them up.  Bundles are not registered.
        """
        if link is not None:
            record = self._register("script-link", "js", link, (link,), suffix=".js")
            return record.public_url
        if site is None:
            msg = "js_url needs either a site (bundle) or a link"
            raise ValueError(msg)
        return self.bundle_url("js", site, group)

    def bundle_url(self, kind: PrefixKind, site: SiteLike, group: str) -> PublicUrl:
        return f"{self._settings.url(kind)}{bundle_filename(site, group, kind)}"

    def _register(
        self,
        kind: AssetKind,
        prefix_kind: PrefixKind,
        source: str,
        identity: tuple[str, ...],
        *,
        suffix: str | None = None,
        fragment: str = "",
        width: int | None = None,
        height: int | None = None,
        forced: bool = False,
    ) -> AssetRecord:
        digest = content_hash(*identity)
        output_file = hashed_filename(source, digest, suffix) + fragment
        prefixes = self._settings[prefix_kind]
        record = AssetRecord(
            kind=kind,
            source=source,
            source_identity=identity,
            content_hash=digest,
            output_file=output_file,
            output_path=prefixes.directory + output_file,
            public_url=prefixes.url + output_file,
            width=width,
            height=height,
            forced=forced,
        )
        self._registry.add(record)
        return record


def bundle_filename(site: SiteLike, group: str, kind: PrefixKind) -> str:
    """``<site-slug>-<group>.<kind>`` — structural, never hashed."""
    return f"{slug(site.name)}-{group}.{kind}"
