"""Asset registry — resources discovered while rendering one export run.

Naming hooks register an :class:`AssetRecord` for every image, video,
generic asset, svg sprite, or script link a page references.  The copy
stages drain the registry afterwards.  Records are keyed by public URL;
registering the same URL again overwrites with an equal record.

A registry lives exactly as long as one export run.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawprint._types import AssetKind, PublicUrl


@dataclass(frozen=True, slots=True)
class AssetRecord:
    """A single resource referenced by rendered HTML.

    Attributes:
        kind: Resource category; decides which copy stage handles it.
        source: Source path relative to the sites directory, as written in
            the template (svg sources may carry a ``#icon`` fragment).
        source_identity: The values the content hash was computed over.
        content_hash: 32-character lowercase hex digest of ``source_identity``.
        output_file: ``<stem>_<hash><suffix>``.
        output_path: Directory prefix + output file, relative to the export root.
        public_url: URL prefix + output file, as written into HTML.
        width: Requested image width (images only).
        height: Requested image height (images only).
        forced: Crop to exactly ``width`` x ``height`` (images only).

    """

    kind: AssetKind
    source: str
    source_identity: tuple[str, ...]
    content_hash: str
    output_file: str
    output_path: str
    public_url: PublicUrl
    width: int | None = None
    height: int | None = None
    forced: bool = False


@dataclass(slots=True)
class AssetRegistry:
    """Three keyed maps of records: images, assets and svgs.

    ``assets`` holds videos, generic assets and script links since they are
    all copied verbatim from the sites directory.
    """

    images: dict[PublicUrl, AssetRecord] = field(default_factory=dict)
    assets: dict[PublicUrl, AssetRecord] = field(default_factory=dict)
    svgs: dict[PublicUrl, AssetRecord] = field(default_factory=dict)

    def add(self, record: AssetRecord) -> None:
        """Register *record* under its public URL."""
        self._map_for(record.kind)[record.public_url] = record

    def clear(self) -> None:
        self.images.clear()
        self.assets.clear()
        self.svgs.clear()

    def records(self) -> tuple[AssetRecord, ...]:
        """Snapshot of every registered record."""
        return (*self.images.values(), *self.assets.values(), *self.svgs.values())

    def _map_for(self, kind: AssetKind) -> dict[PublicUrl, AssetRecord]:
        if kind == "image":
            return self.images
        if kind == "svg":
            return self.svgs
        return self.assets

    def __len__(self) -> int:
        return len(self.images) + len(self.assets) + len(self.svgs)

    def __iter__(self) -> Iterator[AssetRecord]:
        return iter(self.records())
