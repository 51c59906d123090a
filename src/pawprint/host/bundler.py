"""Concatenating bundler for stylesheets and scripts.

For every (site, group) pair among the given entities, the entity sources
of that group are concatenated in entity order and written to the bundle
template (``css/${site}-${group}.css``).  No compilation happens: sources
are expected to be plain CSS / browser-ready JS.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from pawprint.export.naming import slug
from pawprint.host.sites import Entity, Site, match_site
from pawprint.paths import expand

if TYPE_CHECKING:
    from pawprint.host.protocols import EntityLike


class ConcatBundler:
    """Bundles ``<entity><ext>`` / ``<entity>.<group><ext>`` sources.

    Args:
        extension: Source extension, ``".css"`` or ``".js"``.

    """

    __slots__ = ("_extension",)

    def __init__(self, extension: str) -> None:
        self._extension = extension

    @property
    def extension(self) -> str:
        return self._extension

    def bundle(
        self,
        query: str,
        entities: Sequence[EntityLike],
        destination: Path,
        bundle_template: str,
    ) -> list[Path]:
        bundles: dict[tuple[Site, str], list[tuple[str, Path]]] = {}
        for entity in entities:
            if not isinstance(entity, Entity) or not match_site(query, entity.site):
                continue
            for group, paths in entity.sources(self._extension).items():
                bundles.setdefault((entity.site, group), []).extend(
                    (entity.id, path) for path in paths
                )

        written: list[Path] = []
        for (site, group), sources in bundles.items():
            relative = expand(bundle_template, {"site": slug(site.name), "group": group})
            target = destination / relative.lstrip("/")
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self._concat(sources), encoding="utf-8")
            written.append(target)
        return written

    @staticmethod
    def _concat(sources: list[tuple[str, Path]]) -> str:
        chunks = [
            f"/* {entity_id} */\n{path.read_text(encoding='utf-8').rstrip()}\n"
            for entity_id, path in sources
        ]
        return "\n".join(chunks)
