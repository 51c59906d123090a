"""Filesystem site tree — sites, entities, and query matching.

Layout::

    sites/
      base/                          site "base"
        elements/                    category
          e-image/                   entity "base/elements/e-image"
            e-image.html             template
            e-image.css              stylesheet, group "common"
            e-image.print.css        stylesheet, group "print"
            e-image.js               script, group "common"
        pages/
          home/                      page entity "base/pages/home"
            home.html

Entities in the ``pages`` category are the pages an export renders.

Queries select entities by id:

    ``*`` or ``""``         everything
    ``base`` / ``/base``    every entity of site ``base``
    ``base/pages/*``        glob over entity ids
"""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath

PAGES_CATEGORY = "pages"
DEFAULT_GROUP = "common"


@dataclass(frozen=True, slots=True)
class Site:
    name: str
    path: Path


@dataclass(frozen=True, slots=True)
class Entity:
    """A template directory below a site.

    Attributes:
        id: ``<site>/<category>/<name>``.
        site: Owning site.
        category: Category directory name (``elements``, ``pages``, ...).
        name: Entity directory name.
        path: Absolute path to the entity directory.

    """

    id: str
    site: Site
    category: str
    name: str
    path: Path

    @property
    def template_name(self) -> str:
        """Template name relative to the sites directory."""
        return f"{self.id}/{self.name}.html"

    @property
    def is_page(self) -> bool:
        return self.category == PAGES_CATEGORY

    def sources(self, extension: str) -> dict[str, list[Path]]:
        """Stylesheet or script files of this entity, keyed by group.

        ``<name><ext>`` belongs to the ``common`` group and
        ``<name>.<group><ext>`` to ``<group>``.
        """
        groups: dict[str, list[Path]] = {}
        for path in sorted(self.path.glob(f"{self.name}*{extension}")):
            if not path.is_file():
                continue
            middle = path.name[len(self.name):-len(extension)]
            if middle == "":
                group = DEFAULT_GROUP
            elif middle.startswith(".") and "." not in middle[1:]:
                group = middle[1:]
            else:
                continue
            groups.setdefault(group, []).append(path)
        return groups


def match_query(query: str, entity_id: str) -> bool:
    """Return True if *entity_id* is selected by *query*."""
    pattern = query.strip().strip("/")
    if pattern in ("", "*"):
        return True
    if entity_id == pattern or entity_id.startswith(pattern + "/"):
        return True
    return fnmatchcase(entity_id, pattern)


def match_site(query: str, site: Site) -> bool:
    """Return True if *query* can select anything in *site*."""
    pattern = query.strip().strip("/")
    if pattern in ("", "*"):
        return True
    return fnmatchcase(site.name, pattern.split("/", 1)[0])


class FileSystemSites:
    """Entity repository over a sites directory.

    Args:
        path: The sites directory.

    """

    __slots__ = ("_path",)

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def sites(self) -> list[Site]:
        if not self._path.is_dir():
            return []
        return [
            Site(name=child.name, path=child)
            for child in sorted(self._path.iterdir())
            if child.is_dir() and not child.name.startswith((".", "_"))
        ]

    def entities(self, query: str = "*") -> list[Entity]:
        """Every entity matching *query*, in site/category/name order."""
        results: list[Entity] = []
        for site in self.sites():
            for category in _subdirs(site.path):
                for entity_dir in _subdirs(category):
                    entity = self._entity(site, category.name, entity_dir)
                    if entity is not None and match_query(query, entity.id):
                        results.append(entity)
        return results

    def pages(self, query: str = "*") -> list[Entity]:
        return [entity for entity in self.entities(query) if entity.is_page]

    def get_by_id(self, entity_id: str) -> Entity | None:
        """Look up ``<site>/<category>/<name>``; *None* if it doesn't exist."""
        parts = PurePosixPath(entity_id.strip("/")).parts
        if len(parts) != 3 or any(part in ("..", ".") for part in parts):
            return None
        site_name, category, name = parts
        site_path = self._path / site_name
        if not site_path.is_dir():
            return None
        return self._entity(Site(name=site_name, path=site_path), category, site_path / category / name)

    @staticmethod
    def _entity(site: Site, category: str, entity_dir: Path) -> Entity | None:
        if not (entity_dir / f"{entity_dir.name}.html").is_file():
            return None
        return Entity(
            id=f"{site.name}/{category}/{entity_dir.name}",
            site=site,
            category=category,
            name=entity_dir.name,
            path=entity_dir,
        )


def _subdirs(path: Path) -> list[Path]:
    return [
        child
        for child in sorted(path.iterdir())
        if child.is_dir() and not child.name.startswith((".", "_"))
    ]
