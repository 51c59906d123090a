"""Export settings — per-kind output directories and public URL prefixes.

Every asset kind has a directory template and a URL template in the
configuration.  They are expanded once per export run against a
:class:`TemplateContext` (``${date}``, ``${gitHash}``, ``${gitBranch}``):

    image_directory_template = "images/${date}"   ->  "images/2026-10-19/"
    image_url_template       = ""                 ->  "images/2026-10-19/"

An empty URL template mirrors the directory, so site-relative URLs follow
the disk layout.  Every non-empty value ends in ``/`` because naming code
concatenates prefix + filename directly.

Directories are always relative to the export root, so a leading ``/`` is
dropped there.  A mirrored URL keeps it: ``css_directory_template = "/css"``
writes to ``css/`` and links as ``/css/``.
"""

from __future__ import annotations

import datetime as _dt
import functools
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from pawprint import vcs
from pawprint.paths import PlaceholderValue, expand

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pawprint._types import PrefixKind
    from pawprint.config import StaticConfig

PREFIX_KINDS: tuple[PrefixKind, ...] = ("image", "video", "asset", "svg", "css", "js")


@dataclass(frozen=True, slots=True)
class KindPrefixes:
    """Resolved prefixes for one asset kind.

    Attributes:
        directory: Output directory relative to the export root (``""`` or
            slash-terminated).
        url: Public URL prefix written into HTML (``""`` or slash-terminated).

    """

    directory: str
    url: str


@dataclass(frozen=True, slots=True)
class TemplateContext:
    """Values available to directory and URL templates.

    ``git_hash`` and ``git_branch`` may be callables; they are only invoked
    when a template references them.
    """

    date: str
    git_hash: PlaceholderValue
    git_branch: PlaceholderValue

    @classmethod
    def for_project(cls, root: Path, today: _dt.date | None = None) -> TemplateContext:
        """Build a context whose git values are read lazily from *root*."""
        day = today or _dt.date.today()
        return cls(
            date=day.isoformat(),
            git_hash=functools.cache(lambda: vcs.revision_hash(root)),
            git_branch=functools.cache(lambda: vcs.branch_name(root)),
        )

    def as_mapping(self) -> dict[str, PlaceholderValue]:
        return {
            "date": self.date,
            "gitHash": self.git_hash,
            "gitBranch": self.git_branch,
        }


@dataclass(frozen=True, slots=True)
class ExportSettings:
    """Resolved prefixes for every kind, fixed for one export run."""

    prefixes: Mapping[PrefixKind, KindPrefixes]

    def __getitem__(self, kind: PrefixKind) -> KindPrefixes:
        return self.prefixes[kind]

    def directory(self, kind: PrefixKind) -> str:
        return self.prefixes[kind].directory

    def url(self, kind: PrefixKind) -> str:
        return self.prefixes[kind].url


def resolve_settings(config: StaticConfig, context: TemplateContext) -> ExportSettings:
    """Expand all per-kind templates of *config*.

    Raises:
        ConfigError: On unknown placeholders, or when a template references
            git metadata that cannot be read.

    """
    values = context.as_mapping()
    prefixes: dict[PrefixKind, KindPrefixes] = {}
    for kind in PREFIX_KINDS:
        directory_template: str = getattr(config, f"{kind}_directory_template")
        url_template: str = getattr(config, f"{kind}_url_template")

        directory = _with_slash(expand(directory_template.strip(), values))
        url = _with_slash(expand(url_template.strip(), values)) if url_template.strip() else directory
        if config.use_absolute_paths:
            url = _absolute(config.prefix_path, url)

        prefixes[kind] = KindPrefixes(directory=directory.lstrip("/"), url=url)
    return ExportSettings(prefixes=MappingProxyType(prefixes))


def _with_slash(value: str) -> str:
    if not value or value.endswith("/"):
        return value
    return value + "/"


def _absolute(prefix: str, url: str) -> str:
    if "://" in url:
        return url
    return prefix.rstrip("/") + "/" + url.lstrip("/")
