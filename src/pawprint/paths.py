"""Path resolution — ``${placeholder}`` expansion and root-relative paths.

Configuration values such as ``export_path = "${cache}/static/export"`` are
templates.  :func:`expand` fills in the placeholders; :class:`PathResolver`
adds the project-level placeholders and anchors relative results at the
project root.

Placeholder values may be plain strings or zero-argument callables.  Callables
are only invoked when the template actually references them, which keeps
expensive lookups (git metadata) off the common path.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from pawprint._errors import ConfigError

if TYPE_CHECKING:
    from pawprint.config import StaticConfig

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

type PlaceholderValue = str | Callable[[], str]


def placeholders(template: str) -> frozenset[str]:
    """Return the placeholder names referenced by *template*."""
    return frozenset(_PLACEHOLDER.findall(template))


def expand(template: str, context: Mapping[str, PlaceholderValue]) -> str:
    """Replace every ``${name}`` in *template* with its context value.

    Raises:
        ConfigError: If *template* references a name missing from *context*.

    """
    resolved: dict[str, str] = {}
    for name in placeholders(template):
        if name not in context:
            known = ", ".join(sorted(context)) or "none"
            msg = f"Unknown placeholder ${{{name}}} in {template!r} (known: {known})"
            raise ConfigError(msg)
        value = context[name]
        resolved[name] = value() if callable(value) else value
    return _PLACEHOLDER.sub(lambda m: resolved[m.group(1)], template)


class PathResolver:
    """Resolves path templates against the project layout.

    Known placeholders: ``${root}``, ``${sites}`` and ``${cache}``.

    Args:
        config: Layered static configuration.

    """

    __slots__ = ("_config",)

    def __init__(self, config: StaticConfig) -> None:
        self._config = config

    @property
    def root(self) -> Path:
        return self._config.root

    @property
    def sites_path(self) -> Path:
        return self._config.sites_path

    @property
    def cache_path(self) -> Path:
        return self._config.cache_path

    def resolve(self, template: str | Path) -> Path:
        """Expand *template* and return an absolute path.

        Relative results are anchored at the project root.

        Raises:
            ConfigError: On an empty template or an unknown placeholder.

        """
        text = str(template).strip()
        if not text:
            msg = "Cannot resolve an empty path"
            raise ConfigError(msg)
        expanded = Path(expand(text, {
            "root": str(self.root),
            "sites": str(self.sites_path),
            "cache": str(self.cache_path),
        }))
        if expanded.is_absolute():
            return expanded
        return self.root / expanded
