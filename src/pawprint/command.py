"""The ``export`` command — dispatch contract around the export pipeline.

A host calls ``dispatch(action, parameters)``; the only action is
``static``::

    command.dispatch("static", {"query": "/base", "destination": "public"})

Parameters:
    query: Selects the sites/pages to export (default ``*``).
    destination: Overrides the configured ``export_path``.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pawprint._errors import ConfigError

if TYPE_CHECKING:
    from pawprint.config import StaticConfig
    from pawprint.export.pipeline import ExportPipeline, ExportResult
    from pawprint.paths import PathResolver

DEFAULT_QUERY = "*"


class StaticExportCommand:
    """Exports templates as static webpages incl. used images and assets.

    Holds no per-run state: every :meth:`export` call gets its own registry
    and settings, so one instance may serve overlapping calls.

    Args:
        config: Layered static configuration.
        paths: Resolves the destination path template.
        pipeline: The export pipeline, wired with its collaborators.

    """

    name = "export"
    actions = ("static",)

    def __init__(
        self,
        config: StaticConfig,
        *,
        paths: PathResolver,
        pipeline: ExportPipeline,
    ) -> None:
        self._config = config
        self._paths = paths
        self._pipeline = pipeline

    @property
    def help(self) -> dict[str, Any]:
        """Command-line help metadata for the host's help screen."""
        return {
            "name": self.name,
            "description": "Generates static exports from modules incl. used images and assets",
            "actions": [
                {
                    "name": "static",
                    "description": "Exports templates as static webpages",
                    "options": [
                        {
                            "name": "query",
                            "type": "inline",
                            "optional": True,
                            "default": DEFAULT_QUERY,
                            "description": "Query for sites to use e.g. /base",
                        },
                        {
                            "name": "destination",
                            "type": "named",
                            "value": "path",
                            "optional": True,
                            "default": "",
                            "description": "Define a base folder where html files are written to",
                        },
                    ],
                },
            ],
        }

    def dispatch(
        self,
        action: str,
        parameters: Mapping[str, Any] | None = None,
    ) -> ExportResult:
        """Run *action* with *parameters*.

        Raises:
            ConfigError: For an unknown action.

        """
        if action != "static":
            msg = f"Unknown action {action!r} for command {self.name!r} (expected: static)"
            raise ConfigError(msg)
        return self.export(parameters)

    def export(self, parameters: Mapping[str, Any] | None = None) -> ExportResult:
        """Export the pages matching ``parameters["query"]``."""
        params = parameters or {}
        query = str(params.get("query") or DEFAULT_QUERY)
        destination = self.resolve_destination(params.get("destination"))
        return self._pipeline.run(query, destination)

    def resolve_destination(self, destination: str | Path | None = None) -> Path:
        """The export root: *destination* if given, else ``config.export_path``."""
        return self._paths.resolve(destination or self._config.export_path)
