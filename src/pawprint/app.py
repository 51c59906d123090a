"""Pawprint application — wires configuration and collaborators together.

:func:`create_command` composes the filesystem-backed collaborators into a
:class:`StaticExportCommand`; :func:`export_static` is the one-call entry
point used by the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pawprint.command import DEFAULT_QUERY, StaticExportCommand
from pawprint.config_loader import load_config
from pawprint.export.pipeline import ExportPipeline
from pawprint.host.beautify import SoupBeautifier
from pawprint.host.bundler import ConcatBundler
from pawprint.host.files import read_files, write_files
from pawprint.host.images import PillowImageResizer
from pawprint.host.renderer import KidaRenderer
from pawprint.host.sites import FileSystemSites
from pawprint.paths import PathResolver

if TYPE_CHECKING:
    from pawprint.config import StaticConfig
    from pawprint.export.pipeline import ExportResult
    from pawprint.observability.collector import ExportCollector


def create_command(
    config: StaticConfig,
    *,
    collector: ExportCollector | None = None,
) -> StaticExportCommand:
    """Build the export command over the site tree of *config*."""
    paths = PathResolver(config)
    sites = FileSystemSites(config.sites_path)
    pipeline = ExportPipeline(
        config,
        paths=paths,
        entities=sites,
        renderer=KidaRenderer(sites),
        style_bundler=ConcatBundler(".css"),
        script_bundler=ConcatBundler(".js"),
        image_resizer=PillowImageResizer(config.cache_path),
        read_files=read_files,
        write_files=write_files,
        beautifier=SoupBeautifier(),
        collector=collector,
    )
    return StaticExportCommand(config, paths=paths, pipeline=pipeline)


def export_static(
    root: str | Path = ".",
    query: str = DEFAULT_QUERY,
    *,
    destination: str | Path | None = None,
    build: str | None = None,
    quiet: bool = False,
    **overrides: object,
) -> ExportResult:
    """Export the pages matching *query* as static files.

    Args:
        root: Project root containing ``pawprint.yaml`` and the sites directory.
        query: Site/page selector (``*``, ``base``, ``base/pages/*``).
        destination: Overrides the configured ``export_path``.
        build: Build layer of the config file to apply.
        quiet: Suppress the header and summary on stderr.
        **overrides: Override StaticConfig fields.

    Raises:
        PawprintError: If configuration, rendering, or copying fails.

    """
    from pawprint.observability import EventLog, ExportCollector
    from pawprint.summary import print_header, print_summary

    config = load_config(Path(root), build=build, **overrides)
    command = create_command(config, collector=ExportCollector(EventLog()))

    if not quiet:
        print_header(config, query)
    result = command.dispatch("static", {"query": query, "destination": destination})
    if not quiet:
        print_summary(result)
    return result
