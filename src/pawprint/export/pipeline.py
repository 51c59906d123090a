"""Export pipeline — render pages, then bundle and copy what they reference.

Stages run strictly in order, each one finishing (including its internal
parallel copies) before the next starts:

    1. resolve    expand per-kind directory/url templates
    2. reset      empty the run's asset registry
    3. render     render matching pages through the URL hooks
       beautify   pretty-print HTML (only with ``beautify: true``)
       write      write pages below the destination
    4. entities   resolve referenced entity ids; unknown ids are skipped
    5. styles     bundle stylesheets for the referenced entities
    6. scripts    bundle scripts for the referenced entities
    7. images     resize and copy registered images
    8. assets     copy registered videos, assets and script links
    9. svgs       copy registered svg sprites (``#icon`` stripped)
   10. static     copy the configured ``copy_assets`` globs

A failing stage aborts the run.  Files written by earlier stages stay on
disk.
"""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any, Literal

from pawprint._errors import (
    ConfigError,
    ExportError,
    ExportIOError,
    PawprintError,
    RenderError,
    ResourceResolutionError,
)
from pawprint.export.copying import copy_file, run_bounded
from pawprint.export.naming import ContentAddressedNamer, strip_fragment
from pawprint.export.registry import AssetRecord, AssetRegistry
from pawprint.export.settings import ExportSettings, TemplateContext, resolve_settings
from pawprint.host.protocols import EntityReferences, RenderedPage, SourceFile

if TYPE_CHECKING:
    from pawprint.config import StaticConfig
    from pawprint.host.protocols import (
        Beautifier,
        Bundler,
        EntityLike,
        EntityRepository,
        ImageResizer,
        ReadFiles,
        Renderer,
        WriteFiles,
    )
    from pawprint.observability.collector import ExportCollector
    from pawprint.observability.events import BuildEventKind
    from pawprint.paths import PathResolver

type SourceType = Literal["page", "style", "script", "image", "asset", "svg", "static"]

_GLOB_CHARS = frozenset("*?[")


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        source_path: Logical source (entity id, site-relative path, or glob match).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to produce this file.

    """

    source_path: str
    output_path: Path
    source_type: SourceType
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of a full static export.

    Attributes:
        files: All files written during export.
        total_pages: Number of pages written.
        total_assets: Number of bundles, images, assets and svgs written.
        skipped_entities: Referenced entity ids that could not be resolved.
        duration_ms: Total wall-clock time for the export.
        output_dir: Absolute path to the export root.
        settings: The prefixes resolved for this run.
        records: Every resource the pages referenced.

    """

    files: tuple[ExportedFile, ...]
    total_pages: int
    total_assets: int
    skipped_entities: tuple[str, ...]
    duration_ms: float
    output_dir: Path
    settings: ExportSettings
    records: tuple[AssetRecord, ...]


@dataclass(slots=True)
class ExportRun:
    """State owned by one export run.

    Created fresh for every run, so concurrent runs never share registries
    or settings.
    """

    query: str
    destination: Path
    settings: ExportSettings | None = None
    registry: AssetRegistry = field(default_factory=AssetRegistry)
    references: EntityReferences = field(default_factory=EntityReferences)
    entities: list[EntityLike] = field(default_factory=list)
    skipped_entities: list[str] = field(default_factory=list)
    files: list[ExportedFile] = field(default_factory=list)

    def require_settings(self) -> ExportSettings:
        if self.settings is None:
            msg = "Export settings used before the resolve stage ran"
            raise ExportError(msg)
        return self.settings


@dataclass(frozen=True, slots=True)
class Stage:
    """A named pipeline step: ``fn(previous_output, run) -> output``."""

    name: str
    fn: Callable[[Any, ExportRun], Any]


def run_stages(
    stages: Sequence[Stage],
    run: ExportRun,
    *,
    collector: ExportCollector | None = None,
) -> Any:
    """Run *stages* one after another, threading each output into the next.

    The first exception propagates; later stages never start.
    """
    value: Any = None
    for stage in stages:
        t0 = time.perf_counter()
        value = stage.fn(value, run)
        if collector is not None:
            elapsed = (time.perf_counter() - t0) * 1000
            collector.record("stage", stage.name, duration_ms=elapsed)
    return value


class ExportPipeline:
    """Static export of the pages matching a query.

    Every collaborator is passed in explicitly; the pipeline holds no
    per-run state.

    Args:
        config: Layered static configuration.
        paths: Resolves the sites directory and path templates.
        entities: Looks up entity ids found while rendering.
        renderer: Renders pages, calling the URL hooks.
        style_bundler: Writes stylesheet bundles.
        script_bundler: Writes script bundles.
        image_resizer: Produces resized image files.
        read_files: Glob reader for ``copy_assets``.
        write_files: Writer for pages and ``copy_assets``.
        beautifier: Optional HTML pretty-printer, used when ``config.beautify``.
        context_factory: Builds the template context (date, git) per run.
        collector: Receives build events.

    """

    def __init__(
        self,
        config: StaticConfig,
        *,
        paths: PathResolver,
        entities: EntityRepository,
        renderer: Renderer,
        style_bundler: Bundler,
        script_bundler: Bundler,
        image_resizer: ImageResizer,
        read_files: ReadFiles,
        write_files: WriteFiles,
        beautifier: Beautifier | None = None,
        context_factory: Callable[[], TemplateContext] | None = None,
        collector: ExportCollector | None = None,
    ) -> None:
        self._config = config
        self._paths = paths
        self._entities = entities
        self._renderer = renderer
        self._style_bundler = style_bundler
        self._script_bundler = script_bundler
        self._image_resizer = image_resizer
        self._read_files = read_files
        self._write_files = write_files
        self._beautifier = beautifier
        self._context_factory = context_factory or (
            lambda: TemplateContext.for_project(config.root)
        )
        self._collector = collector

    def stages(self) -> list[Stage]:
        """The ordered stage list for this configuration."""
        stages = [
            Stage("resolve", self._resolve),
            Stage("reset", self._reset),
            Stage("render", self._render),
        ]
        if self._config.beautify:
            stages.append(Stage("beautify", self._beautify))
        stages.extend([
            Stage("write", self._write_pages),
            Stage("entities", self._resolve_entities),
            Stage("styles", self._bundle_styles),
            Stage("scripts", self._bundle_scripts),
            Stage("images", self._copy_images),
            Stage("assets", self._copy_assets),
            Stage("svgs", self._copy_svgs),
            Stage("static", self._copy_static),
        ])
        return stages

    def run(self, query: str, destination: Path) -> ExportResult:
        """Run the full export and return the result.

        Raises:
            ConfigError: If the settings cannot be resolved, or two pages share
                an output path.
            RenderError: If a page fails to render.
            ExportIOError: If a file cannot be written or copied.
            ExportError: If a bundler fails for another reason.

        """
        start = time.perf_counter()
        run = ExportRun(query=query, destination=destination)

        run_stages(self.stages(), run, collector=self._collector)

        elapsed = (time.perf_counter() - start) * 1000
        files = tuple(run.files)
        total_pages = sum(1 for f in files if f.source_type == "page")
        return ExportResult(
            files=files,
            total_pages=total_pages,
            total_assets=len(files) - total_pages,
            skipped_entities=tuple(run.skipped_entities),
            duration_ms=elapsed,
            output_dir=destination,
            settings=run.require_settings(),
            records=run.registry.records(),
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _resolve(self, _: object, run: ExportRun) -> ExportSettings:
        run.settings = resolve_settings(self._config, self._context_factory())
        return run.settings

    def _reset(self, _: object, run: ExportRun) -> None:
        run.registry.clear()

    def _render(self, _: object, run: ExportRun) -> list[RenderedPage]:
        namer = ContentAddressedNamer(run.require_settings(), run.registry)
        t0 = time.perf_counter()
        try:
            output = self._renderer.render(
                run.query, namer, self._config.page_path_template,
            )
        except PawprintError:
            raise
        except Exception as exc:
            msg = f"Failed to render pages for query {run.query!r}: {exc}"
            raise RenderError(msg) from exc
        run.references = output.references
        self._record("render", run.query, f"{len(output.pages)} pages", t0)
        return list(output.pages)

    def _beautify(self, pages: list[RenderedPage], run: ExportRun) -> list[RenderedPage]:
        if self._beautifier is None:
            return pages
        try:
            return self._beautifier.beautify(pages)
        except Exception as exc:
            msg = f"Failed to beautify pages for query {run.query!r}: {exc}"
            raise RenderError(msg) from exc

    def _write_pages(self, pages: list[RenderedPage], run: ExportRun) -> None:
        _check_unique_paths(pages)
        for page in pages:
            t0 = time.perf_counter()
            source_file = SourceFile(
                relative_path=page.path, data=page.html.encode("utf-8"),
            )
            try:
                (target,) = self._write_files([source_file], run.destination)
            except OSError as exc:
                msg = f"Failed to write page {page.path!r}: {exc}"
                raise ExportIOError(msg) from exc
            run.files.append(self._exported(
                page.source or page.path, target, "page", len(source_file.data), t0,
            ))
            self._record("write_page", page.source or page.path, str(target), t0)

    def _resolve_entities(self, _: object, run: ExportRun) -> list[EntityLike]:
        ids = dict.fromkeys((*run.references.calls, *run.references.extends))
        for entity_id in ids:
            try:
                entity = self._entities.get_by_id(entity_id)
            except ResourceResolutionError:
                entity = None
            if entity is None:
                print(f"  unknown entity: {entity_id} (skipped)", file=sys.stderr)
                run.skipped_entities.append(entity_id)
                continue
            run.entities.append(entity)
        return run.entities

    def _bundle_styles(self, _: object, run: ExportRun) -> None:
        directory = run.require_settings().directory("css")
        self._bundle(self._style_bundler, run, directory + "${site}-${group}.css", "style")

    def _bundle_scripts(self, _: object, run: ExportRun) -> None:
        directory = run.require_settings().directory("js")
        self._bundle(self._script_bundler, run, directory + "${site}-${group}.js", "script")

    def _copy_images(self, _: object, run: ExportRun) -> None:
        sites = self._paths.sites_path

        def copy(record: AssetRecord) -> ExportedFile:
            t0 = time.perf_counter()
            rendered = self._image_resizer.resize(
                _site_path(sites, record.source),
                record.width,
                record.height,
                record.forced,
            )
            target = run.destination / record.output_path
            size = copy_file(rendered, target)
            self._record("copy_image", record.source, str(target), t0)
            return self._exported(record.source, target, "image", size, t0)

        run.files.extend(self._drain(run.registry.images.values(), copy))

    def _copy_assets(self, _: object, run: ExportRun) -> None:
        sites = self._paths.sites_path

        def copy(record: AssetRecord) -> ExportedFile:
            t0 = time.perf_counter()
            target = run.destination / record.output_path
            size = copy_file(_site_path(sites, record.source), target)
            self._record("copy_asset", record.source, str(target), t0)
            return self._exported(record.source, target, "asset", size, t0)

        run.files.extend(self._drain(run.registry.assets.values(), copy))

    def _copy_svgs(self, _: object, run: ExportRun) -> None:
        sites = self._paths.sites_path

        def copy(record: AssetRecord) -> ExportedFile:
            t0 = time.perf_counter()
            source = strip_fragment(record.source)
            target = run.destination / strip_fragment(record.output_path)
            size = copy_file(_site_path(sites, source), target)
            self._record("copy_svg", source, str(target), t0)
            return self._exported(source, target, "svg", size, t0)

        run.files.extend(self._drain(run.registry.svgs.values(), copy))

    def _copy_static(self, _: object, run: ExportRun) -> None:
        sites = self._paths.sites_path
        for pattern, target_dir in self._config.copy_assets.items():
            t0 = time.perf_counter()
            source = _site_path(sites, pattern)
            target = run.destination / target_dir
            try:
                files = self._read_files(source, _glob_base(source))
                written = self._write_files(files, target)
            except OSError as exc:
                msg = f"Failed to copy assets {pattern!r} to {target_dir!r}: {exc}"
                raise ExportIOError(msg) from exc
            if not files:
                print(f"  copy_assets: nothing matches {pattern}", file=sys.stderr)
            for source_file, path in zip(files, written, strict=True):
                run.files.append(self._exported(
                    source_file.relative_path, path, "static", len(source_file.data), t0,
                ))
            self._record("copy_static", pattern, str(target), t0)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _bundle(
        self,
        bundler: Bundler,
        run: ExportRun,
        template: str,
        source_type: SourceType,
    ) -> None:
        t0 = time.perf_counter()
        try:
            written = bundler.bundle(run.query, run.entities, run.destination, template)
        except PawprintError:
            raise
        except OSError as exc:
            msg = f"Failed to write {source_type} bundles: {exc}"
            raise ExportIOError(msg) from exc
        except Exception as exc:
            msg = f"Failed to build {source_type} bundles: {exc}"
            raise ExportError(msg) from exc
        for path in written:
            size = path.stat().st_size if path.is_file() else 0
            run.files.append(self._exported(
                _relative_to(path, run.destination), path, source_type, size, t0,
            ))
        self._record("bundle", source_type, f"{len(written)} files", t0)

    def _drain(
        self,
        records: Iterable[AssetRecord],
        copy: Callable[[AssetRecord], ExportedFile],
    ) -> list[ExportedFile]:
        return run_bounded(
            list(records),
            copy,
            workers=self._config.workers,
            describe=lambda record: f"{record.source} -> {record.output_path}",
        )

    def _record(self, kind: BuildEventKind, source: str, target: str, t0: float) -> None:
        if self._collector is not None:
            elapsed = (time.perf_counter() - t0) * 1000
            self._collector.record(kind, source, target, duration_ms=elapsed)

    @staticmethod
    def _exported(
        source: str,
        target: Path,
        source_type: SourceType,
        size: int,
        t0: float,
    ) -> ExportedFile:
        return ExportedFile(
            source_path=source,
            output_path=target,
            source_type=source_type,
            size_bytes=size,
            duration_ms=(time.perf_counter() - t0) * 1000,
        )


def _glob_base(pattern: Path) -> Path:
    """Longest leading directory of *pattern* without glob characters."""
    parts: list[str] = []
    for part in pattern.parts:
        if _GLOB_CHARS.intersection(part):
            break
        parts.append(part)
    if len(parts) == len(pattern.parts):
        return pattern.parent
    return Path(*parts)


def _relative_to(path: Path, root: Path) -> str:
    try:
        return PurePosixPath(path.relative_to(root)).as_posix()
    except ValueError:
        return str(path)


def _site_path(sites: Path, value: str) -> Path:
    """*value* below the sites directory; a leading ``/`` is site-relative."""
    return sites / value.lstrip("/")


def _check_unique_paths(pages: Sequence[RenderedPage]) -> None:
    """Raise if two pages would be written to the same output path."""
    seen: dict[str, str] = {}
    for page in pages:
        if page.path not in seen:
            seen[page.path] = page.source
            continue
        msg = (
            f"Pages {seen[page.path]!r} and {page.source!r} both render to {page.path!r}; "
            "include ${site} in page_path_template"
        )
        raise ConfigError(msg)
