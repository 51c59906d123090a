"""Pawprint configuration.

StaticConfig is the central configuration object, frozen after creation.
It holds the fully layered values (build layer over global layer over
defaults); see :mod:`pawprint.config_loader` for how the layers are merged.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

# Default glob -> destination mapping for statically copied assets
_DEFAULT_COPY_ASSETS: dict[str, str] = {
    "base/global/assets/fonts/*.*": "assets/fonts",
    "base/global/assets/images/*.*": "assets/images",
}


@dataclass(frozen=True, slots=True)
class StaticConfig:
    """Configuration for a static export.

    Attributes:
        root: Project root.  Always resolved to an absolute path on construction.
        build: Name of the selected build layer, or *None* for the global layer.
        sites_dir: Directory containing the site trees, relative to ``root``.
        cache_dir: Directory for intermediate files (resized images).
        export_path: Output root template; supports ``${cache}``, ``${root}``
            and ``${sites}`` placeholders.
        image_directory_template: Output directory for resized images.
        image_url_template: Public URL prefix for images (empty = directory).
        video_directory_template: Output directory for videos.
        video_url_template: Public URL prefix for videos.
        asset_directory_template: Output directory for generic assets.
        asset_url_template: Public URL prefix for generic assets.
        svg_directory_template: Output directory for svg sprites.
        svg_url_template: Public URL prefix for svg sprites.
        css_directory_template: Output directory for stylesheet bundles.
        css_url_template: Public URL prefix for stylesheet bundles.
        js_directory_template: Output directory for script bundles and links.
        js_url_template: Public URL prefix for scripts.
        use_absolute_paths: Prefix every public URL with ``prefix_path``.
        prefix_path: Absolute URL prefix (e.g. ``/`` or ``https://cdn.example.com/``).
        beautify: Pretty-print rendered HTML before writing.
        page_path_template: Output filename for pages; supports ``${site}``
            and ``${page}``.
        workers: Upper bound on parallel copies within one pipeline stage.
        copy_assets: Glob (relative to the sites path) -> destination directory
            (relative to the export root) for assets copied unconditionally.

    """

    root: Path = field(default_factory=Path.cwd)
    build: str | None = None
    sites_dir: str = "sites"
    cache_dir: str = ".pawprint/cache"
    export_path: str = "${cache}/static/export"
    image_directory_template: str = "images"
    image_url_template: str = ""
    video_directory_template: str = "videos"
    video_url_template: str = ""
    asset_directory_template: str = "assets"
    asset_url_template: str = ""
    svg_directory_template: str = "assets"
    svg_url_template: str = ""
    css_directory_template: str = "css"
    css_url_template: str = ""
    js_directory_template: str = "js"
    js_url_template: str = ""
    use_absolute_paths: bool = False
    prefix_path: str = "/"
    beautify: bool = False
    page_path_template: str = "${page}.html"
    workers: int = 4
    copy_assets: Mapping[str, str] = field(
        default_factory=lambda: dict(_DEFAULT_COPY_ASSETS),
    )

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        # Read-only copy of the caller's mapping
        object.__setattr__(
            self, "copy_assets", MappingProxyType(dict(self.copy_assets)),
        )

    @property
    def sites_path(self) -> Path:
        """Absolute path to the sites directory."""
        return self._absolute(self.sites_dir)

    @property
    def cache_path(self) -> Path:
        """Absolute path to the cache directory."""
        return self._absolute(self.cache_dir)

    def _absolute(self, value: str) -> Path:
        path = Path(value)
        if path.is_absolute():
            return path
        return self.root / path
