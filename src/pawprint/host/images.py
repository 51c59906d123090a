"""Image resizing with Pillow.

Renditions are cached below ``<cache>/images`` under a name derived from
the source path, its modification time and the requested geometry, so
repeated exports reuse earlier work.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageOps

from pawprint.export.naming import content_hash


class PillowImageResizer:
    """Produces image renditions for the image copy stage.

    * no width and no height: the source file itself
    * ``forced`` with both dimensions: crop to exactly ``width`` x ``height``
    * otherwise: shrink to fit inside the box, keeping the aspect ratio

    Args:
        cache_path: Directory receiving the renditions.

    """

    __slots__ = ("_cache_path",)

    def __init__(self, cache_path: Path) -> None:
        self._cache_path = cache_path / "images"

    def resize(
        self,
        source: Path,
        width: int | None,
        height: int | None,
        forced: bool,
    ) -> Path:
        if not width and not height:
            return source

        digest = content_hash(
            str(source),
            str(source.stat().st_mtime_ns),
            str(width or ""),
            str(height or ""),
            "true" if forced else "false",
        )
        target = self._cache_path / f"{source.stem}_{digest}{source.suffix}"
        if target.is_file():
            return target

        with Image.open(source) as image:
            if forced and width and height:
                rendition = ImageOps.fit(image, (width, height))
            else:
                rendition = image.copy()
                rendition.thumbnail((width or image.width, height or image.height))
            target.parent.mkdir(parents=True, exist_ok=True)
            rendition.save(target)
        return target
