"""Generic file tasks — read a glob, write files under a destination.

Used for the ``copy_assets`` stage and for writing rendered pages::

    files = read_files(sites / "base/global/assets/fonts/*.*", sites / "base/global/assets/fonts")
    write_files(files, export_root / "assets/fonts")
"""

from __future__ import annotations

import glob
from collections.abc import Sequence
from pathlib import Path

from pawprint.host.protocols import SourceFile


def read_files(pattern: Path, base: Path) -> list[SourceFile]:
    """Read every file matching the glob *pattern*.

    ``relative_path`` of each result is relative to *base*.  Directories
    and hidden files are skipped.  Results are sorted for stable output.

    Raises:
        OSError: If a matching file cannot be read.

    """
    results: list[SourceFile] = []
    for match in sorted(glob.glob(str(pattern), recursive=True)):
        path = Path(match)
        if not path.is_file() or path.name.startswith("."):
            continue
        relative = path.relative_to(base).as_posix()
        results.append(SourceFile(relative_path=relative, data=path.read_bytes()))
    return results


def write_files(files: Sequence[SourceFile], destination: Path) -> list[Path]:
    """Write *files* below *destination*, creating parent dirs as needed.

    Returns the written paths in input order.

    Raises:
        OSError: If a file cannot be written.

    """
    written: list[Path] = []
    for source_file in files:
        target = destination / source_file.relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(source_file.data)
        written.append(target)
    return written
