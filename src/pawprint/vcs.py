"""Git metadata for output path templates.

Directory templates may reference ``${gitHash}`` and ``${gitBranch}``.
Both are read with ``git rev-parse`` in the project root.  When the project
is not a git work tree (or git is not installed) the lookup raises
:class:`ConfigError`; an empty substitution would silently collapse output
directories.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from pawprint._errors import ConfigError

_TIMEOUT_SECONDS = 5


def revision_hash(root: Path) -> str:
    """Return the full commit hash of ``HEAD``."""
    return _rev_parse(root, "HEAD")


def branch_name(root: Path) -> str:
    """Return the current branch name (``HEAD`` when detached)."""
    return _rev_parse(root, "--abbrev-ref", "HEAD")


def _rev_parse(root: Path, *args: str) -> str:
    try:
        result = subprocess.run(
            ["git", "rev-parse", *args],
            cwd=root,
            capture_output=True,
            text=True,
            timeout=_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        msg = f"Cannot read git metadata in {root}: {exc}"
        raise ConfigError(msg) from exc

    value = result.stdout.strip()
    if result.returncode != 0 or not value:
        detail = result.stderr.strip() or "no output"
        msg = f"Cannot read git metadata in {root}: {detail}"
        raise ConfigError(msg)
    return value
