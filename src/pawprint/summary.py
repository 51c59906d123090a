"""Export summary — short, colour-aware status output on stderr.

Detects ``NO_COLOR`` / ``TERM=dumb`` for a plain fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawprint.config import StaticConfig
    from pawprint.export.pipeline import ExportResult


def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_ORANGE = "\033[38;5;214m" if _COLOR else ""


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def format_header(config: StaticConfig, query: str) -> str:
    """One-line header naming the version, build layer and query."""
    from pawprint import __version__

    build = f"  {_YELLOW}[{config.build}]{_RESET}" if config.build else ""
    return (
        f"  {_ORANGE}{_BOLD}pawprint{_RESET} {_DIM}v{__version__}{_RESET}"
        f"  export static {_BOLD}{query}{_RESET}{build}"
    )


def format_summary(result: ExportResult) -> str:
    """Multi-line completion summary for *result*."""
    lines = [
        "",
        "─" * 41,
        f"  Exported {_plural(result.total_pages, 'page')}",
    ]
    if result.total_assets > 0:
        lines.append(f"  Wrote {_plural(result.total_assets, 'asset')}")
    if result.skipped_entities:
        lines.append(
            f"  {_DIM}Skipped {_plural(len(result.skipped_entities), 'unknown entity reference')}{_RESET}"
        )
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")
    return "\n".join(lines)


def print_header(config: StaticConfig, query: str) -> None:
    print(format_header(config, query), file=sys.stderr)


def print_summary(result: ExportResult) -> None:
    """Print export completion summary to stderr."""
    print(format_summary(result), file=sys.stderr)
