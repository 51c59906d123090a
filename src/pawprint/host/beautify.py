"""HTML beautifier backed by BeautifulSoup's ``prettify()``."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence

from bs4 import BeautifulSoup

from pawprint.host.protocols import RenderedPage


class SoupBeautifier:
    """Re-indents rendered pages; content is left unchanged."""

    __slots__ = ("_parser",)

    def __init__(self, parser: str = "html.parser") -> None:
        self._parser = parser

    def beautify(self, pages: Sequence[RenderedPage]) -> list[RenderedPage]:
        return [
            dataclasses.replace(page, html=BeautifulSoup(page.html, self._parser).prettify())
            for page in pages
        ]
