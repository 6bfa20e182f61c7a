"""Document loading on top of BeautifulSoup."""

import logging
import re
from dataclasses import dataclass, field
from typing import Protocol

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from wcag_scanner.dom.style import StyleResolver

log = logging.getLogger(__name__)

PARSER = "html.parser"

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


@dataclass(frozen=True, kw_only=True)
class LoadedDocument:
    """A parsed document paired with its style resolver.

    The document is scan-scoped: rules read it but never mutate it.
    """

    soup: BeautifulSoup
    style: StyleResolver = field(repr=False)
    base_url: str

    @property
    def document_element(self) -> Tag | None:
        """Return the root <html> element, if the markup has one."""
        return self.soup.find("html")


class DocumentLoader(Protocol):
    """Capability that turns raw HTML into a queryable, stylable document."""

    async def load(self, html: str | bytes, base_url: str) -> LoadedDocument:
        """Parse markup and return the loaded document."""
        ...


@dataclass(frozen=True, kw_only=True)
class SoupDocumentLoader:
    """Document loader backed by BeautifulSoup's html.parser."""

    parser: str = PARSER

    async def load(self, html: str | bytes, base_url: str) -> LoadedDocument:
        """Parse markup, retrying once with control characters removed."""
        if isinstance(html, bytes):
            html = html.decode("utf-8", errors="replace")

        try:
            soup = BeautifulSoup(html, self.parser)
        except ParserRejectedMarkup:
            log.warning("Parser rejected markup, retrying with sanitized input")
            soup = BeautifulSoup(_CONTROL_CHARS.sub("", html), self.parser)

        return LoadedDocument(soup=soup, style=StyleResolver(soup), base_url=base_url)
