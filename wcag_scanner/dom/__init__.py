"""Document loading and computed-style resolution."""

from wcag_scanner.dom.loader import DocumentLoader, LoadedDocument, SoupDocumentLoader
from wcag_scanner.dom.style import ComputedStyle, StyleResolver

__all__ = [
    "ComputedStyle",
    "DocumentLoader",
    "LoadedDocument",
    "SoupDocumentLoader",
    "StyleResolver",
]
