"""Abstract base class and shared helpers for rule modules."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from wcag_scanner.dom.style import StyleResolver
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import ElementInfo, ScanResults, truncate

TEXT_EXCERPT_LIMIT = 50


@dataclass(frozen=True, kw_only=True)
class Rule(ABC):
    """Abstract base for accessibility rule modules.

    A rule inspects a loaded document and reports passes, warnings and
    violations for the rule identifiers it owns. Rules hold no state between
    invocations and never mutate the document.
    """

    @abstractmethod
    async def check(
        self,
        document: BeautifulSoup,
        style: StyleResolver,
        options: ScannerOptions,
    ) -> ScanResults:
        """Inspect the document and return this rule's outcomes.

        Args:
            document: Parsed document tree (read-only)
            style: Computed-style resolver bound to the document
            options: Scanner options for the current scan

        Returns:
            Outcomes in document order

        """


def attr(tag: Tag, name: str) -> str | None:
    """Return an attribute as a string, joining multi-valued attributes."""
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return value


def class_names(tag: Tag) -> list[str]:
    """Return the element's class tokens."""
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def text_of(tag: Tag) -> str:
    """Return the element's whitespace-trimmed text content."""
    return tag.get_text(" ", strip=True)


def snippet(tag: Tag) -> str:
    """Serialize an element, truncated for reporting."""
    return truncate(str(tag))


def element_info(
    tag: Tag,
    *,
    with_text: bool = False,
    text_limit: int = TEXT_EXCERPT_LIMIT,
    **extra: str | None,
) -> ElementInfo:
    """Capture a detached snapshot of an element."""
    text = None
    if with_text:
        text = truncate(text_of(tag), text_limit) or None
    classes = class_names(tag)
    return ElementInfo(
        tag_name=tag.name,
        id=attr(tag, "id") or None,
        classes=classes or None,
        text=text,
        **extra,
    )


def is_hidden(tag: Tag, style: StyleResolver) -> bool:
    """Whether an element is hidden from users.

    Checks the ``hidden`` and ``aria-hidden`` attributes on the element and
    ``display: none`` on the element or any ancestor.
    """
    if tag.has_attr("hidden") or attr(tag, "aria-hidden") == "true":
        return True
    computed = style.computed_style(tag)
    if computed.visibility == "hidden":
        return True
    node: Tag | None = tag
    while node is not None and not isinstance(node, BeautifulSoup):
        if style.computed_style(node).display == "none":
            return True
        node = node.parent
    return False
