"""Document structure: headings, landmarks, language, title, lists and tables."""

import re
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from wcag_scanner.dom.style import StyleResolver
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import Pass, ScanResults, Violation, Warning, truncate
from wcag_scanner.rules.base import (
    Rule,
    attr,
    class_names,
    element_info,
    snippet,
    text_of,
)
from wcag_scanner.rules.heuristics import is_likely_layout_table

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
SKIP_LINK_PHRASES = ("skip", "jump", "main content")
LANDMARK_NAME_ATTRIBUTES = ("aria-label", "aria-labelledby", "title")

# (landmark, selector) pairs checked for presence and distinguishing names
NAMED_LANDMARKS: Sequence[tuple[str, str]] = (
    ("banner", 'header, [role="banner"]'),
    ("contentinfo", 'footer, [role="contentinfo"]'),
    ("complementary", 'aside, [role="complementary"]'),
    ("form", 'form, [role="form"]'),
    ("search", '[role="search"]'),
)

_HEADING = re.compile(r"h([1-6])")


def _children(tag: Tag) -> list[Tag]:
    return [child for child in tag.children if isinstance(child, Tag)]


@dataclass(frozen=True, kw_only=True)
class StructureRule(Rule):
    """Checks document outline and structural semantics."""

    async def check(
        self,
        document: BeautifulSoup,
        style: StyleResolver,
        options: ScannerOptions,
    ) -> ScanResults:
        """Check headings, landmarks, document metadata, lists and tables."""
        results = ScanResults()
        self._check_headings(document, results)
        self._check_landmarks(document, results)
        self._check_document(document, results)
        self._check_lists(document, results)
        self._check_tables(document, results)
        return results

    @staticmethod
    def _check_headings(document: BeautifulSoup, results: ScanResults) -> None:
        headings = document.find_all(list(HEADING_TAGS))
        levels = [int(_HEADING.fullmatch(heading.name).group(1)) for heading in headings]
        counts = Counter(levels)

        if counts[1] == 0:
            results.violations.append(
                Violation(
                    rule="heading-h1",
                    impact="serious",
                    description="Document does not have an h1 heading",
                    wcag=["1.3.1", "2.4.6"],
                    help="Pages should contain at least one h1 heading for the main content",
                )
            )
        elif counts[1] > 1:
            results.warnings.append(
                Warning(
                    rule="heading-h1-multiple",
                    impact="moderate",
                    description=f"Document has multiple h1 headings ({counts[1]})",
                    wcag=["1.3.1", "2.4.6"],
                    help="Consider using only one h1 heading for the main content title",
                )
            )
        else:
            results.passes.append(
                Pass(rule="heading-h1", description="Document has one h1 heading")
            )

        previous = 0
        for index, (heading, level) in enumerate(zip(headings, levels, strict=True)):
            text = text_of(heading)
            info = element_info(heading, with_text=True)

            if not text:
                results.violations.append(
                    Violation(
                        rule="heading-empty",
                        element=info,
                        impact="serious",
                        description=f"Empty {heading.name} element",
                        snippet=snippet(heading),
                        wcag=["1.3.1", "2.4.6"],
                        help="Headings must have text content",
                    )
                )

            if index > 0 and level > previous + 1:
                results.violations.append(
                    Violation(
                        rule="heading-skip",
                        element=info,
                        impact="moderate",
                        description=f"Heading level skipped from h{previous} to h{level}",
                        snippet=snippet(heading),
                        wcag=["1.3.1"],
                        help="Heading levels should not be skipped (e.g., h2 to h4)",
                    )
                )
            previous = level

    @staticmethod
    def _check_landmarks(document: BeautifulSoup, results: ScanResults) -> None:
        mains = document.select('main, [role="main"]')
        if not mains:
            results.violations.append(
                Violation(
                    rule="landmark-main",
                    impact="serious",
                    description="Page does not contain a main landmark",
                    wcag=["1.3.1", "2.4.1"],
                    help="Pages should have a main landmark to identify the main content",
                )
            )
        elif len(mains) > 1:
            results.violations.append(
                Violation(
                    rule="landmark-main-multiple",
                    impact="moderate",
                    description=f"Page contains multiple main landmarks ({len(mains)})",
                    wcag=["1.3.1"],
                    help="Pages should have exactly one main landmark",
                )
            )
        else:
            results.passes.append(
                Pass(rule="landmark-main", description="Page has a main landmark")
            )

        navs = document.select('nav, [role="navigation"]')
        if navs:
            results.passes.append(
                Pass(
                    rule="landmark-navigation",
                    description=f"Page has {len(navs)} navigation landmark(s)",
                )
            )
        else:
            results.warnings.append(
                Warning(
                    rule="landmark-navigation",
                    impact="moderate",
                    description="Page does not contain a navigation landmark",
                    wcag=["1.3.1", "2.4.1"],
                    help="Pages should have at least one navigation landmark",
                )
            )

        for landmark, selector in NAMED_LANDMARKS:
            found = document.select(selector)
            if not found:
                continue
            results.passes.append(
                Pass(
                    rule=f"landmark-{landmark}",
                    description=f"Page has {len(found)} {landmark} landmark(s)",
                )
            )
            if len(found) < 2:
                continue
            for element in found:
                if any(element.has_attr(name) for name in LANDMARK_NAME_ATTRIBUTES):
                    continue
                results.warnings.append(
                    Warning(
                        rule=f"landmark-{landmark}-name",
                        element=element_info(element, role=attr(element, "role")),
                        impact="moderate",
                        description=f"{landmark} landmark has no accessible name",
                        snippet=snippet(element),
                        help=(
                            f"When multiple {landmark} landmarks exist, "
                            "they should have accessible names"
                        ),
                    )
                )

    @staticmethod
    def _check_document(document: BeautifulSoup, results: ScanResults) -> None:
        root = document.find("html")
        lang = attr(root, "lang") if root is not None else None
        if lang is None:
            results.violations.append(
                Violation(
                    rule="html-lang",
                    impact="serious",
                    description="Document language is not specified",
                    snippet=snippet(root) if root is not None else None,
                    wcag=["3.1.1"],
                    help="Add a lang attribute to the html element",
                )
            )
        else:
            results.passes.append(
                Pass(
                    rule="html-lang",
                    description=f"Document language is specified: {lang}",
                )
            )

        title = document.find("title")
        if title is None:
            results.violations.append(
                Violation(
                    rule="document-title",
                    impact="serious",
                    description="Document does not have a title element",
                    wcag=["2.4.2"],
                    help="Add a title element with descriptive text to the head",
                )
            )
        elif not (title_text := text_of(title)):
            results.violations.append(
                Violation(
                    rule="document-title-empty",
                    impact="serious",
                    description="Document title is empty",
                    wcag=["2.4.2"],
                    help="The title element must contain text",
                )
            )
        else:
            results.passes.append(
                Pass(
                    rule="document-title",
                    description=f'Document has a title: "{truncate(title_text)}"',
                )
            )

        skip_links = [
            link
            for link in document.select('a[href^="#"]')
            if any(phrase in text_of(link).lower() for phrase in SKIP_LINK_PHRASES)
        ]
        if skip_links:
            results.passes.append(Pass(rule="skip-link", description="Page has a skip link"))
        else:
            results.warnings.append(
                Warning(
                    rule="skip-link",
                    impact="moderate",
                    description="No skip link found",
                    wcag=["2.4.1"],
                    help="Add a skip link at the beginning of the page",
                )
            )

    @staticmethod
    def _check_lists(document: BeautifulSoup, results: ScanResults) -> None:
        for list_tag in document.find_all(["ul", "ol"]):
            info = element_info(list_tag)
            name = list_tag.name

            if list_tag.find("li") is None:
                results.violations.append(
                    Violation(
                        rule="list-structure",
                        element=info,
                        impact="moderate",
                        description=f"{name} has no list items",
                        snippet=snippet(list_tag),
                        wcag=["1.3.1"],
                        help=f"{name} elements must contain li elements",
                    )
                )

            if any(child.name != "li" for child in _children(list_tag)):
                results.violations.append(
                    Violation(
                        rule="list-structure-child",
                        element=info,
                        impact="moderate",
                        description=f"{name} contains direct children that are not li elements",
                        snippet=snippet(list_tag),
                        wcag=["1.3.1"],
                        help=f"{name} should only have li elements as direct children",
                    )
                )

        for dl in document.find_all("dl"):
            info = element_info(dl)

            if dl.find("dt") is None:
                results.violations.append(
                    Violation(
                        rule="dl-dt",
                        element=info,
                        impact="moderate",
                        description="Definition list has no terms (dt elements)",
                        snippet=snippet(dl),
                        wcag=["1.3.1"],
                        help="Definition lists must have at least one dt element",
                    )
                )

            if dl.find("dd") is None:
                results.violations.append(
                    Violation(
                        rule="dl-dd",
                        element=info,
                        impact="moderate",
                        description="Definition list has no descriptions (dd elements)",
                        snippet=snippet(dl),
                        wcag=["1.3.1"],
                        help="Definition lists must have at least one dd element",
                    )
                )

            # div may group dt/dd pairs
            if any(child.name not in {"dt", "dd", "div"} for child in _children(dl)):
                results.violations.append(
                    Violation(
                        rule="dl-structure",
                        element=info,
                        impact="moderate",
                        description="Definition list contains invalid direct children",
                        snippet=snippet(dl),
                        wcag=["1.3.1"],
                        help="Definition lists should only contain dt, dd, and div elements",
                    )
                )

    @classmethod
    def _check_tables(cls, document: BeautifulSoup, results: ScanResults) -> None:
        for table in document.find_all("table"):
            cls._check_table(table, results)

    @staticmethod
    def _check_table(table: Tag, results: ScanResults) -> None:
        info = element_info(table)
        headers = table.find_all("th")
        rows = table.find_all("tr")

        layout = is_likely_layout_table(
            role=attr(table, "role"),
            classes=class_names(table),
            header_count=len(headers),
            row_count=len(rows),
            first_row_cell_count=len(rows[0].find_all("td")) if rows else 0,
        )
        if layout:
            results.warnings.append(
                Warning(
                    rule="table-layout",
                    element=info,
                    impact="moderate",
                    description="Table appears to be used for layout",
                    snippet=snippet(table),
                    help="Use CSS for layout instead of tables",
                )
            )
            return

        if not headers:
            results.violations.append(
                Violation(
                    rule="table-headers",
                    element=info,
                    impact="serious",
                    description="Data table has no headers (th elements)",
                    snippet=snippet(table),
                    wcag=["1.3.1"],
                    help="Data tables should have headers using th elements",
                )
            )
        else:
            results.passes.append(
                Pass(rule="table-headers", element=info, description="Table has headers")
            )
            for header in headers:
                if text_of(header):
                    continue
                results.violations.append(
                    Violation(
                        rule="table-header-empty",
                        element=element_info(header),
                        impact="serious",
                        description="Table header is empty",
                        snippet=snippet(header),
                        wcag=["1.3.1"],
                        help="Table headers must have text content",
                    )
                )

        caption = table.find("caption")
        if caption is None:
            results.warnings.append(
                Warning(
                    rule="table-caption",
                    element=info,
                    impact="moderate",
                    description="Table does not have a caption",
                    snippet=snippet(table),
                    wcag=["1.3.1"],
                    help="Data tables should have captions to describe the table content",
                )
            )
        elif not text_of(caption):
            results.violations.append(
                Violation(
                    rule="table-caption-empty",
                    element=info,
                    impact="moderate",
                    description="Table caption is empty",
                    snippet=snippet(caption),
                    wcag=["1.3.1"],
                    help="Table captions must have text content",
                )
            )
        else:
            results.passes.append(
                Pass(rule="table-caption", element=info, description="Table has a caption")
            )

        first_row = rows[0] if rows else None
        in_header_row = [
            th.find_parent("thead") is not None or th.parent is first_row for th in headers
        ]
        if not (any(in_header_row) and not all(in_header_row)):
            return
        if any(not th.has_attr("scope") and not th.has_attr("id") for th in headers):
            results.warnings.append(
                Warning(
                    rule="table-header-scope",
                    element=info,
                    impact="moderate",
                    description="Table headers do not have scope attributes",
                    snippet=snippet(table),
                    wcag=["1.3.1"],
                    help='Add scope="col" or scope="row" to table headers',
                )
            )
