"""Text color contrast against the effective background."""

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from wcag_scanner import contrast
from wcag_scanner.dom.style import ROOT_FONT_SIZE, StyleResolver, parse_px
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import Pass, ScanResults, Violation
from wcag_scanner.rules.base import Rule, element_info, is_hidden, snippet, text_of

log = logging.getLogger(__name__)

TEXT_ELEMENTS = "p, h1, h2, h3, h4, h5, h6, span, div, a, button, label, li, td, th"
CONTRAST_TEXT_LIMIT = 30


def _is_transparent_element(opacity: str) -> bool:
    try:
        return float(opacity) == 0
    except ValueError:
        return False


def background_chain(tag: Tag, style: StyleResolver) -> list[str]:
    """Resolved background colors from an element up to the root."""
    backgrounds = []
    node: Tag | None = tag
    while node is not None and not isinstance(node, BeautifulSoup):
        backgrounds.append(style.computed_style(node).background_color)
        node = node.parent
    return backgrounds


@dataclass(frozen=True, kw_only=True)
class ContrastRule(Rule):
    """Checks that visible text meets the contrast ratio for the WCAG level.

    The background is the first opaque background color found walking up the
    tree, white when none is set. Opacity, positioning and background images
    are not composited, so the measured ratio approximates what is rendered.
    """

    async def check(
        self,
        document: BeautifulSoup,
        style: StyleResolver,
        options: ScannerOptions,
    ) -> ScanResults:
        """Measure contrast for every visible text element."""
        results = ScanResults()
        for tag in document.select(TEXT_ELEMENTS):
            if not text_of(tag) or is_hidden(tag, style):
                continue
            computed = style.computed_style(tag)
            if _is_transparent_element(computed.opacity):
                continue
            self._check_element(tag, style, options, results)
        return results

    @staticmethod
    def _check_element(
        tag: Tag,
        style: StyleResolver,
        options: ScannerOptions,
        results: ScanResults,
    ) -> None:
        computed = style.computed_style(tag)
        foreground = computed.color
        background = contrast.effective_background_color(background_chain(tag, style))

        try:
            measured = contrast.ratio(foreground, background)
        except contrast.ColorParseError:
            log.debug(
                "Skipping <%s> with unmeasurable colors %s on %s",
                tag.name,
                foreground,
                background,
            )
            return

        font_size = parse_px(computed.font_size) or ROOT_FONT_SIZE
        is_large = contrast.is_large_text(font_size, computed.font_weight)
        required = contrast.required_ratio(options.level, is_large)
        info = element_info(tag, with_text=True, text_limit=CONTRAST_TEXT_LIMIT)

        if measured < required:
            results.violations.append(
                Violation(
                    rule="color-contrast",
                    element=info,
                    impact="serious",
                    description=(
                        f"Insufficient color contrast ratio: {measured:.2f}:1 "
                        f"(required: {required:g}:1)"
                    ),
                    snippet=snippet(tag),
                    wcag=contrast.contrast_criteria(options.level),
                    help=f"Text elements must have a contrast ratio of at least {required:g}:1",
                )
            )
        else:
            results.passes.append(
                Pass(
                    rule="color-contrast",
                    element=info,
                    description=f"Sufficient color contrast ratio: {measured:.2f}:1",
                )
            )
