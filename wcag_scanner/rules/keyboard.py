"""Keyboard operability: tab order, event handlers, focus and new windows."""

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from wcag_scanner.dom.style import StyleResolver, parse_px
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import ScanResults, Violation, Warning
from wcag_scanner.rules.base import Rule, attr, element_info, snippet, text_of
from wcag_scanner.rules.heuristics import parse_dimension

NATIVELY_FOCUSABLE = frozenset({"a", "button", "input", "select", "textarea", "summary", "details"})
NATIVELY_CLICKABLE = frozenset({"a", "button", "input", "select", "textarea"})

INTERACTIVE_ROLES = frozenset(
    {
        "button", "checkbox", "link", "menuitem", "menuitemcheckbox",
        "menuitemradio", "option", "radio", "slider", "tab", "textbox",
        "switch", "searchbox", "combobox",
    }
)  # fmt: skip

MOUSE_HANDLERS = ("onclick", "onmousedown", "onmouseup")
KEY_HANDLERS = ("onkeydown", "onkeyup", "onkeypress")
ACTIVATION_HANDLERS = ("onclick", "onkeydown", "onkeyup")

FOCUSABLE = 'a[href], button, input, textarea, select, [tabindex]:not([tabindex="-1"])'
CLICKABLE = "div[onclick], span[onclick], a:not([href])"
NEW_WINDOW_PHRASES = ("new window", "new tab")
NEW_WINDOW_ICONS = 'svg, img[alt*="new window"], img[alt*="external"]'


def _has_any(tag: Tag, names: tuple[str, ...]) -> bool:
    return any(tag.has_attr(name) for name in names)


def has_new_window_cue(link: Tag) -> bool:
    """Whether a link tells users it opens a new window or tab."""
    labels = (text_of(link), attr(link, "aria-label") or "", attr(link, "title") or "")
    if any(phrase in label.lower() for label in labels for phrase in NEW_WINDOW_PHRASES):
        return True
    return bool(link.select(NEW_WINDOW_ICONS))


def is_outline_suppressed(outline_style: str, outline_width: str) -> bool:
    """Whether resolved outline values hide the focus ring."""
    return outline_style == "none" or parse_px(outline_width) == 0


@dataclass(frozen=True, kw_only=True)
class KeyboardRule(Rule):
    """Checks that functionality is reachable and visible from the keyboard."""

    async def check(
        self,
        document: BeautifulSoup,
        style: StyleResolver,
        options: ScannerOptions,
    ) -> ScanResults:
        """Check tabindex use, handlers, focus indicators and new-window links."""
        results = ScanResults()
        for tag in document.find_all(attrs={"tabindex": True}):
            self._check_tabindex(tag, results)
        for tag in document.find_all(True):
            self._check_event_handlers(tag, results)
        for tag in document.select(FOCUSABLE):
            self._check_focus_indicator(tag, style, results)
        for tag in document.select(CLICKABLE):
            self._check_clickable(tag, results)
        for link in document.select('a[target="_blank"]'):
            self._check_new_window(link, results)
        return results

    @staticmethod
    def _check_tabindex(tag: Tag, results: ScanResults) -> None:
        raw = attr(tag, "tabindex")
        tabindex = parse_dimension(raw)
        if tabindex is None:
            return
        info = element_info(tag, tabindex=raw)

        if tabindex > 0:
            results.warnings.append(
                Warning(
                    rule="tabindex-positive",
                    element=info,
                    impact="moderate",
                    description=f"Element has a positive tabindex value ({tabindex})",
                    snippet=snippet(tag),
                    wcag=["2.4.3"],
                    help="Avoid positive tabindex values as they create a custom tab order",
                )
            )

        interactive = tag.name in NATIVELY_FOCUSABLE or attr(tag, "role") in INTERACTIVE_ROLES
        if not interactive and tabindex >= 0:
            results.warnings.append(
                Warning(
                    rule="tabindex-non-interactive",
                    element=info,
                    impact="moderate",
                    description="Non-interactive element has a tabindex making it focusable",
                    snippet=snippet(tag),
                    wcag=["2.1.1"],
                    help="Only make interactive elements focusable or add appropriate ARIA roles",
                )
            )

    @staticmethod
    def _check_event_handlers(tag: Tag, results: ScanResults) -> None:
        if tag.name in NATIVELY_CLICKABLE:
            return
        if not _has_any(tag, MOUSE_HANDLERS) or _has_any(tag, KEY_HANDLERS):
            return
        results.warnings.append(
            Warning(
                rule="keyboard-event-equivalents",
                element=element_info(tag),
                impact="moderate",
                description="Element has mouse event handlers but no keyboard event handlers",
                snippet=snippet(tag),
                wcag=["2.1.1"],
                help="Ensure all functionality is operable through keyboard",
            )
        )

    @staticmethod
    def _check_focus_indicator(tag: Tag, style: StyleResolver, results: ScanResults) -> None:
        computed = style.computed_style(tag)
        if not is_outline_suppressed(computed.outline_style, computed.outline_width):
            return
        results.warnings.append(
            Warning(
                rule="focus-visible",
                element=element_info(tag),
                impact="moderate",
                description="Element may be missing visible focus indicator",
                snippet=snippet(tag),
                wcag=["2.4.7"],
                help="Ensure all focusable elements have visible focus indicators",
            )
        )

    @staticmethod
    def _check_clickable(tag: Tag, results: ScanResults) -> None:
        focusable = tag.has_attr("tabindex")
        if not (focusable or _has_any(tag, ACTIVATION_HANDLERS)):
            return
        info = element_info(tag)

        if attr(tag, "role") != "button":
            results.violations.append(
                Violation(
                    rule="interactive-semantics",
                    element=info,
                    impact="serious",
                    description="Interactive element is missing semantic role",
                    snippet=snippet(tag),
                    wcag=["4.1.2"],
                    help='Add role="button" to non-button elements that act as buttons',
                )
            )

        if not focusable and tag.name != "a":
            results.violations.append(
                Violation(
                    rule="interactive-focusable",
                    element=info,
                    impact="serious",
                    description="Interactive element is not keyboard focusable",
                    snippet=snippet(tag),
                    wcag=["2.1.1"],
                    help='Add tabindex="0" to make interactive elements focusable',
                )
            )

    @staticmethod
    def _check_new_window(link: Tag, results: ScanResults) -> None:
        if has_new_window_cue(link):
            return
        results.warnings.append(
            Warning(
                rule="link-new-window",
                element=element_info(link, href=attr(link, "href") or None, target="_blank"),
                impact="moderate",
                description="Link opens in new window without warning",
                snippet=snippet(link),
                wcag=["3.2.2"],
                help="Indicate in the link text that it opens in a new window",
            )
        )
