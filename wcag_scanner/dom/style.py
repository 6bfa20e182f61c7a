"""Computed-style resolution for parsed documents.

This is a static approximation of the CSS cascade: it reads ``<style>``
sheets and inline ``style`` attributes, applies a small user-agent default
sheet, and resolves inheritance for the handful of properties the rules
consume. It does not lay out or render anything, and ``:hover``/``:focus``
style rules never apply.
"""

import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from math import inf

import soupsieve
from bs4 import BeautifulSoup, Tag

log = logging.getLogger(__name__)

ROOT_FONT_SIZE = 16.0

INHERITED = frozenset({"color", "font-size", "font-weight", "visibility"})

NON_RENDERED = frozenset(
    {"head", "script", "style", "title", "meta", "link", "template", "base"}
)

BLOCK_TAGS = frozenset(
    {
        "html", "body", "main", "nav", "header", "footer", "aside", "section",
        "article", "div", "p", "ul", "ol", "li", "dl", "dt", "dd", "form",
        "fieldset", "table", "h1", "h2", "h3", "h4", "h5", "h6",
    }
)  # fmt: skip

# Lowest-precedence declarations, mirroring common browser defaults.
USER_AGENT_SHEET: Mapping[str, Mapping[str, str]] = {
    "h1": {"font-size": "2em", "font-weight": "bold"},
    "h2": {"font-size": "1.5em", "font-weight": "bold"},
    "h3": {"font-size": "1.17em", "font-weight": "bold"},
    "h4": {"font-size": "1em", "font-weight": "bold"},
    "h5": {"font-size": "0.83em", "font-weight": "bold"},
    "h6": {"font-size": "0.67em", "font-weight": "bold"},
    "th": {"font-weight": "bold"},
    "b": {"font-weight": "bold"},
    "strong": {"font-weight": "bold"},
    "small": {"font-size": "smaller"},
}

FONT_SIZE_KEYWORDS: Mapping[str, float] = {
    "xx-small": 9.0,
    "x-small": 10.0,
    "small": 13.0,
    "medium": 16.0,
    "large": 18.0,
    "x-large": 24.0,
    "xx-large": 32.0,
    "xxx-large": 48.0,
}

OUTLINE_STYLES = frozenset(
    {
        "none", "hidden", "dotted", "dashed", "solid", "double", "groove",
        "ridge", "inset", "outset", "auto",
    }
)  # fmt: skip

COLOR_KEYWORDS = frozenset(
    {
        "transparent", "currentcolor", "black", "white", "red", "green", "blue",
        "yellow", "gray", "grey", "silver", "maroon", "purple", "fuchsia",
        "lime", "olive", "navy", "teal", "aqua", "orange",
    }
)  # fmt: skip

_COMMENT = re.compile(r"/\*.*?\*/", re.S)
_TOKEN = re.compile(r"[\w#.%-]+\([^)]*\)|\S+")
_LENGTH = re.compile(r"^(-?\d*\.?\d+)(px|pt|em|rem|%)?$")
_IDS = re.compile(r"#[\w-]+")
_CLASSES = re.compile(r"\.[\w-]+|\[[^\]]*\]|:(?!:)[\w-]+")
_TYPES = re.compile(r"(?:^|[\s>+~(,])([a-zA-Z][\w-]*)")
_PSEUDO_ELEMENT = re.compile(r"::[\w-]+")

type Specificity = tuple[int, int, int]
type CascadeKey = tuple[bool, bool, Specificity, float, int]


@dataclass(frozen=True, kw_only=True)
class ComputedStyle:
    """Resolved values of the style properties the rules consume."""

    color: str = "rgb(0, 0, 0)"
    background_color: str = "transparent"
    background_image: str = "none"
    display: str = "inline"
    visibility: str = "visible"
    opacity: str = "1"
    font_size: str = "16px"
    font_weight: str = "normal"
    outline_style: str = ""
    outline_width: str = ""


@dataclass(frozen=True, kw_only=True)
class StyleRule:
    """One selector of a stylesheet rule with its declarations."""

    selector: soupsieve.SoupSieve
    specificity: Specificity
    order: int
    declarations: Sequence[tuple[str, str, bool]]


def split_declarations(text: str) -> Iterator[str]:
    """Split a declaration block on semicolons outside parentheses."""
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == ";" and depth == 0:
            yield text[start:index]
            start = index + 1
    yield text[start:]


def parse_declarations(text: str) -> list[tuple[str, str, bool]]:
    """Parse a declaration block into (property, value, important) triples.

    Shorthands for ``background`` and ``outline`` are expanded into the
    longhands the resolver tracks.
    """
    declarations: list[tuple[str, str, bool]] = []
    for chunk in split_declarations(text):
        name, sep, value = chunk.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.strip()
        important = False
        if value.lower().endswith("!important"):
            important = True
            value = value[: -len("!important")].strip()
        if not name or not value:
            continue
        for prop, expanded in expand_shorthand(name, value):
            declarations.append((prop, expanded, important))
    return declarations


def expand_shorthand(name: str, value: str) -> list[tuple[str, str]]:
    """Expand supported shorthands; other properties pass through."""
    if name == "background":
        color = "transparent"
        image = "none"
        for token in _TOKEN.findall(value):
            lowered = token.lower()
            if lowered.startswith(("url(", "linear-gradient(", "radial-gradient(")):
                image = token
            elif looks_like_color(lowered):
                color = token
        return [("background-color", color), ("background-image", image)]

    if name == "outline":
        style = "none"
        width = "medium"
        for token in _TOKEN.findall(value):
            lowered = token.lower()
            if lowered in OUTLINE_STYLES:
                style = lowered
            elif lowered in {"thin", "medium", "thick"} or _LENGTH.match(lowered):
                width = lowered
        return [("outline-style", style), ("outline-width", width)]

    return [(name, value)]


def looks_like_color(token: str) -> bool:
    """Tell whether a shorthand token is a color value."""
    return token.startswith(("#", "rgb(", "rgba(", "hsl(", "hsla(")) or (
        token in COLOR_KEYWORDS
    )


def iter_style_blocks(css: str) -> Iterator[tuple[str, str]]:
    """Yield (selector list, declaration block) pairs of top-level rules.

    At-rules such as @media or @font-face are skipped with their blocks.
    """
    css = _COMMENT.sub("", css)
    index = 0
    length = len(css)
    while index < length:
        brace = css.find("{", index)
        semicolon = css.find(";", index)
        if brace == -1:
            return
        prelude = css[index:brace].strip()
        if prelude.startswith("@") and -1 < semicolon < brace:
            index = semicolon + 1
            continue

        depth = 1
        cursor = brace + 1
        while cursor < length and depth:
            if css[cursor] == "{":
                depth += 1
            elif css[cursor] == "}":
                depth -= 1
            cursor += 1

        if not prelude.startswith("@"):
            yield prelude, css[brace + 1 : cursor - 1]
        index = cursor


def specificity(selector: str) -> Specificity:
    """Approximate the (ids, classes, types) specificity of a selector."""
    selector = _PSEUDO_ELEMENT.sub("", selector)
    ids = len(_IDS.findall(selector))
    classes = len(_CLASSES.findall(selector))
    types = len(_TYPES.findall(_IDS.sub("", _CLASSES.sub("", selector))))
    return ids, classes, types


def resolve_font_size(value: str | None, parent_px: float) -> float:
    """Resolve a font-size declaration to pixels."""
    if value is None:
        return parent_px
    value = value.strip().lower()
    if value in FONT_SIZE_KEYWORDS:
        return FONT_SIZE_KEYWORDS[value]
    if value == "smaller":
        return parent_px / 1.2
    if value == "larger":
        return parent_px * 1.2
    if (match := _LENGTH.match(value)) is None:
        return parent_px

    number = float(match.group(1))
    match match.group(2):
        case "pt":
            return number * 4 / 3
        case "em":
            return number * parent_px
        case "rem":
            return number * ROOT_FONT_SIZE
        case "%":
            return number * parent_px / 100
        case _:
            return number


def parse_px(value: str) -> float | None:
    """Parse a resolved ``NNpx`` length."""
    try:
        return float(value.strip().lower().removesuffix("px"))
    except ValueError:
        return None


def format_px(px: float) -> str:
    """Format a pixel length without trailing zeros."""
    return f"{round(px, 2):g}px"


class StyleResolver:
    """Resolve computed styles for elements of one document.

    Results are cached for the lifetime of the resolver, which is bound to a
    single loaded document.
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self._rules = list(self._collect_rules(soup))
        self._cache: dict[int, ComputedStyle] = {}

    def computed_style(self, tag: Tag) -> ComputedStyle:
        """Return the computed style of an element."""
        if (cached := self._cache.get(id(tag))) is not None:
            return cached

        pending: list[Tag] = []
        node: Tag | None = tag
        parent_style = ComputedStyle()
        while node is not None and not isinstance(node, BeautifulSoup):
            if (cached := self._cache.get(id(node))) is not None:
                parent_style = cached
                break
            pending.append(node)
            node = node.parent

        for element in reversed(pending):
            parent_style = self._compute(element, parent_style)
            self._cache[id(element)] = parent_style
        return parent_style

    def _compute(self, tag: Tag, parent: ComputedStyle) -> ComputedStyle:
        declared = self._declared(tag)

        def value(prop: str, default: str) -> str:
            found = declared.get(prop)
            if found is None or found.lower() == "initial":
                return default
            if found.lower() == "inherit":
                return getattr(parent, prop.replace("-", "_"))
            return found

        color = value("color", parent.color)
        if color.lower() == "currentcolor":
            color = parent.color

        background_color = value("background-color", "transparent")
        if background_color.lower() == "currentcolor":
            background_color = color

        parent_px = parse_px(parent.font_size) or ROOT_FONT_SIZE
        font_size = resolve_font_size(declared.get("font-size"), parent_px)

        if tag.name in NON_RENDERED or tag.has_attr("hidden"):
            default_display = "none"
        elif tag.name in BLOCK_TAGS:
            default_display = "block"
        else:
            default_display = "inline"

        return ComputedStyle(
            color=color,
            background_color=background_color,
            background_image=value("background-image", "none"),
            display=value("display", default_display).lower(),
            visibility=value("visibility", parent.visibility).lower(),
            opacity=value("opacity", "1"),
            font_size=format_px(font_size),
            font_weight=value("font-weight", parent.font_weight).lower(),
            outline_style=value("outline-style", "").lower(),
            outline_width=value("outline-width", "").lower(),
        )

    def _declared(self, tag: Tag) -> dict[str, str]:
        """Run the cascade for one element."""
        winners: dict[str, tuple[CascadeKey, str]] = {}

        def offer(key: CascadeKey, prop: str, value: str) -> None:
            current = winners.get(prop)
            if current is None or key >= current[0]:
                winners[prop] = (key, value)

        for position, (prop, value) in enumerate(
            USER_AGENT_SHEET.get(tag.name, {}).items()
        ):
            offer((False, False, (0, 0, 0), -1, position), prop, value)

        for rule in self._rules:
            if not rule.selector.match(tag):
                continue
            for position, (prop, value, important) in enumerate(rule.declarations):
                key = (important, False, rule.specificity, rule.order, position)
                offer(key, prop, value)

        inline = tag.get("style")
        if isinstance(inline, str):
            for position, (prop, value, important) in enumerate(
                parse_declarations(inline)
            ):
                offer((important, True, (0, 0, 0), inf, position), prop, value)

        return {prop: value for prop, (_, value) in winners.items()}

    @staticmethod
    def _collect_rules(soup: BeautifulSoup) -> Iterator[StyleRule]:
        order = 0
        for style_tag in soup.find_all("style"):
            for selectors, body in iter_style_blocks(style_tag.get_text()):
                declarations = parse_declarations(body)
                if not declarations:
                    continue
                for selector in selectors.split(","):
                    selector = selector.strip()
                    if not selector:
                        continue
                    try:
                        compiled = soupsieve.compile(selector)
                    except soupsieve.SelectorSyntaxError:
                        log.debug("Skipping unsupported selector: %s", selector)
                        continue
                    yield StyleRule(
                        selector=compiled,
                        specificity=specificity(selector),
                        order=order,
                        declarations=declarations,
                    )
                    order += 1
