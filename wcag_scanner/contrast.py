"""Color parsing and WCAG contrast computation."""

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import NamedTuple

LARGE_TEXT_PX = 24.0
LARGE_BOLD_TEXT_PX = 18.5
BOLD_WEIGHT = 700
NORMAL_WEIGHT = 400

DEFAULT_BACKGROUND = "rgb(255, 255, 255)"


class RGB(NamedTuple):
    """An sRGB color with 0-255 channels."""

    r: int
    g: int
    b: int


class ColorParseError(ValueError):
    """Raised when a color value is not in a supported format."""


class Requirement(NamedTuple):
    """Minimum contrast ratios for one conformance level."""

    normal_text: float
    large_text: float


REQUIREMENTS: Mapping[str, Requirement] = {
    "A": Requirement(normal_text=3.0, large_text=3.0),
    "AA": Requirement(normal_text=4.5, large_text=3.0),
    "AAA": Requirement(normal_text=7.0, large_text=4.5),
}

NAMED_COLORS: Mapping[str, RGB] = {
    "black": RGB(0, 0, 0),
    "white": RGB(255, 255, 255),
    "red": RGB(255, 0, 0),
    "green": RGB(0, 128, 0),
    "blue": RGB(0, 0, 255),
    "yellow": RGB(255, 255, 0),
    "gray": RGB(128, 128, 128),
}

FONT_WEIGHT_KEYWORDS: Mapping[str, int] = {
    "normal": NORMAL_WEIGHT,
    "bold": BOLD_WEIGHT,
    "bolder": BOLD_WEIGHT,
    "lighter": 100,
}

_RGB = re.compile(r"rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)")
_RGBA = re.compile(r"rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d*\.?\d+)\s*\)")
_HEX6 = re.compile(r"#([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})")
_HEX3 = re.compile(r"#([0-9a-f])([0-9a-f])([0-9a-f])")


def parse_color(value: str) -> RGB:
    """Parse a CSS color into RGB channels.

    Accepts rgb(), rgba() (alpha is ignored), 6- and 3-digit hex and a small
    table of named colors.

    Raises:
        ColorParseError: If the value is in any other format

    """
    color = value.strip().lower()

    if match := _RGB.fullmatch(color):
        return _clamped(*match.groups())
    if match := _RGBA.fullmatch(color):
        return _clamped(*match.groups()[:3])
    if match := _HEX6.fullmatch(color):
        return RGB(*(int(channel, 16) for channel in match.groups()))
    if match := _HEX3.fullmatch(color):
        return RGB(*(int(channel * 2, 16) for channel in match.groups()))
    if color in NAMED_COLORS:
        return NAMED_COLORS[color]

    raise ColorParseError(f"Unsupported color value: {value!r}")


def _clamped(*channels: str) -> RGB:
    r, g, b = (min(int(channel), 255) for channel in channels)
    return RGB(r, g, b)


def _linear(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: RGB) -> float:
    """Relative luminance of an sRGB color."""
    return (
        0.2126 * _linear(color.r)
        + 0.7152 * _linear(color.g)
        + 0.0722 * _linear(color.b)
    )


def ratio(foreground: str, background: str) -> float:
    """Contrast ratio between two CSS colors, from 1.0 to 21.0.

    Raises:
        ColorParseError: If either color cannot be parsed

    """
    first = relative_luminance(parse_color(foreground))
    second = relative_luminance(parse_color(background))
    lighter, darker = max(first, second), min(first, second)
    return (lighter + 0.05) / (darker + 0.05)


def required_ratio(level: str, is_large: bool) -> float:
    """Minimum ratio for a level; unknown levels use AA."""
    requirement = REQUIREMENTS.get(level, REQUIREMENTS["AA"])
    return requirement.large_text if is_large else requirement.normal_text


def font_weight_value(weight: str | int) -> int:
    """Numeric font weight; keywords map to their CSS equivalents."""
    if isinstance(weight, int):
        return weight
    weight = weight.strip().lower()
    if weight in FONT_WEIGHT_KEYWORDS:
        return FONT_WEIGHT_KEYWORDS[weight]
    try:
        return int(float(weight))
    except (ValueError, OverflowError):
        return NORMAL_WEIGHT


def is_large_text(font_size_px: float, font_weight: str | int) -> bool:
    """Whether text counts as large: 24px, or 18.5px when bold."""
    if font_size_px >= LARGE_TEXT_PX:
        return True
    return (
        font_size_px >= LARGE_BOLD_TEXT_PX
        and font_weight_value(font_weight) >= BOLD_WEIGHT
    )


def is_transparent(value: str) -> bool:
    """Whether a background value is transparent or fully transparent black."""
    color = value.strip().lower()
    if color in {"", "transparent"}:
        return True
    if match := _RGBA.fullmatch(color):
        r, g, b, alpha = match.groups()
        return (int(r), int(g), int(b)) == (0, 0, 0) and float(alpha) == 0
    return False


def effective_background_color(backgrounds: Iterable[str]) -> str:
    """First non-transparent background from element to root, else white.

    This ignores opacity, positioning and background images: it approximates
    rendering rather than compositing layers.
    """
    for background in backgrounds:
        if not is_transparent(background):
            return background
    return DEFAULT_BACKGROUND


def contrast_criteria(level: str) -> Sequence[str]:
    """WCAG success criteria that govern text contrast at a level."""
    return ("1.4.6",) if level == "AAA" else ("1.4.3",)
