"""Heuristic classifiers used by rule modules.

These approximate author intent from markup alone. They take plain values
rather than document nodes so they can be exercised without parsing HTML.
"""

import re
from collections.abc import Sequence

SMALL_IMAGE_PX = 16
MIN_ALT_LENGTH = 5

DECORATIVE_IMAGE_HINTS = ("decoration", "ornament", "icon", "separator", "bg", "background")
DECORATIVE_BACKGROUND_TAGS = frozenset({"header", "footer", "section", "article", "div"})
DECORATIVE_BACKGROUND_HINTS = ("background", "banner", "hero", "container", "wrapper", "section")
LAYOUT_TABLE_HINTS = ("layout", "grid", "container", "wrapper")
PRESENTATIONAL_ROLES = frozenset({"presentation", "none"})

GENERIC_ALT_TERMS = frozenset(
    {"image", "picture", "photo", "img", "graphic", "icon", "logo", "photo.jpg", "untitled"}
)
SHORT_ALT_WORDS = frozenset({"ok", "yes", "no"})

_IMAGE_EXTENSION = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg)$", re.IGNORECASE)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_dimension(value: str | None) -> int | None:
    """Leading integer of a width/height attribute, if any."""
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _has_hint(classes: Sequence[str], hints: Sequence[str]) -> bool:
    joined = " ".join(classes)
    return any(hint in joined for hint in hints)


def is_likely_decorative_image(
    *,
    role: str | None = None,
    width: int | None = None,
    height: int | None = None,
    classes: Sequence[str] = (),
    in_link_with_text: bool = False,
) -> bool:
    """Whether an image with empty alt text is probably decorative.

    Args:
        role: Value of the image's role attribute
        width: Declared width in pixels
        height: Declared height in pixels
        classes: Class tokens on the image
        in_link_with_text: The image sits in a link that has its own text

    Returns:
        True for presentational roles, images under 16px in either dimension,
        decoration-like class names, or images inside a labelled link

    """
    if role in PRESENTATIONAL_ROLES:
        return True
    if any(size is not None and 0 < size < SMALL_IMAGE_PX for size in (width, height)):
        return True
    if _has_hint(classes, DECORATIVE_IMAGE_HINTS):
        return True
    return in_link_with_text


def has_generic_alt_text(alt: str) -> bool:
    """Whether alt text looks like a file name, filler word or stub."""
    text = alt.strip().lower()
    if _IMAGE_EXTENSION.search(text):
        return True
    if text in GENERIC_ALT_TERMS:
        return True
    return len(text) < MIN_ALT_LENGTH and text not in SHORT_ALT_WORDS


def is_background_likely_decorative(tag_name: str, classes: Sequence[str] = ()) -> bool:
    """Whether a background image is probably decoration rather than content.

    Only sectioning and container tags with banner/hero/wrapper style class
    names qualify.
    """
    return tag_name in DECORATIVE_BACKGROUND_TAGS and _has_hint(
        classes, DECORATIVE_BACKGROUND_HINTS
    )


def is_likely_layout_table(
    *,
    role: str | None = None,
    classes: Sequence[str] = (),
    header_count: int = 0,
    row_count: int = 0,
    first_row_cell_count: int = 0,
) -> bool:
    """Whether a table is probably used for layout instead of data.

    Args:
        role: Value of the table's role attribute
        classes: Class tokens on the table
        header_count: Number of ``th`` cells in the table
        row_count: Number of rows in the table
        first_row_cell_count: Number of ``td`` cells in the first row

    Returns:
        True for header-less tables with a single row or column, presentational
        roles, or layout-like class names

    """
    if header_count == 0 and (
        row_count == 1 or (row_count > 0 and first_row_cell_count == 1)
    ):
        return True
    if role in PRESENTATIONAL_ROLES:
        return True
    return _has_hint(classes, LAYOUT_TABLE_HINTS)
