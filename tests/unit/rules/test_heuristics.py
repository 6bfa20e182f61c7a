"""Tests for heuristic classifiers."""

import pytest

from wcag_scanner.rules.heuristics import (
    has_generic_alt_text,
    is_background_likely_decorative,
    is_likely_decorative_image,
    is_likely_layout_table,
    parse_dimension,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, None), ("16", 16), ("100px", 100), (" 42 ", 42), ("auto", None), ("-1", -1)],
)
def test_parse_dimension(value: str | None, expected: int | None) -> None:
    """Reads the leading integer."""
    assert parse_dimension(value) == expected


class TestIsLikelyDecorativeImage:
    """Tests for is_likely_decorative_image."""

    @pytest.mark.parametrize("role", ["presentation", "none"])
    def test_presentational_role(self, role: str) -> None:
        """Presentational roles are decorative."""
        assert is_likely_decorative_image(role=role)

    def test_small_image(self) -> None:
        """Images under 16px in either dimension are decorative."""
        assert is_likely_decorative_image(width=10, height=200)
        assert is_likely_decorative_image(width=200, height=15)
        assert not is_likely_decorative_image(width=16, height=16)

    def test_class_hint(self) -> None:
        """Decoration-like class names are decorative."""
        assert is_likely_decorative_image(classes=["nav-icon"])
        assert not is_likely_decorative_image(classes=["photo"])

    def test_in_labelled_link(self) -> None:
        """Images inside links with their own text are decorative."""
        assert is_likely_decorative_image(in_link_with_text=True)

    def test_plain_image(self) -> None:
        """Images without any signal are not decorative."""
        assert not is_likely_decorative_image(width=300, height=200)


@pytest.mark.parametrize(
    ("alt", "expected"),
    [
        ("photo.jpg", True),
        ("IMG_0042.PNG", True),
        ("image", True),
        ("Logo", True),
        ("cat", True),
        ("ok", False),
        ("Yes", False),
        ("A red bicycle leaning on a wall", False),
    ],
)
def test_has_generic_alt_text(alt: str, expected: bool) -> None:
    """Flags file names, filler words and stubs."""
    assert has_generic_alt_text(alt) is expected


def test_is_background_likely_decorative() -> None:
    """Only container tags with banner-like classes qualify."""
    assert is_background_likely_decorative("section", ["hero-banner"])
    assert is_background_likely_decorative("div", ["page-wrapper"])
    assert not is_background_likely_decorative("div", ["product"])
    assert not is_background_likely_decorative("span", ["hero"])


class TestIsLikelyLayoutTable:
    """Tests for is_likely_layout_table."""

    def test_single_row_without_headers(self) -> None:
        """Header-less single-row tables are layout."""
        assert is_likely_layout_table(row_count=1, first_row_cell_count=3)

    def test_single_column_without_headers(self) -> None:
        """Header-less single-column tables are layout."""
        assert is_likely_layout_table(row_count=4, first_row_cell_count=1)

    def test_presentational_role(self) -> None:
        """Presentational roles mark layout tables."""
        assert is_likely_layout_table(role="presentation", header_count=2, row_count=3)

    def test_class_hint(self) -> None:
        """Layout-like class names mark layout tables."""
        assert is_likely_layout_table(classes=["layout-grid"], header_count=2, row_count=3)

    def test_data_table(self) -> None:
        """Multi-row, multi-column tables are data tables."""
        assert not is_likely_layout_table(row_count=3, first_row_cell_count=2)
        assert not is_likely_layout_table(header_count=2, row_count=1, first_row_cell_count=0)
