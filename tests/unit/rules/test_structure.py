"""Tests for the structure rule."""

from wcag_scanner.rules import StructureRule
from wcag_scanner.testing.payloads import html_page

from ..conftest import RunRuleFn

RULE = StructureRule()

MINIMAL_DOCUMENT = (
    '<html lang="en"><head><title>T</title></head>'
    "<body><h1>H</h1><main>...</main></body></html>"
)


class TestDocument:
    """Tests for document-level checks."""

    async def test_minimal_valid_document(self, run_rule: RunRuleFn) -> None:
        """One h1, one main, a title and lang produce no violations."""
        results = await run_rule(RULE, MINIMAL_DOCUMENT)

        assert results.violations == []
        passed = [p.rule for p in results.passes]
        assert {"html-lang", "document-title", "heading-h1", "landmark-main"} <= set(passed)

    async def test_missing_lang_and_title(self, run_rule: RunRuleFn) -> None:
        """Missing lang and title are serious violations."""
        results = await run_rule(RULE, "<html><body><h1>H</h1><main></main></body></html>")

        violations = {v.rule: v for v in results.violations}
        assert violations["html-lang"].impact == "serious"
        assert list(violations["html-lang"].wcag) == ["3.1.1"]
        assert violations["document-title"].impact == "serious"

    async def test_empty_title(self, run_rule: RunRuleFn) -> None:
        """An empty title is a serious violation."""
        results = await run_rule(RULE, html_page("<h1>H</h1><main></main>", title="  "))

        assert [v.rule for v in results.violations] == ["document-title-empty"]

    async def test_lang_in_pass_description(self, run_rule: RunRuleFn) -> None:
        """Reports the declared language."""
        results = await run_rule(RULE, html_page("<main><h1>H</h1></main>", lang="fr"))

        lang = next(p for p in results.passes if p.rule == "html-lang")
        assert lang.description == "Document language is specified: fr"

    async def test_skip_link(self, run_rule: RunRuleFn) -> None:
        """Skip links are recognized by their text."""
        found = await run_rule(RULE, '<a href="#content">Jump to content</a>')
        missing = await run_rule(RULE, '<a href="/about">About</a>')

        assert "skip-link" in [p.rule for p in found.passes]
        assert "skip-link" in [w.rule for w in missing.warnings]


class TestHeadings:
    """Tests for heading checks."""

    async def test_missing_h1(self, run_rule: RunRuleFn) -> None:
        """No h1 is a serious violation."""
        results = await run_rule(RULE, "<h2>Section</h2>")

        h1 = [v for v in results.violations if v.rule == "heading-h1"]
        assert len(h1) == 1
        assert h1[0].impact == "serious"

    async def test_multiple_h1_is_warning(self, run_rule: RunRuleFn) -> None:
        """Several h1 headings are a moderate warning, not a violation."""
        results = await run_rule(RULE, "<h1>One</h1><h1>Two</h1>")

        warnings = [w for w in results.warnings if w.rule == "heading-h1-multiple"]
        assert len(warnings) == 1
        assert warnings[0].impact == "moderate"
        assert warnings[0].description == "Document has multiple h1 headings (2)"
        assert not [v for v in results.violations if v.rule.startswith("heading-h1")]

    async def test_skipped_level(self, run_rule: RunRuleFn) -> None:
        """Jumping more than one level is a moderate violation."""
        results = await run_rule(RULE, "<h1>A</h1><h2>B</h2><h4>C</h4><h2>D</h2>")

        skips = [v for v in results.violations if v.rule == "heading-skip"]
        assert len(skips) == 1
        assert skips[0].impact == "moderate"
        assert skips[0].description == "Heading level skipped from h2 to h4"
        assert skips[0].element is not None
        assert skips[0].element.text == "C"

    async def test_empty_heading(self, run_rule: RunRuleFn) -> None:
        """Headings without text are serious violations."""
        results = await run_rule(RULE, "<h1>Title</h1><h2> </h2>")

        empty = [v for v in results.violations if v.rule == "heading-empty"]
        assert len(empty) == 1
        assert empty[0].description == "Empty h2 element"


class TestLandmarks:
    """Tests for landmark checks."""

    async def test_missing_main(self, run_rule: RunRuleFn) -> None:
        """No main landmark is a serious violation."""
        results = await run_rule(RULE, "<div>content</div>")

        assert "landmark-main" in [v.rule for v in results.violations]

    async def test_role_main_counts(self, run_rule: RunRuleFn) -> None:
        """role=main is a main landmark."""
        results = await run_rule(RULE, '<div role="main">content</div>')

        assert "landmark-main" in [p.rule for p in results.passes]

    async def test_multiple_main(self, run_rule: RunRuleFn) -> None:
        """Several main landmarks are a moderate violation."""
        results = await run_rule(RULE, "<main>a</main><main>b</main>")

        violations = [v for v in results.violations if v.rule == "landmark-main-multiple"]
        assert len(violations) == 1
        assert violations[0].impact == "moderate"

    async def test_missing_navigation_is_warning(self, run_rule: RunRuleFn) -> None:
        """No navigation landmark is only a warning."""
        results = await run_rule(RULE, "<main>a</main>")

        assert "landmark-navigation" in [w.rule for w in results.warnings]
        assert "landmark-navigation" not in [v.rule for v in results.violations]

    async def test_duplicate_landmarks_need_names(self, run_rule: RunRuleFn) -> None:
        """Duplicated landmarks without names warn once per element."""
        results = await run_rule(RULE, "<footer>a</footer><footer>b</footer>")

        names = [w for w in results.warnings if w.rule == "landmark-contentinfo-name"]
        assert len(names) == 2
        assert "landmark-contentinfo" in [p.rule for p in results.passes]

    async def test_named_duplicate_landmarks(self, run_rule: RunRuleFn) -> None:
        """Named duplicates do not warn."""
        html = '<aside aria-label="Related">a</aside><aside title="Ads">b</aside>'

        results = await run_rule(RULE, html)

        assert not [w for w in results.warnings if w.rule == "landmark-complementary-name"]


class TestLists:
    """Tests for list structure."""

    async def test_empty_list(self, run_rule: RunRuleFn) -> None:
        """Lists without items are violations."""
        results = await run_rule(RULE, "<ul></ul>")

        assert [v.rule for v in results.violations if v.rule.startswith("list")] == [
            "list-structure"
        ]

    async def test_invalid_child(self, run_rule: RunRuleFn) -> None:
        """Non-li children are violations."""
        results = await run_rule(RULE, "<ol><li>a</li><p>b</p></ol>")

        violations = [v for v in results.violations if v.rule == "list-structure-child"]
        assert len(violations) == 1
        assert violations[0].description == "ol contains direct children that are not li elements"

    async def test_valid_list(self, run_rule: RunRuleFn) -> None:
        """Lists of li elements pass."""
        results = await run_rule(RULE, "<ul>\n<li>a</li>\n<li>b</li>\n</ul>")

        assert not [v for v in results.violations if v.rule.startswith("list")]

    async def test_definition_list_missing_parts(self, run_rule: RunRuleFn) -> None:
        """Definition lists need terms and descriptions."""
        results = await run_rule(RULE, "<dl><dt>Term</dt></dl><dl><dd>Only</dd></dl>")

        assert [v.rule for v in results.violations if v.rule.startswith("dl")] == [
            "dl-dd",
            "dl-dt",
        ]

    async def test_definition_list_children(self, run_rule: RunRuleFn) -> None:
        """Only dt, dd and div children are allowed."""
        invalid = await run_rule(RULE, "<dl><dt>T</dt><dd>D</dd><p>x</p></dl>")
        grouped = await run_rule(RULE, "<dl><div><dt>T</dt><dd>D</dd></div></dl>")

        assert "dl-structure" in [v.rule for v in invalid.violations]
        assert not [v for v in grouped.violations if v.rule.startswith("dl")]


class TestTables:
    """Tests for table semantics."""

    async def test_layout_table(self, run_rule: RunRuleFn) -> None:
        """Single-row header-less tables are layout tables."""
        results = await run_rule(RULE, "<table><tr><td>a</td><td>b</td></tr></table>")

        assert [w.rule for w in results.warnings if w.rule.startswith("table")] == [
            "table-layout"
        ]
        assert not [v for v in results.violations if v.rule.startswith("table")]

    async def test_data_table_without_headers(self, run_rule: RunRuleFn) -> None:
        """Data tables without th are serious violations."""
        html = "<table><tr><td>a</td><td>b</td></tr><tr><td>c</td><td>d</td></tr></table>"

        results = await run_rule(RULE, html)

        headers = [v for v in results.violations if v.rule == "table-headers"]
        assert len(headers) == 1
        assert headers[0].impact == "serious"
        assert "table-caption" in [w.rule for w in results.warnings]

    async def test_complete_data_table(self, run_rule: RunRuleFn) -> None:
        """Tables with column headers and a caption pass."""
        html = (
            "<table><caption>Prices</caption>"
            "<thead><tr><th>Item</th><th>Price</th></tr></thead>"
            "<tbody><tr><td>Tea</td><td>2</td></tr></tbody></table>"
        )

        results = await run_rule(RULE, html)

        passed = [p.rule for p in results.passes]
        assert "table-headers" in passed
        assert "table-caption" in passed
        assert not [w for w in results.warnings if w.rule.startswith("table")]
        assert not [v for v in results.violations if v.rule.startswith("table")]

    async def test_empty_caption_and_header(self, run_rule: RunRuleFn) -> None:
        """Empty captions and headers are violations."""
        html = (
            "<table><caption></caption><tr><th></th><th>Price</th></tr>"
            "<tr><td>Tea</td><td>2</td></tr></table>"
        )

        results = await run_rule(RULE, html)

        rules = [v.rule for v in results.violations]
        assert "table-header-empty" in rules
        assert "table-caption-empty" in rules

    async def test_row_and_column_headers_need_scope(self, run_rule: RunRuleFn) -> None:
        """Mixed row and column headers without scope warn."""
        html = (
            "<table><caption>Sales</caption>"
            "<tr><th>Region</th><th>Q1</th></tr>"
            "<tr><th>North</th><td>10</td></tr></table>"
        )

        results = await run_rule(RULE, html)

        assert "table-header-scope" in [w.rule for w in results.warnings]

    async def test_scoped_headers(self, run_rule: RunRuleFn) -> None:
        """Scoped headers do not warn."""
        html = (
            "<table><caption>Sales</caption>"
            '<tr><th scope="col">Region</th><th scope="col">Q1</th></tr>'
            '<tr><th scope="row">North</th><td>10</td></tr></table>'
        )

        results = await run_rule(RULE, html)

        assert "table-header-scope" not in [w.rule for w in results.warnings]
