"""Tests for the forms rule."""

import pytest

from wcag_scanner.rules import FormsRule
from wcag_scanner.rules.forms import LABELS_URL

from ..conftest import RunRuleFn

RULE = FormsRule()


class TestLabels:
    """Tests for form control labels."""

    async def test_unlabelled_input(self, run_rule: RunRuleFn) -> None:
        """Controls without any label are critical violations."""
        results = await run_rule(RULE, '<input type="text" name="q">')

        violations = [v for v in results.violations if v.rule == "form-label"]
        assert len(violations) == 1
        violation = violations[0]
        assert violation.impact == "critical"
        assert violation.help_url == LABELS_URL
        assert violation.element is not None
        assert violation.element.type == "text"
        assert violation.element.name == "q"

    async def test_input_type_defaults_to_text(self, run_rule: RunRuleFn) -> None:
        """Inputs without a type are reported as text inputs."""
        results = await run_rule(RULE, "<input>")

        assert results.violations[0].element is not None
        assert results.violations[0].element.type == "text"

    @pytest.mark.parametrize(
        "html",
        [
            '<label for="email">Email</label><input id="email" type="email">',
            '<label>Name <input type="text"></label>',
            '<label for="bio">Bio</label><textarea id="bio"></textarea>',
        ],
    )
    async def test_label_element(self, run_rule: RunRuleFn, html: str) -> None:
        """Explicit and wrapping labels pass."""
        results = await run_rule(RULE, html)

        assert "form-label" in [p.rule for p in results.passes]
        assert not results.violations

    @pytest.mark.parametrize(
        "html",
        [
            '<input type="search" aria-label="Search">',
            '<input type="text" aria-labelledby="h">',
            '<input type="text" title="Postcode">',
        ],
    )
    async def test_alternative_labelling(self, run_rule: RunRuleFn, html: str) -> None:
        """ARIA names and titles pass as alternative labelling."""
        results = await run_rule(RULE, html)

        assert "form-label-alternative" in [p.rule for p in results.passes]
        assert not results.violations

    async def test_placeholder_is_not_a_label(self, run_rule: RunRuleFn) -> None:
        """Placeholder-only controls also get a serious warning."""
        results = await run_rule(RULE, '<input type="text" placeholder="Your name">')

        assert [v.rule for v in results.violations] == ["form-label"]
        warnings = [w for w in results.warnings if w.rule == "placeholder-label"]
        assert len(warnings) == 1
        assert warnings[0].impact == "serious"

    async def test_placeholder_with_label(self, run_rule: RunRuleFn) -> None:
        """Labelled controls with placeholders do not warn."""
        html = '<label for="n">Name</label><input id="n" placeholder="Jane">'

        results = await run_rule(RULE, html)

        assert not [w for w in results.warnings if w.rule == "placeholder-label"]

    @pytest.mark.parametrize(
        "html",
        [
            '<input type="hidden" name="token">',
            '<input type="submit" value="Send">',
            '<input type="image" src="go.png" alt="Go">',
            '<div hidden><input type="text"></div>',
            '<input type="text" style="display: none">',
        ],
    )
    async def test_skipped_controls(self, run_rule: RunRuleFn, html: str) -> None:
        """Hidden controls and buttons are not label-checked."""
        results = await run_rule(RULE, html)

        assert not [v for v in results.violations if v.rule == "form-label"]


class TestGroups:
    """Tests for selects and fieldsets."""

    async def test_select_without_options(self, run_rule: RunRuleFn) -> None:
        """Empty selects are critical violations."""
        html = '<label for="s">Size</label><select id="s" name="size"></select>'

        results = await run_rule(RULE, html)

        violations = [v for v in results.violations if v.rule == "select-options"]
        assert len(violations) == 1
        assert violations[0].impact == "critical"
        assert violations[0].element is not None
        assert violations[0].element.name == "size"

    async def test_select_with_options(self, run_rule: RunRuleFn) -> None:
        """Selects with options pass."""
        html = '<label>Size <select><option>S</option></select></label>'

        results = await run_rule(RULE, html)

        assert "select-options" in [p.rule for p in results.passes]

    async def test_fieldset_legend(self, run_rule: RunRuleFn) -> None:
        """Fieldsets need a legend with text."""
        missing = await run_rule(RULE, "<fieldset></fieldset>")
        empty = await run_rule(RULE, "<fieldset><legend></legend></fieldset>")
        present = await run_rule(RULE, "<fieldset><legend>Shipping</legend></fieldset>")

        assert [v.rule for v in missing.violations] == ["fieldset-legend"]
        assert [v.rule for v in empty.violations] == ["fieldset-legend-empty"]
        assert "fieldset-legend" in [p.rule for p in present.passes]


class TestForms:
    """Tests for form-level checks."""

    async def test_form_without_submit_or_name(self, run_rule: RunRuleFn) -> None:
        """Forms without submit control or name warn twice."""
        results = await run_rule(RULE, '<form><button type="button">Go</button></form>')

        assert [w.rule for w in results.warnings] == ["form-submit", "form-name"]

    @pytest.mark.parametrize(
        "submit",
        [
            '<button type="submit">Send</button>',
            "<button>Send</button>",
            '<input type="submit" value="Send">',
            '<input type="image" src="send.png" alt="Send">',
        ],
    )
    async def test_submit_controls(self, run_rule: RunRuleFn, submit: str) -> None:
        """Any submit control satisfies the check."""
        results = await run_rule(RULE, f'<form id="contact">{submit}</form>')

        assert not results.warnings

    async def test_required_without_aria_required(self, run_rule: RunRuleFn) -> None:
        """Required controls should repeat aria-required."""
        html = (
            '<label for="a">A</label><input id="a" required>'
            '<label for="b">B</label><input id="b" required aria-required="true">'
        )

        results = await run_rule(RULE, html)

        warnings = [w for w in results.warnings if w.rule == "required-aria-required"]
        assert len(warnings) == 1
        assert warnings[0].impact == "minor"

    async def test_pattern_without_title(self, run_rule: RunRuleFn) -> None:
        """Pattern constraints need an explanatory title."""
        html = (
            '<label for="zip">Zip</label><input id="zip" pattern="[0-9]{5}">'
            '<input pattern="[0-9]{5}" title="Five digit zip code">'
        )

        results = await run_rule(RULE, html)

        violations = [v for v in results.violations if v.rule == "pattern-title"]
        assert len(violations) == 1
        assert violations[0].impact == "serious"
