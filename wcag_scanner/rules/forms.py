"""Form controls: labels, groups, options, submission and validation hints."""

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from wcag_scanner.dom.style import StyleResolver
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import ElementInfo, Pass, ScanResults, Violation, Warning
from wcag_scanner.rules.base import Rule, attr, element_info, is_hidden, snippet, text_of

LABELS_URL = "https://www.w3.org/WAI/WCAG21/Understanding/labels-and-instructions.html"

LABELABLE_CONTROLS = (
    'input:not([type="hidden"]):not([type="button"]):not([type="submit"])'
    ':not([type="reset"]):not([type="image"]), select, textarea'
)
SUBMIT_CONTROLS = (
    'input[type="submit"], input[type="image"], button[type="submit"], button:not([type])'
)
REQUIRED_CONTROLS = "input[required], textarea[required], select[required]"
NAME_ATTRIBUTES = ("aria-label", "aria-labelledby", "title")


def _control_info(control: Tag) -> ElementInfo:
    control_type = attr(control, "type")
    if control_type is None and control.name == "input":
        control_type = "text"
    return element_info(control, type=control_type, name=attr(control, "name") or None)


@dataclass(frozen=True, kw_only=True)
class FormsRule(Rule):
    """Checks that form controls are labelled and forms are operable."""

    async def check(
        self,
        document: BeautifulSoup,
        style: StyleResolver,
        options: ScannerOptions,
    ) -> ScanResults:
        """Check labels, selects, fieldsets, forms and validation attributes."""
        results = ScanResults()
        for control in document.select(LABELABLE_CONTROLS):
            if not is_hidden(control, style):
                self._check_label(document, control, results)
        for select in document.find_all("select"):
            self._check_select(select, results)
        for fieldset in document.find_all("fieldset"):
            self._check_fieldset(fieldset, results)
        for form in document.find_all("form"):
            self._check_form(form, results)
        self._check_validation(document, results)
        return results

    @staticmethod
    def _check_label(document: BeautifulSoup, control: Tag, results: ScanResults) -> None:
        info = _control_info(control)
        markup = snippet(control)

        control_id = attr(control, "id")
        explicit = (
            bool(control_id)
            and document.find("label", attrs={"for": control_id}) is not None
        )
        wrapped = control.find_parent("label") is not None
        labelled = explicit or wrapped
        aria_named = control.has_attr("aria-label") or control.has_attr("aria-labelledby")
        titled = control.has_attr("title")

        if labelled:
            results.passes.append(
                Pass(
                    rule="form-label",
                    element=info,
                    description="Form control has proper label element",
                    snippet=markup,
                )
            )
        elif aria_named or titled:
            results.passes.append(
                Pass(
                    rule="form-label-alternative",
                    element=info,
                    description="Form control has alternative labelling method",
                    snippet=markup,
                )
            )
        else:
            results.violations.append(
                Violation(
                    rule="form-label",
                    element=info,
                    impact="critical",
                    description="Form control does not have a label",
                    snippet=markup,
                    wcag=["1.3.1", "2.4.6", "3.3.2", "4.1.2"],
                    help="Each form control must have a label",
                    help_url=LABELS_URL,
                )
            )
            if control.has_attr("placeholder"):
                results.warnings.append(
                    Warning(
                        rule="placeholder-label",
                        element=info,
                        impact="serious",
                        description="Placeholder is being used instead of a label",
                        snippet=markup,
                        wcag=["1.3.1", "3.3.2"],
                        help="Placeholders should not be used as replacement for labels",
                    )
                )

    @staticmethod
    def _check_select(select: Tag, results: ScanResults) -> None:
        info = element_info(select, name=attr(select, "name") or None)
        if select.find("option") is None:
            results.violations.append(
                Violation(
                    rule="select-options",
                    element=info,
                    impact="critical",
                    description="Select element has no options",
                    snippet=snippet(select),
                    wcag=["4.1.2"],
                    help="Select elements must contain option elements",
                )
            )
        else:
            results.passes.append(
                Pass(
                    rule="select-options",
                    element=info,
                    description="Select element has options",
                    snippet=snippet(select),
                )
            )

    @staticmethod
    def _check_fieldset(fieldset: Tag, results: ScanResults) -> None:
        info = element_info(fieldset)
        legend = fieldset.find("legend")
        if legend is None:
            results.violations.append(
                Violation(
                    rule="fieldset-legend",
                    element=info,
                    impact="serious",
                    description="Fieldset does not have a legend",
                    snippet=snippet(fieldset),
                    wcag=["1.3.1", "3.3.2"],
                    help="Fieldsets must have a legend that describes the group",
                )
            )
        elif not text_of(legend):
            results.violations.append(
                Violation(
                    rule="fieldset-legend-empty",
                    element=info,
                    impact="serious",
                    description="Fieldset has an empty legend",
                    snippet=snippet(fieldset),
                    wcag=["1.3.1", "3.3.2"],
                    help="Legends must contain descriptive text",
                )
            )
        else:
            results.passes.append(
                Pass(
                    rule="fieldset-legend",
                    element=info,
                    description="Fieldset has a legend",
                    snippet=snippet(fieldset),
                )
            )

    @staticmethod
    def _check_form(form: Tag, results: ScanResults) -> None:
        info = element_info(form, name=attr(form, "name") or None)

        if not form.select(SUBMIT_CONTROLS):
            results.warnings.append(
                Warning(
                    rule="form-submit",
                    element=info,
                    impact="moderate",
                    description="Form does not have an explicit submit button",
                    snippet=snippet(form),
                    wcag=["3.2.2"],
                    help="Forms should have an explicit submit button",
                )
            )

        named = any(form.has_attr(name) for name in NAME_ATTRIBUTES)
        if not named and not attr(form, "id"):
            results.warnings.append(
                Warning(
                    rule="form-name",
                    element=info,
                    impact="moderate",
                    description="Form does not have an accessible name",
                    snippet=snippet(form),
                    wcag=["4.1.2"],
                    help=(
                        "Forms should have an accessible name via "
                        "aria-label, aria-labelledby, or title"
                    ),
                )
            )

    @staticmethod
    def _check_validation(document: BeautifulSoup, results: ScanResults) -> None:
        for control in document.select(REQUIRED_CONTROLS):
            if control.has_attr("aria-required"):
                continue
            results.warnings.append(
                Warning(
                    rule="required-aria-required",
                    element=_control_info(control),
                    impact="minor",
                    description='Required input missing aria-required="true"',
                    snippet=snippet(control),
                    help='Add aria-required="true" to reinforce that the field is required',
                )
            )

        for control in document.select("input[pattern]"):
            if control.has_attr("title"):
                continue
            results.violations.append(
                Violation(
                    rule="pattern-title",
                    element=_control_info(control),
                    impact="serious",
                    description="Input with pattern constraint missing title attribute",
                    snippet=snippet(control),
                    wcag=["3.3.1", "3.3.2"],
                    help="Add a title attribute to explain the required format",
                )
            )
