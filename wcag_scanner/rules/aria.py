"""ARIA roles, required attributes, states and properties."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from wcag_scanner.dom.style import StyleResolver
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import Pass, ScanResults, Violation, Warning
from wcag_scanner.rules.base import Rule, attr, element_info, snippet

VALID_ROLES = frozenset(
    {
        "alert", "alertdialog", "application", "article", "banner", "button",
        "cell", "checkbox", "columnheader", "combobox", "complementary",
        "contentinfo", "definition", "dialog", "directory", "document", "feed",
        "figure", "form", "grid", "gridcell", "group", "heading", "img", "link",
        "list", "listbox", "listitem", "log", "main", "marquee", "math", "menu",
        "menubar", "menuitem", "menuitemcheckbox", "menuitemradio",
        "navigation", "none", "note", "option", "presentation", "progressbar",
        "radio", "radiogroup", "region", "row", "rowgroup", "rowheader",
        "scrollbar", "search", "searchbox", "separator", "slider",
        "spinbutton", "status", "switch", "tab", "table", "tablist",
        "tabpanel", "term", "textbox", "timer", "toolbar", "tooltip", "tree",
        "treegrid", "treeitem",
    }
)  # fmt: skip

VALID_ATTRIBUTES = frozenset(
    {
        "aria-activedescendant", "aria-atomic", "aria-autocomplete",
        "aria-busy", "aria-checked", "aria-colcount", "aria-colindex",
        "aria-colspan", "aria-controls", "aria-current", "aria-describedby",
        "aria-details", "aria-disabled", "aria-dropeffect",
        "aria-errormessage", "aria-expanded", "aria-flowto", "aria-grabbed",
        "aria-haspopup", "aria-hidden", "aria-invalid", "aria-keyshortcuts",
        "aria-label", "aria-labelledby", "aria-level", "aria-live",
        "aria-modal", "aria-multiline", "aria-multiselectable",
        "aria-orientation", "aria-owns", "aria-placeholder", "aria-posinset",
        "aria-pressed", "aria-readonly", "aria-relevant", "aria-required",
        "aria-roledescription", "aria-rowcount", "aria-rowindex",
        "aria-rowspan", "aria-selected", "aria-setsize", "aria-sort",
        "aria-valuemax", "aria-valuemin", "aria-valuenow", "aria-valuetext",
    }
)  # fmt: skip

# aria-pressed also accepts "mixed" and is left out
BOOLEAN_ATTRIBUTES = frozenset(
    {
        "aria-atomic", "aria-busy", "aria-disabled", "aria-expanded",
        "aria-grabbed", "aria-hidden", "aria-modal", "aria-multiline",
        "aria-multiselectable", "aria-readonly", "aria-required",
        "aria-selected",
    }
)  # fmt: skip

_VALUE_RANGE = ("aria-valuemin", "aria-valuemax", "aria-valuenow")

REQUIRED_ATTRIBUTES: Mapping[str, Sequence[str]] = {
    "combobox": ("aria-expanded", "aria-controls"),
    "slider": _VALUE_RANGE,
    "progressbar": _VALUE_RANGE,
    "spinbutton": _VALUE_RANGE,
    "scrollbar": (*_VALUE_RANGE, "aria-controls"),
    "checkbox": ("aria-checked",),
    "radio": ("aria-checked",),
    "switch": ("aria-checked",),
    "menuitemcheckbox": ("aria-checked",),
    "menuitemradio": ("aria-checked",),
}

# Native inputs expose their checked state without aria-checked
NATIVE_STATE_ROLES = frozenset({"checkbox", "radio", "switch", "menuitemcheckbox", "menuitemradio"})

INTERACTIVE_ROLES = frozenset(
    {
        "button", "checkbox", "link", "menuitem", "menuitemcheckbox",
        "menuitemradio", "option", "radio", "slider", "tab",
    }
)  # fmt: skip

NON_INTERACTIVE_TAGS = frozenset(
    {"div", "span", "p", "section", "article", "h1", "h2", "h3", "h4", "h5", "h6"}
)

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

IMPLICIT_ROLES: Mapping[str, str] = {
    "a": "link",
    "button": "button",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "img": "img",
    "ul": "list",
    "ol": "list",
    "li": "listitem",
    "nav": "navigation",
    "main": "main",
    "header": "banner",
    "footer": "contentinfo",
    "aside": "complementary",
    "form": "form",
    "table": "table",
}

INPUT_IMPLICIT_ROLES: Mapping[str, str] = {
    "button": "button",
    "checkbox": "checkbox",
    "radio": "radio",
}


def is_role_allowed(tag_name: str, role: str) -> bool:
    """Whether a valid role may be placed on an element.

    This is a short list of known conflicts, not the full ARIA in HTML
    conformance table.
    """
    if role == "button" and tag_name == "input":
        return False
    if role == "heading" and tag_name in HEADING_TAGS:
        return False
    if role == "link" and tag_name == "a":
        return False
    return not (role in INTERACTIVE_ROLES and tag_name in NON_INTERACTIVE_TAGS)


def implicit_role(tag: Tag) -> str | None:
    """Role an element carries natively, if it is one we track."""
    if tag.name == "input":
        return INPUT_IMPLICIT_ROLES.get((attr(tag, "type") or "text").lower())
    return IMPLICIT_ROLES.get(tag.name)


@dataclass(frozen=True, kw_only=True)
class AriaRule(Rule):
    """Checks ARIA usage against a fixed subset of the WAI-ARIA vocabulary."""

    async def check(
        self,
        document: BeautifulSoup,
        style: StyleResolver,
        options: ScannerOptions,
    ) -> ScanResults:
        """Check roles, required attributes, attribute names and values."""
        results = ScanResults()
        with_role = [tag for tag in document.find_all(attrs={"role": True}) if attr(tag, "role")]
        for tag in with_role:
            self._check_role(tag, results)
        for tag in with_role:
            self._check_required_attributes(tag, results)
        for tag in document.find_all(True):
            self._check_attributes(tag, results)
        for tag in with_role:
            self._check_redundant_role(tag, results)
        return results

    @staticmethod
    def _check_role(tag: Tag, results: ScanResults) -> None:
        role = attr(tag, "role")
        info = element_info(tag, role=role)

        if role not in VALID_ROLES:
            results.violations.append(
                Violation(
                    rule="aria-role-valid",
                    element=info,
                    impact="serious",
                    description=f'Invalid ARIA role: "{role}"',
                    snippet=snippet(tag),
                    wcag=["4.1.2"],
                    help=f'Use only valid ARIA roles. "{role}" is not a valid ARIA role.',
                )
            )
            return

        results.passes.append(
            Pass(
                rule="aria-role-valid",
                element=info,
                description=f'Element has valid ARIA role: "{role}"',
            )
        )
        if not is_role_allowed(tag.name, role):
            results.violations.append(
                Violation(
                    rule="aria-role-compatible",
                    element=info,
                    impact="serious",
                    description=f'ARIA role "{role}" is not allowed on <{tag.name}> element',
                    snippet=snippet(tag),
                    wcag=["4.1.2"],
                    help="Ensure ARIA roles are used on elements that support them",
                )
            )

    @staticmethod
    def _check_required_attributes(tag: Tag, results: ScanResults) -> None:
        role = attr(tag, "role")
        required = REQUIRED_ATTRIBUTES.get(role, ())
        if tag.name == "input" and role in NATIVE_STATE_ROLES:
            required = [name for name in required if name != "aria-checked"]

        info = element_info(tag, role=role)
        for name in required:
            if tag.has_attr(name):
                continue
            results.violations.append(
                Violation(
                    rule="aria-required-attr",
                    element=info,
                    impact="serious",
                    description=(
                        f'Element with role="{role}" is missing required attribute: {name}'
                    ),
                    snippet=snippet(tag),
                    wcag=["4.1.2"],
                    help=f'Elements with role="{role}" must have {name} attribute',
                )
            )

    @staticmethod
    def _check_attributes(tag: Tag, results: ScanResults) -> None:
        for name in tag.attrs:
            if not name.startswith("aria-"):
                continue
            value = attr(tag, name) or ""
            info = element_info(tag, attr_name=name, attr_value=value)

            if name not in VALID_ATTRIBUTES:
                results.violations.append(
                    Violation(
                        rule="aria-valid-attr",
                        element=info,
                        impact="serious",
                        description=f'Invalid ARIA attribute: "{name}"',
                        snippet=snippet(tag),
                        wcag=["4.1.2"],
                        help=(
                            f'Use only valid ARIA attributes. "{name}" '
                            "is not a valid ARIA attribute."
                        ),
                    )
                )
                continue

            results.passes.append(
                Pass(
                    rule="aria-valid-attr",
                    element=info,
                    description=f'Element has valid ARIA attribute: "{name}"',
                )
            )
            if name in BOOLEAN_ATTRIBUTES and value not in {"true", "false"}:
                results.violations.append(
                    Violation(
                        rule="aria-boolean-value",
                        element=info,
                        impact="serious",
                        description=(
                            f'ARIA boolean attribute "{name}" must have value '
                            f'"true" or "false", got "{value}"'
                        ),
                        snippet=snippet(tag),
                        wcag=["4.1.2"],
                        help='Boolean ARIA attributes must have values of either "true" or "false"',
                    )
                )

    @staticmethod
    def _check_redundant_role(tag: Tag, results: ScanResults) -> None:
        role = attr(tag, "role")
        if implicit_role(tag) != role:
            return

        if tag.name == "input":
            input_type = (attr(tag, "type") or "text").lower()
            info = element_info(tag, role=role, type=input_type)
            description = (
                f'Redundant role: <input type="{input_type}"> already has implicit role="{role}"'
            )
        else:
            info = element_info(tag, role=role)
            description = f'Redundant role: <{tag.name}> already has implicit role="{role}"'

        results.warnings.append(
            Warning(
                rule="aria-redundant-role",
                element=info,
                impact="minor",
                description=description,
                snippet=snippet(tag),
                help="Avoid redundant ARIA roles that match the element's implicit role",
            )
        )
