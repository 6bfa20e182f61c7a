"""Models for scan results shared by every rule."""

from collections.abc import Mapping, Sequence
from typing import Literal

from pydantic import Field, field_validator

from wcag_scanner.models.base import Model

type ImpactLevel = Literal["critical", "serious", "moderate", "minor"]

IMPACT_ORDER: Sequence[ImpactLevel] = ("critical", "serious", "moderate", "minor")

SNIPPET_LIMIT = 150
ELLIPSIS = "..."


def truncate(text: str, limit: int = SNIPPET_LIMIT) -> str:
    """Cap text at limit characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


class ElementInfo(Model):
    """Snapshot of an inspected element, detached from the document."""

    tag_name: str
    id: str | None = None
    classes: Sequence[str] | None = None
    role: str | None = None
    type: str | None = None
    name: str | None = None
    href: str | None = None
    src: str | None = None
    text: str | None = None
    attr_name: str | None = None
    attr_value: str | None = None
    tabindex: str | None = None
    target: str | None = None
    shape: str | None = None
    coords: str | None = None


class FixSuggestion(Model):
    """Remediation proposal attached to a violation by a suggestion provider."""

    code: str | None = None
    description: str
    explanation: str | None = None


class ResultItem(Model):
    """Fields common to passes, warnings and violations."""

    rule: str = Field(..., description="Identifier of the specific check")
    description: str = Field(..., description="Human-readable outcome")
    element: ElementInfo | None = None
    snippet: str | None = Field(default=None, description="Truncated markup")

    @field_validator("snippet")
    @classmethod
    def _cap_snippet(cls, value: str | None) -> str | None:
        return truncate(value) if value is not None else None


class Pass(ResultItem):
    """Positive confirmation that a check succeeded."""


class Warning(ResultItem):
    """Potential issue that needs human review."""

    impact: ImpactLevel
    wcag: Sequence[str] = ()
    help: str | None = None


class Violation(ResultItem):
    """Confirmed failure of a WCAG requirement."""

    impact: ImpactLevel
    wcag: Sequence[str] = ()
    help: str | None = None
    help_url: str | None = None
    fix: FixSuggestion | None = None


class ScanResults(Model):
    """Append-only accumulator of rule outcomes.

    Sequences keep insertion order: rule execution order first, then document
    order within a rule. Entries are never merged or removed.
    """

    passes: list[Pass] = Field(default_factory=list)
    violations: list[Violation] = Field(default_factory=list)
    warnings: list[Warning] = Field(default_factory=list)

    def extend(self, other: "ScanResults") -> None:
        """Append every entry of another result set."""
        self.passes.extend(other.passes)
        self.violations.extend(other.violations)
        self.warnings.extend(other.warnings)

    def violations_by_impact(self) -> Mapping[ImpactLevel, Sequence[Violation]]:
        """Group violations for display, most severe first."""
        return {
            impact: [v for v in self.violations if v.impact == impact]
            for impact in IMPACT_ORDER
        }

    def with_fixes(self, fixes: Sequence[FixSuggestion]) -> "ScanResults":
        """Return a copy whose violations carry the given fixes, in order."""
        if len(fixes) != len(self.violations):
            raise ValueError(
                f"Expected {len(self.violations)} fixes, got {len(fixes)}"
            )
        return ScanResults(
            passes=list(self.passes),
            violations=[
                violation.model_copy(update={"fix": fix})
                for violation, fix in zip(self.violations, fixes, strict=True)
            ],
            warnings=list(self.warnings),
        )
