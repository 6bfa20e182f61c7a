"""Deterministic fix suggestions keyed on rule identifiers."""

import re
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from wcag_scanner.models.result import FixSuggestion, Violation
from wcag_scanner.suggestions.base import SuggestionProvider
from wcag_scanner.suggestions.rule_based.config import RuleBasedConfig

LABEL_TEMPLATE = '<label for="input-id">Descriptive label:</label>\n<input id="input-id">'
LINK_TEMPLATE = '<a href="/">Meaningful link text</a>'

_IMG_TAG = re.compile(r"<img", re.IGNORECASE)
_LINK_OPEN_TAG = re.compile(r"<a\s+[^>]*>")
_NUMBER = re.compile(r"\d+\.?\d*")


@dataclass(frozen=True, kw_only=True)
class RuleBasedSuggestionProvider(SuggestionProvider):
    """Suggests fixes from fixed templates, without any network access.

    Templates are picked by keywords in the rule identifier: ``img-alt``,
    ``contrast``, ``label`` and ``empty-link``. Other rules get a generic
    suggestion built from the violation's help text.
    """

    config: RuleBasedConfig = field(default_factory=RuleBasedConfig)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: RuleBasedConfig
    ) -> AsyncGenerator["RuleBasedSuggestionProvider", None]:
        """Create provider from configuration."""
        yield cls(config=config)

    async def suggest(self, violation: Violation) -> FixSuggestion:
        """Return the template suggestion for the violation's rule."""
        rule = violation.rule
        markup = violation.snippet or ""

        if "img-alt" in rule:
            code = _IMG_TAG.sub(
                f'<img alt="{self.config.alt_text_placeholder}"', markup, count=1
            )
            return FixSuggestion(
                code=code,
                description="Add alt text to image",
                explanation=(
                    "Images need alternative text for screen readers. "
                    f"Example fix: {code}"
                ),
            )

        if "contrast" in rule:
            measured = _NUMBER.search(violation.description)
            ratio = f"{measured.group(0)}:1" if measured else "unknown ratio"
            minimum = f"{self.config.minimum_contrast_ratio:g}"
            return FixSuggestion(
                code=f"/* Increase color contrast to at least {minimum}:1 ratio */",
                description="Increase color contrast",
                explanation=f"Low contrast ({ratio} detected). Use contrast checker tools.",
            )

        if "label" in rule:
            return FixSuggestion(
                code=LABEL_TEMPLATE,
                description="Add form label association",
                explanation="Form elements require associated labels using for/id attributes",
            )

        if "empty-link" in rule:
            code = LINK_TEMPLATE
            if _LINK_OPEN_TAG.search(markup):
                text = self.config.link_text_placeholder
                code = _LINK_OPEN_TAG.sub(lambda m: m.group(0) + text, markup, count=1)
            return FixSuggestion(
                code=code,
                description="Add link content",
                explanation="Anchor tags need discernible text content for screen readers",
            )

        if violation.help:
            explanation = f"{violation.help} Context: {markup}"
        else:
            explanation = f"Address {rule} issue in: {markup}"
        return FixSuggestion(description="Fix needed", explanation=explanation)
