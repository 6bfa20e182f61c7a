"""Gemini-backed fix suggestions."""

import logging
import re
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp
from pydantic import ValidationError

from wcag_scanner.models.result import FixSuggestion, Violation
from wcag_scanner.suggestions.base import SuggestionProvider
from wcag_scanner.suggestions.gemini.config import GeminiConfig
from wcag_scanner.suggestions.gemini.models import GenerateContentResponse
from wcag_scanner.suggestions.rule_based import RuleBasedSuggestionProvider

log = logging.getLogger(__name__)

PROMPT_TEMPLATE = """As a web accessibility expert, I need a fix for this WCAG issue:
Rule: {rule}
Description: {description}

HTML code with issue:
{snippet}

Please provide a corrected version of the code and a brief explanation."""

NO_CODE = "Unable to generate specific code fix"
NO_EXPLANATION = "Fix the accessibility issue as suggested by the AI"

_CODE_BLOCK = re.compile(r"```(?:html)?\s*([\s\S]*?)\s*```")


def build_prompt(violation: Violation) -> str:
    """Build the remediation prompt for a violation."""
    return PROMPT_TEMPLATE.format(
        rule=violation.rule,
        description=violation.description,
        snippet=violation.snippet or "",
    )


def parse_suggestion(text: str) -> FixSuggestion:
    """Split a model answer into the first code block and the explanation."""
    match = _CODE_BLOCK.search(text)
    code = match.group(1).strip() if match else ""
    explanation = _CODE_BLOCK.sub("", text).strip()
    return FixSuggestion(
        code=code or NO_CODE,
        description="AI-suggested fix",
        explanation=explanation or NO_EXPLANATION,
    )


@dataclass(frozen=True, kw_only=True)
class GeminiSuggestionProvider(SuggestionProvider):
    """Suggestion provider backed by the Gemini generateContent API.

    Any API or response failure falls back to the rule-based suggestion, so a
    suggestion is always returned.
    """

    config: GeminiConfig
    session: aiohttp.ClientSession = field(repr=False)
    fallback: SuggestionProvider = field(default_factory=RuleBasedSuggestionProvider)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: GeminiConfig
    ) -> AsyncGenerator["GeminiSuggestionProvider", None]:
        """Create provider with managed session lifecycle."""
        headers = {
            "x-goog-api-key": config.api_key.get_secret_value(),
            "Content-Type": "application/json",
        }
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    async def suggest(self, violation: Violation) -> FixSuggestion:
        """Ask the model for a fix, falling back to the rule-based template."""
        try:
            text = await self.generate(build_prompt(violation))
        except (
            RuntimeError, TimeoutError, ValueError, aiohttp.ClientError, ValidationError
        ) as e:
            log.warning(
                "Gemini suggestion failed for rule=%s, using rule-based fallback: %s",
                violation.rule,
                e,
            )
            return await self.fallback.suggest(violation)
        return parse_suggestion(text)

    async def generate(self, prompt: str) -> str:
        """Generate text for a prompt.

        Raises:
            RuntimeError: If the API does not answer with 200

        """
        url = f"/v1beta/models/{self.config.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        log.debug("Requesting suggestion from model=%s", self.config.model)
        async with self.session.post(url, json=payload) as response:
            if response.status != 200:
                text = await response.text()
                raise RuntimeError(
                    f"Failed to generate content: {response.status} {text}"
                )
            data = await response.json()

        return GenerateContentResponse.model_validate(data).text
