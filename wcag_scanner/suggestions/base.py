"""Abstract base class for fix-suggestion providers."""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from wcag_scanner.models.result import FixSuggestion, ScanResults, Violation

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class SuggestionProvider(ABC):
    """Abstract base for providers that propose remediation for violations."""

    @abstractmethod
    async def suggest(self, violation: Violation) -> FixSuggestion:
        """Propose a fix for a violation.

        Args:
            violation: The violation to remediate

        Returns:
            Suggested code, a short description and an explanation

        """


async def apply_fix_suggestions(
    results: ScanResults,
    provider: SuggestionProvider,
) -> ScanResults:
    """Return a copy of results with a fix attached to every violation.

    Suggestions are requested concurrently; the scan results are not modified.
    """
    if not results.violations:
        return results

    log.info("Requesting fix suggestions for %d violation(s)...", len(results.violations))
    fixes = await asyncio.gather(
        *(provider.suggest(violation) for violation in results.violations)
    )
    return results.with_fixes(fixes)
