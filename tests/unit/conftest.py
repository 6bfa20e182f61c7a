"""Fixtures for unit tests."""

from typing import Protocol

import pytest

from wcag_scanner.dom import SoupDocumentLoader
from wcag_scanner.models.options import DEFAULT_BASE_URL, ScannerOptions, WcagLevel
from wcag_scanner.models.result import ScanResults
from wcag_scanner.rules import Rule


class RunRuleFn(Protocol):
    """Protocol for rule execution function."""

    async def __call__(self, rule: Rule, html: str, *, level: WcagLevel = "AA") -> ScanResults:
        """Load markup and return the rule's results."""


@pytest.fixture
def run_rule() -> RunRuleFn:
    """Return a function that runs one rule module against markup."""

    async def _run(rule: Rule, html: str, *, level: WcagLevel = "AA") -> ScanResults:
        document = await SoupDocumentLoader().load(html, DEFAULT_BASE_URL)
        return await rule.check(document.soup, document.style, ScannerOptions(level=level))

    return _run
