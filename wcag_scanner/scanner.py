"""Scan orchestration: load a document, run enabled rules, aggregate results."""

import logging
from dataclasses import dataclass, field
from typing import Literal

from wcag_scanner.dom import DocumentLoader, LoadedDocument, SoupDocumentLoader
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import ScanResults
from wcag_scanner.registry import RuleRegistry
from wcag_scanner.rules import Rule

log = logging.getLogger(__name__)

type ScannerState = Literal["unloaded", "loaded", "scanned"]


class LoadError(Exception):
    """Raised when markup cannot be turned into a document."""


class NotLoadedError(Exception):
    """Raised when a scan is requested before a document was loaded."""


class RuleExecutionError(Exception):
    """Raised when a rule module fails while checking a document."""

    def __init__(self, rule_name: str) -> None:
        super().__init__(f"Rule '{rule_name}' failed")
        self.rule_name = rule_name


@dataclass(kw_only=True)
class Scanner:
    """Runs registered rule modules against one loaded document at a time.

    The scanner moves from ``unloaded`` to ``loaded`` on a successful load and
    to ``scanned`` once a scan finishes. Loading again discards the previous
    document and results, so one scanner can serve sequential scans.
    """

    options: ScannerOptions = field(default_factory=ScannerOptions)
    registry: RuleRegistry = field(default_factory=RuleRegistry.with_defaults)
    loader: DocumentLoader = field(default_factory=SoupDocumentLoader)

    _document: LoadedDocument | None = field(default=None, init=False, repr=False)
    _results: ScanResults | None = field(default=None, init=False, repr=False)

    @property
    def state(self) -> ScannerState:
        """Current lifecycle state."""
        if self._document is None:
            return "unloaded"
        return "loaded" if self._results is None else "scanned"

    @property
    def document(self) -> LoadedDocument | None:
        """The loaded document, if any."""
        return self._document

    @property
    def results(self) -> ScanResults | None:
        """Results of the last scan of the current document."""
        return self._results

    async def load(self, html: str | bytes, base_url: str | None = None) -> None:
        """Parse markup and make it the document to scan.

        Args:
            html: Raw HTML markup
            base_url: URL the markup was served from (defaults to the options')

        Raises:
            LoadError: If the loader cannot produce a document

        """
        self._document = None
        self._results = None
        try:
            self._document = await self.loader.load(html, base_url or self.options.base_url)
        except Exception as e:
            raise LoadError(f"Failed to load document: {e}") from e
        log.debug("Loaded document from %s", self._document.base_url)

    async def scan(self) -> ScanResults:
        """Run every enabled rule in order and aggregate their outcomes.

        Unregistered rule names are skipped. A rule that fails is logged and
        contributes nothing; the remaining rules still run.

        Returns:
            Fresh results: rule order first, then document order

        Raises:
            NotLoadedError: If no document has been loaded

        """
        if self._document is None:
            raise NotLoadedError("Load a document before scanning")

        self._results = None
        results = ScanResults()
        log.info("Running %d rule(s) at level %s", len(self.options.rules), self.options.level)

        for name in self.options.rules:
            rule = self.registry.get(name)
            if rule is None:
                log.debug("Skipping unregistered rule %s", name)
                continue
            try:
                outcome = await self._run_rule(name, rule, self._document)
            except RuleExecutionError as e:
                log.error("%s", e, exc_info=e.__cause__)
                continue
            log.debug(
                "Rule %s: passes=%d violations=%d warnings=%d",
                name,
                len(outcome.passes),
                len(outcome.violations),
                len(outcome.warnings),
            )
            results.extend(outcome)

        self._results = results
        return results

    async def _run_rule(self, name: str, rule: Rule, document: LoadedDocument) -> ScanResults:
        try:
            return await rule.check(document.soup, document.style, self.options)
        except Exception as e:
            raise RuleExecutionError(name) from e
