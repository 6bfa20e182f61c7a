"""Tests for the scan orchestrator."""

import logging
from dataclasses import dataclass
from unittest.mock import AsyncMock, Mock

import pytest
from bs4 import BeautifulSoup

from wcag_scanner.dom.style import StyleResolver
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import Pass, ScanResults
from wcag_scanner.registry import RuleRegistry
from wcag_scanner.rules import Rule
from wcag_scanner.scanner import LoadError, NotLoadedError, Scanner


@dataclass(frozen=True, kw_only=True)
class StaticRule(Rule):
    """Rule that reports one pass under a fixed identifier."""

    rule_id: str

    async def check(
        self,
        document: BeautifulSoup,
        style: StyleResolver,
        options: ScannerOptions,
    ) -> ScanResults:
        """Report a single pass."""
        return ScanResults(passes=[Pass(rule=self.rule_id, description="ok")])


@dataclass(frozen=True, kw_only=True)
class FailingRule(Rule):
    """Rule that always raises."""

    async def check(
        self,
        document: BeautifulSoup,
        style: StyleResolver,
        options: ScannerOptions,
    ) -> ScanResults:
        """Raise an error."""
        raise ValueError("boom")


def make_scanner(*rules: tuple[str, Rule]) -> Scanner:
    """Create a scanner running the given rules in order."""
    registry = RuleRegistry()
    for name, rule in rules:
        registry.register(name, rule)
    return Scanner(
        options=ScannerOptions(rules=[name for name, _ in rules]),
        registry=registry,
    )


class TestLifecycle:
    """Tests for the load and scan state machine."""

    async def test_starts_unloaded(self) -> None:
        """New scanners have no document or results."""
        scanner = Scanner()

        assert scanner.state == "unloaded"
        assert scanner.document is None
        assert scanner.results is None

    async def test_scan_before_load_raises(self) -> None:
        """Scanning without a document raises NotLoadedError."""
        with pytest.raises(NotLoadedError):
            await Scanner().scan()

    async def test_load_then_scan(self) -> None:
        """Moves through loaded to scanned."""
        scanner = make_scanner(("a", StaticRule(rule_id="a")))

        await scanner.load("<p>x</p>", "https://example.test/")
        assert scanner.state == "loaded"
        assert scanner.document is not None
        assert scanner.document.base_url == "https://example.test/"

        results = await scanner.scan()

        assert scanner.state == "scanned"
        assert scanner.results is results

    async def test_base_url_defaults_to_options(self) -> None:
        """Falls back to the options' base URL."""
        scanner = Scanner(options=ScannerOptions(base_url="https://docs.test/"))

        await scanner.load("<p>x</p>")

        assert scanner.document is not None
        assert scanner.document.base_url == "https://docs.test/"

    async def test_reload_resets_results(self) -> None:
        """Loading again discards the previous results."""
        scanner = make_scanner(("a", StaticRule(rule_id="a")))
        await scanner.load("<p>one</p>")
        first = await scanner.scan()

        await scanner.load("<p>two</p>")

        assert scanner.state == "loaded"
        assert scanner.results is None
        second = await scanner.scan()
        assert second is not first
        assert len(second.passes) == 1

    async def test_load_failure_raises_load_error(self) -> None:
        """Loader failures surface as LoadError and leave the scanner unloaded."""
        loader = Mock()
        loader.load = AsyncMock(side_effect=ValueError("unreadable"))
        scanner = Scanner(loader=loader)

        with pytest.raises(LoadError, match="unreadable"):
            await scanner.load("<p>x</p>")

        assert scanner.state == "unloaded"


class TestScan:
    """Tests for rule dispatch and aggregation."""

    async def test_results_follow_rule_order(self) -> None:
        """Aggregates in configured rule order."""
        scanner = make_scanner(
            ("second", StaticRule(rule_id="second")),
            ("first", StaticRule(rule_id="first")),
        )
        await scanner.load("<p>x</p>")

        results = await scanner.scan()

        assert [p.rule for p in results.passes] == ["second", "first"]

    async def test_unregistered_rules_are_skipped(self) -> None:
        """Unknown rule names produce no results and no error."""
        registry = RuleRegistry()
        registry.register("a", StaticRule(rule_id="a"))
        scanner = Scanner(
            options=ScannerOptions(rules=["missing", "a"]),
            registry=registry,
        )
        await scanner.load("<p>x</p>")

        results = await scanner.scan()

        assert [p.rule for p in results.passes] == ["a"]

    async def test_failing_rule_does_not_stop_others(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A failing rule is logged and the remaining rules still run."""
        scanner = make_scanner(
            ("broken", FailingRule()),
            ("after", StaticRule(rule_id="after")),
        )
        await scanner.load("<p>x</p>")

        with caplog.at_level(logging.ERROR):
            results = await scanner.scan()

        assert [p.rule for p in results.passes] == ["after"]
        assert "Rule 'broken' failed" in caplog.text

    async def test_overwritten_rule_runs_latest_only(self) -> None:
        """Only the latest registration under a name is invoked."""
        registry = RuleRegistry()
        registry.register("custom", StaticRule(rule_id="old"))
        registry.register("custom", StaticRule(rule_id="new"))
        scanner = Scanner(options=ScannerOptions(rules=["custom"]), registry=registry)
        await scanner.load("<p>x</p>")

        results = await scanner.scan()

        assert [p.rule for p in results.passes] == ["new"]


class TestDefaultRules:
    """End-to-end scans with the built-in rules."""

    async def test_missing_alt(self) -> None:
        """An image without alt yields a critical img-alt violation."""
        scanner = Scanner()
        await scanner.load('<html><body><img src="x.jpg"></body></html>')

        results = await scanner.scan()

        assert results.violations
        img_alt = [v for v in results.violations if v.rule == "img-alt"]
        assert img_alt
        assert all(v.impact == "critical" for v in img_alt)
        assert not [p for p in results.passes if p.rule == "img-alt"]

    async def test_minimal_structure(self) -> None:
        """A minimal valid page passes the document structure checks."""
        scanner = Scanner()
        await scanner.load(
            '<html lang="en"><head><title>T</title></head>'
            "<body><h1>H</h1><main>...</main></body></html>"
        )

        results = await scanner.scan()

        failed = {v.rule for v in results.violations}
        assert not failed & {"html-lang", "document-title", "heading-h1"}

    async def test_made_up_role(self) -> None:
        """Unknown roles are serious ARIA violations."""
        scanner = Scanner()
        await scanner.load('<div role="made-up-role">x</div>')

        results = await scanner.scan()

        assert ("aria-role-valid", "serious") in [
            (v.rule, v.impact) for v in results.violations
        ]

    async def test_keyboard_rule_is_opt_in(self) -> None:
        """The keyboard rule runs only when enabled."""
        html = '<p tabindex="0">x</p>'

        default = Scanner()
        await default.load(html)
        opted_in = Scanner(options=ScannerOptions(rules=["keyboard"]))
        await opted_in.load(html)

        assert "tabindex-non-interactive" not in [
            w.rule for w in (await default.scan()).warnings
        ]
        assert "tabindex-non-interactive" in [
            w.rule for w in (await opted_in.scan()).warnings
        ]
