"""Tests for the JSON report."""

import json
from datetime import datetime

from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.reporters.json_report import JSON_SNIPPET_LIMIT, build_report, format_json
from wcag_scanner.testing.factories import (
    ElementInfoFactory,
    PassFactory,
    ScanResultsFactory,
    ViolationFactory,
    WarningFactory,
)


def test_summary() -> None:
    """Summarizes counts and scan options."""
    results = ScanResultsFactory.build(
        violations=[ViolationFactory.build()],
        warnings=[WarningFactory.build(), WarningFactory.build()],
        passes=[],
    )
    options = ScannerOptions(level="AAA", rules=["images", "forms"])

    report = build_report(results, options)

    summary = report["summary"]
    assert summary["violations"] == 1
    assert summary["warnings"] == 2
    assert summary["passes"] == 0
    assert summary["options"] == {"level": "AAA", "rules": ["images", "forms"]}
    assert datetime.fromisoformat(summary["timestamp"]).tzinfo is not None


def test_drops_empty_fields() -> None:
    """Leaves out fields without a value."""
    results = ScanResultsFactory.build(
        violations=[
            ViolationFactory.build(
                element=ElementInfoFactory.build(tag_name="img", id="hero"),
                help_url=None,
            )
        ]
    )

    violation = build_report(results, ScannerOptions())["violations"][0]

    assert violation["rule"] == "img-alt"
    assert violation["impact"] == "critical"
    assert violation["wcag"] == ["1.1.1"]
    assert "help_url" not in violation
    assert "fix" not in violation
    assert violation["element"]["tag_name"] == "img"
    assert violation["element"]["id"] == "hero"


def test_snippet_limit() -> None:
    """Keeps snippets within the JSON snippet limit."""
    results = ScanResultsFactory.build(passes=[PassFactory.build(snippet="<p>" + "a" * 400)])

    item = build_report(results, ScannerOptions())["passes"][0]

    assert len(item["snippet"]) <= JSON_SNIPPET_LIMIT + 3


def test_format_json_is_parseable() -> None:
    """Renders indented JSON."""
    results = ScanResultsFactory.build(violations=[ViolationFactory.build()])

    output = format_json(results, ScannerOptions())

    assert output.startswith("{\n  ")
    assert json.loads(output)["violations"][0]["description"] == "Image is missing alt text"
