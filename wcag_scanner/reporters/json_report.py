"""JSON report format."""

import json
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import ResultItem, ScanResults, truncate

JSON_SNIPPET_LIMIT = 300


def _items(items: Sequence[ResultItem]) -> list[dict[str, Any]]:
    cleaned = []
    for item in items:
        data = item.model_dump(mode="json", exclude_none=True)
        if "snippet" in data:
            data["snippet"] = truncate(data["snippet"], JSON_SNIPPET_LIMIT)
        cleaned.append(data)
    return cleaned


def build_report(results: ScanResults, options: ScannerOptions) -> dict[str, Any]:
    """Build the JSON-serializable report document."""
    return {
        "summary": {
            "violations": len(results.violations),
            "warnings": len(results.warnings),
            "passes": len(results.passes),
            "timestamp": datetime.now(UTC).isoformat(),
            "options": {
                "level": options.level,
                "rules": list(options.rules),
            },
        },
        "violations": _items(results.violations),
        "warnings": _items(results.warnings),
        "passes": _items(results.passes),
    }


def format_json(results: ScanResults, options: ScannerOptions) -> str:
    """Render results as an indented JSON document."""
    return json.dumps(build_report(results, options), indent=2)
