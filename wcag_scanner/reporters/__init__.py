"""Report formatters for scan results."""

import logging
from pathlib import Path
from typing import Literal

from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import ScanResults
from wcag_scanner.reporters.console_report import format_console
from wcag_scanner.reporters.html_report import format_html
from wcag_scanner.reporters.json_report import format_json

log = logging.getLogger(__name__)

type ReportFormat = Literal["json", "console", "html"]

REPORT_FORMATS: tuple[ReportFormat, ...] = ("json", "console", "html")


def generate_report(
    results: ScanResults,
    format: str = "json",
    options: ScannerOptions | None = None,
    *,
    color: bool = False,
) -> str:
    """Render results in the requested format.

    Args:
        results: Scan results to render
        format: One of ``json``, ``console`` or ``html``; others fall back to JSON
        options: Options of the scan (defaults apply when omitted)
        color: Emit ANSI colors in console output

    Returns:
        The rendered report

    """
    options = options or ScannerOptions()
    match format:
        case "console":
            return format_console(results, options, color=color)
        case "html":
            return format_html(results, options)
        case "json":
            return format_json(results, options)
        case _:
            log.warning("Unknown report format %r, using json", format)
            return format_json(results, options)


def save_report(report: str, path: str | Path) -> None:
    """Write a rendered report to a file as UTF-8."""
    Path(path).write_text(report, encoding="utf-8")
    log.info("Report saved to %s", path)


__all__ = [
    "REPORT_FORMATS",
    "ReportFormat",
    "format_console",
    "format_html",
    "format_json",
    "generate_report",
    "save_report",
]
