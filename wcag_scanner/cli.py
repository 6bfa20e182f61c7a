"""CLI entry point for the WCAG accessibility scanner."""

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import aiohttp
import colorama
from pydantic import ValidationError

from wcag_scanner.api import scan_file, scan_html, scan_url
from wcag_scanner.models.options import DEFAULT_RULES, ScannerOptions
from wcag_scanner.models.result import ScanResults
from wcag_scanner.reporters import REPORT_FORMATS, generate_report, save_report
from wcag_scanner.scanner import LoadError
from wcag_scanner.suggestions import apply_fix_suggestions, load_suggestion_manifest
from wcag_scanner.suggestions.loading import FALLBACK_PROVIDER

GEMINI_API_KEY_ENV = "GEMINI_API_KEY"


def parse_rules(rules: str | None) -> Sequence[str]:
    """Parse a comma-separated rule list; empty input selects the defaults."""
    if rules is None or not rules.strip():
        return DEFAULT_RULES
    return tuple(rule.strip() for rule in rules.split(",") if rule.strip())


def select_suggestion_provider(environ: Mapping[str, str]) -> tuple[str, dict[str, Any]]:
    """Pick the suggestion provider key and config from the environment."""
    if api_key := environ.get(GEMINI_API_KEY_ENV):
        return "gemini", {"api_key": api_key}
    return FALLBACK_PROVIDER, {}


async def add_fix_suggestions(
    results: ScanResults, environ: Mapping[str, str]
) -> ScanResults:
    """Attach fix suggestions using the provider chosen from the environment."""
    log = logging.getLogger("wcag_scanner")

    provider_key, config_dict = select_suggestion_provider(environ)
    log.info("Loading suggestion provider: %s", provider_key)
    manifest = load_suggestion_manifest(provider_key)
    config = manifest.config_cls(**config_dict)

    async with manifest.provider_factory(config) as provider:
        return await apply_fix_suggestions(results, provider)


def log_results_summary(log: logging.Logger, results: ScanResults) -> None:
    """Log violation counts by impact."""
    log.info(
        "Scan complete: %d violation(s), %d warning(s), %d pass(es)",
        len(results.violations),
        len(results.warnings),
        len(results.passes),
    )
    for impact, violations in results.violations_by_impact().items():
        if violations:
            log.info("  %s: %d", impact, len(violations))


async def run(
    command: str,
    target: str | None,
    options: ScannerOptions,
    report_format: str = "console",
    output: Path | None = None,
    fix: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Scan the requested source, emit the report and return the exit code."""
    log = logging.getLogger("wcag_scanner")
    environ = os.environ if environ is None else environ

    try:
        match command:
            case "scan":
                log.info("Scanning file: %s", target)
                results = await scan_file(Path(target or ""), options)
            case "url":
                log.info("Scanning URL: %s", target)
                results = await scan_url(target or "", options)
            case "stdin":
                log.info("Scanning HTML from stdin")
                html = await asyncio.to_thread(sys.stdin.read)
                results = await scan_html(html, options)
            case _:
                raise ValueError(f"Unknown command: {command}")
    except (LoadError, OSError, RuntimeError, aiohttp.ClientError) as e:
        log.error("Scan failed: %s", e)
        return 1

    if fix and results.violations:
        results = await add_fix_suggestions(results, environ)

    log_results_summary(log, results)

    color = report_format == "console" and output is None and sys.stdout.isatty()
    report = generate_report(results, report_format, options, color=color)

    if output is not None:
        save_report(report, output)
    if output is None or report_format != "html":
        print(report)

    return 1 if results.violations else 0


def _add_scan_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-l",
        "--level",
        choices=("A", "AA", "AAA"),
        default="AA",
        help="WCAG conformance level (default: AA)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=REPORT_FORMATS,
        default="console",
        help="Report format (default: console)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Save the report to this file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Include passes and code snippets in the report",
    )
    parser.add_argument(
        "-r",
        "--rules",
        help="Comma-separated rule names to run (default: %s)" % ",".join(DEFAULT_RULES),
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help=f"Attach fix suggestions (uses Gemini when {GEMINI_API_KEY_ENV} is set)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="wcag-scanner",
        description="Scan HTML files and websites for WCAG accessibility violations",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    scan = commands.add_parser("scan", help="Scan a local HTML file")
    scan.add_argument("target", metavar="file", help="Path to the HTML file")
    _add_scan_options(scan)

    url = commands.add_parser("url", help="Scan a web page")
    url.add_argument("target", metavar="url", help="Page URL (https:// is assumed)")
    _add_scan_options(url)

    stdin = commands.add_parser("stdin", help="Scan HTML read from standard input")
    stdin.set_defaults(target=None)
    _add_scan_options(stdin)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    colorama.just_fix_windows_console()

    try:
        options = ScannerOptions(
            level=args.level,
            rules=parse_rules(args.rules),
            verbose=args.verbose,
        )
    except ValidationError as e:
        logging.getLogger("wcag_scanner").error("Invalid options: %s", e)
        sys.exit(2)

    exit_code = asyncio.run(
        run(
            command=args.command,
            target=args.target,
            options=options,
            report_format=args.format,
            output=args.output,
            fix=args.fix,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
