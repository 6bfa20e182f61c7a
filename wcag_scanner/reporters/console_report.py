"""Plain-text report for terminals."""

import re

from colorama import Fore, Style

from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import ElementInfo, Pass, ScanResults, Violation, Warning

RULE_WIDTH = 50
CODE_LIMIT = 80

IMPACT_COLORS = {
    "critical": Fore.RED,
    "serious": Fore.RED,
    "moderate": Fore.YELLOW,
    "minor": Fore.BLUE,
}

_WHITESPACE = re.compile(r"\s+")


class _Painter:
    """Wraps text in ANSI colors when enabled."""

    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled

    def __call__(self, text: str, *codes: str) -> str:
        if not self.enabled or not codes:
            return text
        return "".join(codes) + text + Style.RESET_ALL


def element_label(element: ElementInfo) -> str:
    """Short tag#id.class description of an element."""
    label = element.tag_name or "unknown"
    if element.id:
        label += f" #{element.id}"
    if element.classes:
        label += f" .{' '.join(element.classes)}"
    return label


def compact_code(code: str, limit: int = CODE_LIMIT) -> str:
    """Collapse whitespace and shorten markup to fit on one line."""
    code = _WHITESPACE.sub(" ", code)
    if len(code) > limit:
        code = code[: limit - 3] + "..."
    return code


def _details(
    item: Violation | Warning,
    paint: _Painter,
    verbose: bool,
) -> list[str]:
    lines = []
    if item.wcag:
        lines.append(paint(f"   WCAG: {', '.join(item.wcag)}", Style.DIM))
    if item.element is not None:
        lines.append(paint(f"   Element: {element_label(item.element)}", Style.DIM))
    if verbose and item.snippet:
        lines.append(paint(f"   Code: {compact_code(item.snippet)}", Style.DIM))
    if item.help:
        lines.append(paint(f"   Help: {item.help}", Style.DIM))
    return lines


def _pass_lines(index: int, item: Pass, paint: _Painter) -> list[str]:
    lines = ["", paint(f"{index}. {item.description}", Fore.GREEN)]
    if item.element is not None:
        lines.append(paint(f"   Element: {element_label(item.element)}", Style.DIM))
    return lines


def format_console(
    results: ScanResults,
    options: ScannerOptions,
    *,
    color: bool = False,
) -> str:
    """Render results for a terminal.

    Violations are grouped by impact, most severe first. Passes and code
    snippets appear only in verbose mode.

    Args:
        results: Scan results to render
        options: Options of the scan; ``verbose`` controls detail
        color: Emit ANSI color codes

    Returns:
        The report text

    """
    paint = _Painter(color)
    verbose = options.verbose
    rule = paint("-" * RULE_WIDTH, Style.DIM)

    lines = [
        "",
        paint("WCAG Accessibility Scan Results", Style.BRIGHT),
        rule,
        "  ".join(
            [
                paint(f"✓ Passes: {len(results.passes)}", Fore.GREEN),
                paint(f"⚠ Warnings: {len(results.warnings)}", Fore.YELLOW),
                paint(f"✗ Violations: {len(results.violations)}", Fore.RED),
            ]
        ),
        rule,
    ]

    if results.violations:
        lines += ["", paint("VIOLATIONS", Style.BRIGHT, Fore.RED)]
        for impact, violations in results.violations_by_impact().items():
            if not violations:
                continue
            bullet = paint("●", IMPACT_COLORS[impact])
            lines += ["", paint(f"{bullet} {impact.upper()} ({len(violations)})", Style.BRIGHT)]
            for index, violation in enumerate(violations, start=1):
                lines += ["", paint(f"{index}. {violation.description}", Fore.RED)]
                lines += _details(violation, paint, verbose)
                if violation.fix is not None:
                    lines.append(paint(f"   Fix: {violation.fix.description}", Fore.GREEN))

    if results.warnings:
        lines += ["", paint("WARNINGS", Style.BRIGHT, Fore.YELLOW)]
        for index, warning in enumerate(results.warnings, start=1):
            lines += ["", paint(f"{index}. {warning.description}", Fore.YELLOW)]
            lines += _details(warning, paint, verbose)

    if verbose and results.passes:
        lines += ["", paint("PASSES", Style.BRIGHT, Fore.GREEN)]
        for index, item in enumerate(results.passes, start=1):
            lines += _pass_lines(index, item, paint)

    return "\n".join(lines) + "\n"
