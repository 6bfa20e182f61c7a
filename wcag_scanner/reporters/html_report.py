"""Standalone HTML report."""

from collections.abc import Sequence
from datetime import UTC, datetime
from html import escape

from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import Pass, ScanResults, Violation, Warning
from wcag_scanner.reporters.console_report import element_label

STYLESHEET = """
:root {
  --color-critical: #b71c1c;
  --color-serious: #bf360c;
  --color-moderate: #6d4c00;
  --color-minor: #01579b;
  --color-pass: #1b5e20;
  --color-text: #212121;
  --color-card: #f5f5f5;
}
body { font-family: system-ui, sans-serif; line-height: 1.6; color: var(--color-text);
  background: #fff; margin: 0; }
main { max-width: 1200px; margin: 0 auto; padding: 2rem; }
.summary { display: flex; flex-wrap: wrap; gap: 1rem; margin-bottom: 2rem; }
.summary-card { flex: 1; min-width: 200px; padding: 1.5rem; border-radius: 8px;
  background: var(--color-card); text-align: center; }
.summary-number { font-size: 2.5rem; font-weight: 700; }
.result-card { border: 1px solid #ddd; border-radius: 8px; padding: 1rem; margin: 1rem 0; }
.impact-badge { display: inline-block; padding: 0 .5rem; border-radius: 4px; color: #fff;
  font-size: .85rem; text-transform: uppercase; }
.impact-badge.critical { background: var(--color-critical); }
.impact-badge.serious { background: var(--color-serious); }
.impact-badge.moderate { background: var(--color-moderate); }
.impact-badge.minor { background: var(--color-minor); }
.result-meta-label { font-weight: 700; }
pre { background: var(--color-card); padding: .75rem; overflow-x: auto; }
.fix { border-left: 4px solid var(--color-pass); padding-left: .75rem; }
"""


def _meta(label: str, value: str | None) -> str:
    if not value:
        return ""
    return (
        f'<p class="result-meta"><span class="result-meta-label">{escape(label)}:</span> '
        f"{escape(value)}</p>"
    )


def _card(item: Violation | Warning | Pass) -> str:
    parts = ['<article class="result-card">']
    if isinstance(item, Violation | Warning):
        parts.append(
            f'<h3><span class="impact-badge {item.impact}">{item.impact}</span> '
            f"{escape(item.description)}</h3>"
        )
    else:
        parts.append(f"<h3>{escape(item.description)}</h3>")

    parts.append(_meta("Rule", item.rule))
    if item.element is not None:
        parts.append(_meta("Element", element_label(item.element)))
    if isinstance(item, Violation | Warning):
        parts.append(_meta("WCAG", ", ".join(item.wcag)))
        parts.append(_meta("Help", item.help))
    if item.snippet:
        parts.append(f"<pre><code>{escape(item.snippet)}</code></pre>")

    if isinstance(item, Violation) and item.fix is not None:
        parts.append('<div class="fix">')
        parts.append(_meta("Suggested fix", item.fix.description))
        if item.fix.code:
            parts.append(f"<pre><code>{escape(item.fix.code)}</code></pre>")
        if item.fix.explanation:
            parts.append(f"<p>{escape(item.fix.explanation)}</p>")
        parts.append("</div>")
    if isinstance(item, Violation) and item.help_url:
        url = escape(item.help_url, quote=True)
        parts.append(f'<p><a href="{url}">Learn more</a></p>')

    parts.append("</article>")
    return "".join(part for part in parts if part)


def _section(title: str, items: Sequence[Violation | Warning | Pass]) -> str:
    slug = title.lower()
    body = "".join(_card(item) for item in items) or f"<p>No {slug}.</p>"
    return (
        f'<section aria-labelledby="{slug}-heading">'
        f'<h2 id="{slug}-heading">{title} ({len(items)})</h2>{body}</section>'
    )


def format_html(results: ScanResults, options: ScannerOptions) -> str:
    """Render results as a self-contained HTML page.

    Violations are ordered by impact. Passes are listed only in verbose mode.
    """
    violations = [
        violation
        for group in results.violations_by_impact().values()
        for violation in group
    ]
    generated = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")

    sections = [
        _section("Violations", violations),
        _section("Warnings", results.warnings),
    ]
    if options.verbose:
        sections.append(_section("Passes", results.passes))

    cards = "".join(
        f'<div class="summary-card {label.lower()}"><div class="summary-number">{count}</div>'
        f'<div class="summary-label">{label}</div></div>'
        for label, count in (
            ("Violations", len(results.violations)),
            ("Warnings", len(results.warnings)),
            ("Passes", len(results.passes)),
        )
    )

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="UTF-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
        "<title>WCAG Accessibility Report</title>"
        f"<style>{STYLESHEET}</style></head>"
        "<body><main>"
        "<header><h1>WCAG Accessibility Report</h1>"
        f"<p>Level {escape(options.level)} &middot; generated {generated}</p></header>"
        f'<div class="summary">{cards}</div>'
        f"{''.join(sections)}"
        "</main></body></html>\n"
    )
