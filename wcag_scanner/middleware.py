"""aiohttp middleware that scans outgoing HTML responses."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from html import escape

from aiohttp import web

from wcag_scanner.api import scan_html
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import ScanResults

log = logging.getLogger(__name__)

DEFAULT_HEADER_NAME = "X-WCAG-Violations"
PANEL_ID = "wcag-scanner-report"
PANEL_LIMIT = 5

type ViolationCallback = Callable[[ScanResults, web.Request], Awaitable[None]]
type Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]
type Middleware = Callable[[web.Request, Handler], Awaitable[web.StreamResponse]]


@dataclass(frozen=True, kw_only=True)
class MiddlewareOptions:
    """Options for the scanning middleware."""

    scanner_options: ScannerOptions = field(default_factory=ScannerOptions)
    enabled: bool = True
    header_name: str = DEFAULT_HEADER_NAME
    inline_report: bool = False
    on_violation: ViolationCallback | None = None


def should_process_request(request: web.Request) -> bool:
    """Whether a request is a page view that should be scanned."""
    if request.method != "GET":
        return False
    if request.path.startswith("/api/"):
        return False
    accept = request.headers.get("Accept", "")
    return "html" in accept or "*/*" in accept


def is_html_response(response: web.Response) -> bool:
    """Whether a response carries an in-memory HTML body."""
    return isinstance(response.body, bytes) and "html" in response.content_type


def render_panel(results: ScanResults) -> str:
    """Render the floating panel listing the first violations."""
    items = []
    for violation in results.violations[:PANEL_LIMIT]:
        parts = [f'<div style="font-weight:bold">{escape(violation.description)}</div>']
        if violation.help:
            parts.append(f'<div style="font-size:14px">{escape(violation.help)}</div>')
        if violation.element is not None:
            label = violation.element.tag_name
            if violation.element.id:
                label += f" #{violation.element.id}"
            parts.append(f'<div style="font-size:13px;color:#666">{escape(label)}</div>')
        items.append(
            '<li style="margin-bottom:15px;padding-bottom:15px;border-bottom:1px solid #eee">'
            + "".join(parts)
            + "</li>"
        )
    if (remaining := len(results.violations) - PANEL_LIMIT) > 0:
        items.append(f'<li style="text-align:center;color:#666">+{remaining} more issues</li>')

    return (
        f'<div id="{PANEL_ID}" role="region" aria-label="Accessibility issues" style="'
        "position:fixed;bottom:20px;right:20px;z-index:9999;background:#fff;"
        "border:2px solid #e53935;border-radius:8px;padding:20px;max-width:400px;"
        'max-height:80vh;overflow:auto;font-family:sans-serif;color:#333">'
        f'<h3 style="margin:0 0 15px;color:#b71c1c">'
        f"{len(results.violations)} Accessibility Issues Found</h3>"
        f"<button type=\"button\" onclick=\"document.getElementById('{PANEL_ID}')"
        ".style.display='none'\">Close</button>"
        f'<ul style="list-style:none;padding:0;margin:0">{"".join(items)}</ul>'
        '<div style="font-size:12px;text-align:right;color:#666">Generated by WCAG Scanner</div>'
        "</div>"
    )


def insert_inline_report(html: str, results: ScanResults) -> str:
    """Insert the report panel before </body>, or append it."""
    if not results.violations:
        return html
    panel = render_panel(results)
    if "</body>" in html:
        return html.replace("</body>", f"{panel}</body>", 1)
    return html + panel


def create_middleware(options: MiddlewareOptions | None = None) -> Middleware:
    """Create middleware that scans HTML page responses.

    Scanned responses get a header with the violation count and, optionally,
    an inline report panel. A failed scan leaves the response untouched.

    Args:
        options: Middleware options (defaults apply when omitted)

    Returns:
        aiohttp middleware

    """
    options = options or MiddlewareOptions()

    @web.middleware
    async def wcag_scanner_middleware(
        request: web.Request, handler: Handler
    ) -> web.StreamResponse:
        response = await handler(request)
        if not options.enabled or not should_process_request(request):
            return response
        if not isinstance(response, web.Response) or not is_html_response(response):
            return response

        body = response.text or ""
        try:
            results = await scan_html(
                body, options.scanner_options, base_url=str(request.url)
            )
        except Exception:
            log.exception("Accessibility scan failed for %s", request.path)
            return response

        response.headers[options.header_name] = str(len(results.violations))
        if results.violations:
            log.info(
                "%d accessibility violation(s) on %s", len(results.violations), request.path
            )
            if options.on_violation is not None:
                try:
                    await options.on_violation(results, request)
                except Exception:
                    log.exception("Violation callback failed for %s", request.path)
            if options.inline_report:
                response.text = insert_inline_report(body, results)
        return response

    return wcag_scanner_middleware
