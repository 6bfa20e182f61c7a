"""One-call entry points for scanning markup, files and URLs."""

import asyncio
import logging
from pathlib import Path

import aiohttp

from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import ScanResults
from wcag_scanner.registry import RuleRegistry
from wcag_scanner.scanner import Scanner

log = logging.getLogger(__name__)

FETCH_HEADERS = {"Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8"}


async def scan_html(
    html: str | bytes,
    options: ScannerOptions | None = None,
    *,
    base_url: str | None = None,
    registry: RuleRegistry | None = None,
) -> ScanResults:
    """Scan a document given as markup.

    Args:
        html: Raw HTML markup
        options: Scanner options (defaults apply when omitted)
        base_url: URL the markup came from, overriding the options' base URL
        registry: Rule registry to use instead of the built-in rules

    Returns:
        Aggregated scan results

    """
    scanner = Scanner(
        options=options or ScannerOptions(),
        registry=registry or RuleRegistry.with_defaults(),
    )
    await scanner.load(html, base_url)
    return await scanner.scan()


async def scan_file(
    path: str | Path,
    options: ScannerOptions | None = None,
) -> ScanResults:
    """Scan an HTML file; its file:// URI is used as the base URL."""
    path = Path(path).resolve()
    log.info("Scanning file %s", path)
    html = await asyncio.to_thread(path.read_text, encoding="utf-8")
    return await scan_html(html, options, base_url=path.as_uri())


def normalize_url(url: str) -> str:
    """Prefix https:// when the URL has no scheme."""
    if url.startswith(("http://", "https://")):
        return url
    return f"https://{url}"


async def fetch_url(url: str, session: aiohttp.ClientSession) -> str:
    """Fetch a page's markup.

    Raises:
        RuntimeError: If the server does not answer with 200

    """
    async with session.get(url, headers=FETCH_HEADERS) as response:
        if response.status != 200:
            text = await response.text()
            raise RuntimeError(f"Failed to fetch {url}: {response.status} {text}")
        return await response.text()


async def scan_url(
    url: str,
    options: ScannerOptions | None = None,
    session: aiohttp.ClientSession | None = None,
) -> ScanResults:
    """Fetch a page and scan it, using the page URL as the base URL.

    Args:
        url: Page URL; https:// is assumed when no scheme is given
        options: Scanner options (defaults apply when omitted)
        session: Session to fetch with; a short-lived one is created otherwise

    Returns:
        Aggregated scan results

    """
    url = normalize_url(url)
    log.info("Scanning URL %s", url)

    if session is not None:
        html = await fetch_url(url, session)
    else:
        async with aiohttp.ClientSession() as own_session:
            html = await fetch_url(url, own_session)

    return await scan_html(html, options, base_url=url)
