"""Scanner configuration consumed by the rule engine."""

from collections.abc import Sequence
from typing import Literal

from pydantic import Field

from wcag_scanner.models.base import Model

type WcagLevel = Literal["A", "AA", "AAA"]

DEFAULT_RULES: Sequence[str] = ("images", "headings", "contrast", "forms", "aria")
DEFAULT_BASE_URL = "https://example.org"


class ScannerOptions(Model):
    """Options for a single scan."""

    level: WcagLevel = Field(default="AA", description="WCAG conformance level")
    rules: Sequence[str] = Field(
        default=DEFAULT_RULES,
        description="Ordered rule names to run (unregistered names are skipped)",
    )
    verbose: bool = Field(
        default=False, description="Include passes and snippets in reports"
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Base URL for relative references"
    )
