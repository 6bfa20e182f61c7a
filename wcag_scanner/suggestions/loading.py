"""Loading of suggestion providers from entry points."""

from importlib.metadata import entry_points
from typing import Any

from wcag_scanner.suggestions.manifest import SuggestionProviderManifest

ENTRY_POINT_GROUP = "wcag_scanner.suggestions"
FALLBACK_PROVIDER = "rule-based"


class SuggestionProviderNotFoundError(Exception):
    """Raised when a suggestion provider is not found."""


def load_suggestion_manifest(key: str) -> SuggestionProviderManifest[Any]:
    """Load a suggestion provider manifest by key.

    Args:
        key: The provider key as registered in pyproject.toml
             (e.g., "rule-based", "gemini")

    Returns:
        The provider manifest instance

    Raises:
        SuggestionProviderNotFoundError: If no provider with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: SuggestionProviderManifest[Any] = entry.load()
            return manifest

    available = [e.name for e in entries]
    raise SuggestionProviderNotFoundError(
        f"Suggestion provider '{key}' not found. Available providers: {available}. "
        f"Use '{FALLBACK_PROVIDER}' for suggestions without an API key."
    )
