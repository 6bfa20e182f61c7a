"""Fix-suggestion providers for violations."""

from wcag_scanner.suggestions.base import SuggestionProvider, apply_fix_suggestions
from wcag_scanner.suggestions.loading import (
    SuggestionProviderNotFoundError,
    load_suggestion_manifest,
)
from wcag_scanner.suggestions.manifest import SuggestionProviderManifest

__all__ = [
    "SuggestionProvider",
    "SuggestionProviderManifest",
    "SuggestionProviderNotFoundError",
    "apply_fix_suggestions",
    "load_suggestion_manifest",
]
