"""Gemini suggestion provider manifest."""

from wcag_scanner.suggestions.gemini.config import GeminiConfig
from wcag_scanner.suggestions.gemini.provider import GeminiSuggestionProvider
from wcag_scanner.suggestions.manifest import SuggestionProviderManifest

gemini_manifest = SuggestionProviderManifest(
    config_cls=GeminiConfig,
    provider_factory=GeminiSuggestionProvider.from_config,
)
