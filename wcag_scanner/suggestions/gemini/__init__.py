"""Gemini suggestion provider module."""

from wcag_scanner.suggestions.gemini.config import GeminiConfig
from wcag_scanner.suggestions.gemini.manifest import gemini_manifest
from wcag_scanner.suggestions.gemini.provider import GeminiSuggestionProvider

__all__ = ["GeminiConfig", "GeminiSuggestionProvider", "gemini_manifest"]
