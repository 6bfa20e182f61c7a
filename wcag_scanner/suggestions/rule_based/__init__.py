"""Rule-based suggestion provider module."""

from wcag_scanner.suggestions.rule_based.config import RuleBasedConfig
from wcag_scanner.suggestions.rule_based.manifest import rule_based_manifest
from wcag_scanner.suggestions.rule_based.provider import RuleBasedSuggestionProvider

__all__ = ["RuleBasedConfig", "RuleBasedSuggestionProvider", "rule_based_manifest"]
