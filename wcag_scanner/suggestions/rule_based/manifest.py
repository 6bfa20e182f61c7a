"""Rule-based suggestion provider manifest."""

from wcag_scanner.suggestions.manifest import SuggestionProviderManifest
from wcag_scanner.suggestions.rule_based.config import RuleBasedConfig
from wcag_scanner.suggestions.rule_based.provider import RuleBasedSuggestionProvider

rule_based_manifest = SuggestionProviderManifest(
    config_cls=RuleBasedConfig,
    provider_factory=RuleBasedSuggestionProvider.from_config,
)
