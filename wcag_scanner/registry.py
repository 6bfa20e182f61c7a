"""Registry of rule modules keyed by rule name."""

import logging
from collections.abc import Mapping, Sequence

from wcag_scanner.rules import (
    AriaRule,
    ContrastRule,
    FormsRule,
    ImagesRule,
    KeyboardRule,
    Rule,
    StructureRule,
)

log = logging.getLogger(__name__)


def builtin_rules() -> Mapping[str, Rule]:
    """Return the built-in rule modules by name.

    The structure module answers to both ``structure`` and ``headings``.
    """
    structure = StructureRule()
    return {
        "images": ImagesRule(),
        "headings": structure,
        "structure": structure,
        "contrast": ContrastRule(),
        "forms": FormsRule(),
        "aria": AriaRule(),
        "keyboard": KeyboardRule(),
    }


class RuleRegistry:
    """Name to rule module mapping consulted by the scanner."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    @classmethod
    def with_defaults(cls) -> "RuleRegistry":
        """Create a registry populated with the built-in rules."""
        registry = cls()
        registry.load_defaults()
        return registry

    def register(self, name: str, rule: Rule) -> None:
        """Register a rule module, replacing any rule under the same name."""
        if name in self._rules:
            log.debug("Replacing registered rule %s", name)
        self._rules[name] = rule

    def load_defaults(self) -> None:
        """Register the six built-in rule modules."""
        for name, rule in builtin_rules().items():
            self.register(name, rule)

    def get(self, name: str) -> Rule | None:
        """Return the rule registered under name, if any."""
        return self._rules.get(name)

    def names(self) -> Sequence[str]:
        """Return registered rule names in registration order."""
        return list(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules
