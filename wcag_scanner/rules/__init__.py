"""Built-in accessibility rule modules."""

from wcag_scanner.rules.aria import AriaRule
from wcag_scanner.rules.base import Rule
from wcag_scanner.rules.forms import FormsRule
from wcag_scanner.rules.images import ImagesRule
from wcag_scanner.rules.keyboard import KeyboardRule
from wcag_scanner.rules.structure import StructureRule
from wcag_scanner.rules.text_contrast import ContrastRule

__all__ = [
    "AriaRule",
    "ContrastRule",
    "FormsRule",
    "ImagesRule",
    "KeyboardRule",
    "Rule",
    "StructureRule",
]
