"""Suggestion provider manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from wcag_scanner.suggestions.base import SuggestionProvider


@dataclass(frozen=True, kw_only=True)
class SuggestionProviderManifest[ConfigT: BaseModel]:
    """Manifest describing a suggestion provider plugin.

    The manifest references the configuration class and the provider factory
    so providers can be loaded lazily by key.
    """

    config_cls: type[ConfigT]
    provider_factory: Callable[
        [ConfigT], AbstractAsyncContextManager[SuggestionProvider]
    ]
