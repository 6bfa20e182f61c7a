"""Configuration for the rule-based suggestion provider."""

from pydantic import BaseModel


class RuleBasedConfig(BaseModel):
    """Configuration for the rule-based suggestion provider."""

    alt_text_placeholder: str = "Descriptive text"
    link_text_placeholder: str = "Meaningful text"
    minimum_contrast_ratio: float = 4.5
