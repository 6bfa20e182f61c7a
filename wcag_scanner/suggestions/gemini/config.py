"""Configuration for the Gemini suggestion provider."""

from pydantic import BaseModel, SecretStr


class GeminiConfig(BaseModel):
    """Configuration for the Gemini suggestion provider."""

    api_key: SecretStr
    model: str = "gemini-2.0-flash"
    api_base_url: str = "https://generativelanguage.googleapis.com"
