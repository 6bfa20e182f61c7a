"""Pydantic models for Gemini generateContent API responses."""

from collections.abc import Sequence

from pydantic import BaseModel


class Part(BaseModel):
    """A piece of generated content."""

    text: str | None = None


class Content(BaseModel):
    """Generated content of a candidate."""

    parts: Sequence[Part] = ()


class Candidate(BaseModel):
    """A candidate response."""

    content: Content | None = None


class GenerateContentResponse(BaseModel):
    """Response from the generateContent API."""

    candidates: Sequence[Candidate] = ()

    @property
    def text(self) -> str:
        """Concatenated text of the first candidate."""
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return "".join(part.text or "" for part in self.candidates[0].content.parts)
