"""Base model configuration for all data structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model with standard configuration.

    Models are frozen and reject unknown fields so that every result value is
    an immutable, serializable snapshot.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
