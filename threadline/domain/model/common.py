"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for domain models.

    Models are frozen: the tree store replaces nodes with updated copies
    (``model_copy``) rather than mutating them in place.
    """

    model_config = ConfigDict(frozen=True)
