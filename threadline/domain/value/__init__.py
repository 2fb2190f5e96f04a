"""Domain value objects."""

from threadline.domain.value.identifiers import ItemId, SessionId
from threadline.domain.value.types import ItemType, ViewMode

__all__ = [
    # Identifiers
    "ItemId",
    "SessionId",
    # Types
    "ItemType",
    "ViewMode",
]
