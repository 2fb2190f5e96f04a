"""Raw item record as returned by the item source."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from threadline.domain.value import ItemId, ItemType


class ItemRecord(BaseModel):
    """Raw item from the source.

    Only the fields the tree engine reads are declared; anything else the
    source sends (score, url, parts...) is ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: ItemId
    type: ItemType = ItemType.COMMENT
    by: Optional[str] = None
    text: Optional[str] = None
    title: Optional[str] = None
    time: int = 0
    kids: list[ItemId] = Field(default_factory=list)
    parent: Optional[ItemId] = None
    dead: bool = False
    deleted: bool = False
    descendants: Optional[int] = None  # Root items only

    @property
    def is_gone(self) -> bool:
        """Dead or deleted items are never materialized."""
        return self.dead or self.deleted

    @property
    def is_root(self) -> bool:
        """True for the item a discussion hangs off (no parent, or a story)."""
        return self.parent is None or self.type == ItemType.STORY
