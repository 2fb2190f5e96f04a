"""Story root entity."""

from pydantic import Field

from threadline.domain.model.common import DomainModel
from threadline.domain.model.item import ItemRecord
from threadline.domain.value import ItemId


class StoryRoot(DomainModel):
    """The item being discussed.

    ``total_descendant_count`` is the source's authoritative comment count and
    decides when top-level pagination is exhausted. It is None when the source
    sent no count; pagination then runs until the top-level ids run out.
    """

    id: ItemId
    title: str = ""
    author: str = "[deleted]"
    created_at: int = 0
    total_descendant_count: int | None = Field(default=None, ge=0)
    top_level_child_ids: list[ItemId] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: ItemRecord) -> "StoryRoot":
        """Build a story root from its raw item."""
        return cls(
            id=record.id,
            title=record.title or "",
            author=record.by or "[deleted]",
            created_at=record.time,
            total_descendant_count=record.descendants,
            top_level_child_ids=list(record.kids),
        )
