"""Domain models."""

from threadline.domain.model.comment import CommentNode, count_forest, forest_ids
from threadline.domain.model.item import ItemRecord
from threadline.domain.model.story import StoryRoot
from threadline.domain.model.view import (
    RecentComment,
    SearchMatch,
    ThreadSnapshot,
    TreeState,
    VisibleComment,
)

__all__ = [
    "CommentNode",
    "ItemRecord",
    "RecentComment",
    "SearchMatch",
    "StoryRoot",
    "ThreadSnapshot",
    "TreeState",
    "VisibleComment",
    "count_forest",
    "forest_ids",
]
