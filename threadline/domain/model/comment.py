"""Comment node entity.

A node is one materialized comment. ``child_ids`` is the source's full,
ordered list of replies; ``children`` holds the replies that have actually
been materialized, which may be a strict subset when the branch was cut at
the depth ceiling or some replies were missing/dead.
"""

from typing import Optional

from pydantic import Field

from threadline.domain.model.common import DomainModel
from threadline.domain.value import ItemId


class CommentNode(DomainModel):
    """Materialized comment.

    ``has_unmaterialized_children`` is True only when recursion stopped at the
    depth ceiling. Replies that were fetched and found missing or dead leave
    it False, so the node does not offer a "load more replies" action that
    can never produce anything.
    """

    id: ItemId
    author: str = "[deleted]"
    body_html: str = ""
    created_at: int = 0
    depth: int = Field(default=0, ge=0)
    parent_id: Optional[ItemId] = None
    child_ids: list[ItemId] = Field(default_factory=list)
    children: list["CommentNode"] = Field(default_factory=list)
    has_unmaterialized_children: bool = False

    def iter_subtree(self):
        """Yield this node and every materialized descendant in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count_subtree(self) -> int:
        """Number of materialized nodes in this subtree, including self."""
        return sum(1 for _ in self.iter_subtree())


def count_forest(nodes: list[CommentNode]) -> int:
    """Count all materialized nodes in a forest."""
    return sum(node.count_subtree() for node in nodes)


def forest_ids(nodes: list[CommentNode]) -> list[ItemId]:
    """All ids of a forest in pre-order (duplicates preserved)."""
    return [n.id for root in nodes for n in root.iter_subtree()]
