"""Builders for items, nodes and the sample story used across tests."""

from threadline.domain.model import CommentNode, ItemRecord
from threadline.domain.value import ItemId, ItemType

SAMPLE_STORY_ID = ItemId(100)
SAMPLE_TIME = 1_700_000_000
SAMPLE_HIGHLIGHTS = [ItemId(12)]


def story(
    story_id: int,
    kids: list[int],
    descendants: int | None = None,
    title: str = "Ask HN: How do you read long threads?",
    by: str = "pg",
) -> ItemRecord:
    """Story item; descendants defaults to the number of top-level kids."""
    return ItemRecord(
        id=ItemId(story_id),
        type=ItemType.STORY,
        by=by,
        title=title,
        time=SAMPLE_TIME,
        kids=[ItemId(k) for k in kids],
        descendants=len(kids) if descendants is None else descendants,
    )


def comment(
    comment_id: int,
    parent: int,
    kids: list[int] | None = None,
    by: str | None = "user",
    text: str | None = None,
    time: int = SAMPLE_TIME,
    dead: bool = False,
    deleted: bool = False,
) -> ItemRecord:
    """Comment item."""
    return ItemRecord(
        id=ItemId(comment_id),
        type=ItemType.COMMENT,
        by=by,
        text=text if text is not None else f"Comment {comment_id}",
        time=time,
        kids=[ItemId(k) for k in kids or []],
        parent=ItemId(parent),
        dead=dead,
        deleted=deleted,
    )


def node(
    node_id: int,
    depth: int = 0,
    parent: int | None = None,
    children: list[CommentNode] | None = None,
    child_ids: list[int] | None = None,
    cut: bool = False,
    author: str = "user",
    body: str | None = None,
    created_at: int = 0,
) -> CommentNode:
    """Materialized node; child_ids defaults to the ids of ``children``."""
    children = children or []
    return CommentNode(
        id=ItemId(node_id),
        author=author,
        body_html=body if body is not None else f"Comment {node_id}",
        created_at=created_at,
        depth=depth,
        parent_id=ItemId(parent) if parent is not None else None,
        child_ids=(
            [ItemId(c) for c in child_ids]
            if child_ids is not None
            else [c.id for c in children]
        ),
        children=children,
        has_unmaterialized_children=cut,
    )


def sample_items() -> list[ItemRecord]:
    """Story 100 with seven top-level comments; comment 1 has a four-deep branch.

    100
    ├── 1 ── 11 ── 111 ── 1111
    │    └── 12
    └── 2 .. 7
    """
    t = SAMPLE_TIME
    return [
        story(100, kids=[1, 2, 3, 4, 5, 6, 7], descendants=11),
        comment(1, 100, kids=[11, 12], by="alice", text="Top comment about <i>trees</i>", time=t + 10),
        comment(11, 1, kids=[111], by="bob", text="Reply one", time=t + 20),
        comment(111, 11, kids=[1111], by="carol", text="Deeper reply", time=t + 30),
        comment(1111, 111, by="dave", text="Deepest reply", time=t + 40),
        comment(12, 1, by="erin", text="Reply two", time=t + 50),
        *(comment(n, 100, by=f"user{n}", time=t + n * 100) for n in range(2, 8)),
    ]
