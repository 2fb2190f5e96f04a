"""View projector: nested and recency orders plus search over the tree store.

Projections read the store and never mutate it.
"""

import re

from threadline.domain.model.story import StoryRoot
from threadline.domain.model.view import RecentComment, SearchMatch, VisibleComment

from .base import Service
from .tree_store import TreeStore


def highlight_text(text: str, term: str) -> str:
    """Wrap every case-insensitive occurrence of ``term`` in ``<mark>``.

    The term is matched literally.
    """
    if not term:
        return text
    pattern = re.compile(re.escape(term), re.IGNORECASE)
    return pattern.sub(lambda m: f"<mark>{m.group(0)}</mark>", text)


class ViewProjector(Service):
    """Renders the materialized forest for display."""

    def __init__(self, snippet_length: int = 60) -> None:
        self.snippet_length = snippet_length

    def nested(self, store: TreeStore) -> list[VisibleComment]:
        """Pre-order rows of the forest, honouring collapse state.

        A collapsed node still produces its own row; its replies are skipped
        and counted in ``hidden_reply_count``.
        """
        collapse = store.collapse
        rows: list[VisibleComment] = []
        stack = list(reversed(store.root_ids))
        while stack:
            node_id = stack.pop()
            node = store.get(node_id)
            collapsed = collapse.is_collapsed(node_id)
            rows.append(
                VisibleComment(
                    id=node.id,
                    author=node.author,
                    body_html=node.body_html,
                    created_at=node.created_at,
                    depth=node.depth,
                    parent_id=node.parent_id,
                    collapsed=collapsed,
                    hidden_reply_count=(
                        len(store.subtree_ids(node_id)) - 1 if collapsed else 0
                    ),
                    has_unmaterialized_children=node.has_unmaterialized_children,
                    show_thread_control=node_id in collapse.thread_control_ids,
                    highlighted=node_id in store.highlighted_ids,
                )
            )
            if not collapsed:
                stack.extend(reversed(store.children_of(node_id)))
        return rows

    def recency(self, store: TreeStore, story: StoryRoot) -> list[RecentComment]:
        """Every materialized comment, newest first.

        Top-level comments use the story title as context; replies use the
        start of their parent's body. Ties keep tree order.
        """
        rows: list[RecentComment] = []
        for node in store.walk():
            parent = store.parent_of(node.id)
            if parent is None:
                snippet = story.title
            else:
                snippet = store.get(parent).body_html[: self.snippet_length]
            rows.append(
                RecentComment(
                    id=node.id,
                    author=node.author,
                    body_html=node.body_html,
                    created_at=node.created_at,
                    depth=node.depth,
                    parent_id=node.parent_id,
                    parent_snippet=snippet,
                    highlighted=node.id in store.highlighted_ids,
                )
            )
        rows.sort(key=lambda row: row.created_at, reverse=True)
        return rows

    def search(self, store: TreeStore, term: str) -> list[SearchMatch]:
        """Find comments whose body or author contains ``term``.

        Searches the whole materialized forest in tree order, collapsed
        threads included. A blank term matches nothing.
        """
        needle = term.strip()
        if not needle:
            return []

        lowered = needle.lower()
        matches: list[SearchMatch] = []
        for node in store.walk():
            if lowered in node.body_html.lower() or lowered in node.author.lower():
                matches.append(
                    SearchMatch(
                        id=node.id,
                        author=node.author,
                        depth=node.depth,
                        created_at=node.created_at,
                        highlighted_html=highlight_text(node.body_html, needle),
                    )
                )
        return matches
