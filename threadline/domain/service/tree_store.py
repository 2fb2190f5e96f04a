"""Tree store: the canonical materialized forest for one open story.

The forest is held as an arena: node shells keyed by id plus ordered child
edges by id. Attaching replies or updating one node is a map write, never a
recursive rebuild of the nested structure. Nested ``CommentNode`` trees are
produced on demand by :meth:`TreeStore.forest`.

``merge`` is the only way nodes enter the store.
"""

from collections.abc import Iterator

import logfire

from threadline.domain.error import NotFoundError
from threadline.domain.model.comment import CommentNode
from threadline.domain.value import ItemId

from .base import Service
from .collapse import CollapseState


class TreeStore(Service):
    """Arena of materialized comments plus collapse and highlight state."""

    def __init__(self) -> None:
        self._nodes: dict[ItemId, CommentNode] = {}
        self._children: dict[ItemId, list[ItemId]] = {}
        self._parents: dict[ItemId, ItemId | None] = {}
        self._roots: list[ItemId] = []

        self.loaded_total_count = 0
        self.collapse = CollapseState()
        self.highlighted_ids: set[ItemId] = set()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root_ids(self) -> list[ItemId]:
        """Top-level comment ids in display order."""
        return list(self._roots)

    def merge(
        self, incoming: list[CommentNode], parent_id: ItemId | None = None
    ) -> int:
        """Merge a materialized forest into the store.

        Nodes already present (anywhere in the forest) keep their position and
        fields; their incoming replies are merged recursively. New nodes are
        appended after existing siblings, at the top level or under
        ``parent_id``. Re-merging a forest that is already present changes
        nothing.

        Args:
            incoming: Materialized nodes to merge
            parent_id: Attach new top-level nodes of ``incoming`` under this
                node instead of at the story level

        Returns:
            Number of nodes added

        Raises:
            NotFoundError: ``parent_id`` is not in the store
        """
        if parent_id is not None and parent_id not in self._nodes:
            raise NotFoundError("Comment", str(parent_id))

        added = 0
        stack: list[tuple[CommentNode, ItemId | None]] = [
            (node, parent_id) for node in reversed(incoming)
        ]
        while stack:
            node, parent = stack.pop()
            if node.id in self._nodes:
                self._absorb(node)
            else:
                self._attach(node, parent)
                added += 1
            stack.extend((child, node.id) for child in reversed(node.children))

        self.loaded_total_count = self._walk_count()
        logfire.debug(
            "Tree merged",
            added=added,
            parent_id=parent_id,
            loaded_total=self.loaded_total_count,
        )
        return added

    def _attach(self, node: CommentNode, parent_id: ItemId | None) -> None:
        self._nodes[node.id] = node.model_copy(update={"children": []})
        self._children[node.id] = []
        self._parents[node.id] = parent_id
        if parent_id is None:
            self._roots.append(node.id)
        else:
            self._children[parent_id].append(node.id)

    def _absorb(self, node: CommentNode) -> None:
        existing = self._nodes[node.id]
        child_ids = list(existing.child_ids)
        known = set(child_ids)
        child_ids.extend(kid for kid in node.child_ids if kid not in known)

        # A branch stays "cut" only if every load of it was cut
        unmaterialized = (
            existing.has_unmaterialized_children and node.has_unmaterialized_children
        )
        if (
            child_ids != existing.child_ids
            or unmaterialized != existing.has_unmaterialized_children
        ):
            self._nodes[node.id] = existing.model_copy(
                update={
                    "child_ids": child_ids,
                    "has_unmaterialized_children": unmaterialized,
                }
            )

    def _walk_count(self) -> int:
        count = 0
        stack = list(self._roots)
        while stack:
            node_id = stack.pop()
            count += 1
            stack.extend(self._children[node_id])
        return count

    def mark_replies_loaded(self, node_id: ItemId) -> None:
        """Clear the depth-cut flag after a node's replies were force-loaded."""
        shell = self.get(node_id)
        if shell.has_unmaterialized_children:
            self._nodes[node_id] = shell.model_copy(
                update={"has_unmaterialized_children": False}
            )

    def get(self, node_id: ItemId) -> CommentNode:
        """Return a node shell (``children`` left empty).

        Raises:
            NotFoundError: Node is not materialized
        """
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NotFoundError("Comment", str(node_id)) from None

    def children_of(self, node_id: ItemId) -> list[ItemId]:
        """Materialized reply ids of a node, in order."""
        self.get(node_id)
        return list(self._children[node_id])

    def parent_of(self, node_id: ItemId) -> ItemId | None:
        """Materialized parent id, or None for a top-level comment."""
        self.get(node_id)
        return self._parents[node_id]

    def root_ancestor(self, node_id: ItemId) -> ItemId:
        """Top-level comment whose thread contains ``node_id``."""
        current = node_id
        parent = self.parent_of(current)
        while parent is not None:
            current = parent
            parent = self._parents[current]
        return current

    def subtree_ids(self, node_id: ItemId) -> list[ItemId]:
        """Node and all materialized descendants, pre-order."""
        self.get(node_id)
        ids: list[ItemId] = []
        stack = [node_id]
        while stack:
            current = stack.pop()
            ids.append(current)
            stack.extend(reversed(self._children[current]))
        return ids

    def walk(self) -> Iterator[CommentNode]:
        """Yield every node shell in tree pre-order."""
        for root in self._roots:
            for node_id in self.subtree_ids(root):
                yield self._nodes[node_id]

    def node(self, node_id: ItemId) -> CommentNode:
        """Return a node with its materialized subtree attached."""
        shell = self.get(node_id)
        return shell.model_copy(
            update={"children": [self.node(kid) for kid in self._children[node_id]]}
        )

    def forest(self) -> list[CommentNode]:
        """The whole materialized forest as nested nodes, in display order."""
        return [self.node(root) for root in self._roots]

    def toggle_collapse(self, node_id: ItemId) -> bool:
        """Collapse or expand a single node. Returns True if now collapsed."""
        shell = self.get(node_id)
        return self.collapse.toggle(node_id, shell.depth, self.subtree_ids(node_id))

    def collapse_thread(self, node_id: ItemId) -> set[ItemId]:
        """Collapse the root-level thread containing ``node_id``."""
        root = self.root_ancestor(node_id)
        return self.collapse.collapse_thread(root, self.subtree_ids(root))

    def expand_thread(self, node_id: ItemId) -> set[ItemId]:
        """Undo the thread-collapse of the thread containing ``node_id``."""
        return self.collapse.expand_thread(self.root_ancestor(node_id))

    def toggle_top_level_only(self) -> bool:
        """Collapse every reply below the top level, or undo that."""
        roots = set(self._roots)
        return self.collapse.toggle_top_level_only(
            [node.id for node in self.walk() if node.id not in roots]
        )


def merge_and_dedupe(
    existing: list[CommentNode], incoming: list[CommentNode]
) -> list[CommentNode]:
    """Merge two forests by id.

    Pure forest-level form of :meth:`TreeStore.merge`: nodes present in both
    keep their place in ``existing`` with children unioned; nodes only in
    ``incoming`` are appended. Each id appears at most once in the result.

    Args:
        existing: Current forest
        incoming: Newly materialized forest

    Returns:
        Merged forest
    """
    store = TreeStore()
    store.merge(existing)
    store.merge(incoming)
    return store.forest()
