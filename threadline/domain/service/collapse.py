"""Collapse/expand bookkeeping for an open thread.

Every collapsed id has at most one owner: the user (single toggle), a
thread-collapse action keyed by its root-level comment, or the
top-level-only action. Bulk actions record only the ids they newly
collapsed, so undoing them never expands something the user collapsed
independently.
"""

from threadline.domain.value import ItemId


class CollapseState:
    """Collapse sets keyed by comment id.

    Knows nothing about tree shape; callers pass in the ids an action
    covers. State is keyed by id only, so it survives tree merges.
    """

    def __init__(self) -> None:
        self.collapsed_ids: set[ItemId] = set()
        self.thread_control_ids: set[ItemId] = set()
        self._thread_actions: dict[ItemId, set[ItemId]] = {}
        self._top_level_only: set[ItemId] | None = None

    @property
    def thread_collapsed_ids(self) -> set[ItemId]:
        """Ids currently collapsed by a thread-collapse action."""
        ids: set[ItemId] = set()
        for owned in self._thread_actions.values():
            ids |= owned
        return ids

    @property
    def top_level_only(self) -> bool:
        return self._top_level_only is not None

    def is_collapsed(self, node_id: ItemId) -> bool:
        return node_id in self.collapsed_ids

    def toggle(
        self, node_id: ItemId, depth: int, subtree_ids: list[ItemId]
    ) -> bool:
        """Flip one node between expanded and collapsed.

        Expanding a node that a thread action collapsed also releases the
        thread-collapse marks on its descendants.

        Args:
            node_id: Node to toggle
            depth: Node depth (non-root nodes get thread controls)
            subtree_ids: Node and its materialized descendants

        Returns:
            True if the node is now collapsed
        """
        if node_id not in self.collapsed_ids:
            self.collapsed_ids.add(node_id)
            if depth > 0:
                self.thread_control_ids.add(node_id)
            return True

        self.collapsed_ids.discard(node_id)
        self.thread_control_ids.discard(node_id)

        if node_id in self.thread_collapsed_ids:
            for owned in self._thread_actions.values():
                released = owned.intersection(subtree_ids)
                owned -= released
                self.collapsed_ids -= released
            self._thread_actions = {
                root: owned for root, owned in self._thread_actions.items() if owned
            }

        if self._top_level_only is not None:
            self._top_level_only.discard(node_id)
        return False

    def collapse_thread(
        self, root_id: ItemId, thread_ids: list[ItemId]
    ) -> set[ItemId]:
        """Collapse a whole root-level thread.

        Args:
            root_id: Root-level comment owning the thread
            thread_ids: Root-level comment and all materialized descendants

        Returns:
            Ids newly collapsed by this action
        """
        newly = {i for i in thread_ids if i not in self.collapsed_ids}
        self.collapsed_ids |= newly
        self._thread_actions.setdefault(root_id, set()).update(newly)
        self.thread_control_ids.clear()
        return newly

    def expand_thread(self, root_id: ItemId) -> set[ItemId]:
        """Undo the thread-collapse recorded for a root-level comment.

        Returns:
            Ids expanded by this call (empty if the thread was not collapsed)
        """
        owned = self._thread_actions.pop(root_id, set())
        self.collapsed_ids -= owned
        return owned

    def toggle_top_level_only(self, non_root_ids: list[ItemId]) -> bool:
        """Collapse every reply, or undo that.

        Args:
            non_root_ids: Every materialized node below depth 0

        Returns:
            True if top-level-only mode is now on
        """
        if self._top_level_only is None:
            newly = {i for i in non_root_ids if i not in self.collapsed_ids}
            self.collapsed_ids |= newly
            self._top_level_only = newly
            self.thread_control_ids.clear()
            return True

        self.collapsed_ids -= self._top_level_only
        self._top_level_only = None
        return False
