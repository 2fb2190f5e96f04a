"""Pagination controller: top-level "load more" and per-node "load more replies"."""

import logfire

from threadline.domain.model.story import StoryRoot
from threadline.domain.value import ItemId

from .base import Service
from .materializer import NodeMaterializer
from .tree_store import TreeStore


class PaginationController(Service):
    """Drives incremental loading of one story into its tree store.

    Every load goes through ``TreeStore.merge``. Once :meth:`cancel` is called
    no further merge is applied; loads still in flight return without
    touching the store.
    """

    def __init__(
        self,
        story: StoryRoot,
        store: TreeStore,
        materializer: NodeMaterializer,
        page_size: int = 5,
    ) -> None:
        """Initialize pagination controller.

        Args:
            story: Story being paginated
            store: Tree store receiving every merge
            materializer: Materializer used for all loads
            page_size: Number of top-level comments per page
        """
        self.story = story
        self.store = store
        self.materializer = materializer
        self.page_size = page_size

        # Slice cursor into story.top_level_child_ids
        self.loaded_top_level_count = 0
        self.required_ids: set[ItemId] = set()
        self.exhausted = False
        self.replies_unavailable = False
        self.cancelled = False

    @property
    def has_more_top_level(self) -> bool:
        return (
            not self.exhausted
            and self.loaded_top_level_count < len(self.story.top_level_child_ids)
        )

    def cancel(self) -> None:
        """Stop applying results; called when the story is closed."""
        self.cancelled = True

    async def load_initial(self, required_chain: list[ItemId] | None = None) -> int:
        """Load the first page, forcing the branch of a deep-linked comment.

        When the chain's top-level comment is not on the first page it is
        appended to the batch so the target is materialized immediately.

        Args:
            required_chain: Ancestor chain from the top-level comment down to
                the target, as returned by the path resolver

        Returns:
            Number of nodes added to the store
        """
        if required_chain:
            self.required_ids = set(required_chain)

        batch = self._next_slice()
        if required_chain and required_chain[0] not in batch:
            batch.append(required_chain[0])

        with logfire.span(
            "pagination.load_initial",
            story_id=self.story.id,
            batch=len(batch),
            required=len(self.required_ids),
        ):
            return await self._load_top_level(batch)

    async def load_next_top_level_page(self) -> int:
        """Load the next slice of top-level comments.

        Top-level ids already materialized (e.g. a deep-linked thread pulled
        in early) are skipped. Pagination is marked exhausted when the store
        reaches the story's descendant count (if the source reported one),
        when a page makes no forward progress, or when no ids are left.

        Returns:
            Number of nodes added to the store
        """
        if not self.has_more_top_level:
            return 0

        batch = self._next_slice()
        with logfire.span(
            "pagination.load_next_top_level_page",
            story_id=self.story.id,
            cursor=self.loaded_top_level_count,
            batch=len(batch),
        ):
            return await self._load_top_level(batch)

    def _next_slice(self) -> list[ItemId]:
        top_level = self.story.top_level_child_ids
        batch: list[ItemId] = []
        while not batch and self.loaded_top_level_count < len(top_level):
            end = self.loaded_top_level_count + self.page_size
            page = top_level[self.loaded_top_level_count : end]
            self.loaded_top_level_count += len(page)
            batch = [item_id for item_id in page if item_id not in self.store]
        return batch

    async def _load_top_level(self, batch: list[ItemId]) -> int:
        if not batch:
            self.exhausted = True
            return 0

        failures_before = self.materializer.network_failures
        nodes = await self.materializer.materialize(
            batch, 0, required_ids=self.required_ids
        )
        if self.cancelled:
            logfire.info("Story closed, discarding page", story_id=self.story.id)
            return 0

        total_before = self.store.loaded_total_count
        added = self.store.merge(nodes)

        if not nodes and self.materializer.network_failures > failures_before:
            self.replies_unavailable = True
            logfire.warn(
                "Page produced no comments after fetch failures",
                story_id=self.story.id,
                batch=len(batch),
            )

        if self.store.loaded_total_count <= total_before:
            self.exhausted = True
            logfire.info("No forward progress, pagination stopped", story_id=self.story.id)
        elif (
            self.story.total_descendant_count is not None
            and self.store.loaded_total_count >= self.story.total_descendant_count
        ):
            self.exhausted = True

        return added

    async def load_deeper_replies(self, node_id: ItemId) -> int:
        """Force-load the replies of a node cut at the depth ceiling.

        The node's whole remaining subtree is materialized and merged under
        it; replies already present stay where they are.

        Args:
            node_id: Materialized node to expand

        Returns:
            Number of nodes added to the store

        Raises:
            NotFoundError: Node is not materialized
        """
        node = self.store.get(node_id)
        with logfire.span(
            "pagination.load_deeper_replies",
            node_id=node_id,
            depth=node.depth,
            replies=len(node.child_ids),
        ):
            nodes = await self.materializer.materialize(
                node.child_ids, node.depth + 1, force=True
            )
            if self.cancelled:
                logfire.info("Story closed, discarding replies", node_id=node_id)
                return 0

            added = self.store.merge(nodes, parent_id=node_id)
            self.store.mark_replies_loaded(node_id)
            return added
