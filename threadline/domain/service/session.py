"""Thread session: the consumer-facing surface of the tree engine.

A session holds at most one open story. Every operation returns a
``ThreadSnapshot`` and pushes it to subscribed listeners.

Loads run as tracked tasks. ``close_story`` cancels them; a caller whose load
was cancelled by a close gets the closed snapshot back instead of an error.
"""

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

import logfire

from threadline.domain.error import ChainBrokenError, NotFoundError, StoryNotOpenError
from threadline.domain.model.story import StoryRoot
from threadline.domain.model.view import ThreadSnapshot, TreeState
from threadline.domain.source import HighlightSource, ItemSource, NullHighlightSource
from threadline.domain.value import ItemId, ViewMode

from .ancestry import RequiredPathResolver
from .materializer import NodeMaterializer
from .pagination import PaginationController
from .projection import ViewProjector
from .tree_store import TreeStore

SnapshotListener = Callable[[ThreadSnapshot], None]


class ThreadSession:
    """One open discussion tree and its loading state."""

    def __init__(
        self,
        item_source: ItemSource,
        highlight_source: HighlightSource | None = None,
        max_depth: int = 5,
        page_size: int = 5,
        snippet_length: int = 60,
        max_chain_hops: int = 100,
    ) -> None:
        """Initialize thread session.

        Args:
            item_source: Source of raw items
            highlight_source: Source of highlighted comment ids (optional)
            max_depth: Depth ceiling for materialization
            page_size: Top-level comments per page
            snippet_length: Parent context length in recency view
            max_chain_hops: Hop limit when walking up parent pointers
        """
        self.item_source = item_source
        self.highlight_source = highlight_source or NullHighlightSource()
        self.page_size = page_size

        self.materializer = NodeMaterializer(item_source, max_depth=max_depth)
        self.resolver = RequiredPathResolver(item_source, max_hops=max_chain_hops)
        self.projector = ViewProjector(snippet_length=snippet_length)

        self.story: StoryRoot | None = None
        self.store: TreeStore | None = None
        self.pagination: PaginationController | None = None
        self.view_mode = ViewMode.NESTED
        self.search_term: str | None = None

        # Bumped on every open and close; results of an older generation are dropped
        self._generation = 0
        self._opening = False
        self._loading = False
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[SnapshotListener] = []

    @property
    def is_open(self) -> bool:
        return self.story is not None

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener called with every new snapshot.

        Returns:
            Callable removing the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def open_story(
        self, root_id: ItemId, target_id: ItemId | None = None
    ) -> ThreadSnapshot:
        """Open a story and load its first page of comments.

        ``root_id`` may also be a comment id: the enclosing story is opened
        and the comment becomes the target. When a target is given its whole
        ancestor chain is materialized regardless of depth or page. If the
        chain cannot be resolved the story still opens without it.

        A story already open in this session is closed first. Calling this
        while another open is in progress is a no-op.

        Args:
            root_id: Story (or comment) id
            target_id: Comment that must be materialized

        Returns:
            Snapshot after the initial load

        Raises:
            NotFoundError: The story does not exist
            ItemSourceNetworkError: The story itself could not be fetched
        """
        if self._opening:
            return self.snapshot()
        if self.is_open:
            await self.close_story()

        self._generation += 1
        generation = self._generation
        self._opening = True
        self._publish()
        try:
            with logfire.span(
                "session.open_story", root_id=root_id, target_id=target_id
            ):
                await self._run(self._open(root_id, target_id, generation))
        finally:
            if generation == self._generation:
                self._opening = False
        return self._publish()

    async def _open(
        self, root_id: ItemId, target_id: ItemId | None, generation: int
    ) -> None:
        record = await self.item_source.fetch_item(root_id)
        if not record.is_root:
            target_id = target_id or record.id
            try:
                story_id = await self.resolver.find_story_root(record.id)
            except ChainBrokenError as e:
                raise NotFoundError("Story", str(root_id)) from e
            record = await self.item_source.fetch_item(story_id)

        story = StoryRoot.from_record(record)
        chain, highlights = await asyncio.gather(
            self._resolve_chain(story.id, target_id),
            self.highlight_source.fetch_highlights(story.id),
        )
        if generation != self._generation:
            return

        store = TreeStore()
        store.highlighted_ids = set(highlights)
        if target_id is not None:
            store.highlighted_ids.add(target_id)

        self.story = story
        self.store = store
        self.pagination = PaginationController(
            story, store, self.materializer, page_size=self.page_size
        )
        await self.pagination.load_initial(chain)

        logfire.info(
            "Story opened",
            story_id=story.id,
            target_id=target_id,
            loaded_total=store.loaded_total_count,
            descendants=story.total_descendant_count,
        )

    async def _resolve_chain(
        self, story_id: ItemId, target_id: ItemId | None
    ) -> list[ItemId]:
        if target_id is None or target_id == story_id:
            return []
        try:
            return await self.resolver.resolve_ancestor_chain(target_id, story_id)
        except ChainBrokenError as e:
            logfire.warn(
                "Target chain unresolved, opening without it",
                story_id=story_id,
                target_id=target_id,
                reason=e.reason,
            )
            return []

    async def load_next_top_level_page(self) -> ThreadSnapshot:
        """Load the next page of top-level comments.

        A no-op while another load or an open is in flight.

        Raises:
            StoryNotOpenError: No story is open
        """
        if self._opening:
            return self.snapshot()
        pagination = self._require_open("load more comments").pagination
        if self._busy():
            return self.snapshot()
        return await self._guarded_load(pagination.load_next_top_level_page())

    async def load_deeper_replies(self, node_id: ItemId) -> ThreadSnapshot:
        """Load the replies of a node cut at the depth ceiling.

        A no-op while another load or an open is in flight.

        Raises:
            StoryNotOpenError: No story is open
            NotFoundError: Node is not materialized
        """
        if self._opening:
            return self.snapshot()
        session = self._require_open("load replies")
        session.store.get(node_id)
        if self._busy():
            return self.snapshot()
        return await self._guarded_load(session.pagination.load_deeper_replies(node_id))

    async def _guarded_load(self, load: Coroutine[Any, Any, int]) -> ThreadSnapshot:
        generation = self._generation
        self._loading = True
        self._publish()
        try:
            await self._run(load)
        finally:
            if generation == self._generation:
                self._loading = False
        return self._publish()

    def _busy(self) -> bool:
        return self._loading or self._opening

    async def _run(self, coro: Coroutine[Any, Any, Any]) -> Any:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        try:
            return await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if task.cancelled() and not (current and current.cancelling()):
                logfire.info("Load cancelled by close")
                return None
            raise
        finally:
            self._tasks.discard(task)

    def toggle_collapse(self, node_id: ItemId) -> ThreadSnapshot:
        """Collapse or expand a single comment.

        Raises:
            StoryNotOpenError: No story is open
            NotFoundError: Node is not materialized
        """
        self._require_open("toggle collapse").store.toggle_collapse(node_id)
        return self._publish()

    def collapse_thread(self, node_id: ItemId) -> ThreadSnapshot:
        """Collapse the whole top-level thread containing a comment.

        Raises:
            StoryNotOpenError: No story is open
            NotFoundError: Node is not materialized
        """
        self._require_open("collapse thread").store.collapse_thread(node_id)
        return self._publish()

    def expand_thread(self, node_id: ItemId) -> ThreadSnapshot:
        """Undo a thread collapse.

        Raises:
            StoryNotOpenError: No story is open
            NotFoundError: Node is not materialized
        """
        self._require_open("expand thread").store.expand_thread(node_id)
        return self._publish()

    def toggle_top_level_only(self) -> ThreadSnapshot:
        """Collapse every reply below the top level, or undo that.

        Raises:
            StoryNotOpenError: No story is open
        """
        self._require_open("toggle top-level only").store.toggle_top_level_only()
        return self._publish()

    def set_view_mode(self, mode: ViewMode) -> ThreadSnapshot:
        """Switch between nested and recency views.

        Raises:
            StoryNotOpenError: No story is open
        """
        self._require_open("change view mode")
        self.view_mode = ViewMode(mode)
        return self._publish()

    def search(self, term: str) -> ThreadSnapshot:
        """Search the materialized comments; a blank term clears the search.

        Raises:
            StoryNotOpenError: No story is open
        """
        self._require_open("search")
        self.search_term = term.strip() or None
        return self._publish()

    async def close_story(self) -> ThreadSnapshot:
        """Close the open story, cancelling every outstanding load.

        Nothing loaded after this call is merged. Closing a session with no
        open story just returns the closed snapshot.
        """
        self._generation += 1
        if self.pagination is not None:
            self.pagination.cancel()

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        story_id = self.story.id if self.story else None
        self.story = None
        self.store = None
        self.pagination = None
        self.view_mode = ViewMode.NESTED
        self.search_term = None
        self._opening = False
        self._loading = False

        if story_id is not None:
            logfire.info("Story closed", story_id=story_id, cancelled=len(tasks))
        return self._publish()

    def snapshot(self) -> ThreadSnapshot:
        """Current snapshot, without notifying listeners."""
        if self.story is None or self.store is None or self.pagination is None:
            return ThreadSnapshot(
                is_opening=self._opening,
                view_mode=self.view_mode,
            )

        store = self.store
        collapse = store.collapse
        state = TreeState(
            loaded_top_level_count=self.pagination.loaded_top_level_count,
            loaded_total_count=store.loaded_total_count,
            has_more_top_level=self.pagination.has_more_top_level,
            collapsed_ids=sorted(collapse.collapsed_ids),
            thread_collapsed_ids=sorted(collapse.thread_collapsed_ids),
            thread_control_ids=sorted(collapse.thread_control_ids),
            highlighted_ids=sorted(store.highlighted_ids),
            top_level_only=collapse.top_level_only,
        )

        entries = []
        recent_entries = []
        if self.view_mode == ViewMode.NESTED:
            entries = self.projector.nested(store)
        else:
            recent_entries = self.projector.recency(store, self.story)

        return ThreadSnapshot(
            is_open=True,
            is_opening=self._opening,
            is_loading_more=self._loading,
            story=self.story,
            view_mode=self.view_mode,
            state=state,
            top_level_nodes_in_order=store.forest(),
            entries=entries,
            recent_entries=recent_entries,
            search_term=self.search_term,
            search_matches=(
                self.projector.search(store, self.search_term)
                if self.search_term
                else []
            ),
            replies_unavailable=self.pagination.replies_unavailable,
        )

    def _require_open(self, operation: str) -> "ThreadSession":
        if self.story is None or self.store is None or self.pagination is None:
            raise StoryNotOpenError(operation)
        return self

    def _publish(self) -> ThreadSnapshot:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot
