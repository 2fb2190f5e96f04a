"""Node materializer: raw item ids to typed comment nodes."""

import asyncio

import logfire

from threadline.domain.error import ItemNotFoundError, ItemSourceNetworkError
from threadline.domain.model.comment import CommentNode
from threadline.domain.source import ItemSource
from threadline.domain.value import ItemId

from .base import Service


class NodeMaterializer(Service):
    """Builds comment subtrees from item ids under a depth ceiling."""

    def __init__(self, item_source: ItemSource, max_depth: int = 5) -> None:
        """Initialize materializer.

        Args:
            item_source: Source of raw items
            max_depth: Nodes at this depth or deeper keep their replies
                unmaterialized unless forced or on a required path
        """
        self.item_source = item_source
        self.max_depth = max_depth

        # Running count of transient fetch failures, read by pagination
        self.network_failures = 0

    async def materialize(
        self,
        ids: list[ItemId],
        depth: int,
        required_ids: set[ItemId] | None = None,
        force: bool = False,
    ) -> list[CommentNode]:
        """Materialize a batch of sibling ids.

        Siblings are fetched concurrently; the result follows the order of
        ``ids``, not completion order. Missing, failed, dead and deleted items
        are dropped from the batch, except dead or deleted items on a required
        path, which become "[deleted]" placeholders so the target below them
        is still reached.

        A node's replies are materialized when its depth is below the ceiling,
        when ``force`` is set (and then for the whole subtree), or when the
        node or one of its direct replies is in ``required_ids``.

        Args:
            ids: Sibling item ids in display order
            depth: Depth of these siblings (0 = direct replies to the story)
            required_ids: Ids whose branch must be opened regardless of depth
            force: Ignore the depth ceiling for this batch and below

        Returns:
            Materialized nodes in input order
        """
        if not ids:
            return []

        required = required_ids or set()
        with logfire.span(
            "materializer.materialize",
            count=len(ids),
            depth=depth,
            required=len(required),
            force=force,
        ):
            nodes = await asyncio.gather(
                *(self._materialize_one(item_id, depth, required, force) for item_id in ids)
            )
            return [node for node in nodes if node is not None]

    async def _materialize_one(
        self,
        item_id: ItemId,
        depth: int,
        required: set[ItemId],
        force: bool,
    ) -> CommentNode | None:
        try:
            record = await self.item_source.fetch_item(item_id)
        except ItemNotFoundError:
            logfire.warn("Item not found, dropped from batch", item_id=item_id)
            return None
        except ItemSourceNetworkError as e:
            self.network_failures += 1
            logfire.warn(
                "Item fetch failed, dropped from batch",
                item_id=item_id,
                error=e.reason,
            )
            return None

        child_ids = list(record.kids)
        on_required_path = item_id in required or any(kid in required for kid in child_ids)

        if record.is_gone:
            if not on_required_path:
                return None
            # Dead or deleted ancestor of a deep-link target: kept as a blank placeholder
            record = record.model_copy(update={"by": None, "text": None})

        children: list[CommentNode] = []
        depth_cut = False

        if child_ids:
            opens = depth < self.max_depth or force or on_required_path
            if opens:
                children = await self.materialize(
                    child_ids, depth + 1, required_ids=required, force=force
                )
            else:
                depth_cut = True

        return CommentNode(
            id=record.id,
            author=record.by or "[deleted]",
            body_html=record.text or "",
            created_at=record.time,
            depth=depth,
            parent_id=record.parent,
            child_ids=child_ids,
            children=children,
            has_unmaterialized_children=depth_cut,
        )
