"""Required-path resolution: walking parent pointers up to the story."""

import logfire

from threadline.domain.error import (
    ChainBrokenError,
    ItemNotFoundError,
    ItemSourceNetworkError,
)
from threadline.domain.source import ItemSource
from threadline.domain.value import ItemId

from .base import Service


class RequiredPathResolver(Service):
    """Resolves the ancestor chain of a deep-linked comment."""

    def __init__(self, item_source: ItemSource, max_hops: int = 100) -> None:
        """Initialize resolver.

        Args:
            item_source: Source of raw items
            max_hops: Maximum parent hops before the chain is considered broken
        """
        self.item_source = item_source
        self.max_hops = max_hops

    async def resolve_ancestor_chain(
        self, target_id: ItemId, story_id: ItemId | None = None
    ) -> list[ItemId]:
        """Resolve the chain from the story's direct reply down to the target.

        Example: for story 1 -> 10 -> 11 -> 12, resolving 12 returns
        ``[10, 11, 12]``. Resolving the story itself returns ``[]``.

        Args:
            target_id: Item to resolve
            story_id: When given, the chain must end at this story

        Returns:
            Ids ordered from the top-level comment down to ``target_id``

        Raises:
            ChainBrokenError: A hop failed, the hop limit was exceeded, or the
                chain ends at a different story than ``story_id``
        """
        with logfire.span(
            "ancestry.resolve_ancestor_chain",
            target_id=target_id,
            story_id=story_id,
        ):
            chain: list[ItemId] = []
            current = target_id

            for _ in range(self.max_hops):
                record = await self._fetch_hop(target_id, current)
                if record.is_root:
                    if story_id is not None and record.id != story_id:
                        raise ChainBrokenError(
                            target_id, f"belongs to story {record.id}, not {story_id}"
                        )
                    chain.reverse()
                    logfire.info(
                        "Ancestor chain resolved",
                        target_id=target_id,
                        root_id=record.id,
                        length=len(chain),
                    )
                    return chain
                chain.append(record.id)
                current = record.parent

            raise ChainBrokenError(target_id, f"exceeded {self.max_hops} hops")

    async def find_story_root(self, item_id: ItemId) -> ItemId:
        """Find the story an item belongs to.

        Lets a thread be opened from any comment id.

        Args:
            item_id: Any item id (a story resolves to itself)

        Returns:
            Id of the enclosing root item

        Raises:
            ChainBrokenError: A hop failed or the hop limit was exceeded
        """
        current = item_id
        for _ in range(self.max_hops):
            record = await self._fetch_hop(item_id, current)
            if record.is_root:
                return record.id
            current = record.parent
        raise ChainBrokenError(item_id, f"exceeded {self.max_hops} hops")

    async def _fetch_hop(self, target_id: ItemId, hop_id: ItemId):
        try:
            return await self.item_source.fetch_item(hop_id)
        except ItemNotFoundError as e:
            raise ChainBrokenError(target_id, f"item {hop_id} not found") from e
        except ItemSourceNetworkError as e:
            raise ChainBrokenError(target_id, e.reason) from e
