"""In-memory item source for testing and local development."""

import asyncio

from threadline.domain.error import ItemNotFoundError, ItemSourceNetworkError
from threadline.domain.model.item import ItemRecord
from threadline.domain.source import ItemSource
from threadline.domain.value import ItemId


class InMemoryItemSource(ItemSource):
    """Item source serving records from a dict.

    Ids added with ``fail`` raise a network error instead of resolving.
    ``delay`` makes every fetch yield to the event loop for that long.
    """

    def __init__(self, items: list[ItemRecord] | None = None, delay: float = 0.0) -> None:
        self._items: dict[ItemId, ItemRecord] = {}
        self._failing: set[ItemId] = set()
        self.delay = delay
        self.fetch_count = 0
        for item in items or []:
            self.add(item)

    def add(self, item: ItemRecord) -> ItemRecord:
        self._items[item.id] = item
        return item

    def fail(self, item_id: ItemId) -> None:
        """Make fetches of ``item_id`` fail with a network error."""
        self._failing.add(item_id)

    async def fetch_item(self, item_id: ItemId) -> ItemRecord:
        self.fetch_count += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if item_id in self._failing:
            raise ItemSourceNetworkError(item_id, "simulated failure")
        item = self._items.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item
