"""Item source interface."""

from abc import ABC, abstractmethod

from threadline.domain.model.item import ItemRecord
from threadline.domain.value import ItemId


class ItemSource(ABC):
    """Idempotent point lookup of raw items by id.

    Implementations must be safe to call concurrently for distinct ids.
    No ordering or batching guarantees are assumed.
    """

    @abstractmethod
    async def fetch_item(self, item_id: ItemId) -> ItemRecord:
        """Fetch a single item.

        Args:
            item_id: Source-assigned item id

        Returns:
            The raw item record

        Raises:
            ItemNotFoundError: The source has no such item
            ItemSourceNetworkError: Transient failure reaching the source
        """
        pass
