"""Highlight metadata interface."""

from abc import ABC, abstractmethod

from threadline.domain.value import ItemId


class HighlightSource(ABC):
    """Optional lookup of comment ids to mark as highlighted for a story."""

    @abstractmethod
    async def fetch_highlights(self, story_id: ItemId) -> set[ItemId]:
        """Fetch highlighted comment ids for a story.

        Implementations never raise: absence or failure yields an empty set.

        Args:
            story_id: Story item id

        Returns:
            Ids to mark as highlighted
        """
        pass


class NullHighlightSource(HighlightSource):
    """Highlight source used when no highlight service is configured."""

    async def fetch_highlights(self, story_id: ItemId) -> set[ItemId]:
        return set()
