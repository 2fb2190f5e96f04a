"""In-memory highlight source for testing."""

from threadline.domain.source import HighlightSource
from threadline.domain.value import ItemId


class InMemoryHighlightSource(HighlightSource):
    """Highlight source backed by a dict of story id to comment ids."""

    def __init__(self, highlights: dict[ItemId, set[ItemId]] | None = None) -> None:
        self._highlights: dict[ItemId, set[ItemId]] = dict(highlights or {})

    def set_highlights(self, story_id: ItemId, ids: set[ItemId]) -> None:
        self._highlights[story_id] = set(ids)

    async def fetch_highlights(self, story_id: ItemId) -> set[ItemId]:
        return set(self._highlights.get(story_id, set()))
