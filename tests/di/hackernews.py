"""Mock Hacker News providers for testing."""

from dishka import Scope, provide

from threadline.adapter.inmemory import InMemoryHighlightSource, InMemoryItemSource
from threadline.domain.source import HighlightSource, ItemSource
from threadline.util.di.infrastructure.hackernews import HackerNewsProvider
from tests.factories import SAMPLE_HIGHLIGHTS, SAMPLE_STORY_ID, sample_items


class MockHackerNewsProvider(HackerNewsProvider):
    """Mock Hacker News provider using in-memory sources seeded with the sample story."""

    __is_mock__ = True

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_item_source(self) -> ItemSource:
        """Provide in-memory item source."""
        return InMemoryItemSource(sample_items())

    @provide(scope=Scope.APP)
    def get_highlight_source(self) -> HighlightSource:
        """Provide in-memory highlight source."""
        return InMemoryHighlightSource({SAMPLE_STORY_ID: set(SAMPLE_HIGHLIGHTS)})
