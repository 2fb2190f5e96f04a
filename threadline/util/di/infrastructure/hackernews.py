"""Hacker News infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
from dishka import Scope, provide

from threadline.adapter.hackernews import (
    HackerNewsItemSource,
    HttpHighlightSource,
    create_http_client,
)
from threadline.config import Settings
from threadline.domain.source import HighlightSource, ItemSource, NullHighlightSource
from threadline.util.di.base import ProviderBase
from threadline.util.error import ConfigurationError


class HackerNewsProvider(ProviderBase):
    """Hacker News component base."""

    __mock_component__ = "hackernews"


class ProdHackerNewsProvider(HackerNewsProvider):
    """Production provider talking to the Hacker News API."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_http_client(self, settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared item API client, closed on shutdown."""
        client = create_http_client(settings.hackernews)
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_item_source(self, client: httpx.AsyncClient) -> ItemSource:
        """Provide Hacker News item source."""
        return HackerNewsItemSource(client=client)

    @provide(scope=Scope.APP)
    def get_highlight_source(self, settings: Settings) -> HighlightSource:
        """Provide highlight source.

        Raises:
            ConfigurationError: URL template has no {story_id} placeholder
        """
        template = settings.highlights.url_template
        if not template:
            return NullHighlightSource()
        if "{story_id}" not in template:
            raise ConfigurationError(
                "HIGHLIGHTS__URL_TEMPLATE must contain a {story_id} placeholder"
            )
        return HttpHighlightSource(url_template=template, timeout=settings.highlights.timeout)
