"""Hacker News item source.

Reads items from the public Firebase API (``/v0/item/{id}.json``).
"""

import httpx
import logfire
from pydantic import ValidationError

from threadline.config import HackerNewsSettings
from threadline.domain.error import ItemNotFoundError, ItemSourceNetworkError
from threadline.domain.model.item import ItemRecord
from threadline.domain.source import ItemSource
from threadline.domain.value import ItemId


def create_http_client(settings: HackerNewsSettings) -> httpx.AsyncClient:
    """Create the shared HTTP client for the item API.

    Args:
        settings: Hacker News API settings

    Returns:
        Client bound to the API base URL; the caller closes it
    """
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=settings.timeout,
        limits=httpx.Limits(max_connections=settings.max_connections),
    )


class HackerNewsItemSource(ItemSource):
    """Item source backed by the Hacker News Firebase API."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize Hacker News item source.

        Args:
            client: HTTP client with the API base URL set
        """
        self.client = client

    async def fetch_item(self, item_id: ItemId) -> ItemRecord:
        """Fetch a single item.

        The API answers unknown ids with a ``null`` body rather than a 404;
        both are treated as not found.

        Args:
            item_id: Item id

        Returns:
            Parsed item record

        Raises:
            ItemNotFoundError: No such item
            ItemSourceNetworkError: Transport error, server error or
                unparseable response
        """
        try:
            response = await self.client.get(f"item/{item_id}.json")
        except httpx.HTTPError as e:
            logfire.warn("Hacker News request failed", item_id=item_id, error=str(e))
            raise ItemSourceNetworkError(item_id, str(e)) from e

        if response.status_code == 404:
            raise ItemNotFoundError(item_id)
        if response.status_code != 200:
            logfire.warn(
                "Hacker News returned an error status",
                item_id=item_id,
                status_code=response.status_code,
            )
            raise ItemSourceNetworkError(item_id, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ItemSourceNetworkError(item_id, "invalid JSON body") from e

        if payload is None:
            raise ItemNotFoundError(item_id)

        try:
            return ItemRecord.model_validate(payload)
        except ValidationError as e:
            logfire.warn("Malformed Hacker News item", item_id=item_id, error=str(e))
            raise ItemSourceNetworkError(item_id, "malformed item") from e
