"""HTTP highlight source.

Fetches ``{"highlights": [id, ...]}`` from a URL built from a template.
"""

import httpx
import logfire

from threadline.domain.source import HighlightSource
from threadline.domain.value import ItemId


class HttpHighlightSource(HighlightSource):
    """Highlight lookup against a configurable JSON endpoint."""

    def __init__(self, url_template: str, timeout: float = 5.0) -> None:
        """Initialize highlight source.

        Args:
            url_template: URL with a ``{story_id}`` placeholder
            timeout: Request timeout in seconds
        """
        self.url_template = url_template
        self.timeout = timeout

    async def fetch_highlights(self, story_id: ItemId) -> set[ItemId]:
        url = self.url_template.format(story_id=story_id)
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, timeout=self.timeout)
        except httpx.HTTPError as e:
            logfire.warn("Highlight request failed", story_id=story_id, error=str(e))
            return set()

        if response.status_code != 200:
            logfire.warn(
                "Highlight request returned an error status",
                story_id=story_id,
                status_code=response.status_code,
            )
            return set()

        try:
            ids = response.json().get("highlights") or []
            return {ItemId(int(i)) for i in ids}
        except (ValueError, TypeError, AttributeError) as e:
            logfire.warn("Malformed highlight response", story_id=story_id, error=str(e))
            return set()
