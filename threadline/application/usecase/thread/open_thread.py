"""Open thread use case."""

from pydantic import BaseModel

from threadline.application.registry import ThreadSessionRegistry
from threadline.application.usecase.base import BaseUseCase
from threadline.domain.value import ItemId

from .common import ThreadResponse


class OpenThreadRequest(BaseModel):
    """Open thread request."""

    story_id: int  # Story id, or any comment id inside the story
    target_id: int | None = None  # Comment that must be materialized


class OpenThreadUseCase(BaseUseCase):
    """Use case for opening a story in a new session."""

    def __init__(self, registry: ThreadSessionRegistry) -> None:
        """Initialize open thread use case.

        Args:
            registry: Session registry
        """
        self.registry = registry

    async def execute(self, request: OpenThreadRequest) -> ThreadResponse:
        """Execute open thread flow.

        A failed open closes and unregisters the new session, so nothing
        is left behind.

        Args:
            request: Story (and optional target) to open

        Returns:
            New session id and the snapshot after the initial load

        Raises:
            NotFoundError: Story does not exist
            ItemSourceNetworkError: Story could not be fetched
        """
        session_id, session = await self.registry.create()
        try:
            snapshot = await session.open_story(
                ItemId(request.story_id),
                ItemId(request.target_id) if request.target_id is not None else None,
            )
        except Exception:
            await self.registry.close(session_id)
            raise

        return ThreadResponse(session_id=str(session_id), snapshot=snapshot)
