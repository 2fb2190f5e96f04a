"""Load more use cases: next top-level page and deeper replies."""

from threadline.application.registry import ThreadSessionRegistry
from threadline.application.usecase.base import BaseUseCase
from threadline.domain.value import ItemId

from .common import ThreadRequest, ThreadResponse


class LoadRepliesRequest(ThreadRequest):
    """Load deeper replies request."""

    comment_id: int


class LoadMoreUseCase(BaseUseCase):
    """Use case for loading the next page of top-level comments."""

    def __init__(self, registry: ThreadSessionRegistry) -> None:
        """Initialize load more use case.

        Args:
            registry: Session registry
        """
        self.registry = registry

    async def execute(self, request: ThreadRequest) -> ThreadResponse:
        """Execute load more flow.

        Args:
            request: Session to page

        Returns:
            Snapshot after the page was merged (unchanged if a load was
            already in flight)

        Raises:
            NotFoundError: Unknown session
            StoryNotOpenError: Session has no open story
        """
        session = self.registry.get(request.parsed_session_id)
        snapshot = await session.load_next_top_level_page()
        return ThreadResponse(session_id=request.session_id, snapshot=snapshot)


class LoadRepliesUseCase(BaseUseCase):
    """Use case for loading replies cut at the depth ceiling."""

    def __init__(self, registry: ThreadSessionRegistry) -> None:
        """Initialize load replies use case.

        Args:
            registry: Session registry
        """
        self.registry = registry

    async def execute(self, request: LoadRepliesRequest) -> ThreadResponse:
        """Execute load replies flow.

        Args:
            request: Session and comment whose replies to load

        Returns:
            Snapshot after the replies were merged

        Raises:
            NotFoundError: Unknown session or comment not materialized
            StoryNotOpenError: Session has no open story
        """
        session = self.registry.get(request.parsed_session_id)
        snapshot = await session.load_deeper_replies(ItemId(request.comment_id))
        return ThreadResponse(session_id=request.session_id, snapshot=snapshot)
