"""View use cases: view mode and search."""

from pydantic import BaseModel

from threadline.application.registry import ThreadSessionRegistry
from threadline.application.usecase.base import BaseUseCase
from threadline.domain.model.view import SearchMatch
from threadline.domain.value import ViewMode

from .common import ThreadRequest, ThreadResponse


class SetViewModeRequest(ThreadRequest):
    """Set view mode request."""

    view_mode: ViewMode


class SearchRequest(ThreadRequest):
    """Search request."""

    term: str


class SearchResponse(BaseModel):
    """Search response."""

    session_id: str
    term: str
    matches: list[SearchMatch]
    total: int


class SetViewModeUseCase(BaseUseCase):
    """Use case for switching between nested and recency views."""

    def __init__(self, registry: ThreadSessionRegistry) -> None:
        self.registry = registry

    async def execute(self, request: SetViewModeRequest) -> ThreadResponse:
        session = self.registry.get(request.parsed_session_id)
        snapshot = session.set_view_mode(request.view_mode)
        return ThreadResponse(session_id=request.session_id, snapshot=snapshot)


class SearchUseCase(BaseUseCase):
    """Use case for searching the materialized comments of a session."""

    def __init__(self, registry: ThreadSessionRegistry) -> None:
        """Initialize search use case.

        Args:
            registry: Session registry
        """
        self.registry = registry

    async def execute(self, request: SearchRequest) -> SearchResponse:
        """Execute search flow.

        The term stays active on the session, so later snapshots keep
        carrying its matches until a blank search clears it.

        Args:
            request: Session and search term

        Returns:
            Matches in tree order with highlighted bodies

        Raises:
            NotFoundError: Unknown session
            StoryNotOpenError: Session has no open story
        """
        session = self.registry.get(request.parsed_session_id)
        snapshot = session.search(request.term)
        return SearchResponse(
            session_id=request.session_id,
            term=request.term,
            matches=snapshot.search_matches,
            total=len(snapshot.search_matches),
        )
