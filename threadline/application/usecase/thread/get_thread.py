"""Get thread use case."""

from threadline.application.registry import ThreadSessionRegistry
from threadline.application.usecase.base import BaseUseCase

from .common import ThreadRequest, ThreadResponse


class GetThreadUseCase(BaseUseCase):
    """Use case for reading a session's current snapshot."""

    def __init__(self, registry: ThreadSessionRegistry) -> None:
        self.registry = registry

    async def execute(self, request: ThreadRequest) -> ThreadResponse:
        session = self.registry.get(request.parsed_session_id)
        return ThreadResponse(session_id=request.session_id, snapshot=session.snapshot())
