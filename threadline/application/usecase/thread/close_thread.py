"""Close thread use case."""

from threadline.application.registry import ThreadSessionRegistry
from threadline.application.usecase.base import BaseUseCase

from .common import ThreadRequest, ThreadResponse


class CloseThreadUseCase(BaseUseCase):
    """Use case for closing a session and cancelling its loads."""

    def __init__(self, registry: ThreadSessionRegistry) -> None:
        self.registry = registry

    async def execute(self, request: ThreadRequest) -> ThreadResponse:
        snapshot = await self.registry.close(request.parsed_session_id)
        return ThreadResponse(session_id=request.session_id, snapshot=snapshot)
