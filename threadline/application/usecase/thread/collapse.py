"""Collapse use case."""

from enum import Enum

from threadline.application.registry import ThreadSessionRegistry
from threadline.application.usecase.base import BaseUseCase
from threadline.domain.value import ItemId

from .common import ThreadRequest, ThreadResponse


class CollapseAction(str, Enum):
    """Collapse actions a consumer can take."""

    TOGGLE = "toggle"
    COLLAPSE_THREAD = "collapse-thread"
    EXPAND_THREAD = "expand-thread"
    TOP_LEVEL_ONLY = "top-level-only"


class CollapseRequest(ThreadRequest):
    """Collapse request.

    ``comment_id`` is required for every action except top-level-only.
    """

    action: CollapseAction
    comment_id: int | None = None


class CollapseUseCase(BaseUseCase):
    """Use case for collapse and expand actions."""

    def __init__(self, registry: ThreadSessionRegistry) -> None:
        """Initialize collapse use case.

        Args:
            registry: Session registry
        """
        self.registry = registry

    async def execute(self, request: CollapseRequest) -> ThreadResponse:
        """Execute collapse flow.

        Args:
            request: Session, action and target comment

        Returns:
            Snapshot after the action

        Raises:
            ValueError: Comment id missing for a per-comment action
            NotFoundError: Unknown session or comment not materialized
            StoryNotOpenError: Session has no open story
        """
        session = self.registry.get(request.parsed_session_id)

        if request.action == CollapseAction.TOP_LEVEL_ONLY:
            snapshot = session.toggle_top_level_only()
        else:
            if request.comment_id is None:
                raise ValueError(f"comment_id is required for {request.action.value}")
            comment_id = ItemId(request.comment_id)
            if request.action == CollapseAction.TOGGLE:
                snapshot = session.toggle_collapse(comment_id)
            elif request.action == CollapseAction.COLLAPSE_THREAD:
                snapshot = session.collapse_thread(comment_id)
            else:  # CollapseAction.EXPAND_THREAD
                snapshot = session.expand_thread(comment_id)

        return ThreadResponse(session_id=request.session_id, snapshot=snapshot)
