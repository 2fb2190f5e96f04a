"""Shared request/response models for thread use cases."""

from uuid import UUID

from pydantic import BaseModel

from threadline.domain.model.view import ThreadSnapshot
from threadline.domain.value import SessionId


class ThreadRequest(BaseModel):
    """Request addressing an open thread session."""

    session_id: str  # UUID string

    @property
    def parsed_session_id(self) -> SessionId:
        return SessionId(UUID(self.session_id))


class ThreadResponse(BaseModel):
    """Session id plus the thread's current snapshot."""

    session_id: str
    snapshot: ThreadSnapshot
