"""Registry of open thread sessions."""

from collections import OrderedDict
from uuid import uuid4

import logfire

from threadline.config import TreeSettings
from threadline.domain.error import NotFoundError
from threadline.domain.model.view import ThreadSnapshot
from threadline.domain.service import ThreadSession
from threadline.domain.source import HighlightSource, ItemSource
from threadline.domain.value import SessionId


class ThreadSessionFactory:
    """Builds thread sessions wired to the configured sources."""

    def __init__(
        self,
        item_source: ItemSource,
        highlight_source: HighlightSource,
        tree_settings: TreeSettings,
    ) -> None:
        self.item_source = item_source
        self.highlight_source = highlight_source
        self.tree_settings = tree_settings

    def __call__(self) -> ThreadSession:
        return ThreadSession(
            item_source=self.item_source,
            highlight_source=self.highlight_source,
            max_depth=self.tree_settings.max_depth,
            page_size=self.tree_settings.page_size,
            snippet_length=self.tree_settings.snippet_length,
            max_chain_hops=self.tree_settings.max_chain_hops,
        )


class ThreadSessionRegistry:
    """Open sessions keyed by id, least recently used evicted first."""

    def __init__(self, session_factory: ThreadSessionFactory, max_sessions: int = 100) -> None:
        """Initialize registry.

        Args:
            session_factory: Factory for new sessions
            max_sessions: Sessions kept open at once
        """
        self.session_factory = session_factory
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[SessionId, ThreadSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    async def create(self) -> tuple[SessionId, ThreadSession]:
        """Create and register a new session, evicting the stalest if full.

        Returns:
            Tuple of (session id, session)
        """
        while len(self._sessions) >= self.max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            await evicted.close_story()
            logfire.info("Thread session evicted", session_id=str(evicted_id))

        session_id = SessionId(uuid4())
        session = self.session_factory()
        self._sessions[session_id] = session
        return session_id, session

    def get(self, session_id: SessionId) -> ThreadSession:
        """Look up a session and mark it as recently used.

        Raises:
            NotFoundError: No such session
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError("Thread session", str(session_id))
        self._sessions.move_to_end(session_id)
        return session

    async def close(self, session_id: SessionId) -> ThreadSnapshot:
        """Close a session's story and forget the session.

        Raises:
            NotFoundError: No such session
        """
        session = self.get(session_id)
        del self._sessions[session_id]
        return await session.close_story()

    async def close_all(self) -> None:
        """Close every session, used on shutdown."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await session.close_story()
