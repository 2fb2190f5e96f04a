"""Application layer DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from threadline.application.registry import ThreadSessionFactory, ThreadSessionRegistry
from threadline.application.usecase.thread import (
    CloseThreadUseCase,
    CollapseUseCase,
    GetThreadUseCase,
    LoadMoreUseCase,
    LoadRepliesUseCase,
    OpenThreadUseCase,
    SearchUseCase,
    SetViewModeUseCase,
)
from threadline.config import Settings, TreeSettings
from threadline.domain.source import HighlightSource, ItemSource
from threadline.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed.

    The session registry lives for the whole app; use cases are per request.
    """

    @provide(scope=Scope.APP)
    def get_session_factory(
        self,
        item_source: ItemSource,
        highlight_source: HighlightSource,
        tree_settings: TreeSettings,
    ) -> ThreadSessionFactory:
        """Provide thread session factory."""
        return ThreadSessionFactory(
            item_source=item_source,
            highlight_source=highlight_source,
            tree_settings=tree_settings,
        )

    @provide(scope=Scope.APP)
    async def get_session_registry(
        self, session_factory: ThreadSessionFactory, settings: Settings
    ) -> AsyncIterator[ThreadSessionRegistry]:
        """Provide the session registry, closing every session on shutdown."""
        registry = ThreadSessionRegistry(
            session_factory=session_factory,
            max_sessions=settings.sessions.max_sessions,
        )
        yield registry
        await registry.close_all()

    @provide(scope=Scope.REQUEST)
    def get_open_thread_use_case(
        self, registry: ThreadSessionRegistry
    ) -> OpenThreadUseCase:
        """Provide open thread use case."""
        return OpenThreadUseCase(registry=registry)

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self, registry: ThreadSessionRegistry
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(registry=registry)

    @provide(scope=Scope.REQUEST)
    def get_load_more_use_case(self, registry: ThreadSessionRegistry) -> LoadMoreUseCase:
        """Provide load more use case."""
        return LoadMoreUseCase(registry=registry)

    @provide(scope=Scope.REQUEST)
    def get_load_replies_use_case(
        self, registry: ThreadSessionRegistry
    ) -> LoadRepliesUseCase:
        """Provide load replies use case."""
        return LoadRepliesUseCase(registry=registry)

    @provide(scope=Scope.REQUEST)
    def get_collapse_use_case(self, registry: ThreadSessionRegistry) -> CollapseUseCase:
        """Provide collapse use case."""
        return CollapseUseCase(registry=registry)

    @provide(scope=Scope.REQUEST)
    def get_set_view_mode_use_case(
        self, registry: ThreadSessionRegistry
    ) -> SetViewModeUseCase:
        """Provide set view mode use case."""
        return SetViewModeUseCase(registry=registry)

    @provide(scope=Scope.REQUEST)
    def get_search_use_case(self, registry: ThreadSessionRegistry) -> SearchUseCase:
        """Provide search use case."""
        return SearchUseCase(registry=registry)

    @provide(scope=Scope.REQUEST)
    def get_close_thread_use_case(
        self, registry: ThreadSessionRegistry
    ) -> CloseThreadUseCase:
        """Provide close thread use case."""
        return CloseThreadUseCase(registry=registry)
