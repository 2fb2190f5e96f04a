"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from threadline.config import Settings, TreeSettings
from threadline.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_tree_settings(self, settings: Settings) -> TreeSettings:
        """Provide tree materialization settings."""
        return settings.tree
