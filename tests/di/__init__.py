"""Mock providers for testing."""

from .hackernews import MockHackerNewsProvider
from .container import build_test_container

__all__ = [
    "MockHackerNewsProvider",
    "build_test_container",
]
