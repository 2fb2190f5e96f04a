"""In-memory source implementations for testing."""

from .highlight import InMemoryHighlightSource
from .item import InMemoryItemSource

__all__ = ["InMemoryHighlightSource", "InMemoryItemSource"]
