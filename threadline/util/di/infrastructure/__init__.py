"""Infrastructure providers."""

# Import bases
from .hackernews import HackerNewsProvider

# Import implementations (needed for __subclasses__())
from .hackernews import ProdHackerNewsProvider  # noqa: F401

__all__ = [
    "HackerNewsProvider",
    "ProdHackerNewsProvider",
]
