"""Interfaces to external data sources."""

from threadline.domain.source.highlight import HighlightSource, NullHighlightSource
from threadline.domain.source.item import ItemSource

__all__ = [
    "HighlightSource",
    "ItemSource",
    "NullHighlightSource",
]
