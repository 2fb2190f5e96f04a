"""Hacker News adapter."""

from .client import HackerNewsItemSource, create_http_client
from .highlights import HttpHighlightSource

__all__ = ["HackerNewsItemSource", "HttpHighlightSource", "create_http_client"]
