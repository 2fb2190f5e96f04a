"""Domain services."""

from .ancestry import RequiredPathResolver
from .base import Service
from .collapse import CollapseState
from .materializer import NodeMaterializer
from .pagination import PaginationController
from .projection import ViewProjector, highlight_text
from .session import SnapshotListener, ThreadSession
from .tree_store import TreeStore, merge_and_dedupe

__all__ = [
    "CollapseState",
    "NodeMaterializer",
    "PaginationController",
    "RequiredPathResolver",
    "Service",
    "SnapshotListener",
    "ThreadSession",
    "TreeStore",
    "ViewProjector",
    "highlight_text",
    "merge_and_dedupe",
]
