"""Thread use cases."""

from .close_thread import CloseThreadUseCase
from .collapse import CollapseAction, CollapseRequest, CollapseUseCase
from .common import ThreadRequest, ThreadResponse
from .get_thread import GetThreadUseCase
from .load_more import LoadMoreUseCase, LoadRepliesRequest, LoadRepliesUseCase
from .open_thread import OpenThreadRequest, OpenThreadUseCase
from .view import (
    SearchRequest,
    SearchResponse,
    SearchUseCase,
    SetViewModeRequest,
    SetViewModeUseCase,
)

__all__ = [
    "CloseThreadUseCase",
    "CollapseAction",
    "CollapseRequest",
    "CollapseUseCase",
    "GetThreadUseCase",
    "LoadMoreUseCase",
    "LoadRepliesRequest",
    "LoadRepliesUseCase",
    "OpenThreadRequest",
    "OpenThreadUseCase",
    "SearchRequest",
    "SearchResponse",
    "SearchUseCase",
    "SetViewModeRequest",
    "SetViewModeUseCase",
    "ThreadRequest",
    "ThreadResponse",
]
