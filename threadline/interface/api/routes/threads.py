"""Thread routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from threadline.application.usecase.thread import (
    CloseThreadUseCase,
    CollapseAction,
    CollapseRequest,
    CollapseUseCase,
    GetThreadUseCase,
    LoadMoreUseCase,
    LoadRepliesRequest,
    LoadRepliesUseCase,
    OpenThreadRequest,
    OpenThreadUseCase,
    SearchRequest,
    SearchResponse,
    SearchUseCase,
    SetViewModeRequest,
    SetViewModeUseCase,
    ThreadRequest,
    ThreadResponse,
)
from threadline.domain.error import DomainError
from threadline.domain.value import ViewMode
from threadline.interface.error import to_http_exception

router = APIRouter(prefix="/threads", tags=["threads"], route_class=DishkaRoute)


class SetViewModeAPIRequest(BaseModel):
    """API request for switching view mode."""

    view_mode: ViewMode


@router.post("", response_model=ThreadResponse, status_code=status.HTTP_201_CREATED)
async def open_thread(
    request: OpenThreadRequest,
    open_thread_use_case: FromDishka[OpenThreadUseCase],
) -> ThreadResponse:
    """Open a story in a new session and load its first page.

    Args:
        request: Story id and optional deep-link target
        open_thread_use_case: Open thread use case from DI

    Returns:
        Session id and snapshot

    Raises:
        HTTPException: 404 if the story does not exist, 502 if it could not
            be fetched
    """
    try:
        return await open_thread_use_case.execute(request)
    except (DomainError, ValueError) as e:
        logfire.warn("Thread open failed", story_id=request.story_id, error=str(e))
        raise to_http_exception(e)


@router.get("/{session_id}", response_model=ThreadResponse)
async def get_thread(
    session_id: UUID,
    get_thread_use_case: FromDishka[GetThreadUseCase],
) -> ThreadResponse:
    """Get the current snapshot of a session."""
    try:
        return await get_thread_use_case.execute(ThreadRequest(session_id=str(session_id)))
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.post("/{session_id}/more", response_model=ThreadResponse)
async def load_more(
    session_id: UUID,
    load_more_use_case: FromDishka[LoadMoreUseCase],
) -> ThreadResponse:
    """Load the next page of top-level comments."""
    try:
        return await load_more_use_case.execute(ThreadRequest(session_id=str(session_id)))
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.post("/{session_id}/comments/{comment_id}/replies", response_model=ThreadResponse)
async def load_replies(
    session_id: UUID,
    comment_id: int,
    load_replies_use_case: FromDishka[LoadRepliesUseCase],
) -> ThreadResponse:
    """Load the replies of a comment cut at the depth ceiling."""
    try:
        return await load_replies_use_case.execute(
            LoadRepliesRequest(session_id=str(session_id), comment_id=comment_id)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


async def _collapse(
    use_case: CollapseUseCase,
    session_id: UUID,
    action: CollapseAction,
    comment_id: int | None = None,
) -> ThreadResponse:
    try:
        return await use_case.execute(
            CollapseRequest(
                session_id=str(session_id), action=action, comment_id=comment_id
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.post("/{session_id}/comments/{comment_id}/collapse", response_model=ThreadResponse)
async def toggle_collapse(
    session_id: UUID,
    comment_id: int,
    collapse_use_case: FromDishka[CollapseUseCase],
) -> ThreadResponse:
    """Collapse or expand a single comment."""
    return await _collapse(collapse_use_case, session_id, CollapseAction.TOGGLE, comment_id)


@router.post(
    "/{session_id}/comments/{comment_id}/collapse-thread", response_model=ThreadResponse
)
async def collapse_thread(
    session_id: UUID,
    comment_id: int,
    collapse_use_case: FromDishka[CollapseUseCase],
) -> ThreadResponse:
    """Collapse the whole top-level thread containing a comment."""
    return await _collapse(
        collapse_use_case, session_id, CollapseAction.COLLAPSE_THREAD, comment_id
    )


@router.post(
    "/{session_id}/comments/{comment_id}/expand-thread", response_model=ThreadResponse
)
async def expand_thread(
    session_id: UUID,
    comment_id: int,
    collapse_use_case: FromDishka[CollapseUseCase],
) -> ThreadResponse:
    """Undo a thread collapse."""
    return await _collapse(
        collapse_use_case, session_id, CollapseAction.EXPAND_THREAD, comment_id
    )


@router.post("/{session_id}/top-level-only", response_model=ThreadResponse)
async def toggle_top_level_only(
    session_id: UUID,
    collapse_use_case: FromDishka[CollapseUseCase],
) -> ThreadResponse:
    """Collapse every reply below the top level, or undo that."""
    return await _collapse(collapse_use_case, session_id, CollapseAction.TOP_LEVEL_ONLY)


@router.put("/{session_id}/view", response_model=ThreadResponse)
async def set_view_mode(
    session_id: UUID,
    request: SetViewModeAPIRequest,
    set_view_mode_use_case: FromDishka[SetViewModeUseCase],
) -> ThreadResponse:
    """Switch between nested and recency views."""
    try:
        return await set_view_mode_use_case.execute(
            SetViewModeRequest(session_id=str(session_id), view_mode=request.view_mode)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.get("/{session_id}/search", response_model=SearchResponse)
async def search(
    session_id: UUID,
    search_use_case: FromDishka[SearchUseCase],
    q: str = Query(default="", max_length=200),
) -> SearchResponse:
    """Search the materialized comments of a session.

    Args:
        session_id: Session UUID
        search_use_case: Search use case from DI
        q: Search term, matched literally and case-insensitively

    Returns:
        Matching comments with the term wrapped in <mark>
    """
    try:
        return await search_use_case.execute(
            SearchRequest(session_id=str(session_id), term=q)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.delete("/{session_id}", response_model=ThreadResponse)
async def close_thread(
    session_id: UUID,
    close_thread_use_case: FromDishka[CloseThreadUseCase],
) -> ThreadResponse:
    """Close a session, cancelling any loads still in flight."""
    try:
        return await close_thread_use_case.execute(
            ThreadRequest(session_id=str(session_id))
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
