"""Read models handed to consumers of an open thread."""

from pydantic import Field

from threadline.domain.model.comment import CommentNode
from threadline.domain.model.common import DomainModel
from threadline.domain.model.story import StoryRoot
from threadline.domain.value import ItemId, ViewMode


class VisibleComment(DomainModel):
    """One row of the nested view."""

    id: ItemId
    author: str
    body_html: str
    created_at: int
    depth: int
    parent_id: ItemId | None
    collapsed: bool = False
    # Materialized replies hidden behind a collapsed node
    hidden_reply_count: int = 0
    has_unmaterialized_children: bool = False
    show_thread_control: bool = False
    highlighted: bool = False


class RecentComment(DomainModel):
    """One row of the recency view, with its parent as context."""

    id: ItemId
    author: str
    body_html: str
    created_at: int
    depth: int
    parent_id: ItemId | None
    parent_snippet: str
    highlighted: bool = False


class SearchMatch(DomainModel):
    """A comment matching a search term."""

    id: ItemId
    author: str
    depth: int
    created_at: int
    highlighted_html: str


class TreeState(DomainModel):
    """Counters and collapse state of an open tree."""

    loaded_top_level_count: int = 0
    loaded_total_count: int = 0
    has_more_top_level: bool = False
    collapsed_ids: list[ItemId] = Field(default_factory=list)
    thread_collapsed_ids: list[ItemId] = Field(default_factory=list)
    thread_control_ids: list[ItemId] = Field(default_factory=list)
    highlighted_ids: list[ItemId] = Field(default_factory=list)
    top_level_only: bool = False


class ThreadSnapshot(DomainModel):
    """Everything needed to render an open thread.

    Only the projection for the current view mode is filled in.
    """

    is_open: bool = False
    is_opening: bool = False
    is_loading_more: bool = False
    story: StoryRoot | None = None
    view_mode: ViewMode = ViewMode.NESTED
    state: TreeState = Field(default_factory=TreeState)
    top_level_nodes_in_order: list[CommentNode] = Field(default_factory=list)
    entries: list[VisibleComment] = Field(default_factory=list)
    recent_entries: list[RecentComment] = Field(default_factory=list)
    search_term: str | None = None
    search_matches: list[SearchMatch] = Field(default_factory=list)
    # A page came back empty because of fetch failures
    replies_unavailable: bool = False

    @property
    def loaded_total_count(self) -> int:
        return self.state.loaded_total_count

    @property
    def has_more_top_level(self) -> bool:
        return self.state.has_more_top_level
