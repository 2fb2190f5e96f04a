"""Unit tests for ThreadSession."""

import asyncio

import pytest

from threadline.adapter.inmemory import InMemoryHighlightSource, InMemoryItemSource
from threadline.domain.error import NotFoundError, StoryNotOpenError
from threadline.domain.value import ViewMode
from threadline.domain.service import ThreadSession
from tests.factories import SAMPLE_STORY_ID, comment, sample_items, story


@pytest.fixture
def source():
    return InMemoryItemSource(sample_items())


@pytest.fixture
def session(source):
    return ThreadSession(source, InMemoryHighlightSource({SAMPLE_STORY_ID: {12}}))


def _big_story_items(count=15):
    kids = [500 + n for n in range(1, count + 1)]
    return [story(500, kids=kids, descendants=count)] + [comment(n, 500) for n in kids]


class TestOpenStory:
    """Tests for open_story."""

    @pytest.mark.asyncio
    async def test_loads_first_page(self, session):
        snapshot = await session.open_story(SAMPLE_STORY_ID)

        assert snapshot.is_open is True
        assert snapshot.is_opening is False
        assert snapshot.story.id == SAMPLE_STORY_ID
        assert [n.id for n in snapshot.top_level_nodes_in_order] == [1, 2, 3, 4, 5]
        assert snapshot.loaded_total_count == 9
        assert snapshot.has_more_top_level is True
        assert snapshot.state.highlighted_ids == [12]

    @pytest.mark.asyncio
    async def test_target_materialized_beyond_depth_and_first_page(self, source):
        source.add(story(600, kids=[601, 602, 603, 604, 605, 606, 607], descendants=10))
        for n in range(1, 7):
            source.add(comment(n + 600, 600))
        source.add(comment(607, 600, kids=[6071]))
        source.add(comment(6071, 607, kids=[60711]))
        source.add(comment(60711, 6071))
        session = ThreadSession(source, max_depth=0)

        snapshot = await session.open_story(600, target_id=60711)

        assert 60711 in session.store
        assert session.store.parent_of(60711) == 6071
        assert 60711 in snapshot.state.highlighted_ids

    @pytest.mark.asyncio
    async def test_open_from_comment_id_opens_enclosing_story(self, session):
        snapshot = await session.open_story(111)

        assert snapshot.story.id == SAMPLE_STORY_ID
        assert 111 in session.store
        assert 111 in snapshot.state.highlighted_ids

    @pytest.mark.asyncio
    async def test_broken_target_chain_still_opens(self, session):
        snapshot = await session.open_story(SAMPLE_STORY_ID, target_id=424242)

        assert snapshot.is_open is True
        assert snapshot.loaded_total_count == 9

    @pytest.mark.asyncio
    async def test_unknown_story_raises(self, session):
        with pytest.raises(NotFoundError):
            await session.open_story(424242)

        assert session.is_open is False

    @pytest.mark.asyncio
    async def test_reopen_replaces_story(self, session, source):
        for item in _big_story_items():
            source.add(item)
        await session.open_story(SAMPLE_STORY_ID)

        snapshot = await session.open_story(500)

        assert snapshot.story.id == 500
        assert 1111 not in session.store


class TestLoading:
    """Tests for pagination through the session."""

    @pytest.mark.asyncio
    async def test_load_next_page(self, session):
        await session.open_story(SAMPLE_STORY_ID)

        snapshot = await session.load_next_top_level_page()

        assert snapshot.loaded_total_count == 11
        assert snapshot.has_more_top_level is False
        assert snapshot.is_loading_more is False

    @pytest.mark.asyncio
    async def test_load_deeper_replies(self, source):
        session = ThreadSession(source, max_depth=1)
        await session.open_story(SAMPLE_STORY_ID)
        assert session.store.get(11).has_unmaterialized_children is True

        snapshot = await session.load_deeper_replies(11)

        assert 1111 in session.store
        row = next(e for e in snapshot.entries if e.id == 11)
        assert row.has_unmaterialized_children is False

    @pytest.mark.asyncio
    async def test_load_deeper_replies_unknown_node(self, session):
        await session.open_story(SAMPLE_STORY_ID)

        with pytest.raises(NotFoundError):
            await session.load_deeper_replies(424242)

    @pytest.mark.asyncio
    async def test_concurrent_load_more_is_guarded(self):
        session = ThreadSession(InMemoryItemSource(_big_story_items(), delay=0.01))
        await session.open_story(500)

        await asyncio.gather(
            session.load_next_top_level_page(),
            session.load_next_top_level_page(),
        )

        assert session.pagination.loaded_top_level_count == 10
        assert session.store.loaded_total_count == 10

    @pytest.mark.asyncio
    async def test_loading_flag_published_while_in_flight(self):
        session = ThreadSession(InMemoryItemSource(_big_story_items(), delay=0.01))
        await session.open_story(500)
        seen = []
        session.subscribe(lambda snapshot: seen.append(snapshot.is_loading_more))

        await session.load_next_top_level_page()

        assert seen == [True, False]


class TestClose:
    """Tests for close_story and cancellation."""

    @pytest.mark.asyncio
    async def test_close_cancels_in_flight_load(self):
        session = ThreadSession(InMemoryItemSource(_big_story_items(), delay=0.05))
        await session.open_story(500)
        store = session.store

        task = asyncio.create_task(session.load_next_top_level_page())
        await asyncio.sleep(0.01)
        await session.close_story()
        snapshot = await task

        assert snapshot.is_open is False
        assert len(store) == 5

    @pytest.mark.asyncio
    async def test_close_during_open(self):
        session = ThreadSession(InMemoryItemSource(_big_story_items(), delay=0.05))

        task = asyncio.create_task(session.open_story(500))
        await asyncio.sleep(0.01)
        await session.close_story()
        snapshot = await task

        assert snapshot.is_open is False
        assert session.store is None

    @pytest.mark.asyncio
    async def test_operations_after_close_raise(self, session):
        await session.open_story(SAMPLE_STORY_ID)
        await session.close_story()

        with pytest.raises(StoryNotOpenError):
            await session.load_next_top_level_page()
        with pytest.raises(StoryNotOpenError):
            session.toggle_collapse(1)

    @pytest.mark.asyncio
    async def test_operations_before_open_raise(self, session):
        with pytest.raises(StoryNotOpenError):
            session.search("tree")
        with pytest.raises(StoryNotOpenError):
            await session.load_deeper_replies(1)

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, session):
        snapshot = await session.close_story()

        assert snapshot.is_open is False


class TestViewAndCollapse:
    """Tests for view, search and collapse operations."""

    @pytest.mark.asyncio
    async def test_recency_view(self, session):
        await session.open_story(SAMPLE_STORY_ID)

        snapshot = session.set_view_mode(ViewMode.RECENCY)

        assert snapshot.entries == []
        assert len(snapshot.recent_entries) == 9
        created = [e.created_at for e in snapshot.recent_entries]
        assert created == sorted(created, reverse=True)

    @pytest.mark.asyncio
    async def test_search_persists_until_cleared(self, session):
        await session.open_story(SAMPLE_STORY_ID)

        snapshot = session.search("reply")
        assert [m.id for m in snapshot.search_matches] == [11, 111, 1111, 12]

        snapshot = session.toggle_collapse(1)
        assert snapshot.search_term == "reply"
        assert len(snapshot.search_matches) == 4

        snapshot = session.search("  ")
        assert snapshot.search_term is None
        assert snapshot.search_matches == []

    @pytest.mark.asyncio
    async def test_collapse_thread_and_expand(self, session):
        await session.open_story(SAMPLE_STORY_ID)

        snapshot = session.collapse_thread(111)
        assert [e.id for e in snapshot.entries] == [1, 2, 3, 4, 5]

        snapshot = session.expand_thread(111)
        assert snapshot.state.collapsed_ids == []
        assert len(snapshot.entries) == 9

    @pytest.mark.asyncio
    async def test_top_level_only(self, session):
        await session.open_story(SAMPLE_STORY_ID)

        snapshot = session.toggle_top_level_only()

        assert snapshot.state.top_level_only is True
        assert snapshot.state.collapsed_ids == [11, 12, 111, 1111]

    @pytest.mark.asyncio
    async def test_listeners_receive_snapshots(self, session):
        received = []
        unsubscribe = session.subscribe(received.append)
        await session.open_story(SAMPLE_STORY_ID)
        count = len(received)

        session.toggle_collapse(1)
        unsubscribe()
        session.toggle_collapse(1)

        assert count >= 1
        assert received[-1].state.collapsed_ids == [1]
        assert len(received) == count + 1


class TestEdgeCases:
    """Deep links under deleted comments, missing counts and reopen races."""

    @pytest.mark.asyncio
    async def test_target_under_deleted_parent(self, source):
        source.add(story(800, kids=[801], descendants=2))
        source.add(comment(801, 800, kids=[802], deleted=True))
        source.add(comment(802, 801, by="frank", text="Still here"))
        session = ThreadSession(source)

        snapshot = await session.open_story(800, target_id=802)

        assert 802 in session.store
        assert session.store.parent_of(802) == 801
        rows = {e.id: e for e in snapshot.entries}
        assert rows[801].author == "[deleted]"
        assert rows[802].highlighted is True

    @pytest.mark.asyncio
    async def test_story_without_descendant_count_pages_to_the_end(self, source):
        root = story(700, kids=[701, 702, 703, 704, 705, 706, 707])
        source.add(root.model_copy(update={"descendants": None}))
        for n in range(701, 708):
            source.add(comment(n, 700))
        session = ThreadSession(source)
        await session.open_story(700)

        snapshot = await session.load_next_top_level_page()

        assert snapshot.loaded_total_count == 7
        assert snapshot.has_more_top_level is False

    @pytest.mark.asyncio
    async def test_load_more_during_reopen_is_a_no_op(self, source):
        for item in _big_story_items():
            source.add(item)
        session = ThreadSession(source)
        await session.open_story(SAMPLE_STORY_ID)
        source.delay = 0.05

        task = asyncio.create_task(session.open_story(500))
        await asyncio.sleep(0.01)
        during_page = await session.load_next_top_level_page()
        during_replies = await session.load_deeper_replies(1)
        snapshot = await task

        assert during_page.is_opening is True
        assert during_replies.is_opening is True
        assert snapshot.story.id == 500
        assert snapshot.loaded_total_count == 5
