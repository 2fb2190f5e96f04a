"""Unit tests for ViewProjector."""

import pytest

from threadline.domain.model import StoryRoot
from threadline.domain.service import TreeStore, ViewProjector, highlight_text
from tests.factories import node


@pytest.fixture
def story():
    return StoryRoot(id=100, title="Show HN: A tree viewer", top_level_child_ids=[1, 2])


@pytest.fixture
def store():
    """1 -> 11 -> 111, 1 -> 12 ; 2"""
    store = TreeStore()
    store.merge([
        node(1, author="alice", body="Root <b>one</b> with a long body " + "x" * 80, created_at=10, children=[
            node(11, depth=1, parent=1, author="bob", body="First reply", created_at=40, children=[
                node(111, depth=2, parent=11, author="carol", body="Nested (a.b) reply", created_at=20),
            ]),
            node(12, depth=1, parent=1, author="Dave", body="Second REPLY", created_at=30, child_ids=[121], cut=True),
        ]),
        node(2, author="erin", body="Another root", created_at=50),
    ])
    return store


class TestNested:
    """Tests for the nested projection."""

    def test_preorder(self, store):
        rows = ViewProjector().nested(store)

        assert [r.id for r in rows] == [1, 11, 111, 12, 2]
        assert [r.depth for r in rows] == [0, 1, 2, 1, 0]

    def test_collapsed_node_keeps_header_and_hides_replies(self, store):
        store.toggle_collapse(1)

        rows = ViewProjector().nested(store)

        assert [r.id for r in rows] == [1, 2]
        assert rows[0].collapsed is True
        assert rows[0].hidden_reply_count == 3
        assert rows[1].hidden_reply_count == 0

    def test_flags(self, store):
        store.toggle_collapse(111)
        store.highlighted_ids = {12}

        rows = {r.id: r for r in ViewProjector().nested(store)}

        assert rows[12].has_unmaterialized_children is True
        assert rows[12].highlighted is True
        assert rows[111].show_thread_control is True
        assert rows[1].show_thread_control is False

    def test_empty_store(self):
        assert ViewProjector().nested(TreeStore()) == []


class TestRecency:
    """Tests for the recency projection."""

    def test_sorted_newest_first(self, store, story):
        rows = ViewProjector().recency(store, story)

        assert [r.id for r in rows] == [2, 11, 12, 111, 1]

    def test_context_snippets(self, store, story):
        rows = {r.id: r for r in ViewProjector(snippet_length=60).recency(store, story)}

        assert rows[1].parent_snippet == "Show HN: A tree viewer"
        assert rows[11].parent_snippet == store.get(1).body_html[:60]
        assert len(rows[11].parent_snippet) == 60
        assert rows[111].parent_snippet == "First reply"

    def test_ties_keep_tree_order(self, story):
        store = TreeStore()
        store.merge([node(1, created_at=5), node(2, created_at=5), node(3, created_at=5)])

        rows = ViewProjector().recency(store, story)

        assert [r.id for r in rows] == [1, 2, 3]

    def test_same_ids_as_nested_view(self, store, story):
        projector = ViewProjector()

        nested_ids = {r.id for r in projector.nested(store)}
        recent_ids = {r.id for r in projector.recency(store, story)}

        assert nested_ids == recent_ids

    def test_ignores_collapse_state(self, store, story):
        store.toggle_collapse(1)

        rows = ViewProjector().recency(store, story)

        assert len(rows) == 5


class TestSearch:
    """Tests for search and highlighting."""

    def test_case_insensitive_body_match(self, store):
        matches = ViewProjector().search(store, "reply")

        assert [m.id for m in matches] == [11, 111, 12]
        assert matches[2].highlighted_html == "Second <mark>REPLY</mark>"

    def test_author_match(self, store):
        matches = ViewProjector().search(store, "dave")

        assert [m.id for m in matches] == [12]

    def test_term_is_matched_literally(self, store):
        projector = ViewProjector()

        assert [m.id for m in projector.search(store, "(a.b)")] == [111]
        assert projector.search(store, "a*b") == []

    def test_blank_term_matches_nothing(self, store):
        assert ViewProjector().search(store, "   ") == []
        assert ViewProjector().search(store, "") == []

    def test_searches_collapsed_threads(self, store):
        store.collapse_thread(111)

        matches = ViewProjector().search(store, "nested")

        assert [m.id for m in matches] == [111]


class TestHighlightText:
    """Tests for highlight_text."""

    def test_wraps_every_occurrence_preserving_case(self):
        assert highlight_text("Tree tree TREE", "tree") == (
            "<mark>Tree</mark> <mark>tree</mark> <mark>TREE</mark>"
        )

    def test_regex_metacharacters(self):
        assert highlight_text("cost is $5 (approx)", "$5 (") == "cost is <mark>$5 (</mark>approx)"

    def test_no_match_leaves_text(self):
        assert highlight_text("nothing here", "tree") == "nothing here"
