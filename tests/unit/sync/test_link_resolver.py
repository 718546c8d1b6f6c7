"""Unit tests for sync.link_resolver module."""

import pytest

from src.sync.link_resolver import LinkResolver, normalize_target
from src.sync.models import FileEntry, SyncState


@pytest.fixture
def state():
    state = SyncState(destination_page_id="dest")
    for path, page_id in [
        ("index.md", "p-index"),
        ("A/Note.md", "p-a-note"),
        ("B/Note.md", "p-b-note"),
        ("B/My Page.md", "p-my-page"),
        ("pending.md", "dry-run"),
    ]:
        state.files[path] = FileEntry(page_id, "hash", "ts")
    return state


class TestNormalizeTarget:
    """Test cases for normalize_target()."""

    def test_appends_extension(self):
        assert normalize_target("Note") == "Note.md"

    def test_strips_fragment_and_decodes(self):
        assert normalize_target("My%20Page.md#Intro") == "My Page.md"

    def test_pure_anchor_is_empty(self):
        assert normalize_target("#section") == ""


class TestLinkResolver:
    """Test cases for LinkResolver.resolve()."""

    def test_relative_to_source_directory_first(self, state):
        assert LinkResolver(state).resolve("Note", source_dir="B") == "p-b-note"

    def test_root_relative_path(self, state):
        assert LinkResolver(state).resolve("A/Note.md", source_dir="B") == "p-a-note"

    def test_parent_relative_path(self, state):
        assert LinkResolver(state).resolve("../index.md", source_dir="A") == "p-index"

    def test_basename_fallback(self, state):
        assert LinkResolver(state).resolve("Note") == "p-a-note"

    def test_encoded_link(self, state):
        assert LinkResolver(state).resolve("B/My%20Page.md") == "p-my-page"

    def test_unknown_target(self, state):
        assert LinkResolver(state).resolve("Nowhere") is None

    def test_anchor_only(self, state):
        assert LinkResolver(state).resolve("#top") is None

    def test_dry_run_placeholder_not_resolved(self, state):
        assert LinkResolver(state).resolve("pending") is None

    def test_sees_state_updates(self, state):
        resolver = LinkResolver(state)
        state.files["new.md"] = FileEntry("p-new", "h", "t")

        assert resolver.resolve("new") == "p-new"
