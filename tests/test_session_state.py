"""Tests for session state persistence."""

import json

import pytest

from curriculum.playlist_assembler import PlaylistAssembler
from curriculum.session_state import (
    JsonFileSessionState,
    SessionState,
    clear_playlist,
    load_playlist,
    save_playlist,
)


class TestSessionState:
    """Test the key-value backends."""

    def test_in_memory_round_trip(self):
        """Values set are read back until deleted."""
        state = SessionState()
        state.set("k", [1, 2])
        assert state.get("k") == [1, 2]
        state.delete("k")
        assert state.get("k", "missing") == "missing"

    def test_file_state_persists_across_instances(self, tmp_path):
        """A new instance sees what the previous one wrote."""
        path = tmp_path / "nested" / "session.json"
        JsonFileSessionState(path).set("selectedVideos", ["a"])
        assert JsonFileSessionState(path).get("selectedVideos") == ["a"]

    def test_corrupt_file_is_ignored(self, tmp_path):
        """An unreadable session file starts empty and is rewritten."""
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")
        state = JsonFileSessionState(path)
        assert state.keys() == []
        state.set("k", 1)
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": 1}


class TestPlaylistSession:
    """Test saving and loading an assembled playlist."""

    def test_save_then_load(self, library):
        """The player reads back the full playlist and module ids."""
        state = SessionState()
        outcome = PlaylistAssembler().assemble(library, "Sales")
        save_playlist(state, outcome, now=0.0, cloud_name="demo")

        videos, selected = load_playlist(state)
        assert [v["id"] for v in videos] == [i.id for i in outcome.videos]
        assert selected == ["sales-1", "sales-2", "sales-3"]
        assert state.get("activePlaylist")["title"] == "Sales Module"

    def test_load_when_nothing_saved(self):
        """Loading an empty session yields empty lists."""
        assert load_playlist(SessionState()) == ([], [])

    def test_empty_module_not_saved(self, library):
        """Saving an empty module raises and writes nothing."""
        state = SessionState()
        outcome = PlaylistAssembler().assemble(library, "Finance")
        with pytest.raises(ValueError):
            save_playlist(state, outcome)
        assert state.keys() == []

    def test_clear_playlist(self, library):
        """Clearing removes every playlist key and nothing else."""
        state = SessionState({"theme": "dark"})
        save_playlist(state, PlaylistAssembler().assemble(library, "Sales"), now=0.0, cloud_name="demo")
        clear_playlist(state)
        assert state.keys() == ["theme"]
