"""Session state for the playback collaborator.

A small key-value interface. The assembler never writes here itself;
callers hand its outcome to ``save_playlist`` and the player reads the
values back by key.
"""

import json
import logging
from pathlib import Path
from typing import Any

from .playlist_assembler import (
    ACTIVE_PLAYLIST_KEY,
    CURRENT_PLAYLIST_KEY,
    SELECTED_VIDEOS_KEY,
    PlaylistOutcome,
    session_records,
)

logger = logging.getLogger(__name__)


class SessionState:
    """In-memory key-value session state."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._values)

    def clear(self) -> None:
        self._values.clear()


class JsonFileSessionState(SessionState):
    """Session state persisted to a JSON file after every write."""

    def __init__(self, path: Path):
        """Load existing values from ``path`` if it exists.

        A corrupt file is logged and replaced on the next write.
        """
        self.path = Path(path)
        initial = {}
        if self.path.exists():
            try:
                with open(self.path, encoding="utf-8") as f:
                    initial = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
                initial = {}
        super().__init__(initial if isinstance(initial, dict) else {})

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._values, f, indent=2)

    def set(self, key: str, value: Any) -> None:
        super().set(key, value)
        self._flush()

    def delete(self, key: str) -> None:
        super().delete(key)
        self._flush()

    def clear(self) -> None:
        super().clear()
        self._flush()


# =============================================================================
# PLAYLIST SESSION
# =============================================================================

def save_playlist(
    state: SessionState,
    outcome: PlaylistOutcome,
    now: float | None = None,
    cloud_name: str | None = None,
) -> dict[str, object]:
    """Persist an assembled playlist under the player's well-known keys.

    Returns:
        The records written.

    Raises:
        ValueError: If the outcome is not a playable playlist.
    """
    records = session_records(outcome, now=now, cloud_name=cloud_name)
    for key, value in records.items():
        state.set(key, value)
    return records


def load_playlist(state: SessionState) -> tuple[list[dict], list[str]]:
    """Read back the stored playlist videos and selected module ids.

    Returns empty lists when nothing has been saved.
    """
    playlist = state.get(CURRENT_PLAYLIST_KEY) or {}
    videos = playlist.get("videos", []) if isinstance(playlist, dict) else []
    selected = state.get(SELECTED_VIDEOS_KEY) or []
    return list(videos), list(selected)


def clear_playlist(state: SessionState) -> None:
    """Forget the stored playlist."""
    for key in (CURRENT_PLAYLIST_KEY, SELECTED_VIDEOS_KEY, ACTIVE_PLAYLIST_KEY):
        state.delete(key)
