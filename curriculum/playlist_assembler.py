"""Playlist Assembler for module playback.

Builds the viewing sequence for a selected module. Every playlist is
wrapped in the same compulsory categories:

    1. Company introduction
    2. The selected module (custom order if one was saved)
    3. Additional features
    4. AI tools (any of the known spellings)

Assembly is a pure function of the snapshot passed in. Persisting the
result for the player is the caller's job (see ``session_state``).
"""

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .category_order import resolve_categories, resolve_category
from .config import (
    AI_TOOLS_ALIASES,
    AI_TOOLS_CATEGORY,
    INTRODUCTION_CATEGORY,
    SUPPLEMENTARY_CATEGORY,
)
from .media import media_url
from .models import ContentItem

logger = logging.getLogger(__name__)

# Outcome tags
OK = "ok"
EMPTY_MODULE = "empty_module"

PLAYLIST_ID = "custom-playlist"
PLAYER_PATH = "/video-player"

# Session keys read back by the player
CURRENT_PLAYLIST_KEY = "currentPlaylist"
SELECTED_VIDEOS_KEY = "selectedVideos"
ACTIVE_PLAYLIST_KEY = "activePlaylist"


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class PlaylistSegment:
    """One contiguous block of the playlist."""

    role: str  # "introduction", "selected", "supplementary", "ai_tools"
    category: str
    items: tuple[ContentItem, ...]


@dataclass(frozen=True)
class PlaylistOutcome:
    """Result of assembling a module playlist.

    ``status`` is ``OK`` or ``EMPTY_MODULE``. When the selected module has
    no videos the compulsory segments are still resolved, but callers
    must surface the empty module instead of playing them.
    """

    status: str
    category: str
    segments: tuple[PlaylistSegment, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.status == OK

    @property
    def videos(self) -> list[ContentItem]:
        """Full playlist in playback order."""
        return [item for segment in self.segments for item in segment.items]

    @property
    def selected_ids(self) -> list[str]:
        """Ids belonging to the selected module only."""
        for segment in self.segments:
            if segment.role == "selected":
                return [item.id for item in segment.items]
        return []

    @property
    def start_video(self) -> ContentItem | None:
        """First video of the selected module; playback starts here."""
        for segment in self.segments:
            if segment.role == "selected" and segment.items:
                return segment.items[0]
        return None

    def player_location(self) -> str | None:
        """Relative URL that opens the player on the start video."""
        start = self.start_video
        if start is None:
            return None
        return f"{PLAYER_PATH}?videoId={start.id}&playlistId={PLAYLIST_ID}"

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "status": self.status,
            "category": self.category,
            "segments": [
                {
                    "role": s.role,
                    "category": s.category,
                    "video_ids": [item.id for item in s.items],
                }
                for s in self.segments
            ],
            "selected_ids": self.selected_ids,
            "start_video_id": self.start_video.id if self.start_video else None,
        }


# =============================================================================
# PLAYLIST ASSEMBLER
# =============================================================================

class PlaylistAssembler:
    """Assembles module playlists around the compulsory categories."""

    def __init__(
        self,
        introduction_category: str = INTRODUCTION_CATEGORY,
        supplementary_category: str = SUPPLEMENTARY_CATEGORY,
        ai_tools_category: str = AI_TOOLS_CATEGORY,
        ai_tools_aliases: frozenset[str] = AI_TOOLS_ALIASES,
    ):
        """Initialize with the compulsory category names.

        Args:
            introduction_category: Category played before every module.
            supplementary_category: Category played after the module.
            ai_tools_category: Key of the AI tools custom order.
            ai_tools_aliases: Every spelling accepted for AI tools videos.
        """
        self.introduction_category = introduction_category
        self.supplementary_category = supplementary_category
        self.ai_tools_category = ai_tools_category
        self.ai_tools_aliases = frozenset(ai_tools_aliases)

    def assemble(
        self,
        all_items: Sequence[ContentItem],
        selected_category: str,
        orders: Mapping[str, Sequence[str]] | None = None,
    ) -> PlaylistOutcome:
        """Assemble the playlist for one module.

        Items tagged with more than one of the four categories' names
        are not de-duplicated: each segment is resolved independently.

        Args:
            all_items: Snapshot of every video, creation time ascending.
            selected_category: Category the learner picked.
            orders: Saved custom orders keyed by category.

        Returns:
            PlaylistOutcome tagged ``OK`` or ``EMPTY_MODULE``.
        """
        orders = orders or {}

        selected = resolve_category(all_items, selected_category, orders.get(selected_category))
        segments = (
            PlaylistSegment(
                role="introduction",
                category=self.introduction_category,
                items=tuple(resolve_category(
                    all_items,
                    self.introduction_category,
                    orders.get(self.introduction_category),
                )),
            ),
            PlaylistSegment(role="selected", category=selected_category, items=tuple(selected)),
            PlaylistSegment(
                role="supplementary",
                category=self.supplementary_category,
                items=tuple(resolve_category(
                    all_items,
                    self.supplementary_category,
                    orders.get(self.supplementary_category),
                )),
            ),
            PlaylistSegment(
                role="ai_tools",
                category=self.ai_tools_category,
                items=tuple(resolve_categories(
                    all_items,
                    self.ai_tools_aliases,
                    orders.get(self.ai_tools_category),
                )),
            ),
        )

        logger.debug(
            "Assembled %r: %s",
            selected_category,
            ", ".join(f"{s.role}={len(s.items)}" for s in segments),
        )

        if not selected:
            logger.info("No videos found for module %r", selected_category)
            return PlaylistOutcome(status=EMPTY_MODULE, category=selected_category, segments=segments)

        return PlaylistOutcome(status=OK, category=selected_category, segments=segments)


# =============================================================================
# SESSION RECORDS
# =============================================================================

def _iso_millis(seconds: float) -> str:
    """UTC timestamp in the player's format, e.g. '2023-11-14T22:13:20.000Z'."""
    stamp = datetime.fromtimestamp(seconds, tz=timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def playlist_entry(item: ContentItem, cloud_name: str | None = None) -> dict:
    """Stored-form video dict with a ``thumbnail`` the player can show."""
    entry = item.to_dict()
    thumbnail = item.thumbnail_url
    if not thumbnail and item.media_reference:
        thumbnail = media_url(item.media_reference, "video", cloud_name=cloud_name)
    entry["thumbnail"] = thumbnail
    return entry


def session_records(
    outcome: PlaylistOutcome,
    now: float | None = None,
    cloud_name: str | None = None,
) -> dict[str, object]:
    """Values the caller persists so the player can resume the module.

    Args:
        outcome: An ``OK`` playlist outcome.
        now: Epoch seconds to stamp the records with (defaults to now).
        cloud_name: Media CDN cloud name override for thumbnails.

    Returns:
        Mapping of session key to JSON-serializable value.

    Raises:
        ValueError: If the outcome is not ``OK``.
    """
    if not outcome.ok:
        raise ValueError(f"Cannot persist a {outcome.status} playlist for {outcome.category!r}")

    now = time.time() if now is None else now
    return {
        CURRENT_PLAYLIST_KEY: {
            "id": PLAYLIST_ID,
            "videos": [playlist_entry(item, cloud_name) for item in outcome.videos],
            "createdAt": {"seconds": now, "nanoseconds": 0},
        },
        SELECTED_VIDEOS_KEY: outcome.selected_ids,
        ACTIVE_PLAYLIST_KEY: {
            "id": PLAYLIST_ID,
            "title": f"{outcome.category} Module",
            "lastAccessed": _iso_millis(now),
            "completionPercentage": 0,
        },
    }
