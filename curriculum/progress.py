"""Progress aggregation across the video library.

``aggregate_progress`` is the only definition of "watched" in the
package: a video counts once a completed watch event exists for it.
Every view that shows a watched count goes through it.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .models import ContentItem, WatchEvent

# Outcome tags
OK = "ok"
NO_DATA = "no_data"


@dataclass(frozen=True)
class ProgressSummary:
    """Watched/unwatched totals for a set of videos."""

    status: str  # OK or NO_DATA
    watched_count: int
    unwatched_count: int
    total_count: int
    watched_percent: int

    @property
    def empty(self) -> bool:
        return self.status == NO_DATA

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "status": self.status,
            "empty": self.empty,
            "watched": self.watched_count,
            "unwatched": self.unwatched_count,
            "total": self.total_count,
            "watched_percent": self.watched_percent,
        }


def completed_video_ids(events: Iterable[WatchEvent]) -> set[str]:
    """Ids with at least one completed event.

    Any completed event wins, regardless of other events for the same
    video.
    """
    return {e.video_id for e in events if e.completed and e.video_id}


def aggregate_progress(items: Sequence[ContentItem], completed_ids: set[str]) -> ProgressSummary:
    """Count watched and unwatched videos.

    Args:
        items: Videos to count over.
        completed_ids: Ids of fully watched videos.

    Returns:
        ProgressSummary; ``NO_DATA`` with 0 % when there are no videos.
    """
    total = len(items)
    if total == 0:
        return ProgressSummary(
            status=NO_DATA, watched_count=0, unwatched_count=0, total_count=0, watched_percent=0
        )

    watched = sum(1 for item in items if item.id in completed_ids)
    return ProgressSummary(
        status=OK,
        watched_count=watched,
        unwatched_count=max(0, total - watched),
        total_count=total,
        # Round half up to match what the dashboard ring displays
        watched_percent=int(100 * watched / total + 0.5),
    )


# =============================================================================
# PER-VIDEO PROGRESS
# =============================================================================

def video_progress(items: Iterable[ContentItem], events: Sequence[WatchEvent]) -> dict[str, float]:
    """Playback percentage per video id.

    Uses the first event found for each video. Position is measured
    against the leading integer of the duration label and capped at 100.
    """
    first_event: dict[str, WatchEvent] = {}
    for event in events:
        first_event.setdefault(event.video_id, event)

    progress = {}
    for item in items:
        event = first_event.get(item.id)
        duration = item.duration
        if event is None or duration <= 0:
            progress[item.id] = 0.0
        else:
            progress[item.id] = min(100.0, event.last_position * 100 / duration)
    return progress


def most_watched(
    items: Sequence[ContentItem],
    progress: dict[str, float],
    limit: int = 3,
) -> list[ContentItem]:
    """Top videos by playback progress; ties keep library order."""
    ranked = sorted(items, key=lambda item: -progress.get(item.id, 0.0))
    return ranked[:limit]
