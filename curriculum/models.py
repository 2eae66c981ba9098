"""Record types read from the document store.

Field names on the stored documents follow the store's camelCase
convention; the dataclasses use snake_case and convert at the edges
with ``from_record`` / ``to_dict``.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# =============================================================================
# HELPERS
# =============================================================================

_LEADING_INT = re.compile(r"(\d+)")
_FRACTION = re.compile(r"(\.\d+)")


def parse_duration(duration_label: str | None) -> int:
    """Parse the first integer out of a free-text duration like '12 min'.

    Returns 0 when the label holds no digits.
    """
    if not duration_label:
        return 0
    match = _LEADING_INT.search(str(duration_label))
    if match:
        return int(match.group(1))
    return 0


def timestamp_seconds(value: Any) -> float:
    """Normalize a stored timestamp to epoch seconds.

    Accepts epoch numbers, ``{"seconds": .., "nanoseconds": ..}`` maps
    and ISO-8601 strings. Anything else sorts first (0.0).
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds", 0)) or 0
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        return float(seconds) + float(nanos) / 1e9
    if isinstance(value, str):
        # Store timestamps carry nanoseconds; datetime takes microseconds
        text = _FRACTION.sub(lambda m: "." + m.group(1)[1:7].ljust(6, "0"), value.replace("Z", "+00:00"))
        try:
            return datetime.fromisoformat(text).timestamp()
        except ValueError:
            return 0.0
    return 0.0


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class ContentItem:
    """One playable video in the library."""

    id: str
    title: str
    category: str
    description: str = ""
    duration_label: str = ""
    created_at: float = 0.0  # epoch seconds
    media_reference: str | None = None  # CDN public id
    thumbnail_url: str | None = None

    @property
    def duration(self) -> int:
        """Leading integer of the duration label."""
        return parse_duration(self.duration_label)

    @classmethod
    def from_record(cls, doc_id: str, data: dict) -> "ContentItem":
        """Build from a stored ``videos`` document."""
        return cls(
            id=str(doc_id),
            title=str(data.get("title") or ""),
            category=str(data.get("category") or ""),
            description=str(data.get("description") or ""),
            duration_label=str(data.get("duration", "") or ""),
            created_at=timestamp_seconds(data.get("createdAt")),
            media_reference=data.get("publicId") or None,
            thumbnail_url=data.get("thumbnailUrl") or None,
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict in stored field names."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "duration": self.duration_label,
            "createdAt": self.created_at,
            "publicId": self.media_reference,
            "thumbnailUrl": self.thumbnail_url,
        }


@dataclass(frozen=True)
class WatchEvent:
    """A user's recorded playback state for one video."""

    user_id: str
    video_id: str
    last_position: float = 0.0
    completed: bool = False

    @classmethod
    def from_record(cls, data: dict) -> "WatchEvent":
        """Build from a stored ``videoWatchEvents`` document."""
        return cls(
            user_id=str(data.get("userId") or ""),
            video_id=str(data.get("videoId") or ""),
            last_position=float(data.get("lastPosition") or 0),
            completed=data.get("completed") is True,
        )


@dataclass(frozen=True)
class QuizQuestion:
    """A multiple-choice question attached to a module."""

    module_id: str
    question: str
    options: list[str] = field(default_factory=list)
    correct_index: int = 0
    id: str | None = None

    @property
    def answer_key(self) -> str:
        """Key used to look up the learner's answer."""
        return self.id or self.question

    @classmethod
    def from_record(cls, doc_id: str | None, data: dict) -> "QuizQuestion":
        """Build from a stored ``quizzes`` document.

        Raises:
            ValueError: If the question has no gradable answer index.
        """
        options = data.get("options") or []
        if not isinstance(options, list):
            raise ValueError("options is not a list")
        correct_index = data.get("correctIndex")
        if correct_index is None or isinstance(correct_index, bool):
            raise ValueError("correctIndex is missing")
        return cls(
            id=doc_id,
            module_id=str(data.get("moduleId") or ""),
            question=str(data.get("question") or ""),
            options=[str(o) for o in options],
            correct_index=int(correct_index),
        )
