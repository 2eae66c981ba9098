"""Module playlist assembly and learner progress for the video portal."""

from .category_order import ModuleInfo, build_module_index, resolve_category
from .document_store import FirestoreRestStore, JsonSnapshotStore, StoreError
from .gamification import LevelProgress, compute_level
from .models import ContentItem, QuizQuestion, WatchEvent
from .playlist_assembler import PlaylistAssembler, PlaylistOutcome
from .progress import ProgressSummary, aggregate_progress, completed_video_ids
from .quiz import QuizResult, grade_quiz

__all__ = [
    "ContentItem",
    "WatchEvent",
    "QuizQuestion",
    "ModuleInfo",
    "resolve_category",
    "build_module_index",
    "PlaylistAssembler",
    "PlaylistOutcome",
    "ProgressSummary",
    "aggregate_progress",
    "completed_video_ids",
    "LevelProgress",
    "compute_level",
    "QuizResult",
    "grade_quiz",
    "JsonSnapshotStore",
    "FirestoreRestStore",
    "StoreError",
]
