"""Pytest fixtures for the curriculum tests."""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from curriculum.models import ContentItem, WatchEvent  # noqa: E402


def make_item(item_id, category, created_at=0.0, **extra):
    """Build a ContentItem with throwaway display fields."""
    return ContentItem(
        id=str(item_id),
        title=extra.pop("title", f"Video {item_id}"),
        category=category,
        created_at=created_at,
        **extra,
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env from leaking into tests."""
    for name in (
        "XP_PER_LEVEL",
        "QUIZ_PASSING_SCORE",
        "CLOUDINARY_CLOUD_NAME",
        "FIRESTORE_PROJECT_ID",
        "FIRESTORE_API_KEY",
        "CURRICULUM_SNAPSHOT_DIR",
        "CURRICULUM_SESSION_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def library():
    """A small video library spanning every compulsory category."""
    return [
        make_item("intro-1", "Company Introduction", 1),
        make_item("sales-1", "Sales", 2),
        make_item("qa-1", "QA", 3),
        make_item("intro-2", "Company Introduction", 4),
        make_item("sales-2", "Sales", 5),
        make_item("extra-1", "Additional Features", 6),
        make_item("ai-1", "AI Tools", 7),
        make_item("sales-3", "Sales", 8),
        make_item("ai-2", "Artificial Intelligence", 9),
        make_item("ai-3", "ai tools", 10),
    ]


@pytest.fixture
def watch_events():
    """Watch history for user u1 (plus one event for another user)."""
    return [
        WatchEvent("u1", "sales-1", last_position=10, completed=True),
        WatchEvent("u1", "sales-2", last_position=3, completed=False),
        WatchEvent("u1", "sales-2", last_position=10, completed=True),
        WatchEvent("u1", "intro-1", last_position=2, completed=False),
    ]


@pytest.fixture
def snapshot_dir(tmp_path):
    """Directory of exported collections in both supported file shapes."""
    videos = {
        "v3": {"title": "Quoting", "category": "Sales", "duration": "10 min",
               "createdAt": {"seconds": 300, "nanoseconds": 0}, "publicId": "sales/quoting"},
        "v1": {"title": "Welcome", "category": "Company Introduction", "duration": "5 min",
               "createdAt": {"seconds": 100, "nanoseconds": 0}},
        "v2": {"title": "Leads", "category": "Sales", "duration": "8 min",
               "createdAt": "1970-01-01T00:03:20Z", "thumbnailUrl": "https://cdn.example/leads.jpg"},
        "v4": {"title": "Copilots", "category": "AI tools", "duration": "4 min",
               "createdAt": {"seconds": 400, "nanoseconds": 0}},
        "bad": "not a document",
    }
    orders = [
        {"id": "Sales", "category": "Sales", "videoIds": ["v3", "v2"]},
        {"id": "broken", "category": "QA", "videoIds": "v9"},
    ]
    events = [
        {"userId": "u1", "videoId": "v2", "lastPosition": 8, "completed": True},
        {"userId": "u1", "videoId": "v3", "lastPosition": 5, "completed": False},
        {"userId": "u2", "videoId": "v3", "lastPosition": 10, "completed": True},
    ]
    display_names = [
        {"id": "d1", "category": "Sales", "displayName": "Sales Essentials"},
    ]
    quizzes = [
        {"id": "q1", "moduleId": "sales-module", "question": "First step?",
         "options": ["Lead", "Quote", "Invoice", "Ship"], "correctIndex": 0},
        {"id": "q2", "moduleId": "sales-module", "question": "Then?",
         "options": ["Lead", "Quote", "Invoice", "Ship"], "correctIndex": 1},
    ]
    for name, data in (
        ("videos", videos),
        ("moduleVideoOrders", orders),
        ("videoWatchEvents", events),
        ("moduleDisplayNames", display_names),
        ("quizzes", quizzes),
    ):
        (tmp_path / f"{name}.json").write_text(json.dumps(data), encoding="utf-8")
    return tmp_path
