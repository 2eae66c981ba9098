"""Shared configuration for the curriculum package.

Loads environment variables and provides centralized config access.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
ENV_PATH = PROJECT_ROOT / ".env"

# Load on import
load_dotenv(ENV_PATH)


# =============================================================================
# FIXED CATEGORY NAMES
# =============================================================================
# Compulsory categories injected around every selected module.

INTRODUCTION_CATEGORY = "Company Introduction"
SUPPLEMENTARY_CATEGORY = "Additional Features"
AI_TOOLS_CATEGORY = "AI tools"

# Historical data uses several spellings for the AI tools category.
AI_TOOLS_ALIASES = frozenset({
    "AI tools",
    "AI Tools",
    "ai tools",
    "Artificial Intelligence",
    "artificial intelligence",
})

# Document store collections
VIDEOS_COLLECTION = "videos"
WATCH_EVENTS_COLLECTION = "videoWatchEvents"
MODULE_ORDERS_COLLECTION = "moduleVideoOrders"
DISPLAY_NAMES_COLLECTION = "moduleDisplayNames"
QUIZZES_COLLECTION = "quizzes"


def _env_number(name: str, default: float, cast=float):
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def get_xp_per_level() -> int:
    """Get the XP needed per level (default 100).

    Raises:
        ValueError: If the configured value is not a positive integer.
    """
    value = _env_number("XP_PER_LEVEL", 100, int)
    if value <= 0:
        raise ValueError(f"XP_PER_LEVEL must be positive, got {value}")
    return value


def get_passing_score() -> float:
    """Get the quiz pass threshold as a 0-1 ratio (default 0.75)."""
    value = _env_number("QUIZ_PASSING_SCORE", 0.75)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"QUIZ_PASSING_SCORE must be within [0, 1], got {value}")
    return value


def get_cloudinary_cloud_name() -> str:
    """Get the media CDN cloud name.

    Raises:
        ValueError: If cloud name not configured.
    """
    name = os.environ.get("CLOUDINARY_CLOUD_NAME", "").strip()
    if not name:
        raise ValueError(
            "CLOUDINARY_CLOUD_NAME not configured. "
            "Copy .env.example to .env and add your cloud name."
        )
    return name


def get_firestore_credentials() -> tuple[str, str | None]:
    """Get Firestore project ID and optional API key.

    Returns:
        Tuple of (project_id, api_key). The key may be None for
        emulators or open rules.

    Raises:
        ValueError: If project ID not configured.
    """
    project_id = os.environ.get("FIRESTORE_PROJECT_ID", "").strip()
    if not project_id:
        raise ValueError(
            "FIRESTORE_PROJECT_ID not configured. "
            "Copy .env.example to .env and add your project ID."
        )
    api_key = os.environ.get("FIRESTORE_API_KEY", "").strip() or None
    return project_id, api_key


def get_snapshot_dir() -> Path:
    """Directory holding exported collection snapshots (<collection>.json)."""
    raw = os.environ.get("CURRICULUM_SNAPSHOT_DIR", "").strip()
    return Path(raw) if raw else PROJECT_ROOT / "data"


def get_session_file() -> Path:
    """File backing the persisted playback session state."""
    raw = os.environ.get("CURRICULUM_SESSION_FILE", "").strip()
    return Path(raw) if raw else PROJECT_ROOT / ".session_state.json"
