"""Level and XP progression plus the learner's milestones.

Levels are derived from total XP alone; nothing here is stored.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from .config import get_xp_per_level

# Outcome tags
OK = "ok"
INVALID_XP = "invalid_xp"

LEVEL_TITLES = [
    "Beginner",
    "Apprentice",
    "Learner",
    "Student",
    "Practitioner",
    "Specialist",
    "Expert",
    "Master",
    "Grandmaster",
    "Legend",
]


@dataclass(frozen=True)
class LevelProgress:
    """Where a learner stands within the level ladder."""

    status: str  # OK or INVALID_XP
    total_xp: int
    level: int
    progress_percent: float
    xp_to_next_level: int

    @property
    def title(self) -> str:
        return level_title(self.level)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "status": self.status,
            "total_xp": self.total_xp,
            "level": self.level,
            "title": self.title,
            "progress_percent": self.progress_percent,
            "xp_to_next_level": self.xp_to_next_level,
        }


@dataclass(frozen=True)
class ModuleSuggestion:
    """A module offered on the dashboard with its XP reward."""

    name: str
    xp_reward: int
    description: str
    unlock_key: str  # Entry in the learner's unlocked modules
    is_unlocked: bool = False


@dataclass(frozen=True)
class Milestone:
    """An earned progress badge."""

    name: str
    description: str


# name, reward, description, unlock key
SUGGESTED_MODULES = [
    ("Sales", 50, "Learn about sales operations", "Sales"),
    ("QA", 75, "Master quality assurance", "QA"),
    ("Processing", 50, "Learn about processing operations", "Processing"),
    ("Inventory", 75, "Master inventory management", "Inventory"),
    ("Finance", 100, "Understand financial operations", "Finance and Accounting"),
]


def compute_level(total_xp: int, xp_per_level: int | None = None) -> LevelProgress:
    """Map total XP to a level.

    Args:
        total_xp: Cumulative XP, never negative.
        xp_per_level: XP per level; defaults to the configured value.

    Returns:
        LevelProgress. Negative XP yields an ``INVALID_XP`` outcome at
        level 1 instead of a computed level.
    """
    per_level = get_xp_per_level() if xp_per_level is None else xp_per_level
    if per_level <= 0:
        raise ValueError(f"xp_per_level must be positive, got {per_level}")
    if total_xp < 0:
        return LevelProgress(
            status=INVALID_XP,
            total_xp=total_xp,
            level=1,
            progress_percent=0.0,
            xp_to_next_level=per_level,
        )

    into_level = total_xp % per_level
    return LevelProgress(
        status=OK,
        total_xp=total_xp,
        level=max(1, total_xp // per_level + 1),
        progress_percent=100 * into_level / per_level,
        xp_to_next_level=per_level - into_level,
    )


def level_title(level: int) -> str:
    """Title for a level; levels past the ladder keep the last title."""
    index = min(max(level, 1) - 1, len(LEVEL_TITLES) - 1)
    return LEVEL_TITLES[index]


def module_suggestions(unlocked_modules: Iterable[str]) -> list[ModuleSuggestion]:
    """Dashboard module suggestions flagged with the learner's unlocks."""
    unlocked = set(unlocked_modules)
    return [
        ModuleSuggestion(
            name=name,
            xp_reward=reward,
            description=description,
            unlock_key=key,
            is_unlocked=key in unlocked,
        )
        for name, reward, description, key in SUGGESTED_MODULES
    ]


def earned_milestones(videos_watched: int, current_streak: int, level: int) -> list[Milestone]:
    """Badges earned so far, in display order."""
    milestones = []
    if videos_watched > 0:
        milestones.append(Milestone("First Video Completed", "Watched your first video"))
    if current_streak >= 3:
        milestones.append(Milestone("3-Day Streak Achieved", "Learned three days in a row"))
    if current_streak >= 7:
        milestones.append(Milestone("Week Warrior", "Learned seven days in a row"))
    if level > 1:
        milestones.append(Milestone("Level Up!", f"Reached Level {level}"))
    return milestones
