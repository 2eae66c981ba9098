"""Module quiz grading."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from .category_order import module_slug
from .config import get_passing_score
from .models import QuizQuestion

LEGACY_SUFFIX = "-module"


@dataclass(frozen=True)
class QuizResult:
    """Graded quiz submission."""

    module_id: str
    correct: int
    total: int
    score: float  # 0.0 - 1.0
    passed: bool

    @property
    def score_percent(self) -> int:
        return int(self.score * 100 + 0.5)

    def to_record(self, user_id: str, submitted_at: datetime | None = None) -> dict:
        """Document stored in the quiz results collection."""
        submitted_at = submitted_at or datetime.now(timezone.utc)
        return {
            "userId": user_id,
            "moduleId": self.module_id,
            "score": self.score,
            "passed": self.passed,
            "submittedAt": submitted_at.isoformat(),
        }


def grade_quiz(
    module_id: str,
    questions: Sequence[QuizQuestion],
    answers: Mapping[str, int],
    passing_score: float | None = None,
) -> QuizResult:
    """Grade a learner's answers.

    Args:
        module_id: Module the quiz belongs to.
        questions: Questions as loaded for the module.
        answers: Chosen option index keyed by question id (or question
            text for questions without an id).
        passing_score: Pass threshold; defaults to the configured value.

    Returns:
        QuizResult. A quiz with no questions scores 0 and fails.
    """
    threshold = get_passing_score() if passing_score is None else passing_score
    correct = sum(1 for q in questions if answers.get(q.answer_key) == q.correct_index)
    total = len(questions)
    score = correct / total if total else 0.0
    return QuizResult(
        module_id=module_id,
        correct=correct,
        total=total,
        score=score,
        passed=total > 0 and score >= threshold,
    )


def quiz_module_ids(module_id: str) -> list[str]:
    """Module ids to try, in order, when loading a quiz.

    Older quizzes were saved under a '-module' suffixed id.
    """
    slug = module_slug(module_id)
    if slug.endswith(LEGACY_SUFFIX):
        return [slug]
    return [slug, f"{slug}{LEGACY_SUFFIX}"]


def pretty_module_name(module_id: str) -> str:
    """'finance-and-accounting' -> 'Finance And Accounting'."""
    return " ".join(word[:1].upper() + word[1:] for word in module_id.replace("-", " ").split(" "))
