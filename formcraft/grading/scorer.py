"""Scoring functions for the three question types.

Functions:
- score_categorize: share of items dropped into their correct category.
- score_cloze: share of blanks filled with the right word (trimmed, case-insensitive).
- score_comprehension: points-weighted share of correctly answered sub-questions.
- grade: dispatch on the question type and return a `GradeResult`.

Every scorer returns a percentage in [0, 100]. Scorers never raise on a malformed
or missing answer: anything that cannot be read is simply not a match.
"""
# grading/scorer.py
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from formcraft.app.schemas.question import (
    CategorizeQuestion,
    ClozeQuestion,
    ComprehensionQuestion,
    QuestionType,
    SubQuestionType,
)

logger = logging.getLogger(__name__)

SHORT_ANSWER_CREDIT = 0.5


@dataclass(frozen=True)
class GradeResult:
    points: float
    is_correct: bool = False


def _entries(raw: Any, key: str) -> list:
    """Return `raw[key]` when `raw` is a mapping holding a list there, else []."""
    if not isinstance(raw, Mapping):
        return []
    value = raw.get(key)
    return value if isinstance(value, list) else []


def _entry_answer(entries: list, index: int) -> str | None:
    if index >= len(entries):
        return None
    entry = entries[index]
    if not isinstance(entry, Mapping):
        return None
    value = entry.get("answer")
    return value if isinstance(value, str) else None


def _percent(part: float, whole: float) -> float:
    if not math.isfinite(whole) or whole <= 0:
        return 0.0
    result = part / whole * 100.0
    return result if math.isfinite(result) else 0.0


def score_categorize(q: CategorizeQuestion, ans: Any) -> float:
    """Percentage of the question's items whose submitted category is the correct one.

    A submitted entry belongs to an item when it carries the item's id (`id` or
    `itemId`); failing that, the first entry with exactly the item's text is used.
    """
    submitted = _entries(ans, "items")
    if not submitted and isinstance(ans, Mapping) and "items" not in ans:
        submitted = _entries(ans, "categories")
    submitted = [s for s in submitted if isinstance(s, Mapping)]

    correct = 0
    for item in q.items:
        match = next((s for s in submitted if (s.get("id") or s.get("itemId")) == item.id), None)
        if match is None:
            match = next((s for s in submitted if s.get("text") == item.text), None)
        if match is not None and item.category is not None and match.get("category") == item.category:
            correct += 1
    return _percent(correct, len(q.items))


def _normalize(value: str) -> str:
    return value.strip().lower()


def score_cloze(q: ClozeQuestion, ans: Any) -> float:
    """Percentage of blanks answered correctly, comparing trimmed lower-cased text by position."""
    submitted = _entries(ans, "blanks")
    correct = 0
    for index, blank in enumerate(q.blanks):
        given = _entry_answer(submitted, index)
        if given is not None and blank.answer is not None and _normalize(given) == _normalize(blank.answer):
            correct += 1
    return _percent(correct, len(q.blanks))


def score_comprehension(q: ComprehensionQuestion, ans: Any) -> float:
    """Points-weighted percentage over the passage's sub-questions.

    Multiple-choice and true/false need an exact match. A short answer that contains
    the expected answer (case-insensitive) earns half of the sub-question's points.
    """
    submitted = _entries(ans, "questions")
    earned = 0.0
    for index, sub in enumerate(q.questions):
        given = _entry_answer(submitted, index)
        expected = sub.correct_answer
        if given is None or expected is None:
            continue
        if sub.type in (SubQuestionType.multiple_choice, SubQuestionType.true_false):
            if given == expected:
                earned += sub.points
        elif sub.type == SubQuestionType.short_answer:
            if given and expected and expected.lower() in given.lower():
                earned += sub.points * SHORT_ANSWER_CREDIT
    return _percent(earned, q.total_points())


def _categorize(q: CategorizeQuestion, ans: Any) -> GradeResult:
    points = score_categorize(q, ans)
    return GradeResult(points=points, is_correct=points == 100.0)


def _cloze(q: ClozeQuestion, ans: Any) -> GradeResult:
    points = score_cloze(q, ans)
    return GradeResult(points=points, is_correct=points == 100.0)


def _comprehension(q: ComprehensionQuestion, ans: Any) -> GradeResult:
    # correctness is only tracked per sub-question, inside the score
    return GradeResult(points=score_comprehension(q, ans))


GRADERS: dict[str, Callable[[Any, Any], GradeResult]] = {
    QuestionType.categorize.value: _categorize,
    QuestionType.cloze.value: _cloze,
    QuestionType.comprehension.value: _comprehension,
}


def grade(question: Any, ans: Any) -> GradeResult:
    """Grade one raw answer against its question.

    Args:
        question: A question model (categorize, cloze or comprehension). `None` is
            accepted and scores 0.
        ans: The raw answer payload as submitted, of any shape.

    Returns:
        GradeResult: Points in [0, 100] and the fully-correct flag.
    """
    if question is None or ans is None:
        return GradeResult(points=0.0)
    q_type = getattr(question, "type", None)
    grader = GRADERS.get(q_type)
    if grader is None:
        logger.warning("Unsupported question type %r, scoring 0", q_type)
        return GradeResult(points=0.0)
    return grader(question, ans)
