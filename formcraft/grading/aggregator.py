"""Turning a submission into a graded response.

`grade_submission` matches submitted answers to the form's questions and grades each
one; `submit_response` adds the published check and the insert through the stores.
"""
# grading/aggregator.py
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from formcraft.app.core.errors import FormNotPublished
from formcraft.app.schemas.form import FormOut
from formcraft.app.schemas.response import AnswerOut, SubmissionIn, SubmittedAnswer
from formcraft.grading.scorer import grade

logger = logging.getLogger(__name__)

MAX_POINTS_PER_QUESTION = 100.0


@dataclass
class GradedSubmission:
    answers: list[AnswerOut] = field(default_factory=list)
    total_score: float = 0.0
    max_score: float = 0.0


def match_answers(questions: Sequence[Any], submitted: Sequence[SubmittedAnswer | None]) -> list[SubmittedAnswer | None]:
    """Align submitted answers with `questions`, returning one slot per question.

    An answer naming a `questionId` goes to that question wherever it sits in the
    form; an answer without one falls back to its position in the submission.
    Answers naming an unknown question are dropped.
    """
    index_by_id = {q.id: i for i, q in enumerate(questions)}
    slots: list[SubmittedAnswer | None] = [None] * len(questions)

    for position, item in enumerate(submitted):
        if item is None:
            continue
        if item.question_id:
            target = index_by_id.get(item.question_id)
            if target is None:
                logger.warning("Dropping answer for unknown question %s", item.question_id)
                continue
        elif position < len(questions):
            target = position
        else:
            continue
        if slots[target] is None:
            slots[target] = item
    return slots


def grade_submission(form: FormOut, submission: SubmissionIn) -> GradedSubmission:
    result = GradedSubmission()
    slots = match_answers(form.questions, submission.answers)

    for question, item in zip(form.questions, slots):
        raw = item.answer if item is not None else None
        graded = grade(question, raw)
        result.answers.append(AnswerOut(
            question_id=question.id,
            question_type=question.type,
            answer=raw,
            points=graded.points,
            is_correct=graded.is_correct,
        ))
        result.total_score += graded.points
        result.max_score += MAX_POINTS_PER_QUESTION
    return result


def submit_response(
    form_store,
    response_store,
    form_id: str,
    submission: SubmissionIn,
    ip_address: str | None = None,
    user_agent: str | None = None,
):
    """Grade a submission and store it as a new response.

    Args:
        form_store: Store providing `require(form_id)`, `is_published(form)` and `to_schema(form)`.
        response_store: Store providing `insert(**fields)`.
        form_id: The form being answered.
        submission: The respondent's answers and metadata.
        ip_address: Client address, if known.
        user_agent: Client user agent, if known.

    Returns:
        The stored response.

    Raises:
        FormNotFound: The form does not exist.
        FormNotPublished: The form is not accepting responses; nothing is graded.
    """
    form = form_store.require(form_id)
    if not form_store.is_published(form):
        raise FormNotPublished(form_id)

    graded = grade_submission(form_store.to_schema(form), submission)

    fields = {
        "form_id": form_id,
        "respondent": submission.respondent.model_dump(),
        "answers": [a.model_dump(mode="json", by_alias=True) for a in graded.answers],
        "total_score": graded.total_score,
        "max_score": graded.max_score,
        "time_spent": submission.time_spent,
        "ip_address": ip_address,
        "user_agent": user_agent,
    }
    if submission.started_at is not None:
        fields["started_at"] = submission.started_at

    response = response_store.insert(**fields)
    logger.info(
        "Stored response %s for form %s: %.2f/%.2f",
        response.response_id, form_id, graded.total_score, graded.max_score,
    )
    return response
