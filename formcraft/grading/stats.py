"""Cross-response statistics for a form.

Aggregates are recomputed from the stored responses on every call; nothing is
accumulated between requests.
"""
# grading/stats.py
from typing import Sequence

import numpy as np

from formcraft.app.schemas.response import FormStats, QuestionStat, ResponseOut


def _round(value: float) -> float:
    return round(float(value), 2)


def answered_count(response: ResponseOut) -> int:
    return sum(1 for a in response.answers if a.answer is not None)


def compute_stats(responses: Sequence[ResponseOut]) -> FormStats:
    """Compute response count, average score, completion rate and per-question averages.

    The first response (earliest submitted; callers pass responses oldest first) is
    the reference: a response counts as complete when it answered as many questions
    as the reference did, and per-question stats cover the reference's answer slots.

    Args:
        responses: All responses of one form, oldest first.

    Returns:
        FormStats: Zero-valued with no question stats when there are no responses.
    """
    if not responses:
        return FormStats()

    total = len(responses)
    reference = responses[0]

    average_score = np.mean([r.total_score for r in responses])

    expected = answered_count(reference)
    completed = sum(1 for r in responses if answered_count(r) == expected)
    completion_rate = completed / total * 100

    question_stats = []
    for index in range(len(reference.answers)):
        points = [
            r.answers[index].points for r in responses
            if index < len(r.answers) and r.answers[index].answer is not None
        ]
        question_stats.append(QuestionStat(
            question_index=index,
            average_score=_round(np.mean(points)) if points else 0.0,
            response_count=len(points),
        ))

    return FormStats(
        total_responses=total,
        average_score=_round(average_score),
        completion_rate=_round(completion_rate),
        question_stats=question_stats,
    )
