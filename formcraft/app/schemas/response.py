"""Pydantic schemes for response submission, stored responses and statistics.

Raw per-question answers are accepted as free-form JSON, their shape depends on the
question type:

- categorize: ``{"items": [{"id": ..., "text": ..., "category": ...}]}``
- cloze: ``{"blanks": [{"answer": ...}]}`` (positional)
- comprehension: ``{"questions": [{"answer": ...}]}`` (positional)

Malformed shapes are not rejected here; the grading engine scores them as 0.
"""
# app/schemas/response.py
from datetime import datetime
from typing import Any

from pydantic import Field

from formcraft.app.schemas.question import CamelModel


class Respondent(CamelModel):
    name: str | None = None
    email: str | None = None
    anonymous: bool = True


class SubmittedAnswer(CamelModel):
    question_id: str | None = None
    question_type: str | None = None
    answer: Any = None


class SubmissionIn(CamelModel):
    respondent: Respondent = Field(default_factory=Respondent)
    answers: list[SubmittedAnswer | None] = Field(default_factory=list)
    time_spent: int = Field(default=0, ge=0, description="Seconds spent filling the form")
    started_at: datetime | None = None


class AnswerOut(CamelModel):
    question_id: str
    question_type: str
    answer: Any = None
    points: float = 0
    is_correct: bool = False


class ResponseOut(CamelModel):
    id: str
    form_id: str
    respondent: Respondent
    answers: list[AnswerOut]
    total_score: float
    max_score: float
    time_spent: int = 0
    started_at: datetime | None = None
    submitted_at: datetime | None = None
    ip_address: str | None = None
    user_agent: str | None = None


class QuestionStat(CamelModel):
    question_index: int
    average_score: float
    response_count: int


class FormStats(CamelModel):
    total_responses: int = 0
    average_score: float = 0
    completion_rate: float = 0
    question_stats: list[QuestionStat] = Field(default_factory=list)
