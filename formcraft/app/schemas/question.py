"""Pydantic schemes for the three question variants and their answer keys.

A question is a tagged union on `type`: `categorize`, `cloze` or `comprehension`.
Answer-key fields are embedded in the question and read by the grading engine.
"""
# app/schemas/question.py
import enum
import uuid
from typing import Annotated, Literal

from annotated_types import Ge
from pydantic import AllowInfNan, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


CLOZE_BLANK_MARKER = "_____"


class QuestionType(str, enum.Enum):
    categorize = "categorize"
    cloze = "cloze"
    comprehension = "comprehension"


class SubQuestionType(str, enum.Enum):
    multiple_choice = "multiple-choice"
    true_false = "true-false"
    short_answer = "short-answer"


def _new_id() -> str:
    return str(uuid.uuid4())


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Category(CamelModel):
    id: str = Field(default_factory=_new_id)
    name: str
    color: str | None = None


class Item(CamelModel):
    id: str = Field(default_factory=_new_id)
    text: str
    category: str | None = Field(None, description="Name of the correct category for this item")


class Blank(CamelModel):
    text: str | None = None
    answer: str | None = None
    hint: str | None = None


class SubQuestion(CamelModel):
    question: str = ""
    type: SubQuestionType = SubQuestionType.multiple_choice
    options: list[str] = Field(default_factory=list)
    correct_answer: str | None = None
    points: Annotated[float, Ge(0), AllowInfNan(False)] = 1


class QuestionBase(CamelModel):
    id: str = Field(default_factory=_new_id)
    title: str = Field(..., min_length=1)
    image: str | None = None
    required: bool = False
    order: int


class CategorizeQuestion(QuestionBase):
    type: Literal["categorize"] = "categorize"
    categories: list[Category] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)

    def unknown_categories(self) -> list[str]:
        """Category names referenced by items but missing from `categories`."""
        known = {c.name for c in self.categories}
        missing = []
        for item in self.items:
            if item.category and item.category not in known and item.category not in missing:
                missing.append(item.category)
        return missing


class ClozeQuestion(QuestionBase):
    type: Literal["cloze"] = "cloze"
    text: str = ""
    blanks: list[Blank] = Field(default_factory=list)
    answer_options: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _derive_answer_options(self):
        if not self.answer_options:
            derived = []
            for blank in self.blanks:
                option = blank.text or blank.answer
                if option and option not in derived:
                    derived.append(option)
            self.answer_options = derived
        return self

    def marker_count(self) -> int:
        return self.text.count(CLOZE_BLANK_MARKER)


class ComprehensionQuestion(QuestionBase):
    type: Literal["comprehension"] = "comprehension"
    passage: str = ""
    questions: list[SubQuestion] = Field(default_factory=list)

    def total_points(self) -> float:
        return sum(q.points for q in self.questions)


Question = Annotated[
    CategorizeQuestion | ClozeQuestion | ComprehensionQuestion,
    Field(discriminator="type"),
]
