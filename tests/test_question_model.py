import pytest
from pydantic import TypeAdapter, ValidationError

from formcraft.app.schemas.form import FormIn
from formcraft.app.schemas.question import (
    CategorizeQuestion,
    ClozeQuestion,
    ComprehensionQuestion,
    Question,
)

question_adapter = TypeAdapter(Question)


def test_question_is_parsed_by_type():
    cat = question_adapter.validate_python({"type": "categorize", "title": "c", "order": 1})
    cloze = question_adapter.validate_python({"type": "cloze", "title": "z", "order": 2, "text": "_____"})
    comp = question_adapter.validate_python({"type": "comprehension", "title": "r", "order": 3, "passage": "p"})

    assert isinstance(cat, CategorizeQuestion)
    assert isinstance(cloze, ClozeQuestion)
    assert isinstance(comp, ComprehensionQuestion)


def test_unknown_question_type_is_rejected():
    with pytest.raises(ValidationError):
        question_adapter.validate_python({"type": "matching", "title": "m", "order": 1})


@pytest.mark.parametrize("payload", [
    {"type": "cloze", "title": "", "order": 1},
    {"type": "cloze", "order": 1},
    {"type": "cloze", "title": "t"},
])
def test_title_and_order_are_required(payload):
    with pytest.raises(ValidationError):
        question_adapter.validate_python(payload)


def test_question_gets_an_id():
    a = question_adapter.validate_python({"type": "cloze", "title": "t", "order": 1})
    b = question_adapter.validate_python({"type": "cloze", "title": "t", "order": 1})
    assert a.id and b.id and a.id != b.id


def test_cloze_answer_options_come_from_blanks():
    q = question_adapter.validate_python({
        "type": "cloze",
        "title": "t",
        "order": 1,
        "text": "_____ and _____ and _____",
        "blanks": [{"text": "tea"}, {"answer": "milk"}, {"text": "tea", "answer": "tea"}],
    })
    assert q.answer_options == ["tea", "milk"]
    assert q.marker_count() == 3


def test_cloze_keeps_explicit_answer_options():
    q = question_adapter.validate_python({
        "type": "cloze",
        "title": "t",
        "order": 1,
        "blanks": [{"text": "tea", "answer": "tea"}],
        "answerOptions": ["tea", "coffee"],
    })
    assert q.answer_options == ["tea", "coffee"]


def test_unknown_categories():
    q = question_adapter.validate_python({
        "type": "categorize",
        "title": "t",
        "order": 1,
        "categories": [{"name": "Fruit"}],
        "items": [
            {"text": "apple", "category": "Fruit"},
            {"text": "carrot", "category": "Vegetable"},
            {"text": "leek", "category": "Vegetable"},
            {"text": "rock"},
        ],
    })
    assert q.unknown_categories() == ["Vegetable"]


def test_comprehension_total_points_and_camel_case():
    q = question_adapter.validate_python({
        "type": "comprehension",
        "title": "t",
        "order": 1,
        "questions": [
            {"question": "a", "type": "true-false", "correctAnswer": "true", "points": 2},
            {"question": "b", "type": "short-answer", "correctAnswer": "x"},
        ],
    })
    assert q.total_points() == 3
    assert q.questions[0].correct_answer == "true"
    dumped = q.model_dump(by_alias=True)
    assert dumped["questions"][0]["correctAnswer"] == "true"


def test_negative_points_are_rejected():
    with pytest.raises(ValidationError):
        question_adapter.validate_python({
            "type": "comprehension",
            "title": "t",
            "order": 1,
            "questions": [{"question": "a", "points": -1}],
        })


def test_form_defaults_and_title_strip():
    form = FormIn.model_validate({"title": "  Survey  "})
    assert form.title == "Survey"
    assert form.is_published is False
    assert form.allow_multiple_responses is False
    assert form.created_by == "Anonymous"
    assert form.theme.primary_color == "#3B82F6"
    assert form.theme.background_color == "#FFFFFF"
    assert form.settings.show_progress_bar and form.settings.show_question_numbers


def test_blank_form_title_is_rejected():
    with pytest.raises(ValidationError):
        FormIn.model_validate({"title": "   "})


@pytest.mark.parametrize("points", [float("inf"), float("nan")])
def test_non_finite_points_are_rejected(points):
    with pytest.raises(ValidationError):
        question_adapter.validate_python({
            "type": "comprehension",
            "title": "t",
            "order": 1,
            "questions": [{"question": "a", "points": points}],
        })
