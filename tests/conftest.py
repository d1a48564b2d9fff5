import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="formcraft-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_PATH"] = os.path.join(_TMP, "logs")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from formcraft.app.main import app
from formcraft.db import Base
from formcraft.db.session import get_db


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def quiz_payload():
    """A three-question form: categorize, cloze, comprehension."""
    return {
        "title": "  Geography quiz  ",
        "description": "Capitals and dates",
        "questions": [
            {
                "id": "q-cat",
                "type": "categorize",
                "title": "Sort the cities",
                "order": 1,
                "categories": [{"name": "Europe", "color": "#3B82F6"}, {"name": "Asia", "color": "#EF4444"}],
                "items": [
                    {"id": "i1", "text": "Paris", "category": "Europe"},
                    {"id": "i2", "text": "Tokyo", "category": "Asia"},
                    {"id": "i3", "text": "Rome", "category": "Europe"},
                    {"id": "i4", "text": "Delhi", "category": "Asia"},
                ],
            },
            {
                "id": "q-cloze",
                "type": "cloze",
                "title": "Fill in",
                "order": 2,
                "text": "The capital of France is _____ since before _____.",
                "blanks": [{"text": "Paris", "answer": "Paris"}, {"text": "1990", "answer": "1990"}],
            },
            {
                "id": "q-comp",
                "type": "comprehension",
                "title": "Read and answer",
                "order": 3,
                "passage": "Paris grew sustainably over centuries.",
                "questions": [
                    {"question": "Capital?", "type": "multiple-choice", "options": ["Paris", "Lyon"],
                     "correctAnswer": "Paris", "points": 1},
                    {"question": "How did it grow?", "type": "short-answer", "correctAnswer": "sustainably",
                     "points": 1},
                ],
            },
        ],
    }


@pytest.fixture
def sample_answers():
    return [
        {"questionId": "q-cat", "questionType": "categorize", "answer": {"items": [
            {"text": "Paris", "category": "Europe"},
            {"text": "Tokyo", "category": "Asia"},
            {"text": "Rome", "category": "Europe"},
            {"text": "Delhi", "category": "Asia"},
        ]}},
        {"questionId": "q-cloze", "questionType": "cloze", "answer": {"blanks": [{"answer": "paris "}, {"answer": "1990"}]}},
        {"questionId": "q-comp", "questionType": "comprehension", "answer": {"questions": [
            {"answer": "Paris"}, {"answer": "it grew sustainably"},
        ]}},
    ]
