#!/usr/bin/env python
from sqlalchemy import select

from formcraft.app.schemas.form import FormIn
from formcraft.db import Base
from formcraft.db.models import Form
from formcraft.db.session import LocalSession, engine
from formcraft.db.stores import FormStore

DEMO_FORMS = [
    {
        "title": "Customer Satisfaction Survey",
        "description": "Help us improve our services by providing your valuable feedback",
        "isPublished": True,
        "createdBy": "Marketing Team",
        "questions": [
            {
                "type": "categorize",
                "title": "How would you rate our customer service?",
                "required": True,
                "order": 1,
                "categories": [
                    {"name": "Excellent", "color": "#10B981"},
                    {"name": "Good", "color": "#3B82F6"},
                    {"name": "Average", "color": "#F59E0B"},
                    {"name": "Poor", "color": "#EF4444"},
                ],
                "items": [
                    {"text": "Response time", "category": "Good"},
                    {"text": "Friendliness", "category": "Excellent"},
                    {"text": "Problem resolution", "category": "Average"},
                    {"text": "Knowledge", "category": "Good"},
                ],
            },
            {
                "type": "cloze",
                "title": "Complete the sentence",
                "required": True,
                "order": 2,
                "text": "Our company values _____ and _____.",
                "blanks": [
                    {"text": "innovation", "answer": "innovation", "hint": "Creating new ideas"},
                    {"text": "customer satisfaction", "answer": "customer satisfaction", "hint": "Making customers happy"},
                ],
            },
            {
                "type": "comprehension",
                "title": "Read the passage and answer the questions below",
                "required": True,
                "order": 3,
                "passage": (
                    "Our company was founded in 2010 with a mission to provide innovative solutions "
                    "to everyday problems. We believe in sustainable growth and building long-term "
                    "relationships with our customers."
                ),
                "questions": [
                    {"question": "When was the company founded?", "type": "multiple-choice",
                     "options": ["2008", "2010", "2012", "2015"], "correctAnswer": "2010", "points": 1},
                    {"question": "What is the company's approach to growth?", "type": "short-answer",
                     "correctAnswer": "sustainable", "points": 1},
                    {"question": "The company focuses on long-term relationships with customers.",
                     "type": "true-false", "correctAnswer": "true", "points": 1},
                ],
            },
        ],
    },
    {
        "title": "Employee Onboarding Quiz",
        "description": "Test your knowledge about company policies and procedures",
        "isPublished": False,
        "createdBy": "HR",
        "questions": [
            {
                "type": "categorize",
                "title": "Categorize these company policies",
                "order": 1,
                "categories": [
                    {"name": "HR Policies", "color": "#8B5CF6"},
                    {"name": "IT Policies", "color": "#06B6D4"},
                    {"name": "Safety Policies", "color": "#F59E0B"},
                ],
                "items": [
                    {"text": "Dress code", "category": "HR Policies"},
                    {"text": "Password rotation", "category": "IT Policies"},
                    {"text": "Fire drills", "category": "Safety Policies"},
                ],
            },
        ],
    },
]


def get_or_create(store: FormStore, payload: dict):
    existing = store.db.scalars(select(Form).where(Form.title == payload["title"])).first()
    if existing:
        return existing
    return store.create(FormIn.model_validate(payload))


def main():
    Base.metadata.create_all(bind=engine)
    db = LocalSession()
    try:
        store = FormStore(db)
        print("Seeded forms:")
        for payload in DEMO_FORMS:
            form = get_or_create(store, payload)
            print(f"{form.title}: {form.form_id} (published={form.is_published})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
