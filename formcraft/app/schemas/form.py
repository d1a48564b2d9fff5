"""Pydantic schemes for forms.
"""
# app/schemas/form.py
from datetime import datetime

from pydantic import Field, field_validator

from formcraft.app.schemas.question import CamelModel, Question


class Theme(CamelModel):
    primary_color: str = "#3B82F6"
    background_color: str = "#FFFFFF"


class FormSettings(CamelModel):
    show_progress_bar: bool = True
    show_question_numbers: bool = True


class FormIn(CamelModel):
    """Full form document as sent by the authoring UI (create and replace-on-save)."""
    title: str = Field(..., min_length=1)
    description: str | None = None
    header_image: str | None = None
    questions: list[Question] = Field(default_factory=list)
    is_published: bool = False
    allow_multiple_responses: bool = False
    theme: Theme = Field(default_factory=Theme)
    settings: FormSettings = Field(default_factory=FormSettings)
    created_by: str = "Anonymous"

    @field_validator("title", "description")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return value.strip() if isinstance(value, str) else value

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("title must not be blank")
        return value


class FormOut(FormIn):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PublishIn(CamelModel):
    is_published: bool


class ImageOut(CamelModel):
    header_image: str | None = None
    image: str | None = None
