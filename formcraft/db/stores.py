"""Form and response stores over an explicitly passed SQLAlchemy session.

The stores own no connection state: the caller opens the session (see
`formcraft.db.session.get_db`) and hands it in, and the stores commit their own
single-document writes.
"""
# db/stores.py
import copy
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from formcraft.app.core.errors import FormNotFound, ResponseNotFound
from formcraft.app.schemas.form import FormIn, FormOut
from formcraft.app.schemas.response import ResponseOut
from formcraft.db.models import Form, Response


class FormStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, form_id: str) -> Form | None:
        return self.db.get(Form, form_id)

    def require(self, form_id: str) -> Form:
        form = self.get(form_id)
        if not form:
            raise FormNotFound(form_id)
        return form

    def list_all(self) -> list[Form]:
        return list(self.db.scalars(select(Form).order_by(Form.created_at.desc())).all())

    @staticmethod
    def is_published(form: Form) -> bool:
        return bool(form.is_published)

    def create(self, data: FormIn) -> Form:
        form = Form(**self._columns(data))
        self.db.add(form)
        self.db.commit()
        self.db.refresh(form)
        return form

    def replace(self, form_id: str, data: FormIn) -> Form:
        """Replace the whole form document, keeping its id and creation time."""
        form = self.require(form_id)
        for field, value in self._columns(data).items():
            setattr(form, field, value)
        self.db.commit()
        self.db.refresh(form)
        return form

    def set_published(self, form_id: str, is_published: bool) -> Form:
        form = self.require(form_id)
        form.is_published = is_published
        self.db.commit()
        self.db.refresh(form)
        return form

    def set_header_image(self, form_id: str, url: str) -> Form:
        form = self.require(form_id)
        form.header_image = url
        self.db.commit()
        self.db.refresh(form)
        return form

    def set_question_image(self, form_id: str, question_index: int, url: str) -> Form:
        """Set the image of the question at `question_index`.

        Raises:
            FormNotFound: The form does not exist.
            IndexError: The index is outside the question list.
        """
        form = self.require(form_id)
        if not 0 <= question_index < len(form.questions):
            raise IndexError(question_index)
        # JSON columns only track reassignment, so write a fresh copy back
        questions = copy.deepcopy(form.questions)
        questions[question_index]["image"] = url
        form.questions = questions
        self.db.commit()
        self.db.refresh(form)
        return form

    def delete(self, form_id: str) -> None:
        form = self.require(form_id)
        self.db.delete(form)
        self.db.commit()

    @staticmethod
    def _columns(data: FormIn) -> dict[str, Any]:
        doc = data.model_dump(mode="json", by_alias=True)
        return {
            "title": data.title,
            "description": data.description,
            "header_image": data.header_image,
            "questions": doc["questions"],
            "is_published": data.is_published,
            "allow_multiple_responses": data.allow_multiple_responses,
            "theme": doc["theme"],
            "settings": doc["settings"],
            "created_by": data.created_by,
        }

    @staticmethod
    def to_schema(form: Form) -> FormOut:
        return FormOut.model_validate({
            "id": form.form_id,
            "title": form.title,
            "description": form.description,
            "headerImage": form.header_image,
            "questions": form.questions or [],
            "isPublished": form.is_published,
            "allowMultipleResponses": form.allow_multiple_responses,
            "theme": form.theme or {},
            "settings": form.settings or {},
            "createdBy": form.created_by,
            "createdAt": form.created_at,
            "updatedAt": form.updated_at,
        })


class ResponseStore:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, **fields: Any) -> Response:
        """Insert one response document in a single transaction."""
        response = Response(**fields)
        self.db.add(response)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(response)
        return response

    def get(self, response_id: str) -> Response | None:
        return self.db.get(Response, response_id)

    def find_all_by_form_id(self, form_id: str, newest_first: bool = True) -> list[Response]:
        order = Response.submitted_at.desc() if newest_first else Response.submitted_at.asc()
        return list(self.db.scalars(
            select(Response).where(Response.form_id == form_id).order_by(order)
        ).all())

    def delete(self, response_id: str) -> None:
        response = self.get(response_id)
        if not response:
            raise ResponseNotFound(response_id)
        self.db.delete(response)
        self.db.commit()

    @staticmethod
    def to_schema(response: Response) -> ResponseOut:
        return ResponseOut.model_validate({
            "id": response.response_id,
            "formId": response.form_id,
            "respondent": response.respondent or {},
            "answers": response.answers or [],
            "totalScore": response.total_score,
            "maxScore": response.max_score,
            "timeSpent": response.time_spent,
            "startedAt": response.started_at,
            "submittedAt": response.submitted_at,
            "ipAddress": response.ip_address,
            "userAgent": response.user_agent,
        })
