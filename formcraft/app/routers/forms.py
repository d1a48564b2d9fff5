"""REST API endpoints for forms.

Provides CRUD and utility operations:
- forms (list, read, create, replace-on-save, delete);
- publishing (open or close a form for responses);
- images (header image and per-question image upload).
"""
# app/routers/forms.py
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from formcraft.app.core.errors import InvalidUpload
from formcraft.app.core.logging import get_logs_writer_logger
from formcraft.app.schemas.form import FormIn, FormOut, ImageOut, PublishIn
from formcraft.app.services.uploads import save_image
from formcraft.db.session import get_db
from formcraft.db.stores import FormStore

logger = get_logs_writer_logger()

router = APIRouter(tags=["forms"])


@router.get("/api/forms", response_model=List[FormOut])
def list_forms(db: Session = Depends(get_db)):
    """Get all forms, newest first.

    Args:
        db: The DB session.

    Returns:
        List[FormOut]: A list of forms.
    """
    store = FormStore(db)
    return [store.to_schema(f) for f in store.list_all()]


@router.get("/api/forms/{form_id}", response_model=FormOut)
def get_form(form_id: str, db: Session = Depends(get_db)):
    """Get a form by ID.

    Errors:
        404: The form was not found.
    """
    store = FormStore(db)
    return store.to_schema(store.require(form_id))


@router.post("/api/forms", response_model=FormOut, status_code=status.HTTP_201_CREATED)
def create_form(payload: FormIn, db: Session = Depends(get_db)):
    """Create a new form. Forms are created as sent; the builder creates them unpublished.

    Args:
        payload: The full form document.
        db: The DB session.

    Returns:
        FormOut: The created form.
    """
    store = FormStore(db)
    form = store.create(payload)
    logger.info("Created form %s with %d question(s)", form.form_id, len(payload.questions))
    return store.to_schema(form)


@router.put("/api/forms/{form_id}", response_model=FormOut)
def replace_form(form_id: str, payload: FormIn, db: Session = Depends(get_db)):
    """Replace the form with the document saved by the builder.

    Args:
        form_id: The form's ID.
        payload: The full form document.
        db: The DB session.

    Returns:
        FormOut: The updated form.

    Errors:
        404: The form was not found.
    """
    store = FormStore(db)
    form = store.replace(form_id, payload)
    for question in payload.questions:
        missing = question.unknown_categories() if question.type == "categorize" else []
        if missing:
            logger.warning("Form %s question %s references unknown categories: %s",
                           form_id, question.id, ", ".join(missing))
    return store.to_schema(form)


@router.delete("/api/forms/{form_id}")
def delete_form(form_id: str, db: Session = Depends(get_db)):
    """Delete the form together with its responses.

    Returns:
        dict: {"message": "Form deleted successfully"}.

    Errors:
        404: The form was not found.
    """
    FormStore(db).delete(form_id)
    logger.info("Deleted form %s", form_id)
    return {"message": "Form deleted successfully"}


@router.patch("/api/forms/{form_id}/publish", response_model=FormOut)
def publish_form(form_id: str, payload: PublishIn, db: Session = Depends(get_db)):
    """Publish or unpublish a form.

    Args:
        form_id: The form's ID.
        payload: {"isPublished": bool}.
        db: The DB session.

    Returns:
        FormOut: The updated form.

    Errors:
        404: The form was not found.
    """
    store = FormStore(db)
    form = store.set_published(form_id, payload.is_published)
    logger.info("Form %s is_published=%s", form_id, payload.is_published)
    return store.to_schema(form)


@router.post("/api/forms/{form_id}/header-image", response_model=ImageOut, response_model_exclude_none=True)
async def upload_header_image(
    form_id: str,
    header_image: UploadFile | None = File(None, alias="headerImage"),
    db: Session = Depends(get_db),
):
    """Upload the header image of a form.

    Returns:
        ImageOut: {"headerImage": "/uploads/..."}.

    Errors:
        400: No file, or not an image.
        404: The form was not found.
    """
    store = FormStore(db)
    store.require(form_id)
    url = await save_image(header_image, "headerImage")
    store.set_header_image(form_id, url)
    return ImageOut(header_image=url)


@router.post("/api/forms/{form_id}/questions/{question_index}/image", response_model=ImageOut, response_model_exclude_none=True)
async def upload_question_image(
    form_id: str,
    question_index: int,
    question_image: UploadFile | None = File(None, alias="questionImage"),
    db: Session = Depends(get_db),
):
    """Upload the image of the question at `question_index`.

    Returns:
        ImageOut: {"image": "/uploads/..."}.

    Errors:
        400: No file, not an image, or invalid question index.
        404: The form was not found.
    """
    store = FormStore(db)
    form = store.require(form_id)
    if not 0 <= question_index < len(form.questions):
        raise InvalidUpload("Invalid question index")
    url = await save_image(question_image, "questionImage")
    store.set_question_image(form_id, question_index, url)
    return ImageOut(image=url)
