"""REST API endpoints for form responses.

Provides:
- submission (grading and storing a response);
- listing and deletion of responses;
- statistics, CSV export and the HTML results report of a form.
"""
# app/routers/responses.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.orm import Session

from formcraft.app.core.logging import get_logs_writer_logger
from formcraft.app.schemas.response import FormStats, ResponseOut, SubmissionIn
from formcraft.app.services.export import export_responses_to_csv
from formcraft.db.session import get_db
from formcraft.db.stores import FormStore, ResponseStore
from formcraft.grading.aggregator import submit_response
from formcraft.grading.reports.jinja import create_report
from formcraft.grading.stats import compute_stats

logger = get_logs_writer_logger()

router = APIRouter(tags=["responses"])


def _safe_filename(name: str, fallback: str = "form") -> str:
    filtered = "".join(ch for ch in (name or "") if ch.isalnum() or ch in (" ", ".", "_", "-")).strip()
    return filtered or fallback


@router.post("/api/responses/{form_id}", response_model=ResponseOut, status_code=status.HTTP_201_CREATED)
def submit(form_id: str, payload: SubmissionIn, request: Request, db: Session = Depends(get_db)):
    """Grade and store a response to a published form.

    Args:
        form_id: The ID of the form being answered.
        payload: Respondent, answers and timing.
        request: Request object (client address and user agent are stored).
        db: The DB session.

    Returns:
        ResponseOut: The stored response with per-question points.

    Errors:
        400: The form is not published.
        404: The form was not found.
    """
    response = submit_response(
        FormStore(db),
        ResponseStore(db),
        form_id,
        payload,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return ResponseStore.to_schema(response)


@router.get("/api/responses/{form_id}", response_model=List[ResponseOut])
def list_responses(form_id: str, db: Session = Depends(get_db)):
    """Get all responses of a form, newest first.

    Args:
        form_id: The form's ID.
        db: The DB session.

    Returns:
        List[ResponseOut]: A list of responses (empty for unknown forms).
    """
    store = ResponseStore(db)
    return [store.to_schema(r) for r in store.find_all_by_form_id(form_id)]


@router.delete("/api/responses/{response_id}")
def delete_response(response_id: str, db: Session = Depends(get_db)):
    """Delete a response.

    Returns:
        dict: {"message": "Response deleted successfully"}.

    Errors:
        404: The response was not found.
    """
    ResponseStore(db).delete(response_id)
    logger.info("Deleted response %s", response_id)
    return {"message": "Response deleted successfully"}


@router.get("/api/responses/{form_id}/stats", response_model=FormStats)
def get_stats(form_id: str, db: Session = Depends(get_db)):
    """Get the aggregated statistics of a form's responses.

    Returns:
        FormStats: totalResponses, averageScore, completionRate and questionStats.
    """
    store = ResponseStore(db)
    responses = [store.to_schema(r) for r in store.find_all_by_form_id(form_id, newest_first=False)]
    return compute_stats(responses)


@router.get("/api/responses/{form_id}/export.csv")
def export_csv(form_id: str, db: Session = Depends(get_db)):
    """Download the responses of a form as CSV.

    Errors:
        404: The form was not found.
    """
    form_store, response_store = FormStore(db), ResponseStore(db)
    form = form_store.to_schema(form_store.require(form_id))
    responses = [response_store.to_schema(r) for r in response_store.find_all_by_form_id(form_id)]
    content = export_responses_to_csv(form, responses)
    filename = f"{_safe_filename(form.title)}_responses.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/api/responses/{form_id}/report", response_class=HTMLResponse)
def results_report(form_id: str, db: Session = Depends(get_db)):
    """Render the HTML results report of a form.

    Errors:
        404: The form was not found.
    """
    form_store, response_store = FormStore(db), ResponseStore(db)
    form = form_store.to_schema(form_store.require(form_id))
    oldest_first = [response_store.to_schema(r) for r in response_store.find_all_by_form_id(form_id, newest_first=False)]
    stats = compute_stats(oldest_first)
    return HTMLResponse(create_report(form, stats, list(reversed(oldest_first))))
