from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from formcraft.app.schemas.form import FormOut
from formcraft.app.schemas.response import FormStats, ResponseOut

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _respondent_label(response: ResponseOut) -> str:
    """
    Return the display name for a response row.

    Anonymous respondents, and respondents without a name, are shown as
    "Anonymous"; otherwise the name is used, followed by the email when known.
    """
    r = response.respondent
    if r.anonymous or not r.name:
        return "Anonymous"
    return f"{r.name} <{r.email}>" if r.email else r.name


def build_context(form: FormOut, stats: FormStats, responses: Sequence[ResponseOut]) -> dict[str, Any]:
    """
    Convert a form, its statistics and its responses to a Jinja template context.

    Question statistics are joined to question titles by index; indexes beyond
    the current question list (the form was edited after responses came in)
    are labelled by position only.

    Parameters:
        form: The form the responses belong to.
        stats: Output of `compute_stats` for the same responses.
        responses: Responses to list, in display order.
    """
    questions = []
    for qs in stats.question_stats:
        if qs.question_index < len(form.questions):
            q = form.questions[qs.question_index]
            title, q_type = q.title, q.type
        else:
            title, q_type = f"Question {qs.question_index + 1}", ""
        questions.append({
            "number": qs.question_index + 1,
            "title": title,
            "type": q_type,
            "average_score": qs.average_score,
            "response_count": qs.response_count,
        })

    rows = []
    for r in responses:
        percent = (r.total_score / r.max_score * 100) if r.max_score else 0.0
        rows.append({
            "respondent": _respondent_label(r),
            "submitted_at": r.submitted_at.strftime("%Y-%m-%d %H:%M") if r.submitted_at else "",
            "total_score": round(r.total_score, 2),
            "max_score": round(r.max_score, 2),
            "percent": round(percent, 2),
            "time_spent": r.time_spent,
        })

    return {
        "title": form.title,
        "description": form.description or "",
        "primary_color": form.theme.primary_color,
        "total_responses": stats.total_responses,
        "average_score": stats.average_score,
        "completion_rate": stats.completion_rate,
        "questions": questions,
        "responses": rows,
    }


def create_report(
    form: FormOut,
    stats: FormStats,
    responses: Sequence[ResponseOut],
    *,
    templates_dir: str | Path = TEMPLATES_DIR,
    template_name: str = "results.html",
) -> str:
    """
    Render the HTML results report of a form.

    Args:
        form: The form being reported on.
        stats: Aggregated statistics of its responses.
        responses: The responses to list, newest first.
        templates_dir: Directory containing Jinja templates.
        template_name: Template filename within `templates_dir`.

    Returns:
        The rendered HTML document.
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template(template_name)
    return template.render(**build_context(form, stats, responses))
