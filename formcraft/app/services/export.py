# app/services/export.py
import csv
import io
from typing import Any, Dict, List, Sequence

from formcraft.app.schemas.form import FormOut
from formcraft.app.schemas.response import AnswerOut, ResponseOut


def summarize_answer(answer: AnswerOut | None) -> str:
    """Flatten a raw answer into a single CSV cell."""
    if answer is None or not isinstance(answer.answer, dict):
        return ""
    raw = answer.answer
    if answer.question_type == "categorize":
        items = raw.get("items") or raw.get("categories") or []
        return "; ".join(
            f"{i.get('text', '')}: {i.get('category', '')}" for i in items if isinstance(i, dict)
        )
    key = "blanks" if answer.question_type == "cloze" else "questions"
    entries = raw.get(key) or []
    return ", ".join(
        str(e.get("answer") or "") for e in entries if isinstance(e, dict)
    )


class ResponsesExporter:
    """Export of the responses collected by one form"""

    def __init__(self, form: FormOut, responses: Sequence[ResponseOut]):
        self.form = form
        self.responses = responses

    def export_rows(self) -> List[Dict[str, Any]]:
        """
        One row per response with the respondent, the scores and, per question,
        the flattened answer and its points.

        Columns are keyed by question title; answers are joined to questions by
        question id, so rows stay aligned after the form is reordered.
        """
        rows = []
        for response in self.responses:
            by_id = {a.question_id: a for a in response.answers}
            r = response.respondent
            row = {
                "Submitted By": "Anonymous" if r.anonymous or not r.name else r.name,
                "Email": "" if r.anonymous else (r.email or ""),
                "Submitted At": response.submitted_at.isoformat() if response.submitted_at else "",
                "Total Score": round(response.total_score, 2),
                "Max Score": round(response.max_score, 2),
                "Time Spent": response.time_spent,
            }
            for number, question in enumerate(self.form.questions, start=1):
                answer = by_id.get(question.id)
                label = f"Q{number}. {question.title}"
                row[label] = summarize_answer(answer)
                row[f"{label} (points)"] = round(answer.points, 2) if answer else ""
            rows.append(row)
        return rows

    def export_to_csv(self) -> str:
        """Convert the responses to a CSV string, header only when there are none"""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=self._fieldnames())
        writer.writeheader()
        writer.writerows(self.export_rows())
        return output.getvalue()

    def _fieldnames(self) -> List[str]:
        names = ["Submitted By", "Email", "Submitted At", "Total Score", "Max Score", "Time Spent"]
        for number, question in enumerate(self.form.questions, start=1):
            label = f"Q{number}. {question.title}"
            names += [label, f"{label} (points)"]
        return names


def export_responses_to_csv(form: FormOut, responses: Sequence[ResponseOut]) -> str:
    """Export the responses of a form to a CSV string"""
    return ResponsesExporter(form, responses).export_to_csv()
