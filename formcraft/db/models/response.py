# db/models/response.py
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Float, DateTime, ForeignKey, JSON
from formcraft.db import Base
from formcraft.db.models.form import utcnow
import uuid


class Response(Base):
    __tablename__ = "responses"

    response_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    form_id: Mapped[str] = mapped_column(String, ForeignKey("forms.form_id", ondelete="CASCADE"), nullable=False, index=True)

    respondent: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    # graded answers in form question order: questionId, questionType, answer, points, isCorrect
    answers: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    total_score: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    max_score: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    time_spent: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    ip_address: Mapped[str | None] = mapped_column(String, nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String, nullable=True)

    form = relationship("Form", back_populates="responses")
