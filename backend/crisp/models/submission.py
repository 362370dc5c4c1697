from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship, Mapped, mapped_column
from crisp.core.db import Base

class Submission(Base):
    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    assessment_id: Mapped[int] = mapped_column(ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)

    is_draft: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    score: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    adjusted_score: Mapped[float | None] = mapped_column(Float, nullable=True)

    answers: Mapped[list["Answer"]] = relationship(
        "Answer",
        back_populates="submission",
        cascade="all, delete-orphan",
        order_by="Answer.position",
    )

class Answer(Base):
    """Base row for every answer variant; `type` is "<question type> Answer"."""

    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    submission_id: Mapped[int] = mapped_column(ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id: Mapped[int] = mapped_column(ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(48), nullable=False)
    score: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    # str for text-like answers, float for scale/number answers
    value: Mapped[Any] = mapped_column(JSON, nullable=True)

    submission: Mapped["Submission"] = relationship("Submission", back_populates="answers")

    __mapper_args__ = {"polymorphic_on": "type"}

class MultipleChoiceAnswer(Answer):
    __mapper_args__ = {"polymorphic_identity": "Multiple Choice Answer"}

class MultipleResponseAnswer(Answer):
    values: Mapped[list[str]] = mapped_column(JSON, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "Multiple Response Answer"}

class ScaleAnswer(Answer):
    __mapper_args__ = {"polymorphic_identity": "Scale Answer"}

class NumberAnswer(Answer):
    __mapper_args__ = {"polymorphic_identity": "Number Answer"}

class ShortResponseAnswer(Answer):
    __mapper_args__ = {"polymorphic_identity": "Short Response Answer"}

class LongResponseAnswer(Answer):
    __mapper_args__ = {"polymorphic_identity": "Long Response Answer"}

class DateAnswer(Answer):
    start_date: Mapped[str | None] = mapped_column(String(64), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(64), nullable=True)

    __mapper_args__ = {"polymorphic_identity": "Date Answer"}

class NUSNETIDAnswer(Answer):
    __mapper_args__ = {"polymorphic_identity": "NUSNET ID Answer"}

class NUSNETEmailAnswer(Answer):
    __mapper_args__ = {"polymorphic_identity": "NUSNET Email Answer"}

class TeamMemberSelectionAnswer(Answer):
    selected_user_ids: Mapped[list[int]] = mapped_column(JSON, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "Team Member Selection Answer"}
