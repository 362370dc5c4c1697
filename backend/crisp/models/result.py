from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import relationship, Mapped, mapped_column
from crisp.core.db import Base

class AssessmentResult(Base):
    __tablename__ = "assessment_results"
    __table_args__ = (UniqueConstraint("assessment_id", "student_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    assessment_id: Mapped[int] = mapped_column(ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    average_score: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    marks: Mapped[list["MarkEntry"]] = relationship(
        "MarkEntry",
        back_populates="result",
        cascade="all, delete-orphan",
        order_by="MarkEntry.id",
    )

class MarkEntry(Base):
    __tablename__ = "mark_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    result_id: Mapped[int] = mapped_column(ForeignKey("assessment_results.id", ondelete="CASCADE"), nullable=False, index=True)
    marker_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    submission_id: Mapped[int] = mapped_column(ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, index=True)
    score: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    result: Mapped["AssessmentResult"] = relationship("AssessmentResult", back_populates="marks")
