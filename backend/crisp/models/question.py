from sqlalchemy import JSON, Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from crisp.core.db import Base

class Question(Base):
    """Base row for every question variant; `type` selects the subclass."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    assessment_id: Mapped[int] = mapped_column(ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_scored: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    assessment: Mapped["Assessment"] = relationship("Assessment", back_populates="questions")

    __mapper_args__ = {"polymorphic_on": "type"}

class MultipleChoiceQuestion(Question):
    options: Mapped[list[dict]] = mapped_column(JSON, nullable=True, use_existing_column=True)  # [{text, points}]

    __mapper_args__ = {"polymorphic_identity": "Multiple Choice"}

class MultipleResponseQuestion(Question):
    options: Mapped[list[dict]] = mapped_column(JSON, nullable=True, use_existing_column=True)
    allow_partial_marks: Mapped[bool] = mapped_column(Boolean, default=False, nullable=True)
    are_wrong_answers_penalized: Mapped[bool] = mapped_column(Boolean, default=False, nullable=True)
    allow_negative: Mapped[bool] = mapped_column(Boolean, default=False, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "Multiple Response"}

class ScaleQuestion(Question):
    scale_max: Mapped[int] = mapped_column(Integer, nullable=True)
    labels: Mapped[list[dict]] = mapped_column(JSON, nullable=True)  # [{value, label, points}]

    __mapper_args__ = {"polymorphic_identity": "Scale"}

class NumberQuestion(Question):
    max_number: Mapped[float] = mapped_column(Float, nullable=True)
    scoring_method: Mapped[str] = mapped_column(String(16), default="None", nullable=True)  # direct | range | None
    max_points: Mapped[float | None] = mapped_column(Float, nullable=True)
    scoring_ranges: Mapped[list[dict] | None] = mapped_column(JSON, nullable=True)  # [{min_value, max_value, points}]

    __mapper_args__ = {"polymorphic_identity": "Number"}

class ShortResponseQuestion(Question):
    __mapper_args__ = {"polymorphic_identity": "Short Response"}

class LongResponseQuestion(Question):
    __mapper_args__ = {"polymorphic_identity": "Long Response"}

class DateQuestion(Question):
    is_range: Mapped[bool] = mapped_column(Boolean, default=False, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "Date"}

class NUSNETIDQuestion(Question):
    __mapper_args__ = {"polymorphic_identity": "NUSNET ID"}

class NUSNETEmailQuestion(Question):
    __mapper_args__ = {"polymorphic_identity": "NUSNET Email"}

class TeamMemberSelectionQuestion(Question):
    __mapper_args__ = {"polymorphic_identity": "Team Member Selection"}
