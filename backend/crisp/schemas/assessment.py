from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from crisp.schemas.question import QuestionOut

def _to_utc(value: datetime | None) -> datetime | None:
    # naive datetimes are taken as UTC; the store keeps wall-clock time only
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

class AssessmentCreate(BaseModel):
    title: str
    granularity: Literal["individual", "team"]
    max_marks: float | None = None
    start_date: datetime
    end_date: datetime | None = None
    are_submissions_editable: bool = True

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_to_utc(cls, v):
        return _to_utc(v)

class AssessmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    granularity: str
    max_marks: float | None
    questions_total_marks: float
    start_date: datetime
    end_date: datetime | None
    are_submissions_editable: bool
    questions: list[QuestionOut]

    @field_validator("start_date", "end_date")
    @classmethod
    def mark_as_utc(cls, v):
        return _to_utc(v)
