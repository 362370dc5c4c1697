from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from crisp.schemas.answer import AnswerIn, AnswerOut

class SubmissionCreate(BaseModel):
    answers: list[AnswerIn]
    is_draft: bool = False

class SubmissionUpdate(BaseModel):
    answers: list[AnswerIn]
    is_draft: bool = False

class AdjustScoreIn(BaseModel):
    adjusted_score: float

class SubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    assessment_id: int
    user_id: int
    is_draft: bool
    submitted_at: datetime | None
    score: float
    adjusted_score: float | None
    answers: list[AnswerOut] = Field(default_factory=list)
