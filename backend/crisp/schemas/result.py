from pydantic import BaseModel, ConfigDict

class MarkEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    marker_id: int
    submission_id: int
    score: float

class AssessmentResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    assessment_id: int
    student_id: int
    average_score: float
    marks: list[MarkEntryOut]
