from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from crisp.api.deps import get_current_user
from crisp.core.db import get_db
from crisp.models import User
from crisp.schemas.submission import AdjustScoreIn, SubmissionCreate, SubmissionOut, SubmissionUpdate
from crisp.services import submissions as service

router = APIRouter(tags=["submissions"])

@router.post("/api/assessments/{assessment_id}/submissions", response_model=SubmissionOut)
def create_submission(
    assessment_id: int,
    payload: SubmissionCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return service.create_submission(db, assessment_id, user, payload.answers, payload.is_draft)

@router.get("/api/assessments/{assessment_id}/submissions", response_model=list[SubmissionOut])
def list_submissions(assessment_id: int, db: Session = Depends(get_db)):
    return service.get_submissions_by_assessment(db, assessment_id)

@router.get("/api/assessments/{assessment_id}/submissions/mine", response_model=list[SubmissionOut])
def list_my_submissions(assessment_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return service.get_submissions_by_assessment_and_user(db, assessment_id, user.id)

@router.put("/api/submissions/{submission_id}", response_model=SubmissionOut)
def update_submission(
    submission_id: int,
    payload: SubmissionUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return service.update_submission(db, submission_id, user, payload.answers, payload.is_draft)

@router.patch("/api/submissions/{submission_id}/adjusted-score", response_model=SubmissionOut)
def adjust_score(submission_id: int, payload: AdjustScoreIn, db: Session = Depends(get_db)):
    return service.adjust_submission_score(db, submission_id, payload.adjusted_score)

@router.delete("/api/submissions/{submission_id}")
def delete_submission(submission_id: int, db: Session = Depends(get_db)):
    service.delete_submission(db, submission_id)
    return {"ok": True}
