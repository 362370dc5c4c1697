from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from crisp.core.db import get_db
from crisp.models import Assessment
from crisp.schemas.assessment import AssessmentCreate, AssessmentOut
from crisp.schemas.question import QuestionCreate
from crisp.schemas.result import AssessmentResultOut
from crisp.services.assessments import add_question, get_assessment
from crisp.services.results import get_results_by_assessment

router = APIRouter(prefix="/api/assessments", tags=["assessments"])

@router.post("", response_model=AssessmentOut)
def create_assessment(payload: AssessmentCreate, db: Session = Depends(get_db)):
    a = Assessment(**payload.model_dump(), questions_total_marks=0)
    db.add(a)
    db.commit()
    db.refresh(a)
    return a

@router.get("/{assessment_id}", response_model=AssessmentOut)
def read_assessment(assessment_id: int, db: Session = Depends(get_db)):
    return get_assessment(db, assessment_id)

@router.post("/{assessment_id}/questions", response_model=AssessmentOut)
def create_question(assessment_id: int, payload: QuestionCreate, db: Session = Depends(get_db)):
    return add_question(db, assessment_id, payload)

@router.get("/{assessment_id}/results", response_model=list[AssessmentResultOut])
def list_results(assessment_id: int, db: Session = Depends(get_db)):
    return get_results_by_assessment(db, assessment_id)
