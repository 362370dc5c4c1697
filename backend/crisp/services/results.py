from sqlalchemy.orm import Session

from crisp.models import AssessmentResult
from crisp.services.assessments import get_assessment

def recalculate_result(result: AssessmentResult) -> None:
    scores = [m.score for m in result.marks]
    result.average_score = sum(scores) / len(scores) if scores else 0

def get_or_create_result(db: Session, assessment_id: int, student_id: int) -> AssessmentResult:
    result = find_result(db, assessment_id, student_id)
    if result is None:
        result = AssessmentResult(assessment_id=assessment_id, student_id=student_id, average_score=0)
        db.add(result)
    return result

def find_result(db: Session, assessment_id: int, student_id: int) -> AssessmentResult | None:
    return (
        db.query(AssessmentResult)
        .filter(AssessmentResult.assessment_id == assessment_id, AssessmentResult.student_id == student_id)
        .one_or_none()
    )

def get_results_by_assessment(db: Session, assessment_id: int) -> list[AssessmentResult]:
    get_assessment(db, assessment_id)
    return (
        db.query(AssessmentResult)
        .filter(AssessmentResult.assessment_id == assessment_id)
        .order_by(AssessmentResult.student_id)
        .all()
    )
