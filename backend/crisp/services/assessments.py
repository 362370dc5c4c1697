from sqlalchemy.orm import Session

from crisp.core.errors import NotFoundError
from crisp.models import Assessment, Question
from crisp.services.scoring import max_question_points

def get_assessment(db: Session, assessment_id: int) -> Assessment:
    assessment = db.get(Assessment, assessment_id)
    if not assessment:
        raise NotFoundError("Assessment not found")
    return assessment

def add_question(db: Session, assessment_id: int, payload) -> Assessment:
    """Append a question built from a QuestionCreate payload and refresh the marks total."""
    assessment = get_assessment(db, assessment_id)

    model = Question.__mapper__.polymorphic_map[payload.type].class_
    question = model(position=len(assessment.questions) + 1, **payload.model_dump(exclude={"type"}))
    assessment.questions.append(question)
    assessment.questions_total_marks = sum(max_question_points(q) for q in assessment.questions)

    db.commit()
    db.refresh(assessment)
    return assessment
