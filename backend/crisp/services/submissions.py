"""
Submission aggregation.

Scores a validated answer set, stores the submission with the summed
total, and keeps one mark entry per (marked student, submission) in the
student's assessment result.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from crisp.core.errors import BadRequestError, CrispError, NotFoundError
from crisp.models import Answer, Assessment, MarkEntry, Submission, User
from crisp.services.assessments import get_assessment
from crisp.services.results import find_result, get_or_create_result, recalculate_result
from crisp.services.scoring import calculate_answer_score
from crisp.services.validation import validate_answers

logger = logging.getLogger(__name__)

TEAM_MEMBER_SELECTION_ANSWER = "Team Member Selection Answer"

def _as_utc(dt: datetime | None) -> datetime | None:
    # sqlite hands back naive datetimes
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=timezone.utc)

def validate_submission_period(assessment: Assessment, now: datetime | None = None) -> None:
    now = now or datetime.now(timezone.utc)
    start, end = _as_utc(assessment.start_date), _as_utc(assessment.end_date)
    if start > now or (end is not None and end < now):
        raise BadRequestError("Assessment is not open for submissions at this time")

def _selected_students(answers: list) -> list[int]:
    selection = next((a for a in answers if a.type == TEAM_MEMBER_SELECTION_ANSWER), None)
    if selection is None:
        raise BadRequestError("Student(s) must be selected!")
    return list(dict.fromkeys(selection.selected_user_ids))

def check_submission_uniqueness(db: Session, assessment: Assessment, user: User, student_ids: list[int]) -> bool:
    """True when `user` has not yet submitted for any of `student_ids` in `assessment`."""
    previous = (
        db.query(Submission)
        .filter(Submission.assessment_id == assessment.id, Submission.user_id == user.id)
        .all()
    )
    already_marked = set()
    for sub in previous:
        for answer in sub.answers:
            if answer.type == TEAM_MEMBER_SELECTION_ANSWER:
                already_marked.update(answer.selected_user_ids or [])
    return not already_marked.intersection(student_ids)

def score_answers(assessment: Assessment, answers: list) -> tuple[list[Answer], float]:
    """Build scored answer rows for `answers` and return them with their total."""
    questions = {q.id: q for q in assessment.questions}
    rows = []
    total = 0

    for position, answer in enumerate(answers):
        question = questions.get(answer.question_id)
        if question is None:
            logger.warning("question %s not found in assessment %s, scoring 0", answer.question_id, assessment.id)
            score = 0
        else:
            score = calculate_answer_score(question, answer, assessment)
        total += score

        model = Answer.__mapper__.polymorphic_map[answer.type].class_
        rows.append(model(position=position, score=score, **answer.model_dump(exclude={"type"})))

    return rows, total

def create_submission(db: Session, assessment_id: int, user: User, answers: list, is_draft: bool) -> Submission:
    assessment = get_assessment(db, assessment_id)

    validate_submission_period(assessment)
    validate_answers(assessment, answers)
    student_ids = _selected_students(answers)
    if not check_submission_uniqueness(db, assessment, user, student_ids):
        raise BadRequestError("A submission for the selected student(s) already exists")

    rows, total = score_answers(assessment, answers)
    submission = Submission(
        assessment_id=assessment.id,
        user_id=user.id,
        answers=rows,
        is_draft=is_draft,
        submitted_at=datetime.now(timezone.utc),
        score=total,
    )
    db.add(submission)
    db.flush()

    for student_id in student_ids:
        result = get_or_create_result(db, assessment.id, student_id)
        result.marks.append(MarkEntry(marker_id=user.id, submission_id=submission.id, score=total))
        recalculate_result(result)

    db.commit()
    db.refresh(submission)
    logger.info("submission %s created for assessment %s with score %s", submission.id, assessment.id, total)
    return submission

def update_submission(db: Session, submission_id: int, user: User, answers: list, is_draft: bool) -> Submission:
    submission = db.get(Submission, submission_id)
    if not submission:
        raise NotFoundError("Submission not found")

    bypass = user.is_privileged
    if not bypass and submission.user_id != user.id:
        raise BadRequestError("You do not have permission to update this submission.")

    assessment = get_assessment(db, submission.assessment_id)

    validate_submission_period(assessment)
    validate_answers(assessment, answers)
    if not bypass and not assessment.are_submissions_editable and not submission.is_draft:
        raise BadRequestError("Submissions are not editable for this assessment")
    student_ids = _selected_students(answers)

    try:
        rows, total = score_answers(assessment, answers)
        submission.answers = rows
        submission.is_draft = is_draft
        submission.submitted_at = datetime.now(timezone.utc)
        if submission.score != total:
            # a manual adjustment applies to the old score only
            submission.score = total
            submission.adjusted_score = None

        for student_id in student_ids:
            result = find_result(db, assessment.id, student_id)
            if result is None:
                raise NotFoundError(f"No previous assessment result found for student {student_id}")

            entry = next((m for m in result.marks if m.submission_id == submission.id), None)
            if entry is None:
                raise NotFoundError("Mark entry for this submission not found in assessment result")
            entry.marker_id = user.id
            entry.score = total
            recalculate_result(result)

        db.commit()
    except CrispError:
        db.rollback()
        raise

    db.refresh(submission)
    logger.info("submission %s updated with score %s", submission.id, total)
    return submission

def adjust_submission_score(db: Session, submission_id: int, adjusted_score: float) -> Submission:
    submission = db.get(Submission, submission_id)
    if not submission:
        raise NotFoundError("Submission not found")
    if adjusted_score < 0:
        raise BadRequestError("Adjusted score cannot be negative.")

    submission.adjusted_score = adjusted_score
    db.commit()
    db.refresh(submission)
    logger.info("submission %s adjusted to %s", submission.id, adjusted_score)
    return submission

def get_submissions_by_assessment(db: Session, assessment_id: int) -> list[Submission]:
    return (
        db.query(Submission)
        .filter(Submission.assessment_id == assessment_id)
        .order_by(Submission.id)
        .all()
    )

def get_submissions_by_assessment_and_user(db: Session, assessment_id: int, user_id: int) -> list[Submission]:
    return (
        db.query(Submission)
        .filter(Submission.assessment_id == assessment_id, Submission.user_id == user_id)
        .order_by(Submission.id)
        .all()
    )

def delete_submission(db: Session, submission_id: int) -> None:
    submission = db.get(Submission, submission_id)
    if not submission:
        raise NotFoundError("Submission not found")

    entries = db.query(MarkEntry).filter(MarkEntry.submission_id == submission_id).all()
    for entry in entries:
        result = entry.result
        result.marks.remove(entry)
        recalculate_result(result)

    db.delete(submission)
    db.commit()
    logger.info("submission %s deleted", submission_id)
