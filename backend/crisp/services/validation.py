from datetime import datetime

from pydantic import TypeAdapter, ValidationError

from crisp.core.errors import BadRequestError
from crisp.models import (
    Assessment,
    DateQuestion,
    LongResponseQuestion,
    MultipleChoiceQuestion,
    MultipleResponseQuestion,
    NumberQuestion,
    NUSNETEmailQuestion,
    NUSNETIDQuestion,
    Question,
    ScaleQuestion,
    ShortResponseQuestion,
    TeamMemberSelectionQuestion,
)

_datetime = TypeAdapter(datetime)

def _is_valid_date(raw) -> bool:
    if not raw:
        return False
    try:
        _datetime.validate_python(raw)
    except ValidationError:
        return False
    return True

def _validate_string(question: Question, answer, assessment: Assessment) -> None:
    if not isinstance(answer.value, str):
        raise BadRequestError(f"Answer for question {question.id} must be a string")

def _validate_team_member_selection(question: TeamMemberSelectionQuestion, answer, assessment: Assessment) -> None:
    if not isinstance(answer.selected_user_ids, list):
        raise BadRequestError(f"Answers for question {question.id} must be an array")
    if assessment.granularity == "individual" and len(answer.selected_user_ids) > 1:
        raise BadRequestError(f"Only one team member can be selected for question {question.id}")

def _validate_multiple_choice(question: MultipleChoiceQuestion, answer, assessment: Assessment) -> None:
    texts = {o["text"] for o in question.options or []}
    if answer.value not in texts:
        raise BadRequestError(f"Invalid option selected for question {question.id}")

def _validate_multiple_response(question: MultipleResponseQuestion, answer, assessment: Assessment) -> None:
    if not isinstance(answer.values, list):
        raise BadRequestError(f"Answers for question {question.id} must be an array")
    texts = {o["text"] for o in question.options or []}
    for value in answer.values:
        if value not in texts:
            raise BadRequestError(f"Invalid option selected for question {question.id}")

def _validate_scale(question: ScaleQuestion, answer, assessment: Assessment) -> None:
    if answer.value < 1 or answer.value > question.scale_max:
        raise BadRequestError(f"Invalid scale value for question {question.id}")

def _validate_date(question: DateQuestion, answer, assessment: Assessment) -> None:
    if question.is_range:
        if not (_is_valid_date(answer.start_date) and _is_valid_date(answer.end_date)):
            raise BadRequestError(f"Invalid date range provided for question {question.id}")
    elif not _is_valid_date(answer.value):
        raise BadRequestError(f"Invalid date provided for question {question.id}")

def _validate_number(question: NumberQuestion, answer, assessment: Assessment) -> None:
    if isinstance(answer.value, bool) or not isinstance(answer.value, (int, float)):
        raise BadRequestError(f"Answer for question {question.id} must be a number")
    if answer.value < 0 or answer.value > question.max_number:
        raise BadRequestError(f"Invalid number value for question {question.id}")

VALIDATORS = {
    NUSNETIDQuestion: _validate_string,
    NUSNETEmailQuestion: _validate_string,
    TeamMemberSelectionQuestion: _validate_team_member_selection,
    MultipleChoiceQuestion: _validate_multiple_choice,
    MultipleResponseQuestion: _validate_multiple_response,
    ScaleQuestion: _validate_scale,
    ShortResponseQuestion: _validate_string,
    LongResponseQuestion: _validate_string,
    DateQuestion: _validate_date,
    NumberQuestion: _validate_number,
}

def validate_answers(assessment: Assessment, answers: list) -> None:
    """
    Check every answer against its question in `assessment`.

    Raises BadRequestError on the first violation; nothing is accepted
    unless every answer passes.
    """
    questions = {q.id: q for q in assessment.questions}

    for answer in answers:
        question = questions.get(answer.question_id)
        if question is None:
            raise BadRequestError(f"Question {answer.question_id} not found in this assessment")

        if answer.type != f"{question.type} Answer":
            raise BadRequestError(
                f'Answer type "{answer.type}" does not match question type "{question.type}" '
                f"for question {question.id}"
            )

        validator = VALIDATORS.get(type(question))
        if validator is None:
            raise BadRequestError(f"Unsupported question type for question {question.id}")
        validator(question, answer, assessment)
