"""
Per-question-type scoring.

Every scorer is a pure function of a question and an answer and returns the
raw (unscaled) score; unscored questions always give 0. Questions carry
their options, labels and ranges as lists of plain dicts, exactly as they
are stored.
"""
from crisp.models import (
    Assessment,
    MultipleChoiceQuestion,
    MultipleResponseQuestion,
    NumberQuestion,
    Question,
    ScaleQuestion,
)

def scaling_factor(assessment: Assessment) -> float:
    if not assessment.max_marks or not assessment.questions_total_marks:
        return 1
    return assessment.max_marks / assessment.questions_total_marks

def score_multiple_choice(question: MultipleChoiceQuestion, answer) -> float:
    if not question.is_scored:
        return 0
    for option in question.options or []:
        if option["text"] == answer.value:
            return option["points"]
    return 0

def score_multiple_response(question: MultipleResponseQuestion, answer) -> float:
    if not question.is_scored:
        return 0

    options = question.options or []
    by_text = {}
    for o in options:
        by_text.setdefault(o["text"], o)
    chosen = [by_text[v] for v in answer.values if v in by_text]
    correct = [o for o in options if o["points"] > 0]

    if not question.allow_partial_marks:
        all_correct_chosen = all(o["text"] in answer.values for o in correct)
        chose_incorrect = any(o["points"] <= 0 for o in chosen)
        if not all_correct_chosen or chose_incorrect:
            return 0
        return max(sum(o["points"] for o in chosen), 0)

    score = sum(o["points"] for o in chosen)
    if not question.are_wrong_answers_penalized or not question.allow_negative:
        score = max(score, 0)
    return score

def _interpolate(x0: float, y0: float, x1: float, y1: float, x: float) -> float:
    return y0 + (y1 - y0) * (x - x0) / (x1 - x0)

def score_scale(question: ScaleQuestion, answer) -> float:
    if not question.is_scored or not question.labels:
        return 0

    labels = sorted(question.labels, key=lambda label: label["value"])
    value = answer.value

    if value <= labels[0]["value"]:
        return labels[0]["points"]
    if value >= labels[-1]["value"]:
        return labels[-1]["points"]

    for current, nxt in zip(labels, labels[1:]):
        if value == current["value"]:
            return current["points"]
        if value == nxt["value"]:
            return nxt["points"]
        if current["value"] < value < nxt["value"]:
            return _interpolate(current["value"], current["points"], nxt["value"], nxt["points"], value)
    return 0

def score_number(question: NumberQuestion, answer) -> float:
    if not question.is_scored:
        return 0

    value = answer.value

    if question.scoring_method == "direct":
        if not question.max_number:
            return 0
        return (value / question.max_number) * (question.max_points or 0)

    if question.scoring_method == "range" and question.scoring_ranges:
        ranges = sorted(question.scoring_ranges, key=lambda r: r["min_value"])

        for r in ranges:
            if r["min_value"] <= value <= r["max_value"]:
                return r["points"]

        lower = higher = None
        for r in ranges:
            if r["max_value"] < value:
                lower = r
            elif r["min_value"] > value:
                higher = r
                break

        if lower and higher:
            return _interpolate(lower["max_value"], lower["points"], higher["min_value"], higher["points"], value)
        if lower:
            return lower["points"]
        if higher:
            return higher["points"]

    return 0

SCORERS = {
    MultipleChoiceQuestion: score_multiple_choice,
    MultipleResponseQuestion: score_multiple_response,
    ScaleQuestion: score_scale,
    NumberQuestion: score_number,
}

def calculate_answer_score(question: Question, answer, assessment: Assessment) -> float:
    """Raw score of `answer` multiplied by the assessment's scaling factor."""
    scorer = SCORERS.get(type(question))
    if scorer is None:
        return 0
    return scorer(question, answer) * scaling_factor(assessment)

def max_question_points(question: Question) -> float:
    """Best raw score `question` can award; feeds questions_total_marks."""
    if not question.is_scored:
        return 0
    if isinstance(question, MultipleChoiceQuestion):
        return max((o["points"] for o in question.options or []), default=0)
    if isinstance(question, MultipleResponseQuestion):
        return sum(o["points"] for o in question.options or [] if o["points"] > 0)
    if isinstance(question, ScaleQuestion):
        return max((label["points"] for label in question.labels or []), default=0)
    if isinstance(question, NumberQuestion):
        if question.scoring_method == "direct":
            return question.max_points or 0
        if question.scoring_method == "range":
            return max((r["points"] for r in question.scoring_ranges or []), default=0)
    return 0
