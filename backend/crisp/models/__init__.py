from crisp.models.user import User
from crisp.models.assessment import Assessment
from crisp.models.question import (
    Question,
    MultipleChoiceQuestion,
    MultipleResponseQuestion,
    ScaleQuestion,
    NumberQuestion,
    ShortResponseQuestion,
    LongResponseQuestion,
    DateQuestion,
    NUSNETIDQuestion,
    NUSNETEmailQuestion,
    TeamMemberSelectionQuestion,
)
from crisp.models.submission import (
    Submission,
    Answer,
    MultipleChoiceAnswer,
    MultipleResponseAnswer,
    ScaleAnswer,
    NumberAnswer,
    ShortResponseAnswer,
    LongResponseAnswer,
    DateAnswer,
    NUSNETIDAnswer,
    NUSNETEmailAnswer,
    TeamMemberSelectionAnswer,
)
from crisp.models.result import AssessmentResult, MarkEntry
