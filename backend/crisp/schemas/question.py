from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

class Option(BaseModel):
    text: str
    points: float = 0

class ScaleLabel(BaseModel):
    value: float
    label: str = ""
    points: float = 0

class ScoringRange(BaseModel):
    min_value: float
    max_value: float
    points: float

class _QuestionBase(BaseModel):
    text: str
    is_required: bool = True
    is_scored: bool = False

class MultipleChoiceQuestionCreate(_QuestionBase):
    type: Literal["Multiple Choice"]
    options: list[Option] = Field(min_length=1)

class MultipleResponseQuestionCreate(_QuestionBase):
    type: Literal["Multiple Response"]
    options: list[Option] = Field(min_length=1)
    allow_partial_marks: bool = False
    are_wrong_answers_penalized: bool = False
    allow_negative: bool = False

class ScaleQuestionCreate(_QuestionBase):
    type: Literal["Scale"]
    scale_max: int = Field(ge=1)
    labels: list[ScaleLabel] = Field(min_length=1)

class NumberQuestionCreate(_QuestionBase):
    type: Literal["Number"]
    max_number: float = Field(ge=0)
    scoring_method: Literal["direct", "range", "None"] = "None"
    max_points: float | None = None
    scoring_ranges: list[ScoringRange] | None = None

class ShortResponseQuestionCreate(_QuestionBase):
    type: Literal["Short Response"]

class LongResponseQuestionCreate(_QuestionBase):
    type: Literal["Long Response"]

class DateQuestionCreate(_QuestionBase):
    type: Literal["Date"]
    is_range: bool = False

class NUSNETIDQuestionCreate(_QuestionBase):
    type: Literal["NUSNET ID"]

class NUSNETEmailQuestionCreate(_QuestionBase):
    type: Literal["NUSNET Email"]

class TeamMemberSelectionQuestionCreate(_QuestionBase):
    type: Literal["Team Member Selection"]

QuestionCreate = Annotated[
    Union[
        MultipleChoiceQuestionCreate,
        MultipleResponseQuestionCreate,
        ScaleQuestionCreate,
        NumberQuestionCreate,
        ShortResponseQuestionCreate,
        LongResponseQuestionCreate,
        DateQuestionCreate,
        NUSNETIDQuestionCreate,
        NUSNETEmailQuestionCreate,
        TeamMemberSelectionQuestionCreate,
    ],
    Field(discriminator="type"),
]

class QuestionOut(BaseModel):
    """Flat view of any question variant; fields a variant lacks stay None."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    text: str
    position: int
    is_required: bool
    is_scored: bool

    options: list[Option] | None = None
    allow_partial_marks: bool | None = None
    are_wrong_answers_penalized: bool | None = None
    allow_negative: bool | None = None
    scale_max: int | None = None
    labels: list[ScaleLabel] | None = None
    max_number: float | None = None
    scoring_method: str | None = None
    max_points: float | None = None
    scoring_ranges: list[ScoringRange] | None = None
    is_range: bool | None = None
