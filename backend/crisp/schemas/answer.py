from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

class _AnswerBase(BaseModel):
    question_id: int

class MultipleChoiceAnswerIn(_AnswerBase):
    type: Literal["Multiple Choice Answer"]
    value: str

class MultipleResponseAnswerIn(_AnswerBase):
    type: Literal["Multiple Response Answer"]
    values: list[str]

class ScaleAnswerIn(_AnswerBase):
    type: Literal["Scale Answer"]
    value: StrictInt | StrictFloat

class NumberAnswerIn(_AnswerBase):
    type: Literal["Number Answer"]
    value: StrictInt | StrictFloat

class ShortResponseAnswerIn(_AnswerBase):
    type: Literal["Short Response Answer"]
    value: str

class LongResponseAnswerIn(_AnswerBase):
    type: Literal["Long Response Answer"]
    value: str

class DateAnswerIn(_AnswerBase):
    # dates arrive as strings and are parsed during validation
    type: Literal["Date Answer"]
    value: str | None = None
    start_date: str | None = None
    end_date: str | None = None

class NUSNETIDAnswerIn(_AnswerBase):
    type: Literal["NUSNET ID Answer"]
    value: str

class NUSNETEmailAnswerIn(_AnswerBase):
    type: Literal["NUSNET Email Answer"]
    value: str

class TeamMemberSelectionAnswerIn(_AnswerBase):
    type: Literal["Team Member Selection Answer"]
    selected_user_ids: list[int]

AnswerIn = Annotated[
    Union[
        MultipleChoiceAnswerIn,
        MultipleResponseAnswerIn,
        ScaleAnswerIn,
        NumberAnswerIn,
        ShortResponseAnswerIn,
        LongResponseAnswerIn,
        DateAnswerIn,
        NUSNETIDAnswerIn,
        NUSNETEmailAnswerIn,
        TeamMemberSelectionAnswerIn,
    ],
    Field(discriminator="type"),
]

class AnswerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: int
    type: str
    score: float
    value: str | float | None = None
    values: list[str] | None = None
    selected_user_ids: list[int] | None = None
    start_date: str | None = None
    end_date: str | None = None
