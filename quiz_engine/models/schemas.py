from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """JSON bodies use the persisted camelCase keys; Python code uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Authoring ---
class NormalizeQuestionRequest(_CamelModel):
    question_type: Optional[Any] = Field(
        None, description="Type name or alias; defaults to multiple_choice"
    )
    question_config: Optional[Any] = None
    correct_answer_data: Optional[Any] = None
    options: Optional[Any] = Field(None, description="Legacy flat options list")
    correct_answer: Optional[Any] = Field(None, description="Legacy flat answer index")

    def to_raw(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class NormalizedQuestionResponse(_CamelModel):
    question_type: str
    question_config: Dict[str, Any]
    correct_answer_data: Optional[Dict[str, Any]] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[Union[int, float]] = None


class SchemaPropertyOut(BaseModel):
    type: str
    required: Optional[bool] = None
    description: Optional[str] = None
    default: Optional[Any] = None
    enum: Optional[List[Any]] = None


class QuestionTypeOut(_CamelModel):
    id: str
    slug: str
    name: str
    description: Optional[str] = None
    config_schema: Dict[str, SchemaPropertyOut]
    answer_schema: Dict[str, SchemaPropertyOut]
    is_system: bool
    is_active: bool


class QuestionTypeListResponse(BaseModel):
    types: List[QuestionTypeOut] = Field(default_factory=list)


# --- Grading ---
class ValidateAnswerRequest(_CamelModel):
    question_type: str
    user_answer: Optional[Any] = Field(
        None, description="Submission in canonical, tagged (`kind`) or legacy primitive shape"
    )
    correct_answer_data: Optional[Dict[str, Any]] = None
    question_config: Dict[str, Any] = Field(default_factory=dict)
    partial_credit_enabled: Optional[bool] = Field(
        None, description="Quiz-level partial credit switch; server default when omitted"
    )


class ValidateLegacyAnswerRequest(_CamelModel):
    user_answer: Optional[Any] = None
    correct_answer: Any


class ValidationResultResponse(_CamelModel):
    is_correct: bool
    credit_percent: float = Field(..., ge=0, le=100)
    feedback: Optional[str] = None


class GradeQuestionRequest(_CamelModel):
    question: Dict[str, Any] = Field(..., description="Stored question row (camelCase keys)")
    user_answer: Optional[Any] = None
    partial_credit_enabled: Optional[bool] = None


class QuestionResultResponse(_CamelModel):
    question_id: str
    question_type: str
    is_correct: bool
    points_earned: float
    points_possible: float
    credit_percent: float = Field(..., ge=0, le=100)
    feedback: Optional[str] = None
