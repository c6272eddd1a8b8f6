from __future__ import annotations

import logging

from fastapi import APIRouter

from quiz_engine.core.answer_validator import validate_answer, validate_legacy_answer
from quiz_engine.core.grading import grade_question
from quiz_engine.models.schemas import (
    GradeQuestionRequest,
    QuestionResultResponse,
    ValidateAnswerRequest,
    ValidateLegacyAnswerRequest,
    ValidationResultResponse,
)
from quiz_engine.utils.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["answers"])


def _partial_credit(flag):
    if flag is None:
        return bool(get_settings().partial_credit_enabled)
    return bool(flag)


@router.post("/answers/validate", response_model=ValidationResultResponse)
async def validate(payload: ValidateAnswerRequest):
    result = validate_answer(
        payload.question_type,
        payload.user_answer,
        payload.correct_answer_data,
        payload.question_config,
        _partial_credit(payload.partial_credit_enabled),
    )
    return ValidationResultResponse.model_validate(result.to_dict())


@router.post("/answers/validate-legacy", response_model=ValidationResultResponse)
async def validate_legacy(payload: ValidateLegacyAnswerRequest):
    result = validate_legacy_answer(payload.user_answer, payload.correct_answer)
    return ValidationResultResponse.model_validate(result.to_dict())


@router.post("/questions/grade", response_model=QuestionResultResponse)
async def grade(payload: GradeQuestionRequest):
    result = grade_question(
        payload.question,
        payload.user_answer,
        _partial_credit(payload.partial_credit_enabled),
    )
    return QuestionResultResponse.model_validate(result.to_dict())
