from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from quiz_engine.core.question_normalizer import normalize_question_payload
from quiz_engine.core.question_types import get_question_type, list_question_types
from quiz_engine.models.schemas import (
    NormalizeQuestionRequest,
    NormalizedQuestionResponse,
    QuestionTypeListResponse,
    QuestionTypeOut,
)
from quiz_engine.utils.errors import UnknownQuestionTypeError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["questions"])


@router.post("/questions/normalize", response_model=NormalizedQuestionResponse)
async def normalize_question(payload: NormalizeQuestionRequest):
    normalized = normalize_question_payload(payload.to_raw())
    return NormalizedQuestionResponse.model_validate(normalized.to_dict())


@router.get("/question-types", response_model=QuestionTypeListResponse)
async def question_types():
    return QuestionTypeListResponse(
        types=[QuestionTypeOut.model_validate(d.to_dict()) for d in list_question_types()]
    )


@router.get("/question-types/{slug}", response_model=QuestionTypeOut)
async def question_type_detail(slug: str):
    try:
        definition = get_question_type(slug)
    except UnknownQuestionTypeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return QuestionTypeOut.model_validate(definition.to_dict())
