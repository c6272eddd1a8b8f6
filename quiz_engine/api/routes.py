"""API router aggregation; `quiz_engine/main.py` mounts `router` under `/api/v1`."""

from __future__ import annotations

from fastapi import APIRouter

from quiz_engine.api import answers as answers_api
from quiz_engine.api import questions as questions_api

router = APIRouter()
router.include_router(questions_api.router)
router.include_router(answers_api.router)
