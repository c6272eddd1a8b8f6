from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    # 4xx - Client errors
    INVALID_REQUEST = "E4000"
    QUESTION_TYPE_NOT_FOUND = "E4004"
    VALIDATION_ERROR = "E4220"

    # 5xx - Service errors
    SERVICE_ERROR = "E5000"


class QuizEngineError(Exception):
    """Base error for the quiz engine."""


class UnknownQuestionTypeError(QuizEngineError, LookupError):
    """Raised when a registry lookup names a slug that is not a built-in type."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Unknown question type: {slug}")
        self.slug = slug


def error_code_for_http_status(status_code: int) -> ErrorCode:
    if status_code == 404:
        return ErrorCode.QUESTION_TYPE_NOT_FOUND
    if status_code == 422:
        return ErrorCode.VALIDATION_ERROR
    if 400 <= int(status_code) < 500:
        return ErrorCode.INVALID_REQUEST
    return ErrorCode.SERVICE_ERROR


def build_error_payload(
    *,
    code: ErrorCode,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Canonical JSON error body.

    `error` is the primary message field; `message` is kept as an alias.
    """
    payload: Dict[str, Any] = {
        "code": code.value,
        "error": str(message),
        "message": str(message),
    }
    if details is not None:
        payload["details"] = details
    if request_id:
        payload["request_id"] = str(request_id)
    return payload
