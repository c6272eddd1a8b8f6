from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from quiz_engine.core.answer_validator import (
    ValidationResult,
    validate_answer,
    validate_legacy_answer,
)
from quiz_engine.core.coerce import Number, is_number, to_number
from quiz_engine.core.question_types import QuestionTypeSlug


@dataclass(frozen=True)
class QuestionResult:
    question_id: str
    question_type: str
    is_correct: bool
    points_earned: float
    points_possible: Number
    credit_percent: Number
    feedback: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "questionId": self.question_id,
            "questionType": self.question_type,
            "isCorrect": self.is_correct,
            "pointsEarned": self.points_earned,
            "pointsPossible": self.points_possible,
            "creditPercent": self.credit_percent,
        }
        if self.feedback is not None:
            out["feedback"] = self.feedback
        return out


def _is_legacy_row(question: Dict[str, Any]) -> bool:
    return (
        question.get("correctAnswerData") is None
        and isinstance(question.get("options"), list)
        and question.get("correctAnswer") is not None
    )


def grade_question(
    question: Dict[str, Any],
    user_answer: Any,
    partial_credit_enabled: bool = True,
) -> QuestionResult:
    """
    Grade one stored question row.

    `question` uses the persisted keys: `id`, `questionType`, `questionConfig`,
    `correctAnswerData`, `points` and the legacy `options`/`correctAnswer`.
    Rows without an answer key but with legacy fields are graded as
    multiple choice.
    """
    points = to_number(question.get("points"))
    if points is None or points <= 0:
        points = 1

    result: ValidationResult
    if _is_legacy_row(question):
        question_type = QuestionTypeSlug.MULTIPLE_CHOICE.value
        legacy_key = question.get("correctAnswer")
        if is_number(user_answer):
            result = validate_legacy_answer(user_answer, legacy_key)
        else:
            options: List[str] = question.get("options") or []
            result = validate_answer(
                question_type,
                user_answer,
                {"correctIndex": legacy_key},
                {"options": options},
                partial_credit_enabled,
            )
    else:
        question_type = str(
            getattr(question.get("questionType"), "value", question.get("questionType"))
            or QuestionTypeSlug.MULTIPLE_CHOICE.value
        )
        result = validate_answer(
            question_type,
            user_answer,
            question.get("correctAnswerData"),
            question.get("questionConfig") or {},
            partial_credit_enabled,
        )

    return QuestionResult(
        question_id=str(question.get("id") or ""),
        question_type=question_type,
        is_correct=result.is_correct,
        points_earned=result.credit_percent / 100 * points,
        points_possible=points,
        credit_percent=result.credit_percent,
        feedback=result.feedback,
    )
