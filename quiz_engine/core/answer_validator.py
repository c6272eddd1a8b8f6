"""
Answer grading.

`validate_answer` grades one learner submission against a canonical answer
key (as produced by `question_normalizer`). Every outcome, including bad
input, is a `ValidationResult`; nothing here raises for data problems.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional

from quiz_engine.core.coerce import Number, clamp, format_number, is_number
from quiz_engine.core.question_types import QuestionTypeSlug
from quiz_engine.core.user_answers import (
    FillBlankUserAnswer,
    MatchingUserAnswer,
    MultipleChoiceUserAnswer,
    MultiSelectUserAnswer,
    NumericRangeUserAnswer,
    TextInputUserAnswer,
    TrueFalseUserAnswer,
    YearRangeUserAnswer,
    coerce_user_answer,
)
from quiz_engine.utils.observability import log_event

logger = logging.getLogger(__name__)

KEYWORD_CREDIT_CAP = 75
FLOAT_EXACT_EPSILON = 0.0001
DEFAULT_TOLERANCE_DECAY = 50

NO_ANSWER = "No answer provided"
NO_ANSWER_KEY = "No correct answer configured"
INVALID_FORMAT = "Invalid answer format"
UNKNOWN_TYPE = "Unknown question type"


@dataclass(frozen=True)
class ValidationResult:
    is_correct: bool
    credit_percent: Number
    feedback: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "isCorrect": self.is_correct,
            "creditPercent": self.credit_percent,
        }
        if self.feedback is not None:
            out["feedback"] = self.feedback
        return out


def _correct() -> ValidationResult:
    return ValidationResult(is_correct=True, credit_percent=100)


def _wrong(feedback: Optional[str] = None) -> ValidationResult:
    return ValidationResult(is_correct=False, credit_percent=0, feedback=feedback)


def _partial(credit: Number, feedback: Optional[str]) -> ValidationResult:
    return ValidationResult(
        is_correct=False, credit_percent=clamp(credit, 0, 100), feedback=feedback
    )


def _plural_years(difference: Number) -> str:
    return f"Off by {format_number(difference)} year{'s' if difference > 1 else ''}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _sorted_tiers(value: Any) -> List[Dict[str, Any]]:
    """Well-formed tolerance tiers, tightest first. The input is not mutated."""
    tiers = [
        t
        for t in _as_list(value)
        if isinstance(t, dict) and is_number(t.get("tolerance")) and is_number(t.get("creditPercent"))
    ]
    return sorted(tiers, key=lambda t: t["tolerance"])


# --- per-type validators ---------------------------------------------------


def _validate_multiple_choice(
    answer: Any, key: Dict[str, Any], config: Dict[str, Any]
) -> ValidationResult:
    if not isinstance(answer, MultipleChoiceUserAnswer):
        return _wrong(INVALID_FORMAT)
    selected = answer.selected_index
    expected = key.get("correctIndex")
    if is_number(selected) and is_number(expected) and selected == expected:
        return _correct()
    return _wrong()


def _validate_true_false(
    answer: Any, key: Dict[str, Any], config: Dict[str, Any]
) -> ValidationResult:
    if not isinstance(answer, TrueFalseUserAnswer):
        return _wrong(INVALID_FORMAT)
    if isinstance(key.get("correctValue"), bool):
        expected = key["correctValue"]
    elif isinstance(key.get("isTrue"), bool):
        expected = key["isTrue"]
    else:
        expected = False
    return _correct() if answer.selected_value == expected else _wrong()


def _validate_text_input(
    answer: Any, key: Dict[str, Any], config: Dict[str, Any]
) -> ValidationResult:
    if not isinstance(answer, TextInputUserAnswer):
        return _wrong(INVALID_FORMAT)

    trim = config.get("trimWhitespace") is not False
    case_sensitive = bool(config.get("caseSensitive"))

    def normalize(s: str) -> str:
        if trim:
            s = s.strip()
        return s if case_sensitive else s.lower()

    user_text = normalize(answer.text)
    accepted = [a for a in _as_list(key.get("acceptedAnswers")) if isinstance(a, str)]
    if any(normalize(a) == user_text for a in accepted):
        return _correct()

    keywords = [k for k in _as_list(key.get("keywords")) if isinstance(k, str)]
    if keywords:
        matched = sum(1 for k in keywords if normalize(k) in user_text)
        threshold = key.get("keywordMatchThreshold")
        if not is_number(threshold) or threshold <= 0:
            threshold = math.ceil(len(keywords) / 2)
        if matched > 0 and matched >= threshold:
            credit = min(matched / len(keywords) * 100, KEYWORD_CREDIT_CAP)
            return _partial(
                credit,
                f"Partial credit: matched {matched} of {len(keywords)} key concepts",
            )

    return _wrong()


def _grade_by_tolerance(
    difference: Number,
    tiers: List[Dict[str, Any]],
    tier_tolerance: Callable[[Dict[str, Any]], Number],
    default_tolerance: Number,
    feedback: str,
) -> Optional[ValidationResult]:
    for tier in tiers:
        if difference <= tier_tolerance(tier):
            return _partial(tier["creditPercent"], feedback)
    if default_tolerance > 0 and difference <= default_tolerance:
        credit = max(0, 100 - (difference / default_tolerance) * DEFAULT_TOLERANCE_DECAY)
        return _partial(credit, feedback)
    return None


def _validate_year_range(
    answer: Any, key: Dict[str, Any], config: Dict[str, Any]
) -> ValidationResult:
    if not isinstance(answer, YearRangeUserAnswer):
        return _wrong(INVALID_FORMAT)
    year = answer.year

    min_year, max_year = config.get("minYear"), config.get("maxYear")
    if is_number(min_year) and year < min_year:
        return _wrong(f"Year must be at least {format_number(min_year)}")
    if is_number(max_year) and year > max_year:
        return _wrong(f"Year must be at most {format_number(max_year)}")

    expected = next(
        (key[k] for k in ("correctYear", "exactYear", "year") if is_number(key.get(k))),
        None,
    )
    if expected is None:
        return _wrong("No correct year configured")

    difference = abs(year - expected)
    if difference == 0:
        return _correct()

    tolerance = config.get("tolerance")
    graded = _grade_by_tolerance(
        difference,
        _sorted_tiers(key.get("partialCreditRanges")),
        lambda tier: tier["tolerance"],
        tolerance if is_number(tolerance) else 0,
        _plural_years(difference),
    )
    if graded is not None:
        return graded
    return _wrong(f"The correct year was {format_number(expected)}")


def _tolerance_value(tolerance: Number, tolerance_type: Any, expected: Number) -> Number:
    if tolerance_type == "percentage":
        return (tolerance / 100) * abs(expected)
    return tolerance


def _validate_numeric_range(
    answer: Any, key: Dict[str, Any], config: Dict[str, Any]
) -> ValidationResult:
    if not isinstance(answer, NumericRangeUserAnswer):
        return _wrong(INVALID_FORMAT)
    value = answer.value

    low, high = config.get("min"), config.get("max")
    if is_number(low) and value < low:
        return _wrong(f"Value must be at least {format_number(low)}")
    if is_number(high) and value > high:
        return _wrong(f"Value must be at most {format_number(high)}")

    expected = next(
        (key[k] for k in ("correctValue", "exactValue", "value") if is_number(key.get(k))),
        None,
    )
    if expected is None:
        return _wrong("No correct value configured")

    # Float arithmetic: a gap wider than float range becomes inf instead of raising.
    difference = abs(float(value) - float(expected))
    if difference < FLOAT_EXACT_EPSILON:
        return _correct()

    tolerance = config.get("tolerance")
    default_tolerance = (
        _tolerance_value(tolerance, config.get("toleranceType"), expected)
        if is_number(tolerance) and tolerance > 0
        else 0
    )
    graded = _grade_by_tolerance(
        difference,
        _sorted_tiers(key.get("partialCreditRanges")),
        lambda tier: _tolerance_value(tier["tolerance"], tier.get("toleranceType"), expected),
        default_tolerance,
        f"Close! Off by {difference:.2f}",
    )
    if graded is not None:
        return graded

    unit = config.get("unit")
    suffix = f" {unit}" if isinstance(unit, str) and unit else ""
    return _wrong(f"The correct answer was {format_number(expected)}{suffix}")


def _validate_matching(
    answer: Any, key: Dict[str, Any], config: Dict[str, Any]
) -> ValidationResult:
    if not isinstance(answer, MatchingUserAnswer):
        return _wrong(INVALID_FORMAT)

    correct_pairs = _as_dict(key.get("correctPairs"))
    left_column = _as_list(config.get("leftColumn"))
    total = len(left_column) if left_column else len(correct_pairs)
    if total == 0:
        return _wrong("No matching pairs configured")

    correct_count = sum(
        1
        for left, right in answer.pairs.items()
        if left in correct_pairs and correct_pairs[left] == right
    )
    if correct_count >= total:
        return _correct()

    feedback = f"{correct_count} of {total} pairs correct"
    if key.get("partialCreditPerPair") is not False and correct_count > 0:
        return _partial(correct_count / total * 100, feedback)
    return _wrong(feedback)


def _accepted_blank_answers(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        items = [str(v if v is not None else "").strip() for v in value]
    elif isinstance(value, str) or is_number(value):
        items = [format_number(value).strip() if is_number(value) else value.strip()]
    else:
        items = []
    return [s for s in items if s]


def _validate_fill_blank(
    answer: Any, key: Dict[str, Any], config: Dict[str, Any]
) -> ValidationResult:
    if not isinstance(answer, FillBlankUserAnswer):
        return _wrong(INVALID_FORMAT)

    correct_blanks = _as_dict(key.get("blanks"))
    total = len(correct_blanks)
    if total == 0:
        return _wrong("No blanks configured")

    case_sensitive = bool(config.get("caseSensitive"))

    def normalize(s: str) -> str:
        s = s.strip()
        return s if case_sensitive else s.lower()

    correct_count = 0
    for blank_id, accepted in correct_blanks.items():
        user_value = answer.blanks.get(blank_id)
        if not isinstance(user_value, str) or not user_value:
            continue
        expected = {normalize(a) for a in _accepted_blank_answers(accepted)}
        if normalize(user_value) in expected:
            correct_count += 1

    if correct_count == total:
        return _correct()
    if correct_count > 0:
        return _partial(
            correct_count / total * 100, f"{correct_count} of {total} blanks correct"
        )
    return _wrong()


def _validate_multi_select(
    answer: Any, key: Dict[str, Any], config: Dict[str, Any]
) -> ValidationResult:
    if not isinstance(answer, MultiSelectUserAnswer):
        return _wrong(INVALID_FORMAT)

    selected = set(answer.selected_indices)
    correct = {i for i in _as_list(key.get("correctIndices")) if is_number(i)}

    correct_selections = len(selected & correct)
    incorrect_selections = len(selected - correct)
    missed = len(correct - selected)

    if selected == correct:
        return _correct()

    feedback = f"{correct_selections} correct, {incorrect_selections} incorrect, {missed} missed"
    if key.get("partialCredit") is not False and correct:
        penalties = incorrect_selections + missed
        credit = max(0, (correct_selections - penalties * 0.5) / len(correct) * 100)
        return _partial(credit, feedback)
    return _wrong(feedback)


_VALIDATORS: Dict[
    QuestionTypeSlug, Callable[[Any, Dict[str, Any], Dict[str, Any]], ValidationResult]
] = {
    QuestionTypeSlug.MULTIPLE_CHOICE: _validate_multiple_choice,
    QuestionTypeSlug.TRUE_FALSE: _validate_true_false,
    QuestionTypeSlug.TEXT_INPUT: _validate_text_input,
    QuestionTypeSlug.YEAR_RANGE: _validate_year_range,
    QuestionTypeSlug.NUMERIC_RANGE: _validate_numeric_range,
    QuestionTypeSlug.MATCHING: _validate_matching,
    QuestionTypeSlug.FILL_BLANK: _validate_fill_blank,
    QuestionTypeSlug.MULTI_SELECT: _validate_multi_select,
}


# --- entry points ----------------------------------------------------------


def validate_answer(
    question_type: Any,
    user_answer: Any,
    correct_answer_data: Optional[Dict[str, Any]],
    config: Optional[Dict[str, Any]] = None,
    partial_credit_enabled: bool = True,
) -> ValidationResult:
    """
    Grade `user_answer` for a question of `question_type`.

    `correct_answer_data` and `config` must already be canonical for that
    type. With `partial_credit_enabled=False`, any credit strictly between 0
    and 100 is dropped to 0; `is_correct` is left as computed.
    """
    if user_answer is None:
        return _wrong(NO_ANSWER)
    if correct_answer_data is None:
        return _wrong(NO_ANSWER_KEY)

    slug = QuestionTypeSlug.parse(question_type)
    if slug is None:
        log_event(logger, "quiz_grade_unknown_type", level="warning", question_type=question_type)
        return _wrong(UNKNOWN_TYPE)

    typed = coerce_user_answer(slug, user_answer)
    if typed is None:
        log_event(
            logger,
            "quiz_grade_invalid_answer_format",
            level="debug",
            question_type=slug.value,
            answer_kind=type(user_answer).__name__,
        )
    result = _VALIDATORS[slug](typed, _as_dict(correct_answer_data), _as_dict(config))

    if not partial_credit_enabled and 0 < result.credit_percent < 100:
        result = replace(result, credit_percent=0)
    return result


def validate_legacy_answer(user_answer: Any, correct_answer: Any) -> ValidationResult:
    """Binary check for pre-migration rows that only stored a flat answer index."""
    if user_answer is None:
        return _wrong(NO_ANSWER)
    is_correct = (
        is_number(user_answer) and is_number(correct_answer) and user_answer == correct_answer
    )
    return _correct() if is_correct else _wrong()
