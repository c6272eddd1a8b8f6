"""
Learner submissions, decoded per question type.

The submission handler knows which question it is grading, so the question
type is the discriminant: each type has exactly one canonical field plus at
most one legacy bare-primitive shape. A mapping may also carry an explicit
`kind` tag; when present it must name the same type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Optional, Union

from quiz_engine.core.coerce import Number, is_number
from quiz_engine.core.question_types import QuestionTypeSlug


@dataclass(frozen=True)
class MultipleChoiceUserAnswer:
    kind: ClassVar[QuestionTypeSlug] = QuestionTypeSlug.MULTIPLE_CHOICE
    selected_index: Any


@dataclass(frozen=True)
class TrueFalseUserAnswer:
    kind: ClassVar[QuestionTypeSlug] = QuestionTypeSlug.TRUE_FALSE
    selected_value: bool


@dataclass(frozen=True)
class TextInputUserAnswer:
    kind: ClassVar[QuestionTypeSlug] = QuestionTypeSlug.TEXT_INPUT
    text: str


@dataclass(frozen=True)
class YearRangeUserAnswer:
    kind: ClassVar[QuestionTypeSlug] = QuestionTypeSlug.YEAR_RANGE
    year: Number


@dataclass(frozen=True)
class NumericRangeUserAnswer:
    kind: ClassVar[QuestionTypeSlug] = QuestionTypeSlug.NUMERIC_RANGE
    value: Number


@dataclass(frozen=True)
class MatchingUserAnswer:
    kind: ClassVar[QuestionTypeSlug] = QuestionTypeSlug.MATCHING
    pairs: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FillBlankUserAnswer:
    kind: ClassVar[QuestionTypeSlug] = QuestionTypeSlug.FILL_BLANK
    blanks: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MultiSelectUserAnswer:
    kind: ClassVar[QuestionTypeSlug] = QuestionTypeSlug.MULTI_SELECT
    selected_indices: List[Number] = field(default_factory=list)


UserAnswer = Union[
    MultipleChoiceUserAnswer,
    TrueFalseUserAnswer,
    TextInputUserAnswer,
    YearRangeUserAnswer,
    NumericRangeUserAnswer,
    MatchingUserAnswer,
    FillBlankUserAnswer,
    MultiSelectUserAnswer,
]


def _tagged(raw: Any, slug: QuestionTypeSlug) -> Optional[Dict[str, Any]]:
    """The mapping itself if it is a mapping whose `kind` (if any) matches."""
    if not isinstance(raw, dict):
        return None
    kind = raw.get("kind")
    if kind is not None and str(kind) != slug.value:
        return None
    return raw


def _multiple_choice(raw: Any) -> Optional[UserAnswer]:
    if is_number(raw):
        return MultipleChoiceUserAnswer(selected_index=raw)
    d = _tagged(raw, QuestionTypeSlug.MULTIPLE_CHOICE)
    if d is None or "selectedIndex" not in d:
        return None
    return MultipleChoiceUserAnswer(selected_index=d["selectedIndex"])


def _true_false(raw: Any) -> Optional[UserAnswer]:
    if isinstance(raw, bool):
        return TrueFalseUserAnswer(selected_value=raw)
    d = _tagged(raw, QuestionTypeSlug.TRUE_FALSE)
    if d is None or not isinstance(d.get("selectedValue"), bool):
        return None
    return TrueFalseUserAnswer(selected_value=d["selectedValue"])


def _text_input(raw: Any) -> Optional[UserAnswer]:
    if isinstance(raw, str):
        return TextInputUserAnswer(text=raw)
    d = _tagged(raw, QuestionTypeSlug.TEXT_INPUT)
    if d is None or not isinstance(d.get("text"), str):
        return None
    return TextInputUserAnswer(text=d["text"])


def _year_range(raw: Any) -> Optional[UserAnswer]:
    if is_number(raw):
        return YearRangeUserAnswer(year=raw)
    d = _tagged(raw, QuestionTypeSlug.YEAR_RANGE)
    if d is None or not is_number(d.get("year")):
        return None
    return YearRangeUserAnswer(year=d["year"])


def _numeric_range(raw: Any) -> Optional[UserAnswer]:
    if is_number(raw):
        return NumericRangeUserAnswer(value=raw)
    d = _tagged(raw, QuestionTypeSlug.NUMERIC_RANGE)
    if d is None or not is_number(d.get("value")):
        return None
    return NumericRangeUserAnswer(value=d["value"])


def _matching(raw: Any) -> Optional[UserAnswer]:
    d = _tagged(raw, QuestionTypeSlug.MATCHING)
    if d is None or "pairs" not in d:
        return None
    pairs = d["pairs"] if isinstance(d["pairs"], dict) else {}
    return MatchingUserAnswer(pairs=dict(pairs))


def _fill_blank(raw: Any) -> Optional[UserAnswer]:
    d = _tagged(raw, QuestionTypeSlug.FILL_BLANK)
    # An `acceptedAnswers` key means this is an answer key, not a submission.
    if d is None or "blanks" not in d or "acceptedAnswers" in d:
        return None
    blanks = d["blanks"] if isinstance(d["blanks"], dict) else {}
    return FillBlankUserAnswer(blanks=dict(blanks))


def _multi_select(raw: Any) -> Optional[UserAnswer]:
    d = _tagged(raw, QuestionTypeSlug.MULTI_SELECT)
    if d is None or not isinstance(d.get("selectedIndices"), (list, tuple)):
        return None
    return MultiSelectUserAnswer(
        selected_indices=[i for i in d["selectedIndices"] if is_number(i)]
    )


_DECODERS: Dict[QuestionTypeSlug, Callable[[Any], Optional[UserAnswer]]] = {
    QuestionTypeSlug.MULTIPLE_CHOICE: _multiple_choice,
    QuestionTypeSlug.TRUE_FALSE: _true_false,
    QuestionTypeSlug.TEXT_INPUT: _text_input,
    QuestionTypeSlug.YEAR_RANGE: _year_range,
    QuestionTypeSlug.NUMERIC_RANGE: _numeric_range,
    QuestionTypeSlug.MATCHING: _matching,
    QuestionTypeSlug.FILL_BLANK: _fill_blank,
    QuestionTypeSlug.MULTI_SELECT: _multi_select,
}


def coerce_user_answer(question_type: Any, raw: Any) -> Optional[UserAnswer]:
    """
    Decode `raw` into the typed answer for `question_type`.

    Returns None when the shape does not fit the type (including custom
    types, which have no decoder).
    """
    slug = QuestionTypeSlug.parse(question_type)
    if slug is None:
        return None
    if getattr(raw, "kind", None) is slug and not isinstance(raw, dict):
        return raw
    return _DECODERS[slug](raw)
