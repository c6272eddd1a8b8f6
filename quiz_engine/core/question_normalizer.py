"""
Question-schema normalization.

Authoring input arrives from forms, imports and pre-migration rows in a
handful of loose shapes. `normalize_question_payload` turns any of them into
the one canonical `(questionConfig, correctAnswerData)` pair for the resolved
question type. It is pure and idempotent: feeding its output back in yields
the same output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Union

from quiz_engine.core.coerce import (
    Number,
    as_record,
    clamp,
    first_present,
    round_half_up,
    to_bool,
    to_number,
    to_string_list,
    to_text,
    unique,
)
from quiz_engine.core.fill_blank_template import (
    build_template_from_ids,
    extract_fill_blank_ids,
    replace_generic_blank_placeholders,
)
from quiz_engine.core.question_types import QuestionTypeSlug
from quiz_engine.utils.observability import log_event

logger = logging.getLogger(__name__)

QuestionType = Union[QuestionTypeSlug, str]

_TYPE_ALIASES: Dict[str, QuestionTypeSlug] = {
    "multiple choice": QuestionTypeSlug.MULTIPLE_CHOICE,
    "multiple-choice": QuestionTypeSlug.MULTIPLE_CHOICE,
    "multi_choice": QuestionTypeSlug.MULTIPLE_CHOICE,
    "mcq": QuestionTypeSlug.MULTIPLE_CHOICE,
    "truefalse": QuestionTypeSlug.TRUE_FALSE,
    "boolean": QuestionTypeSlug.TRUE_FALSE,
    "text": QuestionTypeSlug.TEXT_INPUT,
    "free_text": QuestionTypeSlug.TEXT_INPUT,
    "short_answer": QuestionTypeSlug.TEXT_INPUT,
    "shortanswer": QuestionTypeSlug.TEXT_INPUT,
    "year": QuestionTypeSlug.YEAR_RANGE,
    "number": QuestionTypeSlug.NUMERIC_RANGE,
    "numeric": QuestionTypeSlug.NUMERIC_RANGE,
    "number_range": QuestionTypeSlug.NUMERIC_RANGE,
    "match": QuestionTypeSlug.MATCHING,
    "matching_pairs": QuestionTypeSlug.MATCHING,
    "fill_blanks": QuestionTypeSlug.FILL_BLANK,
    "fill_in_blank": QuestionTypeSlug.FILL_BLANK,
    "fill-in-the-blank": QuestionTypeSlug.FILL_BLANK,
    "multi-select": QuestionTypeSlug.MULTI_SELECT,
    "multi select": QuestionTypeSlug.MULTI_SELECT,
    "multiple_select": QuestionTypeSlug.MULTI_SELECT,
}

_MEDIA_TYPES = ("image", "video", "audio")
_TOLERANCE_TYPES = ("absolute", "percentage")


@dataclass(frozen=True)
class NormalizedQuestionPayload:
    question_type: QuestionType
    question_config: Dict[str, Any]
    correct_answer_data: Optional[Dict[str, Any]]
    # Deprecated flat mirrors, only populated for multiple_choice / custom rows.
    options: Optional[List[str]] = None
    correct_answer: Optional[Number] = None

    def to_dict(self) -> Dict[str, Any]:
        qt = self.question_type
        return {
            "questionType": qt.value if isinstance(qt, QuestionTypeSlug) else str(qt),
            "questionConfig": self.question_config,
            "correctAnswerData": self.correct_answer_data,
            "options": self.options,
            "correctAnswer": self.correct_answer,
        }


def normalize_question_type(question_type: Any) -> QuestionType:
    """
    Canonical slug for a raw type name.

    Known aliases map onto built-ins; anything else passes through (lower-cased)
    as a custom slug. Missing input means multiple_choice.
    """
    if isinstance(question_type, QuestionTypeSlug):
        return question_type
    raw = to_text(question_type).strip().lower()
    if not raw:
        return QuestionTypeSlug.MULTIPLE_CHOICE
    builtin = QuestionTypeSlug.parse(raw) or _TYPE_ALIASES.get(raw)
    return builtin if builtin is not None else raw


def _unique_strings(value: Any) -> List[str]:
    return unique(to_string_list(value))


def _base_config(config: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if isinstance(config.get("hint"), str):
        out["hint"] = config["hint"]
    if isinstance(config.get("mediaUrl"), str):
        out["mediaUrl"] = config["mediaUrl"]
    if config.get("mediaType") in _MEDIA_TYPES:
        out["mediaType"] = config["mediaType"]
    return out


def _payload(
    slug: QuestionTypeSlug,
    config: Dict[str, Any],
    question_config: Dict[str, Any],
    correct_answer_data: Dict[str, Any],
    *,
    options: Optional[List[str]] = None,
    correct_answer: Optional[Number] = None,
) -> NormalizedQuestionPayload:
    merged = _base_config(config)
    merged.update(question_config)
    return NormalizedQuestionPayload(
        question_type=slug,
        question_config=merged,
        correct_answer_data=correct_answer_data,
        options=options,
        correct_answer=correct_answer,
    )


def _partial_credit_ranges(value: Any, *, with_tolerance_type: bool) -> List[Dict[str, Any]]:
    if not isinstance(value, (list, tuple)):
        return []
    tiers: List[Dict[str, Any]] = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        tolerance = to_number(entry.get("tolerance"))
        credit = to_number(entry.get("creditPercent"))
        if tolerance is None or credit is None:
            continue
        tier: Dict[str, Any] = {"tolerance": max(0, tolerance)}
        if with_tolerance_type:
            tt = entry.get("toleranceType")
            tier["toleranceType"] = tt if tt in _TOLERANCE_TYPES else "absolute"
        tier["creditPercent"] = clamp(credit, 0, 100)
        tiers.append(tier)
    # Stable sort keeps authoring order between equal tolerances.
    return sorted(tiers, key=lambda t: t["tolerance"])


# --- multiple_choice -------------------------------------------------------


def _normalize_multiple_choice(
    config: Dict[str, Any], answer_data: Dict[str, Any], raw: Dict[str, Any]
) -> NormalizedQuestionPayload:
    options = _unique_strings(
        first_present(config.get("options"), config.get("choices"), raw.get("options"))
    )

    correct_index = to_number(
        first_present(
            answer_data.get("correctIndex"),
            answer_data.get("correctAnswer"),
            answer_data.get("answerIndex"),
            raw.get("correctAnswer"),
        )
    )
    if correct_index is None and isinstance(answer_data.get("correctOption"), str):
        option = answer_data["correctOption"]
        correct_index = options.index(option) if option in options else -1
    if correct_index is None:
        correct_index = 0
    if options:
        correct_index = int(clamp(round_half_up(correct_index), 0, len(options) - 1))
    else:
        correct_index = 0

    return _payload(
        QuestionTypeSlug.MULTIPLE_CHOICE,
        config,
        {
            "options": options,
            "shuffleOptions": first_present(to_bool(config.get("shuffleOptions")), False),
        },
        {"correctIndex": correct_index},
        options=options,
        correct_answer=correct_index,
    )


# --- true_false ------------------------------------------------------------


def _normalize_true_false(
    config: Dict[str, Any], answer_data: Dict[str, Any], raw: Dict[str, Any]
) -> NormalizedQuestionPayload:
    legacy_index = to_number(raw.get("correctAnswer"))
    legacy_value = True if legacy_index == 1 else False if legacy_index == 0 else None

    correct_value = first_present(
        to_bool(
            first_present(
                answer_data.get("correctValue"),
                answer_data.get("isTrue"),
                answer_data.get("answer"),
            )
        ),
        legacy_value,
        True,
    )

    return _payload(
        QuestionTypeSlug.TRUE_FALSE,
        config,
        {
            "trueLabel": config["trueLabel"] if isinstance(config.get("trueLabel"), str) else "True",
            "falseLabel": config["falseLabel"] if isinstance(config.get("falseLabel"), str) else "False",
        },
        {"correctValue": correct_value},
    )


# --- text_input ------------------------------------------------------------


def _normalize_text_input(
    config: Dict[str, Any], answer_data: Dict[str, Any]
) -> NormalizedQuestionPayload:
    exact = answer_data.get("exactMatch")
    accepted = _unique_strings(
        first_present(
            answer_data.get("acceptedAnswers"),
            answer_data.get("answers"),
            answer_data.get("correctAnswers"),
            [exact] if isinstance(exact, str) else [],
        )
    )
    keywords = _unique_strings(
        first_present(answer_data.get("keywords"), config.get("acceptedKeywords"))
    )

    normalized_config: Dict[str, Any] = {
        "caseSensitive": first_present(to_bool(config.get("caseSensitive")), False),
        "trimWhitespace": first_present(to_bool(config.get("trimWhitespace")), True),
    }
    if isinstance(config.get("placeholder"), str):
        normalized_config["placeholder"] = config["placeholder"]
    max_length = to_number(config.get("maxLength"))
    if max_length is not None and max_length > 0:
        normalized_config["maxLength"] = round_half_up(max_length)

    normalized_answer: Dict[str, Any] = {"acceptedAnswers": accepted}
    if keywords:
        normalized_answer["keywords"] = keywords
        threshold = to_number(answer_data.get("keywordMatchThreshold"))
        if threshold is not None and threshold > 0:
            normalized_answer["keywordMatchThreshold"] = max(1, round_half_up(threshold))

    return _payload(QuestionTypeSlug.TEXT_INPUT, config, normalized_config, normalized_answer)


# --- year_range / numeric_range --------------------------------------------


def _current_utc_year() -> int:
    return datetime.now(timezone.utc).year


def _normalize_year_range(
    config: Dict[str, Any], answer_data: Dict[str, Any], raw: Dict[str, Any]
) -> NormalizedQuestionPayload:
    min_year = to_number(first_present(config.get("minYear"), config.get("min")))
    max_year = to_number(first_present(config.get("maxYear"), config.get("max")))
    tolerance = to_number(first_present(config.get("tolerance"), config.get("toleranceYears")))
    correct_year = to_number(
        first_present(
            answer_data.get("correctYear"),
            answer_data.get("exactYear"),
            answer_data.get("year"),
        )
    )

    normalized_config: Dict[str, Any] = {}
    if min_year is not None:
        normalized_config["minYear"] = round_half_up(min_year)
    if max_year is not None:
        normalized_config["maxYear"] = round_half_up(max_year)
    if tolerance is not None:
        normalized_config["tolerance"] = max(0, round_half_up(tolerance))
    if isinstance(config.get("placeholder"), str):
        normalized_config["placeholder"] = config["placeholder"]

    year = first_present(correct_year, to_number(raw.get("correctAnswer")))
    if year is None:
        year = _current_utc_year()
        log_event(logger, "quiz_normalize_year_default", level="debug", year=year)

    normalized_answer: Dict[str, Any] = {"correctYear": round_half_up(year)}
    ranges = _partial_credit_ranges(
        answer_data.get("partialCreditRanges"), with_tolerance_type=False
    )
    if ranges:
        normalized_answer["partialCreditRanges"] = ranges

    return _payload(QuestionTypeSlug.YEAR_RANGE, config, normalized_config, normalized_answer)


def _normalize_numeric_range(
    config: Dict[str, Any], answer_data: Dict[str, Any], raw: Dict[str, Any]
) -> NormalizedQuestionPayload:
    tolerance = to_number(config.get("tolerance"))
    tolerance_type = config.get("toleranceType")
    if tolerance_type not in _TOLERANCE_TYPES:
        tolerance_type = None

    tolerance_percent = to_number(
        first_present(config.get("tolerancePercent"), answer_data.get("tolerancePercent"))
    )
    if tolerance is None and tolerance_percent is not None:
        tolerance = tolerance_percent
        tolerance_type = "percentage"

    low = to_number(first_present(config.get("min"), config.get("minValue")))
    high = to_number(first_present(config.get("max"), config.get("maxValue")))
    step = to_number(config.get("step"))
    correct_value = to_number(
        first_present(
            answer_data.get("correctValue"),
            answer_data.get("exactValue"),
            answer_data.get("value"),
        )
    )

    normalized_config: Dict[str, Any] = {}
    if tolerance is not None:
        normalized_config["tolerance"] = max(0, tolerance)
        normalized_config["toleranceType"] = tolerance_type or "absolute"
    if low is not None:
        normalized_config["min"] = low
    if high is not None:
        normalized_config["max"] = high
    if step is not None and step > 0:
        normalized_config["step"] = step
    if isinstance(config.get("unit"), str):
        normalized_config["unit"] = config["unit"]
    if isinstance(config.get("placeholder"), str):
        normalized_config["placeholder"] = config["placeholder"]

    normalized_answer: Dict[str, Any] = {
        "correctValue": first_present(correct_value, to_number(raw.get("correctAnswer")), 0)
    }
    ranges = _partial_credit_ranges(
        answer_data.get("partialCreditRanges"), with_tolerance_type=True
    )
    if ranges:
        normalized_answer["partialCreditRanges"] = ranges

    return _payload(
        QuestionTypeSlug.NUMERIC_RANGE, config, normalized_config, normalized_answer
    )


# --- matching --------------------------------------------------------------


def detect_one_based_indexing(
    raw_pairs: Sequence[Any], position: int, list_length: int
) -> bool:
    """
    Guess whether tuple-style pairs use 1-based column indices on one side.

    Only `[left, right]` sequence entries are inspected. True when every
    numeric value at `position` lies in `[1, list_length]` and none is 0.
    No numeric values (or an empty column) means 0-based.
    """
    if list_length <= 0:
        return False
    values: List[int] = []
    for entry in raw_pairs or ():
        if not isinstance(entry, (list, tuple)) or len(entry) <= position:
            continue
        n = to_number(entry[position])
        if n is not None:
            values.append(round_half_up(n))
    if not values:
        return False
    if any(v == 0 for v in values):
        return False
    return all(1 <= v <= list_length for v in values)


def _resolve_list_index(value: Any, list_length: int, prefer_one_based: bool) -> Optional[int]:
    n = to_number(value)
    if n is None or list_length <= 0:
        return None
    rounded = round_half_up(n)
    if prefer_one_based and 1 <= rounded <= list_length:
        return rounded - 1
    if 0 <= rounded < list_length:
        return rounded
    if not prefer_one_based and 1 <= rounded <= list_length:
        return rounded - 1
    return None


def _resolve_list_value(value: Any, values: List[str], prefer_one_based: bool) -> Optional[str]:
    # A literal column entry wins over an index reading of the same text.
    if isinstance(value, str) and value.strip() in values:
        return value.strip()
    index = _resolve_list_index(value, len(values), prefer_one_based)
    if index is not None:
        return values[index]
    if to_number(value) is not None:
        # Index outside the column, whether sent as a number or as numeric text.
        return None
    text = to_text(value).strip()
    return text or None


def _normalize_matching(
    config: Dict[str, Any], answer_data: Dict[str, Any]
) -> NormalizedQuestionPayload:
    left_column = _unique_strings(
        first_present(config.get("leftColumn"), config.get("leftItems"), config.get("left"))
    )
    right_column = _unique_strings(
        first_present(config.get("rightColumn"), config.get("rightItems"), config.get("right"))
    )

    config_pairs = config.get("pairs") if isinstance(config.get("pairs"), list) else []
    for pair in config_pairs:
        rec = as_record(pair)
        left = to_text(first_present(rec.get("left"), rec.get("term"), "")).strip()
        right = to_text(
            first_present(rec.get("right"), rec.get("match"), rec.get("definition"), "")
        ).strip()
        if left and left not in left_column:
            left_column.append(left)
        if right and right not in right_column:
            right_column.append(right)

    raw_pairs = first_present(
        answer_data.get("correctPairs"), answer_data.get("pairs"), answer_data.get("matches")
    )
    raw_pairs_list = list(raw_pairs) if isinstance(raw_pairs, (list, tuple)) else []
    one_based_left = detect_one_based_indexing(raw_pairs_list, 0, len(left_column))
    one_based_right = detect_one_based_indexing(raw_pairs_list, 1, len(right_column))
    if one_based_left or one_based_right:
        log_event(
            logger,
            "quiz_normalize_matching_one_based",
            level="debug",
            left=one_based_left,
            right=one_based_right,
        )

    def resolve_left(v: Any) -> Optional[str]:
        return _resolve_list_value(v, left_column, one_based_left)

    def resolve_right(v: Any) -> Optional[str]:
        return _resolve_list_value(v, right_column, one_based_right)

    correct_pairs: Dict[str, str] = {}
    if isinstance(raw_pairs, (list, tuple)):
        for entry in raw_pairs:
            if isinstance(entry, (list, tuple)):
                if len(entry) < 2:
                    continue
                left, right = resolve_left(entry[0]), resolve_right(entry[1])
            else:
                rec = as_record(entry)
                left = resolve_left(
                    first_present(rec.get("left"), rec.get("leftItem"), rec.get("from"))
                )
                right = resolve_right(
                    first_present(rec.get("right"), rec.get("rightItem"), rec.get("to"))
                )
            if left and right:
                correct_pairs[left] = right
    elif isinstance(raw_pairs, dict):
        for raw_left, raw_right in raw_pairs.items():
            left, right = resolve_left(raw_left), resolve_right(raw_right)
            if left and right:
                correct_pairs[left] = right

    if not correct_pairs and len(left_column) == len(right_column):
        # Columns authored side by side: assume positional pairing.
        for left, right in zip(left_column, right_column):
            correct_pairs[left] = right

    for left, right in correct_pairs.items():
        if left not in left_column:
            left_column.append(left)
        if right not in right_column:
            right_column.append(right)

    normalized_config: Dict[str, Any] = {
        "leftColumn": left_column,
        "rightColumn": right_column,
        "shuffleRight": first_present(to_bool(config.get("shuffleRight")), True),
    }
    if isinstance(config.get("leftColumnLabel"), str):
        normalized_config["leftColumnLabel"] = config["leftColumnLabel"]
    if isinstance(config.get("rightColumnLabel"), str):
        normalized_config["rightColumnLabel"] = config["rightColumnLabel"]

    normalized_answer: Dict[str, Any] = {"correctPairs": correct_pairs}
    per_pair = to_bool(answer_data.get("partialCreditPerPair"))
    if per_pair is not None:
        normalized_answer["partialCreditPerPair"] = per_pair

    return _payload(QuestionTypeSlug.MATCHING, config, normalized_config, normalized_answer)


# --- fill_blank ------------------------------------------------------------


def _normalize_fill_blank(
    config: Dict[str, Any], answer_data: Dict[str, Any]
) -> NormalizedQuestionPayload:
    raw_template = to_text(config.get("template")).strip()
    raw_blanks = config.get("blanks") if isinstance(config.get("blanks"), list) else []

    accepted_by_id: Dict[str, List[str]] = {}
    config_blanks: List[Dict[str, Any]] = []
    for index, blank in enumerate(raw_blanks):
        rec = as_record(blank)
        blank_id = to_text(first_present(rec.get("id"), f"blank_{index}")).strip()
        accepted = _unique_strings(
            first_present(rec.get("acceptedAnswers"), rec.get("answers"), rec.get("answer"))
        )
        if blank_id:
            accepted_by_id[blank_id] = accepted
        config_blanks.append({"id": blank_id, "acceptedAnswers": accepted})

    # Answer-key blanks take precedence over the per-blank config lists.
    answer_blanks = as_record(
        first_present(answer_data.get("blanks"), answer_data.get("correctBlanks"))
    )
    for blank_id, answers in answer_blanks.items():
        accepted_by_id[str(blank_id)] = _unique_strings(answers)

    config_ids = [b["id"] for b in config_blanks if b["id"]]
    blank_ids = extract_fill_blank_ids(raw_template, config_ids)
    if not blank_ids:
        blank_ids = unique(config_ids)
    if not blank_ids:
        blank_ids = list(accepted_by_id.keys())
    if not blank_ids:
        blank_ids = ["blank_0"]

    if raw_template:
        template = replace_generic_blank_placeholders(raw_template, blank_ids)
    else:
        template = build_template_from_ids(blank_ids)

    blanks: List[Dict[str, Any]] = []
    for index, blank_id in enumerate(blank_ids):
        if blank_id in accepted_by_id:
            accepted = accepted_by_id[blank_id]
        elif index < len(config_blanks):
            accepted = config_blanks[index]["acceptedAnswers"]
        else:
            accepted = []
        blanks.append({"id": blank_id, "acceptedAnswers": list(accepted)})

    return _payload(
        QuestionTypeSlug.FILL_BLANK,
        config,
        {
            "template": template,
            "blanks": blanks,
            "caseSensitive": first_present(to_bool(config.get("caseSensitive")), False),
        },
        {"blanks": {b["id"]: list(b["acceptedAnswers"]) for b in blanks}},
    )


# --- multi_select ----------------------------------------------------------


def _normalize_multi_select(
    config: Dict[str, Any], answer_data: Dict[str, Any]
) -> NormalizedQuestionPayload:
    options = _unique_strings(first_present(config.get("options"), config.get("choices")))

    raw_indices: Any = answer_data.get("correctIndices")
    if not isinstance(raw_indices, (list, tuple)):
        raw_indices = answer_data.get("indices")
    if not isinstance(raw_indices, (list, tuple)):
        raw_indices = []

    resolved = []
    for value in raw_indices:
        n = to_number(value)
        if n is not None:
            resolved.append(round_half_up(n))
    correct_indices = [i for i in unique(resolved) if 0 <= i < len(options)]

    if not correct_indices and isinstance(answer_data.get("correctAnswers"), (list, tuple)):
        for text in to_string_list(answer_data["correctAnswers"]):
            if text in options:
                idx = options.index(text)
                if idx not in correct_indices:
                    correct_indices.append(idx)

    normalized_config: Dict[str, Any] = {"options": options}
    shuffle = to_bool(config.get("shuffleOptions"))
    min_sel = to_number(config.get("minSelections"))
    max_sel = to_number(config.get("maxSelections"))
    if shuffle is not None:
        normalized_config["shuffleOptions"] = shuffle
    if min_sel is not None:
        normalized_config["minSelections"] = max(0, round_half_up(min_sel))
    if max_sel is not None:
        normalized_config["maxSelections"] = max(1, round_half_up(max_sel))

    normalized_answer: Dict[str, Any] = {"correctIndices": correct_indices}
    partial = to_bool(answer_data.get("partialCredit"))
    if partial is not None:
        normalized_answer["partialCredit"] = partial

    return _payload(
        QuestionTypeSlug.MULTI_SELECT, config, normalized_config, normalized_answer
    )


# --- entry point -----------------------------------------------------------


def _normalize_custom(
    question_type: str, config: Dict[str, Any], answer_data: Dict[str, Any], raw: Dict[str, Any]
) -> NormalizedQuestionPayload:
    legacy_options = raw.get("options")
    return NormalizedQuestionPayload(
        question_type=question_type,
        question_config=dict(config),
        correct_answer_data=dict(answer_data) if answer_data else None,
        options=to_string_list(legacy_options) if isinstance(legacy_options, list) else None,
        correct_answer=to_number(raw.get("correctAnswer")),
    )


def normalize_question_payload(payload: Any = None, **fields: Any) -> NormalizedQuestionPayload:
    """
    Canonicalize authoring input.

    Accepts a mapping (or keyword arguments) with any of `questionType`,
    `questionConfig`, `correctAnswerData`, `options`, `correctAnswer`. A
    previously normalized payload (or its `to_dict()`) is accepted as-is.
    """
    if isinstance(payload, NormalizedQuestionPayload):
        raw: Dict[str, Any] = payload.to_dict()
    else:
        raw = dict(payload) if isinstance(payload, dict) else {}
    raw.update(fields)

    question_type = normalize_question_type(raw.get("questionType"))
    config = as_record(raw.get("questionConfig"))
    answer_data = as_record(raw.get("correctAnswerData"))

    slug = QuestionTypeSlug.parse(question_type)
    if slug is QuestionTypeSlug.MULTIPLE_CHOICE:
        return _normalize_multiple_choice(config, answer_data, raw)
    if slug is QuestionTypeSlug.TRUE_FALSE:
        return _normalize_true_false(config, answer_data, raw)
    if slug is QuestionTypeSlug.TEXT_INPUT:
        return _normalize_text_input(config, answer_data)
    if slug is QuestionTypeSlug.YEAR_RANGE:
        return _normalize_year_range(config, answer_data, raw)
    if slug is QuestionTypeSlug.NUMERIC_RANGE:
        return _normalize_numeric_range(config, answer_data, raw)
    if slug is QuestionTypeSlug.MATCHING:
        return _normalize_matching(config, answer_data)
    if slug is QuestionTypeSlug.FILL_BLANK:
        return _normalize_fill_blank(config, answer_data)
    if slug is QuestionTypeSlug.MULTI_SELECT:
        return _normalize_multi_select(config, answer_data)

    log_event(logger, "quiz_normalize_custom_type", level="debug", question_type=question_type)
    return _normalize_custom(str(question_type), config, answer_data, raw)
