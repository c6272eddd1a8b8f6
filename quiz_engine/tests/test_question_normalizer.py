from __future__ import annotations

import pytest

from quiz_engine.core import question_normalizer
from quiz_engine.core.question_normalizer import (
    NormalizedQuestionPayload,
    detect_one_based_indexing,
    normalize_question_payload,
    normalize_question_type,
)
from quiz_engine.core.question_types import QuestionTypeSlug


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, QuestionTypeSlug.MULTIPLE_CHOICE),
        ("", QuestionTypeSlug.MULTIPLE_CHOICE),
        ("MCQ", QuestionTypeSlug.MULTIPLE_CHOICE),
        ("boolean", QuestionTypeSlug.TRUE_FALSE),
        ("short_answer", QuestionTypeSlug.TEXT_INPUT),
        ("year", QuestionTypeSlug.YEAR_RANGE),
        ("Numeric", QuestionTypeSlug.NUMERIC_RANGE),
        ("fill-in-the-blank", QuestionTypeSlug.FILL_BLANK),
        ("multi select", QuestionTypeSlug.MULTI_SELECT),
        (QuestionTypeSlug.MATCHING, QuestionTypeSlug.MATCHING),
    ],
)
def test_normalize_question_type_aliases(raw, expected):
    assert normalize_question_type(raw) is expected


def test_unknown_type_passes_through_lowercased():
    assert normalize_question_type("Drag_Drop") == "drag_drop"


def _round_trip(payload: NormalizedQuestionPayload) -> NormalizedQuestionPayload:
    return normalize_question_payload(payload.to_dict())


def test_multiple_choice_from_legacy_flat_fields():
    out = normalize_question_payload(
        {"options": ["Paris", "London", "Paris", "Berlin"], "correctAnswer": "2"}
    )
    assert out.question_type is QuestionTypeSlug.MULTIPLE_CHOICE
    assert out.question_config == {"options": ["Paris", "London", "Berlin"], "shuffleOptions": False}
    assert out.correct_answer_data == {"correctIndex": 2}
    assert out.options == ["Paris", "London", "Berlin"]
    assert out.correct_answer == 2


def test_multiple_choice_correct_option_text_and_clamp():
    out = normalize_question_payload(
        questionType="multiple_choice",
        questionConfig={"choices": ["a", "b"]},
        correctAnswerData={"correctOption": "b"},
    )
    assert out.correct_answer_data == {"correctIndex": 1}

    out = normalize_question_payload(
        questionConfig={"options": ["a", "b"]}, correctAnswerData={"correctIndex": 9}
    )
    assert out.correct_answer_data == {"correctIndex": 1}

    out = normalize_question_payload(
        questionConfig={"options": ["a", "b"]}, correctAnswerData={"correctOption": "zzz"}
    )
    assert out.correct_answer_data == {"correctIndex": 0}


def test_multiple_choice_without_options_forces_zero():
    out = normalize_question_payload(correctAnswerData={"correctIndex": 3})
    assert out.question_config["options"] == []
    assert out.correct_answer_data == {"correctIndex": 0}


def test_base_fields_carried_through():
    out = normalize_question_payload(
        questionType="true_false",
        questionConfig={"hint": "think", "mediaUrl": "http://x/y.png", "mediaType": "gif"},
    )
    assert out.question_config["hint"] == "think"
    assert out.question_config["mediaUrl"] == "http://x/y.png"
    assert "mediaType" not in out.question_config


def test_true_false_resolution_order():
    assert normalize_question_payload(
        questionType="true_false", correctAnswerData={"isTrue": "false"}
    ).correct_answer_data == {"correctValue": False}
    assert normalize_question_payload(
        questionType="true_false", correctAnswer=0
    ).correct_answer_data == {"correctValue": False}
    out = normalize_question_payload(questionType="true_false")
    assert out.correct_answer_data == {"correctValue": True}
    assert out.question_config == {"trueLabel": "True", "falseLabel": "False"}


def test_text_input_sources_and_keywords():
    out = normalize_question_payload(
        questionType="text",
        questionConfig={"acceptedKeywords": ["photo", "light"], "maxLength": "120"},
        correctAnswerData={"exactMatch": " photosynthesis ", "keywordMatchThreshold": 1},
    )
    assert out.question_type is QuestionTypeSlug.TEXT_INPUT
    assert out.question_config == {
        "caseSensitive": False,
        "trimWhitespace": True,
        "maxLength": 120,
    }
    assert out.correct_answer_data == {
        "acceptedAnswers": ["photosynthesis"],
        "keywords": ["photo", "light"],
        "keywordMatchThreshold": 1,
    }


def test_year_range_fields_and_tiers():
    out = normalize_question_payload(
        questionType="year",
        questionConfig={"min": "1900", "maxYear": 2000, "toleranceYears": 5},
        correctAnswerData={
            "exactYear": "1990",
            "partialCreditRanges": [
                {"tolerance": 10, "creditPercent": 25},
                {"tolerance": 2, "creditPercent": 150},
                {"tolerance": "x", "creditPercent": 10},
            ],
        },
    )
    assert out.question_config == {"minYear": 1900, "maxYear": 2000, "tolerance": 5}
    assert out.correct_answer_data == {
        "correctYear": 1990,
        "partialCreditRanges": [
            {"tolerance": 2, "creditPercent": 100},
            {"tolerance": 10, "creditPercent": 25},
        ],
    }


def test_year_range_defaults_to_current_year(monkeypatch):
    monkeypatch.setattr(question_normalizer, "_current_utc_year", lambda: 2031)
    out = normalize_question_payload(questionType="year_range")
    assert out.correct_answer_data == {"correctYear": 2031}


def test_numeric_range_percent_tolerance_and_bounds():
    out = normalize_question_payload(
        questionType="number",
        questionConfig={"tolerancePercent": "10", "minValue": 0, "max": 500, "unit": "km"},
        correctAnswerData={"value": "200"},
    )
    assert out.question_config == {
        "tolerance": 10,
        "toleranceType": "percentage",
        "min": 0,
        "max": 500,
        "unit": "km",
    }
    assert out.correct_answer_data == {"correctValue": 200}


def test_numeric_range_defaults_to_zero():
    out = normalize_question_payload(questionType="numeric_range")
    assert out.question_config == {}
    assert out.correct_answer_data == {"correctValue": 0}


@pytest.mark.parametrize(
    "pairs,position,length,expected",
    [
        ([], 0, 2, False),
        ([[0, 1]], 0, 2, False),
        ([[1, 1]], 0, 2, True),
        ([[1, 2], [2, 1]], 0, 2, True),
        ([[1, 2], [2, 1]], 1, 2, True),
        ([[1, 3]], 1, 2, False),
        ([[1, 1]], 0, 0, False),
        ([{"left": 1, "right": 1}], 0, 2, False),
    ],
)
def test_detect_one_based_indexing(pairs, position, length, expected):
    assert detect_one_based_indexing(pairs, position, length) is expected


def test_matching_one_based_tuple_pairs():
    out = normalize_question_payload(
        questionType="matching",
        questionConfig={"leftColumn": ["A", "B"], "rightColumn": ["x", "y"]},
        correctAnswerData={"correctPairs": [[1, 2], [2, 1]]},
    )
    assert out.correct_answer_data == {"correctPairs": {"A": "y", "B": "x"}}
    assert out.question_config["shuffleRight"] is True


def test_matching_object_pairs_and_config_pairs():
    out = normalize_question_payload(
        questionType="match",
        questionConfig={"pairs": [{"term": "Cat", "definition": "Meow"}, {"left": "Dog", "right": "Woof"}]},
        correctAnswerData={"pairs": [{"from": "Cat", "to": "Meow"}, {"leftItem": 1, "rightItem": 1}]},
    )
    assert out.question_config["leftColumn"] == ["Cat", "Dog"]
    assert out.question_config["rightColumn"] == ["Meow", "Woof"]
    assert out.correct_answer_data == {"correctPairs": {"Cat": "Meow", "Dog": "Woof"}}


def test_matching_record_pairs_drop_out_of_range_indices():
    out = normalize_question_payload(
        questionType="matching",
        questionConfig={"leftColumn": ["A"], "rightColumn": ["x"]},
        correctAnswerData={"correctPairs": {"A": 7}},
    )
    # Nothing resolves, so the equal-length columns pair up positionally.
    assert out.correct_answer_data == {"correctPairs": {"A": "x"}}


@pytest.mark.parametrize("right", [7, "7", " 7 ", 7.0])
def test_matching_out_of_range_index_is_dropped_whatever_its_json_type(right):
    out = normalize_question_payload(
        questionType="matching",
        questionConfig={"leftColumn": ["A", "B"], "rightColumn": ["x"]},
        correctAnswerData={"correctPairs": {"A": right}},
    )
    assert out.correct_answer_data == {"correctPairs": {}}
    assert out.question_config["rightColumn"] == ["x"]


def test_matching_numeric_looking_column_entry_still_wins():
    out = normalize_question_payload(
        questionType="matching",
        questionConfig={"leftColumn": ["A", "B"], "rightColumn": ["x", "7"]},
        correctAnswerData={"correctPairs": {"A": "7"}},
    )
    assert out.correct_answer_data == {"correctPairs": {"A": "7"}}


def test_matching_positional_fallback_and_column_completion():
    out = normalize_question_payload(
        questionType="matching",
        questionConfig={"leftColumn": ["A", "B"], "rightColumn": ["x"]},
        correctAnswerData={"correctPairs": {"C": "z"}},
    )
    assert out.correct_answer_data == {"correctPairs": {"C": "z"}}
    assert out.question_config["leftColumn"] == ["A", "B", "C"]
    assert out.question_config["rightColumn"] == ["x", "z"]


def test_fill_blank_generic_template():
    out = normalize_question_payload(
        questionType="fill_in_blank",
        questionConfig={
            "template": "{{blank}} is the capital of {{blank}}",
            "blanks": [{"id": "city", "answers": "Paris"}, {"acceptedAnswers": ["France"]}],
        },
        correctAnswerData={"blanks": {"city": ["Paris", "paris "]}},
    )
    assert out.question_config == {
        "template": "{{city}} is the capital of {{blank_1}}",
        "blanks": [
            {"id": "city", "acceptedAnswers": ["Paris", "paris"]},
            {"id": "blank_1", "acceptedAnswers": ["France"]},
        ],
        "caseSensitive": False,
    }
    assert out.correct_answer_data == {
        "blanks": {"city": ["Paris", "paris"], "blank_1": ["France"]}
    }


def test_fill_blank_without_template_or_blanks():
    out = normalize_question_payload(questionType="fill_blank")
    assert out.question_config["template"] == "{{blank_0}}"
    assert out.correct_answer_data == {"blanks": {"blank_0": []}}


def test_multi_select_indices_and_text_fallback():
    out = normalize_question_payload(
        questionType="multi-select",
        questionConfig={"options": ["a", "b", "c"], "maxSelections": 0},
        correctAnswerData={"correctIndices": ["2", 0, 0, 7]},
    )
    assert out.correct_answer_data == {"correctIndices": [2, 0]}
    assert out.question_config == {"options": ["a", "b", "c"], "maxSelections": 1}

    out = normalize_question_payload(
        questionType="multi_select",
        questionConfig={"options": ["a", "b", "c"]},
        correctAnswerData={"correctAnswers": ["c", "a", "nope"], "partialCredit": False},
    )
    assert out.correct_answer_data == {"correctIndices": [2, 0], "partialCredit": False}


def test_custom_type_passes_through_untouched():
    out = normalize_question_payload(
        questionType="Drag_Drop",
        questionConfig={"zones": 3},
        correctAnswerData={"order": [1, 2]},
        options=["x", 2],
        correctAnswer="1",
    )
    assert out.question_type == "drag_drop"
    assert out.question_config == {"zones": 3}
    assert out.correct_answer_data == {"order": [1, 2]}
    assert out.options == ["x", "2"]
    assert out.correct_answer == 1


def test_degenerate_input_never_raises():
    for payload in (None, {}, {"questionConfig": "junk", "correctAnswerData": 5}, [1, 2]):
        out = normalize_question_payload(payload)
        assert out.question_type is QuestionTypeSlug.MULTIPLE_CHOICE


@pytest.mark.parametrize(
    "payload",
    [
        {"options": ["a", "b"], "correctAnswer": 1},
        {"questionType": "true_false", "correctAnswer": 0},
        {"questionType": "text", "correctAnswerData": {"answers": "x", "keywords": ["k"]}},
        {
            "questionType": "year",
            "questionConfig": {"min": 1000, "tolerance": 3},
            "correctAnswerData": {"year": 1500, "partialCreditRanges": [{"tolerance": 1, "creditPercent": 80}]},
        },
        {
            "questionType": "numeric",
            "questionConfig": {"tolerancePercent": 5, "step": 0.5},
            "correctAnswerData": {"value": 2.5},
        },
        {
            "questionType": "matching",
            "questionConfig": {"leftColumn": ["1", "2"], "rightColumn": ["2", "1"]},
            "correctAnswerData": {"correctPairs": [[1, 2], [2, 1]]},
        },
        {
            "questionType": "fill_blank",
            "questionConfig": {"template": "{{blank}} {{blank}}", "blanks": [{"id": "a", "answer": "x"}]},
        },
        {
            "questionType": "multi_select",
            "questionConfig": {"options": ["a", "b"]},
            "correctAnswerData": {"indices": [1]},
        },
        {"questionType": "custom_kind", "questionConfig": {"a": 1}},
    ],
)
def test_normalization_is_idempotent(payload):
    once = normalize_question_payload(payload)
    assert _round_trip(once) == once


def test_integers_beyond_float_range_are_ignored(monkeypatch):
    huge = 10**400
    out = normalize_question_payload(
        questionType="multiple_choice",
        questionConfig={"options": ["a", "b"]},
        correctAnswerData={"correctIndex": huge},
    )
    assert out.correct_answer_data == {"correctIndex": 0}

    monkeypatch.setattr(question_normalizer, "_current_utc_year", lambda: 2031)
    out = normalize_question_payload(
        questionType="year_range",
        questionConfig={"minYear": -huge, "tolerance": huge},
        correctAnswerData={"correctYear": huge},
    )
    assert out.question_config == {}
    assert out.correct_answer_data == {"correctYear": 2031}

    out = normalize_question_payload(
        questionType="numeric_range",
        questionConfig={"tolerance": 10, "toleranceType": "percentage"},
        correctAnswerData={"correctValue": huge},
    )
    assert out.correct_answer_data == {"correctValue": 0}

    out = normalize_question_payload(
        questionType="multi_select",
        questionConfig={"options": ["a", "b"]},
        correctAnswerData={"correctIndices": [huge, 1]},
    )
    assert out.correct_answer_data == {"correctIndices": [1]}
