from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from quiz_engine.utils.errors import UnknownQuestionTypeError


class QuestionTypeSlug(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    TEXT_INPUT = "text_input"
    YEAR_RANGE = "year_range"
    NUMERIC_RANGE = "numeric_range"
    MATCHING = "matching"
    FILL_BLANK = "fill_blank"
    MULTI_SELECT = "multi_select"

    @classmethod
    def parse(cls, value: Any) -> Optional["QuestionTypeSlug"]:
        """Built-in member for `value`, or None for a custom slug."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


CUSTOM_SLUG_RE = re.compile(r"^[a-z_]{1,50}$")


@dataclass(frozen=True)
class SchemaProperty:
    type: str  # string | number | boolean | array | object
    required: bool = False
    description: Optional[str] = None
    default: Any = None
    enum: Optional[List[Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.required:
            out["required"] = True
        if self.description:
            out["description"] = self.description
        if self.default is not None:
            out["default"] = self.default
        if self.enum is not None:
            out["enum"] = list(self.enum)
        return out


@dataclass(frozen=True)
class QuestionTypeDefinition:
    slug: str
    name: str
    description: Optional[str]
    config_schema: Dict[str, SchemaProperty] = field(default_factory=dict)
    answer_schema: Dict[str, SchemaProperty] = field(default_factory=dict)
    is_system: bool = True
    is_active: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": f"system_{self.slug}" if self.is_system else self.slug,
            "slug": self.slug,
            "name": self.name,
            "description": self.description,
            "configSchema": {k: v.to_dict() for k, v in self.config_schema.items()},
            "answerSchema": {k: v.to_dict() for k, v in self.answer_schema.items()},
            "isSystem": self.is_system,
            "isActive": self.is_active,
        }


def _p(type_: str, description: str, *, required: bool = False, default: Any = None, enum=None):
    return SchemaProperty(
        type=type_, required=required, description=description, default=default, enum=enum
    )


_PARTIAL_RANGES = _p("array", "Partial credit ranges")

BUILT_IN_QUESTION_TYPES: Dict[QuestionTypeSlug, QuestionTypeDefinition] = {
    QuestionTypeSlug.MULTIPLE_CHOICE: QuestionTypeDefinition(
        slug=QuestionTypeSlug.MULTIPLE_CHOICE.value,
        name="Multiple Choice",
        description="Select one correct answer from a list of options",
        config_schema={
            "options": _p("array", "Answer options", required=True),
            "shuffleOptions": _p("boolean", "Shuffle option order", default=False),
        },
        answer_schema={
            "correctIndex": _p("number", "Index of the correct option", required=True),
        },
    ),
    QuestionTypeSlug.TRUE_FALSE: QuestionTypeDefinition(
        slug=QuestionTypeSlug.TRUE_FALSE.value,
        name="True/False",
        description="Binary true or false question",
        config_schema={
            "trueLabel": _p("string", "Label for true option", default="True"),
            "falseLabel": _p("string", "Label for false option", default="False"),
        },
        answer_schema={
            "correctValue": _p("boolean", "The correct answer", required=True),
        },
    ),
    QuestionTypeSlug.TEXT_INPUT: QuestionTypeDefinition(
        slug=QuestionTypeSlug.TEXT_INPUT.value,
        name="Text Input",
        description="Free text answer with keyword matching",
        config_schema={
            "caseSensitive": _p("boolean", "Case sensitive matching", default=False),
            "trimWhitespace": _p("boolean", "Trim whitespace", default=True),
            "placeholder": _p("string", "Input placeholder text"),
            "maxLength": _p("number", "Maximum answer length"),
        },
        answer_schema={
            "acceptedAnswers": _p("array", "List of accepted answers", required=True),
            "keywords": _p("array", "Keywords for partial credit"),
            "keywordMatchThreshold": _p("number", "Min keywords for partial credit"),
        },
    ),
    QuestionTypeSlug.YEAR_RANGE: QuestionTypeDefinition(
        slug=QuestionTypeSlug.YEAR_RANGE.value,
        name="Year",
        description="Year answer with tolerance for partial credit",
        config_schema={
            "tolerance": _p("number", "Years tolerance for partial credit", default=0),
            "minYear": _p("number", "Minimum allowed year"),
            "maxYear": _p("number", "Maximum allowed year"),
            "placeholder": _p("string", "Input placeholder"),
        },
        answer_schema={
            "correctYear": _p("number", "The correct year", required=True),
            "partialCreditRanges": _PARTIAL_RANGES,
        },
    ),
    QuestionTypeSlug.NUMERIC_RANGE: QuestionTypeDefinition(
        slug=QuestionTypeSlug.NUMERIC_RANGE.value,
        name="Numeric",
        description="Numeric answer with tolerance for partial credit",
        config_schema={
            "tolerance": _p("number", "Tolerance for partial credit", default=0),
            "toleranceType": _p(
                "string",
                "How tolerance is measured",
                default="absolute",
                enum=["absolute", "percentage"],
            ),
            "min": _p("number", "Minimum value"),
            "max": _p("number", "Maximum value"),
            "step": _p("number", "Step increment"),
            "unit": _p("string", "Unit label"),
            "placeholder": _p("string", "Input placeholder"),
        },
        answer_schema={
            "correctValue": _p("number", "The correct value", required=True),
            "partialCreditRanges": _PARTIAL_RANGES,
        },
    ),
    QuestionTypeSlug.MATCHING: QuestionTypeDefinition(
        slug=QuestionTypeSlug.MATCHING.value,
        name="Matching",
        description="Match items from two columns",
        config_schema={
            "leftColumn": _p("array", "Left column items", required=True),
            "rightColumn": _p("array", "Right column items", required=True),
            "shuffleRight": _p("boolean", "Shuffle right column", default=True),
            "leftColumnLabel": _p("string", "Left column header"),
            "rightColumnLabel": _p("string", "Right column header"),
        },
        answer_schema={
            "correctPairs": _p("object", "Correct pair mappings", required=True),
            "partialCreditPerPair": _p("boolean", "Give partial credit per pair", default=True),
        },
    ),
    QuestionTypeSlug.FILL_BLANK: QuestionTypeDefinition(
        slug=QuestionTypeSlug.FILL_BLANK.value,
        name="Fill in the Blank",
        description="Complete sentences with blanks",
        config_schema={
            "caseSensitive": _p("boolean", "Case sensitive matching", default=False),
            "template": _p("string", "Template with {{blank}} placeholders", required=True),
            "blanks": _p("array", "Blank definitions with accepted answers", required=True),
        },
        answer_schema={
            "blanks": _p("object", "Blank ID to accepted answers mapping", required=True),
        },
    ),
    QuestionTypeSlug.MULTI_SELECT: QuestionTypeDefinition(
        slug=QuestionTypeSlug.MULTI_SELECT.value,
        name="Multi-Select",
        description="Select all correct answers",
        config_schema={
            "options": _p("array", "Answer options", required=True),
            "shuffleOptions": _p("boolean", "Shuffle option order", default=False),
            "minSelections": _p("number", "Minimum selections required"),
            "maxSelections": _p("number", "Maximum selections allowed"),
        },
        answer_schema={
            "correctIndices": _p("array", "Indices of correct answers", required=True),
            "partialCredit": _p("boolean", "Allow partial credit", default=True),
        },
    ),
}


def is_builtin_question_type(slug: Any) -> bool:
    return QuestionTypeSlug.parse(slug) is not None


def list_question_types() -> List[QuestionTypeDefinition]:
    return list(BUILT_IN_QUESTION_TYPES.values())


def get_question_type(slug: Any) -> QuestionTypeDefinition:
    member = QuestionTypeSlug.parse(slug)
    if member is None:
        raise UnknownQuestionTypeError(str(slug))
    return BUILT_IN_QUESTION_TYPES[member]


def is_valid_custom_slug(slug: Any) -> bool:
    """Author-defined slugs: lowercase letters/underscores, no clash with a built-in."""
    if not isinstance(slug, str) or not CUSTOM_SLUG_RE.match(slug):
        return False
    return not is_builtin_question_type(slug)
