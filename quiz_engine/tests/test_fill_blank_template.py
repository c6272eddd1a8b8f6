from __future__ import annotations

from quiz_engine.core.fill_blank_template import (
    TemplatePart,
    build_template_from_ids,
    extract_fill_blank_ids,
    parse_fill_blank_template,
    replace_generic_blank_placeholders,
)


def test_parse_named_placeholders():
    parts = parse_fill_blank_template("The {{a}} is {{b}}.")
    assert parts == [
        TemplatePart(type="text", content="The "),
        TemplatePart(type="blank", content="", blank_id="a"),
        TemplatePart(type="text", content=" is "),
        TemplatePart(type="blank", content="", blank_id="b"),
        TemplatePart(type="text", content="."),
    ]


def test_generic_placeholders_bind_positionally_to_definitions():
    parts = parse_fill_blank_template(
        "{{blank}} and {{ BLANK }} and {{blank}}",
        [{"id": "first"}, "second"],
    )
    ids = [p.blank_id for p in parts if p.type == "blank"]
    assert ids == ["first", "second", "blank_2"]


def test_generic_placeholders_without_definitions_use_positional_ids():
    assert extract_fill_blank_ids("{{blank}} {{blank}}") == ["blank_0", "blank_1"]


def test_plain_text_and_empty_template():
    assert parse_fill_blank_template("no blanks here") == [
        TemplatePart(type="text", content="no blanks here")
    ]
    assert parse_fill_blank_template("") == [TemplatePart(type="text", content="")]
    assert parse_fill_blank_template(None) == [TemplatePart(type="text", content="")]


def test_empty_token_stays_literal_text():
    parts = parse_fill_blank_template("a {{ }} b")
    assert all(p.type == "text" for p in parts)
    assert "".join(p.content for p in parts) == "a {{ }} b"


def test_extract_ids_unique_in_first_seen_order():
    assert extract_fill_blank_ids("{{x}} {{y}} {{x}} {{z}}") == ["x", "y", "z"]


def test_replace_generic_placeholders():
    out = replace_generic_blank_placeholders("{{blank}} vs {{Blank}} vs {{named}}", ["b1"])
    assert out == "{{b1}} vs {{blank_1}} vs {{named}}"


def test_build_template_from_ids():
    assert build_template_from_ids(["a", "b"]) == "{{a}} {{b}}"
    assert build_template_from_ids([]) == ""
