from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Sequence

PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")
GENERIC_PLACEHOLDER_RE = re.compile(r"\{\{\s*blank\s*\}\}", re.IGNORECASE)


@dataclass(frozen=True)
class TemplatePart:
    type: Literal["text", "blank"]
    content: str
    blank_id: Optional[str] = None


def _blank_def_id(blank: Any) -> Optional[str]:
    if isinstance(blank, dict):
        raw = blank.get("id")
    else:
        raw = getattr(blank, "id", blank)
    if raw is None:
        return None
    s = str(raw).strip()
    return s or None


def parse_fill_blank_template(
    template: Any, blanks: Sequence[Any] = ()
) -> List[TemplatePart]:
    """
    Split a fill-in-the-blank template into text and blank parts.

    Placeholders look like `{{token}}`:
    - `{{blank}}` (any case) is generic and binds positionally to `blanks`,
      falling back to `blank_<n>` when there are fewer definitions;
    - any other token is taken verbatim as the blank id.
    `blanks` may hold dicts with an `id` key, objects with an `id` attribute,
    or plain id strings.
    """
    text = template if isinstance(template, str) else str(template or "")
    blank_ids = [_blank_def_id(b) for b in blanks or ()]

    parts: List[TemplatePart] = []
    cursor = 0
    generic_index = 0
    for m in PLACEHOLDER_RE.finditer(text):
        if m.start() > cursor:
            parts.append(TemplatePart(type="text", content=text[cursor : m.start()]))

        token = (m.group(1) or "").strip()
        is_generic = token.lower() == "blank"
        blank_id: Optional[str] = None
        if is_generic:
            mapped = blank_ids[generic_index] if generic_index < len(blank_ids) else None
            blank_id = mapped or f"blank_{generic_index}"
            generic_index += 1
        elif token:
            blank_id = token

        if blank_id:
            parts.append(TemplatePart(type="blank", content="", blank_id=blank_id))
        else:
            parts.append(TemplatePart(type="text", content=m.group(0)))
        cursor = m.end()

    if cursor < len(text):
        parts.append(TemplatePart(type="text", content=text[cursor:]))

    return parts or [TemplatePart(type="text", content=text)]


def extract_fill_blank_ids(template: Any, blanks: Sequence[Any] = ()) -> List[str]:
    """Blank ids referenced by the template, unique, in first-seen order."""
    seen = set()
    ordered: List[str] = []
    for part in parse_fill_blank_template(template, blanks):
        if part.type != "blank" or not part.blank_id or part.blank_id in seen:
            continue
        seen.add(part.blank_id)
        ordered.append(part.blank_id)
    return ordered


def replace_generic_blank_placeholders(template: str, blank_ids: Sequence[str]) -> str:
    counter = {"i": 0}

    def _sub(_m: "re.Match[str]") -> str:
        i = counter["i"]
        counter["i"] += 1
        bid = blank_ids[i] if i < len(blank_ids) and blank_ids[i] else f"blank_{i}"
        return "{{" + str(bid) + "}}"

    return GENERIC_PLACEHOLDER_RE.sub(_sub, template)


def build_template_from_ids(blank_ids: Sequence[str]) -> str:
    return " ".join("{{" + str(bid) + "}}" for bid in blank_ids)
