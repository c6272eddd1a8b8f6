"""
Loose-typing helpers for authoring and submission payloads.

Stored question rows come from forms, imports and older schema versions, so
numbers may arrive as strings, lists as scalars and so on. These helpers
coerce instead of rejecting; none of them raise.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Union

Number = Union[int, float]


def _int_fits_float(value: int) -> bool:
    try:
        float(value)
    except OverflowError:
        return False
    return True


def is_number(value: Any) -> bool:
    """Real finite number; booleans and ints beyond float range are not numbers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return _int_fits_float(value)
    return isinstance(value, float) and math.isfinite(value)


def _tidy(value: float) -> Number:
    if value.is_integer():
        return int(value)
    return value


def to_number(value: Any) -> Optional[Number]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if _int_fits_float(value) else None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str) and value.strip():
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return _tidy(parsed) if math.isfinite(parsed) else None
    return None


def to_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s == "true":
            return True
        if s == "false":
            return False
        return None
    if is_number(value):
        if value == 1:
            return True
        if value == 0:
            return False
    return None


def round_half_up(value: Number) -> int:
    return int(math.floor(value + 0.5))


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def format_number(value: Number) -> str:
    """Render a number the way a JSON client would show it (`3`, not `3.0`)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_string_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        out = [to_text(item).strip() for item in value]
        return [s for s in out if s]
    if isinstance(value, str) or is_number(value):
        s = to_text(value).strip()
        return [s] if s else []
    return []


def unique(values: Iterable[Any]) -> List[Any]:
    """Order-preserving dedupe; first occurrence wins."""
    seen = set()
    out: List[Any] = []
    for v in values:
        if v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


def as_record(value: Any) -> Dict[str, Any]:
    """Mapping view of a value; sequences become index-keyed mappings."""
    if isinstance(value, dict):
        return value
    if isinstance(value, (list, tuple)):
        return {str(i): v for i, v in enumerate(value)}
    return {}


def first_present(*values: Any) -> Any:
    """First argument that is not None (`a ?? b ?? c`)."""
    for v in values:
        if v is not None:
            return v
    return None


def clamp(value: Number, low: Number, high: Number) -> Number:
    return max(low, min(high, value))
