"""Typed predicates used by field constraints.

Wire values arrive either as decoded JSON scalars or as form strings, so every
predicate accepts both spellings of a value (``5`` and ``"5"``, ``true`` and
``"true"``). Booleans are never accepted as numbers.
"""

from __future__ import annotations

from collections.abc import Callable
import math
import re
from typing import Any

from pydantic import AnyHttpUrl
from pydantic import TypeAdapter
from pydantic import ValidationError

Check = Callable[[Any], bool]

_FLOAT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_IDENTIFIER_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
# Bounds of the INTEGER columns numeric fields are stored in.
MIN_INT = -(2**31)
MAX_INT = 2**31 - 1

_BOOLEAN_STRINGS = frozenset({"true", "false", "0", "1"})

_url_adapter: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)


def is_blank(value: Any) -> bool:
    """True for values treated as absent by optional constraints."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def not_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, dict)):
        return bool(value)
    return True


def max_length(limit: int) -> Check:
    """Trimmed text length must not exceed ``limit``; a missing value passes."""

    def check(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, str):
            return len(value.strip()) <= limit
        if isinstance(value, (bool, int, float)):
            return len(str(value)) <= limit
        return False

    return check


def _as_number(value: Any, pattern: re.Pattern[str]) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if isinstance(value, str) and pattern.match(value.strip()):
        number = float(value.strip())
        return number if math.isfinite(number) else None
    return None


def is_float(minimum: float | None = None) -> Check:
    def check(value: Any) -> bool:
        number = _as_number(value, _FLOAT_PATTERN)
        if number is None:
            return False
        return minimum is None or number >= minimum

    return check


def is_int(minimum: int | None = None, maximum: int | None = None) -> Check:
    def check(value: Any) -> bool:
        if isinstance(value, float) and not value.is_integer():
            return False
        number = _as_number(value, _INT_PATTERN)
        if number is None or not MIN_INT <= number <= MAX_INT:
            return False
        if minimum is not None and number < minimum:
            return False
        return maximum is None or number <= maximum

    return check


def is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value.strip() in _BOOLEAN_STRINGS


def is_identifier(value: Any) -> bool:
    """Match the storage layer's identifier format (canonical UUID text)."""
    return isinstance(value, str) and bool(_IDENTIFIER_PATTERN.match(value.strip()))


def is_url(value: Any) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    candidate = value.strip()
    if "://" not in candidate:
        candidate = f"http://{candidate}"
    try:
        url = _url_adapter.validate_python(candidate)
    except ValidationError:
        return False
    return bool(url.host) and "." in url.host


def is_array(value: Any) -> bool:
    return isinstance(value, list)
