"""Leaf value equality for the deepcompare engine."""

from __future__ import annotations

import re
from typing import Any, Optional

from .utils import classify, is_absent, is_nan, is_numeric
from .models import ValueKind


def temporal_equal(old: Any, new: Any) -> bool:
    """Two dates/datetimes/times are equal iff they denote the same instant."""
    return type(old) is type(new) and old == new


def patterns_equal(old: re.Pattern, new: re.Pattern) -> bool:
    """Two compiled patterns are equal iff source and flags agree."""
    return old.pattern == new.pattern and old.flags == new.flags


def _strict_equal(old: Any, new: Any) -> bool:
    """Equality without coercion: numbers by value, everything else by type and value."""
    if isinstance(old, bool) or isinstance(new, bool):
        return old is new
    if is_numeric(old) and is_numeric(new):
        return old == new
    if not (isinstance(old, type(new)) or isinstance(new, type(old))):
        return False
    if classify(old) is ValueKind.PATTERN:
        return patterns_equal(old, new)
    return bool(old == new)


_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_RADIX_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_INFINITY_RE = re.compile(r"[+-]?Infinity")


def _to_number(value: str) -> Optional[float]:
    """
    Coerce a string to a number the way a loose comparison does.

    Accepts decimal and exponent notation, unsigned 0x/0o/0b integer
    literals and ``Infinity``. Python-only spellings such as ``1_000``,
    ``inf`` or ``nan`` are not numbers here.
    """
    text = value.strip()
    if not text:
        return 0.0
    if _DECIMAL_RE.fullmatch(text) or _INFINITY_RE.fullmatch(text):
        return float(text)
    if _RADIX_RE.fullmatch(text):
        return float(int(text, 0))
    return None


def _loose_equal(old: Any, new: Any) -> bool:
    """Equality with null/undefined, number/string and boolean coercion."""
    if is_absent(old) and is_absent(new):
        return True

    # Numeric comparison of a string against a number
    if isinstance(old, str) and is_numeric(new):
        number = _to_number(old)
        if number is not None and number == new:
            return True
    elif is_numeric(old) and isinstance(new, str):
        number = _to_number(new)
        if number is not None and old == number:
            return True

    # Boolean comparison
    if isinstance(old, bool) or isinstance(new, bool):
        if bool(old) == bool(new):
            return True

    if not old or not new:
        return False

    old_kind = classify(old)
    new_kind = classify(new)
    if old_kind is ValueKind.TEMPORAL and new_kind is ValueKind.TEMPORAL:
        return old == new
    if old_kind is ValueKind.PATTERN and new_kind is ValueKind.PATTERN:
        return patterns_equal(old, new)

    return False


def values_equal(old: Any, new: Any, strict: bool = True) -> bool:
    """
    Decide whether two leaf values are equivalent.

    Args:
        old: The first value
        new: The second value
        strict: Disable all type coercion (NaN still equals NaN)

    Returns:
        True if the values are considered equal
    """
    if old is new or _strict_equal(old, new):
        return True

    if is_nan(old) and is_nan(new):
        return True

    if strict:
        return False

    return _loose_equal(old, new)
