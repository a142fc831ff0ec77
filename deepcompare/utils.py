"""Utility functions for the deepcompare engine."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date, time
from typing import Any

from .models import MISSING, ValueKind


_TEMPORAL_TYPES = (date, time)
_SEQUENCE_TYPES = (list, tuple)


def classify(value: Any) -> ValueKind:
    """Classify a value into one of the comparable kinds."""
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, _SEQUENCE_TYPES):
        return ValueKind.SEQUENCE
    if isinstance(value, _TEMPORAL_TYPES):
        return ValueKind.TEMPORAL
    if isinstance(value, re.Pattern):
        return ValueKind.PATTERN
    return ValueKind.SCALAR


def is_numeric(value: Any) -> bool:
    """Check if a value is numeric (int or float)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_nan(value: Any) -> bool:
    """Check if a value is the float not-a-number sentinel."""
    return isinstance(value, float) and math.isnan(value)


def is_absent(value: Any) -> bool:
    """Check if a value is None or MISSING."""
    return value is None or value is MISSING


def get_type_name(value: Any) -> str:
    """Get a friendly type name for a value."""
    if value is MISSING:
        return "missing"
    elif value is None:
        return "null"
    elif isinstance(value, bool):
        return "boolean"
    elif isinstance(value, int):
        return "integer"
    elif isinstance(value, float):
        return "number"
    elif isinstance(value, str):
        return "string"
    elif isinstance(value, _SEQUENCE_TYPES):
        return "array"
    elif isinstance(value, Mapping):
        return "object"
    elif isinstance(value, _TEMPORAL_TYPES):
        return "date"
    elif isinstance(value, re.Pattern):
        return "regexp"
    else:
        return type(value).__name__
