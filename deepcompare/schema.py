"""Structural schema checks run before a comparison."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .exceptions import SchemaValidationError
from .models import SchemaValidation, ValidationResult
from .pathutils import build_path, index_path
from .utils import get_type_name, is_absent, is_numeric

logger = logging.getLogger(__name__)


def _is_type(value: Any, expected: str) -> bool:
    """Check a value against one of the schema type names."""
    if expected == "any":
        return True
    if expected == "string":
        return isinstance(value, str)
    if expected == "number":
        return is_numeric(value)
    if expected == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "object":
        return isinstance(value, Mapping)
    if expected == "array":
        return isinstance(value, (list, tuple))
    if expected == "null":
        return value is None
    # Unknown type names fall back to the reported type name
    return get_type_name(value) == expected


def _validate_type(value: Any, expected: str, path: str) -> list[str]:
    if expected.startswith("array<") and expected.endswith(">"):
        if not isinstance(value, (list, tuple)):
            return [f"Property {path} should be an array but got {get_type_name(value)}"]

        item_type = expected[6:-1]
        errors = []
        for i, item in enumerate(value):
            if not _is_type(item, item_type):
                errors.append(
                    f"Array item {index_path(path, i)} should be of type {item_type} "
                    f"but got {get_type_name(item)}"
                )
        return errors

    if not _is_type(value, expected):
        return [f"Property {path} should be of type {expected} but got {get_type_name(value)}"]
    return []


def validate_against_schema(value: Any, schema: Mapping, path: str = "") -> list[str]:
    """
    Validate a mapping against a schema.

    Every key of the schema is required. A schema value is either a type
    name (``"string"``, ``"number"``, ``"integer"``, ``"boolean"``,
    ``"object"``, ``"array"``, ``"null"``, ``"any"`` or ``"array<T>"``),
    a nested schema mapping, or a one-element list holding the schema of
    every item.

    Args:
        value: The mapping to validate
        schema: The schema to validate against
        path: Path prefix for error messages

    Returns:
        List of validation error messages, empty when valid
    """
    errors: list[str] = []

    for key, expected in schema.items():
        current_path = build_path(path, key)

        if not isinstance(value, Mapping) or key not in value:
            errors.append(f"Missing required property: {current_path}")
            continue

        actual = value[key]

        if isinstance(expected, str):
            errors.extend(_validate_type(actual, expected, current_path))

        elif isinstance(expected, Mapping) and expected:
            if isinstance(actual, Mapping):
                errors.extend(validate_against_schema(actual, expected, current_path))
            else:
                errors.append(
                    f"Property {current_path} should be an object but got {get_type_name(actual)}"
                )

        elif isinstance(expected, (list, tuple)):
            if not isinstance(actual, (list, tuple)):
                errors.append(
                    f"Property {current_path} should be an array but got {get_type_name(actual)}"
                )
                continue

            if len(expected) == 1 and isinstance(expected[0], Mapping):
                item_schema = expected[0]
                for i, item in enumerate(actual):
                    item_path = index_path(current_path, i)
                    if isinstance(item, Mapping):
                        errors.extend(validate_against_schema(item, item_schema, item_path))
                    else:
                        errors.append(
                            f"Array item {item_path} should be an object but got {get_type_name(item)}"
                        )

    return errors


def _validate_side(value: Any, schema: Optional[Mapping], label: str) -> Optional[list[str]]:
    if is_absent(value):
        return [f"{label} object is null or undefined"]
    if not schema:
        return None
    return validate_against_schema(value, schema) or None


def validate_objects(
    first: Any,
    second: Any,
    schema_validation: SchemaValidation
) -> ValidationResult:
    """
    Validate both roots against their optional schemas.

    Args:
        first: The first root
        second: The second root
        schema_validation: Schemas and failure policy

    Returns:
        ValidationResult describing both sides

    Raises:
        SchemaValidationError: If a side is invalid and throw_on_failure is set
    """
    first_errors = _validate_side(first, schema_validation.first_schema, "First")
    second_errors = _validate_side(second, schema_validation.second_schema, "Second")

    result = ValidationResult(
        first_valid=not first_errors,
        second_valid=not second_errors,
        first_errors=first_errors,
        second_errors=second_errors,
    )

    if result.is_valid:
        return result

    if schema_validation.throw_on_failure:
        message = "Schema validation failed: "
        if not result.first_valid:
            message += "First object has validation errors. "
        if not result.second_valid:
            message += "Second object has validation errors."
        raise SchemaValidationError(message.strip(), result)

    logger.warning(
        "Schema validation failed, comparing anyway: %s",
        (first_errors or []) + (second_errors or [])
    )
    return result
