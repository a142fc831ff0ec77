"""Option resolution and loading for comparison calls."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .exceptions import OptionsError
from .models import (
    CompareOptions,
    CycleHandling,
    FilterMode,
    PathFilter,
    SchemaValidation,
)

# Alternative spellings accepted in option mappings
_OPTION_ALIASES = {
    "cycleHandling": "cycle_handling",
    "circularReferences": "cycle_handling",
    "circular_references": "cycle_handling",
    "pathFilter": "path_filter",
    "schemaValidation": "schema_validation",
    "maxDepth": "max_depth",
}

_SCHEMA_ALIASES = {
    "firstSchema": "first_schema",
    "firstObjectSchema": "first_schema",
    "secondSchema": "second_schema",
    "secondObjectSchema": "second_schema",
    "throwOnFailure": "throw_on_failure",
    "throwOnValidationFailure": "throw_on_failure",
}

_OPTION_FIELDS = {"strict", "cycle_handling", "path_filter", "schema_validation", "max_depth"}
_SCHEMA_FIELDS = {"first_schema", "second_schema", "throw_on_failure"}

OptionsLike = Union[None, CompareOptions, Mapping]


def _normalize_keys(raw: Mapping, aliases: dict, fields: set, section: str) -> dict:
    normalized = {}
    for key, value in raw.items():
        name = aliases.get(key, key)
        if name not in fields:
            raise OptionsError(f"{section}{key}", "unknown option")
        normalized[name] = value
    return normalized


def _resolve_path_filter(raw: Any) -> Optional[PathFilter]:
    if raw is None or isinstance(raw, PathFilter):
        return raw
    if not isinstance(raw, Mapping):
        raise OptionsError("path_filter", f"expected a mapping, got {type(raw).__name__}")

    patterns = raw.get("patterns") or []
    if isinstance(patterns, str) or not all(isinstance(p, str) for p in patterns):
        raise OptionsError("path_filter.patterns", "expected a list of strings")

    mode = raw.get("mode") or FilterMode.EXCLUDE
    try:
        return PathFilter(patterns=tuple(patterns), mode=FilterMode(mode))
    except ValueError:
        raise OptionsError("path_filter.mode", f"expected 'include' or 'exclude', got {mode!r}")


def _resolve_schema_validation(raw: Any) -> Optional[SchemaValidation]:
    if raw is None or isinstance(raw, SchemaValidation):
        return raw
    if not isinstance(raw, Mapping):
        raise OptionsError("schema_validation", f"expected a mapping, got {type(raw).__name__}")

    values = _normalize_keys(raw, _SCHEMA_ALIASES, _SCHEMA_FIELDS, "schema_validation.")
    return SchemaValidation(
        first_schema=values.get("first_schema"),
        second_schema=values.get("second_schema"),
        throw_on_failure=bool(values.get("throw_on_failure", False)),
    )


def resolve_options(options: OptionsLike = None) -> CompareOptions:
    """
    Resolve caller options into a CompareOptions once per call.

    Args:
        options: None, a CompareOptions, or a mapping using either
            snake_case or camelCase option names

    Returns:
        Fully populated CompareOptions

    Raises:
        OptionsError: If an option is unknown or has an invalid value
    """
    if options is None:
        return CompareOptions()
    if isinstance(options, CompareOptions):
        return options
    if not isinstance(options, Mapping):
        raise OptionsError("options", f"expected a mapping, got {type(options).__name__}")

    values = _normalize_keys(options, _OPTION_ALIASES, _OPTION_FIELDS, "")

    cycle_handling = values.get("cycle_handling") or CycleHandling.ERROR
    try:
        cycle_handling = CycleHandling(cycle_handling)
    except ValueError:
        raise OptionsError(
            "cycle_handling", f"expected 'error' or 'ignore', got {cycle_handling!r}"
        )

    max_depth = values.get("max_depth", 100)
    if max_depth is not None and (
        not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 0
    ):
        raise OptionsError("max_depth", f"expected a non-negative integer, got {max_depth!r}")

    strict = values.get("strict", True)
    return CompareOptions(
        strict=True if strict is None else bool(strict),
        cycle_handling=cycle_handling,
        path_filter=_resolve_path_filter(values.get("path_filter")),
        schema_validation=_resolve_schema_validation(values.get("schema_validation")),
        max_depth=max_depth,
    )


def load_options(path: Union[str, Path]) -> CompareOptions:
    """Load comparison options from a YAML or JSON file."""
    path = Path(path)
    if not path.exists():
        raise OptionsError("options_file", f"file not found: {path}")

    with open(path, 'r') as f:
        content = f.read()

    # JSON is valid YAML
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise OptionsError("options_file", f"failed to parse {path}: {e}")

    return resolve_options(raw or {})
