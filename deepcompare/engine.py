"""Public comparison operations for deepcompare."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .config import OptionsLike, resolve_options
from .differ import compare
from .include_walk import include_differences
from .models import (
    CompareOptions,
    DiffEntry,
    OutputMode,
    PropertyComparison,
    SchemaValidation,
)
from .path_filter import PathFilterPolicy
from .pathutils import array_root
from .schema import validate_objects
from .utils import is_absent

logger = logging.getLogger(__name__)


def _validate(first: Any, second: Any, options: CompareOptions):
    """Run the schema pre-pass when the options ask for one."""
    if options.schema_validation is not None:
        validate_objects(first, second, options.schema_validation)


def _validate_arrays(first: list, second: list, options: CompareOptions):
    """Validate every element of two sequences against the item schemas."""
    validation = options.schema_validation
    if validation is None or not (validation.first_schema or validation.second_schema):
        return

    wrapped = SchemaValidation(
        first_schema={"items": [validation.first_schema]} if validation.first_schema else None,
        second_schema={"items": [validation.second_schema]} if validation.second_schema else None,
        throw_on_failure=validation.throw_on_failure,
    )
    validate_objects({"items": first}, {"items": second}, wrapped)


def compare_properties(first: Any, second: Any) -> Optional[PropertyComparison]:
    """
    Compare the top-level keys of two mappings.

    Args:
        first: The first mapping
        second: The second mapping

    Returns:
        PropertyComparison with keys present on one side only under
        ``differences`` and keys present on both under ``common``, or
        None if either input is not a mapping
    """
    if not isinstance(first, Mapping) or not isinstance(second, Mapping):
        return None

    result = PropertyComparison()
    all_keys = list(first) + [key for key in second if key not in first]
    for key in all_keys:
        if key in first and key in second:
            result.common.append(key)
        else:
            result.differences.append(key)
    return result


def compare_arrays(first: Any, second: Any, options: OptionsLike = None) -> bool:
    """
    Check whether two sequences are deeply equal.

    Args:
        first: The first sequence
        second: The second sequence
        options: Comparison options

    Returns:
        True if equal; False if they differ or either input is not a sequence

    Raises:
        CircularReferenceError: On a cycle when cycle handling is 'error'
        SchemaValidationError: On invalid items when throw_on_failure is set
    """
    if not isinstance(first, (list, tuple)) or not isinstance(second, (list, tuple)):
        return False

    options = resolve_options(options)
    _validate_arrays(first, second, options)

    if first is second:
        return True

    return compare(first, second, "", options, OutputMode.EQUALITY)


def compare_values_with_conflicts(
    first: Any,
    second: Any,
    path: str = "",
    options: OptionsLike = None
) -> Optional[list[str]]:
    """
    List the paths at which two values conflict.

    Differences inside a sequence are reported once, at the path of the
    property holding the sequence.

    Args:
        first: The first value
        second: The second value
        path: Path of both values, prefixed to every reported path
        options: Comparison options

    Returns:
        Conflict paths in first-seen order without duplicates, or None if
        either value is None or MISSING
    """
    if is_absent(first) or is_absent(second):
        return None

    options = resolve_options(options)
    _validate(first, second, options)

    if first is second:
        return []

    policy = PathFilterPolicy(options.path_filter)
    conflicts: list[str] = []

    for conflict in compare(first, second, path, options, OutputMode.PATHS):
        if not _keeps(policy, conflict):
            logger.debug("Dropping filtered conflict %s", conflict)
            continue

        if "[" in conflict:
            conflict = array_root(conflict)
            if not policy.is_include and policy.should_filter(conflict):
                continue

        if conflict not in conflicts:
            conflicts.append(conflict)

    return conflicts


def compare_values_with_detailed_differences(
    first: Any,
    second: Any,
    path: str = "",
    options: OptionsLike = None
) -> Optional[list[DiffEntry]]:
    """
    List every difference between two values.

    Unlike compare_values_with_conflicts, differences inside sequences are
    itemized per index.

    Args:
        first: The first value
        second: The second value
        path: Path of both values, prefixed to every reported path
        options: Comparison options

    Returns:
        DiffEntry records in traversal order, or None if either value is
        None or MISSING
    """
    if is_absent(first) or is_absent(second):
        return None

    options = resolve_options(options)
    _validate(first, second, options)

    if first is second:
        return []

    policy = PathFilterPolicy(options.path_filter)
    if policy.is_include:
        return include_differences(first, second, path, options)

    diffs = compare(first, second, path, options, OutputMode.DETAILED)
    if not policy.active:
        return diffs
    return [d for d in diffs if d.path and policy.should_compare(d.path)]


def _keeps(policy: PathFilterPolicy, path: str) -> bool:
    """Check a produced path against the filter once more."""
    if policy.should_compare(path):
        return True
    # Length mismatches of containers walked towards an included path
    return policy.is_include and policy.may_contain(path)


class DeepCompareEngine:
    """
    Comparison engine holding one resolved set of options.

    Example:
        engine = DeepCompareEngine({"strict": False})
        engine.compare_values_with_conflicts({"a": "1"}, {"a": 1})  # []
    """

    def __init__(self, options: OptionsLike = None):
        """
        Initialize the engine.

        Args:
            options: Comparison options (uses defaults if not provided)
        """
        self.options = resolve_options(options)

    def compare_properties(self, first: Any, second: Any) -> Optional[PropertyComparison]:
        return compare_properties(first, second)

    def compare_arrays(self, first: Any, second: Any) -> bool:
        return compare_arrays(first, second, self.options)

    def compare_values_with_conflicts(
        self, first: Any, second: Any, path: str = ""
    ) -> Optional[list[str]]:
        return compare_values_with_conflicts(first, second, path, self.options)

    def compare_values_with_detailed_differences(
        self, first: Any, second: Any, path: str = ""
    ) -> Optional[list[DiffEntry]]:
        return compare_values_with_detailed_differences(first, second, path, self.options)

    def is_equal(self, first: Any, second: Any) -> bool:
        """Check whether two values have no conflicts at all."""
        if first is second:
            return True
        conflicts = self.compare_values_with_conflicts(first, second)
        if conflicts is None:
            return False
        return not conflicts
