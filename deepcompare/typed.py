"""Type-aware helpers built on top of the comparison operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from .config import OptionsLike
from .engine import (
    compare_arrays,
    compare_properties,
    compare_values_with_conflicts,
    compare_values_with_detailed_differences,
)
from .models import MISSING, DiffEntry, TypedComparison, TypedDiffEntry
from .pathutils import find_values
from .utils import get_type_name, is_absent


def objects_are_equal(first: Any, second: Any, options: OptionsLike = None) -> bool:
    """
    Check that every key of second exists in first with an equal value.

    Absent inputs are only equal to themselves.
    """
    if is_absent(first) or is_absent(second):
        return first is second
    return is_subset(first, second, options)


def is_subset(first: Any, second: Any, options: OptionsLike = None) -> bool:
    """Check whether second is a subset of first."""
    if not isinstance(first, Mapping) or not isinstance(second, Mapping):
        return False
    if any(key not in first for key in second):
        return False

    filtered = {key: first[key] for key in second}
    return not compare_values_with_conflicts(filtered, second, "", options)


def get_common_structure(first: Any, second: Any) -> dict:
    """
    Build a mapping holding only the keys both inputs share.

    Nested mappings are reduced recursively; other values are taken
    from first.
    """
    if not isinstance(first, Mapping) or not isinstance(second, Mapping):
        return {}

    result = {}
    for key in compare_properties(first, second).common:
        first_value = first[key]
        second_value = second[key]
        if isinstance(first_value, Mapping) and isinstance(second_value, Mapping):
            result[key] = get_common_structure(first_value, second_value)
        else:
            result[key] = first_value
    return result


def map_object_properties(source: Mapping, property_mapping: Mapping[str, str]) -> dict:
    """
    Rename the properties of source according to property_mapping.

    Args:
        source: The mapping to read from
        property_mapping: Source key (or dotted path such as
            ``user.name``) to target key

    Returns:
        New mapping with the target keys; unresolved sources are skipped
    """
    result = {}
    for source_key, target_key in property_mapping.items():
        if not target_key:
            continue
        if source_key in source:
            result[target_key] = source[source_key]
            continue
        values = find_values(source, source_key) if isinstance(source_key, str) else []
        if values:
            result[target_key] = values[0]
    return result


def typed_compare_arrays(first: Any, second: Any, options: OptionsLike = None) -> TypedComparison:
    """Compare two sequences and report the type names of both inputs."""
    return TypedComparison(
        is_equal=compare_arrays(first, second, options),
        first_type=get_type_name(first),
        second_type=get_type_name(second),
    )


def typed_compare_objects(
    first: Any,
    second: Any,
    options: OptionsLike = None,
    property_mapping: Optional[Mapping[str, str]] = None
) -> TypedComparison:
    """
    Compare two mappings and report the type names of both inputs.

    Args:
        first: The first mapping
        second: The second mapping
        options: Comparison options
        property_mapping: Optional renaming applied to first before comparing

    Returns:
        TypedComparison
    """
    if is_absent(first) or is_absent(second):
        return TypedComparison(
            is_equal=first is second,
            first_type=get_type_name(first),
            second_type=get_type_name(second),
        )

    if property_mapping:
        first = map_object_properties(first, property_mapping)

    conflicts = compare_values_with_conflicts(first, second, "", options)
    return TypedComparison(
        is_equal=not conflicts,
        first_type=get_type_name(first),
        second_type=get_type_name(second),
    )


def typed_detailed_differences(
    first: Any,
    second: Any,
    options: OptionsLike = None,
    include_type_info: bool = False
) -> list[DiffEntry]:
    """
    Detailed differences, optionally annotated with value type names.

    Returns:
        DiffEntry records, or TypedDiffEntry records when include_type_info
        is set; empty if either input is absent
    """
    differences = compare_values_with_detailed_differences(first, second, "", options)
    if not differences:
        return []

    if not include_type_info:
        return differences

    return [
        TypedDiffEntry(
            path=diff.path,
            kind=diff.kind,
            old_value=diff.old_value,
            new_value=diff.new_value,
            old_value_type=None if diff.old_value is MISSING else get_type_name(diff.old_value),
            new_value_type=None if diff.new_value is MISSING else get_type_name(diff.new_value),
        )
        for diff in differences
    ]
