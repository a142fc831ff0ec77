"""
deepcompare - Structural comparison of nested data

Compares nested mappings, sequences and scalar leaves and reports the
result as a boolean, a list of conflicting paths or a list of itemized
differences, with configurable strictness, cycle handling and
include/exclude path filtering.
"""

from .engine import (
    DeepCompareEngine,
    compare_properties,
    compare_arrays,
    compare_values_with_conflicts,
    compare_values_with_detailed_differences,
)
from .models import (
    MISSING,
    CompareOptions,
    CycleHandling,
    DiffEntry,
    DiffKind,
    FilterMode,
    PathFilter,
    PropertyComparison,
    SchemaValidation,
    TypedComparison,
    TypedDiffEntry,
    ValidationResult,
)
from .exceptions import (
    DeepCompareError,
    CircularReferenceError,
    SchemaValidationError,
    MaxDepthExceededError,
    OptionsError,
)
from .config import resolve_options, load_options
from .comparators import values_equal
from .matcher import matches_path_pattern
from .path_filter import PathFilterPolicy
from .schema import validate_against_schema, validate_objects
from .memoization import (
    memoize,
    memoized_compare_properties,
    memoized_compare_arrays,
    memoized_compare_values_with_conflicts,
    memoized_compare_values_with_detailed_differences,
)
from .typed import (
    objects_are_equal,
    is_subset,
    get_common_structure,
    map_object_properties,
    typed_compare_arrays,
    typed_compare_objects,
    typed_detailed_differences,
)

__version__ = "1.0.0"
__all__ = [
    # Comparison
    "DeepCompareEngine",
    "compare_properties",
    "compare_arrays",
    "compare_values_with_conflicts",
    "compare_values_with_detailed_differences",
    "values_equal",
    "matches_path_pattern",
    "PathFilterPolicy",
    # Options
    "CompareOptions",
    "CycleHandling",
    "FilterMode",
    "PathFilter",
    "SchemaValidation",
    "resolve_options",
    "load_options",
    # Results
    "MISSING",
    "DiffEntry",
    "DiffKind",
    "PropertyComparison",
    "TypedComparison",
    "TypedDiffEntry",
    "ValidationResult",
    # Errors
    "DeepCompareError",
    "CircularReferenceError",
    "SchemaValidationError",
    "MaxDepthExceededError",
    "OptionsError",
    # Schema validation
    "validate_against_schema",
    "validate_objects",
    # Memoization
    "memoize",
    "memoized_compare_properties",
    "memoized_compare_arrays",
    "memoized_compare_values_with_conflicts",
    "memoized_compare_values_with_detailed_differences",
    # Type-aware helpers
    "objects_are_equal",
    "is_subset",
    "get_common_structure",
    "map_object_properties",
    "typed_compare_arrays",
    "typed_compare_objects",
    "typed_detailed_differences",
]
