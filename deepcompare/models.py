"""Data models for the deepcompare engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class _Missing:
    """Marker for a value that is not present at all (as opposed to None)."""

    _instance: Optional[_Missing] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


class ValueKind(Enum):
    SCALAR = "scalar"
    TEMPORAL = "temporal"
    PATTERN = "pattern"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class DiffKind(Enum):
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


class CycleHandling(Enum):
    ERROR = "error"
    IGNORE = "ignore"


class FilterMode(Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"


class OutputMode(Enum):
    EQUALITY = "equality"
    PATHS = "paths"
    DETAILED = "detailed"


@dataclass(frozen=True)
class PathFilter:
    """Glob-like path patterns and whether they include or exclude paths."""
    patterns: tuple[str, ...] = ()
    mode: FilterMode = FilterMode.EXCLUDE

    def __post_init__(self):
        object.__setattr__(self, "patterns", tuple(self.patterns or ()))
        if not isinstance(self.mode, FilterMode):
            object.__setattr__(self, "mode", FilterMode(self.mode))


@dataclass(frozen=True)
class SchemaValidation:
    """Schemas to check both roots against before comparing them."""
    first_schema: Optional[Any] = None
    second_schema: Optional[Any] = None
    throw_on_failure: bool = False


@dataclass(frozen=True)
class CompareOptions:
    """Resolved options for one comparison call."""
    strict: bool = True
    cycle_handling: CycleHandling = CycleHandling.ERROR
    path_filter: Optional[PathFilter] = None
    schema_validation: Optional[SchemaValidation] = None
    max_depth: Optional[int] = 100

    def __post_init__(self):
        if not isinstance(self.cycle_handling, CycleHandling):
            object.__setattr__(self, "cycle_handling", CycleHandling(self.cycle_handling))


@dataclass
class DiffEntry:
    """A single difference found during comparison."""
    path: str
    kind: DiffKind
    old_value: Any = MISSING
    new_value: Any = MISSING

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "kind": self.kind.value,
            "old_value": None if self.old_value is MISSING else self.old_value,
            "new_value": None if self.new_value is MISSING else self.new_value,
        }


@dataclass
class TypedDiffEntry(DiffEntry):
    """A difference annotated with the type names of both values."""
    old_value_type: Optional[str] = None
    new_value_type: Optional[str] = None

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["old_value_type"] = self.old_value_type
        result["new_value_type"] = self.new_value_type
        return result


@dataclass
class PropertyComparison:
    """Keys present on only one side versus keys present on both."""
    differences: list[str] = field(default_factory=list)
    common: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "differences": self.differences,
            "common": self.common,
        }


@dataclass
class ValidationResult:
    """Outcome of validating both roots against their schemas."""
    first_valid: bool = True
    second_valid: bool = True
    first_errors: Optional[list[str]] = None
    second_errors: Optional[list[str]] = None

    @property
    def is_valid(self) -> bool:
        return self.first_valid and self.second_valid

    def to_dict(self) -> dict:
        result = {
            "first_valid": self.first_valid,
            "second_valid": self.second_valid,
        }
        if self.first_errors:
            result["first_errors"] = self.first_errors
        if self.second_errors:
            result["second_errors"] = self.second_errors
        return result


@dataclass
class TypedComparison:
    """Equality verdict together with the type names of both inputs."""
    is_equal: bool
    first_type: str
    second_type: str

    def to_dict(self) -> dict:
        return {
            "is_equal": self.is_equal,
            "first_type": self.first_type,
            "second_type": self.second_type,
        }
