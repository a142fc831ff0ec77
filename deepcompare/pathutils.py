"""Property path utilities for the deepcompare engine.

Paths join mapping keys with ``.`` and append sequence indices as ``[N]``,
e.g. ``user.tags[2].name``. Patterns use the same grammar with ``*`` and
``[*]`` wildcards.
"""

from __future__ import annotations

import re
from typing import Any, NamedTuple

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathParserError

_SEGMENT_RE = re.compile(r"\.([^.\[\]]*)|\[([^\]]*)\]")
_LEADING_KEY_RE = re.compile(r"^([^.\[\]]+)")
_INDEX_RE = re.compile(r"\[\d+\]")


class Segment(NamedTuple):
    """One step of a path: a mapping key or a bracketed index."""
    is_index: bool
    value: str


def build_path(parent_path: str, key: Any) -> str:
    """Build the path of a mapping key below parent_path."""
    if not parent_path:
        return str(key)
    return f"{parent_path}.{key}"


def index_path(parent_path: str, index: int) -> str:
    """Build the path of a sequence index below parent_path."""
    return f"{parent_path}[{index}]"


def split_path(path: str) -> list[Segment]:
    """
    Split a path (or pattern) into key and index segments.

    ``a.b[0].c`` -> key a, key b, index 0, key c. Wildcards are kept
    verbatim, so ``items[*].*`` -> key items, index *, key *.
    """
    if not path:
        return []

    segments = []
    pos = 0
    match = _LEADING_KEY_RE.match(path)
    if match:
        segments.append(Segment(False, match.group(1)))
        pos = match.end()

    for match in _SEGMENT_RE.finditer(path, pos):
        if match.group(1) is not None:
            segments.append(Segment(False, match.group(1)))
        else:
            segments.append(Segment(True, match.group(2)))

    return segments


def join_segments(segments: list[Segment]) -> str:
    """Inverse of split_path."""
    path = ""
    for segment in segments:
        if segment.is_index:
            path = f"{path}[{segment.value}]"
        else:
            path = build_path(path, segment.value)
    return path


def ancestor_paths(path: str) -> list[str]:
    """
    List every prefix of path, shortest first, ending with path itself.

    ``a.b[0].c`` -> ``a``, ``a.b``, ``a.b[0]``, ``a.b[0].c``
    """
    segments = split_path(path)
    return [join_segments(segments[:i]) for i in range(1, len(segments) + 1)]


def array_root(path: str) -> str:
    """Cut a path back to the property holding its first sequence index."""
    bracket = path.find("[")
    if bracket == -1:
        return path
    return path[:bracket]


def wildcard_indices(path: str) -> str:
    """Replace every concrete index with ``[*]``."""
    return _INDEX_RE.sub("[*]", path)


def _quote(key: str) -> str:
    escaped = key.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def to_jsonpath(path: str) -> str:
    """Convert a property path into an equivalent JSONPath expression."""
    expression = "$"
    for segment in split_path(path):
        if segment.is_index:
            expression += f"[{segment.value}]"
        else:
            expression += f".{_quote(segment.value)}"
    return expression


class JSONPathResolver:
    """Resolves property paths against data through jsonpath_ng."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, path: str):
        """Compile and cache the JSONPath expression for a property path."""
        if path not in cls._cache:
            expression = to_jsonpath(path)
            try:
                cls._cache[path] = jsonpath_parse(expression)
            except JsonPathParserError as e:
                raise ValueError(f"Invalid path '{path}': {e}")
        return cls._cache[path]

    @classmethod
    def find_values(cls, data: Any, path: str) -> list[Any]:
        """Find all values located at path."""
        if not path:
            return [data]
        expr = cls.compile(path)
        return [m.value for m in expr.find(data)]

    @classmethod
    def get_value(cls, data: Any, path: str, default: Any = None) -> Any:
        """Get the single value at path, or default when nothing is there."""
        values = cls.find_values(data, path)
        return values[0] if values else default


def find_values(data: Any, path: str) -> list[Any]:
    """Find all values located at a property path."""
    return JSONPathResolver.find_values(data, path)
