"""Glob-like matching of property paths against filter patterns."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

from .pathutils import split_path

# One key segment, never crossing a dot or a bracket
_KEY = r"[^.\[\]]+"


def segment_regex(segment, first: bool) -> str:
    """Regex for one pattern segment, including its leading separator."""
    if segment.is_index:
        if segment.value == "*":
            return r"\[\d+\]"
        return re.escape(f"[{segment.value}]")

    separator = "" if first else r"\."
    if segment.value == "*":
        if first:
            return _KEY
        # A lone star after a dot also stands for a sequence index
        return rf"(?:\.{_KEY}|\[\d+\])"
    if "*" in segment.value:
        body = r"[^.\[\]]*".join(re.escape(part) for part in segment.value.split("*"))
        return separator + body
    return separator + re.escape(segment.value)


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str, anchored: bool = True) -> re.Pattern:
    """Compile and cache the regex for a wildcard pattern."""
    segments = split_path(pattern)
    body = "".join(
        segment_regex(segment, i == 0) for i, segment in enumerate(segments)
    )
    if anchored:
        return re.compile(f"^{body}$")
    return re.compile(rf"^{body}(?=$|[.\[])")


@lru_cache(maxsize=256)
def _compile_field_name(name: str) -> re.Pattern:
    """Compile and cache the regex for an any-level field name."""
    return re.compile(rf"(?:^|[.\]]){re.escape(name)}(?=$|[.\[])")


def matches_field_name(path: str, name: str) -> bool:
    """Check whether name occurs as a whole key segment anywhere in path."""
    if path == name:
        return True
    return bool(_compile_field_name(name).search(path))


def matches_single_pattern(path: str, pattern: str) -> bool:
    """Check one pattern against a path."""
    # Leading dot: the field name at any level
    if pattern.startswith("."):
        return matches_field_name(path, pattern[1:])

    if pattern == path:
        return True

    if "*" in pattern and _compile_pattern(pattern).match(path):
        return True

    # The pattern names a container holding this path
    return path.startswith(pattern + "[") or path.startswith(pattern + ".")


def matches_path_pattern(path: str, patterns: Iterable[str]) -> bool:
    """
    Check if a path matches any of the patterns.

    Supports:
    - Any-level field name: .id
    - Exact match: user.settings.theme
    - Array wildcard: posts[*].title
    - Segment wildcard: user.*.created
    - Container prefix: posts matches posts[0].title
    """
    if not patterns:
        return False
    return any(matches_single_pattern(path, pattern) for pattern in patterns)


def pattern_prefix_matches(path: str, pattern: str) -> bool:
    """Match a wildcard pattern against the start of path, ending on a segment edge."""
    return bool(_compile_pattern(pattern, anchored=False).match(path))
