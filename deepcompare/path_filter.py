"""Include/exclude policy deciding which paths take part in a comparison."""

from __future__ import annotations

import logging
import re
from typing import Optional

from .matcher import segment_regex, matches_path_pattern, pattern_prefix_matches
from .models import FilterMode, PathFilter
from .pathutils import Segment, ancestor_paths, split_path, wildcard_indices

logger = logging.getLogger(__name__)

_LEADING_INDEX_RE = re.compile(r"^\[\d+\]")


def _segment_matches(segment: Segment, pattern_segment: Segment) -> bool:
    """Check one concrete path segment against one pattern segment."""
    if pattern_segment.is_index:
        if not segment.is_index:
            return False
        return pattern_segment.value in ("*", segment.value)

    if pattern_segment.value == "*":
        return True
    if segment.is_index:
        return False
    if "*" in pattern_segment.value:
        return bool(re.fullmatch(segment_regex(pattern_segment, True), segment.value))
    return segment.value == pattern_segment.value


class PathFilterPolicy:
    """
    Applies a PathFilter to property paths.

    Exclude mode blocks a path once it (or one of its ancestors) matches a
    pattern. Include mode allows a path only when it matches, but also
    reports which containers may hold an included path further down so the
    traversal keeps descending into them.
    """

    def __init__(self, path_filter: Optional[PathFilter] = None):
        self.path_filter = path_filter
        self.patterns: tuple[str, ...] = path_filter.patterns if path_filter else ()
        self.mode = path_filter.mode if path_filter else FilterMode.EXCLUDE
        self._pattern_segments = [
            split_path(p) for p in self.patterns if not p.startswith(".")
        ]
        self._has_any_level = any(p.startswith(".") for p in self.patterns)

    @property
    def active(self) -> bool:
        return bool(self.patterns)

    @property
    def is_include(self) -> bool:
        return self.active and self.mode == FilterMode.INCLUDE

    def should_filter(self, path: str) -> bool:
        """Check whether the path or any of its ancestors matches a pattern."""
        if not self.active:
            return False

        if matches_path_pattern(path, self.patterns):
            return True

        for ancestor in ancestor_paths(path):
            if matches_path_pattern(ancestor, self.patterns):
                return True

        return False

    def should_compare(self, path: str) -> bool:
        """
        Determine if a path takes part in the comparison.

        Args:
            path: The property path to check

        Returns:
            True if the path should be compared
        """
        if not self.active:
            return True

        if self.mode == FilterMode.EXCLUDE:
            return not self.should_filter(path)

        return self._is_included(path)

    def _is_included(self, path: str) -> bool:
        if path in self.patterns:
            return True

        if self.should_filter(path):
            return True

        if "[" in path:
            if wildcard_indices(path) in self.patterns:
                return True

            # '[*].content' against '[0].content'
            if _LEADING_INDEX_RE.match(path):
                suffix = _LEADING_INDEX_RE.sub("", path)
                for pattern in self.patterns:
                    if pattern.startswith("[*]") and pattern[3:] == suffix:
                        return True

        # 'settings.*' includes everything below settings
        for ancestor in ancestor_paths(path):
            if f"{ancestor}.*" in self.patterns:
                return True

        for pattern in self.patterns:
            if "*" in pattern and not pattern.startswith("."):
                if pattern_prefix_matches(path, pattern):
                    return True

        return False

    def may_contain(self, path: str) -> bool:
        """Check whether some include pattern could match a descendant of path."""
        if not path or self._has_any_level:
            return True

        segments = split_path(path)
        for pattern_segments in self._pattern_segments:
            if len(segments) >= len(pattern_segments):
                continue
            if all(
                _segment_matches(segment, pattern_segment)
                for segment, pattern_segment in zip(segments, pattern_segments)
            ):
                return True

        return False

    def should_descend(self, path: str) -> bool:
        """Check whether the traversal may enter a container at path."""
        if self.should_compare(path):
            return True
        if self.is_include and self.may_contain(path):
            return True
        logger.debug("Skipping subtree at %s", path)
        return False
