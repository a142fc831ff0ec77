"""Detailed differences restricted to include patterns."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .comparators import patterns_equal, temporal_equal, values_equal
from .exceptions import CircularReferenceError, MaxDepthExceededError
from .models import MISSING, CompareOptions, CycleHandling, DiffEntry, DiffKind, ValueKind
from .path_filter import PathFilterPolicy
from .pathutils import build_path, index_path
from .utils import classify

logger = logging.getLogger(__name__)


class IncludeWalker:
    """
    Walks two values reporting only differences at included paths.

    Unlike the generic Differ this walk never summarizes arrays: sequences
    of different lengths are compared up to the longer one, and elements
    present on one side only are itemized per included descendant, so
    patterns such as ``[*].name`` or ``items.*.price`` yield per-index paths.
    """

    def __init__(self, options: CompareOptions, policy: Optional[PathFilterPolicy] = None):
        self.options = options
        self.policy = policy or PathFilterPolicy(options.path_filter)
        self.diffs: list[DiffEntry] = []

    def walk(self, first: Any, second: Any, path: str = "") -> list[DiffEntry]:
        self._walk(first, second, path, {}, {}, 0)
        return self.diffs

    def _walk(
        self,
        first: Any,
        second: Any,
        path: str,
        first_seen: dict,
        second_seen: dict,
        depth: int
    ):
        if path and not self.policy.should_descend(path):
            return
        if first is second:
            return

        first_kind = classify(first)
        second_kind = classify(second)

        if first_kind is not second_kind or first_kind not in (
            ValueKind.SEQUENCE, ValueKind.MAPPING
        ):
            if not self.policy.should_compare(path):
                return
            if not self._leaf_equal(first, second, first_kind, second_kind):
                self._add_diff(path, DiffKind.CHANGED, first, second)
            return

        first_path = first_seen.get(id(first))
        second_path = second_seen.get(id(second))
        if first_path is not None or second_path is not None:
            if self.options.cycle_handling == CycleHandling.ERROR:
                raise CircularReferenceError(path)
            if first_path != second_path and self.policy.should_compare(path):
                self._add_diff(path, DiffKind.CHANGED, first, second)
            return
        self._check_depth(depth, path)

        first_seen = {**first_seen, id(first): path}
        second_seen = {**second_seen, id(second): path}

        if first_kind is ValueKind.SEQUENCE:
            for i in range(max(len(first), len(second))):
                child_path = index_path(path, i)
                if i >= len(first):
                    self._emit_one_sided(child_path, DiffKind.ADDED, second[i], depth + 1)
                elif i >= len(second):
                    self._emit_one_sided(child_path, DiffKind.REMOVED, first[i], depth + 1)
                else:
                    self._walk(first[i], second[i], child_path, first_seen, second_seen, depth + 1)
            return

        all_keys = list(first) + [key for key in second if key not in first]
        for key in all_keys:
            child_path = build_path(path, key)
            if key not in first:
                self._emit_one_sided(child_path, DiffKind.ADDED, second[key], depth + 1)
            elif key not in second:
                self._emit_one_sided(child_path, DiffKind.REMOVED, first[key], depth + 1)
            else:
                self._walk(
                    first[key], second[key], child_path, first_seen, second_seen, depth + 1
                )

    def _leaf_equal(self, first: Any, second: Any, first_kind: ValueKind, second_kind: ValueKind) -> bool:
        if first_kind is second_kind is ValueKind.TEMPORAL:
            return temporal_equal(first, second)
        if first_kind is second_kind is ValueKind.PATTERN:
            return patterns_equal(first, second)
        return values_equal(first, second, self.options.strict)

    def _emit_one_sided(
        self,
        path: str,
        kind: DiffKind,
        value: Any,
        depth: int,
        seen: Optional[set] = None
    ):
        """Report a value present on one side, or its included descendants."""
        if self.policy.should_compare(path):
            if kind is DiffKind.ADDED:
                self._add_diff(path, kind, MISSING, value)
            else:
                self._add_diff(path, kind, value, MISSING)
            return

        if not self.policy.may_contain(path):
            return

        value_kind = classify(value)
        if value_kind not in (ValueKind.SEQUENCE, ValueKind.MAPPING):
            return

        seen = seen or set()
        if id(value) in seen:
            return
        seen = seen | {id(value)}
        self._check_depth(depth, path)

        if value_kind is ValueKind.SEQUENCE:
            children = ((index_path(path, i), item) for i, item in enumerate(value))
        else:
            children = ((build_path(path, key), item) for key, item in value.items())
        for child_path, item in children:
            self._emit_one_sided(child_path, kind, item, depth + 1, seen)

    def _check_depth(self, depth: int, path: str):
        max_depth = self.options.max_depth
        if max_depth is not None and depth > max_depth:
            raise MaxDepthExceededError(max_depth, path)

    def _add_diff(self, path: str, kind: DiffKind, old_value: Any, new_value: Any):
        self.diffs.append(DiffEntry(
            path=path,
            kind=kind,
            old_value=old_value,
            new_value=new_value
        ))


def include_differences(first: Any, second: Any, path: str, options: CompareOptions) -> list[DiffEntry]:
    """Collect detailed differences under an include-mode path filter."""
    logger.debug("Include walk over patterns %s", list(options.path_filter.patterns))
    return IncludeWalker(options).walk(first, second, path)
