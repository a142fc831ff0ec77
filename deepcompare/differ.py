"""Recursive lock-step traversal shared by every comparison output."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from .comparators import patterns_equal, temporal_equal, values_equal
from .exceptions import CircularReferenceError, MaxDepthExceededError
from .models import (
    MISSING,
    CompareOptions,
    CycleHandling,
    DiffEntry,
    DiffKind,
    OutputMode,
    ValueKind,
)
from .path_filter import PathFilterPolicy
from .pathutils import build_path, index_path
from .utils import classify

logger = logging.getLogger(__name__)

# id(node) -> path where the node was first entered
Ledger = dict[int, str]


class Differ:
    """
    Performs a deep comparison of two values.

    Handles:
    - Dates and compiled patterns as leaves
    - Sequences index by index, mappings key by key
    - Cycle detection through per-branch visited ledgers
    - Include/exclude path filtering at every node

    Differences accumulate in ``self.diffs``; ``diff()`` returns whether the
    two values matched.
    """

    def __init__(
        self,
        options: Optional[CompareOptions] = None,
        policy: Optional[PathFilterPolicy] = None
    ):
        self.options = options or CompareOptions()
        self.policy = policy or PathFilterPolicy(self.options.path_filter)
        self.diffs: list[DiffEntry] = []

    def run(self, first: Any, second: Any, path: str = "", direct: bool = False) -> bool:
        """
        Compare two roots starting at path.

        Args:
            first: The first root
            second: The second root
            path: Path of the roots relative to the caller's data
            direct: Whether this is a direct array-to-array comparison

        Returns:
            True if no difference was found
        """
        if path and not self._participates(path, first, second):
            return True
        return self.diff(first, second, path, direct, {}, {}, 0)

    def diff(
        self,
        first: Any,
        second: Any,
        path: str,
        direct: bool,
        first_seen: Ledger,
        second_seen: Ledger,
        depth: int
    ) -> bool:
        """Compare one pair of values at path."""
        if first is second:
            return True

        first_kind = classify(first)
        second_kind = classify(second)

        if first_kind is second_kind:
            if first_kind is ValueKind.TEMPORAL:
                return self._diff_leaf(temporal_equal(first, second), first, second, path)
            if first_kind is ValueKind.PATTERN:
                return self._diff_leaf(patterns_equal(first, second), first, second, path)
            if first_kind is ValueKind.SEQUENCE:
                return self._diff_sequences(
                    first, second, path, direct, first_seen, second_seen, depth
                )
            if first_kind is ValueKind.MAPPING:
                return self._diff_mappings(
                    first, second, path, first_seen, second_seen, depth
                )

        return self._diff_leaf(
            values_equal(first, second, self.options.strict), first, second, path
        )

    def _diff_sequences(
        self,
        first: Sequence,
        second: Sequence,
        path: str,
        direct: bool,
        first_seen: Ledger,
        second_seen: Ledger,
        depth: int
    ) -> bool:
        """Compare two sequences index by index."""
        visited = self._check_cycle(first, second, path, first_seen, second_seen)
        if visited is not None:
            return visited
        self._check_depth(depth, path)

        first_seen = {**first_seen, id(first): path}
        second_seen = {**second_seen, id(second): path}

        if direct and self.policy.active and not self.policy.should_descend(path):
            return True

        if len(first) != len(second):
            if direct:
                return False
            self._add_diff(path, DiffKind.CHANGED, first, second)
            return False

        all_match = True
        for i, (old_item, new_item) in enumerate(zip(first, second)):
            child_path = index_path(path, i)
            if not self._participates(child_path, old_item, new_item):
                continue

            nested_direct = (
                classify(old_item) is ValueKind.SEQUENCE
                and classify(new_item) is ValueKind.SEQUENCE
            )
            mark = len(self.diffs)
            if not self.diff(
                old_item, new_item, child_path, nested_direct,
                first_seen, second_seen, depth + 1
            ):
                all_match = False
                # A nested array of another length reports no entries of its own
                if len(self.diffs) == mark:
                    self._add_diff(child_path, DiffKind.CHANGED, old_item, new_item)

        return all_match

    def _diff_mappings(
        self,
        first: Mapping,
        second: Mapping,
        path: str,
        first_seen: Ledger,
        second_seen: Ledger,
        depth: int
    ) -> bool:
        """Compare two mappings over the union of their keys."""
        visited = self._check_cycle(first, second, path, first_seen, second_seen)
        if visited is not None:
            return visited
        self._check_depth(depth, path)

        first_seen = {**first_seen, id(first): path}
        second_seen = {**second_seen, id(second): path}

        all_match = True
        all_keys = list(first) + [key for key in second if key not in first]

        for key in all_keys:
            child_path = build_path(path, key)
            in_first = key in first
            in_second = key in second

            if not in_first or not in_second:
                if not self.policy.should_compare(child_path):
                    continue
                if not in_first:
                    self._add_diff(child_path, DiffKind.ADDED, MISSING, second[key])
                else:
                    self._add_diff(child_path, DiffKind.REMOVED, first[key], MISSING)
                all_match = False
                continue

            if not self._participates(child_path, first[key], second[key]):
                continue

            if not self.diff(
                first[key], second[key], child_path, False,
                first_seen, second_seen, depth + 1
            ):
                all_match = False

        return all_match

    def _participates(self, path: str, first: Any, second: Any) -> bool:
        """Check whether the pair at path takes part in the comparison."""
        if self.policy.should_compare(path):
            return True
        # Include mode keeps walking containers that may hold included paths
        if (
            self.policy.is_include
            and classify(first) is classify(second)
            and classify(first) in (ValueKind.MAPPING, ValueKind.SEQUENCE)
        ):
            return self.policy.should_descend(path)
        return False

    def _check_cycle(
        self,
        first: Any,
        second: Any,
        path: str,
        first_seen: Ledger,
        second_seen: Ledger
    ) -> Optional[bool]:
        """
        Consult the visited ledgers before entering a container.

        Returns:
            None when neither node was visited, otherwise the verdict for
            the pair under the 'ignore' policy
        """
        first_path = first_seen.get(id(first))
        second_path = second_seen.get(id(second))
        if first_path is None and second_path is None:
            return None

        logger.debug(
            "Circular reference at %r (first seen at %r / %r)",
            path, first_path, second_path
        )
        if self.options.cycle_handling == CycleHandling.ERROR:
            raise CircularReferenceError(path)

        if first_path is not None and first_path == second_path:
            return True

        self._add_diff(path, DiffKind.CHANGED, first, second)
        return False

    def _check_depth(self, depth: int, path: str):
        max_depth = self.options.max_depth
        if max_depth is not None and depth > max_depth:
            raise MaxDepthExceededError(max_depth, path)

    def _diff_leaf(self, is_match: bool, first: Any, second: Any, path: str) -> bool:
        if is_match:
            return True
        self._add_diff(path, DiffKind.CHANGED, first, second)
        return False

    def _add_diff(self, path: str, kind: DiffKind, old_value: Any, new_value: Any):
        """Add a diff entry."""
        self.diffs.append(DiffEntry(
            path=path,
            kind=kind,
            old_value=old_value,
            new_value=new_value
        ))


def compare(
    first: Any,
    second: Any,
    path: str = "",
    options: Optional[CompareOptions] = None,
    mode: OutputMode = OutputMode.DETAILED
) -> bool | list[str] | list[DiffEntry]:
    """
    Run the traversal and shape its result.

    Args:
        first: The first root
        second: The second root
        path: Starting path
        options: Resolved comparison options
        mode: EQUALITY for a bool, PATHS for conflict paths,
            DETAILED for DiffEntry records

    Returns:
        bool, list of paths or list of DiffEntry depending on mode
    """
    differ = Differ(options)
    is_match = differ.run(first, second, path, direct=mode == OutputMode.EQUALITY)

    if mode == OutputMode.EQUALITY:
        return is_match and not differ.diffs
    if mode == OutputMode.PATHS:
        return [d.path for d in differ.diffs]
    return differ.diffs
