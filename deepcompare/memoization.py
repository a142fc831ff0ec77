"""Result caching for the comparison operations."""

from __future__ import annotations

import copy
import functools
import json
import logging
import re
from dataclasses import asdict
from datetime import date, time
from enum import Enum
from typing import Any, Callable, Optional

from .config import resolve_options
from .engine import (
    compare_arrays,
    compare_properties,
    compare_values_with_conflicts,
    compare_values_with_detailed_differences,
)
from .models import MISSING, PropertyComparison

logger = logging.getLogger(__name__)


def _default(value: Any) -> Any:
    """JSON fallback that tags non-JSON values by type so they never collide."""
    if value is MISSING:
        return {"__missing__": True}
    if isinstance(value, (set, frozenset)):
        raise TypeError("unordered collection")
    if isinstance(value, (date, time)):
        return {"__temporal__": type(value).__name__, "value": value.isoformat()}
    if isinstance(value, re.Pattern):
        return {"__pattern__": value.pattern, "flags": value.flags}
    if isinstance(value, Enum):
        return {"__enum__": type(value).__qualname__, "value": value.value}
    raise TypeError(f"cannot serialize {type(value).__name__}")


def _typed(value: Any, active: frozenset = frozenset()) -> Any:
    """Tag scalars with their type so 1, 1.0, True and '1' stay distinct keys."""
    if isinstance(value, (dict, list, tuple)):
        if id(value) in active:
            raise ValueError("circular reference")
        active = active | {id(value)}
        if isinstance(value, dict):
            return {"__dict__": [[_typed(k, active), _typed(v, active)] for k, v in value.items()]}
        return [type(value).__name__, [_typed(v, active) for v in value]]
    if isinstance(value, (bool, int, float)):
        return [type(value).__name__, repr(value)]
    return value


def default_key(*args: Any, **kwargs: Any) -> Optional[str]:
    """
    Build a cache key from call arguments.

    Options are resolved first so equivalent spellings share an entry.

    Returns:
        Canonical JSON string, or None when an argument cannot be
        serialized (e.g. it contains a cycle)
    """
    args = list(args)
    if "options" in kwargs:
        kwargs = {**kwargs, "options": asdict(resolve_options(kwargs["options"]))}
    try:
        return json.dumps(
            [_typed(args), _typed(kwargs)],
            sort_keys=True,
            default=_default,
        )
    except (TypeError, ValueError):
        return None


class Memoized:
    """
    Wraps a comparison function with a dict-backed result cache.

    Calls whose arguments cannot be keyed bypass the cache. List results
    are copied on the way out so callers cannot mutate cached entries.

    The cache is unbounded unless ``maxsize`` is given, in which case the
    least recently used entry is evicted first. ``cache_clear()`` empties it.
    """

    def __init__(
        self,
        fn: Callable,
        key_fn: Optional[Callable[..., Optional[str]]] = None,
        maxsize: Optional[int] = None
    ):
        if maxsize is not None and maxsize < 1:
            raise ValueError("maxsize must be positive")
        self.fn = fn
        self.key_fn = key_fn or default_key
        self.maxsize = maxsize
        self._cache: dict[str, Any] = {}
        self.hits = 0
        self.misses = 0
        functools.update_wrapper(self, fn)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        key = self.key_fn(*args, **kwargs)
        if key is None:
            return self.fn(*args, **kwargs)

        if key in self._cache:
            self.hits += 1
            logger.debug("Cache hit for %s", self.fn.__name__)
            result = self._cache.pop(key)
            self._cache[key] = result
            return self._copy(result)

        self.misses += 1
        result = self.fn(*args, **kwargs)
        self._cache[key] = result
        if self.maxsize is not None and len(self._cache) > self.maxsize:
            del self._cache[next(iter(self._cache))]
        return self._copy(result)

    @staticmethod
    def _copy(result: Any) -> Any:
        if isinstance(result, list):
            return [copy.copy(item) for item in result]
        if isinstance(result, PropertyComparison):
            return PropertyComparison(list(result.differences), list(result.common))
        return result

    def cache_clear(self):
        self._cache.clear()
        self.hits = 0
        self.misses = 0

    def cache_info(self) -> dict:
        return {"hits": self.hits, "misses": self.misses, "size": len(self._cache)}


def memoize(
    fn: Callable,
    key_fn: Optional[Callable[..., Optional[str]]] = None,
    maxsize: Optional[int] = None
) -> Memoized:
    """Create a memoized version of a comparison function."""
    return Memoized(fn, key_fn, maxsize)


def _options_key(*args: Any, options: Any = None, **kwargs: Any) -> Optional[str]:
    """Key for operations taking options positionally in last place."""
    return default_key(*args, **kwargs, options=options)


def _arrays_key(first: Any, second: Any, options: Any = None) -> Optional[str]:
    return _options_key(first, second, options=options)


def _values_key(first: Any, second: Any, path: str = "", options: Any = None) -> Optional[str]:
    return _options_key(first, second, path, options=options)


memoized_compare_properties = memoize(compare_properties)
memoized_compare_arrays = memoize(compare_arrays, _arrays_key)
memoized_compare_values_with_conflicts = memoize(compare_values_with_conflicts, _values_key)
memoized_compare_values_with_detailed_differences = memoize(
    compare_values_with_detailed_differences, _values_key
)
