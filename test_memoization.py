"""Tests for memoized comparison operations."""

from enum import Enum

import pytest

from deepcompare import (
    memoize,
    memoized_compare_arrays,
    memoized_compare_properties,
    memoized_compare_values_with_conflicts,
    memoized_compare_values_with_detailed_differences,
)


class TestMemoizedOperations:
    """Test the memoized versions of the public operations."""

    def setup_method(self):
        for fn in (
            memoized_compare_arrays,
            memoized_compare_properties,
            memoized_compare_values_with_conflicts,
            memoized_compare_values_with_detailed_differences,
        ):
            fn.cache_clear()

    def test_repeated_call_hits_cache(self):
        """Test an identical call is served from the cache."""
        first = {"a": 1, "b": [1, 2]}
        second = {"a": 2, "b": [1, 2]}
        assert memoized_compare_values_with_conflicts(first, second) == ["a"]
        assert memoized_compare_values_with_conflicts(first, second) == ["a"]
        info = memoized_compare_values_with_conflicts.cache_info()
        assert info == {"hits": 1, "misses": 1, "size": 1}

    def test_options_are_part_of_the_key(self):
        """Test different options are cached separately."""
        assert memoized_compare_values_with_conflicts({"a": "1"}, {"a": 1}) == ["a"]
        assert memoized_compare_values_with_conflicts({"a": "1"}, {"a": 1}, "", {"strict": False}) == []
        assert memoized_compare_values_with_conflicts.cache_info()["misses"] == 2

    def test_equivalent_option_spellings_share_an_entry(self):
        """Test options are resolved before keying."""
        memoized_compare_arrays([1], [1], {"cycleHandling": "error"})
        memoized_compare_arrays([1], [1])
        assert memoized_compare_arrays.cache_info()["hits"] == 1

    def test_types_do_not_collide(self):
        """Test 1 and True produce different keys."""
        assert memoized_compare_arrays([1], [1]) is True
        assert memoized_compare_arrays([1], [True]) is False

    def test_results_are_copies(self):
        """Test mutating a result does not affect the cache."""
        result = memoized_compare_values_with_conflicts({"a": 1}, {"a": 2})
        result.append("bogus")
        assert memoized_compare_values_with_conflicts({"a": 1}, {"a": 2}) == ["a"]

        properties = memoized_compare_properties({"a": 1}, {"b": 1})
        properties.common.append("bogus")
        assert memoized_compare_properties({"a": 1}, {"b": 1}).common == []

    def test_cyclic_input_bypasses_cache(self):
        """Test unkeyable arguments are computed without caching."""
        first = {"a": 1}
        first["self"] = first
        second = {"a": 1}
        second["self"] = second
        options = {"cycle_handling": "ignore"}
        assert memoized_compare_values_with_detailed_differences(first, second, "", options) == []
        assert memoized_compare_values_with_detailed_differences.cache_info()["size"] == 0

    def test_objects_with_name_and_value_bypass_cache(self):
        """Test plain objects are never keyed by their value attribute."""

        class Token:
            def __init__(self, name, value):
                self.name = name
                self.value = value

        first = Token("a", 1)
        assert memoized_compare_values_with_conflicts({"k": first}, {"k": Token("b", 1)}) == ["k"]
        assert memoized_compare_values_with_conflicts({"k": first}, {"k": first}) == []
        assert memoized_compare_values_with_conflicts.cache_info()["size"] == 0

    def test_enums_keyed_by_class(self):
        """Test members of different enums with equal values stay distinct."""

        class Color(Enum):
            RED = 1

        class Size(Enum):
            SMALL = 1

        assert memoized_compare_values_with_conflicts({"k": Color.RED}, {"k": Color.RED}) == []
        assert memoized_compare_values_with_conflicts({"k": Color.RED}, {"k": Size.SMALL}) == ["k"]
        assert memoized_compare_values_with_conflicts.cache_info()["misses"] == 2


class TestMemoize:
    """Test wrapping arbitrary functions."""

    def test_custom_key(self):
        """Test a custom key function decides what is cached."""
        calls = []

        def add(a, b):
            calls.append((a, b))
            return a + b

        cached = memoize(add, key_fn=lambda a, b: str(a))
        assert cached(1, 2) == 3
        assert cached(1, 5) == 3
        assert calls == [(1, 2)]
        assert cached.__name__ == "add"

    def test_maxsize_evicts_least_recently_used(self):
        """Test a bounded cache drops its oldest entry."""
        calls = []

        def double(a):
            calls.append(a)
            return a * 2

        cached = memoize(double, maxsize=2)
        cached(1)
        cached(2)
        cached(1)
        cached(3)
        assert cached.cache_info() == {"hits": 1, "misses": 3, "size": 2}
        cached(1)
        cached(2)
        assert calls == [1, 2, 3, 2]

    def test_unbounded_by_default(self):
        """Test the cache grows until cleared."""
        cached = memoize(lambda a: a)
        for i in range(50):
            cached(i)
        assert cached.cache_info()["size"] == 50
        cached.cache_clear()
        assert cached.cache_info() == {"hits": 0, "misses": 0, "size": 0}

    def test_invalid_maxsize(self):
        """Test maxsize must be positive."""
        with pytest.raises(ValueError):
            memoize(lambda a: a, maxsize=0)
