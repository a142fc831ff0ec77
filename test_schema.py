"""Tests for schema validation."""

import pytest

from deepcompare import (
    SchemaValidation,
    SchemaValidationError,
    validate_against_schema,
    validate_objects,
)


class TestValidateAgainstSchema:
    """Test validation of a single value."""

    def test_valid(self):
        """Test a matching value has no errors."""
        schema = {"name": "string", "age": "number", "extra": "any"}
        assert validate_against_schema({"name": "a", "age": 3.5, "extra": None}, schema) == []

    def test_missing_property(self):
        """Test every schema key is required."""
        errors = validate_against_schema({"name": "a"}, {"name": "string", "age": "number"})
        assert errors == ["Missing required property: age"]

    def test_type_mismatch(self):
        """Test type names are checked."""
        errors = validate_against_schema({"name": 1}, {"name": "string"})
        assert errors == ["Property name should be of type string but got integer"]

    def test_bool_is_not_a_number(self):
        """Test booleans are not numbers."""
        errors = validate_against_schema({"n": True}, {"n": "number"})
        assert errors == ["Property n should be of type number but got boolean"]

    def test_nested_schema(self):
        """Test nested mappings are validated recursively."""
        schema = {"user": {"id": "integer"}}
        assert validate_against_schema({"user": {"id": "x"}}, schema) == [
            "Property user.id should be of type integer but got string"
        ]
        assert validate_against_schema({"user": 5}, schema) == [
            "Property user should be an object but got integer"
        ]

    def test_typed_array(self):
        """Test array<T> checks every item."""
        errors = validate_against_schema({"tags": ["a", 1]}, {"tags": "array<string>"})
        assert errors == ["Array item tags[1] should be of type string but got integer"]

    def test_item_schema(self):
        """Test a one-element list validates every item."""
        schema = {"items": [{"id": "number"}]}
        errors = validate_against_schema({"items": [{"id": 1}, 3]}, schema)
        assert errors == ["Array item items[1] should be an object but got integer"]

        errors = validate_against_schema({"items": "nope"}, schema)
        assert errors == ["Property items should be an array but got string"]


class TestValidateObjects:
    """Test validation of both roots."""

    def test_both_valid(self):
        """Test valid roots produce a valid result."""
        validation = SchemaValidation(first_schema={"a": "number"}, second_schema={"a": "number"})
        result = validate_objects({"a": 1}, {"a": 2}, validation)
        assert result.is_valid
        assert result.to_dict() == {"first_valid": True, "second_valid": True}

    def test_absent_root(self):
        """Test a missing root is invalid."""
        result = validate_objects(None, {}, SchemaValidation())
        assert result.first_valid is False
        assert result.first_errors == ["First object is null or undefined"]
        assert result.second_valid is True

    def test_raise_on_failure(self):
        """Test the failure policy raises with the result attached."""
        validation = SchemaValidation(second_schema={"a": "string"}, throw_on_failure=True)
        with pytest.raises(SchemaValidationError) as exc_info:
            validate_objects({"a": 1}, {"a": 1}, validation)
        assert "Second object has validation errors" in str(exc_info.value)
        assert exc_info.value.result.second_errors == [
            "Property a should be of type string but got integer"
        ]
