"""Custom exceptions for the deepcompare engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ValidationResult


class DeepCompareError(Exception):
    """Base exception for deepcompare errors."""
    pass


class CircularReferenceError(DeepCompareError):
    """Raised when a circular reference is detected and cycle handling is 'error'."""
    def __init__(self, path: str):
        super().__init__(f"Circular reference detected at path: {path}")
        self.path = path


class SchemaValidationError(DeepCompareError):
    """Raised when schema validation fails and throw_on_failure is set."""
    def __init__(self, message: str, result: ValidationResult):
        super().__init__(message)
        self.message = message
        self.result = result


class MaxDepthExceededError(DeepCompareError):
    """Raised when maximum recursion depth is exceeded."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path


class OptionsError(DeepCompareError):
    """Raised when comparison options are invalid."""
    def __init__(self, option: str, message: str):
        super().__init__(f"Invalid option '{option}': {message}")
        self.option = option
        self.message = message
