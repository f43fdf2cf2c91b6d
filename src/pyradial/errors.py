"""Error handling utilities for pyradial.

Provides exception classes and validation helpers for tree
definitions and layout configuration.
"""


class PyradialError(Exception):
    """Base exception for pyradial errors."""

    pass


class TreeDefinitionError(PyradialError):
    """Exception raised when tree definition data is malformed."""

    def __init__(self, reason: str) -> None:
        """Initialize tree definition error.

        Args:
            reason: Reason for failure
        """
        self.reason = reason
        super().__init__(f"Invalid tree definition: {reason}")


class NodeNotFoundError(PyradialError):
    """Exception raised when a node id is not present in the tree."""

    def __init__(self, node_id: str) -> None:
        """Initialize node lookup error.

        Args:
            node_id: Id that could not be resolved
        """
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id!r}")


class ValidationError(PyradialError):
    """Exception raised when input validation fails."""

    def __init__(self, field: str, value: object, expected: str) -> None:
        """Initialize validation error.

        Args:
            field: Field name that failed validation
            value: Invalid value
            expected: Expected type/description
        """
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"Validation failed for '{field}': expected {expected}, got {value!r}")


def validate_range(value: int | float, min_val: int | float, max_val: int | float, name: str = "value") -> None:
    """Validate that a value is within range.

    Args:
        value: Value to validate
        min_val: Minimum allowed value
        max_val: Maximum allowed value
        name: Name of the value for error messages

    Raises:
        ValidationError: If value is out of range
    """
    if not (min_val <= value <= max_val):
        raise ValidationError(name, value, f"value between {min_val} and {max_val}")
