from abc import ABC


class FilterError(ABC, Exception):
    """Base class for filter engine errors.

    All errors that inherit from FilterError are raised synchronously by a
    mutator or a translation step, before any state changes. Their messages
    are safe to show in the UI next to the offending filter control.
    """


class UnknownColumnError(FilterError):
    """Raised when a column id is not present in the column registry."""

    def __init__(self, column_id: str) -> None:
        self.column_id = column_id
        super().__init__(f"Column '{column_id}' is not configured")


class DuplicateColumnError(FilterError):
    """Raised when two column configs share the same id."""

    def __init__(self, column_id: str) -> None:
        self.column_id = column_id
        super().__init__(f"Column '{column_id}' is configured more than once")


class IllegalOperatorError(FilterError):
    """Raised when an operator is not legal for the column's type."""


class MalformedValuesError(FilterError):
    """Raised when filter values do not match the operator arity or the column type."""


class MalformedFragmentError(FilterError):
    """Raised when a serialized query fragment does not have the expected shape."""


class StrategyError(FilterError):
    """Raised when an operation is requested from an engine built for the other strategy."""
