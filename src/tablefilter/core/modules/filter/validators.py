"""Filter value validation utilities."""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from tablefilter.core.modules.column.models import ColumnType
from tablefilter.core.modules.column.registry import Column
from tablefilter.core.modules.filter.models import Arity, FilterOperator, FilterValue, arity_of
from tablefilter.errors import MalformedValuesError
from tablefilter.utils import to_datetime


def validate_text_value(column: Column, value: Any) -> str:
    """Validate text filter value."""
    if not isinstance(value, str):
        raise MalformedValuesError(f"Filter value for text column '{column.id}' must be a string, got {type(value).__name__}")
    return value


def validate_option_value(column: Column, value: Any) -> str:
    """Validate option and multiOption filter value."""
    if not isinstance(value, str):
        raise MalformedValuesError(
            f"Filter value for option column '{column.id}' must be an option value string, got {type(value).__name__}"
        )
    return value


def validate_number_value(column: Column, value: Any) -> int | float:
    """Validate and normalize number filter value."""
    if isinstance(value, str):
        try:
            return float(value) if "." in value or "e" in value.lower() else int(value)
        except ValueError as e:
            raise MalformedValuesError(f"Filter value for number column '{column.id}' must be a number, got string: {value}") from e

    if not isinstance(value, int | float) or isinstance(value, bool):
        raise MalformedValuesError(f"Filter value for number column '{column.id}' must be a number, got {type(value).__name__}")

    return value


def validate_date_value(column: Column, value: Any) -> datetime:
    """Validate and normalize date filter value to datetime."""
    try:
        return to_datetime(value)
    except ValueError as e:
        raise MalformedValuesError(f"Invalid date format for filter on column '{column.id}': {value}") from e
    except TypeError as e:
        raise MalformedValuesError(
            f"Filter value for date column '{column.id}' must be a date, datetime or ISO-8601 string"
        ) from e


def validate_value(column: Column, value: Any) -> FilterValue:
    """Validate and normalize a single filter value for the column type."""
    if value is None:
        raise MalformedValuesError(f"Filter values for column '{column.id}' cannot be null")

    match column.type:
        case ColumnType.TEXT:
            return validate_text_value(column, value)
        case ColumnType.OPTION | ColumnType.MULTI_OPTION:
            return validate_option_value(column, value)
        case ColumnType.NUMBER:
            return validate_number_value(column, value)
        case ColumnType.DATE:
            return validate_date_value(column, value)

    raise ValueError(f"Unknown column type: {column.type!r} - programming error")


def validate_values(column: Column, operator: FilterOperator, values: Sequence[Any]) -> tuple[FilterValue, ...]:
    """Validate and normalize filter values for a column and operator.

    Args:
        column: The column definition
        operator: The operator the values are for (must already be legal for the column)
        values: Raw values supplied by the caller

    Returns:
        Normalized values ready for storage

    Raises:
        MalformedValuesError: If the count does not match the operator arity or a value has the wrong type
    """
    if isinstance(values, str | bytes) or not isinstance(values, Sequence):
        raise MalformedValuesError(f"Filter values for column '{column.id}' must be a list, got {type(values).__name__}")

    arity = arity_of(column.type, operator)
    if not arity.accepts(len(values)):
        raise MalformedValuesError(
            f"Operator '{operator}' on column '{column.id}' expects {_describe_arity(arity)}, got {len(values)}"
        )

    return tuple(validate_value(column, value) for value in values)


def adjust_values(values: tuple[FilterValue, ...], arity: Arity) -> tuple[FilterValue, ...]:
    """Fit existing values to the arity of a newly selected operator.

    Extra values are truncated. When the new operator needs more values than
    are present, the values are cleared and the UI prompts for new ones.
    """
    if arity == Arity.NONE:
        return ()
    if arity == Arity.ONE:
        return values[:1]
    if arity == Arity.TWO:
        return values[:2] if len(values) >= 2 else ()
    return values


def _describe_arity(arity: Arity) -> str:
    return {
        Arity.NONE: "no values",
        Arity.ONE: "exactly one value",
        Arity.TWO: "exactly two values",
        Arity.MANY: "at least one value",
    }[arity]
