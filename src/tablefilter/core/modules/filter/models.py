"""Filter operators and per-column filter state."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tablefilter.core.modules.column.models import ColumnType
from tablefilter.errors import IllegalOperatorError

# Type for normalized filter values held in state
FilterValue = str | int | float | datetime


class TextOperator(StrEnum):
    """Operators for free text columns."""

    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesNotContain"
    EQUALS = "equals"
    DOES_NOT_EQUAL = "doesNotEqual"
    IS_EMPTY = "isEmpty"
    IS_NOT_EMPTY = "isNotEmpty"


class OptionOperator(StrEnum):
    """Operators for single-valued option columns."""

    IS = "is"
    IS_NOT = "isNot"
    IS_ANY_OF = "isAnyOf"
    IS_NONE_OF = "isNoneOf"


class MultiOptionOperator(StrEnum):
    """Operators for columns holding a set of option values."""

    INCLUDES_ANY = "includesAny"
    INCLUDES_ALL = "includesAll"
    EXCLUDES_ANY = "excludesAny"
    EXCLUDES_ALL = "excludesAll"


class DateOperator(StrEnum):
    """Operators for date columns."""

    IS = "is"  # same calendar day
    BEFORE = "before"
    AFTER = "after"
    BETWEEN = "between"  # inclusive, bounds in the order given
    IS_EMPTY = "isEmpty"
    IS_NOT_EMPTY = "isNotEmpty"


class NumberOperator(StrEnum):
    """Operators for numeric columns."""

    EQUALS = "equals"
    DOES_NOT_EQUAL = "doesNotEqual"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    BETWEEN = "between"  # inclusive


FilterOperator = TextOperator | OptionOperator | MultiOptionOperator | DateOperator | NumberOperator


class Arity(StrEnum):
    """Number of values an operator takes."""

    NONE = "none"
    ONE = "one"
    TWO = "two"
    MANY = "many"  # one or more

    def accepts(self, count: int) -> bool:
        if self == Arity.NONE:
            return count == 0
        if self == Arity.ONE:
            return count == 1
        if self == Arity.TWO:
            return count == 2
        return count >= 1


# Mapping of column types to their operator enum.
# Declaration order of each enum is the order shown in operator pickers.
COLUMN_TYPE_OPERATORS: dict[ColumnType, type[StrEnum]] = {
    ColumnType.TEXT: TextOperator,
    ColumnType.OPTION: OptionOperator,
    ColumnType.MULTI_OPTION: MultiOptionOperator,
    ColumnType.DATE: DateOperator,
    ColumnType.NUMBER: NumberOperator,
}

DEFAULT_OPERATORS: dict[ColumnType, FilterOperator] = {
    ColumnType.TEXT: TextOperator.CONTAINS,
    ColumnType.OPTION: OptionOperator.IS,
    ColumnType.MULTI_OPTION: MultiOptionOperator.INCLUDES_ANY,
    ColumnType.DATE: DateOperator.IS,
    ColumnType.NUMBER: NumberOperator.EQUALS,
}

# Operator names repeat across types ('is', 'equals', 'between'), so arity is keyed by type first.
OPERATOR_ARITY: dict[ColumnType, dict[str, Arity]] = {
    ColumnType.TEXT: {
        TextOperator.CONTAINS: Arity.ONE,
        TextOperator.DOES_NOT_CONTAIN: Arity.ONE,
        TextOperator.EQUALS: Arity.ONE,
        TextOperator.DOES_NOT_EQUAL: Arity.ONE,
        TextOperator.IS_EMPTY: Arity.NONE,
        TextOperator.IS_NOT_EMPTY: Arity.NONE,
    },
    ColumnType.OPTION: {
        OptionOperator.IS: Arity.ONE,
        OptionOperator.IS_NOT: Arity.ONE,
        OptionOperator.IS_ANY_OF: Arity.MANY,
        OptionOperator.IS_NONE_OF: Arity.MANY,
    },
    ColumnType.MULTI_OPTION: {
        MultiOptionOperator.INCLUDES_ANY: Arity.MANY,
        MultiOptionOperator.INCLUDES_ALL: Arity.MANY,
        MultiOptionOperator.EXCLUDES_ANY: Arity.MANY,
        MultiOptionOperator.EXCLUDES_ALL: Arity.MANY,
    },
    ColumnType.DATE: {
        DateOperator.IS: Arity.ONE,
        DateOperator.BEFORE: Arity.ONE,
        DateOperator.AFTER: Arity.ONE,
        DateOperator.BETWEEN: Arity.TWO,
        DateOperator.IS_EMPTY: Arity.NONE,
        DateOperator.IS_NOT_EMPTY: Arity.NONE,
    },
    ColumnType.NUMBER: {
        NumberOperator.EQUALS: Arity.ONE,
        NumberOperator.DOES_NOT_EQUAL: Arity.ONE,
        NumberOperator.GREATER_THAN: Arity.ONE,
        NumberOperator.LESS_THAN: Arity.ONE,
        NumberOperator.BETWEEN: Arity.TWO,
    },
}


def _operator_enum(column_type: ColumnType) -> type[StrEnum]:
    operator_enum = COLUMN_TYPE_OPERATORS.get(column_type)
    if operator_enum is None:
        raise ValueError(f"Unknown column type: {column_type!r} - programming error")
    return operator_enum


def operators_for(column_type: ColumnType) -> list[FilterOperator]:
    """Get the legal operators for a column type.

    Args:
        column_type: The column type to get operators for

    Returns:
        Operators in picker order

    Raises:
        ValueError: If the column type is unknown
    """
    return list(_operator_enum(column_type))  # type: ignore[arg-type]


def default_operator_for(column_type: ColumnType) -> FilterOperator:
    """Get the operator a new filter on a column of this type starts with."""
    _operator_enum(column_type)
    return DEFAULT_OPERATORS[column_type]


def resolve_operator(column_type: ColumnType, operator: str) -> FilterOperator:
    """Resolve a raw operator name to the operator of the given column type.

    The same name can exist for several types ('is' for option and date,
    'between' for date and number), so the column type picks the member.

    Raises:
        IllegalOperatorError: If the operator is not legal for the column type
    """
    operator_enum = _operator_enum(column_type)
    try:
        return operator_enum(str(operator))  # type: ignore[return-value]
    except ValueError as e:
        raise IllegalOperatorError(f"Operator '{operator}' is not valid for columns of type '{column_type}'") from e


def arity_of(column_type: ColumnType, operator: FilterOperator) -> Arity:
    """Get how many values an operator of the given column type takes."""
    return OPERATOR_ARITY[column_type][resolve_operator(column_type, operator)]


class FilterState(BaseModel):
    """Active filter on a single column."""

    model_config = ConfigDict(frozen=True)

    column_id: str = Field(..., description="Column the filter applies to")
    type: ColumnType = Field(..., description="Column type the operator belongs to")
    operator: FilterOperator = Field(..., description="Comparison operator")
    values: tuple[FilterValue, ...] = Field(default=(), description="Operator arguments, cardinality depends on operator")

    @model_validator(mode="before")
    @classmethod
    def _resolve_operator(cls, data: Any) -> Any:
        if isinstance(data, dict) and "type" in data and "operator" in data:
            column_type = ColumnType(data["type"])
            return {**data, "type": column_type, "operator": resolve_operator(column_type, data["operator"])}
        return data

    @property
    def arity(self) -> Arity:
        return arity_of(self.type, self.operator)

    @property
    def is_complete(self) -> bool:
        """Whether the values satisfy the operator arity."""
        return self.arity.accepts(len(self.values))
