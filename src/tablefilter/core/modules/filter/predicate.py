"""Client strategy: compile filters into an in-memory row predicate."""

from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime, time, timedelta
from typing import Any, TypeVar

from tablefilter.core.modules.column.models import CellValue, ColumnType
from tablefilter.core.modules.column.registry import Column, ColumnRegistry
from tablefilter.core.modules.filter.models import (
    DateOperator,
    FilterOperator,
    FilterState,
    FilterValue,
    MultiOptionOperator,
    NumberOperator,
    OptionOperator,
    TextOperator,
    resolve_operator,
)
from tablefilter.utils import align_timezones, to_datetime

Predicate = Callable[[Any], bool]

T = TypeVar("T")


def is_empty(cell: CellValue) -> bool:
    """Null and empty string count as empty."""
    return cell is None or cell == ""


def match_text(operator: TextOperator, values: Sequence[FilterValue], cell: CellValue) -> bool:
    """Case-insensitive text comparison."""
    if operator == TextOperator.IS_EMPTY:
        return is_empty(cell)
    if operator == TextOperator.IS_NOT_EMPTY:
        return not is_empty(cell)
    if cell is None:
        return False

    text = str(cell).casefold()
    needle = str(values[0]).casefold()
    match operator:
        case TextOperator.CONTAINS:
            return needle in text
        case TextOperator.DOES_NOT_CONTAIN:
            return needle not in text
        case TextOperator.EQUALS:
            return text == needle
        case TextOperator.DOES_NOT_EQUAL:
            return text != needle
    raise ValueError(f"Unhandled text operator {operator!r} - programming error")


def match_option(operator: OptionOperator, values: Sequence[FilterValue], cell: CellValue) -> bool:
    """Equality and membership for single-valued option columns."""
    if cell is None:
        return False

    match operator:
        case OptionOperator.IS:
            return cell == values[0]
        case OptionOperator.IS_NOT:
            return cell != values[0]
        case OptionOperator.IS_ANY_OF:
            return cell in values
        case OptionOperator.IS_NONE_OF:
            return cell not in values
    raise ValueError(f"Unhandled option operator {operator!r} - programming error")


def match_multi_option(operator: MultiOptionOperator, values: Sequence[FilterValue], cell: CellValue) -> bool:
    """Set algebra between the row's values and the filter values."""
    if cell is None:
        return False

    cell_values = {cell} if isinstance(cell, str) or not isinstance(cell, Iterable) else set(cell)
    wanted = set(values)
    match operator:
        case MultiOptionOperator.INCLUDES_ANY:
            return not cell_values.isdisjoint(wanted)
        case MultiOptionOperator.INCLUDES_ALL:
            return cell_values >= wanted
        case MultiOptionOperator.EXCLUDES_ANY:
            return cell_values.isdisjoint(wanted)
        case MultiOptionOperator.EXCLUDES_ALL:
            return not cell_values >= wanted
    raise ValueError(f"Unhandled multiOption operator {operator!r} - programming error")


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime | date | str):
        try:
            return to_datetime(value)
        except ValueError:
            return None
    return None


def match_date(operator: DateOperator, values: Sequence[FilterValue], cell: CellValue) -> bool:
    """Calendar-day equality, strict ordering and inclusive ranges on dates."""
    if operator == DateOperator.IS_EMPTY:
        return cell is None
    if operator == DateOperator.IS_NOT_EMPTY:
        return cell is not None

    moment = _as_datetime(cell)
    if moment is None:
        return False

    match operator:
        case DateOperator.IS:
            left, right = align_timezones(moment, to_datetime(values[0]))
            return left.date() == right.date()
        case DateOperator.BEFORE:
            left, right = align_timezones(moment, to_datetime(values[0]))
            return left < right
        case DateOperator.AFTER:
            left, right = align_timezones(moment, to_datetime(values[0]))
            return left > right
        case DateOperator.BETWEEN:
            # Bounds are not reordered; a reversed range matches nothing
            left, lower, upper = align_timezones(moment, to_datetime(values[0]), to_datetime(values[1]))
            # An upper bound without a time of day covers that whole day
            if upper.time() == time.min:
                return lower <= left < upper + timedelta(days=1)
            return lower <= left <= upper
    raise ValueError(f"Unhandled date operator {operator!r} - programming error")


def match_number(operator: NumberOperator, values: Sequence[FilterValue], cell: CellValue) -> bool:
    """Direct numeric comparison with inclusive ranges."""
    if cell is None or isinstance(cell, bool) or not isinstance(cell, int | float):
        return False

    match operator:
        case NumberOperator.EQUALS:
            return cell == values[0]
        case NumberOperator.DOES_NOT_EQUAL:
            return cell != values[0]
        case NumberOperator.GREATER_THAN:
            return cell > values[0]  # type: ignore[operator]
        case NumberOperator.LESS_THAN:
            return cell < values[0]  # type: ignore[operator]
        case NumberOperator.BETWEEN:
            return values[0] <= cell <= values[1]  # type: ignore[operator]
    raise ValueError(f"Unhandled number operator {operator!r} - programming error")


def matches(column_type: ColumnType, operator: FilterOperator | str, values: Sequence[FilterValue], cell: CellValue) -> bool:
    """Evaluate a single filter against a cell value.

    Args:
        column_type: Type of the column the cell belongs to
        operator: Operator legal for the column type
        values: Normalized filter values, complete for the operator
        cell: Value extracted from the row by the column accessor

    Returns:
        Whether the cell satisfies the filter
    """
    resolved = resolve_operator(column_type, operator)
    match column_type:
        case ColumnType.TEXT:
            return match_text(TextOperator(resolved), values, cell)
        case ColumnType.OPTION:
            return match_option(OptionOperator(resolved), values, cell)
        case ColumnType.MULTI_OPTION:
            return match_multi_option(MultiOptionOperator(resolved), values, cell)
        case ColumnType.DATE:
            return match_date(DateOperator(resolved), values, cell)
        case ColumnType.NUMBER:
            return match_number(NumberOperator(resolved), values, cell)
    raise ValueError(f"Unknown column type: {column_type!r} - programming error")


def is_active(column: Column, state: FilterState) -> bool:
    """Whether a filter takes part in evaluation.

    Filters still waiting for values and filters on option columns without
    options are no-ops.
    """
    return column.is_filterable and state.is_complete


def compile_predicate(registry: ColumnRegistry, filters: Iterable[FilterState]) -> Predicate:
    """Compile active filters into a row predicate combining them with AND.

    Args:
        registry: Columns providing the accessors
        filters: Filter snapshot to compile

    Returns:
        Function returning True for rows that satisfy every active filter
    """
    checks: list[tuple[Callable[[Any], CellValue], ColumnType, FilterOperator, tuple[FilterValue, ...]]] = []
    for state in filters:
        column = registry.find(state.column_id)
        if column is None or not is_active(column, state):
            continue
        checks.append((column.accessor, column.type, state.operator, state.values))

    def predicate(row: Any) -> bool:
        for accessor, column_type, operator, values in checks:
            if not matches(column_type, operator, values, accessor(row)):
                return False
        return True

    return predicate


def filter_rows(rows: Iterable[T], predicate: Predicate) -> list[T]:
    """Apply a compiled predicate to in-memory rows."""
    return [row for row in rows if predicate(row)]
