"""Bridge between filter state and a data grid's column filter API.

The grid keeps its own list of ``{id, value}`` column filters and calls a
per-column ``filter_fn(row, column_id, filter_value)`` for each of them. This
module builds both from the engine's filters so the grid applies exactly the
client strategy semantics.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

from tablefilter.core.modules.column.models import ColumnConfig, ColumnType
from tablefilter.core.modules.column.registry import Column, ColumnRegistry, build_column
from tablefilter.core.modules.filter.models import FilterState, FilterValue, arity_of
from tablefilter.core.modules.filter.predicate import matches

logger = structlog.get_logger(__name__)


class GridFilterValue(BaseModel):
    """Value stored by the grid for one column filter."""

    model_config = ConfigDict(frozen=True)

    type: ColumnType
    operator: str
    values: tuple[FilterValue, ...] = ()


class GridColumnFilter(BaseModel):
    """Grid-native column filter entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    value: GridFilterValue


FilterFn = Callable[[Any, str, GridFilterValue], bool]


class GridColumn(BaseModel):
    """Grid column definition; rendering fields (header, cell, size...) pass through as extras."""

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    id: str
    accessor_fn: Callable[[Any], Any] | None = None
    filter_fn: FilterFn | None = Field(None, description="Called as filter_fn(row, column_id, filter_value)")


def make_filter_fn(column: Column) -> FilterFn:
    """Build a grid filter function evaluating the column's type rules."""

    def filter_fn(row: Any, column_id: str, filter_value: GridFilterValue) -> bool:
        # Incomplete filters and option columns without options leave the row in, like the client predicate
        if not column.is_filterable or not arity_of(column.type, filter_value.operator).accepts(len(filter_value.values)):
            return True
        return matches(column.type, filter_value.operator, filter_value.values, column.accessor(row))

    return filter_fn


def columns_for(base_columns: Sequence[GridColumn], configs: Iterable[Column | ColumnConfig]) -> list[GridColumn]:
    """Attach filter functions to grid columns that have a matching column.

    Args:
        base_columns: Grid column definitions
        configs: Registry columns, e.g. a ColumnRegistry carrying runtime options,
            or bare configs resolved against their static options

    Returns:
        Copies of the base columns, in the same order
    """
    columns_by_id = {column.id: column if isinstance(column, Column) else build_column(column) for column in configs}
    result: list[GridColumn] = []
    for base_column in base_columns:
        column = columns_by_id.get(base_column.id)
        if column is None:
            result.append(base_column)
            continue
        result.append(base_column.model_copy(update={"filter_fn": make_filter_fn(column)}))
    return result


def grid_filters_for(filters: Iterable[FilterState], base_columns: Sequence[GridColumn] | None = None) -> list[GridColumnFilter]:
    """Map a filter snapshot to the grid's column filter list.

    Args:
        filters: Filter snapshot
        base_columns: Grid columns of the view; filters on other columns are dropped

    Returns:
        Grid column filters in snapshot order
    """
    known_ids = {column.id for column in base_columns} if base_columns is not None else None
    result: list[GridColumnFilter] = []
    for state in filters:
        if known_ids is not None and state.column_id not in known_ids:
            logger.debug("grid_filter_dropped", column_id=state.column_id)
            continue
        value = GridFilterValue(type=state.type, operator=str(state.operator), values=state.values)
        result.append(GridColumnFilter(id=state.column_id, value=value))
    return result


def filters_from_grid(registry: ColumnRegistry, column_filters: Iterable[GridColumnFilter]) -> tuple[FilterState, ...]:
    """Map the grid's column filters back to filter state.

    Filters on columns missing from the registry are dropped.

    Raises:
        IllegalOperatorError: If an operator is not legal for its column
    """
    result: list[FilterState] = []
    for column_filter in column_filters:
        column = registry.find(column_filter.id)
        if column is None:
            logger.debug("grid_filter_unknown_column", column_id=column_filter.id)
            continue
        result.append(
            FilterState(
                column_id=column.id,
                type=column.type,
                operator=column_filter.value.operator,
                values=column_filter.value.values,
            )
        )
    return tuple(result)


def apply_column_filters(
    rows: Iterable[Any], columns: Sequence[GridColumn], column_filters: Sequence[GridColumnFilter]
) -> list[Any]:
    """Filter rows the way the grid's filtered row model does.

    Column filters without a matching column or filter function are ignored.
    """
    columns_by_id = {column.id: column for column in columns}
    checks: list[tuple[FilterFn, GridColumnFilter]] = []
    for column_filter in column_filters:
        column = columns_by_id.get(column_filter.id)
        if column is None or column.filter_fn is None:
            continue
        checks.append((column.filter_fn, column_filter))

    return [row for row in rows if all(filter_fn(row, cf.id, cf.value) for filter_fn, cf in checks)]
