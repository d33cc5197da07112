"""In-memory store of active column filters."""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

import structlog

from tablefilter.core.modules.column.registry import ColumnRegistry
from tablefilter.core.modules.filter.models import FilterOperator, FilterState, arity_of, default_operator_for, resolve_operator
from tablefilter.core.modules.filter.validators import adjust_values, validate_values
from tablefilter.errors import MalformedValuesError

logger = structlog.get_logger(__name__)

FiltersSnapshot = tuple[FilterState, ...]
Listener = Callable[[FiltersSnapshot], None]


class FilterStore:
    """Owns the active filters of one table view and notifies listeners on every change.

    Every mutator validates its input completely before touching state, so a
    rejected call leaves both the filters and the listeners untouched.
    """

    def __init__(self, registry: ColumnRegistry, default_filters: Iterable[FilterState] = ()) -> None:
        self._registry = registry
        self._filters: dict[str, FilterState] = {}
        self._listeners: list[Listener] = []
        for state in self._validate_all(default_filters):
            self._filters[state.column_id] = state

    @property
    def registry(self) -> ColumnRegistry:
        return self._registry

    def snapshot(self) -> FiltersSnapshot:
        """Get the active filters in insertion order."""
        return tuple(self._filters.values())

    def get(self, column_id: str) -> FilterState | None:
        return self._filters.get(column_id)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with the new snapshot after each mutation.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_filter_value(self, column_id: str, values: Sequence[Any]) -> FilterState:
        """Set the values of a column filter, creating it with the default operator if needed.

        Raises:
            UnknownColumnError: If the column is not registered
            MalformedValuesError: If the values do not fit the current operator
        """
        column = self._registry.get(column_id)
        current = self._filters.get(column_id)
        operator = current.operator if current is not None else default_operator_for(column.type)

        normalized = validate_values(column, operator, values)
        state = FilterState(column_id=column_id, type=column.type, operator=operator, values=normalized)
        self._filters[column_id] = state

        logger.debug("filter_value_set", column_id=column_id, operator=str(operator), values_count=len(normalized))
        self._notify()
        return state

    def set_filter_operator(self, column_id: str, operator: FilterOperator | str) -> FilterState:
        """Change the operator of a column filter, fitting existing values to its arity.

        Raises:
            UnknownColumnError: If the column is not registered
            IllegalOperatorError: If the operator is not legal for the column type
        """
        column = self._registry.get(column_id)
        resolved = resolve_operator(column.type, operator)
        current = self._filters.get(column_id)
        values = adjust_values(current.values, arity_of(column.type, resolved)) if current is not None else ()

        state = FilterState(column_id=column_id, type=column.type, operator=resolved, values=values)
        self._filters[column_id] = state

        logger.debug("filter_operator_set", column_id=column_id, operator=str(resolved), values_count=len(values))
        self._notify()
        return state

    def remove_filter(self, column_id: str) -> None:
        """Remove a column filter; absent filters are ignored."""
        if self._filters.pop(column_id, None) is None:
            return
        logger.debug("filter_removed", column_id=column_id)
        self._notify()

    def clear_filters(self) -> None:
        """Remove all filters."""
        self._filters.clear()
        logger.debug("filters_cleared")
        self._notify()

    def replace(self, filters: Iterable[FilterState]) -> None:
        """Replace all filters at once, e.g. when restoring state from a URL.

        Raises:
            UnknownColumnError: If a filter references an unregistered column
            IllegalOperatorError: If an operator does not match the column type
            MalformedValuesError: If values do not fit their operator
        """
        validated = self._validate_all(filters)
        self._filters = {state.column_id: state for state in validated}
        logger.debug("filters_replaced", count=len(validated))
        self._notify()

    def _validate_all(self, filters: Iterable[FilterState]) -> list[FilterState]:
        validated: dict[str, FilterState] = {}
        for state in filters:
            column = self._registry.get(state.column_id)
            if state.column_id in validated:
                raise MalformedValuesError(f"Column '{state.column_id}' has more than one filter")
            operator = resolve_operator(column.type, state.operator)
            # Operator-only filters restored from a URL may still be waiting for values
            values = validate_values(column, operator, state.values) if state.values else ()
            validated[state.column_id] = FilterState(column_id=state.column_id, type=column.type, operator=operator, values=values)
        return list(validated.values())

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
