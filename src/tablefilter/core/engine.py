from collections.abc import Callable, Iterable, Sequence
from enum import StrEnum
from typing import Any

import structlog

from tablefilter.config import get_config
from tablefilter.core.modules.column.models import ColumnConfig
from tablefilter.core.modules.column.registry import Column, ColumnRegistry, OptionsMap
from tablefilter.core.modules.filter import fragment
from tablefilter.core.modules.filter.models import FilterOperator, FilterState
from tablefilter.core.modules.filter.predicate import Predicate, compile_predicate, filter_rows
from tablefilter.core.modules.filter.store import FiltersSnapshot, FilterStore, Listener
from tablefilter.errors import StrategyError

logger = structlog.get_logger(__name__)


class Strategy(StrEnum):
    """Where filtering is executed."""

    CLIENT = "client"  # In-memory predicate over loaded rows
    SERVER = "server"  # Query fragment sent to the data source


class FilterActions:
    """Mutators exposed to UI controls, bound to one store."""

    def __init__(self, store: FilterStore) -> None:
        self._store = store

    def set_filter_value(self, column_id: str, values: Sequence[Any]) -> FilterState:
        return self._store.set_filter_value(column_id, values)

    def set_filter_operator(self, column_id: str, operator: FilterOperator | str) -> FilterState:
        return self._store.set_filter_operator(column_id, operator)

    def remove_filter(self, column_id: str) -> None:
        self._store.remove_filter(column_id)

    def clear_filters(self) -> None:
        self._store.clear_filters()


class DataTableFilters:
    """Filter engine for one table view, validates strategy before delegating to the store."""

    def __init__(
        self,
        columns_config: Sequence[ColumnConfig],
        strategy: Strategy | str | None = None,
        options: OptionsMap | None = None,
        default_filters: Iterable[FilterState] = (),
        data: Sequence[Any] | None = None,
    ) -> None:
        self._strategy = Strategy(strategy or get_config().default_strategy)
        self._registry = ColumnRegistry(columns_config, options)
        self._store = FilterStore(self._registry, default_filters)
        self._actions = FilterActions(self._store)
        self._data: Sequence[Any] = data if data is not None else ()
        logger.debug(
            "filters_engine_created",
            strategy=str(self._strategy),
            columns=len(self._registry),
            default_filters=len(self._store.snapshot()),
        )

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def registry(self) -> ColumnRegistry:
        return self._registry

    @property
    def columns(self) -> list[Column]:
        """Columns enriched with resolved options and legal operators."""
        return self._registry.columns

    @property
    def filters(self) -> FiltersSnapshot:
        """Current filter snapshot."""
        return self._store.snapshot()

    @property
    def actions(self) -> FilterActions:
        return self._actions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for filter changes (see FilterStore.subscribe)."""
        return self._store.subscribe(listener)

    def predicate(self) -> Predicate:
        """Compile the current filters into a row predicate (client strategy only)."""
        self._ensure_strategy(Strategy.CLIENT)
        return compile_predicate(self._registry, self._store.snapshot())

    def filtered_rows(self, rows: Iterable[Any] | None = None) -> list[Any]:
        """Apply the current filters to rows, defaulting to the data given at construction (client strategy only)."""
        predicate = self.predicate()
        return filter_rows(self._data if rows is None else rows, predicate)

    def set_data(self, data: Sequence[Any]) -> None:
        """Replace the rows filtered by filtered_rows, e.g. after a refetch."""
        self._data = data

    def query_fragment(self) -> list[dict[str, Any]]:
        """Serialize the current filters for the data source (server strategy only)."""
        self._ensure_strategy(Strategy.SERVER)
        return fragment.serialize(self._store.snapshot())

    def load_fragment(self, data: Any) -> None:
        """Replace the current filters with ones restored from a query fragment."""
        self._store.replace(fragment.deserialize(self._registry, data))

    def _ensure_strategy(self, expected: Strategy) -> None:
        if self._strategy != expected:
            raise StrategyError(f"Operation requires the '{expected}' strategy, engine uses '{self._strategy}'")


def create_data_table_filters(
    columns_config: Sequence[ColumnConfig],
    strategy: Strategy | str | None = None,
    options: OptionsMap | None = None,
    default_filters: Iterable[FilterState] = (),
    data: Sequence[Any] | None = None,
) -> DataTableFilters:
    """Create a filter engine for a table view.

    Args:
        columns_config: Filterable columns of the view
        strategy: 'client' or 'server', defaults to the configured strategy
        options: Runtime options keyed by column id, take precedence over static options
        default_filters: Filters applied before the view is first rendered
        data: Rows filtered in memory by the client strategy

    Returns:
        Engine exposing columns, filters, actions and the strategy output

    Raises:
        DuplicateColumnError: If two configs share an id
        UnknownColumnError: If a default filter references an unregistered column
    """
    return DataTableFilters(columns_config, strategy, options, default_filters, data)
