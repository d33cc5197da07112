"""Column registry built from caller configs and runtime options."""

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

from tablefilter.core.modules.column.models import CellValue, ColumnConfig, ColumnOption, ColumnType, OptionsSource
from tablefilter.core.modules.filter.models import FilterOperator, operators_for
from tablefilter.errors import DuplicateColumnError, UnknownColumnError

logger = structlog.get_logger(__name__)

# Runtime options keyed by column id, e.g. event titles loaded from the API
OptionsMap = Mapping[str, Sequence[ColumnOption]]


class Column(BaseModel):
    """Registry entry: a column config enriched with resolved options and legal operators."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    config: ColumnConfig
    options: tuple[ColumnOption, ...] = Field(default=(), description="Resolved options, dynamic before static")
    options_source: OptionsSource = Field(OptionsSource.NONE, description="Where the options came from")
    operators: tuple[FilterOperator, ...] = Field(default=(), description="Legal operators in picker order")

    @property
    def id(self) -> str:
        return self.config.id

    @property
    def type(self) -> ColumnType:
        return self.config.type

    @property
    def display_name(self) -> str:
        return self.config.display_name

    @property
    def accessor(self) -> Callable[[Any], CellValue]:
        return self.config.accessor

    @property
    def is_filterable(self) -> bool:
        """Option columns with no options from either source cannot be filtered."""
        if self.type in (ColumnType.OPTION, ColumnType.MULTI_OPTION):
            return bool(self.options)
        return True

    def get_option(self, value: str) -> ColumnOption | None:
        """Get option by value."""
        for option in self.options:
            if option.value == value:
                return option
        return None


def resolve_options(config: ColumnConfig, dynamic: OptionsMap | None) -> tuple[tuple[ColumnOption, ...], OptionsSource]:
    """Resolve a column's options from the runtime map first, then the static config.

    Args:
        config: The column config
        dynamic: Runtime options keyed by column id

    Returns:
        Tuple of (options, source the options were taken from)
    """
    if dynamic is not None and config.id in dynamic:
        return tuple(dynamic[config.id]), OptionsSource.DYNAMIC
    if config.options is not None:
        return tuple(config.options), OptionsSource.STATIC
    return (), OptionsSource.NONE


def build_column(config: ColumnConfig, dynamic: OptionsMap | None = None) -> Column:
    options, source = resolve_options(config, dynamic)
    return Column(config=config, options=options, options_source=source, operators=tuple(operators_for(config.type)))


class ColumnRegistry:
    """Ordered, id-unique set of columns available for filtering."""

    def __init__(self, configs: Sequence[ColumnConfig], options: OptionsMap | None = None) -> None:
        self._columns: dict[str, Column] = {}
        for config in configs:
            if config.id in self._columns:
                raise DuplicateColumnError(config.id)
            column = build_column(config, options)
            if not column.is_filterable:
                logger.debug("column_without_options", column_id=column.id, column_type=column.type)
            self._columns[config.id] = column

        if options is not None:
            for column_id in options:
                if column_id not in self._columns:
                    logger.debug("options_for_unknown_column", column_id=column_id)

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns.values())

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, column_id: object) -> bool:
        return column_id in self._columns

    @property
    def columns(self) -> list[Column]:
        return list(self._columns.values())

    def find(self, column_id: str) -> Column | None:
        """Get column by id, or None if it is not registered."""
        return self._columns.get(column_id)

    def get(self, column_id: str) -> Column:
        """Get column by id.

        Raises:
            UnknownColumnError: If the column is not registered
        """
        column = self._columns.get(column_id)
        if column is None:
            raise UnknownColumnError(column_id)
        return column
