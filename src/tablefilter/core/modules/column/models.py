"""Column definitions for filterable table views."""

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Type for raw cell values returned by column accessors
CellValue = Any


class ColumnType(StrEnum):
    """Data types a column can be filtered as."""

    TEXT = "text"
    OPTION = "option"  # Single value from a list of options
    MULTI_OPTION = "multiOption"  # Several values from a list of options
    DATE = "date"
    NUMBER = "number"


class ColumnOption(BaseModel):
    """Selectable value for option and multiOption columns."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Human readable label")
    value: str = Field(..., description="Value compared against row data")
    icon: Any = Field(None, description="Opaque UI handle rendered next to the label")


class ColumnConfig(BaseModel):
    """Caller supplied description of a filterable column."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str = Field(..., description="Column identifier (must be unique within a configuration set)")
    accessor: Callable[[Any], CellValue] = Field(..., description="Extracts the comparable value from a row")
    display_name: str = Field(..., description="Label shown in filter pickers")
    type: ColumnType = Field(..., description="Column data type, selects the legal operators")
    options: list[ColumnOption] | None = Field(None, description="Static options for option/multiOption columns")
    icon: Any = Field(None, description="Opaque UI handle for the column")


class OptionsSource(StrEnum):
    """Where a column's options were resolved from."""

    DYNAMIC = "dynamic"  # Runtime options map passed to the engine
    STATIC = "static"  # ColumnConfig.options
    NONE = "none"
