"""Server strategy: translate filter state to and from a JSON query fragment.

Wire shape::

    [{"columnId": "status", "operator": "is", "values": ["confirmed"]}]

Dates are serialized as ISO-8601 strings.
"""

import json
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tablefilter.core.modules.column.registry import ColumnRegistry
from tablefilter.core.modules.filter.models import FilterState, resolve_operator
from tablefilter.core.modules.filter.validators import validate_values
from tablefilter.errors import MalformedFragmentError

# Type for JSON-serializable wire values
WireValue = str | int | float | bool


class QueryFragmentItem(BaseModel):
    """Single filter in a serialized query fragment."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    column_id: str = Field(..., alias="columnId", description="Column the filter applies to")
    operator: str = Field(..., description="Operator name, resolved against the column type on load")
    values: list[WireValue] = Field(default_factory=list, description="Operator arguments")


_FRAGMENT_ADAPTER = TypeAdapter(list[QueryFragmentItem])


def _to_wire(value: Any) -> WireValue:
    if isinstance(value, datetime):
        return value.isoformat()
    return value  # type: ignore[no-any-return]


def serialize(filters: Iterable[FilterState]) -> list[dict[str, Any]]:
    """Serialize filters to a JSON-ready query fragment, preserving order.

    Args:
        filters: Filter snapshot to serialize

    Returns:
        List of {columnId, operator, values} dicts
    """
    items = [
        QueryFragmentItem(column_id=state.column_id, operator=str(state.operator), values=[_to_wire(v) for v in state.values])
        for state in filters
    ]
    return [item.model_dump(by_alias=True) for item in items]


def dumps(filters: Iterable[FilterState]) -> str:
    """Serialize filters to a compact JSON string."""
    return json.dumps(serialize(filters), separators=(",", ":"))


def deserialize(registry: ColumnRegistry, data: Any) -> tuple[FilterState, ...]:
    """Restore filters from a query fragment.

    Args:
        registry: Columns the fragment is resolved against
        data: Parsed JSON fragment

    Returns:
        Filter snapshot in fragment order

    Raises:
        MalformedFragmentError: If the fragment does not have the wire shape
        UnknownColumnError: If a filter references an unregistered column
        IllegalOperatorError: If an operator is not legal for its column
        MalformedValuesError: If values do not fit their operator or column type
    """
    try:
        items = _FRAGMENT_ADAPTER.validate_python(data)
    except PydanticValidationError as e:
        raise MalformedFragmentError(f"Invalid query fragment: {e.error_count()} error(s)") from e

    filters: dict[str, FilterState] = {}
    for item in items:
        column = registry.get(item.column_id)
        if item.column_id in filters:
            raise MalformedFragmentError(f"Column '{item.column_id}' appears more than once in query fragment")
        operator = resolve_operator(column.type, item.operator)
        # Operator-only filters are kept, the UI is still prompting for values
        values = validate_values(column, operator, item.values) if item.values else ()
        filters[item.column_id] = FilterState(column_id=item.column_id, type=column.type, operator=operator, values=values)

    return tuple(filters.values())


def loads(registry: ColumnRegistry, raw: str | bytes) -> tuple[FilterState, ...]:
    """Restore filters from a JSON string.

    Raises:
        MalformedFragmentError: If the string is not valid JSON or not a fragment
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedFragmentError(f"Query fragment is not valid JSON: {e.msg}") from e
    return deserialize(registry, data)
