"""Persist filter state in URL query strings across page reloads."""

import urllib.parse
from collections.abc import Iterable

from tablefilter.config import get_config
from tablefilter.core.modules.column.registry import ColumnRegistry
from tablefilter.core.modules.filter.fragment import dumps, loads
from tablefilter.core.modules.filter.models import FilterState


def encode_query(filters: Iterable[FilterState], param: str | None = None) -> str:
    """Encode filters as a query string parameter.

    Args:
        filters: Filter snapshot to encode
        param: Query parameter name, defaults to the configured one

    Returns:
        Query string without leading '?', empty when there are no filters

    Examples:
        filters=%5B%7B%22columnId%22%3A%22status%22%2C...
    """
    snapshot = tuple(filters)
    if not snapshot:
        return ""
    return urllib.parse.urlencode({param or get_config().query_param: dumps(snapshot)})


def decode_query(registry: ColumnRegistry, query: str, param: str | None = None) -> tuple[FilterState, ...]:
    """Decode filters from a query string.

    Other parameters in the query string are ignored. A missing or blank
    filter parameter yields no filters.

    Args:
        registry: Columns the filters are resolved against
        query: Query string, with or without leading '?'
        param: Query parameter name, defaults to the configured one

    Raises:
        MalformedFragmentError: If the parameter does not hold a valid fragment
        UnknownColumnError: If a filter references an unregistered column
        IllegalOperatorError: If an operator is not legal for its column
        MalformedValuesError: If values do not fit their operator
    """
    params = urllib.parse.parse_qs(query.removeprefix("?"))
    raw_values = params.get(param or get_config().query_param)
    if not raw_values or not raw_values[0].strip():
        return ()
    return loads(registry, raw_values[0])
