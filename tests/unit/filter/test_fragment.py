"""Tests for server strategy query fragments."""

import json
from datetime import datetime, timezone

import pytest

from tablefilter.core.modules.column.models import ColumnType
from tablefilter.core.modules.filter.fragment import deserialize, dumps, loads, serialize
from tablefilter.core.modules.filter.models import FilterState
from tablefilter.core.modules.filter.store import FilterStore
from tablefilter.errors import IllegalOperatorError, MalformedFragmentError, MalformedValuesError, UnknownColumnError


class TestSerialize:
    """Tests for serialize function."""

    def test_wire_shape(self, registry):
        """Test filters serialize to columnId/operator/values dicts."""
        store = FilterStore(registry)
        store.set_filter_value("status", ["confirmed"])
        store.set_filter_operator("registrationDate", "after")
        store.set_filter_value("registrationDate", [datetime(2024, 1, 1)])

        assert serialize(store.snapshot()) == [
            {"columnId": "status", "operator": "is", "values": ["confirmed"]},
            {"columnId": "registrationDate", "operator": "after", "values": ["2024-01-01T00:00:00"]},
        ]

    def test_empty_snapshot(self):
        """Test no filters serialize to an empty list."""
        assert serialize([]) == []

    def test_dumps_is_json(self, registry):
        """Test dumps output parses back to the fragment."""
        filters = [FilterState(column_id="age", type=ColumnType.NUMBER, operator="between", values=(6, 10.5))]
        assert json.loads(dumps(filters)) == [{"columnId": "age", "operator": "between", "values": [6, 10.5]}]


class TestDeserialize:
    """Tests for deserialize function."""

    def test_round_trip(self, registry):
        """Test deserialize(serialize(snapshot)) reproduces the snapshot."""
        snapshot = (
            FilterState(column_id="name", type=ColumnType.TEXT, operator="doesNotContain", values=("ros",)),
            FilterState(column_id="status", type=ColumnType.OPTION, operator="isNoneOf", values=("pending", "waitlist")),
            FilterState(column_id="tags", type=ColumnType.MULTI_OPTION, operator="includesAll", values=("sport",)),
            FilterState(
                column_id="eventStartDate",
                type=ColumnType.DATE,
                operator="between",
                values=(datetime(2024, 6, 1), datetime(2024, 6, 30, 23, 59, tzinfo=timezone.utc)),
            ),
            FilterState(column_id="registrationDate", type=ColumnType.DATE, operator="isEmpty", values=()),
            FilterState(column_id="age", type=ColumnType.NUMBER, operator="lessThan", values=(12,)),
        )

        assert deserialize(registry, serialize(snapshot)) == snapshot
        assert loads(registry, dumps(snapshot)) == snapshot

    def test_server_round_trip_into_fresh_store(self, registry):
        """Test filters survive serialize, clear and restore into another store."""
        store = FilterStore(registry)
        store.set_filter_value("status", ["confirmed"])
        store.set_filter_operator("registrationDate", "after")
        store.set_filter_value("registrationDate", ["2024-01-01"])
        expected = store.snapshot()

        fragment = json.loads(json.dumps(serialize(expected)))
        store.clear_filters()
        fresh = FilterStore(registry)
        fresh.replace(deserialize(registry, fragment))

        assert store.snapshot() == ()
        assert sorted(fresh.snapshot(), key=lambda s: s.column_id) == sorted(expected, key=lambda s: s.column_id)

    def test_operator_resolved_by_column_type(self, registry):
        """Test 'is' becomes the date operator on a date column."""
        (state,) = deserialize(registry, [{"columnId": "eventStartDate", "operator": "is", "values": ["2024-06-15"]}])
        assert state.type == ColumnType.DATE
        assert state.values == (datetime(2024, 6, 15),)

    def test_pending_filter_kept(self, registry):
        """Test operator-only filters are restored without values."""
        (state,) = deserialize(registry, [{"columnId": "age", "operator": "between", "values": []}])
        assert state.values == ()
        assert not state.is_complete

    def test_unknown_column_raises_error(self, registry):
        """Test filters on unknown columns are rejected."""
        with pytest.raises(UnknownColumnError):
            deserialize(registry, [{"columnId": "missing", "operator": "is", "values": ["x"]}])

    def test_illegal_operator_raises_error(self, registry):
        """Test operators foreign to the column type are rejected."""
        with pytest.raises(IllegalOperatorError):
            deserialize(registry, [{"columnId": "age", "operator": "contains", "values": ["1"]}])

    def test_wrong_arity_raises_error(self, registry):
        """Test value counts are validated."""
        with pytest.raises(MalformedValuesError):
            deserialize(registry, [{"columnId": "status", "operator": "is", "values": ["pending", "confirmed"]}])

    def test_boolean_values_rejected(self, registry):
        """Test booleans are not valid values for any column type."""
        with pytest.raises(MalformedValuesError):
            deserialize(registry, [{"columnId": "age", "operator": "equals", "values": [True]}])

    @pytest.mark.parametrize(
        "data",
        [
            {"columnId": "age"},
            [{"operator": "equals", "values": [1]}],
            [{"columnId": "age", "operator": "equals", "values": [{"nested": 1}]}],
            "filters",
        ],
    )
    def test_malformed_shape_raises_error(self, registry, data):
        """Test payloads not shaped like a fragment are rejected."""
        with pytest.raises(MalformedFragmentError):
            deserialize(registry, data)

    def test_duplicate_column_raises_error(self, registry):
        """Test a column can appear only once."""
        item = {"columnId": "age", "operator": "equals", "values": [1]}
        with pytest.raises(MalformedFragmentError, match="more than once"):
            deserialize(registry, [item, item])

    def test_invalid_json_raises_error(self, registry):
        """Test non-JSON input is rejected."""
        with pytest.raises(MalformedFragmentError, match="not valid JSON"):
            loads(registry, "[{")
