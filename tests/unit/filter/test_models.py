"""Tests for filter operator tables and filter state."""

import pytest
from pydantic import ValidationError

from tablefilter.core.modules.column.models import ColumnType
from tablefilter.core.modules.filter.models import (
    Arity,
    DateOperator,
    FilterState,
    MultiOptionOperator,
    NumberOperator,
    OptionOperator,
    TextOperator,
    arity_of,
    default_operator_for,
    operators_for,
    resolve_operator,
)
from tablefilter.errors import IllegalOperatorError


class TestOperatorsFor:
    """Tests for operators_for function."""

    def test_text_operators_in_picker_order(self):
        """Test text operators are listed in declaration order."""
        assert [str(op) for op in operators_for(ColumnType.TEXT)] == [
            "contains",
            "doesNotContain",
            "equals",
            "doesNotEqual",
            "isEmpty",
            "isNotEmpty",
        ]

    def test_every_type_has_operators(self):
        """Test each column type exposes its own operator family."""
        assert operators_for(ColumnType.OPTION) == list(OptionOperator)
        assert operators_for(ColumnType.MULTI_OPTION) == list(MultiOptionOperator)
        assert operators_for(ColumnType.DATE) == list(DateOperator)
        assert operators_for(ColumnType.NUMBER) == list(NumberOperator)

    def test_unknown_type_raises_value_error(self):
        """Test unknown column types are programming errors."""
        with pytest.raises(ValueError, match="programming error"):
            operators_for("boolean")  # type: ignore[arg-type]


class TestDefaultOperatorFor:
    """Tests for default_operator_for function."""

    def test_defaults(self):
        """Test the operator new filters start with."""
        assert default_operator_for(ColumnType.TEXT) == TextOperator.CONTAINS
        assert default_operator_for(ColumnType.OPTION) == OptionOperator.IS
        assert default_operator_for(ColumnType.MULTI_OPTION) == MultiOptionOperator.INCLUDES_ANY
        assert default_operator_for(ColumnType.DATE) == DateOperator.IS
        assert default_operator_for(ColumnType.NUMBER) == NumberOperator.EQUALS

    def test_unknown_type_raises_value_error(self):
        """Test unknown column types are programming errors."""
        with pytest.raises(ValueError, match="Unknown column type"):
            default_operator_for("boolean")  # type: ignore[arg-type]


class TestResolveOperator:
    """Tests for resolve_operator function."""

    def test_shared_name_resolves_to_type_member(self):
        """Test 'is' and 'between' resolve to the enum of the column type."""
        assert resolve_operator(ColumnType.DATE, "is") is DateOperator.IS
        assert resolve_operator(ColumnType.OPTION, "is") is OptionOperator.IS
        assert resolve_operator(ColumnType.NUMBER, "between") is NumberOperator.BETWEEN

    def test_illegal_operator_raises_error(self):
        """Test operators of another type are rejected."""
        with pytest.raises(IllegalOperatorError, match="not valid for columns of type 'text'"):
            resolve_operator(ColumnType.TEXT, "isAnyOf")

    def test_unknown_operator_raises_error(self):
        """Test made-up operators are rejected."""
        with pytest.raises(IllegalOperatorError):
            resolve_operator(ColumnType.NUMBER, "approximately")


class TestArity:
    """Tests for operator arity."""

    def test_accepts(self):
        """Test value counts accepted by each arity."""
        assert Arity.NONE.accepts(0)
        assert not Arity.NONE.accepts(1)
        assert Arity.ONE.accepts(1)
        assert not Arity.ONE.accepts(2)
        assert Arity.TWO.accepts(2)
        assert not Arity.TWO.accepts(1)
        assert Arity.MANY.accepts(1)
        assert Arity.MANY.accepts(5)
        assert not Arity.MANY.accepts(0)

    def test_arity_of_operators(self):
        """Test arity lookups for representative operators."""
        assert arity_of(ColumnType.TEXT, TextOperator.IS_EMPTY) == Arity.NONE
        assert arity_of(ColumnType.TEXT, TextOperator.CONTAINS) == Arity.ONE
        assert arity_of(ColumnType.OPTION, OptionOperator.IS_ANY_OF) == Arity.MANY
        assert arity_of(ColumnType.DATE, "between") == Arity.TWO
        assert arity_of(ColumnType.NUMBER, "between") == Arity.TWO

    def test_every_operator_has_arity(self):
        """Test the arity table covers all legal operators."""
        for column_type in ColumnType:
            for operator in operators_for(column_type):
                assert isinstance(arity_of(column_type, operator), Arity)


class TestFilterState:
    """Tests for FilterState model."""

    def test_operator_resolved_from_string(self):
        """Test raw operator names are resolved against the type."""
        state = FilterState(column_id="eventStartDate", type="date", operator="is", values=())
        assert isinstance(state.operator, DateOperator)
        assert state.type == ColumnType.DATE

    def test_foreign_operator_rejected(self):
        """Test operators foreign to the type are rejected at construction."""
        with pytest.raises(IllegalOperatorError):
            FilterState(column_id="name", type=ColumnType.TEXT, operator="greaterThan", values=("a",))

    def test_is_complete(self):
        """Test completeness follows operator arity."""
        pending = FilterState(column_id="age", type=ColumnType.NUMBER, operator=NumberOperator.BETWEEN, values=(1,))
        complete = FilterState(column_id="age", type=ColumnType.NUMBER, operator=NumberOperator.BETWEEN, values=(1, 5))
        assert not pending.is_complete
        assert complete.is_complete

    def test_frozen(self):
        """Test filter state cannot be mutated in place."""
        state = FilterState(column_id="name", type=ColumnType.TEXT, operator=TextOperator.CONTAINS, values=("ros",))
        with pytest.raises(ValidationError):
            state.values = ("x",)  # type: ignore[misc]
