"""Tests for value type tags and value helpers."""

import enum
import math
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction

from dataknobs_shapes.value_types import (
    NEVER,
    ValueType,
    canonize,
    get_value_type,
    is_same_value,
    to_array_index,
    unite_input_types,
)


class Color(str, enum.Enum):
    RED = "red"


class Level(enum.IntEnum):
    LOW = 1


class TestGetValueType:
    """Test runtime type tags."""

    def test_scalars(self):
        """Test tags of scalar values."""
        assert get_value_type(None) is ValueType.NONE
        assert get_value_type(True) is ValueType.BOOLEAN
        assert get_value_type(1) is ValueType.INTEGER
        assert get_value_type(1.5) is ValueType.NUMBER
        assert get_value_type("a") is ValueType.STRING
        assert get_value_type(b"a") is ValueType.BYTES

    def test_containers(self):
        """Test tags of containers."""
        assert get_value_type([1]) is ValueType.ARRAY
        assert get_value_type((1,)) is ValueType.ARRAY
        assert get_value_type({1}) is ValueType.SET
        assert get_value_type(frozenset()) is ValueType.SET
        assert get_value_type({"a": 1}) is ValueType.OBJECT

    def test_dates_functions_and_awaitables(self):
        """Test tags of dates, callables and awaitables."""

        async def coroutine_function():
            return 1

        coroutine = coroutine_function()
        try:
            assert get_value_type(coroutine) is ValueType.AWAITABLE
        finally:
            coroutine.close()

        assert get_value_type(date(2020, 1, 1)) is ValueType.DATE
        assert get_value_type(datetime(2020, 1, 1)) is ValueType.DATE
        assert get_value_type(len) is ValueType.FUNCTION
        assert get_value_type(object()) is ValueType.OBJECT

    def test_enum_members(self):
        """Test that primitive enum members are tagged by their primitive."""
        assert get_value_type(Level.LOW) is ValueType.INTEGER
        assert get_value_type(Color.RED) is ValueType.STRING


class TestUniteInputTypes:
    """Test input type normalization."""

    def test_dedupes_in_order(self):
        """Test duplicates are removed keeping the first occurrence."""
        result = unite_input_types([ValueType.STRING], [ValueType.NUMBER, ValueType.STRING])
        assert result == [ValueType.STRING, ValueType.NUMBER]

    def test_any_absorbs(self):
        """Test ANY absorbs every other tag."""
        assert unite_input_types([ValueType.STRING, ValueType.ANY]) == [ValueType.ANY]

    def test_never_is_dropped(self):
        """Test NEVER is erased unless nothing else remains."""
        assert unite_input_types([ValueType.NEVER], [ValueType.DATE]) == [ValueType.DATE]
        assert unite_input_types([ValueType.NEVER]) == [ValueType.NEVER]
        assert unite_input_types() == [ValueType.NEVER]


class TestCanonize:
    """Test reduction of wrapped primitives."""

    def test_numeric_wrappers(self):
        """Test Decimal and Fraction become floats."""
        assert canonize(Decimal("1.5")) == 1.5
        assert type(canonize(Decimal("1.5"))) is float
        assert canonize(Fraction(1, 4)) == 0.25

    def test_enum_members(self):
        """Test enum members become plain primitives."""
        assert canonize(Color.RED) == "red"
        assert type(canonize(Color.RED)) is str
        assert canonize(Level.LOW) == 1
        assert type(canonize(Level.LOW)) is int

    def test_other_values_unchanged(self):
        """Test that other values are returned as is."""
        value = [1]
        assert canonize(value) is value
        assert canonize(True) is True
        assert canonize(None) is None


class TestIsSameValue:
    """Test literal equality."""

    def test_numbers(self):
        """Test numbers compare by value."""
        assert is_same_value(1, 1.0)
        assert is_same_value(math.nan, math.nan)
        assert not is_same_value(1, 2)

    def test_booleans_are_not_numbers(self):
        """Test True never equals 1."""
        assert not is_same_value(True, 1)
        assert not is_same_value(0, False)
        assert is_same_value(True, True)

    def test_strings_and_others(self):
        """Test strings and other values."""
        assert is_same_value("red", Color.RED)
        assert is_same_value([1], [1])
        assert not is_same_value(1, "1")


class TestToArrayIndex:
    """Test array index conversion."""

    def test_valid_indices(self):
        """Test integer, float and string indices."""
        assert to_array_index(0) == 0
        assert to_array_index(2.0) == 2
        assert to_array_index("12") == 12

    def test_invalid_indices(self):
        """Test keys that are not indices."""
        assert to_array_index(-1) == -1
        assert to_array_index(1.5) == -1
        assert to_array_index("012") == -1
        assert to_array_index("a") == -1
        assert to_array_index(True) == -1
        assert to_array_index(None) == -1

    def test_never_sentinel(self):
        """Test the sentinel is a distinct singleton."""
        assert NEVER is not None
        assert repr(NEVER) == "NEVER"
