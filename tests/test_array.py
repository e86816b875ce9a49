"""Tests for ArrayShape."""

import pytest

from dataknobs_shapes import (
    ArrayShape,
    AsyncShapeError,
    Issue,
    NumberShape,
    Shape,
    StringShape,
    ValueType,
)


class TestArrayShape:
    """Test array validation."""

    def test_rest_shape_fast_mode(self):
        """Test the first failing element is reported with its index."""
        shape = ArrayShape([], NumberShape())
        assert shape.validate([1, "a", 3]).issues == [
            Issue(code="type", path=[1], input="a", message="Must be a number", param=ValueType.NUMBER)
        ]

    def test_rest_shape_verbose_mode(self):
        """Test every failing element is reported in verbose mode."""
        shape = ArrayShape(None, NumberShape())
        issues = shape.validate([1, "a", 3, "b"], verbose=True).issues
        assert [issue.path for issue in issues] == [[1], [3]]

    def test_identity_preserved(self):
        """Test an unchanged input is returned by identity."""
        value = [1, 2, 3]
        assert ArrayShape(None, NumberShape()).parse(value) is value

        value = (1, 2)
        assert ArrayShape(None, NumberShape()).parse(value) is value

    def test_copy_on_write(self):
        """Test a changed element produces a new list."""
        value = ["1", 2, "3"]
        result = ArrayShape(None, NumberShape().coerce()).parse(value)
        assert result == [1, 2, 3]
        assert result is not value
        assert value == ["1", 2, "3"]

    def test_tuple_stays_tuple(self):
        """Test a changed tuple is returned as a tuple."""
        assert ArrayShape(None, NumberShape().coerce()).parse(("1", 2)) == (1, 2)

    def test_any_array(self):
        """Test an array shape without element shapes."""
        value = [1, "a"]
        assert ArrayShape().parse(value) is value
        assert ArrayShape().validate("a").issues == [
            Issue(code="type", path=[], input="a", message="Must be an array", param=ValueType.ARRAY)
        ]

    def test_nested_paths(self):
        """Test paths accumulate outer to inner."""
        shape = ArrayShape(None, ArrayShape(None, NumberShape()))
        assert shape.validate([[1], [2, "x"]]).issues[0].path == [1, 1]

    def test_non_shape_child(self):
        """Test children must be shapes."""
        with pytest.raises(TypeError):
            ArrayShape(None, "number")


class TestTupleShape:
    """Test tuple validation."""

    def test_positional_shapes(self):
        """Test each position has its own shape."""
        shape = ArrayShape([NumberShape(), StringShape()])
        assert shape.parse([1, "a"]) == [1, "a"]
        assert shape.validate([1, 2]).issues[0].path == [1]

    def test_arity(self):
        """Test a wrong length is a single tuple issue."""
        shape = ArrayShape([NumberShape(), StringShape()])
        assert shape.validate([1]).issues == [
            Issue(code="tuple", path=[], input=[1], message="Must be a tuple of length 2", param=2)
        ]
        assert shape.validate([1, "a", "b"]).issues[0].code == "tuple"
        assert shape.validate([1, "a", "b"]).issues[0].param == 2

    def test_non_array_is_type_issue(self):
        """Test non-array input is a type issue, distinct from an arity issue."""
        shape = ArrayShape([NumberShape()])
        assert shape.validate("abc").issues == [
            Issue(code="type", path=[], input="abc", message="Must be an array", param=ValueType.ARRAY)
        ]
        assert shape.validate([]).issues[0].code == "tuple"
        assert ArrayShape([NumberShape()], StringShape()).validate(1).issues[0].code == "type"

    def test_positional_and_rest(self):
        """Test positional shapes followed by rest elements."""
        shape = ArrayShape([NumberShape()], StringShape())
        assert shape.parse([1, "a", "b"]) == [1, "a", "b"]
        assert shape.validate([]).issues[0].param == 1
        assert shape.validate([1, "a", 2]).issues[0].path == [2]

    def test_at(self):
        """Test child lookup by index."""
        first, second, rest = NumberShape(), StringShape(), Shape()
        shape = ArrayShape([first, second], rest)
        assert shape.at(0) is first
        assert shape.at("1") is second
        assert shape.at(5) is rest
        assert shape.at(-1) is None
        assert shape.at("a") is None
        assert ArrayShape([first]).at(3) is None


class TestArrayChecks:
    """Test array length checks."""

    def test_min(self):
        """Test the minimum length."""
        assert ArrayShape().min(2).validate([1]).issues == [
            Issue(
                code="array_min_length",
                path=[],
                input=[1],
                message="Must have the minimum length of 2",
                param=2,
            )
        ]

    def test_max_and_length(self):
        """Test the maximum and exact length."""
        assert ArrayShape().max(1).validate([1, 2]).issues[0].code == "array_max_length"
        shape = ArrayShape().length(2)
        assert shape.parse([1, 2]) == [1, 2]
        assert shape.validate([1]).issues[0].code == "array_min_length"
        assert shape.validate([1, 2, 3]).issues[0].code == "array_max_length"

    def test_invalid_length(self):
        """Test negative lengths are rejected."""
        with pytest.raises(ValueError):
            ArrayShape().min(-1)

    def test_checks_skipped_after_element_issues(self):
        """Test safe checks do not run if an element failed."""
        shape = ArrayShape(None, NumberShape()).min(5)
        issues = shape.validate([1, "a"], verbose=True).issues
        assert [issue.code for issue in issues] == ["type"]

    def test_rest_keeps_unsafe_checks(self):
        """Test rest() carries over only unsafe checks."""
        shape = (
            ArrayShape([NumberShape()])
            .min(1)
            .check(lambda value, param, options: None, key="unsafe", unsafe=True)
            .coerce()
        )
        rested = shape.rest(StringShape())
        assert [check.key for check in rested.checks] == ["unsafe"]
        assert rested.rest_shape is not None
        assert rested.is_coerced


class TestUnsafeChecks:
    """Test unsafe checks after element issues."""

    def test_unsafe_issues_follow_element_issues(self):
        """Test unsafe check issues are appended after element issues."""
        seen = []

        def check(value, param, options):
            seen.append(list(value))
            return Issue(code="unsafe")

        shape = ArrayShape(None, NumberShape().coerce()).check(check, unsafe=True)
        issues = shape.validate(["1", "a"], verbose=True).issues

        assert [issue.code for issue in issues] == ["type", "unsafe"]
        assert issues[0].path == [1]
        # Valid elements are already converted, invalid ones are left as is
        assert seen == [[1, "a"]]

    def test_fast_mode_returns_element_issue(self):
        """Test unsafe checks do not run in fast mode after an element issue."""
        seen = []
        shape = ArrayShape(None, NumberShape()).check(
            lambda value, param, options: seen.append(value), unsafe=True
        )
        assert [issue.code for issue in shape.validate([1, "a"]).issues] == ["type"]
        assert seen == []


class TestArrayCoercion:
    """Test array coercion."""

    def test_scalars_are_wrapped(self):
        """Test non-iterable values and strings become single elements."""
        shape = ArrayShape(None, Shape()).coerce()
        assert shape.parse("aaa") == ["aaa"]
        assert shape.parse(1) == [1]
        assert shape.parse({"a": 1}) == [{"a": 1}]

    def test_array_like(self):
        """Test mappings with a length are read by index."""
        shape = ArrayShape(None, StringShape()).coerce()
        assert shape.parse({0: "a", 1: "b", "length": 2}) == ["a", "b"]
        assert shape.parse({"0": "a", "length": 1}) == ["a"]

    def test_iterables(self):
        """Test iterables are materialized."""
        shape = ArrayShape(None, StringShape()).coerce()
        assert shape.parse(value for value in "ab") == ["a", "b"]
        assert shape.parse(frozenset(["a"])) == ["a"]

    def test_coerced_option(self):
        """Test per-call coercion reaches the elements."""
        assert ArrayShape(None, NumberShape()).parse("1", coerced=True) == [1]

    def test_input_types(self):
        """Test declared input types."""
        assert ArrayShape(None, NumberShape()).input_types == [ValueType.ARRAY]
        assert ArrayShape(None, NumberShape()).coerce().input_types == [
            ValueType.NUMBER,
            ValueType.INTEGER,
            ValueType.OBJECT,
            ValueType.SET,
            ValueType.ARRAY,
        ]
        assert ArrayShape([NumberShape(), NumberShape()]).coerce().input_types == [
            ValueType.OBJECT,
            ValueType.SET,
            ValueType.ARRAY,
        ]
        assert ArrayShape().coerce().input_types == [ValueType.ANY]


class TestArrayAsync:
    """Test async detection."""

    def test_async_child(self, async_shape):
        """Test an async element shape makes the array async."""
        shape = ArrayShape(None, async_shape)
        assert shape.is_async
        assert not ArrayShape(None, NumberShape()).is_async
        with pytest.raises(AsyncShapeError):
            shape.parse([1])

    @pytest.mark.asyncio
    async def test_async_identity(self, async_shape):
        """Test identity is preserved on the async path."""
        value = [1, 2]
        assert await ArrayShape([async_shape], NumberShape()).parse_async(value) is value
