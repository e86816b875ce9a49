"""Array and tuple shape."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from .base import CoercibleShape, Shape
from .checks import IssueFactory, Message
from .collection import CollectionShape, ElementFold
from .constants import (
    CODE_ARRAY_MAX,
    CODE_ARRAY_MIN,
    CODE_TUPLE,
    CODE_TYPE,
    MESSAGE_ARRAY_MAX,
    MESSAGE_ARRAY_MIN,
    MESSAGE_ARRAY_TYPE,
    MESSAGE_TUPLE,
)
from .result import ApplyOptions, Issue
from .value_types import NEVER, ValueType, canonize, to_array_index

# Value types an array-like input may come as
COLLECTION_INPUT_TYPES = [ValueType.OBJECT, ValueType.SET, ValueType.ARRAY]


class ArrayShape(CollectionShape, CoercibleShape):
    """Shape of a list or tuple.

    With positional ``shapes`` the shape is a tuple: the input must have at
    least that many elements, and exactly that many without a
    ``rest_shape``. Elements past the positional ones are validated by the
    rest shape. Without either, any list or tuple is accepted as is.
    """

    def __init__(
        self,
        shapes: Sequence[Shape] | None = None,
        rest_shape: Shape | None = None,
        message: Message = None,
        meta: Any = None,
    ):
        """Initialize array shape.

        Args:
            shapes: Positional element shapes, or None
            rest_shape: Shape of the remaining elements, or None
            message: Message of the type issue
            meta: Metadata of the type issue

        Raises:
            TypeError: If a child is not a Shape
        """
        super().__init__()

        if shapes is not None:
            shapes = tuple(shapes)
            for shape in shapes:
                _require_shape(shape)
        if rest_shape is not None:
            _require_shape(rest_shape)

        self.shapes: tuple[Shape, ...] | None = shapes
        self.rest_shape = rest_shape
        self._message = message
        self._meta = meta

        self._type_issue_factory = IssueFactory(
            CODE_TYPE, MESSAGE_ARRAY_TYPE, message, meta, ValueType.ARRAY
        )
        self._tuple_issue_factory = IssueFactory(
            CODE_TUPLE, MESSAGE_TUPLE, message, meta, len(shapes) if shapes is not None else 0
        )

    def __repr__(self) -> str:
        return f"ArrayShape(shapes={self.shapes!r}, rest_shape={self.rest_shape!r})"

    def at(self, key: Any) -> Shape | None:
        index = to_array_index(key)
        if index == -1:
            return None
        if self.shapes is not None and index < len(self.shapes):
            return self.shapes[index]
        return self.rest_shape

    def rest(self, rest_shape: Shape | None) -> ArrayShape:
        """Return an array shape with rest elements constrained by ``rest_shape``.

        Only unsafe checks are carried over to the new shape.
        """
        shape = ArrayShape(self.shapes, rest_shape, self._message, self._meta)
        shape.is_coerced = self.is_coerced
        unsafe_checks = [check for check in self._checks if check.unsafe]
        return shape._with_checks(unsafe_checks) if unsafe_checks else shape

    def min(self, length: int, message: Message = None, meta: Any = None) -> ArrayShape:
        """Constrain the minimum array length."""
        _require_length(length)
        return self._constrain(
            CODE_ARRAY_MIN, MESSAGE_ARRAY_MIN, length,
            lambda value, param: len(value) >= param, message, meta,
        )

    def max(self, length: int, message: Message = None, meta: Any = None) -> ArrayShape:
        """Constrain the maximum array length."""
        _require_length(length)
        return self._constrain(
            CODE_ARRAY_MAX, MESSAGE_ARRAY_MAX, length,
            lambda value, param: len(value) <= param, message, meta,
        )

    def length(self, length: int, message: Message = None, meta: Any = None) -> ArrayShape:
        """Constrain the exact array length."""
        return self.min(length, message, meta).max(length, message, meta)

    def _is_native(self, input: Any) -> bool:
        return isinstance(input, (list, tuple))

    def _coerce(self, input: Any) -> Any:
        return coerce_to_list(input)

    def _child_shapes(self) -> Iterator[Shape]:
        if self.shapes is not None:
            yield from self.shapes
        if self.rest_shape is not None:
            yield self.rest_shape

    def _get_input_types(self) -> Sequence[ValueType]:
        if not self.is_coerced:
            return [ValueType.ARRAY]

        if self.shapes is not None:
            if len(self.shapes) > 1:
                return COLLECTION_INPUT_TYPES
            if len(self.shapes) == 1:
                return self.shapes[0].input_types + COLLECTION_INPUT_TYPES

        if self.rest_shape is not None:
            return self.rest_shape.input_types + COLLECTION_INPUT_TYPES

        return [ValueType.ANY]

    def _prepare(self, input: Any, options: ApplyOptions) -> ElementFold | list[Issue]:
        values = self._coerce_input(input, options)

        if values is NEVER:
            return self._type_issue_factory(input)

        if self.shapes is not None:
            count = len(self.shapes)
            if len(values) < count or (self.rest_shape is None and len(values) != count):
                return self._tuple_issue_factory(input)

        coerced = values is not input
        return ElementFold(input, values, owned=coerced, changed=coerced)

    def _iter_element_shapes(self, fold: ElementFold) -> Iterator[tuple[int, Shape]]:
        shapes = self.shapes or ()
        if not shapes and self.rest_shape is None:
            return

        for i in range(len(fold.values)):
            yield i, shapes[i] if i < len(shapes) else self.rest_shape

    def _finalize(self, fold: ElementFold) -> Any:
        if isinstance(fold.input, tuple):
            return tuple(fold.output)
        return fold.output


def coerce_to_list(value: Any) -> list[Any]:
    """Materialize a value as a list of elements.

    Strings and bytes are single elements. A mapping with an integer
    ``"length"`` is read as an array-like object; its elements are looked up
    by integer index, then by the index's string form. Other mappings are
    single elements, other iterables are materialized, and anything else is
    wrapped.
    """
    value = canonize(value)

    if isinstance(value, (str, bytes, bytearray)):
        return [value]

    if isinstance(value, Mapping):
        length = value.get("length")
        if isinstance(length, int) and not isinstance(length, bool) and length >= 0:
            return [_read_index(value, i) for i in range(length)]
        return [value]

    if isinstance(value, Iterable):
        return list(value)

    return [value]


def _read_index(value: Mapping, index: int) -> Any:
    if index in value:
        return value[index]
    return value.get(str(index))


def _require_shape(shape: Any) -> None:
    if not isinstance(shape, Shape):
        raise TypeError(f"Expected a Shape, got {type(shape).__name__}")


def _require_length(length: Any) -> None:
    if not isinstance(length, int) or isinstance(length, bool) or length < 0:
        raise ValueError(f"Length must be a non-negative integer, got {length!r}")
