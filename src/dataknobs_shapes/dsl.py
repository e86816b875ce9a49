"""Factory functions for building shapes.

Example:
    ```python
    from dataknobs_shapes import dsl as d

    user = d.object_({
        "name": d.string().min(1),
        "age": d.integer().coerce().min(0),
        "tags": d.array(d.string()),
    })
    user.parse({"name": "Ann", "age": "42", "tags": []})
    ```
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .array_shape import ArrayShape
from .awaitable_shape import AwaitableShape
from .base import Shape
from .checks import Message
from .date_shape import DateShape
from .integer_shape import IntegerShape
from .lazy_shape import LazyShape
from .literal_shapes import ConstShape, EnumShape, NeverShape
from .number_shape import NumberShape
from .object_shape import ObjectShape
from .scalar_shapes import BooleanShape, StringShape
from .set_shape import SetShape
from .union_shape import UnionShape


def any_(callback: Callable[[Any], Any] | None = None) -> Shape:
    """Shape accepting any value, optionally refined by a predicate."""
    shape = Shape()
    return shape.refine(callback) if callback is not None else shape


def const(value: Any, message: Message = None, meta: Any = None) -> ConstShape:
    return ConstShape(value, message, meta)


def enum_(values: Sequence[Any] | type[enum.Enum], message: Message = None, meta: Any = None) -> EnumShape:
    return EnumShape(values, message, meta)


def never(message: Message = None, meta: Any = None) -> NeverShape:
    return NeverShape(message, meta)


def number(message: Message = None, meta: Any = None) -> NumberShape:
    return NumberShape(message, meta)


def integer(message: Message = None, meta: Any = None) -> IntegerShape:
    return IntegerShape(message, meta)


def string(message: Message = None, meta: Any = None) -> StringShape:
    return StringShape(message, meta)


def boolean(message: Message = None, meta: Any = None) -> BooleanShape:
    return BooleanShape(message, meta)


def date(message: Message = None, meta: Any = None) -> DateShape:
    return DateShape(message, meta)


def array(shape: Shape | None = None, message: Message = None, meta: Any = None) -> ArrayShape:
    """Shape of a list or tuple whose elements conform ``shape``."""
    return ArrayShape(None, shape, message, meta)


def tuple_(
    shapes: Sequence[Shape],
    rest: Shape | None = None,
    message: Message = None,
    meta: Any = None,
) -> ArrayShape:
    """Shape of a tuple with positional ``shapes`` and optional ``rest`` elements."""
    return ArrayShape(shapes, rest, message, meta)


def set_(shape: Shape | None = None, message: Message = None, meta: Any = None) -> SetShape:
    return SetShape(shape, message, meta)


def object_(shapes: Mapping[Any, Shape], message: Message = None, meta: Any = None) -> ObjectShape:
    return ObjectShape(shapes, message, meta)


def union(*shapes: Shape, message: Message = None, meta: Any = None) -> UnionShape:
    """Shape accepted if any of ``shapes`` accepts the input."""
    return UnionShape(shapes, message, meta)


def lazy(provider: Callable[[], Shape]) -> LazyShape:
    return LazyShape(provider)


def awaitable(shape: Shape | None = None, message: Message = None, meta: Any = None) -> AwaitableShape:
    return AwaitableShape(shape, message, meta)
