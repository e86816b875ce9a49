"""Runtime value type tags and value helpers shared by all shapes.

Shapes declare the value types they accept as a list of ``ValueType`` tags.
The union shape uses those declarations to route an input only to the
candidates that can possibly accept it.

Example:
    ```python
    from dataknobs_shapes.value_types import ValueType, get_value_type

    get_value_type(1)        # ValueType.INTEGER
    get_value_type(1.5)      # ValueType.NUMBER
    get_value_type([1, 2])   # ValueType.ARRAY
    get_value_type({"a": 1}) # ValueType.OBJECT
    ```
"""

from __future__ import annotations

import inspect
import math
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any


class ValueType(Enum):
    """Tags for runtime value types.

    ``ANY`` and ``NEVER`` never describe a value; they only appear in declared
    input type lists. ``ANY`` means every value is accepted and ``NEVER``
    means no value is.
    """

    ANY = "any"
    NEVER = "never"
    NONE = "none"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    SET = "set"
    DATE = "date"
    AWAITABLE = "awaitable"
    FUNCTION = "function"
    OBJECT = "object"

    def __repr__(self) -> str:
        return f"ValueType.{self.name}"


class _Never:
    """Type of the ``NEVER`` sentinel."""

    def __repr__(self) -> str:
        return "NEVER"

    def __reduce__(self) -> str:
        return "NEVER"


# Returned by coercion hooks when a value cannot be coerced
NEVER = _Never()


def get_value_type(value: Any) -> ValueType:
    """Return the runtime type tag of a value."""
    if value is None:
        return ValueType.NONE
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, int):
        return ValueType.INTEGER
    if isinstance(value, float):
        return ValueType.NUMBER
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, (bytes, bytearray)):
        return ValueType.BYTES
    if isinstance(value, (list, tuple)):
        return ValueType.ARRAY
    if isinstance(value, (set, frozenset)):
        return ValueType.SET
    if isinstance(value, date):
        return ValueType.DATE
    if inspect.isawaitable(value):
        return ValueType.AWAITABLE
    if callable(value):
        return ValueType.FUNCTION
    return ValueType.OBJECT


def unite_input_types(*type_lists: Iterable[ValueType]) -> list[ValueType]:
    """Combine declared input types into a normalized list.

    ``ANY`` absorbs every other tag, ``NEVER`` is dropped unless nothing else
    remains, and duplicates are removed keeping the first occurrence.
    """
    types: list[ValueType] = []

    for type_list in type_lists:
        for value_type in type_list:
            if value_type is ValueType.ANY:
                return [ValueType.ANY]
            if value_type is not ValueType.NEVER and value_type not in types:
                types.append(value_type)

    return types or [ValueType.NEVER]


def canonize(value: Any) -> Any:
    """Reduce a wrapped primitive to the builtin primitive it carries.

    Instances of subclasses of ``bool``, ``int``, ``float`` and ``str`` (for
    example ``IntEnum`` and ``StrEnum`` members, which are reduced to their
    value) become plain builtins, and
    ``Decimal`` and ``Fraction`` become ``float``. Anything else is returned
    unchanged.
    """
    if isinstance(value, (Decimal, Fraction)):
        return float(value)

    for primitive in (bool, int, float, str):
        if isinstance(value, primitive):
            if type(value) is primitive:
                return value
            if isinstance(value, Enum):
                value = value.value
            return primitive(value)

    return value


def is_number(value: Any) -> bool:
    """Return True for ``int`` and ``float`` values other than ``bool``."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite(value: Any) -> bool:
    """Return True if a number is neither infinite nor NaN."""
    return isinstance(value, int) or math.isfinite(value)


def is_same_value(a: Any, b: Any) -> bool:
    """Literal equality used by constant and enum shapes.

    Numbers compare by value across ``int`` and ``float``, strings compare
    by value across ``str`` subclasses, NaN equals NaN, and everything else
    must share its type and compare equal. ``True`` never equals ``1``.
    """
    if a is b:
        return True
    if is_number(a) and is_number(b):
        return a == b or (a != a and b != b)
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return type(a) is type(b) and a == b


def to_array_index(key: Any) -> int:
    """Convert a key to a non-negative array index, or return -1.

    Integers and integral floats are accepted as they are; strings must be
    the canonical decimal form of an index (``"0"``, ``"12"``, not ``"012"``).
    """
    if isinstance(key, bool):
        return -1
    if isinstance(key, int):
        return key if key >= 0 else -1
    if isinstance(key, float):
        return int(key) if key.is_integer() and key >= 0 else -1
    if isinstance(key, str) and key.isdecimal() and key.isascii():
        index = int(key)
        return index if str(index) == key else -1
    return -1
