"""Arbitrary precision integer shape."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from .base import CoercibleShape
from .checks import IssueFactory, Message
from .constants import (
    CODE_INTEGER_MAX,
    CODE_INTEGER_MIN,
    CODE_TYPE,
    MAX_SAFE_INTEGER,
    MESSAGE_INTEGER_MAX,
    MESSAGE_INTEGER_MIN,
    MESSAGE_INTEGER_TYPE,
)
from .value_types import NEVER, ValueType, canonize


class IntegerShape(CoercibleShape):
    """Shape of an ``int`` other than ``bool``.

    Coercion accepts strings in decimal, ``0x``, ``0o`` and ``0b`` notation,
    and floats only if they are integral and within the range a float
    represents exactly. Blank strings are 0; digit separators are rejected.
    """

    def __init__(self, message: Message = None, meta: Any = None):
        """Initialize integer shape.

        Args:
            message: Message of the type issue
            meta: Metadata of the type issue
        """
        super().__init__()
        self._type_issue_factory = IssueFactory(
            CODE_TYPE, MESSAGE_INTEGER_TYPE, message, meta, ValueType.INTEGER
        )

    def __repr__(self) -> str:
        return "IntegerShape()"

    def min(self, value: int, message: Message = None, meta: Any = None) -> IntegerShape:
        """Constrain the integer to be greater than or equal to ``value``."""
        return self._constrain(
            CODE_INTEGER_MIN, MESSAGE_INTEGER_MIN, value,
            lambda input, param: input >= param, message, meta,
        )

    def max(self, value: int, message: Message = None, meta: Any = None) -> IntegerShape:
        """Constrain the integer to be less than or equal to ``value``."""
        return self._constrain(
            CODE_INTEGER_MAX, MESSAGE_INTEGER_MAX, value,
            lambda input, param: input <= param, message, meta,
        )

    def _is_native(self, input: Any) -> bool:
        return isinstance(input, int) and not isinstance(input, bool)

    def _coerce(self, input: Any) -> Any:
        if isinstance(input, (list, tuple)) and len(input) == 1:
            input = input[0]

        value = canonize(input)

        if value is None:
            return 0
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            return _parse_integer(value)
        if isinstance(value, float):
            if math.isfinite(value) and value.is_integer() and abs(value) <= MAX_SAFE_INTEGER:
                return int(value)
        return NEVER

    def _get_input_types(self) -> Sequence[ValueType]:
        if not self.is_coerced:
            return [ValueType.INTEGER]
        return [
            ValueType.INTEGER,
            ValueType.STRING,
            ValueType.NUMBER,
            ValueType.BOOLEAN,
            ValueType.ARRAY,
            ValueType.NONE,
            ValueType.OBJECT,
        ]


def _parse_integer(text: str) -> Any:
    text = text.strip()
    if not text:
        return 0
    if not text.isascii() or "_" in text:
        return NEVER

    sign = 1
    if text[:1] in ("-", "+"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    base = 10
    # Handle hex, octal, binary
    if text[:2] in ("0x", "0X"):
        base, text = 16, text[2:]
    elif text[:2] in ("0o", "0O"):
        base, text = 8, text[2:]
    elif text[:2] in ("0b", "0B"):
        base, text = 2, text[2:]

    if text[:1] in ("-", "+") or text != text.strip():
        return NEVER

    try:
        return sign * int(text, base)
    except ValueError:
        return NEVER
