"""Number shape."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from .base import CoercibleShape
from .checks import IssueFactory, Message
from .constants import (
    CODE_NUMBER_FINITE,
    CODE_NUMBER_GT,
    CODE_NUMBER_GTE,
    CODE_NUMBER_INTEGER,
    CODE_NUMBER_LT,
    CODE_NUMBER_LTE,
    CODE_NUMBER_MULTIPLE_OF,
    CODE_TYPE,
    MESSAGE_NUMBER_FINITE,
    MESSAGE_NUMBER_GT,
    MESSAGE_NUMBER_GTE,
    MESSAGE_NUMBER_INTEGER,
    MESSAGE_NUMBER_LT,
    MESSAGE_NUMBER_LTE,
    MESSAGE_NUMBER_MULTIPLE_OF,
    MESSAGE_NUMBER_TYPE,
)
from .date_shape import to_epoch_milliseconds
from .value_types import NEVER, ValueType, canonize, is_finite, is_number

_INFINITIES = {"Infinity": float("inf"), "+Infinity": float("inf"), "-Infinity": float("-inf")}


class NumberShape(CoercibleShape):
    """Shape of an ``int`` or ``float`` other than ``bool`` and NaN.

    Infinities are numbers; use ``finite()`` to reject them.
    """

    def __init__(self, message: Message = None, meta: Any = None):
        """Initialize number shape.

        Args:
            message: Message of the type issue
            meta: Metadata of the type issue
        """
        super().__init__()
        self._type_issue_factory = IssueFactory(
            CODE_TYPE, MESSAGE_NUMBER_TYPE, message, meta, ValueType.NUMBER
        )

    def __repr__(self) -> str:
        return "NumberShape()"

    @property
    def is_finite(self) -> bool:
        """True if the shape rejects infinite numbers."""
        return any(check.key in (CODE_NUMBER_FINITE, CODE_NUMBER_INTEGER) for check in self._checks)

    @property
    def is_integer(self) -> bool:
        """True if the shape only accepts integral numbers."""
        return any(check.key == CODE_NUMBER_INTEGER for check in self._checks)

    def gt(self, value: float, message: Message = None, meta: Any = None) -> NumberShape:
        """Constrain the number to be greater than ``value``."""
        return self._constrain(
            CODE_NUMBER_GT, MESSAGE_NUMBER_GT, value,
            lambda input, param: input > param, message, meta,
        )

    def gte(self, value: float, message: Message = None, meta: Any = None) -> NumberShape:
        """Constrain the number to be greater than or equal to ``value``."""
        return self._constrain(
            CODE_NUMBER_GTE, MESSAGE_NUMBER_GTE, value,
            lambda input, param: input >= param, message, meta,
        )

    def lt(self, value: float, message: Message = None, meta: Any = None) -> NumberShape:
        """Constrain the number to be less than ``value``."""
        return self._constrain(
            CODE_NUMBER_LT, MESSAGE_NUMBER_LT, value,
            lambda input, param: input < param, message, meta,
        )

    def lte(self, value: float, message: Message = None, meta: Any = None) -> NumberShape:
        """Constrain the number to be less than or equal to ``value``."""
        return self._constrain(
            CODE_NUMBER_LTE, MESSAGE_NUMBER_LTE, value,
            lambda input, param: input <= param, message, meta,
        )

    def min(self, value: float, message: Message = None, meta: Any = None) -> NumberShape:
        """Alias of ``gte``."""
        return self.gte(value, message, meta)

    def max(self, value: float, message: Message = None, meta: Any = None) -> NumberShape:
        """Alias of ``lte``."""
        return self.lte(value, message, meta)

    def positive(self, message: Message = None, meta: Any = None) -> NumberShape:
        return self.gt(0, message, meta)

    def non_negative(self, message: Message = None, meta: Any = None) -> NumberShape:
        return self.gte(0, message, meta)

    def negative(self, message: Message = None, meta: Any = None) -> NumberShape:
        return self.lt(0, message, meta)

    def non_positive(self, message: Message = None, meta: Any = None) -> NumberShape:
        return self.lte(0, message, meta)

    def multiple_of(self, divisor: float, message: Message = None, meta: Any = None) -> NumberShape:
        """Constrain the number to be a multiple of ``divisor``.

        Raises:
            ValueError: If divisor is not a positive number
        """
        if not is_number(divisor) or not divisor > 0:
            raise ValueError(f"Divisor must be a positive number, got {divisor!r}")
        return self._constrain(
            CODE_NUMBER_MULTIPLE_OF, MESSAGE_NUMBER_MULTIPLE_OF, divisor,
            lambda input, param: is_finite(input) and input % param == 0, message, meta,
        )

    def finite(self, message: Message = None, meta: Any = None) -> NumberShape:
        """Reject infinite numbers."""
        return self._constrain(
            CODE_NUMBER_FINITE, MESSAGE_NUMBER_FINITE, None,
            lambda input, param: is_finite(input), message, meta,
        )

    def integer(self, message: Message = None, meta: Any = None) -> NumberShape:
        """Accept only integral numbers, including integral floats."""
        return self._constrain(
            CODE_NUMBER_INTEGER, MESSAGE_NUMBER_INTEGER, None,
            lambda input, param: isinstance(input, int) or input.is_integer(), message, meta,
        )

    def _is_native(self, input: Any) -> bool:
        return is_number(input) and input == input

    def _coerce(self, input: Any) -> Any:
        if isinstance(input, (list, tuple)) and len(input) == 1:
            input = input[0]

        value = canonize(input)

        if value is None:
            value = 0
        elif isinstance(value, bool):
            value = int(value)
        elif isinstance(value, str):
            value = _parse_number(value)
        elif isinstance(value, date):
            value = to_epoch_milliseconds(value)

        if is_number(value) and value == value and (not self.is_finite or is_finite(value)):
            return value
        return NEVER

    def _get_input_types(self) -> Sequence[ValueType]:
        if not self.is_coerced:
            return [ValueType.NUMBER, ValueType.INTEGER]
        return [
            ValueType.NUMBER,
            ValueType.INTEGER,
            ValueType.OBJECT,
            ValueType.STRING,
            ValueType.BOOLEAN,
            ValueType.ARRAY,
            ValueType.DATE,
            ValueType.NONE,
        ]


def _parse_number(text: str) -> Any:
    """Parse a numeric string the way JSON-facing clients spell numbers.

    Blank strings are 0 and ``Infinity`` is the only spelling of infinity;
    underscores, non-ASCII digits and Python's ``inf``/``nan`` are rejected.
    """
    text = text.strip()
    if not text:
        return 0
    if text in _INFINITIES:
        return _INFINITIES[text]
    if not text.isascii() or "_" in text or any(c.isalpha() and c not in "eE" for c in text):
        return NEVER
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return NEVER
