"""String and boolean shapes."""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date
from typing import Any

from .base import CoercibleShape
from .checks import IssueFactory, Message
from .constants import (
    CODE_STRING_MAX,
    CODE_STRING_MIN,
    CODE_STRING_REGEX,
    CODE_TYPE,
    MESSAGE_BOOLEAN_TYPE,
    MESSAGE_STRING_MAX,
    MESSAGE_STRING_MIN,
    MESSAGE_STRING_REGEX,
    MESSAGE_STRING_TYPE,
)
from .value_types import NEVER, ValueType, canonize, is_finite, is_number


class StringShape(CoercibleShape):
    """Shape of a ``str``."""

    def __init__(self, message: Message = None, meta: Any = None):
        super().__init__()
        self._type_issue_factory = IssueFactory(
            CODE_TYPE, MESSAGE_STRING_TYPE, message, meta, ValueType.STRING
        )

    def __repr__(self) -> str:
        return "StringShape()"

    def min(self, length: int, message: Message = None, meta: Any = None) -> StringShape:
        """Constrain the minimum string length."""
        return self._constrain(
            CODE_STRING_MIN, MESSAGE_STRING_MIN, length,
            lambda input, param: len(input) >= param, message, meta,
        )

    def max(self, length: int, message: Message = None, meta: Any = None) -> StringShape:
        """Constrain the maximum string length."""
        return self._constrain(
            CODE_STRING_MAX, MESSAGE_STRING_MAX, length,
            lambda input, param: len(input) <= param, message, meta,
        )

    def regex(self, pattern: str | re.Pattern, message: Message = None, meta: Any = None) -> StringShape:
        """Require the string to contain a match of ``pattern``."""
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        return self._constrain(
            CODE_STRING_REGEX, MESSAGE_STRING_REGEX, pattern.pattern,
            lambda input, param: pattern.search(input) is not None, message, meta,
        )

    def _is_native(self, input: Any) -> bool:
        return isinstance(input, str)

    def _coerce(self, input: Any) -> Any:
        if isinstance(input, (list, tuple)) and len(input) == 1:
            input = input[0]

        value = canonize(input)

        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool) or (is_number(value) and is_finite(value)):
            return str(value)
        if isinstance(value, date):
            return value.isoformat()
        return NEVER

    def _get_input_types(self) -> Sequence[ValueType]:
        if not self.is_coerced:
            return [ValueType.STRING]
        return [
            ValueType.STRING,
            ValueType.OBJECT,
            ValueType.NUMBER,
            ValueType.INTEGER,
            ValueType.BOOLEAN,
            ValueType.DATE,
            ValueType.ARRAY,
            ValueType.NONE,
        ]


class BooleanShape(CoercibleShape):
    """Shape of a ``bool``."""

    def __init__(self, message: Message = None, meta: Any = None):
        super().__init__()
        self._type_issue_factory = IssueFactory(
            CODE_TYPE, MESSAGE_BOOLEAN_TYPE, message, meta, ValueType.BOOLEAN
        )

    def __repr__(self) -> str:
        return "BooleanShape()"

    def _is_native(self, input: Any) -> bool:
        return isinstance(input, bool)

    def _coerce(self, input: Any) -> Any:
        if isinstance(input, (list, tuple)) and len(input) == 1:
            input = input[0]

        value = canonize(input)

        if value is None or value == "false" or (is_number(value) and value == 0):
            return False
        if value == "true" or (is_number(value) and value == 1):
            return True
        if isinstance(value, bool):
            return value
        return NEVER

    def _get_input_types(self) -> Sequence[ValueType]:
        if not self.is_coerced:
            return [ValueType.BOOLEAN]
        return [
            ValueType.BOOLEAN,
            ValueType.OBJECT,
            ValueType.STRING,
            ValueType.NUMBER,
            ValueType.INTEGER,
            ValueType.ARRAY,
            ValueType.NONE,
        ]
