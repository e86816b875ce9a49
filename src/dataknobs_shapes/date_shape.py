"""Date shape."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time, timezone
from typing import Any

from .base import CoercibleShape
from .checks import IssueFactory, Message
from .constants import (
    CODE_DATE_MAX,
    CODE_DATE_MIN,
    CODE_TYPE,
    MESSAGE_DATE_MAX,
    MESSAGE_DATE_MIN,
    MESSAGE_DATE_TYPE,
)
from .value_types import NEVER, ValueType, canonize, is_number

# Formats tried after ISO 8601
DATE_FORMATS = [
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%dT%H:%M:%S.%f',
    '%Y/%m/%d %H:%M:%S',
    '%Y/%m/%d',
    '%m/%d/%Y',
    '%m/%d/%Y %H:%M:%S',
    '%d-%m-%Y',
]


class DateShape(CoercibleShape):
    """Shape of a ``date`` or ``datetime``.

    Coercion parses strings (ISO 8601 first, then a list of common formats)
    and reads numbers as milliseconds since the epoch, in UTC.
    """

    def __init__(self, message: Message = None, meta: Any = None):
        """Initialize date shape.

        Args:
            message: Message of the type issue
            meta: Metadata of the type issue
        """
        super().__init__()
        self._type_issue_factory = IssueFactory(
            CODE_TYPE, MESSAGE_DATE_TYPE, message, meta, ValueType.DATE
        )

    def __repr__(self) -> str:
        return "DateShape()"

    def min(self, value: date, message: Message = None, meta: Any = None) -> DateShape:
        """Constrain the date to be after or equal to ``value``."""
        return self._constrain(
            CODE_DATE_MIN, MESSAGE_DATE_MIN, value,
            lambda input, param: _to_comparable(input) >= _to_comparable(param), message, meta,
        )

    def max(self, value: date, message: Message = None, meta: Any = None) -> DateShape:
        """Constrain the date to be before or equal to ``value``."""
        return self._constrain(
            CODE_DATE_MAX, MESSAGE_DATE_MAX, value,
            lambda input, param: _to_comparable(input) <= _to_comparable(param), message, meta,
        )

    def _is_native(self, input: Any) -> bool:
        return isinstance(input, date)

    def _coerce(self, input: Any) -> Any:
        if isinstance(input, (list, tuple)) and len(input) == 1:
            input = input[0]
            if isinstance(input, date):
                return input

        value = canonize(input)

        if isinstance(value, str):
            return _parse_date(value)

        if is_number(value):
            try:
                return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                return NEVER

        return NEVER

    def _get_input_types(self) -> Sequence[ValueType]:
        if not self.is_coerced:
            return [ValueType.DATE]
        return [
            ValueType.DATE,
            ValueType.OBJECT,
            ValueType.STRING,
            ValueType.NUMBER,
            ValueType.INTEGER,
            ValueType.ARRAY,
        ]


def _parse_date(text: str) -> Any:
    text = text.strip()

    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    return NEVER


def _to_comparable(value: date) -> datetime:
    """Convert a date or datetime to an aware datetime; naive values are UTC."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time())
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def to_epoch_milliseconds(value: date) -> float:
    """Return milliseconds since the epoch; naive values are UTC."""
    return _to_comparable(value).timestamp() * 1000
