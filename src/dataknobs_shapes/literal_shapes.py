"""Shapes accepting a fixed set of values."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import Any

from .base import Shape
from .checks import IssueFactory, Message
from .constants import CODE_CONST, CODE_ENUM, CODE_NEVER, MESSAGE_CONST, MESSAGE_ENUM, MESSAGE_NEVER
from .result import ApplyOptions, Result
from .value_types import ValueType, get_value_type, is_same_value, unite_input_types


class ConstShape(Shape):
    """Shape of a single literal value."""

    def __init__(self, value: Any, message: Message = None, meta: Any = None):
        super().__init__()
        self.value = value
        self._issue_factory = IssueFactory(CODE_CONST, MESSAGE_CONST, message, meta, value)

    def __repr__(self) -> str:
        return f"ConstShape({self.value!r})"

    @property
    def literal_values(self) -> tuple[Any, ...]:
        return (self.value,)

    def _get_input_types(self) -> Sequence[ValueType]:
        value_type = get_value_type(self.value)
        if value_type in (ValueType.INTEGER, ValueType.NUMBER):
            return [ValueType.INTEGER, ValueType.NUMBER]
        return [value_type]

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        if not is_same_value(input, self.value):
            return self._issue_factory(input)
        return super()._apply(input, options)


class EnumShape(Shape):
    """Shape of one of several literal values.

    ``values`` is a sequence of literals or an ``enum.Enum`` class, in which
    case the member values are accepted.
    """

    def __init__(self, values: Sequence[Any] | type[enum.Enum], message: Message = None, meta: Any = None):
        """Initialize enum shape.

        Args:
            values: Accepted values, or an Enum class
            message: Message of the enum issue
            meta: Metadata of the enum issue

        Raises:
            ValueError: If there are no values
        """
        super().__init__()

        if isinstance(values, type) and issubclass(values, enum.Enum):
            values = [member.value for member in values]

        self.values = tuple(values)
        if not self.values:
            raise ValueError("Enum requires at least one value")

        self._issue_factory = IssueFactory(CODE_ENUM, MESSAGE_ENUM, message, meta, list(self.values))

    def __repr__(self) -> str:
        return f"EnumShape({list(self.values)!r})"

    @property
    def literal_values(self) -> tuple[Any, ...]:
        return self.values

    def _get_input_types(self) -> Sequence[ValueType]:
        return unite_input_types(*(ConstShape(value).input_types for value in self.values))

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        if not any(is_same_value(input, value) for value in self.values):
            return self._issue_factory(input)
        return super()._apply(input, options)


class NeverShape(Shape):
    """Shape that rejects every value."""

    def __init__(self, message: Message = None, meta: Any = None):
        super().__init__()
        self._issue_factory = IssueFactory(CODE_NEVER, MESSAGE_NEVER, message, meta)

    def __repr__(self) -> str:
        return "NeverShape()"

    def _get_input_types(self) -> Sequence[ValueType]:
        return [ValueType.NEVER]

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        return self._issue_factory(input)
