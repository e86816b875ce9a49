"""Awaitable shape."""

from __future__ import annotations

import inspect
from collections.abc import Sequence
from typing import Any

from .base import CoercibleShape, Shape, apply_shape_async
from .checks import IssueFactory, Message
from .constants import CODE_TYPE, MESSAGE_AWAITABLE_TYPE
from .exceptions import AsyncShapeError
from .result import ApplyOptions, Ok, Result
from .value_types import ValueType


class AwaitableShape(CoercibleShape):
    """Shape of an awaitable whose resolved value conforms ``shape``.

    The shape is always async. The output is the resolved value. When coerced,
    a value that is not awaitable is treated as already resolved.
    """

    def __init__(self, shape: Shape | None = None, message: Message = None, meta: Any = None):
        """Initialize awaitable shape.

        Args:
            shape: Shape of the resolved value; any value is accepted if None
            message: Message of the type issue
            meta: Metadata of the type issue
        """
        super().__init__()
        self.shape = shape if shape is not None else Shape()
        self._type_issue_factory = IssueFactory(
            CODE_TYPE, MESSAGE_AWAITABLE_TYPE, message, meta, ValueType.AWAITABLE
        )

    def __repr__(self) -> str:
        return f"AwaitableShape({self.shape!r})"

    def _is_async_shape(self) -> bool:
        return True

    def _is_native(self, input: Any) -> bool:
        return inspect.isawaitable(input)

    def _get_input_types(self) -> Sequence[ValueType]:
        if self.is_coerced:
            return [ValueType.ANY]
        return [ValueType.AWAITABLE]

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        raise AsyncShapeError(type(self).__name__)

    async def _apply_async(self, input: Any, options: ApplyOptions) -> Result:
        if self._is_native(input):
            value = await input
        elif options.coerced or self.is_coerced:
            value = input
        else:
            return self._type_issue_factory(input)

        result = await apply_shape_async(self.shape, value, options)
        if isinstance(result, list):
            return result
        if result is not None:
            value = result.value

        if self._apply_checks is not None:
            issues = self._apply_checks(value, None, options)
            if issues is not None:
                return issues

        return Ok(value)
