"""Value conversion shapes."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .base import Shape, apply_shape_async
from .exceptions import ShapeValidationError
from .result import ApplyOptions, Ok, Result
from .value_types import ValueType


class TransformShape(Shape):
    """Shape that replaces the input with ``callback(input)``.

    The callback may raise ``ShapeValidationError`` to report issues. With
    ``is_async=True`` the callback returns an awaitable and the shape must be
    applied asynchronously.
    """

    def __init__(self, callback: Callable[[Any], Any], is_async: bool = False):
        """Initialize transform shape.

        Args:
            callback: Converts the input value
            is_async: The callback returns an awaitable
        """
        super().__init__()
        self.callback = callback
        self._is_async_callback = is_async

    def __repr__(self) -> str:
        return f"TransformShape({self.callback!r})"

    def _is_async_shape(self) -> bool:
        return self._is_async_callback

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        try:
            output = self.callback(input)
        except ShapeValidationError as e:
            return e.issues
        return self._apply_checks_to_result(output, Ok(output), options)

    async def _apply_async(self, input: Any, options: ApplyOptions) -> Result:
        if not self._is_async_callback:
            return self._apply(input, options)
        try:
            output = await self.callback(input)
        except ShapeValidationError as e:
            return e.issues
        return self._apply_checks_to_result(output, Ok(output), options)


class PipeShape(Shape):
    """Shape that applies ``output_shape`` to the output of ``input_shape``."""

    def __init__(self, input_shape: Shape, output_shape: Shape):
        super().__init__()
        self.input_shape = input_shape
        self.output_shape = output_shape

    def __repr__(self) -> str:
        return f"PipeShape({self.input_shape!r}, {self.output_shape!r})"

    def at(self, key: Any) -> Shape | None:
        return self.input_shape.at(key)

    def _is_async_shape(self) -> bool:
        return self.input_shape.is_async or self.output_shape.is_async

    def _get_input_types(self) -> Sequence[ValueType]:
        return self.input_shape.input_types

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        result = self.input_shape._apply(input, options)
        if isinstance(result, list):
            return result

        output = input if result is None else result.value
        return self._finish(input, output, self.output_shape._apply(output, options), options)

    async def _apply_async(self, input: Any, options: ApplyOptions) -> Result:
        result = await apply_shape_async(self.input_shape, input, options)
        if isinstance(result, list):
            return result

        output = input if result is None else result.value
        output_result = await apply_shape_async(self.output_shape, output, options)
        return self._finish(input, output, output_result, options)

    def _finish(self, input: Any, output: Any, output_result: Result, options: ApplyOptions) -> Result:
        if isinstance(output_result, list):
            return output_result
        if output_result is not None:
            output = output_result.value
        result = None if output is input else Ok(output)
        return self._apply_checks_to_result(input, result, options)
