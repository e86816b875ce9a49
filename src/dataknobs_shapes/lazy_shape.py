"""Deferred shape for recursive schemas."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from .base import Shape, apply_shape_async
from .result import ApplyOptions, Result
from .value_types import ValueType

logger = logging.getLogger(__name__)


class LazyShape(Shape):
    """Shape resolved from ``provider()`` on first use.

    The provider is called once and its shape is reused. While a recursive
    schema measures itself, the lazy shape reports ``is_async=False`` and
    accepts any input type.

    Example:
        ```python
        tree = LazyShape(lambda: ObjectShape({"children": ArrayShape(None, tree)}))
        ```
    """

    def __init__(self, provider: Callable[[], Shape]):
        super().__init__()
        self.provider = provider
        self._shape: Shape | None = None

    def __repr__(self) -> str:
        return f"LazyShape({self.provider!r})"

    @property
    def shape(self) -> Shape:
        """The resolved shape."""
        if self._shape is None:
            shape = self.provider()
            if not isinstance(shape, Shape):
                raise TypeError(f"Lazy provider must return a Shape, got {type(shape).__name__}")
            logger.debug("Resolved lazy shape: %r", shape)
            self._shape = shape
        return self._shape

    @property
    def keys(self) -> tuple[Any, ...]:
        return self.shape.keys

    @property
    def literal_values(self) -> tuple[Any, ...] | None:
        return self.shape.literal_values

    def at(self, key: Any) -> Shape | None:
        return self.shape.at(key)

    def _is_async_shape(self) -> bool:
        self._is_async = False
        return self.shape.is_async

    def _get_input_types(self) -> Sequence[ValueType]:
        self._input_types = [ValueType.ANY]
        return self.shape.input_types

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        result = self.shape._apply(input, options)
        return self._apply_checks_to_result(input, result, options)

    async def _apply_async(self, input: Any, options: ApplyOptions) -> Result:
        result = await apply_shape_async(self.shape, input, options)
        return self._apply_checks_to_result(input, result, options)
