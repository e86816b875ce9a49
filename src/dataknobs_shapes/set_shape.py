"""Set shape."""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Sequence
from typing import Any

from .array_shape import COLLECTION_INPUT_TYPES, coerce_to_list
from .base import CoercibleShape, Shape
from .checks import IssueFactory, Message
from .collection import CollectionShape, ElementFold
from .constants import (
    CODE_SET_MAX,
    CODE_SET_MIN,
    CODE_TYPE,
    MESSAGE_SET_MAX,
    MESSAGE_SET_MIN,
    MESSAGE_SET_TYPE,
)
from .result import ApplyOptions, Issue
from .value_types import NEVER, ValueType, to_array_index


class SetShape(CollectionShape, CoercibleShape):
    """Shape of a set or frozenset whose values conform ``shape``.

    Values are validated in iteration order and reported by their position
    in that order. A new set is built only if a value changed or the input
    was coerced; frozensets come back as frozensets.
    """

    def __init__(self, shape: Shape | None = None, message: Message = None, meta: Any = None):
        """Initialize set shape.

        Args:
            shape: Shape of the set values; any value is accepted if None
            message: Message of the type issue
            meta: Metadata of the type issue
        """
        super().__init__()

        if shape is None:
            shape = Shape()
        elif not isinstance(shape, Shape):
            raise TypeError(f"Expected a Shape, got {type(shape).__name__}")

        self.shape = shape
        self._type_issue_factory = IssueFactory(
            CODE_TYPE, MESSAGE_SET_TYPE, message, meta, ValueType.SET
        )

    def __repr__(self) -> str:
        return f"SetShape({self.shape!r})"

    def at(self, key: Any) -> Shape | None:
        return self.shape if to_array_index(key) != -1 else None

    def min(self, size: int, message: Message = None, meta: Any = None) -> SetShape:
        """Constrain the minimum set size."""
        _require_size(size)
        return self._constrain(
            CODE_SET_MIN, MESSAGE_SET_MIN, size,
            lambda value, param: len(value) >= param, message, meta,
        )

    def max(self, size: int, message: Message = None, meta: Any = None) -> SetShape:
        """Constrain the maximum set size."""
        _require_size(size)
        return self._constrain(
            CODE_SET_MAX, MESSAGE_SET_MAX, size,
            lambda value, param: len(value) <= param, message, meta,
        )

    def size(self, size: int, message: Message = None, meta: Any = None) -> SetShape:
        """Constrain the exact set size."""
        return self.min(size, message, meta).max(size, message, meta)

    def _is_native(self, input: Any) -> bool:
        return isinstance(input, (set, frozenset))

    def _coerce(self, input: Any) -> Any:
        values = coerce_to_list(input)
        if not all(isinstance(value, Hashable) for value in values):
            return NEVER
        return values

    def _child_shapes(self) -> Iterator[Shape]:
        yield self.shape

    def _get_input_types(self) -> Sequence[ValueType]:
        if not self.is_coerced:
            return [ValueType.SET]
        return self.shape.input_types + COLLECTION_INPUT_TYPES

    def _prepare(self, input: Any, options: ApplyOptions) -> ElementFold | list[Issue]:
        values = self._coerce_input(input, options)

        if values is NEVER:
            return self._type_issue_factory(input)

        if values is input:
            return ElementFold(input, list(input), owned=True)
        return ElementFold(input, values, owned=True, changed=True)

    def _iter_element_shapes(self, fold: ElementFold) -> Iterator[tuple[int, Shape]]:
        for i in range(len(fold.values)):
            yield i, self.shape

    def _finalize(self, fold: ElementFold) -> Any:
        set_type = frozenset if isinstance(fold.input, frozenset) else set
        try:
            return set_type(fold.output)
        except TypeError:
            # A value became unhashable
            return NEVER


def _require_size(size: Any) -> None:
    if not isinstance(size, int) or isinstance(size, bool) or size < 0:
        raise ValueError(f"Size must be a non-negative integer, got {size!r}")
