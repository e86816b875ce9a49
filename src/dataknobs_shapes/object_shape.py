"""Object shape: a mapping with known keys."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from .base import Shape
from .checks import IssueFactory, Message
from .collection import CollectionShape, ElementFold
from .constants import CODE_TYPE, MESSAGE_OBJECT_TYPE
from .result import ApplyOptions, Issue
from .value_types import ValueType


class ObjectShape(CollectionShape):
    """Shape of a mapping whose known keys conform the given shapes.

    A missing key is validated as ``None``. Unknown keys are passed through
    unchanged. If a value changes, the output is a new ``dict``.

    Example:
        ```python
        shape = ObjectShape({"name": StringShape(), "age": IntegerShape().coerce()})
        shape.parse({"name": "Ann", "age": "42"})  # {"name": "Ann", "age": 42}
        ```
    """

    def __init__(self, shapes: Mapping[Any, Shape], message: Message = None, meta: Any = None):
        """Initialize object shape.

        Args:
            shapes: Shape of the value of each known key
            message: Message of the type issue
            meta: Metadata of the type issue

        Raises:
            TypeError: If a value is not a Shape
        """
        super().__init__()

        for key, shape in shapes.items():
            if not isinstance(shape, Shape):
                raise TypeError(f"Expected a Shape for key {key!r}, got {type(shape).__name__}")

        self.shapes = dict(shapes)
        self._type_issue_factory = IssueFactory(
            CODE_TYPE, MESSAGE_OBJECT_TYPE, message, meta, ValueType.OBJECT
        )

    def __repr__(self) -> str:
        return f"ObjectShape({self.shapes!r})"

    @property
    def keys(self) -> tuple[Any, ...]:
        return tuple(self.shapes)

    def at(self, key: Any) -> Shape | None:
        try:
            return self.shapes.get(key)
        except TypeError:
            return None

    def _child_shapes(self) -> Iterator[Shape]:
        yield from self.shapes.values()

    def _get_input_types(self) -> Sequence[ValueType]:
        return [ValueType.OBJECT]

    def _prepare(self, input: Any, options: ApplyOptions) -> ElementFold | list[Issue]:
        if not isinstance(input, Mapping):
            return self._type_issue_factory(input)
        return ElementFold(input, input, clone=dict)

    def _iter_element_shapes(self, fold: ElementFold) -> Iterator[tuple[Any, Shape]]:
        yield from self.shapes.items()
