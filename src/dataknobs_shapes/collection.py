"""Element folding shared by the array, set and object shapes.

A collection shape prepares an ``ElementFold`` for the input, applies one
child shape per element and folds each child result into it. The blocking
and awaiting paths differ only in how a child result is obtained; folding,
path prefixing and copy-on-write live in ``ElementFold`` and
``CollectionShape._complete``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from .base import Shape, apply_shape_async
from .result import ApplyOptions, Issue, Ok, Result, concat_issues, unshift_issues_path
from .value_types import NEVER


class ElementFold:
    """Accumulates child results for one apply call.

    Attributes:
        input: The raw input passed to the collection shape
        values: Indexable elements read by child shapes
        output: Container receiving changed elements
        changed: True if the output differs from the input
        issues: Issues collected so far, or None
    """

    def __init__(
        self,
        input: Any,
        values: Any,
        *,
        owned: bool = False,
        changed: bool = False,
        clone: Callable[[Any], Any] = list,
    ):
        """Initialize element fold.

        Args:
            input: The raw input
            values: Elements to validate; may be the input itself
            owned: ``values`` is a private container that may be written to
            changed: The output already differs from the input
            clone: Copies ``values`` on the first write when not owned
        """
        self.input = input
        self.values = values
        self.output = values
        self.changed = changed
        self.issues: list[Issue] | None = None
        self._owned = owned
        self._clone = clone

    def read(self, key: Any) -> Any:
        """Return the element at ``key``, or None if it is absent."""
        try:
            return self.values[key]
        except (KeyError, IndexError):
            return None

    def fold(self, key: Any, result: Result, options: ApplyOptions, is_unsafe: bool) -> bool:
        """Fold a child result into the accumulator.

        Args:
            key: Index or key of the element
            result: The child apply result
            options: Apply options
            is_unsafe: The collection has unsafe checks

        Returns:
            True if iteration must stop
        """
        if result is None:
            return False

        if isinstance(result, list):
            unshift_issues_path(result, key)
            self.issues = concat_issues(self.issues, result)
            return not options.verbose

        if is_unsafe or self.issues is None:
            if not self._owned:
                self.output = self._clone(self.values)
                self._owned = True
            self.output[key] = result.value
            self.changed = True

        return False


class CollectionShape(Shape):
    """Shape whose elements are validated by child shapes.

    Subclasses implement ``_prepare``, ``_iter_element_shapes`` and
    ``_child_shapes``, and may override ``_finalize``.
    """

    def _prepare(self, input: Any, options: ApplyOptions) -> ElementFold | list[Issue]:
        """Check the input type and return a fold, or the type issues."""
        raise NotImplementedError

    def _iter_element_shapes(self, fold: ElementFold) -> Iterator[tuple[Any, Shape]]:
        """Yield ``(key, shape)`` for every element to validate, in order."""
        raise NotImplementedError

    def _child_shapes(self) -> Iterator[Shape]:
        raise NotImplementedError

    def _finalize(self, fold: ElementFold) -> Any:
        """Build the output value of a changed fold, or return NEVER if it cannot be built."""
        return fold.output

    def _is_async_shape(self) -> bool:
        return any(shape.is_async for shape in self._child_shapes())

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        fold = self._prepare(input, options)
        if isinstance(fold, list):
            return fold

        for key, shape in self._iter_element_shapes(fold):
            result = shape._apply(fold.read(key), options)
            if fold.fold(key, result, options, self._is_unsafe):
                break

        return self._complete(fold, options)

    async def _apply_async(self, input: Any, options: ApplyOptions) -> Result:
        fold = self._prepare(input, options)
        if isinstance(fold, list):
            return fold

        for key, shape in self._iter_element_shapes(fold):
            result = await apply_shape_async(shape, fold.read(key), options)
            if fold.fold(key, result, options, self._is_unsafe):
                break

        return self._complete(fold, options)

    def _complete(self, fold: ElementFold, options: ApplyOptions) -> Result:
        issues = fold.issues
        if issues is not None and not options.verbose:
            return issues

        output = self._finalize(fold) if fold.changed else fold.input
        if output is NEVER:
            return concat_issues(issues, self._type_issue_factory(fold.input))

        if self._apply_checks is not None and (self._is_unsafe or issues is None):
            issues = self._apply_checks(output, issues, options)

        if issues is None and output is not fold.input:
            return Ok(output)
        return issues
