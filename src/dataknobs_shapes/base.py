"""Base shape node and the blocking/awaiting apply protocol.

Every shape implements ``_apply`` (blocking) and, when it is inherently
asynchronous or has asynchronous children, ``_apply_async``. Callers use
``parse``/``validate`` or their ``*_async`` counterparts.

Example:
    ```python
    from dataknobs_shapes import NumberShape

    shape = NumberShape().gte(0).coerce()
    shape.parse("42")                 # 42
    shape.validate(-1).issues[0].code # "number_gte"
    ```
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from .checks import ApplyChecks, Check, CheckCallback, IssueFactory, Message, compose_checks
from .constants import CODE_PREDICATE, MESSAGE_PREDICATE
from .exceptions import AsyncShapeError, ShapeValidationError
from .result import ApplyOptions, Issue, Ok, Result, ValidationResult
from .value_types import NEVER, ValueType, unite_input_types

ShapeT = TypeVar("ShapeT", bound="Shape")


class Shape:
    """Validation node accepting any value.

    Subclasses narrow what is accepted by overriding ``_apply`` and
    ``_get_input_types``. A shape is never mutated after construction:
    configuration methods return clones.
    """

    def __init__(self):
        self._checks: tuple[Check, ...] = ()
        self._apply_checks: ApplyChecks | None = None
        self._is_unsafe = False
        self._reset_caches()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @property
    def checks(self) -> tuple[Check, ...]:
        """Checks applied to the shape output, in order."""
        return self._checks

    @property
    def is_async(self) -> bool:
        """True if the shape must be applied with ``parse_async``/``validate_async``."""
        if self._is_async is None:
            self._is_async = self._is_async_shape()
        return self._is_async

    @property
    def input_types(self) -> list[ValueType]:
        """Value types this shape may accept, used by union dispatch."""
        if self._input_types is None:
            self._input_types = unite_input_types(self._get_input_types())
        return self._input_types

    @property
    def keys(self) -> tuple[Any, ...]:
        """Known structural keys; empty for non-structural shapes."""
        return ()

    @property
    def literal_values(self) -> tuple[Any, ...] | None:
        """The finite set of values this shape accepts, if it has one."""
        return None

    def at(self, key: Any) -> Shape | None:
        """Return the child shape responsible for ``key``, or None."""
        return None

    def check(
        self: ShapeT,
        callback: CheckCallback,
        *,
        key: Any = None,
        param: Any = None,
        unsafe: bool = False,
    ) -> ShapeT:
        """Return a clone with a check added.

        Args:
            callback: Callable ``(value, param, options)`` returning None, an
                Issue or a list of issues
            key: Check identity; a check with the same key is replaced.
                Defaults to the callback itself
            param: Parameter passed to the callback
            unsafe: Run the check even if the value already has issues

        Returns:
            New shape with the check
        """
        if key is None:
            key = callback

        new_check = Check(key, callback, param, unsafe)
        checks = list(self._checks)

        for i, existing in enumerate(checks):
            if existing.key == key:
                checks[i] = new_check
                break
        else:
            checks.append(new_check)

        return self._with_checks(checks)

    def refine(
        self: ShapeT,
        predicate: Callable[[Any], bool],
        message: Message = None,
        *,
        code: str = CODE_PREDICATE,
        param: Any = None,
        meta: Any = None,
        unsafe: bool = False,
    ) -> ShapeT:
        """Return a clone that also requires ``predicate(value)`` to be truthy."""
        issue_factory = IssueFactory(code, MESSAGE_PREDICATE, message, meta, param)

        def check_predicate(value: Any, param: Any, options: ApplyOptions) -> list[Issue] | None:
            if predicate(value):
                return None
            return issue_factory(value, param)

        return self.check(check_predicate, key=predicate, param=param, unsafe=unsafe)

    def transform(self, callback: Callable[[Any], Any]) -> Shape:
        """Pipe the output of this shape through ``callback``."""
        from .transform_shape import PipeShape, TransformShape

        return PipeShape(self, TransformShape(callback))

    def transform_async(self, callback: Callable[[Any], Any]) -> Shape:
        """Pipe the output of this shape through an async ``callback``."""
        from .transform_shape import PipeShape, TransformShape

        return PipeShape(self, TransformShape(callback, is_async=True))

    def parse(self, input: Any, verbose: bool = False, coerced: bool = False) -> Any:
        """Validate ``input`` and return the resulting value.

        Args:
            input: Value to validate
            verbose: Collect all issues instead of stopping at the first
            coerced: Force coercion on every coercible shape

        Returns:
            The input, or the value that replaced it

        Raises:
            ShapeValidationError: If the input is invalid
            AsyncShapeError: If the shape is async
        """
        result = self._apply_blocking(input, ApplyOptions(verbose, coerced))
        if isinstance(result, list):
            raise ShapeValidationError(result)
        return input if result is None else result.value

    def validate(self, input: Any, verbose: bool = False, coerced: bool = False) -> ValidationResult:
        """Validate ``input`` without raising on invalid input.

        Raises:
            AsyncShapeError: If the shape is async
        """
        result = self._apply_blocking(input, ApplyOptions(verbose, coerced))
        return _to_validation_result(input, result)

    async def parse_async(self, input: Any, verbose: bool = False, coerced: bool = False) -> Any:
        """Awaiting counterpart of ``parse``."""
        result = await apply_shape_async(self, input, ApplyOptions(verbose, coerced))
        if isinstance(result, list):
            raise ShapeValidationError(result)
        return input if result is None else result.value

    async def validate_async(
        self, input: Any, verbose: bool = False, coerced: bool = False
    ) -> ValidationResult:
        """Awaiting counterpart of ``validate``."""
        result = await apply_shape_async(self, input, ApplyOptions(verbose, coerced))
        return _to_validation_result(input, result)

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        if self._apply_checks is not None:
            return self._apply_checks(input, None, options)
        return None

    async def _apply_async(self, input: Any, options: ApplyOptions) -> Result:
        return self._apply(input, options)

    def _apply_blocking(self, input: Any, options: ApplyOptions) -> Result:
        if self.is_async:
            raise AsyncShapeError(type(self).__name__)
        return self._apply(input, options)

    def _apply_checks_to_result(self, input: Any, result: Result, options: ApplyOptions) -> Result:
        """Run this shape's checks over the result of a delegate shape."""
        if self._apply_checks is None:
            return result

        if isinstance(result, list):
            if options.verbose and self._is_unsafe:
                return self._apply_checks(input, result, options)
            return result

        output = input if result is None else result.value
        issues = self._apply_checks(output, None, options)
        return result if issues is None else issues

    def _is_async_shape(self) -> bool:
        return False

    def _get_input_types(self) -> Sequence[ValueType]:
        return [ValueType.ANY]

    def _constrain(
        self: ShapeT,
        code: str,
        default_message: str,
        param: Any,
        test: Callable[[Any, Any], bool],
        message: Message = None,
        meta: Any = None,
        unsafe: bool = False,
    ) -> ShapeT:
        """Add a built-in constraint keyed by its issue code."""
        issue_factory = IssueFactory(code, default_message, message, meta, param)

        def check_constraint(value: Any, param: Any, options: ApplyOptions) -> list[Issue] | None:
            if test(value, param):
                return None
            return issue_factory(value, param)

        return self.check(check_constraint, key=code, param=param, unsafe=unsafe)

    def _with_checks(self: ShapeT, checks: Sequence[Check]) -> ShapeT:
        shape = self._clone()
        shape._checks = tuple(checks)
        shape._apply_checks = compose_checks(shape._checks)
        shape._is_unsafe = any(check.unsafe for check in shape._checks)
        return shape

    def _clone(self: ShapeT) -> ShapeT:
        shape = copy.copy(self)
        shape._reset_caches()
        return shape

    def _reset_caches(self) -> None:
        self._is_async: bool | None = None
        self._input_types: list[ValueType] | None = None


class CoercibleShape(Shape):
    """Shape that can convert non-native input into its native type.

    Coercion is attempted only if the input is not native and either the
    shape is coerced or the apply options ask for coercion. Subclasses set
    ``_type_issue_factory`` and implement ``_is_native`` and ``_coerce``.
    """

    _type_issue_factory: IssueFactory

    def __init__(self):
        super().__init__()
        self.is_coerced = False

    def coerce(self: ShapeT) -> ShapeT:
        """Return a clone that coerces non-native input."""
        shape = self._clone()
        shape.is_coerced = True
        return shape

    def _is_native(self, input: Any) -> bool:
        raise NotImplementedError

    def _coerce(self, input: Any) -> Any:
        """Convert ``input`` to the native type, or return ``NEVER``."""
        return NEVER

    def _coerce_input(self, input: Any, options: ApplyOptions) -> Any:
        """Return the native input, its coerced value, or ``NEVER``."""
        if self._is_native(input):
            return input
        if options.coerced or self.is_coerced:
            return self._coerce(input)
        return NEVER

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        output = self._coerce_input(input, options)

        if output is NEVER:
            return self._type_issue_factory(input)

        if self._apply_checks is not None:
            issues = self._apply_checks(output, None, options)
            if issues is not None:
                return issues

        return None if output is input else Ok(output)


async def apply_shape_async(shape: Shape, input: Any, options: ApplyOptions) -> Result:
    """Apply ``shape``, suspending only if the shape is async."""
    if shape.is_async:
        return await shape._apply_async(input, options)
    return shape._apply(input, options)


def _to_validation_result(input: Any, result: Result) -> ValidationResult:
    if isinstance(result, list):
        return ValidationResult.failure(result)
    return ValidationResult.success(input if result is None else result.value)
