"""Union shape with type-bucket dispatch and discriminator lookup.

Candidates are grouped into buckets by the value types they accept, so an
input is only tried against candidates that can possibly accept it. If every
candidate is an object shape with a key whose literal values are disjoint
across candidates, the candidate is looked up directly by the input's value
at that key.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .base import Shape, apply_shape_async
from .checks import IssueFactory, Message
from .constants import CODE_UNION, MESSAGE_UNION
from .result import ApplyOptions, Issue, Result
from .value_types import ValueType, canonize, get_value_type, unite_input_types

logger = logging.getLogger(__name__)


@dataclass
class Discriminator:
    """Direct candidate lookup by the literal value at ``key``."""

    key: Any
    lookup: dict[Any, Shape]

    def get_candidate(self, input: Any) -> Shape | None:
        """Return the only candidate that may accept ``input``, or None."""
        if not isinstance(input, Mapping):
            return None
        try:
            return self.lookup.get(literal_key(input.get(self.key)))
        except TypeError:
            # Unhashable value
            return None


@dataclass
class UnionDispatch:
    """Buckets of candidate shapes keyed by accepted value type.

    Attributes:
        buckets: Candidates for each specific value type, followed by the
            candidates that accept any value
        any_bucket: Candidates that accept any value, or None
        bucket_types: Value types accepted by the union, ``ANY`` last if
            there is an any-bucket
        discriminator: Direct lookup for object inputs, or None
    """

    buckets: dict[ValueType, list[Shape]] = field(default_factory=dict)
    any_bucket: list[Shape] | None = None
    bucket_types: list[ValueType] = field(default_factory=list)
    discriminator: Discriminator | None = None

    def get_bucket(self, input: Any) -> list[Shape] | None:
        """Return the candidates to try for ``input``, or None."""
        return self.buckets.get(get_value_type(input), self.any_bucket)


class UnionShape(Shape):
    """Shape accepted if any of its candidate shapes accepts the input.

    Candidates are tried in order and the first one that succeeds wins. If
    every candidate fails, a single ``union`` issue is raised; its ``param``
    holds the accepted ``input_types`` and the ``issue_groups`` of the tried
    candidates (None if no candidate accepts the input type).
    """

    def __init__(self, shapes: Sequence[Shape], message: Message = None, meta: Any = None):
        """Initialize union shape.

        Args:
            shapes: Candidate shapes, in order of preference
            message: Message of the union issue
            meta: Metadata of the union issue

        Raises:
            TypeError: If a candidate is not a Shape
        """
        super().__init__()

        for shape in shapes:
            if not isinstance(shape, Shape):
                raise TypeError(f"Expected a Shape, got {type(shape).__name__}")

        self.shapes = tuple(shapes)
        self._issue_factory = IssueFactory(CODE_UNION, MESSAGE_UNION, message, meta)

    def __repr__(self) -> str:
        return f"UnionShape({list(self.shapes)!r})"

    @property
    def dispatch(self) -> UnionDispatch:
        """The candidate buckets, built on first use."""
        if self._dispatch is None:
            self._dispatch = create_union_dispatch(self.shapes)
        return self._dispatch

    @property
    def literal_values(self) -> tuple[Any, ...] | None:
        values: list[Any] = []
        for shape in unwrap_union_shapes(self.shapes):
            shape_values = shape.literal_values
            if shape_values is None:
                return None
            values.extend(shape_values)
        return tuple(values)

    def at(self, key: Any) -> Shape | None:
        value_shapes = [
            value_shape
            for value_shape in (shape.at(key) for shape in self.shapes)
            if value_shape is not None
        ]
        if not value_shapes:
            return None
        if len(value_shapes) == 1:
            return value_shapes[0]
        return UnionShape(value_shapes)

    def _is_async_shape(self) -> bool:
        return any(shape.is_async for shape in self.shapes)

    def _get_input_types(self) -> Sequence[ValueType]:
        return unite_input_types(*(shape.input_types for shape in self.shapes))

    def _apply(self, input: Any, options: ApplyOptions) -> Result:
        dispatch = self.dispatch
        bucket = dispatch.get_bucket(input)
        if bucket is None:
            return self._no_match(input, dispatch, None, options)

        known: tuple[Shape, Result] | None = None

        if dispatch.discriminator is not None:
            candidate = dispatch.discriminator.get_candidate(input)
            if candidate is not None:
                result = candidate._apply(input, options)
                if not isinstance(result, list):
                    return self._apply_checks_to_result(input, result, options)
                known = (candidate, result)

        issue_groups = []
        for shape in bucket:
            if known is not None and shape is known[0]:
                result = known[1]
            else:
                result = shape._apply(input, options)
            if not isinstance(result, list):
                return self._apply_checks_to_result(input, result, options)
            issue_groups.append(result)

        return self._no_match(input, dispatch, issue_groups, options)

    async def _apply_async(self, input: Any, options: ApplyOptions) -> Result:
        dispatch = self.dispatch
        bucket = dispatch.get_bucket(input)
        if bucket is None:
            return self._no_match(input, dispatch, None, options)

        known: tuple[Shape, Result] | None = None

        if dispatch.discriminator is not None:
            candidate = dispatch.discriminator.get_candidate(input)
            if candidate is not None:
                result = await apply_shape_async(candidate, input, options)
                if not isinstance(result, list):
                    return self._apply_checks_to_result(input, result, options)
                known = (candidate, result)

        issue_groups = []
        for shape in bucket:
            if known is not None and shape is known[0]:
                result = known[1]
            else:
                result = await apply_shape_async(shape, input, options)
            if not isinstance(result, list):
                return self._apply_checks_to_result(input, result, options)
            issue_groups.append(result)

        return self._no_match(input, dispatch, issue_groups, options)

    def _no_match(
        self,
        input: Any,
        dispatch: UnionDispatch,
        issue_groups: list[list[Issue]] | None,
        options: ApplyOptions,
    ) -> Result:
        issues = self._issue_factory(
            input,
            {"input_types": list(dispatch.bucket_types), "issue_groups": issue_groups},
        )
        return self._apply_checks_to_result(input, issues, options)

    def _reset_caches(self) -> None:
        super()._reset_caches()
        self._dispatch: UnionDispatch | None = None


def unwrap_union_shapes(shapes: Iterable[Shape]) -> list[Shape]:
    """Flatten nested unions that have no checks of their own."""
    unwrapped: list[Shape] = []
    for shape in shapes:
        if isinstance(shape, UnionShape) and not shape.checks:
            unwrapped.extend(unwrap_union_shapes(shape.shapes))
        else:
            unwrapped.append(shape)
    return unwrapped


def create_union_dispatch(shapes: Iterable[Shape]) -> UnionDispatch:
    """Distribute candidate shapes into buckets by accepted value type.

    A candidate that accepts any value goes into the any-bucket, which is
    then appended to every specific bucket. A candidate appears at most once
    per bucket.
    """
    dispatch = UnionDispatch()
    candidates = unwrap_union_shapes(shapes)

    for shape in candidates:
        input_types = shape.input_types

        if ValueType.ANY in input_types:
            if dispatch.any_bucket is None:
                dispatch.any_bucket = []
            if shape not in dispatch.any_bucket:
                dispatch.any_bucket.append(shape)
            continue

        for value_type in input_types:
            if value_type is ValueType.NEVER:
                continue
            bucket = dispatch.buckets.get(value_type)
            if bucket is None:
                dispatch.bucket_types.append(value_type)
                dispatch.buckets[value_type] = [shape]
            elif shape not in bucket:
                bucket.append(shape)

    if dispatch.any_bucket is not None:
        for bucket in dispatch.buckets.values():
            for shape in dispatch.any_bucket:
                if shape not in bucket:
                    bucket.append(shape)
        dispatch.bucket_types.append(ValueType.ANY)

    dispatch.discriminator = get_discriminator(candidates)

    logger.debug(
        "Built union dispatch: %d candidates, bucket types %s, discriminator %s",
        len(candidates),
        [value_type.value for value_type in dispatch.bucket_types],
        dispatch.discriminator.key if dispatch.discriminator else None,
    )
    return dispatch


def get_discriminator(candidates: Sequence[Shape]) -> Discriminator | None:
    """Find a key whose literal values tell the candidates apart.

    Every candidate must accept only objects and expose ``keys``. At the
    discriminator key each candidate's child must have hashable literal
    values, and no literal value may belong to two candidates.
    """
    if len(candidates) < 2:
        return None

    for shape in candidates:
        if shape.input_types != [ValueType.OBJECT] or not shape.keys:
            return None

    for key in candidates[0].keys:
        lookup = _build_lookup(candidates, key)
        if lookup is not None:
            logger.debug("Union discriminator key: %r", key)
            return Discriminator(key, lookup)

    return None


def literal_key(value: Any) -> Any:
    """Key under which a literal value is looked up.

    Values that compare as the same literal share a key: numbers by value
    regardless of ``int``/``float``, strings regardless of ``str`` subclass.
    ``True`` and ``1`` have different keys.
    """
    value = canonize(value)
    if isinstance(value, bool):
        return (bool, value)
    if isinstance(value, (int, float)):
        return (float, value)
    return (type(value), value)


def _build_lookup(candidates: Sequence[Shape], key: Any) -> dict[Any, Shape] | None:
    lookup: dict[Any, Shape] = {}

    for shape in candidates:
        value_shape = shape.at(key)
        if value_shape is None:
            return None

        values = value_shape.literal_values
        if not values:
            return None

        for value in values:
            if not isinstance(value, Hashable) or value != value:
                return None
            try:
                lookup_key = literal_key(value)
                if lookup.get(lookup_key, shape) is not shape:
                    return None
            except TypeError:
                return None
            lookup[lookup_key] = shape

    return lookup
