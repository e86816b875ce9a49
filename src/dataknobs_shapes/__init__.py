"""Composable runtime validation with typed shapes.

Shapes are immutable validation nodes. Each shape checks a value, optionally
coerces it, and reports defects as a list of ``Issue`` records:

- Consistent apply protocol with blocking and awaiting paths
- Ordered check pipelines with fast and verbose modes
- Opt-in coercion per shape or per call
- Union dispatch by value type, with discriminator lookup

Example:
    ```python
    from dataknobs_shapes import dsl as d

    shape = d.union(
        d.object_({"type": d.const("circle"), "radius": d.number().gt(0)}),
        d.object_({"type": d.const("square"), "side": d.number().gt(0)}),
    )

    result = shape.validate({"type": "square", "side": -1})
    result.issues[0].code  # "union"
    ```
"""

from .array_shape import ArrayShape
from .awaitable_shape import AwaitableShape
from .base import CoercibleShape, Shape, apply_shape_async
from .checks import Check, IssueFactory, compose_checks
from .collection import CollectionShape, ElementFold
from .date_shape import DateShape
from .exceptions import AsyncShapeError, ShapeValidationError
from .factory import ShapeFactory, shape_factory
from .integer_shape import IntegerShape
from .lazy_shape import LazyShape
from .literal_shapes import ConstShape, EnumShape, NeverShape
from .number_shape import NumberShape
from .object_shape import ObjectShape
from .result import ApplyOptions, Issue, Ok, Result, ValidationResult
from .scalar_shapes import BooleanShape, StringShape
from .set_shape import SetShape
from .transform_shape import PipeShape, TransformShape
from .union_shape import Discriminator, UnionDispatch, UnionShape, create_union_dispatch
from .value_types import NEVER, ValueType, get_value_type

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Result types
    "Issue",
    "Ok",
    "Result",
    "ApplyOptions",
    "ValidationResult",
    # Value types
    "ValueType",
    "NEVER",
    "get_value_type",
    # Base
    "Shape",
    "CoercibleShape",
    "apply_shape_async",
    # Checks
    "Check",
    "IssueFactory",
    "compose_checks",
    # Collections
    "CollectionShape",
    "ElementFold",
    "ArrayShape",
    "SetShape",
    "ObjectShape",
    # Scalars
    "NumberShape",
    "IntegerShape",
    "DateShape",
    "StringShape",
    "BooleanShape",
    # Literals
    "ConstShape",
    "EnumShape",
    "NeverShape",
    # Composition
    "UnionShape",
    "UnionDispatch",
    "Discriminator",
    "create_union_dispatch",
    "LazyShape",
    "AwaitableShape",
    "TransformShape",
    "PipeShape",
    # Exceptions
    "ShapeValidationError",
    "AsyncShapeError",
    # Factories
    "ShapeFactory",
    "shape_factory",
]
