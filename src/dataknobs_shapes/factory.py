"""Factory for building shapes from configuration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from dataknobs_common import ConfigurationError
from dataknobs_config import FactoryBase

from .array_shape import ArrayShape
from .base import CoercibleShape, Shape
from .date_shape import DateShape
from .integer_shape import IntegerShape
from .literal_shapes import ConstShape, EnumShape, NeverShape
from .number_shape import NumberShape
from .object_shape import ObjectShape
from .scalar_shapes import BooleanShape, StringShape
from .set_shape import SetShape
from .union_shape import UnionShape

logger = logging.getLogger(__name__)


class ShapeFactory(FactoryBase):
    """Factory for creating shapes from configuration.

    Configuration Options:
        type (str): Shape type (any, never, const, enum, number, integer,
            string, boolean, date, array, tuple, set, object, union)
        coerce (bool): Coerce non-native input (coercible types only)
        message (str): Message of the type issue

    Type Options:
        const: value
        enum: values
        number: gt, gte, lt, lte, multiple_of, finite, integer
        integer: min, max
        string: min, max, regex
        date: min, max (dates or ISO 8601 strings)
        array: items, min, max, length
        tuple: prefix_items, rest
        set: items, min, max
        object: properties
        union: variants

    Nested shapes (items, rest, prefix_items, properties, variants) are
    configurations themselves, or already built shapes.

    Example Configuration:
        shapes:
          - name: order_schema
            factory: shape
            type: object
            properties:
              id:
                type: integer
                coerce: true
              lines:
                type: array
                min: 1
                items:
                  type: object
                  properties:
                    sku: {type: string, min: 1}
                    quantity: {type: number, gt: 0}
    """

    def create(self, **config) -> Shape:
        """Create a shape from configuration.

        Args:
            **config: Shape configuration

        Returns:
            Shape instance

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        shape_type = str(config.get("type", "any")).lower()
        logger.info(f"Creating shape: {shape_type}")
        return self._build(config)

    def _build(self, config: Any) -> Shape:
        if isinstance(config, Shape):
            return config
        if not isinstance(config, Mapping):
            raise ConfigurationError(
                "Shape configuration must be a mapping",
                context={"config": config},
            )

        shape_type = str(config.get("type", "any")).lower()
        builder = getattr(self, f"_build_{shape_type}", None)
        if builder is None:
            raise ConfigurationError(
                f"Unknown shape type: {shape_type}",
                context={"type": shape_type},
            )

        try:
            shape = builder(config)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid {shape_type} shape configuration: {e}",
                context={"type": shape_type},
            ) from e

        if config.get("coerce"):
            if not isinstance(shape, CoercibleShape):
                raise ConfigurationError(
                    f"Shape type {shape_type} does not support coercion",
                    context={"type": shape_type},
                )
            shape = shape.coerce()

        return shape

    def _build_any(self, config: Mapping[str, Any]) -> Shape:
        return Shape()

    def _build_never(self, config: Mapping[str, Any]) -> Shape:
        return NeverShape(config.get("message"))

    def _build_const(self, config: Mapping[str, Any]) -> Shape:
        if "value" not in config:
            raise ConfigurationError("Const shape requires 'value'", context={"type": "const"})
        return ConstShape(config["value"], config.get("message"))

    def _build_enum(self, config: Mapping[str, Any]) -> Shape:
        return EnumShape(config.get("values", []), config.get("message"))

    def _build_number(self, config: Mapping[str, Any]) -> Shape:
        shape = NumberShape(config.get("message"))
        for option in ("gt", "gte", "lt", "lte", "multiple_of"):
            if config.get(option) is not None:
                shape = getattr(shape, option)(config[option])
        if config.get("finite"):
            shape = shape.finite()
        if config.get("integer"):
            shape = shape.integer()
        return shape

    def _build_integer(self, config: Mapping[str, Any]) -> Shape:
        shape = IntegerShape(config.get("message"))
        if config.get("min") is not None:
            shape = shape.min(config["min"])
        if config.get("max") is not None:
            shape = shape.max(config["max"])
        return shape

    def _build_string(self, config: Mapping[str, Any]) -> Shape:
        shape = StringShape(config.get("message"))
        if config.get("min") is not None:
            shape = shape.min(config["min"])
        if config.get("max") is not None:
            shape = shape.max(config["max"])
        if config.get("regex"):
            shape = shape.regex(config["regex"])
        return shape

    def _build_boolean(self, config: Mapping[str, Any]) -> Shape:
        return BooleanShape(config.get("message"))

    def _build_date(self, config: Mapping[str, Any]) -> Shape:
        shape = DateShape(config.get("message"))
        if config.get("min") is not None:
            shape = shape.min(_to_date(config["min"]))
        if config.get("max") is not None:
            shape = shape.max(_to_date(config["max"]))
        return shape

    def _build_array(self, config: Mapping[str, Any]) -> Shape:
        items = config.get("items")
        shape = ArrayShape(None, self._build(items) if items is not None else None, config.get("message"))
        return self._with_length(shape, config)

    def _build_tuple(self, config: Mapping[str, Any]) -> Shape:
        prefix_items = config.get("prefix_items")
        if not isinstance(prefix_items, list):
            raise ConfigurationError(
                "Tuple shape requires a 'prefix_items' list", context={"type": "tuple"}
            )
        rest = config.get("rest")
        return ArrayShape(
            [self._build(item) for item in prefix_items],
            self._build(rest) if rest is not None else None,
            config.get("message"),
        )

    def _build_set(self, config: Mapping[str, Any]) -> Shape:
        items = config.get("items")
        shape = SetShape(self._build(items) if items is not None else None, config.get("message"))
        return self._with_length(shape, config)

    def _build_object(self, config: Mapping[str, Any]) -> Shape:
        properties = config.get("properties")
        if not isinstance(properties, Mapping):
            raise ConfigurationError(
                "Object shape requires a 'properties' mapping", context={"type": "object"}
            )
        return ObjectShape(
            {key: self._build(value) for key, value in properties.items()},
            config.get("message"),
        )

    def _build_union(self, config: Mapping[str, Any]) -> Shape:
        variants = config.get("variants")
        if not isinstance(variants, list) or not variants:
            raise ConfigurationError(
                "Union shape requires a non-empty 'variants' list", context={"type": "union"}
            )
        return UnionShape([self._build(variant) for variant in variants], config.get("message"))

    def _with_length(self, shape: ArrayShape | SetShape, config: Mapping[str, Any]) -> Shape:
        if config.get("min") is not None:
            shape = shape.min(config["min"])
        if config.get("max") is not None:
            shape = shape.max(config["max"])
        if config.get("length") is not None:
            shape = shape.min(config["length"]).max(config["length"])
        return shape


def _to_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value))


# Create singleton instance for registration
shape_factory = ShapeFactory()
