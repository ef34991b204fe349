"""Compact decoder for Pydantic messages.

This module converts code-keyed data back to model instances, reversing every
code with MappingTable.name_for() and validating the result with Pydantic.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

import pydantic_core
from pydantic import BaseModel, ValidationError

from ..compaction.cache import table_for
from ..compaction.table import MappingTable
from ..exceptions import DecodeError
from ..schema.introspect import (
    EnumShape,
    MappingShape,
    ModelShape,
    OptionalShape,
    SequenceShape,
    Shape,
    TupleShape,
    model_field_shapes,
    root_shape,
)


def _decode_struct(model: type[BaseModel], data: Any, name_of: Callable[[str], str]) -> BaseModel:
    if not isinstance(data, dict):
        raise DecodeError(f"{model.__name__}: expected an object, got {type(data).__name__}")

    shapes = dict(model_field_shapes(model))
    values: dict[str, Any] = {}
    for code, raw in data.items():
        name = name_of(code)
        if name not in shapes:
            raise DecodeError(f"{model.__name__} has no field {name!r} (key {code!r})")
        values[name] = _decode_value(raw, shapes[name], name_of, name)

    try:
        return model.model_validate(values, by_name=True)
    except ValidationError as err:
        raise DecodeError(f"Failed to construct {model.__name__}: {err}") from err


def _decode_value(data: Any, shape: Shape, name_of: Callable[[str], str], where: str) -> Any:
    """Decode a single value according to its shape.

    Raises:
        DecodeError: If data does not have the shape the type requires
        CodeNotFoundError: If data holds a code the table never assigned
    """
    if isinstance(shape, ModelShape):
        return _decode_struct(shape.model, data, name_of)

    if isinstance(shape, EnumShape):
        # Fieldless variants are encoded as a bare tag
        if isinstance(data, str):
            tag, payload = data, {}
        elif isinstance(data, dict) and len(data) == 1:
            ((tag, payload),) = data.items()
        else:
            raise DecodeError(
                f"Field {where}: expected a single-key object for enum {shape.name}, "
                f"got {data!r}"
            )

        name = name_of(tag)
        model = shape.variant_for_tag(name)
        if model is None:
            raise DecodeError(f"Field {where}: {name!r} is not a variant of {shape.name}")
        return _decode_struct(model, payload, name_of)

    if isinstance(shape, OptionalShape):
        if data is None:
            return None
        return _decode_value(data, shape.inner, name_of, where)

    if isinstance(shape, SequenceShape):
        if not isinstance(data, list):
            raise DecodeError(f"Field {where}: expected an array, got {type(data).__name__}")
        return shape.kind(_decode_value(item, shape.inner, name_of, where) for item in data)

    if isinstance(shape, TupleShape):
        if not isinstance(data, list) or len(data) != len(shape.items):
            raise DecodeError(f"Field {where}: expected an array of {len(shape.items)} items")
        return tuple(
            _decode_value(item, item_shape, name_of, where)
            for item, item_shape in zip(data, shape.items)
        )

    if isinstance(shape, MappingShape):
        if not isinstance(data, dict):
            raise DecodeError(f"Field {where}: expected an object, got {type(data).__name__}")
        return {k: _decode_value(v, shape.value, name_of, where) for k, v in data.items()}

    return data


def from_compact(root: Any, data: Any, table: Optional[MappingTable] = None) -> Any:
    """Rebuild a value from its code-keyed form.

    Args:
        root: Root type the data was encoded as (model class or enum)
        data: Code-keyed structure, as produced by to_compact()
        table: Mapping table to reverse (defaults to the cached table for root)

    Returns:
        Validated model instance with the original field and variant names

    Raises:
        SchemaError: If root is not compactable
        DecodeError: If data does not match root
        CodeNotFoundError: If data holds a code the table never assigned
    """
    if table is None:
        table = table_for(root)
    return _decode_value(data, root_shape(root), table.name_for, "<root>")


def from_plain(root: Any, data: Any) -> Any:
    """Rebuild a value from the uncompacted form produced by to_plain()."""
    return _decode_value(data, root_shape(root), str, "<root>")


def decode(root: Any, data: Union[bytes, str], table: Optional[MappingTable] = None) -> Any:
    """Decode compact JSON to a model instance.

    Args:
        root: Root type the data was encoded as
        data: Compact JSON bytes or text
        table: Mapping table to reverse (defaults to the cached table for root)

    Returns:
        Decoded model instance

    Raises:
        DecodeError: If data is not valid JSON or does not match root
        CodeNotFoundError: If data holds a code the table never assigned

    Examples:
        ```python
        msg = decode(CallbackQuery, b'{"b":{"c":1,"e":1,"d":1}}')
        assert msg == ConfirmEventReservation(event_id=1, user_id=1, ticket_type=1)
        ```
    """
    try:
        parsed = pydantic_core.from_json(data)
    except ValueError as err:
        raise DecodeError(f"Invalid JSON: {err}") from err
    return from_compact(root, parsed, table)
