"""Compact encoder for Pydantic messages.

This module converts model instances to their code-keyed form. Structs become
objects keyed by field codes, in declaration order; enum values are externally
tagged as ``{variant_code: {...}}``, and a variant without fields is just its
code. Leaf values are left for the JSON layer to serialize.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import pydantic_core
from pydantic import BaseModel

from ..compaction.cache import table_for
from ..compaction.table import MappingTable
from ..exceptions import EncodeError
from ..models.fields import tag_of
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


def _resolve_root(value: Any, root: Any) -> Any:
    if root is not None:
        return root
    if not isinstance(value, BaseModel):
        raise EncodeError(
            f"Cannot infer root type for {type(value).__name__}; pass root= explicitly"
        )
    return type(value)


def _encode_struct(
    value: BaseModel, model: type[BaseModel], key: Callable[[str], str]
) -> dict[str, Any]:
    return {
        key(name): _encode_value(getattr(value, name), shape, key, name)
        for name, shape in model_field_shapes(model)
    }


def _encode_value(value: Any, shape: Shape, key: Callable[[str], str], where: str) -> Any:
    """Encode a single value according to its shape.

    Args:
        value: Value to encode
        shape: Shape of the declared type
        key: Renaming function (code lookup, or identity for plain output)
        where: Field name, for error messages

    Raises:
        EncodeError: If the value does not match its declared type
    """
    if isinstance(shape, ModelShape):
        if not isinstance(value, shape.model):
            raise EncodeError(
                f"Field {where}: expected {shape.model.__name__}, got {type(value).__name__}"
            )
        if type(value) is not shape.model:
            # Subclass-only fields are not in the schema
            raise EncodeError(
                f"Field {where}: expected exactly {shape.model.__name__}, "
                f"got subclass {type(value).__name__}"
            )
        return _encode_struct(value, shape.model, key)

    if isinstance(shape, EnumShape):
        model = type(value)
        if model not in shape.variants:
            raise EncodeError(
                f"Field {where}: {model.__name__} is not a variant of {shape.name}"
            )
        tag = key(tag_of(model))
        if not model.model_fields:
            return tag
        return {tag: _encode_struct(value, model, key)}

    if isinstance(shape, OptionalShape):
        if value is None:
            return None
        return _encode_value(value, shape.inner, key, where)

    if isinstance(shape, SequenceShape):
        return [_encode_value(item, shape.inner, key, where) for item in value]

    if isinstance(shape, TupleShape):
        if len(value) != len(shape.items):
            raise EncodeError(
                f"Field {where}: expected {len(shape.items)} items, got {len(value)}"
            )
        return [
            _encode_value(item, item_shape, key, where)
            for item, item_shape in zip(value, shape.items)
        ]

    if isinstance(shape, MappingShape):
        return {k: _encode_value(v, shape.value, key, where) for k, v in value.items()}

    return value


def to_compact(value: Any, root: Any = None, table: Optional[MappingTable] = None) -> Any:
    """Convert a value to its code-keyed form.

    Args:
        value: Model instance (a struct, or a variant of ``root``)
        root: Root type the value is encoded as (defaults to ``type(value)``);
            pass the enum annotation when encoding a variant
        table: Mapping table to apply (defaults to the cached table for root)

    Returns:
        JSON-ready structure with codes as keys

    Raises:
        SchemaError: If root is not compactable
        EncodeError: If the value does not match root
        NameNotFoundError: If table was built for a different schema

    Example:
        >>> to_compact(ConfirmEventReservation(event_id=1, user_id=1, ticket_type=1),
        ...            root=CallbackQuery)
        {'b': {'c': 1, 'e': 1, 'd': 1}}
    """
    root = _resolve_root(value, root)
    if table is None:
        table = table_for(root)
    return _encode_value(value, root_shape(root), table.code_for, "<root>")


def to_plain(value: Any, root: Any = None) -> Any:
    """Convert a value to the uncompacted, externally tagged form.

    Same shape as to_compact() but keyed by the original names. Useful as a
    baseline when measuring how much compaction saves.
    """
    root = _resolve_root(value, root)
    return _encode_value(value, root_shape(root), str, "<root>")


def encode(value: Any, root: Any = None, table: Optional[MappingTable] = None) -> bytes:
    """Encode a value to compact JSON.

    Args:
        value: Model instance to encode
        root: Root type (see to_compact)
        table: Mapping table to apply (defaults to the cached table for root)

    Returns:
        Compact JSON bytes

    Raises:
        EncodeError: If the value cannot be encoded

    Examples:
        ```python
        from typing import Union
        from compactkeys import BaseMessage, encode

        class CancelEventReservation(BaseMessage):
            event_id: int
            user_id: int
            ticket_type: int

        class ConfirmEventReservation(BaseMessage):
            event_id: int
            user_id: int
            ticket_type: int

        CallbackQuery = Union[CancelEventReservation, ConfirmEventReservation]

        msg = ConfirmEventReservation(event_id=1, user_id=1, ticket_type=1)
        encode(msg, root=CallbackQuery)  # b'{"b":{"c":1,"e":1,"d":1}}'
        ```
    """
    compacted = to_compact(value, root, table)
    try:
        return pydantic_core.to_json(compacted)
    except pydantic_core.PydanticSerializationError as err:
        raise EncodeError(f"Failed to serialize {type(value).__name__}: {err}") from err
