"""Schema introspection for Pydantic models.

This module analyzes Pydantic models and type annotations and extracts the
compaction-relevant structure: which models are reachable through each field,
and where models form structs or enums. The result is used twice: to build the
abstract Schema handed to the compaction engine, and to guide the codec while
it walks values.
"""

from __future__ import annotations

import collections.abc
import types
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import (
    Annotated,
    Any,
    Iterator,
    Optional,
    Tuple,
    Type,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel

from ..exceptions import SchemaError
from ..models.fields import Tagged, tag_of
from .nodes import EnumSchema, FieldSchema, Schema, StructSchema, TypeNode, VariantSchema

_UNION_ORIGINS = (Union, types.UnionType)
_SEQUENCE_ORIGINS = {
    list: list,
    set: set,
    frozenset: frozenset,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_TYPE_ALIAS_TYPES = tuple(t for t in (getattr(typing, "TypeAliasType", None),) if t is not None)


@dataclass(frozen=True)
class LeafShape:
    """A value with no renamable names inside (int, str, plain enum, ...)."""


@dataclass(frozen=True)
class ModelShape:
    """A struct: one Pydantic model class."""

    model: Type[BaseModel]


@dataclass(frozen=True)
class EnumShape:
    """An enum: an externally tagged union of model classes."""

    name: str
    variants: Tuple[Type[BaseModel], ...]

    def variant_for_tag(self, tag: str) -> Optional[Type[BaseModel]]:
        """Return the variant model whose tag is ``tag``, if any."""
        for model in self.variants:
            if tag_of(model) == tag:
                return model
        return None


@dataclass(frozen=True)
class OptionalShape:
    inner: Shape


@dataclass(frozen=True)
class SequenceShape:
    """Homogeneous collection; ``kind`` is the container rebuilt on decode."""

    inner: Shape
    kind: type


@dataclass(frozen=True)
class TupleShape:
    items: Tuple[Shape, ...]


@dataclass(frozen=True)
class MappingShape:
    """Dict whose values may hold models. Keys are data and never renamed."""

    value: Shape


Shape = Union[
    LeafShape, ModelShape, EnumShape, OptionalShape, SequenceShape, TupleShape, MappingShape
]

LEAF = LeafShape()


def is_model(annotation: Any) -> bool:
    """Check whether an annotation is a Pydantic model class."""
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _resolve_alias(annotation: Any) -> Any:
    # PEP 695 ``type X = ...`` aliases (Python 3.12+)
    while _TYPE_ALIAS_TYPES and isinstance(annotation, _TYPE_ALIAS_TYPES):
        annotation = annotation.__value__
    return annotation


def _enum_shape(annotation: Any, name: Optional[str]) -> Shape:
    members = get_args(annotation) if get_origin(annotation) in _UNION_ORIGINS else (annotation,)
    variants = tuple(m for m in members if m is not type(None))

    for member in variants:
        if not is_model(member):
            raise SchemaError(
                f"Enum variants must be Pydantic models, got {member!r} in {annotation!r}"
            )

    shape = EnumShape(name=name or "|".join(tag_of(v) for v in variants), variants=variants)
    if len(variants) < len(members):
        return OptionalShape(shape)
    return shape


def shape_of(annotation: Any, metadata: Tuple[Any, ...] = ()) -> Shape:
    """Classify a type annotation for compaction.

    Args:
        annotation: Type annotation to classify
        metadata: Extra ``Annotated`` metadata (Pydantic moves a field's
            top-level metadata into ``FieldInfo.metadata``)

    Returns:
        Shape describing where models occur inside the annotation

    Raises:
        SchemaError: If a union mixes models with non-model types
    """
    annotation = _resolve_alias(annotation)
    origin = get_origin(annotation)

    if origin is Annotated:
        base, *extra = get_args(annotation)
        return shape_of(base, tuple(metadata) + tuple(extra))

    tagged = next((m for m in metadata if isinstance(m, Tagged)), None)
    if tagged is not None:
        return _enum_shape(annotation, tagged.name)

    if origin in _UNION_ORIGINS:
        args = get_args(annotation)
        members = tuple(arg for arg in args if arg is not type(None))

        if len(members) < len(args):
            inner = members[0] if len(members) == 1 else Union[members]  # type: ignore[valid-type]
            inner_shape = shape_of(inner)
            return LEAF if inner_shape is LEAF else OptionalShape(inner_shape)

        models = [m for m in members if is_model(m)]
        if not models:
            return LEAF
        if len(models) != len(members):
            raise SchemaError(
                f"Unsupported union {annotation!r}: cannot mix models with other types"
            )
        return _enum_shape(annotation, None)

    if is_model(annotation):
        return ModelShape(annotation)

    args = get_args(annotation)

    if origin in _SEQUENCE_ORIGINS and args:
        inner_shape = shape_of(args[0])
        return LEAF if inner_shape is LEAF else SequenceShape(inner_shape, _SEQUENCE_ORIGINS[origin])

    if origin is tuple and args:
        if len(args) == 2 and args[1] is Ellipsis:
            inner_shape = shape_of(args[0])
            return LEAF if inner_shape is LEAF else SequenceShape(inner_shape, tuple)
        items = tuple(shape_of(arg) for arg in args)
        return LEAF if all(item is LEAF for item in items) else TupleShape(items)

    if origin in _MAPPING_ORIGINS and len(args) == 2:
        value_shape = shape_of(args[1])
        return LEAF if value_shape is LEAF else MappingShape(value_shape)

    return LEAF


@lru_cache(maxsize=None)
def model_field_shapes(model_class: Type[BaseModel]) -> Tuple[Tuple[str, Shape], ...]:
    """Return ``(field_name, shape)`` pairs for a model, in declaration order.

    Raises:
        SchemaError: If a field has no type annotation or an unsupported one
    """
    shapes = []
    for name, field_info in model_class.model_fields.items():
        if field_info.annotation is None:
            raise SchemaError(f"Field {name} of {model_class.__name__} has no type annotation")
        shapes.append((name, shape_of(field_info.annotation, tuple(field_info.metadata))))
    return tuple(shapes)


class _SchemaBuilder:
    """Build Schema nodes from shapes.

    Each model's fields are built once per pass and the same frozen tuple is
    shared by every place the model is reached, so models reused along many
    paths keep the schema linear in size. A model reached again while it is
    still being expanded further up the same path contributes no fields there;
    that keeps recursive models finite, and their names are collected at the
    outer occurrence.
    """

    def __init__(self) -> None:
        self._active: set[type] = set()
        self._built: dict[type, Tuple[FieldSchema, ...]] = {}

    def struct(self, model: Type[BaseModel]) -> StructSchema:
        return StructSchema(model.__name__, self._fields(model))

    def enum(self, shape: EnumShape, name: Optional[str] = None) -> EnumSchema:
        variants = tuple(VariantSchema(tag_of(m), self._fields(m)) for m in shape.variants)
        return EnumSchema(name if name is not None else shape.name, variants)

    def _fields(self, model: Type[BaseModel]) -> Tuple[FieldSchema, ...]:
        built = self._built.get(model)
        if built is not None:
            return built
        if model in self._active:
            return ()
        self._active.add(model)
        try:
            built = tuple(
                FieldSchema(name, self._nested(shape)) for name, shape in model_field_shapes(model)
            )
        finally:
            self._active.discard(model)
        self._built[model] = built
        return built

    def _nested(self, shape: Shape) -> Optional[Schema]:
        nodes = tuple(self._nodes(shape))
        return Schema(nodes) if nodes else None

    def _nodes(self, shape: Shape) -> Iterator[TypeNode]:
        if isinstance(shape, ModelShape):
            if shape.model not in self._active:
                yield self.struct(shape.model)
        elif isinstance(shape, EnumShape):
            yield self.enum(shape)
        elif isinstance(shape, (OptionalShape, SequenceShape)):
            yield from self._nodes(shape.inner)
        elif isinstance(shape, MappingShape):
            yield from self._nodes(shape.value)
        elif isinstance(shape, TupleShape):
            for item in shape.items:
                yield from self._nodes(item)


def root_shape(root: Any) -> Union[ModelShape, EnumShape]:
    """Classify a compaction root: a model class or an enum of model classes.

    Raises:
        SchemaError: If ``root`` is neither
    """
    shape = shape_of(root)
    if not isinstance(shape, (ModelShape, EnumShape)):
        raise SchemaError(
            f"Cannot compact {root!r}: expected a Pydantic model class "
            f"or a union of model classes"
        )
    return shape


def schema_from_type(root: Any, name: Optional[str] = None) -> Schema:
    """Create a Schema from a Pydantic model class or an enum of model classes.

    Args:
        root: Model class, ``Union`` of model classes, or
            ``Annotated[..., Tagged(name)]``
        name: Override for the root enum's name

    Returns:
        Schema with a single root node

    Raises:
        SchemaError: If ``root`` is not compactable

    Example:
        >>> schema = schema_from_type(Union[CancelEventReservation, ConfirmEventReservation])
        >>> [v.name for v in schema.types[0].variants]
        ['CancelEventReservation', 'ConfirmEventReservation']
    """
    shape = root_shape(root)
    builder = _SchemaBuilder()
    if isinstance(shape, ModelShape):
        return Schema((builder.struct(shape.model),))
    return Schema((builder.enum(shape, name),))
