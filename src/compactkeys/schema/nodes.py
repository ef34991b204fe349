"""Abstract schema description consumed by the compaction engine.

A Schema is an ordered collection of type nodes. Struct nodes hold named fields;
enum nodes hold named variants, each carrying its own fields. A field may own a
nested Schema describing the types reachable through it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class FieldSchema:
    """A single named field.

    Attributes:
        name: Field name as declared
        nested: Schema of the complex type(s) held by this field, if any
    """

    name: str
    nested: Optional[Schema] = None


@dataclass(frozen=True)
class StructSchema:
    """A tag-less record.

    Attributes:
        name: Type name (validated, never renamed)
        fields: Fields in declaration order
    """

    name: str
    fields: Tuple[FieldSchema, ...] = ()


@dataclass(frozen=True)
class VariantSchema:
    """One variant of an enum: a tag plus its fields."""

    name: str
    fields: Tuple[FieldSchema, ...] = ()


@dataclass(frozen=True)
class EnumSchema:
    """A tagged union of variants.

    Attributes:
        name: Type name (validated, never renamed)
        variants: Variants in declaration order
    """

    name: str
    variants: Tuple[VariantSchema, ...] = ()


TypeNode = Union[StructSchema, EnumSchema]


@dataclass(frozen=True)
class Schema:
    """An ordered collection of struct and enum nodes.

    Example:
        >>> schema = Schema((
        ...     EnumSchema("CallbackQuery", (
        ...         VariantSchema("Cancel", (FieldSchema("event_id"),)),
        ...     )),
        ... ))
    """

    types: Tuple[TypeNode, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[TypeNode]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)
