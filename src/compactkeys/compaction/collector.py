"""Identifier collection.

Walks a Schema and gathers every renamable name: variant tags and field names,
including names nested inside complex field types. The walk also validates the
schema, since a malformed schema cannot be compacted unambiguously.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple

from ..exceptions import DuplicateFieldError, DuplicateVariantError, EmptyTagError, SchemaError
from ..schema.nodes import EnumSchema, FieldSchema, Schema, StructSchema


class Scope(enum.Enum):
    """Where an identifier occurs."""

    TYPE_TAG = "type_tag"
    FIELD_NAME = "field_name"


@dataclass(frozen=True)
class Identifier:
    """One occurrence of a renamable name.

    Attributes:
        name: The original name
        scope: Whether the name is a variant tag or a field name
        owner: For field names, the struct or variant declaring the field;
            for variant tags, the enum declaring the variant
    """

    name: str
    scope: Scope
    owner: Optional[str] = None


def _walk(schema: Schema, visited: Optional[Set[int]] = None) -> Iterator[Identifier]:
    for node in schema:
        if isinstance(node, StructSchema):
            if not node.name:
                raise EmptyTagError("struct")
            yield from _walk_fields(node.name, node.fields, visited)
        elif isinstance(node, EnumSchema):
            if not node.name:
                raise EmptyTagError("enum")
            yield from _walk_enum(node, visited)
        else:
            raise SchemaError(f"Unknown schema node: {node!r}")


def _walk_enum(node: EnumSchema, visited: Optional[Set[int]]) -> Iterator[Identifier]:
    tags: Set[str] = set()
    for variant in node.variants:
        if not variant.name:
            raise EmptyTagError("variant", node.name)
        if variant.name in tags:
            raise DuplicateVariantError(node.name, variant.name)
        tags.add(variant.name)
        yield Identifier(variant.name, Scope.TYPE_TAG, node.name)
        yield from _walk_fields(variant.name, variant.fields, visited)


def _walk_fields(
    owner: str, fields: Tuple[FieldSchema, ...], visited: Optional[Set[int]]
) -> Iterator[Identifier]:
    # Field tuples shared between several types are walked once
    if visited is not None:
        if id(fields) in visited:
            return
        visited.add(id(fields))

    declared: Set[str] = set()
    for field in fields:
        if not field.name:
            raise EmptyTagError("field", owner)
        if field.name in declared:
            raise DuplicateFieldError(owner, field.name)
        declared.add(field.name)
        yield Identifier(field.name, Scope.FIELD_NAME, owner)
        if field.nested is not None:
            yield from _walk(field.nested, visited)


def collect_identifiers(schema: Schema) -> List[Identifier]:
    """Collect every identifier occurrence in a schema, in traversal order.

    Args:
        schema: Schema to walk

    Returns:
        List of identifier occurrences (a name may occur many times)

    Raises:
        DuplicateFieldError: If one struct or variant declares a field twice
        DuplicateVariantError: If one enum declares a variant tag twice
        EmptyTagError: If a struct, enum, variant or field name is empty
    """
    return list(_walk(schema))


def collect_names(schema: Schema) -> Set[str]:
    """Collect the distinct renamable names in a schema.

    A field tuple shared by several structs or variants (as built by
    schema_from_type for reused models) is walked once, so the cost stays
    linear in the number of distinct types.

    Raises:
        SchemaError: If the schema is malformed (see collect_identifiers)
    """
    return {identifier.name for identifier in _walk(schema, set())}
