"""Schema rewriting.

Applies a MappingTable to a Schema: every variant tag and field name is
replaced by its code while type structure and nesting stay exactly as they
were. Struct and enum names are tag-less on the wire and are kept.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from ..compaction.table import MappingTable
from ..exceptions import SchemaError
from ..schema.nodes import (
    EnumSchema,
    FieldSchema,
    Schema,
    StructSchema,
    TypeNode,
    VariantSchema,
)

_Fields = Tuple[FieldSchema, ...]


class _Renamer:
    """Rename one schema, rewriting each shared field tuple only once.

    The memo keys on ``id()`` and holds the original tuple next to its
    renamed copy so the id cannot be reused during the pass.
    """

    def __init__(self, rename: Callable[[str], str]) -> None:
        self._rename = rename
        self._memo: Dict[int, Tuple[_Fields, _Fields]] = {}

    def schema(self, schema: Schema) -> Schema:
        return Schema(tuple(self._node(node) for node in schema))

    def _node(self, node: TypeNode) -> TypeNode:
        if isinstance(node, StructSchema):
            return StructSchema(node.name, self._fields(node.fields))
        if isinstance(node, EnumSchema):
            variants = tuple(
                VariantSchema(self._rename(variant.name), self._fields(variant.fields))
                for variant in node.variants
            )
            return EnumSchema(node.name, variants)
        raise SchemaError(f"Unknown schema node: {node!r}")

    def _fields(self, fields: _Fields) -> _Fields:
        hit = self._memo.get(id(fields))
        if hit is not None:
            return hit[1]
        renamed = tuple(self._field(f) for f in fields)
        self._memo[id(fields)] = (fields, renamed)
        return renamed

    def _field(self, field: FieldSchema) -> FieldSchema:
        nested: Optional[Schema] = None
        if field.nested is not None:
            nested = self.schema(field.nested)
        return FieldSchema(self._rename(field.name), nested)


def rewrite_schema(schema: Schema, table: MappingTable) -> Schema:
    """Replace every variant tag and field name with its code.

    Args:
        schema: Original schema
        table: Table computed for this schema by compact()

    Returns:
        Code-keyed schema with identical structure

    Raises:
        NameNotFoundError: If the table was built for a different schema
    """
    return _Renamer(table.code_for).schema(schema)


def restore_schema(schema: Schema, table: MappingTable) -> Schema:
    """Inverse of rewrite_schema(): replace every code with its original name.

    Raises:
        CodeNotFoundError: If the schema holds a code the table never assigned
    """
    return _Renamer(table.name_for).schema(schema)
