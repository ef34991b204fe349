"""Schema description and Pydantic introspection for compactkeys.

This module provides the abstract schema nodes consumed by the compaction
engine and the reflective pass that builds them from Pydantic models.
"""

from __future__ import annotations

from .introspect import schema_from_type, shape_of
from .nodes import EnumSchema, FieldSchema, Schema, StructSchema, TypeNode, VariantSchema

__all__ = [
    "Schema",
    "StructSchema",
    "EnumSchema",
    "VariantSchema",
    "FieldSchema",
    "TypeNode",
    "schema_from_type",
    "shape_of",
]
