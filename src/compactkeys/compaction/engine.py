"""Name compaction entry points.

This module provides compact(), which turns a Schema into a MappingTable:
collect the distinct names, sort them, and assign each the next short code.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..schema.introspect import schema_from_type
from ..schema.nodes import Schema
from .collector import collect_names
from .config import DEFAULT_CONFIG, CompactConfig
from .table import MappingTable

logger = logging.getLogger(__name__)


def compact(schema: Schema, config: Optional[CompactConfig] = None) -> MappingTable:
    """Compute the mapping table for a schema.

    The result depends only on the set of distinct names in the schema, so
    compacting an unchanged schema always yields an equal table, whatever the
    declaration order. A name shared by several structs or variants gets a
    single code.

    Args:
        schema: Schema description to compact
        config: Compaction options (default alphabet a-z)

    Returns:
        Immutable MappingTable covering every variant tag and field name

    Raises:
        SchemaError: If the schema is malformed (duplicate field, empty name)

    Examples:
        ```python
        from compactkeys import EnumSchema, FieldSchema, Schema, VariantSchema, compact

        fields = tuple(FieldSchema(n) for n in ("event_id", "user_id", "ticket_type"))
        schema = Schema((
            EnumSchema("CallbackQuery", (
                VariantSchema("ConfirmEventReservation", fields),
                VariantSchema("CancelEventReservation", fields),
            )),
        ))
        table = compact(schema)
        table.code_for("ConfirmEventReservation")  # "b"
        ```
    """
    config = config or DEFAULT_CONFIG
    names = collect_names(schema)
    table = MappingTable.from_names(names, config.alphabet)
    logger.debug("Compacted %d names across %d types", len(table), len(schema))
    return table


def compact_type(root: Any, config: Optional[CompactConfig] = None) -> MappingTable:
    """Compute the mapping table for a Pydantic model or enum of models.

    Shorthand for ``compact(schema_from_type(root), config)``.

    Raises:
        SchemaError: If ``root`` is not compactable or its schema is malformed
    """
    return compact(schema_from_type(root), config)
