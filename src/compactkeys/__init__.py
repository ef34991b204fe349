"""compactkeys: Deterministic Name Compaction for JSON Payloads

A Python library that shortens the wire form of structured messages. Every
field name and enum variant tag in a schema is replaced by a minimal unique
code (a, b, ..., z, aa, ...), cutting payload size while keeping full
round-trip fidelity.

Key Features:
- Pydantic-based message modeling
- Deterministic, schema-global code assignment (sorted names, bijective base-26)
- Externally tagged enums of models, nested to any depth
- Immutable, thread-safe mapping tables with a memoizing cache

Quick Start:
    >>> from typing import Union
    >>> from compactkeys import BaseMessage, encode, decode
    >>>
    >>> class CancelEventReservation(BaseMessage):
    ...     event_id: int
    ...     user_id: int
    ...     ticket_type: int
    >>>
    >>> class ConfirmEventReservation(BaseMessage):
    ...     event_id: int
    ...     user_id: int
    ...     ticket_type: int
    >>>
    >>> CallbackQuery = Union[CancelEventReservation, ConfirmEventReservation]
    >>> msg = ConfirmEventReservation(event_id=1, user_id=1, ticket_type=1)
    >>> data = encode(msg, root=CallbackQuery)  # b'{"b":{"c":1,"e":1,"d":1}}'
    >>> decoded = decode(CallbackQuery, data)
"""

from __future__ import annotations

from .codec import (
    decode,
    encode,
    from_compact,
    from_plain,
    restore_schema,
    rewrite_schema,
    to_compact,
    to_plain,
)
from .compaction import (
    CompactConfig,
    Identifier,
    MappingCache,
    MappingTable,
    Scope,
    collect_identifiers,
    collect_names,
    compact,
    compact_type,
    table_for,
)
from .exceptions import (
    CodeNotFoundError,
    CompactKeysError,
    DecodeError,
    DuplicateFieldError,
    DuplicateVariantError,
    EmptyTagError,
    EncodeError,
    MappingError,
    NameNotFoundError,
    SchemaError,
)
from .models import BaseMessage, Tagged
from .schema import (
    EnumSchema,
    FieldSchema,
    Schema,
    StructSchema,
    VariantSchema,
    schema_from_type,
)
from .utils import compact_size, plain_size, size_savings

__version__ = "0.1.0"

__all__ = [
    # Core API
    "compact",
    "compact_type",
    "MappingTable",
    "CompactConfig",
    "MappingCache",
    "table_for",
    # Schema description
    "Schema",
    "StructSchema",
    "EnumSchema",
    "VariantSchema",
    "FieldSchema",
    "schema_from_type",
    "Identifier",
    "Scope",
    "collect_identifiers",
    "collect_names",
    # Modeling
    "BaseMessage",
    "Tagged",
    # Codec
    "encode",
    "decode",
    "to_compact",
    "from_compact",
    "to_plain",
    "from_plain",
    "rewrite_schema",
    "restore_schema",
    # Sizing
    "plain_size",
    "compact_size",
    "size_savings",
    # Exceptions
    "CompactKeysError",
    "SchemaError",
    "DuplicateFieldError",
    "DuplicateVariantError",
    "EmptyTagError",
    "MappingError",
    "NameNotFoundError",
    "CodeNotFoundError",
    "EncodeError",
    "DecodeError",
    # Version
    "__version__",
]
