"""Compact JSON codec for compactkeys.

This module applies mapping tables: rewriting schemas to their code-keyed form,
and encoding/decoding Pydantic messages with codes in place of names.
"""

from __future__ import annotations

from .decoder import decode, from_compact, from_plain
from .encoder import encode, to_compact, to_plain
from .rewrite import restore_schema, rewrite_schema

__all__ = [
    "encode",
    "decode",
    "to_compact",
    "from_compact",
    "to_plain",
    "from_plain",
    "rewrite_schema",
    "restore_schema",
]
