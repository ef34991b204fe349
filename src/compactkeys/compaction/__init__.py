"""Name compaction engine for compactkeys.

This module collects renamable identifiers from a schema, assigns each a short
deterministic code, and exposes the result as an immutable MappingTable.
"""

from __future__ import annotations

from .assigner import assign_codes, code_for_index, iter_codes
from .cache import MappingCache, default_cache, table_for
from .collector import Identifier, Scope, collect_identifiers, collect_names
from .config import CompactConfig
from .engine import compact, compact_type
from .table import MappingTable

__all__ = [
    "compact",
    "compact_type",
    "MappingTable",
    "MappingCache",
    "CompactConfig",
    "default_cache",
    "table_for",
    "Identifier",
    "Scope",
    "collect_identifiers",
    "collect_names",
    "assign_codes",
    "code_for_index",
    "iter_codes",
]
