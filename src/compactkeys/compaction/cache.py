"""Memoized mapping tables keyed by root type.

Tables are built once per root type on first use and then only read. The
cache lock guarantees at most one computation per key even when several
threads hit the same cold key.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Hashable, Optional, Tuple

from .config import DEFAULT_CONFIG, CompactConfig
from .engine import compact_type
from .table import MappingTable

logger = logging.getLogger(__name__)


class MappingCache:
    """Build-once, read-many store of mapping tables.

    Independent caches are allowed; compaction is deterministic so two caches
    always agree on the table for a given root.

    Example:
        >>> cache = MappingCache()
        >>> table = cache.get(CallbackQuery)
        >>> cache.get(CallbackQuery) is table
        True
    """

    def __init__(self) -> None:
        self._tables: Dict[Tuple[Hashable, CompactConfig], MappingTable] = {}
        self._lock = threading.Lock()

    def get(self, root: Any, config: Optional[CompactConfig] = None) -> MappingTable:
        """Return the table for a root type, computing it on first use.

        Raises:
            SchemaError: If ``root`` is not compactable
        """
        key = (root, config or DEFAULT_CONFIG)
        table = self._tables.get(key)
        if table is not None:
            return table

        with self._lock:
            table = self._tables.get(key)
            if table is None:
                logger.debug("Mapping cache miss for %r", root)
                table = compact_type(root, key[1])
                self._tables[key] = table
            return table

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    def __contains__(self, root: object) -> bool:
        return (root, DEFAULT_CONFIG) in self._tables

    def __len__(self) -> int:
        return len(self._tables)


default_cache = MappingCache()


def table_for(root: Any, config: Optional[CompactConfig] = None) -> MappingTable:
    """Return the process-wide cached table for a root type."""
    return default_cache.get(root, config)
