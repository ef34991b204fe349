"""Payload size comparison utilities.

This module provides functions to measure how much compaction shrinks the
JSON encoding of a message compared to the same message keyed by its
original names.
"""

from __future__ import annotations

from typing import Any

import pydantic_core

from ..codec.encoder import encode, to_plain


def plain_size(value: Any, root: Any = None) -> int:
    """Calculate the size in bytes of the uncompacted JSON encoding.

    Args:
        value: Model instance to measure
        root: Root type (see encode)

    Returns:
        Size in bytes

    Example:
        >>> msg = ReservationConfirmation(event_id=1, user_id=1, ticket_type=1)
        >>> plain_size(msg, root=CallbackQuery)
        70  # {"ReservationConfirmation":{"event_id":1,"user_id":1,"ticket_type":1}}
    """
    return len(pydantic_core.to_json(to_plain(value, root)))


def compact_size(value: Any, root: Any = None) -> int:
    """Calculate the size in bytes of the compact JSON encoding.

    Example:
        >>> compact_size(msg, root=CallbackQuery)
        25  # {"a":{"b":1,"d":1,"c":1}}
    """
    return len(encode(value, root))


def size_savings(value: Any, root: Any = None) -> float:
    """Calculate the fraction of bytes saved by compaction.

    Returns:
        ``1 - compact / plain``, or 0.0 when the plain encoding is empty

    Example:
        >>> round(size_savings(msg, root=CallbackQuery), 2)
        0.64
    """
    plain = plain_size(value, root)
    if plain == 0:
        return 0.0
    return 1.0 - compact_size(value, root) / plain
