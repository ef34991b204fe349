"""Utility functions for compactkeys.

This module provides payload size comparisons.
"""

from __future__ import annotations

from .sizing import compact_size, plain_size, size_savings

__all__ = [
    "plain_size",
    "compact_size",
    "size_savings",
]
