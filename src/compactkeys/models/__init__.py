"""Pydantic message modeling for compactkeys.

This module provides the BaseMessage class and annotation helpers for
declaring structs and enums to compact.
"""

from __future__ import annotations

from .base import BaseMessage
from .fields import Tagged, tag_of

__all__ = [
    "BaseMessage",
    "Tagged",
    "tag_of",
]
