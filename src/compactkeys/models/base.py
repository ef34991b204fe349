"""Base message class and compactkeys-specific Pydantic configuration.

This module provides the BaseMessage class that compacted structs and enum
variants should inherit from. Any Pydantic model works with the engine;
BaseMessage adds strict defaults and per-model compaction options.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class BaseMessage(BaseModel):
    """Base class for compactkeys messages.

    Messages are ordinary Pydantic models. Field names become renamable
    identifiers; when a message is used as an enum variant, its class name
    becomes the variant tag.

    compactkeys-specific options are configured as ClassVar attributes:

    Example:
        >>> from typing import ClassVar, Optional
        >>> class ConfirmEventReservation(BaseMessage):
        ...     event_id: int
        ...     user_id: int
        ...     ticket_type: int
        ...
        ...     compact_tag: ClassVar[Optional[str]] = "Confirm"

    Attributes:
        compact_tag: Variant tag to use instead of the class name (optional)
    """

    model_config = ConfigDict(
        # Forbid extra fields not defined in schema
        extra="forbid",
        # Validate on assignment
        validate_assignment=True,
    )

    compact_tag: ClassVar[str | None] = None
