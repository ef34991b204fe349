"""Annotation markers and helpers for declaring compactable types.

This module provides the Tagged marker used to declare an enum (externally
tagged union of models) and the helper that resolves a model's variant tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Tagged:
    """Mark an annotation as an enum of model variants.

    A bare union of two or more models is already treated as an enum. Use this
    marker to name the enum, or to declare a single-variant enum whose tag must
    still appear on the wire.

    Args:
        name: Enum type name (defaults to the variant names joined by "|")

    Example:
        >>> CallbackQuery = Annotated[
        ...     Union[CancelEventReservation, ConfirmEventReservation],
        ...     Tagged("CallbackQuery"),
        ... ]
        >>> Single = Annotated[ReservationConfirmation, Tagged("CallbackQuery")]
    """

    name: Optional[str] = None


def tag_of(model_class: type[Any]) -> str:
    """Return the variant tag for a model class.

    Args:
        model_class: Pydantic model class

    Returns:
        The model's ``compact_tag`` ClassVar if set, otherwise its class name
    """
    tag = getattr(model_class, "compact_tag", None)
    if tag is not None:
        return str(tag)
    return model_class.__name__
