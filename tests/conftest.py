"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from compactkeys import EnumSchema, FieldSchema, Schema, VariantSchema


@pytest.fixture
def reservation_fields() -> tuple[FieldSchema, ...]:
    """Fields shared by both reservation variants."""
    return (FieldSchema("event_id"), FieldSchema("user_id"), FieldSchema("ticket_type"))


@pytest.fixture
def reservation_schema(reservation_fields: tuple[FieldSchema, ...]) -> Schema:
    """One enum with two variants sharing the same field vocabulary."""
    return Schema(
        (
            EnumSchema(
                "CallbackQuery",
                (
                    VariantSchema("ConfirmEventReservation", reservation_fields),
                    VariantSchema("CancelEventReservation", reservation_fields),
                ),
            ),
        )
    )

