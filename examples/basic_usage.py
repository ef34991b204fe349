#!/usr/bin/env python3
"""Basic usage example for compactkeys.

This example demonstrates:
1. Defining an enum of Pydantic messages
2. Inspecting the mapping table
3. Encoding to compact JSON
4. Decoding back to a Pydantic model
5. Comparing payload sizes
"""

from __future__ import annotations

from typing import Annotated, Union

from compactkeys import (
    BaseMessage,
    Tagged,
    compact_size,
    decode,
    encode,
    plain_size,
    table_for,
)


class CancelEventReservation(BaseMessage):
    """Callback sent when a user cancels a reservation."""

    event_id: int
    user_id: int
    ticket_type: int


class ConfirmEventReservation(BaseMessage):
    """Callback sent when a user confirms a reservation."""

    event_id: int
    user_id: int
    ticket_type: int


CallbackQuery = Annotated[
    Union[CancelEventReservation, ConfirmEventReservation], Tagged("CallbackQuery")
]


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("compactkeys Basic Usage Example")
    print("=" * 60)
    print()

    # Inspect the mapping
    print("1. Mapping table for CallbackQuery...")
    table = table_for(CallbackQuery)
    for name, code in table.items():
        print(f"   {name:<26} -> {code}")
    print()

    # Create a message instance
    print("2. Creating a reservation confirmation...")
    msg = ConfirmEventReservation(event_id=1, user_id=1, ticket_type=1)
    print(f"   {msg!r}")
    print()

    # Encode the message
    print("3. Encoding to compact JSON...")
    encoded_data = encode(msg, root=CallbackQuery)
    print(f"   Encoded: {encoded_data.decode()}")
    print()

    # Decode the message
    print("4. Decoding...")
    decoded_msg = decode(CallbackQuery, encoded_data)
    print(f"   {decoded_msg!r}")
    if decoded_msg == msg:
        print("   ✓ Round-trip successful! Messages match.")
    else:
        print("   ✗ Round-trip failed! Messages don't match.")
    print()

    # Compare to uncompacted encoding
    print("5. Comparing to uncompacted JSON...")
    plain = plain_size(msg, root=CallbackQuery)
    compacted = compact_size(msg, root=CallbackQuery)
    print(f"   Plain size: {plain} bytes")
    print(f"   Compact size: {compacted} bytes")
    print(f"   Savings: {1 - compacted / plain:.0%}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
