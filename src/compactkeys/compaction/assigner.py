"""Short code assignment.

Codes come from a bijective base-N counter over the alphabet:
``a, b, ..., z, aa, ab, ..., zz, aaa, ...`` for the default alphabet. Code
length grows only once every code of the current length is used, so there is
no fixed length ceiling.
"""

from __future__ import annotations

import itertools
import string
from typing import Dict, Iterable, Iterator

DEFAULT_ALPHABET = string.ascii_lowercase


def code_for_index(index: int, alphabet: str = DEFAULT_ALPHABET) -> str:
    """Return the code at a position of the code sequence.

    Args:
        index: Zero-based position in the sequence
        alphabet: Characters to build codes from, in order

    Returns:
        The code (``0 -> "a"``, ``25 -> "z"``, ``26 -> "aa"`` for a-z)

    Raises:
        ValueError: If index is negative
    """
    if index < 0:
        raise ValueError(f"index must be >= 0, got {index}")

    base = len(alphabet)
    value = index + 1
    chars = []
    while value > 0:
        value, remainder = divmod(value - 1, base)
        chars.append(alphabet[remainder])
    return "".join(reversed(chars))


def iter_codes(alphabet: str = DEFAULT_ALPHABET) -> Iterator[str]:
    """Yield the unbounded code sequence in order."""
    for length in itertools.count(1):
        for chars in itertools.product(alphabet, repeat=length):
            yield "".join(chars)


def assign_codes(names: Iterable[str], alphabet: str = DEFAULT_ALPHABET) -> Dict[str, str]:
    """Assign a code to every name.

    Names are sorted by code point, which for str is the same order as
    byte-wise comparison of their UTF-8 encodings. The Nth sorted name gets
    the Nth code. Declaration order of the names never matters.

    Args:
        names: Distinct names (duplicates are a caller error)
        alphabet: Characters to build codes from

    Returns:
        Dict mapping each name to its code, in sorted-name order

    Example:
        >>> assign_codes({"user_id", "event_id", "ticket_type"})
        {'event_id': 'a', 'ticket_type': 'b', 'user_id': 'c'}
    """
    return dict(zip(sorted(names), iter_codes(alphabet)))
