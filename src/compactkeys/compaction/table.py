"""The finalized name <-> code mapping of one compaction run."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, ItemsView, Iterable, Iterator, Mapping

from ..exceptions import CodeNotFoundError, NameNotFoundError
from .assigner import DEFAULT_ALPHABET, assign_codes


class MappingTable:
    """Immutable bidirectional mapping between original names and codes.

    The forward direction (code_for) is used when encoding, the reverse
    direction (name_for) when decoding. Both are read-only after construction,
    so a table can be shared between threads without locking.

    Example:
        >>> table = MappingTable.from_names({"event_id", "user_id"})
        >>> table.code_for("user_id")
        'b'
        >>> table.name_for("b")
        'user_id'
    """

    __slots__ = ("_codes", "_names")

    def __init__(self, assignment: Mapping[str, str]) -> None:
        """Initialize from a name -> code assignment.

        Args:
            assignment: Mapping of each name to its code

        Raises:
            ValueError: If two names share a code
        """
        codes: Dict[str, str] = dict(assignment)
        names = {code: name for name, code in codes.items()}
        if len(names) != len(codes):
            raise ValueError("Codes in a mapping table must be unique")

        self._codes: Mapping[str, str] = MappingProxyType(codes)
        self._names: Mapping[str, str] = MappingProxyType(names)

    @classmethod
    def from_names(cls, names: Iterable[str], alphabet: str = DEFAULT_ALPHABET) -> MappingTable:
        """Build a table by assigning codes to a set of distinct names."""
        return cls(assign_codes(names, alphabet))

    def code_for(self, name: str) -> str:
        """Return the code assigned to a name.

        Raises:
            NameNotFoundError: If the name was not part of the compacted schema
        """
        try:
            return self._codes[name]
        except KeyError:
            raise NameNotFoundError(name) from None

    def name_for(self, code: str) -> str:
        """Return the original name behind a code.

        Raises:
            CodeNotFoundError: If the code was never assigned
        """
        try:
            return self._names[code]
        except KeyError:
            raise CodeNotFoundError(code) from None

    @property
    def codes(self) -> Mapping[str, str]:
        """Read-only name -> code view."""
        return self._codes

    @property
    def names(self) -> Mapping[str, str]:
        """Read-only code -> name view."""
        return self._names

    def items(self) -> ItemsView[str, str]:
        return self._codes.items()

    def to_dict(self) -> Dict[str, str]:
        return dict(self._codes)

    def __contains__(self, name: object) -> bool:
        return name in self._codes

    def __iter__(self) -> Iterator[str]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MappingTable):
            return NotImplemented
        return dict(self._codes) == dict(other._codes)

    def __hash__(self) -> int:
        return hash(frozenset(self._codes.items()))

    def __repr__(self) -> str:
        return f"MappingTable({dict(self._codes)!r})"
