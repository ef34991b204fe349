"""Configuration for name compaction."""

from __future__ import annotations

from dataclasses import dataclass

from .assigner import DEFAULT_ALPHABET


@dataclass(frozen=True)
class CompactConfig:
    """Configuration for a compaction run.

    Attributes:
        alphabet: Characters codes are built from, in counting order
            (default ``a-z``). Every character must be usable as an object
            key by the serialization layer.

    Examples:
        ```python
        from compactkeys import CompactConfig, compact

        # Default: a, b, ..., z, aa, ab, ...
        table = compact(schema)

        # Mixed case: a, ..., z, A, ..., Z, aa, ...
        table = compact(schema, CompactConfig(alphabet=string.ascii_letters))
        ```
    """

    alphabet: str = DEFAULT_ALPHABET

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.alphabet:
            raise ValueError("alphabet must not be empty")

        if len(set(self.alphabet)) != len(self.alphabet):
            raise ValueError(f"alphabet must not repeat characters, got {self.alphabet!r}")


DEFAULT_CONFIG = CompactConfig()
