"""Exception hierarchy for compactkeys.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from CompactKeysError for easy catching of any
compactkeys-specific error.
"""

from __future__ import annotations


class CompactKeysError(Exception):
    """Base exception for all compactkeys errors."""

    pass


class SchemaError(CompactKeysError):
    """Raised when a schema description is malformed or unsupported.

    Examples:
        - Two fields of one type share a name
        - A struct, enum, variant or field has an empty name
        - A field annotation mixes models with plain types in one union
    """

    pass


class DuplicateFieldError(SchemaError):
    """Raised when a struct or variant declares the same field name twice."""

    def __init__(self, owner: str, field_name: str) -> None:
        super().__init__(f"Type {owner!r} declares field {field_name!r} more than once")
        self.owner = owner
        self.field_name = field_name


class DuplicateVariantError(SchemaError):
    """Raised when an enum declares the same variant tag twice."""

    def __init__(self, owner: str, variant_name: str) -> None:
        super().__init__(f"Enum {owner!r} declares variant {variant_name!r} more than once")
        self.owner = owner
        self.variant_name = variant_name


class EmptyTagError(SchemaError):
    """Raised when a struct, enum, variant or field has no name to compact."""

    def __init__(self, kind: str, owner: str | None = None) -> None:
        where = f" in {owner!r}" if owner else ""
        super().__init__(f"Empty {kind} name{where}")
        self.kind = kind
        self.owner = owner


class MappingError(CompactKeysError):
    """Raised when a lookup falls outside a mapping table's domain.

    This indicates a schema/mapping mismatch, e.g. using a table built for one
    schema against data shaped by another.
    """

    pass


class NameNotFoundError(MappingError):
    """Raised by MappingTable.code_for() for a name that was never compacted."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Name {name!r} is not part of the compacted schema")
        self.name = name


class CodeNotFoundError(MappingError):
    """Raised by MappingTable.name_for() for a code that was never assigned."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Code {code!r} is not assigned in this mapping table")
        self.code = code


class EncodeError(CompactKeysError):
    """Raised when encoding a value to its compact form fails.

    Examples:
        - Value is not a model instance
        - Value's type is not a variant of the declared enum
    """

    pass


class DecodeError(CompactKeysError):
    """Raised when decoding compact data fails.

    Examples:
        - Invalid JSON
        - Enum payload is not a single-key object
        - Decoded fields fail model validation
    """

    pass
