"""Exceptions raised by the storage layer."""

from __future__ import annotations


class StorageError(Exception):
    """Base class of every storage failure.

    ``rc`` names the kind of failure; subclasses give a default that a
    caller may override for a more precise reason.
    """

    default_rc = "GENERIC_ERROR"

    def __init__(self, message: str = "", rc: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.rc = rc or self.default_rc


class InvalidArgumentError(StorageError):
    """An argument is blank, out of range or otherwise unusable."""

    default_rc = "INVALID_ARGUMENT"


class SchemaFieldMissingError(StorageError):
    """A referenced field does not exist in the table schema."""

    default_rc = "SCHEMA_FIELD_MISSING"


class SchemaFieldTypeMismatchError(StorageError):
    """Two values or a value and a field have incompatible types."""

    default_rc = "SCHEMA_FIELD_TYPE_MISMATCH"


class MetaFormatError(StorageError):
    """Serialized metadata could not be understood."""


class BufferPoolError(StorageError):
    """A paged file or its buffer pool could not do what was asked."""